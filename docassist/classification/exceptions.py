class ClassificationError(Exception):
    """Base exception for content classification failures."""


class ProfileLoadError(ClassificationError):
    """Raised when a bundled or configured profile file cannot be read or parsed."""


class ProfileValidationError(ClassificationError):
    """Raised when a profile does not match the shape of its document type."""
