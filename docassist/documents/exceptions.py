class DocumentError(Exception):
    """Base exception for document registry errors."""


class DocumentStateError(DocumentError):
    """Raised when a status transition is attempted on a settled document."""
