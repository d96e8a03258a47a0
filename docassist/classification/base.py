from abc import ABC, abstractmethod

from docassist.classification.models import ContentRecord


class BaseClassifier(ABC):
    """Contract for all content classifiers."""

    @abstractmethod
    def classify(self, filename: str, size_bytes: int, mime_type: str) -> ContentRecord:
        """Infer a document's type and structured content from upload signals.

        Args:
            filename: Original file name, including extension.
            size_bytes: File size in bytes.
            mime_type: MIME type reported by the upload surface.

        Returns:
            ContentRecord for the matched document profile.
        """
