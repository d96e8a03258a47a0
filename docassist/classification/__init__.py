from docassist.classification.base import BaseClassifier
from docassist.classification.classifier import ContentClassifier
from docassist.classification.models import ContentRecord

__all__ = ["BaseClassifier", "ContentClassifier", "ContentRecord"]
