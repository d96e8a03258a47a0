from typing import Any

from docassist.chat.models import Message
from docassist.classification.models import ContentRecord, key_information_dict, to_plain
from docassist.documents.models import Document


class DocumentSerializer:
    """Converts snapshots to JSON-ready dicts for the display surface."""

    def document_to_dict(self, document: Document) -> dict[str, Any]:
        """Serialize a document in the display surface's camelCase shape.

        Score, summary and factors are present only once the document is
        completed.
        """
        payload: dict[str, Any] = {
            "id": document.id,
            "name": document.name,
            "size": document.size_bytes,
            "type": document.mime_type,
            "uploadDate": document.uploaded_at.isoformat(),
            "status": document.status,
            "extractedContent": self.content_to_dict(document.content),
        }
        if document.assessment is not None:
            payload["fraudScore"] = document.assessment.risk_score
            payload["summary"] = document.assessment.summary
            payload["riskFactors"] = list(document.assessment.risk_factors)
        if document.error_message is not None:
            payload["errorMessage"] = document.error_message
        return payload

    def content_to_dict(self, content: ContentRecord) -> dict[str, Any]:
        return {
            "documentType": content.document_type,
            "keyInformation": key_information_dict(content.key_information),
            "textContent": list(content.text_content),
            "metadata": to_plain(content.metadata),
        }

    def message_to_dict(self, message: Message) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": message.id,
            "content": message.content,
            "sender": message.sender,
            "timestamp": message.timestamp.isoformat(),
        }
        if message.kind is not None:
            payload["type"] = message.kind
        return payload
