"""Filename-driven content classifier.

The lower-cased filename is tested against ordered rule groups and the
first group with a matching substring wins. Fixed profiles come from the
bundled JSON files and are shared, since records are read-only. Documents
matching no rule get a General Document record synthesized from the file
name and size.
"""

import random
import re
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from docassist.classification.base import BaseClassifier
from docassist.classification.exceptions import ProfileValidationError
from docassist.classification.models import (
    CONTRACT,
    GENERAL,
    INVOICE,
    REPORT,
    RESUME,
    ContentRecord,
    GeneralInfo,
)
from docassist.classification.profile_loader import load_profile
from docassist.classification.validator import (
    build_content_record,
    build_text_and_metadata,
    require_document_type,
)
from docassist.logging.logger import Log


@dataclass(frozen=True)
class ClassificationRule:
    document_type: str
    keywords: tuple[str, ...]
    profile: str

    def matches(self, lowered_filename: str) -> bool:
        return any(keyword in lowered_filename for keyword in self.keywords)


class ContentClassifier(BaseClassifier):
    """Maps a filename to one of five document profiles."""

    # Order is the tie-break: "invoice_report.pdf" is an Invoice.
    RULES: ClassVar[tuple[ClassificationRule, ...]] = (
        ClassificationRule(RESUME, ("resume", "cv"), "resume"),
        ClassificationRule(INVOICE, ("invoice", "bill"), "invoice"),
        ClassificationRule(CONTRACT, ("contract", "agreement"), "contract"),
        ClassificationRule(REPORT, ("report", "analysis"), "report"),
    )
    GENERAL_PROFILE: ClassVar[str] = "general"

    MIN_SECTIONS: ClassVar[int] = 2
    MAX_SECTIONS: ClassVar[int] = 6
    BYTES_PER_READ_MINUTE: ClassVar[int] = 1000
    BYTES_PER_PAGE: ClassVar[int] = 50000

    _EXTENSION_RE: ClassVar[re.Pattern[str]] = re.compile(r"\.[^/.]+$")

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        profiles_dir: Path | None = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._records: dict[str, ContentRecord] = {}
        for rule in self.RULES:
            record = build_content_record(load_profile(rule.profile, profiles_dir))
            if record.document_type != rule.document_type:
                raise ProfileValidationError(
                    f"Profile '{rule.profile}' declares '{record.document_type}', "
                    f"expected '{rule.document_type}'"
                )
            self._records[rule.document_type] = record

        general = load_profile(self.GENERAL_PROFILE, profiles_dir)
        require_document_type(general, GENERAL)
        self._general_text, self._general_metadata = build_text_and_metadata(general)
        Log.debug("Loaded document profiles", count=len(self._records) + 1)

    def classify(self, filename: str, size_bytes: int, mime_type: str) -> ContentRecord:
        document_type = self.match_document_type(filename)
        Log.debug("Classified document", filename=filename, document_type=document_type)
        if document_type == GENERAL:
            return self._general_record(filename, size_bytes, mime_type)
        return self._records[document_type]

    def match_document_type(self, filename: str) -> str:
        lowered = filename.lower()
        for rule in self.RULES:
            if rule.matches(lowered):
                return rule.document_type
        return GENERAL

    def _general_record(self, filename: str, size_bytes: int, mime_type: str) -> ContentRecord:
        info = GeneralInfo(
            title=self._EXTENSION_RE.sub("", filename),
            size=size_bytes,
            type=mime_type,
            sections=self._rng.randint(self.MIN_SECTIONS, self.MAX_SECTIONS),
            estimated_read_time=f"{size_bytes // self.BYTES_PER_READ_MINUTE} minutes",
        )
        metadata = {
            "pageCount": size_bytes // self.BYTES_PER_PAGE + 1,
            **self._general_metadata,
        }
        return ContentRecord(
            document_type=GENERAL,
            key_information=info,
            text_content=self._general_text,
            metadata=metadata,
        )
