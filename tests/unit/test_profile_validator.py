import copy
from typing import Any

import pytest

from docassist.classification.exceptions import ProfileValidationError
from docassist.classification.models import ContractInfo, ReportInfo
from docassist.classification.profile_loader import load_profile
from docassist.classification.validator import (
    build_content_record,
    build_text_and_metadata,
    require_document_type,
)


def _profile(name: str) -> dict[str, Any]:
    return copy.deepcopy(load_profile(name))


class TestBuildContentRecord:
    def test_builds_contract(self) -> None:
        record = build_content_record(_profile("contract"))
        assert record.document_type == "Contract/Agreement"
        assert isinstance(record.key_information, ContractInfo)
        assert record.key_information.contract_type == "Service Agreement"
        assert record.metadata["version"] == "1.2"

    def test_builds_report_metrics(self) -> None:
        record = build_content_record(_profile("report"))
        assert isinstance(record.key_information, ReportInfo)
        assert record.key_information.key_metrics.customers == "2,500"

    def test_general_type_rejected(self) -> None:
        with pytest.raises(ProfileValidationError, match="no fixed key information"):
            build_content_record(_profile("general"))

    def test_unknown_type_rejected(self) -> None:
        data = _profile("invoice")
        data["documentType"] = "Receipt"
        with pytest.raises(ProfileValidationError):
            build_content_record(data)

    def test_missing_key_information(self) -> None:
        data = _profile("invoice")
        del data["keyInformation"]
        with pytest.raises(ProfileValidationError, match="keyInformation"):
            build_content_record(data)

    def test_missing_string_field(self) -> None:
        data = _profile("resume")
        del data["keyInformation"]["email"]
        with pytest.raises(ProfileValidationError, match="email"):
            build_content_record(data)

    def test_skills_must_be_strings(self) -> None:
        data = _profile("resume")
        data["keyInformation"]["skills"] = ["Python", 3]
        with pytest.raises(ProfileValidationError, match="skills"):
            build_content_record(data)

    def test_project_must_be_object(self) -> None:
        data = _profile("resume")
        data["keyInformation"]["projects"][1] = "Side project"
        with pytest.raises(ProfileValidationError, match=r"projects\[1\]"):
            build_content_record(data)

    def test_line_item_quantity_must_be_int(self) -> None:
        data = _profile("invoice")
        data["keyInformation"]["items"][0]["quantity"] = "40"
        with pytest.raises(ProfileValidationError, match="quantity"):
            build_content_record(data)

    def test_line_item_quantity_rejects_bool(self) -> None:
        data = _profile("invoice")
        data["keyInformation"]["items"][0]["quantity"] = True
        with pytest.raises(ProfileValidationError, match="quantity"):
            build_content_record(data)


class TestTextAndMetadata:
    def test_text_content_bounds(self) -> None:
        data = _profile("general")
        data["textContent"] = ["only one"]
        with pytest.raises(ProfileValidationError, match="2 to 4"):
            build_text_and_metadata(data)

    def test_metadata_must_be_object(self) -> None:
        data = _profile("general")
        data["metadata"] = "none"
        with pytest.raises(ProfileValidationError, match="metadata"):
            build_text_and_metadata(data)

    def test_returns_copies(self) -> None:
        data = _profile("general")
        text, metadata = build_text_and_metadata(data)
        assert isinstance(text, tuple)
        metadata["language"] = "German"
        assert data["metadata"]["language"] == "English"


class TestRequireDocumentType:
    def test_accepts_expected(self) -> None:
        require_document_type(_profile("general"), "General Document")

    def test_rejects_other(self) -> None:
        with pytest.raises(ProfileValidationError, match="Expected document type"):
            require_document_type(_profile("invoice"), "General Document")
