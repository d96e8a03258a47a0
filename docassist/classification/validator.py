"""Validates raw profile JSON and builds typed content records."""

from collections.abc import Callable
from typing import Any

from docassist.classification.exceptions import ProfileValidationError
from docassist.classification.models import (
    CONTRACT,
    INVOICE,
    REPORT,
    RESUME,
    ContentRecord,
    ContractInfo,
    InvoiceInfo,
    KeyInformation,
    KeyMetrics,
    LineItem,
    Project,
    ReportInfo,
    ResumeInfo,
    WorkEntry,
)


def build_content_record(data: dict[str, Any]) -> ContentRecord:
    """Validate a fixed profile and build its ContentRecord.

    Raises:
        ProfileValidationError: on any shape violation, or when the profile
            names a document type without fixed key information.
    """
    document_type = _require_str(data, "documentType", "profile")
    builder = _KEY_INFORMATION_BUILDERS.get(document_type)
    if builder is None:
        raise ProfileValidationError(
            f"Document type '{document_type}' has no fixed key information"
        )
    key_information = builder(_require_object(data, "keyInformation", "profile"))
    text_content, metadata = build_text_and_metadata(data)
    return ContentRecord(
        document_type=document_type,
        key_information=key_information,
        text_content=text_content,
        metadata=metadata,
    )


def build_text_and_metadata(data: dict[str, Any]) -> tuple[tuple[str, ...], dict[str, Any]]:
    """Validate the static ``textContent`` and ``metadata`` parts of a profile."""
    text_content = _require_str_list(data, "textContent", "profile")
    if not 2 <= len(text_content) <= 4:
        raise ProfileValidationError(
            f"'textContent' must hold 2 to 4 entries, got {len(text_content)}"
        )
    metadata = _require_object(data, "metadata", "profile")
    return text_content, dict(metadata)


def require_document_type(data: dict[str, Any], expected: str) -> None:
    document_type = _require_str(data, "documentType", "profile")
    if document_type != expected:
        raise ProfileValidationError(
            f"Expected document type '{expected}', got '{document_type}'"
        )


def _build_resume(raw: dict[str, Any]) -> ResumeInfo:
    ctx = "keyInformation"
    projects = tuple(
        _build_project(item, i) for i, item in enumerate(_require_list(raw, "projects", ctx))
    )
    work_history = tuple(
        _build_work_entry(item, i)
        for i, item in enumerate(_require_list(raw, "workHistory", ctx))
    )
    return ResumeInfo(
        name=_require_str(raw, "name", ctx),
        email=_require_str(raw, "email", ctx),
        phone=_require_str(raw, "phone", ctx),
        location=_require_str(raw, "location", ctx),
        experience=_require_str(raw, "experience", ctx),
        current_role=_require_str(raw, "currentRole", ctx),
        education=_require_str(raw, "education", ctx),
        skills=_require_str_list(raw, "skills", ctx),
        projects=projects,
        work_history=work_history,
    )


def _build_project(raw: Any, index: int) -> Project:
    ctx = f"projects[{index}]"
    if not isinstance(raw, dict):
        raise ProfileValidationError(f"'{ctx}' must be an object")
    return Project(
        name=_require_str(raw, "name", ctx),
        description=_require_str(raw, "description", ctx),
        technologies=_require_str_list(raw, "technologies", ctx),
        duration=_require_str(raw, "duration", ctx),
    )


def _build_work_entry(raw: Any, index: int) -> WorkEntry:
    ctx = f"workHistory[{index}]"
    if not isinstance(raw, dict):
        raise ProfileValidationError(f"'{ctx}' must be an object")
    return WorkEntry(
        company=_require_str(raw, "company", ctx),
        position=_require_str(raw, "position", ctx),
        duration=_require_str(raw, "duration", ctx),
        responsibilities=_require_str_list(raw, "responsibilities", ctx),
    )


def _build_invoice(raw: dict[str, Any]) -> InvoiceInfo:
    ctx = "keyInformation"
    items = tuple(
        _build_line_item(item, i) for i, item in enumerate(_require_list(raw, "items", ctx))
    )
    return InvoiceInfo(
        invoice_number=_require_str(raw, "invoiceNumber", ctx),
        date=_require_str(raw, "date", ctx),
        due_date=_require_str(raw, "dueDate", ctx),
        vendor=_require_str(raw, "vendor", ctx),
        client=_require_str(raw, "client", ctx),
        amount=_require_str(raw, "amount", ctx),
        tax=_require_str(raw, "tax", ctx),
        total=_require_str(raw, "total", ctx),
        items=items,
    )


def _build_line_item(raw: Any, index: int) -> LineItem:
    ctx = f"items[{index}]"
    if not isinstance(raw, dict):
        raise ProfileValidationError(f"'{ctx}' must be an object")
    quantity = raw.get("quantity")
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ProfileValidationError(f"'{ctx}.quantity' must be an integer")
    return LineItem(
        description=_require_str(raw, "description", ctx),
        quantity=quantity,
        rate=_require_str(raw, "rate", ctx),
        amount=_require_str(raw, "amount", ctx),
    )


def _build_contract(raw: dict[str, Any]) -> ContractInfo:
    ctx = "keyInformation"
    return ContractInfo(
        contract_type=_require_str(raw, "contractType", ctx),
        parties=_require_str_list(raw, "parties", ctx),
        effective_date=_require_str(raw, "effectiveDate", ctx),
        expiration_date=_require_str(raw, "expirationDate", ctx),
        value=_require_str(raw, "value", ctx),
        terms=_require_str_list(raw, "terms", ctx),
    )


def _build_report(raw: dict[str, Any]) -> ReportInfo:
    ctx = "keyInformation"
    metrics = _require_object(raw, "keyMetrics", ctx)
    return ReportInfo(
        report_title=_require_str(raw, "reportTitle", ctx),
        author=_require_str(raw, "author", ctx),
        date=_require_str(raw, "date", ctx),
        key_metrics=KeyMetrics(
            revenue=_require_str(metrics, "revenue", "keyMetrics"),
            growth=_require_str(metrics, "growth", "keyMetrics"),
            customers=_require_str(metrics, "customers", "keyMetrics"),
            satisfaction=_require_str(metrics, "satisfaction", "keyMetrics"),
        ),
        findings=_require_str_list(raw, "findings", ctx),
        recommendations=_require_str_list(raw, "recommendations", ctx),
    )


_KEY_INFORMATION_BUILDERS: dict[str, Callable[[dict[str, Any]], KeyInformation]] = {
    RESUME: _build_resume,
    INVOICE: _build_invoice,
    CONTRACT: _build_contract,
    REPORT: _build_report,
}


def _require_str(raw: dict[str, Any], name: str, ctx: str) -> str:
    value = raw.get(name)
    if not isinstance(value, str) or not value:
        raise ProfileValidationError(f"'{ctx}.{name}' must be a non-empty string")
    return value


def _require_list(raw: dict[str, Any], name: str, ctx: str) -> list[Any]:
    value = raw.get(name)
    if not isinstance(value, list):
        raise ProfileValidationError(f"'{ctx}.{name}' must be a list")
    return value


def _require_str_list(raw: dict[str, Any], name: str, ctx: str) -> tuple[str, ...]:
    value = _require_list(raw, name, ctx)
    if not all(isinstance(item, str) for item in value):
        raise ProfileValidationError(f"'{ctx}.{name}' must contain only strings")
    return tuple(value)


def _require_object(raw: dict[str, Any], name: str, ctx: str) -> dict[str, Any]:
    value = raw.get(name)
    if not isinstance(value, dict):
        raise ProfileValidationError(f"'{ctx}.{name}' must be an object")
    return value
