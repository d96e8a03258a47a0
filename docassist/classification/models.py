from collections.abc import Mapping
from dataclasses import dataclass, field, fields, is_dataclass
from types import MappingProxyType
from typing import Any, ClassVar

RESUME = "Resume/CV"
INVOICE = "Invoice"
CONTRACT = "Contract/Agreement"
REPORT = "Business Report"
GENERAL = "General Document"

DOCUMENT_TYPES = (RESUME, INVOICE, CONTRACT, REPORT, GENERAL)


def _key(name: str) -> Any:
    """Declare the display key of a field when it differs from the attribute name."""
    return field(metadata={"key": name})


@dataclass(frozen=True)
class Project:
    name: str
    description: str
    technologies: tuple[str, ...]
    duration: str


@dataclass(frozen=True)
class WorkEntry:
    company: str
    position: str
    duration: str
    responsibilities: tuple[str, ...]


@dataclass(frozen=True)
class LineItem:
    description: str
    quantity: int
    rate: str
    amount: str


@dataclass(frozen=True)
class KeyMetrics:
    revenue: str
    growth: str
    customers: str
    satisfaction: str


@dataclass(frozen=True)
class ResumeInfo:
    """Personal profile extracted from a resume or CV."""

    DOCUMENT_TYPE: ClassVar[str] = RESUME

    name: str
    email: str
    phone: str
    location: str
    experience: str
    current_role: str = _key("currentRole")
    education: str
    skills: tuple[str, ...]
    projects: tuple[Project, ...]
    work_history: tuple[WorkEntry, ...] = _key("workHistory")


@dataclass(frozen=True)
class InvoiceInfo:
    DOCUMENT_TYPE: ClassVar[str] = INVOICE

    invoice_number: str = _key("invoiceNumber")
    date: str
    due_date: str = _key("dueDate")
    vendor: str
    client: str
    amount: str
    tax: str
    total: str
    items: tuple[LineItem, ...]


@dataclass(frozen=True)
class ContractInfo:
    DOCUMENT_TYPE: ClassVar[str] = CONTRACT

    contract_type: str = _key("contractType")
    parties: tuple[str, ...]
    effective_date: str = _key("effectiveDate")
    expiration_date: str = _key("expirationDate")
    value: str
    terms: tuple[str, ...]


@dataclass(frozen=True)
class ReportInfo:
    DOCUMENT_TYPE: ClassVar[str] = REPORT

    report_title: str = _key("reportTitle")
    author: str
    date: str
    key_metrics: KeyMetrics = _key("keyMetrics")
    findings: tuple[str, ...]
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class GeneralInfo:
    """Key information synthesized for documents matching no profile."""

    DOCUMENT_TYPE: ClassVar[str] = GENERAL

    title: str
    size: int
    type: str
    sections: int
    estimated_read_time: str = _key("estimatedReadTime")


KeyInformation = ResumeInfo | InvoiceInfo | ContractInfo | ReportInfo | GeneralInfo


@dataclass(frozen=True)
class ContentRecord:
    """Structured content attached to a document at upload time."""

    document_type: str
    key_information: KeyInformation
    text_content: tuple[str, ...]
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", freeze(self.metadata))

    def key_names(self) -> list[str]:
        """Display keys of the key information, in declaration order."""
        return list(key_information_dict(self.key_information))


def key_information_dict(info: KeyInformation) -> dict[str, Any]:
    """Flatten a key-information variant into a display-keyed plain dict."""
    return {
        f.metadata.get("key", f.name): to_plain(getattr(info, f.name))
        for f in fields(info)
    }


def to_plain(value: Any) -> Any:
    """Convert dataclasses (recursively) into dicts keyed by display name.

    Tuples become lists, so the result is JSON-serializable.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return {
            f.metadata.get("key", f.name): to_plain(getattr(value, f.name))
            for f in fields(value)
        }
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    return value


def freeze(value: Any) -> Any:
    """Read-only copy of JSON-shaped data: mappings become proxies, lists tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value
