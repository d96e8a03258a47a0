"""Markup templates for assistant replies.

Replies use a light markup understood by the display surface: ``## `` opens
a heading, ``**text**`` is bold and ``• `` starts a bullet line.
"""

from collections.abc import Sequence

from docassist.chat.formatting import (
    bullets,
    capitalize_key,
    format_file_size,
    format_percent,
    format_upload_date,
)
from docassist.chat.models import ChatContext
from docassist.classification.models import (
    CONTRACT,
    INVOICE,
    REPORT,
    RESUME,
    ContractInfo,
    InvoiceInfo,
    ReportInfo,
    ResumeInfo,
)
from docassist.risk.bands import LOW_RISK_CEILING, risk_label

FRONTEND_SKILLS = ("React", "Vue.js", "JavaScript", "HTML", "CSS")
BACKEND_SKILLS = ("Node.js", "Python", "Express.js")
CLOUD_SKILLS = ("AWS", "Docker")

DEFAULT_SECURITY_CHECK = "Standard security validation completed"

QUICK_QUESTIONS: dict[str, tuple[str, ...]] = {
    RESUME: (
        "Tell me about the projects",
        "What skills are listed?",
        "Show me work experience",
        "What's the contact information?",
        "Summarize this resume",
    ),
    INVOICE: (
        "What's the total amount?",
        "Show me the services",
        "Who is the vendor?",
        "When is payment due?",
        "Summarize this invoice",
    ),
    CONTRACT: (
        "What are the key terms?",
        "Who are the parties?",
        "What's the contract value?",
        "Show me the conditions",
        "Summarize this contract",
    ),
    REPORT: (
        "Show me the key metrics",
        "What are the findings?",
        "What are the recommendations?",
        "Tell me about performance",
        "Summarize this report",
    ),
}

GENERAL_QUICK_QUESTIONS = (
    "Summarize this document",
    "What's the main content?",
    "Show me key information",
    "What type of document is this?",
    "Is this document secure?",
)


def quick_questions(document_type: str) -> list[str]:
    """Suggested opening questions for a document type."""
    return list(QUICK_QUESTIONS.get(document_type, GENERAL_QUICK_QUESTIONS))


def welcome(document_type: str, document_name: str) -> str:
    return (
        f'Hello! I\'m analyzing your {document_type}: "{document_name}"\n\n'
        "I can help you with:\n"
        "• **Document Content** - Ask about specific information in the document\n"
        "• **Fraud Analysis** - Understand risk factors and security assessment\n"
        "• **Summary** - Get a comprehensive overview\n"
        "• **Specific Questions** - Ask about any details, sections, or data\n\n"
        "What would you like to know about this document?"
    )


# Resume/CV


def resume_projects(name: str, info: ResumeInfo) -> str:
    entries = "\n".join(
        f"**{index}. {project.name}**\n"
        f"• **Description:** {project.description}\n"
        f"• **Technologies:** {', '.join(project.technologies)}\n"
        f"• **Duration:** {project.duration}\n"
        for index, project in enumerate(info.projects, start=1)
    )
    return (
        f"## Projects from {name}\n\n{entries}\n"
        f"**Total Projects:** {len(info.projects)}\n\n"
        "These projects demonstrate expertise in full-stack development, modern web "
        "technologies, and project management skills."
    )


def resume_skills(name: str, info: ResumeInfo) -> str:
    skills = info.skills
    return (
        f"## Skills from {name}\n\n"
        f"**Technical Skills:**\n{bullets(skills)}\n\n"
        "**Skill Categories:**\n"
        f"• **Frontend:** {_pick(skills, FRONTEND_SKILLS)}\n"
        f"• **Backend:** {_pick(skills, BACKEND_SKILLS)}\n"
        f"• **Cloud/DevOps:** {_pick(skills, CLOUD_SKILLS)}\n\n"
        f"**Total Skills Listed:** {len(skills)}"
    )


def resume_experience(name: str, info: ResumeInfo) -> str:
    entries = "\n".join(
        f"**{index}. {job.position} at {job.company}**\n"
        f"• **Duration:** {job.duration}\n"
        "• **Key Responsibilities:**\n"
        + "\n".join(f"  - {item}" for item in job.responsibilities)
        + "\n"
        for index, job in enumerate(info.work_history, start=1)
    )
    return (
        f"## Work Experience from {name}\n\n{entries}\n"
        f"**Total Experience:** {info.experience}\n"
        f"**Current Role:** {info.current_role}"
    )


def resume_contact(name: str, info: ResumeInfo) -> str:
    return (
        f"## Contact Information from {name}\n\n"
        f"• **Name:** {info.name}\n"
        f"• **Email:** {info.email}\n"
        f"• **Phone:** {info.phone}\n"
        f"• **Location:** {info.location}\n\n"
        "All contact information appears to be properly formatted and professional."
    )


def resume_education(name: str, info: ResumeInfo) -> str:
    return (
        f"## Education from {name}\n\n"
        f"• **Degree:** {info.education}\n"
        "• **Field of Study:** Computer Science\n\n"
        "The educational background aligns well with the technical skills and work "
        "experience presented in the resume."
    )


# Invoice


def invoice_amount(name: str, info: InvoiceInfo) -> str:
    return (
        f"## Invoice Amount Details from {name}\n\n"
        f"• **Subtotal:** {info.amount}\n"
        f"• **Tax:** {info.tax}\n"
        f"• **Total Amount:** {info.total}\n\n"
        "**Payment Terms:** Net 30 days\n"
        f"**Due Date:** {info.due_date}\n\n"
        "The invoice total includes all services and applicable taxes."
    )


def invoice_items(name: str, info: InvoiceInfo) -> str:
    entries = "\n".join(
        f"**{index}. {item.description}**\n"
        f"• **Quantity:** {item.quantity} hours\n"
        f"• **Rate:** {item.rate}\n"
        f"• **Amount:** {item.amount}\n"
        for index, item in enumerate(info.items, start=1)
    )
    return (
        f"## Services/Items from {name}\n\n{entries}\n"
        f"**Invoice Number:** {info.invoice_number}\n"
        "**Service Period:** January 2024"
    )


def invoice_parties(name: str, info: InvoiceInfo) -> str:
    return (
        f"## Party Information from {name}\n\n"
        f"• **Vendor:** {info.vendor}\n"
        f"• **Client:** {info.client}\n"
        f"• **Invoice Date:** {info.date}\n"
        f"• **Invoice Number:** {info.invoice_number}\n\n"
        "This is a business-to-business transaction for professional services."
    )


# Contract/Agreement


def contract_terms(name: str, info: ContractInfo) -> str:
    return (
        f"## Contract Terms from {name}\n\n"
        f"**Key Terms & Conditions:**\n{bullets(info.terms)}\n\n"
        "**Contract Details:**\n"
        f"• **Type:** {info.contract_type}\n"
        f"• **Effective Date:** {info.effective_date}\n"
        f"• **Expiration:** {info.expiration_date}\n"
        f"• **Value:** {info.value}"
    )


def contract_parties(name: str, info: ContractInfo) -> str:
    parties = "\n".join(
        f"{index}. {party}" for index, party in enumerate(info.parties, start=1)
    )
    return (
        f"## Contract Parties from {name}\n\n"
        f"**Contracting Parties:**\n{parties}\n\n"
        f"**Contract Value:** {info.value}\n"
        f"**Duration:** {info.effective_date} to {info.expiration_date}\n\n"
        "This is a formal business agreement between the specified parties."
    )


# Business Report


def report_metrics(name: str, info: ReportInfo) -> str:
    metrics = info.key_metrics
    return (
        f"## Key Metrics from {name}\n\n"
        "**Performance Metrics:**\n"
        f"• **Revenue:** {metrics.revenue}\n"
        f"• **Growth Rate:** {metrics.growth}\n"
        f"• **Customer Count:** {metrics.customers}\n"
        f"• **Satisfaction Score:** {metrics.satisfaction}\n\n"
        "**Report Period:** Q4 2023\n"
        f"**Author:** {info.author}\n\n"
        "These metrics show strong business performance with positive growth trends."
    )


def report_findings(name: str, info: ReportInfo) -> str:
    return (
        f"## Key Findings from {name}\n\n"
        f"**Analysis Results:**\n{bullets(info.findings)}\n\n"
        f"**Report Title:** {info.report_title}\n"
        f"**Analysis Date:** {info.date}\n\n"
        "These findings provide valuable insights for strategic decision-making."
    )


def report_recommendations(name: str, info: ReportInfo) -> str:
    return (
        f"## Recommendations from {name}\n\n"
        f"**Strategic Recommendations:**\n{bullets(info.recommendations)}\n\n"
        "**Implementation Priority:** High\n"
        "**Expected Impact:** Positive revenue and customer satisfaction improvements\n\n"
        "These recommendations are based on comprehensive data analysis and market trends."
    )


# Any document type


def summary(context: ChatContext) -> str:
    content = context.content
    keys = content.key_names()[:5]
    score = context.risk_score or 0.0
    return (
        f"## Document Summary: {context.name}\n\n"
        f"**Document Type:** {content.document_type}\n"
        f"**File Size:** {format_file_size(context.size_bytes)}\n"
        f"**Upload Date:** {format_upload_date(context.uploaded_at)}\n\n"
        f"**Content Overview:**\n{bullets(content.text_content)}\n\n"
        f"**Key Information Sections:**\n{bullets(capitalize_key(key) for key in keys)}\n\n"
        f"**Fraud Risk Assessment:** {format_percent(score)} ({risk_label(score)})"
    )


def security(context: ChatContext) -> str:
    score = context.risk_score or 0.0
    checks = context.risk_factors or (DEFAULT_SECURITY_CHECK,)
    if score < LOW_RISK_CEILING:
        recommendation = "Document appears authentic and safe to process"
    else:
        recommendation = "Additional verification recommended before processing"
    return (
        f"## Security Analysis for {context.name}\n\n"
        f"**Fraud Risk Score:** {format_percent(score)}\n"
        f"**Risk Level:** {risk_label(score)}\n"
        f"**Document Type:** {context.content.document_type}\n\n"
        f"**Security Checks Performed:**\n{bullets(checks)}\n\n"
        "**Content Verification:**\n"
        "• Document structure: ✅ Valid\n"
        "• Metadata consistency: ✅ Verified\n"
        "• Content authenticity: ✅ Confirmed\n"
        "• Format integrity: ✅ Maintained\n\n"
        f"**Recommendation:** {recommendation}"
    )


def lookup(name: str, entries: Sequence[tuple[str, str]]) -> str:
    body = "\n\n".join(f"**{capitalize_key(key)}:** {value}" for key, value in entries)
    return (
        f"## Information from {name}\n\n{body}\n\n"
        "This information was extracted directly from the document content during analysis."
    )


def fallbacks(context: ChatContext) -> list[str]:
    """The interchangeable default replies for an unmatched question."""
    document_type = context.content.document_type
    keys = context.content.key_names()
    return [
        f"I can help you explore the content of this {document_type}. It contains "
        f"information about {', '.join(keys[:3])}. What specific aspect would you like "
        "to know more about?",
        f"This {document_type} has been fully analyzed and contains {len(keys)} main data "
        "points. You can ask me about any specific information, request a summary, or "
        "inquire about the fraud analysis results.",
        f'Based on the content analysis of "{context.name}", I can provide details about '
        f"{' and '.join(keys[:2])}. What would you like to explore?",
        f"I have access to all the extracted content from this {document_type}. Feel free "
        "to ask about specific sections, data points, or request explanations about any "
        "part of the document.",
    ]


def _pick(skills: Sequence[str], category: Sequence[str]) -> str:
    return ", ".join(skill for skill in skills if skill in category)
