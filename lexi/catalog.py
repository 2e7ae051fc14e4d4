# lexi/catalog.py
# Read-only catalog of the documents Lexi can draft

from dataclasses import dataclass
from typing import List, Optional, Tuple

from lexi.exceptions import UnknownTemplateError
from lexi.models import DocumentCategory, TemplateOut


@dataclass(frozen=True)
class DocumentTemplate:
    id: str
    name: DocumentCategory
    description: str
    icon: str
    required_fields: Tuple[str, ...]

    def to_schema(self) -> TemplateOut:
        return TemplateOut(
            id=self.id,
            name=self.name.value,
            description=self.description,
            icon=self.icon,
            required_fields=list(self.required_fields),
        )


DOC_TEMPLATES: Tuple[DocumentTemplate, ...] = (
    DocumentTemplate("1", DocumentCategory.RESIDENTIAL_LEASE, "For renting out a house or apartment.", "Home", ("Landlord", "Tenant", "Rent", "Term")),
    DocumentTemplate("2", DocumentCategory.COMMERCIAL_LEASE, "Leasing office or retail space.", "Building2", ("Lessor", "Lessee", "Premises")),
    DocumentTemplate("3", DocumentCategory.SERVICE_AGREEMENT, "Hiring a freelancer or agency.", "Briefcase", ("Client", "Provider", "Services")),
    DocumentTemplate("4", DocumentCategory.CONSULTING_AGREEMENT, "Professional advice services.", "Users", ("Consultant", "Company", "Scope")),
    DocumentTemplate("5", DocumentCategory.NDA, "Protect confidential information.", "ShieldCheck", ("Disclosing Party", "Receiving Party")),
    DocumentTemplate("6", DocumentCategory.SALES_CONTRACT, "Selling goods or high-value items.", "ScrollText", ("Buyer", "Seller", "Item")),
    DocumentTemplate("7", DocumentCategory.EMPLOYMENT_AGREEMENT, "Hiring a new employee.", "Users", ("Employer", "Employee", "Role")),
    DocumentTemplate("8", DocumentCategory.SUBLEASE, "Renting your rented space to others.", "Home", ("Sublessor", "Sublessee")),
    DocumentTemplate("9", DocumentCategory.CORPORATE, "Operating agreements, bylaws.", "Building2", ("Company", "Members")),
    DocumentTemplate("10", DocumentCategory.POLICY, "Privacy policy, Terms of use.", "FileWarning", ("Company Name",)),
    DocumentTemplate("11", DocumentCategory.FORM, "Eviction notice, demand letter.", "FileText", ("Recipient", "Sender")),
)

# Emoji stand-ins for the icon tags on the dashboard cards
ICON_GLYPHS = {
    "Home": "🏠",
    "Building2": "🏢",
    "Briefcase": "💼",
    "Users": "👥",
    "ShieldCheck": "🛡️",
    "ScrollText": "📜",
    "FileWarning": "⚠️",
    "FileText": "📄",
}

_BY_ID = {t.id: t for t in DOC_TEMPLATES}


def find_template(template_id: str) -> Optional[DocumentTemplate]:
    return _BY_ID.get(template_id)


def get_template(template_id: str) -> DocumentTemplate:
    """Look up a template by id, raising if the catalog has no such entry."""
    template = find_template(template_id)
    if template is None:
        raise UnknownTemplateError(
            f"Unknown document template '{template_id}'.",
            details={"template_id": template_id},
        )
    return template


def get_template_by_name(name: DocumentCategory) -> DocumentTemplate:
    for template in DOC_TEMPLATES:
        if template.name == name:
            return template
    raise UnknownTemplateError(f"No template for '{name}'.")


def search_templates(term: str = "") -> List[DocumentTemplate]:
    """Case-insensitive substring match on the category name or description."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(DOC_TEMPLATES)
    return [
        t for t in DOC_TEMPLATES
        if needle in t.name.value.lower() or needle in t.description.lower()
    ]
