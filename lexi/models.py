# lexi/models.py
# Domain models and API schemas

import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DocumentCategory(str, Enum):
    RESIDENTIAL_LEASE = "Residential Lease"
    COMMERCIAL_LEASE = "Commercial Lease"
    SERVICE_AGREEMENT = "Service Agreement"
    CONSULTING_AGREEMENT = "Consulting Agreement"
    NDA = "Non-Disclosure Agreement (NDA)"
    SALES_CONTRACT = "Sales/Purchase Contract"
    EMPLOYMENT_AGREEMENT = "Employment Agreement"
    SUBLEASE = "Sublease Agreement"
    CORPORATE = "Corporate Contract"
    POLICY = "Policy Document"
    FORM = "Legal Form/Notice"


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Theme":
        """Read a stored preference, falling back to light for anything unknown."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.LIGHT

    def toggled(self) -> "Theme":
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


class AnalysisResult(BaseModel):
    """Structured risk report for an uploaded document.

    Wire names are camelCase (``riskLevel``, ``plainEnglishTranslation``,
    ``hiddenClauses``) because that is the shape the model is asked to
    return and the shape the page consumes.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    summary: str
    risk_level: RiskLevel = Field(alias="riskLevel")
    risks: List[str] = Field(default_factory=list)
    plain_english_translation: str = Field(default="", alias="plainEnglishTranslation")
    hidden_clauses: List[str] = Field(default_factory=list, alias="hiddenClauses")

    @field_validator("risk_level", mode="before")
    @classmethod
    def normalize_risk_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("risks", "hidden_clauses", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v

    @field_validator("plain_english_translation", mode="before")
    @classmethod
    def none_as_blank(cls, v):
        return "" if v is None else v


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: ChatRole
    text: str


class GeneratedDocument(BaseModel):
    title: str
    content: str  # Markdown
    date: datetime.date


# --- API SCHEMAS ---
class TemplateOut(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    required_fields: List[str]


class GenerateRequest(BaseModel):
    template_id: str
    fields: Dict[str, str] = Field(default_factory=dict)
    details: str = ""


class GenerateResponse(BaseModel):
    title: str
    content: str
    html: str
    date: datetime.date
    filename: str


class ChatRequest(BaseModel):
    analysis: AnalysisResult
    history: List[ChatMessage] = Field(default_factory=list)
    message: str


class ChatResponse(BaseModel):
    reply: str
    html: str
    history: List[ChatMessage]


class TranscriptionResponse(BaseModel):
    text: str


class SpeakRequest(BaseModel):
    text: str


class ExportDocumentRequest(BaseModel):
    template_id: str
    content: str


class ThemeRequest(BaseModel):
    theme: Optional[str] = None


class ThemeResponse(BaseModel):
    theme: Theme
