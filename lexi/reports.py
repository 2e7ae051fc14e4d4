# lexi/reports.py
# PDF export for drafted documents and risk reports

import datetime
import re
from typing import Optional

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from lexi import config
from lexi.models import AnalysisResult, DocumentCategory, RiskLevel
from lexi.normalizer import render_markdown

_LATIN1_REPLACEMENTS = {
    "\u2018": "'", "\u2019": "'", "\u201a": "'",
    "\u201c": '"', "\u201d": '"', "\u201e": '"',
    "\u2013": "-", "\u2014": "--", "\u2212": "-",
    "\u2026": "...", "\u2022": "-", "\u2122": "(TM)", "\u20ac": "EUR",
}

RISK_COLORS = {
    RiskLevel.HIGH: (185, 28, 28),
    RiskLevel.MEDIUM: (161, 98, 7),
    RiskLevel.LOW: (21, 128, 61),
}


def to_latin1(text: str) -> str:
    """Core PDF fonts only cover Latin-1; map common typography and drop the rest."""
    for src, dst in _LATIN1_REPLACEMENTS.items():
        text = text.replace(src, dst)
    return text.encode("latin-1", "replace").decode("latin-1")


def _pdf_html(markdown_text: str) -> str:
    html = render_markdown(markdown_text)
    html = re.sub(r"<(/?)strong>", r"<\1b>", html)
    html = re.sub(r"<(/?)em>", r"<\1i>", html)
    return to_latin1(html)


def document_filename(category: DocumentCategory, on: Optional[datetime.date] = None) -> str:
    on = on or datetime.date.today()
    name = re.sub(r"\s+", "_", category.value).replace("/", "_")
    return f"{name}_{on.isoformat()}.pdf"


def report_filename(on: Optional[datetime.date] = None) -> str:
    on = on or datetime.date.today()
    return f"Legal_Analysis_Report_{on.isoformat()}.pdf"


class LegalPDF(FPDF):
    """A4 portrait page with the same margin on every side."""

    def __init__(self, margin_mm: float):
        super().__init__(orientation="P", unit="mm", format="A4")
        self.set_margins(margin_mm, margin_mm, margin_mm)
        self.set_auto_page_break(auto=True, margin=margin_mm)

    def footer(self):
        self.set_y(-self.b_margin + 2)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(120, 120, 120)
        self.cell(0, 6, f"Page {self.page_no()}", align="C")
        self.set_text_color(0, 0, 0)


class DocumentPDF(LegalPDF):
    def __init__(self):
        super().__init__(config.DOCUMENT_MARGIN_MM)


class AnalysisReportPDF(LegalPDF):
    def __init__(self):
        super().__init__(config.REPORT_MARGIN_MM)

    def header(self):
        self.set_font("Helvetica", "B", 16)
        self.cell(0, 10, "LEGAL ANALYSIS REPORT", align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_font("Helvetica", "I", 10)
        self.cell(
            0, 8, f'Generated on {datetime.datetime.now().strftime("%Y-%m-%d %H:%M")}',
            align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        self.ln(4)

    def add_section(self, title: str, content: str):
        self.set_font("Helvetica", "B", 13)
        self.cell(0, 9, to_latin1(title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_font("Helvetica", "", 10)
        self.multi_cell(0, 5, to_latin1(content), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(4)

    def add_list_section(self, title: str, items):
        self.add_section(title, "\n".join(f"- {item}" for item in items) or "None identified.")

    def add_risk_badge(self, level: RiskLevel):
        self.set_font("Helvetica", "B", 13)
        self.cell(0, 9, "RISK LEVEL", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_text_color(*RISK_COLORS[level])
        self.set_font("Helvetica", "B", 12)
        self.cell(0, 8, f"{level.value} RISK", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_text_color(0, 0, 0)
        self.ln(4)


def render_document_pdf(content: str) -> bytes:
    """Render a drafted Markdown document to PDF bytes."""
    pdf = DocumentPDF()
    pdf.add_page()
    pdf.set_font("Times", "", 11)
    pdf.write_html(_pdf_html(content))
    return bytes(pdf.output())


def render_report_pdf(result: AnalysisResult) -> bytes:
    pdf = AnalysisReportPDF()
    pdf.add_page()
    pdf.add_risk_badge(result.risk_level)
    pdf.add_section("SUMMARY", result.summary)
    pdf.add_list_section("RISK ASSESSMENT", result.risks)
    if result.plain_english_translation:
        pdf.add_section("PLAIN ENGLISH TRANSLATION", result.plain_english_translation)
    if result.hidden_clauses:
        pdf.add_list_section("HIDDEN CLAUSES", result.hidden_clauses)
    return bytes(pdf.output())
