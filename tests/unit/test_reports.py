"""Unit tests for PDF export."""

import datetime

import fitz

from lexi.models import AnalysisResult, DocumentCategory, RiskLevel
from lexi.reports import document_filename, render_document_pdf, render_report_pdf, report_filename, to_latin1

DRAFT = """# NON-DISCLOSURE AGREEMENT

THIS AGREEMENT is made between **Acme Corp** (the “Discloser”) and *Bob*.

## 1. DEFINITIONS

- Confidential Information includes trade secrets.
- It excludes public information.

## 2. GOVERNING LAW

This agreement is governed by the laws of the State of New York.
"""


def pdf_text(data):
    with fitz.open(stream=data, filetype="pdf") as doc:
        return "".join(page.get_text() for page in doc)


class TestFilenames:
    def test_document_filename(self):
        assert document_filename(DocumentCategory.NDA, datetime.date(2025, 3, 9)) == (
            "Non-Disclosure_Agreement_(NDA)_2025-03-09.pdf"
        )

    def test_slash_is_replaced(self):
        assert document_filename(DocumentCategory.SALES_CONTRACT, datetime.date(2025, 1, 2)) == (
            "Sales_Purchase_Contract_2025-01-02.pdf"
        )

    def test_report_filename(self):
        assert report_filename(datetime.date(2025, 12, 31)) == "Legal_Analysis_Report_2025-12-31.pdf"


class TestLatin1:
    def test_typography_is_mapped(self):
        assert to_latin1("“Quoted” – it’s…") == '"Quoted" - it\'s...'

    def test_unmappable_characters_are_replaced(self):
        assert to_latin1("fee 中") == "fee ?"

    def test_latin1_characters_survive(self):
        assert to_latin1("café § 5") == "café § 5"


class TestDocumentPDF:
    def test_renders_markdown(self):
        data = render_document_pdf(DRAFT)
        assert data.startswith(b"%PDF")
        text = pdf_text(data)
        assert "NON-DISCLOSURE AGREEMENT" in text
        assert "GOVERNING LAW" in text
        assert "**" not in text

    def test_long_document_spans_pages(self):
        body = "\n\n".join(f"## {i}. CLAUSE\n\n" + "The parties agree to the terms. " * 20 for i in range(40))
        data = render_document_pdf("# LONG CONTRACT\n\n" + body)
        with fitz.open(stream=data, filetype="pdf") as doc:
            assert doc.page_count > 1


class TestReportPDF:
    def test_contains_every_section(self, sample_analysis):
        text = pdf_text(render_report_pdf(sample_analysis))
        assert "LEGAL ANALYSIS REPORT" in text
        assert "MEDIUM RISK" in text
        assert "A one-year apartment lease." in text
        assert "Late fees compound daily" in text
        assert "PLAIN ENGLISH TRANSLATION" in text
        assert "Automatic renewal for another year" in text

    def test_optional_sections_skipped(self):
        result = AnalysisResult(summary="Clean contract.", riskLevel=RiskLevel.LOW)
        text = pdf_text(render_report_pdf(result))
        assert "LOW RISK" in text
        assert "None identified." in text
        assert "HIDDEN CLAUSES" not in text
        assert "PLAIN ENGLISH TRANSLATION" not in text
