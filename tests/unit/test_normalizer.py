"""Unit tests for response normalization."""

import pytest

from lexi.exceptions import AnalysisParseError, EmptyResponseError
from lexi.models import RiskLevel
from lexi.normalizer import (
    clean_drafted_document,
    clean_json_string,
    extract_title,
    parse_analysis_response,
    render_markdown,
    require_text,
)

WELL_FORMED = """Sure! Here is the analysis you asked for:

```json
{
  "summary": "A lease with a {strict} deposit rule.",
  "riskLevel": "HIGH",
  "risks": ["Deposit is non-refundable"],
  "plainEnglishTranslation": "You lose the deposit.",
  "hiddenClauses": []
}
```

Let me know if you need anything else."""


class TestCleanJsonString:
    def test_strips_fences_and_prose(self):
        cleaned = clean_json_string(WELL_FORMED)
        assert cleaned.startswith("{")
        assert cleaned.endswith("}")
        assert "Sure!" not in cleaned
        assert "```" not in cleaned

    def test_keeps_braces_inside_strings(self):
        assert "{strict}" in clean_json_string(WELL_FORMED)

    def test_text_without_braces_is_only_trimmed(self):
        assert clean_json_string("  no json here ") == "no json here"


class TestParseAnalysisResponse:
    def test_well_formed_fenced_response(self):
        result = parse_analysis_response(WELL_FORMED)
        assert result.summary == "A lease with a {strict} deposit rule."
        assert result.risk_level is RiskLevel.HIGH
        assert result.risks == ["Deposit is non-refundable"]
        assert result.plain_english_translation == "You lose the deposit."
        assert result.hidden_clauses == []

    def test_risk_level_is_case_insensitive(self):
        result = parse_analysis_response('{"summary": "s", "riskLevel": "low"}')
        assert result.risk_level is RiskLevel.LOW

    def test_optional_fields_default_empty(self):
        result = parse_analysis_response('{"summary": "s", "riskLevel": "MEDIUM", "risks": null}')
        assert result.risks == []
        assert result.hidden_clauses == []
        assert result.plain_english_translation == ""

    def test_no_object_is_a_parse_error(self):
        with pytest.raises(AnalysisParseError) as exc_info:
            parse_analysis_response("I could not read the document.")
        assert exc_info.value.details["reason"] == "no_json_object"
        assert exc_info.value.raw_text == "I could not read the document."

    def test_empty_text_is_a_parse_error(self):
        with pytest.raises(AnalysisParseError):
            parse_analysis_response("")

    def test_invalid_json(self):
        with pytest.raises(AnalysisParseError) as exc_info:
            parse_analysis_response('{"summary": "unterminated}')
        assert exc_info.value.details["reason"] == "invalid_json"

    def test_missing_required_field(self):
        with pytest.raises(AnalysisParseError) as exc_info:
            parse_analysis_response('{"riskLevel": "LOW"}')
        assert exc_info.value.details["reason"] == "invalid_shape"

    def test_unknown_risk_level(self):
        with pytest.raises(AnalysisParseError):
            parse_analysis_response('{"summary": "s", "riskLevel": "EXTREME"}')

    def test_parse_error_is_user_facing(self):
        with pytest.raises(AnalysisParseError) as exc_info:
            parse_analysis_response("nope")
        assert exc_info.value.status_code == 502
        assert "Could not analyze document" in exc_info.value.message


class TestDraftCleanup:
    @pytest.mark.parametrize("tag", ["<br>", "<br/>", "<br />", "<BR>"])
    def test_strips_line_breaks(self, tag):
        assert clean_drafted_document(f"Line one{tag}Line two") == "Line oneLine two"

    def test_require_text_rejects_blank(self):
        with pytest.raises(EmptyResponseError):
            require_text("  \n", "Nothing came back.")
        with pytest.raises(EmptyResponseError):
            require_text(None, "Nothing came back.")

    def test_require_text_passes_content(self):
        assert require_text("hello", "unused") == "hello"


class TestExtractTitle:
    def test_first_heading(self):
        assert extract_title("# NON-DISCLOSURE AGREEMENT\n\n## 1. DEFINITIONS", "fallback") == "NON-DISCLOSURE AGREEMENT"

    def test_bold_heading(self):
        assert extract_title("## **RESIDENTIAL LEASE**", "fallback") == "RESIDENTIAL LEASE"

    def test_fallback(self):
        assert extract_title("No headings at all.", "Sublease Agreement") == "Sublease Agreement"


class TestRenderMarkdown:
    def test_renders_heading_and_bold(self):
        html = render_markdown("# TITLE\n\nThe **Tenant** shall pay.")
        assert "<h1>TITLE</h1>" in html
        assert "<strong>Tenant</strong>" in html

    def test_raw_html_is_escaped(self):
        html = render_markdown("Hi <script>alert(1)</script>")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html or "&lt;script>" in html

    def test_code_spans_are_escaped_once(self):
        html = render_markdown("Use `a < b` and `x & y`")
        assert "<code>a &lt; b</code>" in html
        assert "<code>x &amp; y</code>" in html

    def test_bare_ampersand_outside_code(self):
        assert "Smith &amp; Sons" in render_markdown("Smith & Sons")
