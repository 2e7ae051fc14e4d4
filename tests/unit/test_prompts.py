"""Unit tests for prompt construction."""

from lexi.models import DocumentCategory
from lexi.prompts import (
    ANALYSIS_PROMPT,
    TRANSCRIPTION_PROMPT,
    build_chat_system_instruction,
    build_drafting_prompt,
    format_fields,
    truncate_for_speech,
)


class TestDraftingPrompt:
    def test_fields_keep_form_order(self):
        text = format_fields({"Disclosing Party": "Acme", "Receiving Party": "Bob"})
        assert text == "- Disclosing Party: Acme\n- Receiving Party: Bob"

    def test_prompt_contains_inputs(self):
        prompt = build_drafting_prompt(
            DocumentCategory.NDA,
            {"Disclosing Party": "Acme", "Receiving Party": "Bob"},
            "5 year term",
        )
        assert "DOCUMENT TYPE: Non-Disclosure Agreement (NDA)" in prompt
        assert "- Disclosing Party: Acme" in prompt
        assert "5 year term" in prompt
        assert "Governing Law" in prompt
        assert "Signatures" in prompt
        assert "<br>" in prompt  # the instruction not to use it

    def test_prompt_is_deterministic(self):
        args = (DocumentCategory.SUBLEASE, {"Sublessor": "A", "Sublessee": "B"}, "monthly")
        assert build_drafting_prompt(*args) == build_drafting_prompt(*args)


class TestAnalysisPrompt:
    def test_requests_every_json_field(self):
        for key in ("summary", "riskLevel", "risks", "plainEnglishTranslation", "hiddenClauses"):
            assert f'"{key}"' in ANALYSIS_PROMPT

    def test_transcription_is_transcribe_only(self):
        assert "Do not translate" in TRANSCRIPTION_PROMPT


class TestChatInstruction:
    def test_embeds_analysis_context(self, sample_analysis):
        text = build_chat_system_instruction(sample_analysis)
        assert "DOCUMENT SUMMARY: A one-year apartment lease." in text
        assert "RISK LEVEL: MEDIUM" in text
        assert "IDENTIFIED RISKS: Late fees compound daily; Landlord may enter without notice" in text
        assert "HIDDEN CLAUSES: Automatic renewal for another year" in text
        assert "TRANSLATION OF COMPLEX CLAUSE: You pay for repairs you did not cause." in text
        assert "consulting a real lawyer" in text


class TestSpeechTruncation:
    def test_short_text_untouched(self):
        assert truncate_for_speech("hello", 10) == "hello"

    def test_long_text_truncated(self):
        assert truncate_for_speech("a" * 12, 10) == "a" * 10 + "..."
