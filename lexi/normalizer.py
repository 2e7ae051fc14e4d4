# lexi/normalizer.py
# Turns free-form model output into something the app can use.

import json
import logging
import re

import markdown
from markdown.extensions import Extension
from pydantic import ValidationError

from lexi.exceptions import AnalysisParseError, EmptyResponseError
from lexi.models import AnalysisResult

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = "Could not analyze document. Please ensure the image is clear."

_FENCE_RE = re.compile(r"```json\n?|```")
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)

class EscapeRawHtml(Extension):
    """Treat raw HTML in model output as text; code spans keep their own escaping."""

    def extendMarkdown(self, md):
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")


# EscapeRawHtml goes last so it also removes the block handler md_in_html installs
MARKDOWN_EXTENSIONS = ["extra", "sane_lists", EscapeRawHtml()]


def clean_json_string(text: str) -> str:
    """Strip code fences and any prose around the outermost JSON object."""
    clean = _FENCE_RE.sub("", text)
    first_open = clean.find("{")
    last_close = clean.rfind("}")
    if first_open != -1 and last_close != -1:
        clean = clean[first_open:last_close + 1]
    return clean.strip()


def parse_analysis_response(text: str) -> AnalysisResult:
    """Parse an analysis response into a fully validated AnalysisResult.

    Malformed output is expected now and then (the model is asked for JSON but
    JSON mode is not enforced), so every failure path raises
    AnalysisParseError rather than returning a partial object.
    """
    if not text or "{" not in text:
        logger.warning("⚠️ Analysis response contained no JSON object")
        raise AnalysisParseError(ANALYSIS_FAILED_MESSAGE, details={"reason": "no_json_object"}, raw_text=text or "")

    cleaned = clean_json_string(text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"⚠️ Analysis response is not valid JSON: {e}")
        raise AnalysisParseError(ANALYSIS_FAILED_MESSAGE, details={"reason": "invalid_json", "error": str(e)}, raw_text=text) from e

    if not isinstance(payload, dict):
        raise AnalysisParseError(ANALYSIS_FAILED_MESSAGE, details={"reason": "not_an_object"}, raw_text=text)

    try:
        return AnalysisResult.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"⚠️ Analysis response has the wrong shape: {e.error_count()} error(s)")
        raise AnalysisParseError(
            ANALYSIS_FAILED_MESSAGE,
            details={"reason": "invalid_shape", "errors": [err["msg"] for err in e.errors()]},
            raw_text=text,
        ) from e


def clean_drafted_document(text: str) -> str:
    return _BR_RE.sub("", text)


def require_text(text, message: str) -> str:
    """Return the model's text, raising when the model produced nothing."""
    if text is None or not str(text).strip():
        raise EmptyResponseError(message)
    return str(text)


def extract_title(content: str, fallback: str) -> str:
    """First Markdown heading of a drafted document, stripped of emphasis."""
    for line in content.splitlines():
        stripped = line.strip()
        if stripped.startswith("#"):
            title = stripped.lstrip("#").strip().strip("*_").strip()
            if title:
                return title
    return fallback


def render_markdown(text: str) -> str:
    """Render model Markdown to HTML; raw HTML in the text is shown literally."""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)
