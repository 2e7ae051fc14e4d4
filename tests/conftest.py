"""Shared fixtures: a scripted stand-in for the Gemini service and sample data."""

import fitz
import pytest
from fastapi.testclient import TestClient

from lexi.app import app
from lexi.exceptions import ServiceError
from lexi.gemini_service import get_ai_service
from lexi.models import AnalysisResult, RiskLevel


class FakeAIService:
    """Records every call and answers from canned values.

    Assign an exception to ``fail_with`` to make the next calls raise it.
    """

    configured = True

    def __init__(self):
        self.calls = []
        self.fail_with = None
        self.draft = "# NON-DISCLOSURE AGREEMENT\n\nTHIS AGREEMENT is made this day between **Acme** and **Bob**."
        self.analysis = None
        self.reply = "The **termination** clause lets the landlord end the lease early."
        self.transcript = "five year term"
        self.audio = b"RIFF....WAVEfmt "

    def _record(self, name, *args):
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    async def generate_document(self, category, form_values, additional_details):
        self._record("generate_document", category, dict(form_values), additional_details)
        return self.draft

    async def analyze_document(self, data, mime_type):
        self._record("analyze_document", data, mime_type)
        return self.analysis

    async def transcribe_audio(self, data, mime_type=None):
        self._record("transcribe_audio", data, mime_type)
        return self.transcript

    async def chat_reply(self, history, message, context):
        self._record("chat_reply", list(history), message, context)
        return self.reply

    async def speak_text(self, text):
        self._record("speak_text", text)
        return self.audio

    def call_names(self):
        return [name for name, _ in self.calls]


@pytest.fixture
def sample_analysis():
    return AnalysisResult(
        summary="A one-year apartment lease.",
        riskLevel=RiskLevel.MEDIUM,
        risks=["Late fees compound daily", "Landlord may enter without notice"],
        plainEnglishTranslation="You pay for repairs you did not cause.",
        hiddenClauses=["Automatic renewal for another year"],
    )


@pytest.fixture
def fake_service(sample_analysis):
    service = FakeAIService()
    service.analysis = sample_analysis
    return service


@pytest.fixture
def client(fake_service):
    app.dependency_overrides[get_ai_service] = lambda: fake_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def pdf_bytes():
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "RESIDENTIAL LEASE AGREEMENT")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def png_bytes():
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 256


@pytest.fixture
def service_error():
    return ServiceError("Failed to generate document due to network error.")
