# lexi/flows.py
# User-facing flows as state machines. Each flow owns one RequestState: a second
# call cannot start while one is in flight, and a failure returns the flow to
# its last stable state.

import datetime
import logging
from enum import Enum
from typing import Dict, List, Optional, Sequence

from lexi.catalog import DocumentTemplate
from lexi.exceptions import FlowStateError, InputValidationError, MissingFieldsError
from lexi.gemini_service import LegalAIService
from lexi.models import AnalysisResult, ChatMessage, ChatRole, GeneratedDocument
from lexi.normalizer import extract_title
from lexi.prompts import CHAT_GREETING
from lexi.uploads import UploadedFile, validate_audio, validate_document

logger = logging.getLogger(__name__)


class RequestState(str, Enum):
    IDLE = "IDLE"
    IN_FLIGHT = "IN_FLIGHT"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class FormState(str, Enum):
    INCOMPLETE = "INCOMPLETE"
    VALID = "VALID"
    SUBMITTING = "SUBMITTING"
    RESULT = "RESULT"


class UploadState(str, Enum):
    EMPTY = "EMPTY"
    FILE_SELECTED = "FILE_SELECTED"
    ANALYZING = "ANALYZING"
    REPORTED = "REPORTED"


def _begin(current: RequestState, action: str):
    if current is RequestState.IN_FLIGHT:
        raise FlowStateError(f"Cannot {action} while a request is already in flight.")


# --- GENERATION ---
class GenerationFlow:
    """Collects the form for one template and drafts the document."""

    def __init__(self, template: DocumentTemplate):
        self.template = template
        self.form_values: Dict[str, str] = {}
        self.additional_details = ""
        self.request_state = RequestState.IDLE
        self.document: Optional[GeneratedDocument] = None

    def set_field(self, name: str, value: str):
        if name not in self.template.required_fields:
            raise InputValidationError(
                f"'{name}' is not a field of {self.template.name.value}.",
                details={"field": name},
            )
        self._ensure_editable()
        self.form_values[name] = value

    def set_details(self, text: str):
        self._ensure_editable()
        self.additional_details = text

    def fill(self, fields: Dict[str, str], details: str) -> "GenerationFlow":
        for name, value in fields.items():
            self.set_field(name, value)
        self.set_details(details)
        return self

    def missing_fields(self) -> List[str]:
        missing = [f for f in self.template.required_fields if not self.form_values.get(f, "").strip()]
        if not self.additional_details.strip():
            missing.append("Additional Details")
        return missing

    @property
    def is_valid(self) -> bool:
        return not self.missing_fields()

    @property
    def state(self) -> FormState:
        if self.request_state is RequestState.IN_FLIGHT:
            return FormState.SUBMITTING
        if self.document is not None:
            return FormState.RESULT
        return FormState.VALID if self.is_valid else FormState.INCOMPLETE

    @property
    def can_submit(self) -> bool:
        return self.state is FormState.VALID

    async def submit(self, service: LegalAIService) -> GeneratedDocument:
        _begin(self.request_state, "generate a document")
        if self.state is not FormState.VALID:
            missing = self.missing_fields()
            if missing:
                raise MissingFieldsError(
                    "Please fill in every required field: " + ", ".join(missing) + ".",
                    details={"missing": missing},
                )
            raise FlowStateError("A document has already been generated. Edit the form to draft again.")

        self.request_state = RequestState.IN_FLIGHT
        try:
            content = await service.generate_document(self.template.name, dict(self.form_values), self.additional_details)
        except Exception:
            self.request_state = RequestState.FAILED
            raise

        self.document = GeneratedDocument(
            title=extract_title(content, self.template.name.value),
            content=content,
            date=datetime.date.today(),
        )
        self.request_state = RequestState.SUCCEEDED
        logger.info(f"✅ Drafted {self.template.name.value}")
        return self.document

    def edit(self):
        """Go back from the result to the filled-in form."""
        if self.state is not FormState.RESULT:
            raise FlowStateError("There is no generated document to edit.")
        self.document = None
        self.request_state = RequestState.IDLE

    def _ensure_editable(self):
        if self.request_state is RequestState.IN_FLIGHT:
            raise FlowStateError("The form cannot change while the document is being generated.")


# --- ANALYSIS ---
class AnalysisFlow:
    def __init__(self):
        self.file: Optional[UploadedFile] = None
        self.result: Optional[AnalysisResult] = None
        self.request_state = RequestState.IDLE

    @property
    def state(self) -> UploadState:
        if self.request_state is RequestState.IN_FLIGHT:
            return UploadState.ANALYZING
        if self.result is not None:
            return UploadState.REPORTED
        if self.file is not None:
            return UploadState.FILE_SELECTED
        return UploadState.EMPTY

    def select_file(self, upload: UploadedFile):
        """Validate and hold a file; a rejected file leaves the flow untouched."""
        if self.state is UploadState.ANALYZING:
            raise FlowStateError("Cannot change the file while it is being analyzed.")
        validate_document(upload)
        self.file = upload
        self.result = None
        self.request_state = RequestState.IDLE

    def remove_file(self):
        if self.state is UploadState.ANALYZING:
            raise FlowStateError("Cannot remove the file while it is being analyzed.")
        self.file = None
        self.result = None
        self.request_state = RequestState.IDLE

    async def analyze(self, service: LegalAIService) -> AnalysisResult:
        _begin(self.request_state, "analyze a document")
        if self.file is None:
            raise FlowStateError("Select a document to analyze first.")

        self.request_state = RequestState.IN_FLIGHT
        self.result = None
        try:
            result = await service.analyze_document(self.file.data, self.file.mime_type)
        except Exception:
            self.request_state = RequestState.FAILED
            raise

        self.result = result
        self.request_state = RequestState.SUCCEEDED
        logger.info(f"✅ Analysis complete for {self.file.filename}: risk {result.risk_level.value}")
        return result

    def open_chat(self) -> "ChatSession":
        if self.state is not UploadState.REPORTED:
            raise FlowStateError("Chat becomes available once the document has been analyzed.")
        return ChatSession(self.result)


# --- CHAT ---
class ChatSession:
    """In-memory transcript of a conversation about one analysis."""

    def __init__(self, context: AnalysisResult, history: Optional[Sequence[ChatMessage]] = None):
        self.context = context
        if history is None:
            history = [ChatMessage(role=ChatRole.ASSISTANT, text=CHAT_GREETING)]
        self.transcript: List[ChatMessage] = list(history)
        self.request_state = RequestState.IDLE

    def history_for_service(self) -> List[ChatMessage]:
        """Turns replayed to the model; it must open with a user turn."""
        for i, message in enumerate(self.transcript):
            if message.role is ChatRole.USER:
                return self.transcript[i:]
        return []

    async def send(self, service: LegalAIService, text: str) -> ChatMessage:
        _begin(self.request_state, "send a message")
        message = text.strip()
        if not message:
            raise InputValidationError("Type a question before sending.")

        history = self.history_for_service()
        self.transcript.append(ChatMessage(role=ChatRole.USER, text=message))
        self.request_state = RequestState.IN_FLIGHT
        try:
            reply_text = await service.chat_reply(history, message, self.context)
        except Exception:
            self.transcript.pop()
            self.request_state = RequestState.FAILED
            raise

        reply = ChatMessage(role=ChatRole.ASSISTANT, text=reply_text)
        self.transcript.append(reply)
        self.request_state = RequestState.SUCCEEDED
        return reply


# --- TRANSCRIPTION ---
class TranscriptionFlow:
    def __init__(self):
        self.request_state = RequestState.IDLE
        self.text = ""

    async def transcribe(self, service: LegalAIService, clip: UploadedFile) -> str:
        _begin(self.request_state, "transcribe")
        validate_audio(clip)
        self.request_state = RequestState.IN_FLIGHT
        try:
            self.text = await service.transcribe_audio(clip.data, clip.mime_type)
        except Exception:
            self.request_state = RequestState.FAILED
            raise
        self.request_state = RequestState.SUCCEEDED
        return self.text
