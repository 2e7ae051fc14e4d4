# lexi/gemini_service.py
# The single boundary between Lexi and Google Gemini

import io
import logging
import wave
from typing import Mapping, Optional, Sequence

import httpx
from google import genai
from google.genai import errors, types

from lexi import config
from lexi.exceptions import EmptyResponseError, ServiceError, ServiceNotConfiguredError
from lexi.models import AnalysisResult, ChatMessage, ChatRole, DocumentCategory
from lexi.normalizer import clean_drafted_document, parse_analysis_response, require_text
from lexi.prompts import (
    ANALYSIS_PROMPT,
    TRANSCRIPTION_PROMPT,
    build_chat_system_instruction,
    build_drafting_prompt,
    truncate_for_speech,
)

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (errors.APIError, httpx.HTTPError)


def _is_server_side_failure(error: Exception) -> bool:
    code = getattr(error, "code", None)
    if code in (400, 500):
        return True
    text = str(error)
    return "400" in text or "500" in text


def pcm_to_wav(pcm: bytes, sample_rate: int = config.TTS_SAMPLE_RATE) -> bytes:
    """Wrap raw 16-bit mono PCM in a WAV container."""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(pcm)
    return buffer.getvalue()


class LegalAIService:
    def __init__(self, client: Optional[genai.Client] = None, api_key: Optional[str] = None):
        self._client = client
        self._api_key = api_key if api_key is not None else config.API_KEY

    @property
    def configured(self) -> bool:
        return self._client is not None or bool(self._api_key)

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if not self._api_key:
                raise ServiceNotConfiguredError("AI service not configured. Set GOOGLE_API_KEY and restart Lexi.")
            self._client = genai.Client(api_key=self._api_key)
            logger.info("✅ Successfully configured Google AI.")
        return self._client

    async def generate_document(
        self,
        category: DocumentCategory,
        form_values: Mapping[str, str],
        additional_details: str,
    ) -> str:
        """Draft a legal document and return it as Markdown."""
        prompt = build_drafting_prompt(category, form_values, additional_details)
        try:
            response = await self.client.aio.models.generate_content(
                model=config.PRO_MODEL,
                contents=prompt,
                config=types.GenerateContentConfig(temperature=config.DRAFTING_TEMPERATURE),
            )
        except TRANSPORT_ERRORS as e:
            logger.error(f"❌ Generation Error: {e}")
            raise ServiceError("Failed to generate document due to network error.") from e

        text = require_text(response.text, "Failed to generate document.")
        return clean_drafted_document(text)

    async def analyze_document(self, data: bytes, mime_type: str) -> AnalysisResult:
        """Run the risk analysis on an image or PDF and parse the JSON report."""
        document_part = types.Part.from_bytes(data=data, mime_type=mime_type)
        try:
            response = await self.client.aio.models.generate_content(
                model=config.PRO_MODEL,
                contents=[document_part, ANALYSIS_PROMPT],
                # No response_mime_type: JSON mode and thinking together time out
                config=types.GenerateContentConfig(
                    thinking_config=types.ThinkingConfig(thinking_budget=config.ANALYSIS_THINKING_BUDGET),
                ),
            )
        except TRANSPORT_ERRORS as e:
            logger.error(f"❌ Analysis Error: {e}")
            if _is_server_side_failure(e):
                raise ServiceError(
                    "Analysis failed. The document might be too complex or the server is busy. Please try again."
                ) from e
            raise ServiceError("Could not analyze document. Please ensure the image is clear.") from e

        return parse_analysis_response(response.text or "")

    async def transcribe_audio(self, data: bytes, mime_type: Optional[str] = None) -> str:
        audio_part = types.Part.from_bytes(data=data, mime_type=mime_type or config.DEFAULT_AUDIO_MIME_TYPE)
        try:
            response = await self.client.aio.models.generate_content(
                model=config.FLASH_MODEL,
                contents=[audio_part, TRANSCRIPTION_PROMPT],
            )
        except TRANSPORT_ERRORS as e:
            logger.error(f"❌ Gemini Transcription Error: {e}")
            raise ServiceError("Failed to transcribe. Network error or file too large.") from e
        return require_text(response.text, "Failed to transcribe. Network error or file too large.").strip()

    async def chat_reply(
        self,
        history: Sequence[ChatMessage],
        message: str,
        context: AnalysisResult,
    ) -> str:
        """Answer a follow-up question grounded in a prior analysis.

        ``history`` is replayed in order before ``message``.
        """
        gemini_history = [
            types.Content(
                role="user" if m.role is ChatRole.USER else "model",
                parts=[types.Part(text=m.text)],
            )
            for m in history
        ]
        try:
            chat = self.client.aio.chats.create(
                model=config.PRO_MODEL,
                config=types.GenerateContentConfig(system_instruction=build_chat_system_instruction(context)),
                history=gemini_history,
            )
            result = await chat.send_message(message)
        except TRANSPORT_ERRORS as e:
            logger.error(f"❌ Chat Error: {e}")
            raise ServiceError("Failed to get response from Legal Assistant.") from e
        return require_text(result.text, "I couldn't process that request.")

    async def speak_text(self, text: str) -> bytes:
        """Read text aloud with the TTS model and return a WAV file."""
        safe_text = truncate_for_speech(text, config.TTS_MAX_CHARS)
        try:
            response = await self.client.aio.models.generate_content(
                model=config.TTS_MODEL,
                contents=safe_text,
                config=types.GenerateContentConfig(
                    response_modalities=["AUDIO"],
                    speech_config=types.SpeechConfig(
                        voice_config=types.VoiceConfig(
                            prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=config.TTS_VOICE),
                        ),
                    ),
                ),
            )
        except TRANSPORT_ERRORS as e:
            logger.error(f"❌ TTS Error: {e}")
            raise ServiceError("Failed to generate speech audio.") from e

        audio = None
        if response.candidates:
            content = response.candidates[0].content
            if content and content.parts and content.parts[0].inline_data:
                audio = content.parts[0].inline_data.data
        if not audio:
            logger.error("❌ TTS Error: No audio generated")
            raise EmptyResponseError("Failed to generate speech audio.")
        return pcm_to_wav(audio)


legal_ai = LegalAIService()


def get_ai_service() -> LegalAIService:
    return legal_ai
