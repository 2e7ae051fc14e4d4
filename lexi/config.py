# lexi/config.py
# Environment-driven settings for Lexi Legal AI

import os
import logging

from dotenv import load_dotenv

load_dotenv()

# --- AI SERVICE ---
API_KEY = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")

PRO_MODEL = os.getenv("LEXI_PRO_MODEL", "gemini-3-pro-preview")
FLASH_MODEL = os.getenv("LEXI_FLASH_MODEL", "gemini-2.5-flash")
TTS_MODEL = os.getenv("LEXI_TTS_MODEL", "gemini-2.5-flash-preview-tts")

DRAFTING_TEMPERATURE = 0.1  # low temperature keeps drafted documents consistent
ANALYSIS_THINKING_BUDGET = 32768
TTS_VOICE = "Fenrir"
TTS_MAX_CHARS = 4000
TTS_SAMPLE_RATE = 24000

# --- UPLOAD LIMITS ---
MAX_FILE_SIZE_MB = 4
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
DEFAULT_AUDIO_MIME_TYPE = "audio/webm"

# --- PDF EXPORT ---
DOCUMENT_MARGIN_MM = 25
REPORT_MARGIN_MM = 10

# --- SERVER ---
HOST = os.getenv("LEXI_HOST", "0.0.0.0")
PORT = int(os.getenv("LEXI_PORT", "8000"))
LOG_LEVEL = os.getenv("LEXI_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

THEME_COOKIE = "lexi_theme"


def configure_logging():
    """Apply the configured log level and format to the root logger."""
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
