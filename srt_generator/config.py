"""Configuration constants, supported formats, and .env loading.

WHY: Centralizes every tunable value (API endpoint, character limit
range, output location, file limits) so it is easy to find, update and
override without touching pipeline logic.

HOW: python-dotenv loads the .env file on import. Constants are plain
module-level values with os.getenv overrides. load_api_key() and
validate_char_limit() give clear errors for bad settings.

RULES:
- The API key is loaded from .env via python-dotenv, never hardcoded
- CHAR_LIMIT_MIN..CHAR_LIMIT_MAX is the product range offered to users;
  the engine itself accepts any positive limit
- GAP_THRESHOLD_S is owned by the engine and re-exported here
- SUPPORTED_FORMATS are lowercase extensions with a leading dot
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from srt_generator.core.segmenter import GAP_THRESHOLD_S

# Load .env from the project root (where the script is run from)
load_dotenv()

__all__ = [
    "CHAR_LIMIT_MAX",
    "CHAR_LIMIT_MIN",
    "DEFAULT_CHAR_LIMIT",
    "DEFAULT_DIARIZATION",
    "DEFAULT_LANGUAGE",
    "DEFAULT_OUTPUT_DIR",
    "ELEVENLABS_BASE_URL",
    "ELEVENLABS_MODEL",
    "GAP_THRESHOLD_S",
    "MAX_FILE_SIZE_BYTES",
    "SUPPORTED_FORMATS",
    "TAG_AUDIO_EVENTS",
    "load_api_key",
    "validate_char_limit",
]

# ---------------------------------------------------------------------------
# Caption segmentation
# ---------------------------------------------------------------------------

CHAR_LIMIT_MIN = 10
CHAR_LIMIT_MAX = 200
DEFAULT_CHAR_LIMIT = int(os.getenv("DEFAULT_CHAR_LIMIT", "30"))


def validate_char_limit(value: int) -> int:
    """Check a user-supplied character limit against the product range.

    WHY: Limits below 10 produce one-word flicker captions and limits
    above 200 produce paragraphs; neither is a usable subtitle.

    RULES:
    - Returns the value unchanged when CHAR_LIMIT_MIN <= value <= CHAR_LIMIT_MAX
    - Raises ValueError otherwise
    """
    if not CHAR_LIMIT_MIN <= value <= CHAR_LIMIT_MAX:
        raise ValueError(
            "Character limit must be between {} and {}, got {}".format(
                CHAR_LIMIT_MIN, CHAR_LIMIT_MAX, value
            )
        )
    return value


# ---------------------------------------------------------------------------
# Supported audio/video file extensions
# ---------------------------------------------------------------------------

SUPPORTED_FORMATS: set[str] = {
    ".mp3", ".mp4", ".wav", ".m4a", ".mov",
    ".avi", ".flv", ".mkv", ".webm",
}
"""Media file extensions accepted for upload (lowercase, with dot)."""

MAX_FILE_SIZE_BYTES = 100 * 1024 * 1024

DEFAULT_OUTPUT_DIR = Path(
    os.getenv("SRT_OUTPUT_DIR", str(Path.home() / "Documents" / "SRT Generator Output"))
).expanduser()

# ---------------------------------------------------------------------------
# ElevenLabs API defaults
# ---------------------------------------------------------------------------

ELEVENLABS_BASE_URL = os.getenv("ELEVENLABS_BASE_URL", "https://api.elevenlabs.io/v1")
ELEVENLABS_MODEL = os.getenv("ELEVENLABS_MODEL", "scribe_v1")
DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "en")
DEFAULT_DIARIZATION = os.getenv("DEFAULT_DIARIZATION", "true").lower() == "true"
TAG_AUDIO_EVENTS = os.getenv("TAG_AUDIO_EVENTS", "true").lower() == "true"


def load_api_key() -> str:
    """Load the ElevenLabs API key from the environment.

    RULES:
    - Raises ValueError if the key is missing or empty
    - Never returns a default/placeholder value
    """
    key = os.getenv("ELEVENLABS_API_KEY", "").strip()
    if not key:
        raise ValueError(
            "ElevenLabs API key not configured. "
            "Add ELEVENLABS_API_KEY to the .env file in the app folder."
        )
    return key
