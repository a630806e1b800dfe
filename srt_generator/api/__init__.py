"""ElevenLabs API client package: async HTTP interface to speech-to-text.

WHY: Subtitles are built from a word-level transcription. This package
keeps all ElevenLabs communication behind one client class.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. ElevenLabsClient
provides transcribe_file() and validate_api_key(). Response bodies are
parsed into the TranscriptionResult dataclass defined in models.py.

RULES:
- All HTTP calls go through ElevenLabsClient (no direct httpx usage elsewhere)
- Authentication is via the xi-api-key header from config
"""

from srt_generator.api.client import ElevenLabsAPIError, ElevenLabsClient
from srt_generator.api.models import TranscriptionResult

__all__ = ["ElevenLabsAPIError", "ElevenLabsClient", "TranscriptionResult"]
