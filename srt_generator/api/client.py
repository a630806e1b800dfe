"""Async HTTP client for the ElevenLabs speech-to-text API.

WHY: Subtitles start from a word-level transcription. This module wraps
the ElevenLabs upload-and-transcribe call and the API key check behind a
small client class so the CLI and tests never deal with HTTP details.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. ElevenLabsClient is an
async context manager: enter it to get an authenticated client, exit to
close the connection pool. transcribe_file() sends one multipart POST and
returns a parsed TranscriptionResult.

RULES:
- Always use the async context manager (async with ElevenLabsClient(...) as client:)
- Authentication is the ``xi-api-key`` header
- Word-level timestamps and diarization are always requested
- Non-200 responses raise ElevenLabsAPIError with the status code and the
  API's detail message
- validate_api_key() never raises for HTTP or network failures
- Status callback (on_status) is optional; when provided, called with status strings
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import httpx

from srt_generator.api.models import InvalidResponseError, TranscriptionResult
from srt_generator.config import (
    DEFAULT_DIARIZATION,
    DEFAULT_LANGUAGE,
    ELEVENLABS_BASE_URL,
    ELEVENLABS_MODEL,
    TAG_AUDIO_EVENTS,
    load_api_key,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_TRANSCRIBE_TIMEOUT_S = 300.0  # 5 minutes for upload + recognition
_CONNECT_TIMEOUT_S = 30.0
_KEY_CHECK_TIMEOUT_S = 10.0


class ElevenLabsAPIError(Exception):
    """Raised when the ElevenLabs API returns an error response.

    WHY: Callers need a typed exception to tell API rejections (bad key,
    rate limit, file too large) apart from network errors.

    HOW: Wraps the HTTP status code and the most specific message found in
    the response body.

    RULES:
    - status_code is 0 for a malformed success response
    - message is the API's detail/message field, or the raw body text
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"ElevenLabs API error {status_code}: {message}")


def _error_detail(resp: httpx.Response) -> str:
    """Extract a readable error message from an error response body.

    ElevenLabs error bodies are either ``{"detail": "..."}``,
    ``{"detail": {"message": "..."}}`` or ``{"message": "..."}``; anything
    else falls back to the body text.
    """
    try:
        body = resp.json()
    except ValueError:
        return resp.text or "Unknown error"

    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, dict):
            detail = detail.get("message") or detail.get("status")
        if detail:
            return str(detail)
        if body.get("message"):
            return str(body["message"])
    return resp.text or "Unknown error"


class ElevenLabsClient:
    """Async client for ElevenLabs speech-to-text.

    RULES:
    - Use as: async with ElevenLabsClient() as client: ...
    - api_key defaults to load_api_key() from .env
    - base_url defaults to ELEVENLABS_BASE_URL from config
    - model defaults to ELEVENLABS_MODEL from config
    - transport is for tests (httpx.MockTransport); None uses the network
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or load_api_key()
        self._base_url = (base_url or ELEVENLABS_BASE_URL).rstrip("/")
        self._model = model or ELEVENLABS_MODEL
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> ElevenLabsClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"xi-api-key": self._api_key},
            timeout=httpx.Timeout(_TRANSCRIBE_TIMEOUT_S, connect=_CONNECT_TIMEOUT_S),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "ElevenLabsClient must be used as an async context manager: "
                "async with ElevenLabsClient() as client: ..."
            )
        return self._client

    async def transcribe_file(
        self,
        file_path: Path,
        language_code: str | None = None,
        diarize: bool | None = None,
        on_status: Callable[[str], None] | None = None,
    ) -> TranscriptionResult:
        """Upload a media file and return its word-level transcription.

        WHY: ElevenLabs transcribes synchronously: one multipart POST to
        /speech-to-text returns the full word array with timing and
        speaker ids.

        HOW: Streams the file as multipart/form-data together with the
        model, language and feature flags, then validates the body.

        RULES:
        - file_path must point to an existing file (FileNotFoundError otherwise)
        - timestamps_granularity is always "word"
        - Raises ElevenLabsAPIError on non-200 responses and on bodies
          missing text/words

        Args:
            file_path: Path to the audio/video file.
            language_code: ISO 639-1 code; defaults to DEFAULT_LANGUAGE.
            diarize: Enable speaker diarization; defaults to DEFAULT_DIARIZATION.
            on_status: Optional callback for status updates.

        Returns:
            The parsed TranscriptionResult.
        """
        client = self._ensure_client()
        file_path = Path(file_path)
        if not file_path.is_file():
            raise FileNotFoundError("File not found: {}".format(file_path))

        if diarize is None:
            diarize = DEFAULT_DIARIZATION

        form = {
            "model_id": self._model,
            "language_code": language_code or DEFAULT_LANGUAGE,
            "diarize": "true" if diarize else "false",
            "timestamps_granularity": "word",
            "tag_audio_events": "true" if TAG_AUDIO_EVENTS else "false",
        }

        if on_status:
            on_status("Uploading file to ElevenLabs...")
        logger.info("Transcribing %s with model %s", file_path.name, self._model)

        with open(file_path, "rb") as f:
            resp = await client.post(
                "/speech-to-text",
                data=form,
                files={"file": (file_path.name, f)},
            )

        if resp.status_code != 200:
            raise ElevenLabsAPIError(resp.status_code, _error_detail(resp))

        try:
            body = resp.json()
        except ValueError as exc:
            raise ElevenLabsAPIError(
                0, "Invalid response format from ElevenLabs API: body is not JSON"
            ) from exc

        try:
            result = TranscriptionResult.from_dict(body)
        except InvalidResponseError as exc:
            raise ElevenLabsAPIError(0, str(exc)) from exc

        logger.info(
            "Received %d words for %s (language: %s)",
            len(result.words), file_path.name, result.language_code,
        )
        if on_status:
            on_status("  Received {} words".format(len(result.words)))
        return result

    async def validate_api_key(self) -> bool:
        """Check whether the configured API key is accepted.

        HOW: GET /user with a short timeout.

        RULES:
        - True only for a 200 response
        - Any other status or transport failure returns False (logged)
        """
        client = self._ensure_client()
        try:
            resp = await client.get("/user", timeout=_KEY_CHECK_TIMEOUT_S)
        except httpx.HTTPError as exc:
            logger.warning("API key check failed: %s", exc)
            return False

        if resp.status_code != 200:
            logger.warning("API key check rejected with status %d", resp.status_code)
            return False
        return True
