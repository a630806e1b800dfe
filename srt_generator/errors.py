"""Translate pipeline exceptions into user-facing messages.

WHY: The engine and the API client raise precise, typed exceptions. A
person running the tool needs a short summary and a concrete next step
instead of a traceback.

HOW: describe_error() inspects the exception type (and the HTTP status
for API errors) and returns an ErrorInfo with a message and a
troubleshooting hint. The CLI prints both.

RULES:
- Checks go from most to least specific; the fallback keeps the
  exception's own message
- SRTProcessingError is described by its cause when the cause is a known
  input problem, so bad transcription data is reported as such
- Never raises
"""

from __future__ import annotations

import json
from dataclasses import dataclass

import httpx

from srt_generator.api.client import ElevenLabsAPIError
from srt_generator.config import CHAR_LIMIT_MAX, CHAR_LIMIT_MIN, SUPPORTED_FORMATS
from srt_generator.core import InvalidInputError
from srt_generator.processor import MediaValidationError, SRTProcessingError


@dataclass(frozen=True)
class ErrorInfo:
    """A user-facing error summary with a suggested fix."""

    message: str
    troubleshooting: str


def _describe_api_error(exc: ElevenLabsAPIError) -> ErrorInfo:
    status = exc.status_code
    if status == 401:
        return ErrorInfo(
            "Invalid API key",
            "Please check ELEVENLABS_API_KEY in your .env file. You can get "
            "your API key from https://elevenlabs.io/settings",
        )
    if status == 429:
        return ErrorInfo(
            "Rate limit exceeded",
            "You have exceeded the API rate limit. Please wait a few minutes "
            "before trying again.",
        )
    if status == 413:
        return ErrorInfo(
            "File too large",
            "The selected file is too large. Please try with a smaller file "
            "or compress it first.",
        )
    if status == 422:
        return ErrorInfo(
            "Invalid file or parameters: {}".format(exc.message),
            "The file format may not be supported, the file may be corrupted, "
            "or the audio quality may be too low. Supported formats: {}.".format(
                ", ".join(sorted(SUPPORTED_FORMATS))
            ),
        )
    if status >= 500:
        return ErrorInfo(
            "ElevenLabs service unavailable",
            "The ElevenLabs service is temporarily unavailable. Please try "
            "again later.",
        )
    return ErrorInfo(
        "ElevenLabs API error: {}".format(exc.message),
        "Please try again. If the problem persists, check your API key and "
        "the ElevenLabs status page.",
    )


def describe_error(exc: BaseException) -> ErrorInfo:
    """Return a user-facing ErrorInfo for any pipeline exception."""
    if isinstance(exc, SRTProcessingError) and isinstance(exc.__cause__, InvalidInputError):
        exc = exc.__cause__

    if isinstance(exc, FileNotFoundError):
        return ErrorInfo(
            "File not found",
            "Please ensure the file exists and you have permission to access it.",
        )
    if isinstance(exc, PermissionError):
        return ErrorInfo(
            "Permission denied",
            "Please check file and output directory permissions.",
        )
    if isinstance(exc, ElevenLabsAPIError):
        return _describe_api_error(exc)
    if isinstance(exc, httpx.TimeoutException):
        return ErrorInfo(
            "Request timed out",
            "The request took too long to complete. This may be due to a large "
            "file or a slow connection. Please try again.",
        )
    if isinstance(exc, httpx.TransportError):
        return ErrorInfo(
            "Network connection failed",
            "Please check your internet connection and try again. If you are "
            "behind a firewall, ensure HTTPS requests to elevenlabs.io are allowed.",
        )
    if isinstance(exc, MediaValidationError):
        return ErrorInfo(
            str(exc),
            "Choose a readable audio or video file under the size limit. "
            "Supported formats: {}.".format(", ".join(sorted(SUPPORTED_FORMATS))),
        )
    if isinstance(exc, InvalidInputError):
        return ErrorInfo(
            str(exc),
            "The transcription data is incomplete. Re-run the transcription, or "
            "check the saved JSON file for words without start/end times.",
        )
    if isinstance(exc, SRTProcessingError):
        return ErrorInfo(
            "SRT processing failed",
            "There was an error writing the subtitle file. Please check the "
            "output directory and try again.",
        )
    if isinstance(exc, json.JSONDecodeError):
        return ErrorInfo(
            "Transcription file is not valid JSON: {}".format(exc),
            "Check the saved transcription file. It must be the JSON saved by "
            "--save-json or exported from ElevenLabs.",
        )
    if isinstance(exc, ValueError):
        return ErrorInfo(
            str(exc),
            "Check your settings. The character limit must be between {} and {}.".format(
                CHAR_LIMIT_MIN, CHAR_LIMIT_MAX
            ),
        )
    return ErrorInfo(
        str(exc) or "An unexpected error occurred",
        "Please try again. If the problem persists, check your internet "
        "connection and API key settings.",
    )
