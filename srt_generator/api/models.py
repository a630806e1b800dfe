"""ElevenLabs speech-to-text response dataclass.

WHY: The speech-to-text endpoint returns one JSON object holding the full
text, the detected language, a word array and (with diarization) a
speaker array. A typed wrapper validates the parts the pipeline depends
on and keeps the raw word dicts for saving or re-processing.

HOW: TranscriptionResult.from_dict() checks that ``text`` and ``words``
are present; to_transcript() hands the words and speakers to the engine's
Transcript parser.

RULES:
- text and words are required; a response without them is rejected
- language_code is None when the API did not report one
- speakers defaults to [] (the API omits it without diarization)
- Word-level validation happens in Transcript.from_dict, not here
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from srt_generator.core.ir import Transcript


class InvalidResponseError(ValueError):
    """Raised when an API response body lacks required fields."""


@dataclass
class TranscriptionResult:
    """Parsed body of POST /v1/speech-to-text.

    RULES:
    - words: raw word dicts ({text, start, end, type, speaker_id, ...})
    - speakers: raw speaker dicts ({id, name})
    """

    text: str
    words: List[Dict[str, Any]]
    language_code: str | None = None
    speakers: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> TranscriptionResult:
        """Parse a TranscriptionResult from a raw API response dict.

        Raises:
            InvalidResponseError: If the body is empty or misses text/words.
        """
        if not data:
            raise InvalidResponseError("Empty response from ElevenLabs API")
        if not isinstance(data, dict):
            raise InvalidResponseError(
                "Invalid response format from ElevenLabs API: expected an object"
            )
        if "text" not in data:
            raise InvalidResponseError(
                "Invalid response format from ElevenLabs API: missing text"
            )
        if not isinstance(data.get("words"), list):
            raise InvalidResponseError(
                "Invalid response format from ElevenLabs API: missing words"
            )
        return cls(
            text=data["text"],
            words=data["words"],
            language_code=data.get("language_code"),
            speakers=list(data.get("speakers") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-ready form used when saving the response."""
        return {
            "text": self.text,
            "language_code": self.language_code,
            "words": self.words,
            "speakers": self.speakers,
        }

    def to_transcript(self) -> Transcript:
        """Build the engine input from this response.

        Raises:
            InvalidInputError: If any word is malformed.
        """
        return Transcript.from_dict({"words": self.words, "speakers": self.speakers})
