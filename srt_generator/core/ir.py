"""Intermediate representation for transcripts and subtitle cues.

WHY: The transcription provider returns loosely typed JSON: word dicts
with optional fields, a speaker list that may be missing, and whitespace
tokens mixed in with real words. The segmentation engine needs a strict,
immutable input so that bad timing fails loudly instead of silently
corrupting every cue that follows it.

HOW: Four types form the model:
  Word         - one timed token with an optional speaker id
  SpeakerTable - speaker id -> display name, with a "Speaker {id}" fallback
  Transcript   - the ordered words plus the speaker table
  Cue          - one numbered subtitle entry produced by the segmenter
Transcript.from_dict() validates provider dicts and raises
InvalidInputError on anything structurally malformed.

RULES:
- All times are float seconds
- speaker_id is None when the provider did not diarize the word; it is
  never replaced by a sentinel string
- Words must arrive in non-decreasing start order. This is a caller
  precondition and is not re-validated here
- Word, Transcript and Cue are frozen; the stitcher builds new Cues
  instead of mutating old ones
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

# Provider token types that carry no spoken content.
_SKIPPED_WORD_TYPES = frozenset({"spacing"})


class InvalidInputError(ValueError):
    """Raised when transcript input or engine parameters are malformed.

    WHY: Guessing a default for a missing start or end time would shift
    every later cue. Failing fast gives the caller something actionable.

    RULES:
    - Message names the offending word index when one is involved
    - Subclasses ValueError so generic config-error handling catches it
    """


@dataclass(frozen=True)
class Word:
    """A single timed token from the transcription provider.

    RULES:
    - start >= 0 and end >= start (enforced by from_dict, not __init__)
    - speaker_id: provider speaker label, or None without diarization
    """

    text: str
    start: float
    end: float
    speaker_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, position: int = 0) -> Word:
        """Parse a Word from a provider word dict.

        WHY: Provider word objects use "text" (ElevenLabs) or "word"
        (older exports) for the token, and timing may be missing on
        malformed responses.

        HOW: Looks up text, start, end and speaker_id, coercing numbers
        with float(). Any missing or unusable field raises.

        Args:
            data: The raw word mapping.
            position: Index of the word in the input list, for messages.

        Returns:
            A validated Word.

        Raises:
            InvalidInputError: If the word is not a mapping, lacks text,
                lacks start/end, or has impossible timing.
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                "Invalid transcription data: word {} is not an object".format(position)
            )

        text = data.get("text", data.get("word"))
        if text is None:
            raise InvalidInputError(
                "Invalid transcription data: word {} has no text".format(position)
            )

        start = _require_time(data, "start", position)
        end = _require_time(data, "end", position)
        if start < 0:
            raise InvalidInputError(
                "Invalid transcription data: word {} starts before zero ({})".format(
                    position, start
                )
            )
        if end < start:
            raise InvalidInputError(
                "Invalid transcription data: word {} ends before it starts "
                "({} < {})".format(position, end, start)
            )

        speaker_id = data.get("speaker_id")
        return cls(
            text=str(text),
            start=start,
            end=end,
            speaker_id=str(speaker_id) if speaker_id is not None else None,
        )


def _require_time(data: Mapping, key: str, position: int) -> float:
    """Return data[key] as float, raising InvalidInputError if unusable."""
    value = data.get(key)
    if value is None or isinstance(value, bool):
        raise InvalidInputError(
            "Invalid transcription data: word {} is missing '{}'".format(position, key)
        )
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(
            "Invalid transcription data: word {} has non-numeric '{}': {!r}".format(
                position, key, value
            )
        ) from exc
    if not math.isfinite(result):
        raise InvalidInputError(
            "Invalid transcription data: word {} has non-finite '{}': {!r}".format(
                position, key, value
            )
        )
    return result


class SpeakerTable(Mapping):
    """Read-only mapping from speaker id to display name.

    WHY: Diarized providers label speakers with opaque ids ("speaker_0").
    Captions need a readable name, and an id with no entry still needs a
    stable label rather than a KeyError.

    HOW: Wraps a plain dict. display_name() is the lookup the serializer
    uses; it falls back to "Speaker {id}" for unknown ids and blank names.
    """

    def __init__(self, names: Optional[Mapping[str, str]] = None) -> None:
        self._names: Dict[str, str] = dict(names or {})

    @classmethod
    def from_list(cls, speakers: Optional[Iterable[Any]]) -> SpeakerTable:
        """Build a table from a provider ``[{"id": ..., "name": ...}]`` list.

        Entries without an id are ignored. Entries without a name are
        kept out of the table so display_name() synthesizes the label.
        """
        names: Dict[str, str] = {}
        for entry in speakers or []:
            if not isinstance(entry, Mapping) or entry.get("id") is None:
                continue
            name = entry.get("name")
            if name:
                names[str(entry["id"])] = str(name)
        return cls(names)

    def display_name(self, speaker_id: str) -> str:
        name = self._names.get(speaker_id)
        if not name:
            return "Speaker {}".format(speaker_id)
        return name

    def __getitem__(self, speaker_id: str) -> str:
        return self._names[speaker_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return "SpeakerTable({!r})".format(self._names)


@dataclass(frozen=True)
class Transcript:
    """The complete engine input: ordered words plus speaker names.

    RULES:
    - words: ordered by start (caller precondition)
    - speakers: may be empty; unknown ids still render via the fallback
    """

    words: Tuple[Word, ...]
    speakers: SpeakerTable = field(default_factory=SpeakerTable)

    @classmethod
    def from_dict(cls, data: Any) -> Transcript:
        """Parse a provider transcription dict into a Transcript.

        WHY: Both the live API response and saved JSON exports share the
        ``{"words": [...], "speakers": [...]}`` shape.

        HOW: Validates the words array, drops whitespace-only provider
        tokens (type "spacing"), parses each remaining word and builds the
        speaker table.

        Raises:
            InvalidInputError: If the words array is missing or any word
                is malformed.
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError("Invalid transcription data: expected an object")

        raw_words = data.get("words")
        if not isinstance(raw_words, list):
            raise InvalidInputError("Invalid transcription data: missing words array")

        words: List[Word] = []
        for position, raw in enumerate(raw_words):
            if isinstance(raw, Mapping) and raw.get("type") in _SKIPPED_WORD_TYPES:
                continue
            words.append(Word.from_dict(raw, position))

        return cls(
            words=tuple(words),
            speakers=SpeakerTable.from_list(data.get("speakers")),
        )


@dataclass(frozen=True)
class Cue:
    """One numbered subtitle entry.

    RULES:
    - index: 1-based, contiguous across a cue list
    - end >= start
    - speaker_id is taken from the cue's first word and never changes
    - text: words joined by single spaces
    """

    index: int
    start: float
    end: float
    text: str
    speaker_id: Optional[str] = None
