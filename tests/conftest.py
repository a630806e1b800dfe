"""Shared test fixtures for the srt_generator test suite.

WHY: Several test modules need the same realistic ElevenLabs response:
two diarized speakers, a spacing token between every word, an audio
event, and a long pause. Centralizing it keeps expectations consistent.

HOW: Pytest fixtures provide the raw response dict, the parsed
Transcript, the SRT it must produce at a 30-character limit, and a
factory for building Word lists by hand.

RULES:
- The sample response mirrors the shape of POST /v1/speech-to-text
- Speaker "speaker_1" deliberately has no name so the fallback is exercised
"""

from typing import Any, Dict, List, Optional

import pytest

from srt_generator.core.ir import Transcript, Word


def _w(text: str, start: float, end: float, speaker: str, kind: str = "word") -> Dict[str, Any]:
    return {"text": text, "start": start, "end": end, "type": kind, "speaker_id": speaker}


_SAMPLE_RESPONSE: Dict[str, Any] = {
    "language_code": "en",
    "language_probability": 0.98,
    "text": "Welcome back to the show. (laughter) Thanks for having me. Later.",
    "words": [
        _w("Welcome", 0.10, 0.45, "speaker_0"),
        _w(" ", 0.45, 0.50, "speaker_0", "spacing"),
        _w("back", 0.50, 0.80, "speaker_0"),
        _w(" ", 0.80, 0.85, "speaker_0", "spacing"),
        _w("to", 0.85, 0.95, "speaker_0"),
        _w(" ", 0.95, 1.00, "speaker_0", "spacing"),
        _w("the", 1.00, 1.10, "speaker_0"),
        _w(" ", 1.10, 1.15, "speaker_0", "spacing"),
        _w("show.", 1.15, 1.60, "speaker_0"),
        _w(" ", 1.60, 1.70, "speaker_0", "spacing"),
        _w("(laughter)", 1.70, 2.20, "speaker_0", "audio_event"),
        _w(" ", 2.20, 2.40, "speaker_1", "spacing"),
        _w("Thanks", 2.40, 2.70, "speaker_1"),
        _w(" ", 2.70, 2.75, "speaker_1", "spacing"),
        _w("for", 2.75, 2.90, "speaker_1"),
        _w(" ", 2.90, 2.95, "speaker_1", "spacing"),
        _w("having", 2.95, 3.25, "speaker_1"),
        _w(" ", 3.25, 3.30, "speaker_1", "spacing"),
        _w("me.", 3.30, 3.60, "speaker_1"),
        _w(" ", 3.60, 7.00, "speaker_1", "spacing"),
        _w("Later.", 7.00, 7.50, "speaker_1"),
    ],
    "speakers": [
        {"id": "speaker_0", "name": "Host"},
        {"id": "speaker_1"},
    ],
}

_EXPECTED_SAMPLE_SRT = (
    "1\n"
    "00:00:00,100 --> 00:00:02,400\n"
    "[Host] Welcome back to the show. (laughter)\n"
    "\n"
    "2\n"
    "00:00:02,400 --> 00:00:07,000\n"
    "[Speaker speaker_1] Thanks for having me.\n"
    "\n"
    "3\n"
    "00:00:07,000 --> 00:00:07,500\n"
    "[Speaker speaker_1] Later.\n"
    "\n"
)


def _build_words(rows: List[tuple]) -> List[Word]:
    words = []  # type: List[Word]
    for row in rows:
        speaker: Optional[str] = row[3] if len(row) > 3 else None
        words.append(Word(text=row[0], start=row[1], end=row[2], speaker_id=speaker))
    return words


@pytest.fixture
def sample_response():
    """A fresh copy of the sample ElevenLabs response."""
    return {
        **_SAMPLE_RESPONSE,
        "words": [dict(w) for w in _SAMPLE_RESPONSE["words"]],
        "speakers": [dict(s) for s in _SAMPLE_RESPONSE["speakers"]],
    }


@pytest.fixture
def sample_transcript(sample_response):
    """The sample response parsed into a Transcript."""
    return Transcript.from_dict(sample_response)


@pytest.fixture
def expected_sample_srt():
    """The SRT generated from the sample response with char_limit=30."""
    return _EXPECTED_SAMPLE_SRT


@pytest.fixture
def make_words():
    """Factory building Words from (text, start, end[, speaker_id]) tuples."""
    return _build_words
