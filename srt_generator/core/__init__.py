"""Transcript-to-subtitle engine: segmentation, re-timing and SRT output.

WHY: Callers (CLI, processor, tests) need one call that turns a parsed
transcript into SRT text, without knowing the pass order.

HOW: generate_srt() runs the three passes in a fixed order:
segment_words() -> stitch_cues() -> serialize_cues(). Each pass is also
exported on its own so it can be tested and reused in isolation.

RULES:
- Pure: no I/O, no logging, no global state. Tunables are parameters
- Errors (InvalidInputError, MalformedTimestampError) propagate whole
- Segmentation decisions never see stitched times
"""

from __future__ import annotations

from srt_generator.core.ir import Cue, InvalidInputError, SpeakerTable, Transcript, Word
from srt_generator.core.segmenter import GAP_THRESHOLD_S, segment_words
from srt_generator.core.serializer import serialize_cues
from srt_generator.core.stitcher import stitch_cues
from srt_generator.core.timecode import (
    MalformedTimestampError,
    format_timestamp,
    parse_timestamp,
)

__all__ = [
    "Cue",
    "GAP_THRESHOLD_S",
    "InvalidInputError",
    "MalformedTimestampError",
    "SpeakerTable",
    "Transcript",
    "Word",
    "format_timestamp",
    "generate_srt",
    "parse_timestamp",
    "segment_words",
    "serialize_cues",
    "stitch_cues",
]


def generate_srt(
    transcript: Transcript,
    char_limit: int,
    gap_threshold_s: float = GAP_THRESHOLD_S,
) -> str:
    """Convert a transcript into SRT text.

    Args:
        transcript: Parsed words and speaker names.
        char_limit: Split trigger for cue length (see segment_words).
        gap_threshold_s: Maximum silence inside one cue, in seconds.

    Returns:
        SRT content; "" when the transcript has no words.

    Raises:
        InvalidInputError: If char_limit or gap_threshold_s is invalid.
    """
    cues = segment_words(transcript.words, char_limit, gap_threshold_s)
    return serialize_cues(stitch_cues(cues), transcript.speakers)
