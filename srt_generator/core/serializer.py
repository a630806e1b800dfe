"""Render cues as SRT text.

WHY: SRT is the subtitle format every video editor and player accepts.
The byte layout has to be exact: players are strict about the index line,
the ``-->`` timing line and the blank separator.

HOW: Each cue becomes a four-line block: index, timing line, one text
line, blank line. A cue with a speaker id gets a ``[Name] `` prefix using
the speaker table's display name.

RULES:
- Block layout: "{index}\\n{start} --> {end}\\n{text}\\n\\n"
- Text is stripped of leading/trailing whitespace; inner spacing is kept
- Speaker names fall back to "Speaker {id}" for ids not in the table
- No speaker id means no prefix at all
- Empty cue list renders as ""
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence

from srt_generator.core.ir import Cue, SpeakerTable
from srt_generator.core.timecode import format_timestamp


def _cue_text(cue: Cue, speakers: SpeakerTable) -> str:
    text = cue.text.strip()
    if cue.speaker_id is None:
        return text
    return "[{}] {}".format(speakers.display_name(cue.speaker_id), text)


def serialize_cues(
    cues: Sequence[Cue],
    speakers: Optional[Mapping[str, str]] = None,
) -> str:
    """Serialize cues into SRT file content.

    Args:
        cues: Cues in index order (normally already stitched).
        speakers: SpeakerTable or plain id -> name mapping. None means no
                  names are known and every speaker uses the fallback.

    Returns:
        The complete SRT text.
    """
    if not isinstance(speakers, SpeakerTable):
        speakers = SpeakerTable(speakers)

    blocks: List[str] = []
    for cue in cues:
        blocks.append("{}\n{} --> {}\n{}\n\n".format(
            cue.index,
            format_timestamp(cue.start),
            format_timestamp(cue.end),
            _cue_text(cue, speakers),
        ))
    return "".join(blocks)
