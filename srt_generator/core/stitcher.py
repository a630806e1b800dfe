"""Close display gaps between consecutive cues.

WHY: The segmenter ends each cue at the end of its last word, so the
screen goes blank during every pause between cues. Subtitles read more
smoothly when each cue stays visible until the next one appears.

HOW: A second pass over the finished cue list. Every cue except the last
gets its end moved to the next cue's start. The last cue keeps the end
of its final word, since there is no successor to borrow from.

RULES:
- Pure: returns new Cue objects, never mutates the input list or cues
- Only ``end`` changes; index, start, text and speaker_id are kept
- Runs after segmentation so stitched times never influence splits
- Fewer than two cues pass through unchanged
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence

from srt_generator.core.ir import Cue


def stitch_cues(cues: Sequence[Cue]) -> List[Cue]:
    """Extend each cue's end to its successor's start.

    Args:
        cues: Cues ordered by start time, as produced by segment_words().

    Returns:
        A new list where ``result[i].end == result[i + 1].start`` for every
        cue but the last.
    """
    if len(cues) < 2:
        return list(cues)

    stitched = [
        replace(cue, end=following.start)
        for cue, following in zip(cues, cues[1:])
    ]
    stitched.append(cues[-1])
    return stitched
