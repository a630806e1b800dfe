"""Group timed words into subtitle cues.

WHY: A transcript is an unbounded stream of words. Viewers need it cut
into short cues that belong to one speaker, do not bridge long silences,
and stay readable on one line.

HOW: A single left-to-right pass keeps one open cue. Before each word is
appended, four conditions are checked in priority order; the first that
holds closes the open cue and starts a new one with the current word:
  1. there is no open cue yet
  2. the word carries a speaker id different from the cue's speaker id
  3. the silence since the cue's end exceeds the gap threshold
  4. the cue's text is already longer than char_limit
Otherwise the word is appended with a single space.

RULES:
- char_limit is a trigger threshold, not a cap. Length is checked before
  the incoming word is added, so a cue can exceed char_limit by up to one
  word. Do not turn this into a hard cap.
- A word without a speaker id never forces a split (condition 2 only
  applies when the word has an id)
- A cue's speaker id is taken from its first word and never updated
- Cue indices start at 1 and follow emission order
- Words must be in non-decreasing start order (caller precondition)
- No I/O, no logging, no shared state: safe to call concurrently
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from srt_generator.core.ir import Cue, InvalidInputError, Word

GAP_THRESHOLD_S = 2.0
"""Default maximum silence (seconds) between a cue's end and the next word."""


class _OpenCue:
    """The cue currently accepting words.

    Not a public class: exists only inside segment_words() so the public
    Cue type can stay frozen.
    """

    __slots__ = ("index", "start", "end", "text", "speaker_id")

    def __init__(self, index: int, word: Word) -> None:
        self.index = index
        self.start = word.start
        self.end = word.end
        self.text = word.text
        self.speaker_id = word.speaker_id

    def append(self, word: Word) -> None:
        self.text += " " + word.text
        self.end = word.end

    def freeze(self) -> Cue:
        return Cue(
            index=self.index,
            start=self.start,
            end=self.end,
            text=self.text,
            speaker_id=self.speaker_id,
        )


def _starts_new_cue(
    current: Optional[_OpenCue],
    word: Word,
    char_limit: int,
    gap_threshold_s: float,
) -> bool:
    """Return True if ``word`` must open a new cue instead of joining ``current``."""
    if current is None:
        return True
    if word.speaker_id is not None and word.speaker_id != current.speaker_id:
        return True
    if word.start - current.end > gap_threshold_s:
        return True
    return len(current.text) > char_limit


def segment_words(
    words: Iterable[Word],
    char_limit: int,
    gap_threshold_s: float = GAP_THRESHOLD_S,
) -> List[Cue]:
    """Partition an ordered word stream into numbered cues.

    Args:
        words: Words in non-decreasing start order. May be empty.
        char_limit: Positive integer; a cue whose text is longer than
                    this stops accepting words.
        gap_threshold_s: Maximum silence (seconds) tolerated inside a cue.

    Returns:
        Cues with contiguous 1-based indices, ordered by start time.
        Empty when ``words`` is empty.

    Raises:
        InvalidInputError: If char_limit is not a positive integer or the
            gap threshold is negative.
    """
    if isinstance(char_limit, bool) or not isinstance(char_limit, int) or char_limit < 1:
        raise InvalidInputError(
            "Character limit must be a positive integer, got {!r}".format(char_limit)
        )
    if gap_threshold_s < 0:
        raise InvalidInputError(
            "Gap threshold must not be negative, got {!r}".format(gap_threshold_s)
        )

    cues: List[Cue] = []
    current: Optional[_OpenCue] = None

    for word in words:
        if _starts_new_cue(current, word, char_limit, gap_threshold_s):
            if current is not None:
                cues.append(current.freeze())
            current = _OpenCue(len(cues) + 1, word)
        else:
            current.append(word)

    if current is not None:
        cues.append(current.freeze())

    return cues
