"""SRT Generator: speaker-labelled subtitles from word-level transcriptions.

WHY: Speech-to-text services return a flat list of timed words. Video
editors need numbered, readable subtitle cues. This package turns one
into the other.

HOW: Three-stage pipeline: transcribe (ElevenLabs API client), segment
and re-time (core engine), write (processor). Each stage is
independently testable; the core engine is pure and does no I/O.

RULES:
- The engine (srt_generator.core) never imports config, api or processor
- Transcript is the stable contract between transcription and formatting
"""

__version__ = "0.1.0"
