"""Media validation, output path resolution and SRT write-back.

WHY: The engine returns SRT text and never touches the disk. Around it
the application needs three things: reject files the API cannot take
before uploading them, pick a safe, non-clobbering output filename, and
write the result.

HOW: validate_media_file() checks existence, type, readability, size and
extension. build_output_path() sanitizes the source stem and resolves a
free ``{stem}.srt`` inside the output directory. process_transcription()
parses provider data, runs generate_srt() and writes the file.

RULES:
- Existing output files are never overwritten: a numeric suffix is added
  (interview.srt -> interview-2.srt -> interview-3.srt)
- The output directory is created if missing
- Filenames, suffix included, fit in 255 bytes of UTF-8
- Output is UTF-8
- Any failure inside process_transcription() is re-raised as
  SRTProcessingError chained to its cause
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

from srt_generator.config import MAX_FILE_SIZE_BYTES, SUPPORTED_FORMATS
from srt_generator.core import Transcript, generate_srt

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00]')
_MAX_FILENAME_BYTES = 255


class MediaValidationError(ValueError):
    """Raised when an input media file cannot be sent for transcription."""


class SRTProcessingError(Exception):
    """Raised when SRT generation or writing fails.

    The original exception is always available as ``__cause__``.
    """


def format_file_size(size: int) -> str:
    """Return a human-readable size, e.g. ``"1.5 MB"``."""
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(units) - 1:
        value /= 1024
        unit += 1
    return "{:g} {}".format(round(value, 2), units[unit])


def validate_media_file(
    file_path: Path,
    max_size: int = MAX_FILE_SIZE_BYTES,
) -> Path:
    """Check that a media file can be uploaded for transcription.

    RULES:
    - Missing path -> FileNotFoundError
    - Directory, unreadable file, oversize file or unsupported extension
      -> MediaValidationError

    Args:
        file_path: Path to the audio/video file.
        max_size: Maximum accepted size in bytes.

    Returns:
        The resolved path.
    """
    path = Path(file_path).expanduser().resolve()

    if not path.exists():
        raise FileNotFoundError("File not found: {}".format(path))
    if not path.is_file():
        raise MediaValidationError("Path is not a file: {}".format(path))
    if not os.access(path, os.R_OK):
        raise MediaValidationError("File is not readable: {}".format(path))

    size = path.stat().st_size
    if size > max_size:
        raise MediaValidationError(
            "File is too large ({}, maximum {})".format(
                format_file_size(size), format_file_size(max_size)
            )
        )

    ext = path.suffix.lower()
    if ext not in SUPPORTED_FORMATS:
        raise MediaValidationError(
            "Unsupported file format '{}'. Supported formats: {}".format(
                ext, ", ".join(sorted(SUPPORTED_FORMATS))
            )
        )

    logger.debug("Validated %s (%s)", path.name, format_file_size(size))
    return path


def _truncate_utf8(text: str, max_bytes: int) -> str:
    """Cut text to at most max_bytes of UTF-8 without splitting a character."""
    return text.encode("utf-8")[:max_bytes].decode("utf-8", "ignore")


def sanitize_filename(name: str, max_bytes: int = _MAX_FILENAME_BYTES) -> str:
    """Make a string safe to use as a single filename.

    Replaces path separators and reserved characters with "_", strips
    leading dots, collapses whitespace, and caps the UTF-8 length at
    max_bytes (filesystems limit names in bytes, not characters).
    """
    cleaned = _UNSAFE_FILENAME_CHARS.sub("_", name)
    cleaned = cleaned.lstrip(".")
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return _truncate_utf8(cleaned, max_bytes).rstrip()


def build_output_path(input_path: Path, output_dir: Path) -> Path:
    """Resolve a free ``{stem}.srt`` path inside output_dir.

    Args:
        input_path: The source media (or transcription JSON) path.
        output_dir: Directory for the SRT; created if missing.

    Returns:
        A Path that does not yet exist.

    Raises:
        NotADirectoryError: If output_dir exists but is not a directory.
    """
    output_dir = Path(output_dir).expanduser()
    if output_dir.exists() and not output_dir.is_dir():
        raise NotADirectoryError("Output path is not a directory: {}".format(output_dir))
    output_dir.mkdir(parents=True, exist_ok=True)

    stem = sanitize_filename(Path(input_path).stem) or "subtitles"
    candidate = output_dir / _fit_name(stem, ".srt")
    counter = 2
    while candidate.exists():
        candidate = output_dir / _fit_name(stem, "-{}.srt".format(counter))
        counter += 1
    return candidate


def _fit_name(stem: str, suffix: str) -> str:
    """Join stem and suffix, shortening the stem so the name fits in 255 bytes."""
    room = _MAX_FILENAME_BYTES - len(suffix.encode("utf-8"))
    return _truncate_utf8(stem, room).rstrip() + suffix


def process_transcription(
    data: Any,
    input_path: Path,
    char_limit: int,
    output_dir: Path,
) -> Path:
    """Generate an SRT file from transcription data and save it.

    WHY: This is the single write-back step shared by the live API path
    and the saved-JSON path of the CLI.

    Args:
        data: Provider dict with ``words`` and optional ``speakers``.
        input_path: Source file, used to name the output.
        char_limit: Cue split trigger passed to the engine.
        output_dir: Where to save the SRT.

    Returns:
        Path of the written SRT file.

    Raises:
        SRTProcessingError: On any parse, generation or write failure.
    """
    try:
        transcript = Transcript.from_dict(data)
        srt = generate_srt(transcript, char_limit)
        output_path = build_output_path(input_path, output_dir)
        output_path.write_text(srt, encoding="utf-8")
    except (ValueError, OSError) as exc:
        raise SRTProcessingError("SRT processing failed: {}".format(exc)) from exc

    logger.info(
        "Wrote %d words as SRT to %s", len(transcript.words), output_path
    )
    return output_path
