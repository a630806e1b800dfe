"""Command-line interface for the SRT Generator.

WHY: Users need a single command that turns an audio/video file into an
SRT subtitle file. The CLI wires together file validation, the
ElevenLabs transcription call, the segmentation engine, and saving.

HOW: Uses argparse for the input path, character limit, language,
diarization and output options. Runs the async pipeline via
asyncio.run(). Progress goes to stderr stage by stage (validation,
upload, processing, srt-generation, complete). Errors are translated by
errors.describe_error() into a message plus a troubleshooting hint.

RULES:
- Positional argument: media file, or a saved transcription JSON with --from-json
- --char-limit is checked against the product range before any API call
- Saved JSON input never touches the API (no key required)
- --save-json writes the raw API response next to the SRT as {stem}.json
- --check-key only validates the API key and exits (0 valid, 1 invalid)
- Status output goes to stderr (not stdout)
- Exit codes: 0 success, 1 error, 130 cancelled
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

from srt_generator.api.client import ElevenLabsClient
from srt_generator.config import (
    CHAR_LIMIT_MAX,
    CHAR_LIMIT_MIN,
    DEFAULT_CHAR_LIMIT,
    DEFAULT_DIARIZATION,
    DEFAULT_LANGUAGE,
    DEFAULT_OUTPUT_DIR,
    validate_char_limit,
)
from srt_generator.errors import describe_error
from srt_generator.processor import process_transcription, validate_media_file


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed so it shows immediately."""
    print(msg, file=sys.stderr, flush=True)


def _stage(name: str, percentage: int, message: str) -> None:
    _status("[{:>3}%] {}: {}".format(percentage, name, message))


def _fail(exc: BaseException) -> None:
    """Print a described error to stderr and exit 1."""
    info = describe_error(exc)
    print("Error: {}".format(info.message), file=sys.stderr)
    print("  {}".format(info.troubleshooting), file=sys.stderr)
    sys.exit(1)


def _char_limit_arg(value: str) -> int:
    """argparse type for --char-limit."""
    try:
        return validate_char_limit(int(value))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _save_json(data: dict, srt_path: Path) -> Path:
    """Save the raw transcription next to the SRT, without overwriting."""
    path = srt_path.with_suffix(".json")
    counter = 2
    while path.exists():
        path = srt_path.with_name("{}-{}.json".format(srt_path.stem, counter))
        counter += 1
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


async def _transcribe(args: argparse.Namespace, input_path: Path) -> dict:
    """Upload the media file and return the raw transcription dict."""
    _stage("upload", 30, "Uploading file to ElevenLabs...")
    async with ElevenLabsClient() as client:
        result = await client.transcribe_file(
            input_path,
            language_code=args.language,
            diarize=args.diarization,
            on_status=_status,
        )
    return result.to_dict()


async def _check_key() -> bool:
    async with ElevenLabsClient() as client:
        return await client.validate_api_key()


def _run_pipeline(args: argparse.Namespace) -> Path:
    """Execute validation, transcription, SRT generation and saving.

    Returns:
        Path of the saved SRT file.
    """
    output_dir = Path(args.output_dir).expanduser() if args.output_dir else DEFAULT_OUTPUT_DIR

    _stage("validation", 10, "Validating file...")
    if args.from_json:
        input_path = Path(args.input_file).expanduser().resolve()
        with open(input_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        input_path = validate_media_file(Path(args.input_file))
        data = asyncio.run(_transcribe(args, input_path))

    _stage("processing", 70, "Processing transcription...")
    _stage("srt-generation", 90, "Generating SRT file (limit {} chars)...".format(
        args.char_limit
    ))
    srt_path = process_transcription(data, input_path, args.char_limit, output_dir)

    if args.save_json and not args.from_json:
        json_path = _save_json(data, srt_path)
        _status("  Saved transcription: {}".format(json_path))

    _stage("complete", 100, "Transcription completed successfully!")
    _status("  Saved: {}".format(srt_path))
    return srt_path


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="srt_generator",
        description="Transcribe audio/video files with ElevenLabs and write "
                    "speaker-labelled SRT subtitles.",
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        help="Path to the audio/video file (or transcription JSON with --from-json).",
    )

    parser.add_argument(
        "--char-limit",
        type=_char_limit_arg,
        default=DEFAULT_CHAR_LIMIT,
        help="Characters after which a new subtitle is started "
             "({}-{}, default: %(default)s).".format(CHAR_LIMIT_MIN, CHAR_LIMIT_MAX),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save the SRT file (default: {}).".format(DEFAULT_OUTPUT_DIR),
    )

    parser.add_argument(
        "--language",
        default=DEFAULT_LANGUAGE,
        help="Language ISO 639-1 code sent to ElevenLabs (default: %(default)s).",
    )

    parser.add_argument(
        "--diarization",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_DIARIZATION,
        help="Enable speaker diarization (default: %(default)s).",
    )

    parser.add_argument(
        "--from-json",
        action="store_true",
        help="Treat input_file as a saved ElevenLabs transcription JSON; skip the API.",
    )

    parser.add_argument(
        "--save-json",
        action="store_true",
        help="Also save the raw transcription JSON next to the SRT file.",
    )

    parser.add_argument(
        "--check-key",
        action="store_true",
        help="Validate the configured ElevenLabs API key and exit.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.check_key:
            if asyncio.run(_check_key()):
                _status("API key is valid.")
                return
            _status("API key was rejected by ElevenLabs.")
            sys.exit(1)

        if not args.input_file:
            parser.error("input_file is required unless --check-key is given")

        _run_pipeline(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except Exception as exc:
        _fail(exc)


if __name__ == "__main__":
    main()
