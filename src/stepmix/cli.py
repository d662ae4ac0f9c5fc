"""
Command-line front end.

Copyright (c) 2026 stepmix contributors

MIT License

Usage:
    stepmix groove.txt                      # loop on the default device
    stepmix groove.txt --once --bpm 96      # play one measure
    stepmix groove.txt -o groove.wav --repeats 4
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from stepmix import __version__
from stepmix.errors import StepmixError
from stepmix.instrumentation import Instrumentation
from stepmix.logger import get_logger, set_global_logging
from stepmix.pattern import Pattern
from stepmix.playback import play_once, play_repeat, render_to_file
from stepmix.tempo import Tempo

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def _tempo(text: str) -> Tempo:
    try:
        return Tempo(int(text))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid BPM {text!r}: {exc}")


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _device(text: str) -> Union[int, str]:
    return int(text) if text.isdigit() else text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stepmix",
        description="Play or export a step-sequencer pattern using sample files.",
    )
    parser.add_argument("pattern", type=Path, help="Pattern file, one track per line")
    parser.add_argument(
        "--samples",
        "-s",
        type=Path,
        default=None,
        help="Directory holding the sample files (default: the pattern's directory)",
    )
    parser.add_argument(
        "--instrumentation",
        "-i",
        type=Path,
        default=None,
        help="JSON file mapping sample files to instruments "
        "(default: <instrument>.wav for each instrument)",
    )
    parser.add_argument(
        "--bpm",
        "-b",
        type=_tempo,
        default=Tempo(120),
        help="Tempo in beats per minute (default: 120)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Play a single measure instead of looping",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write a WAV file instead of playing",
    )
    parser.add_argument(
        "--repeats",
        "-r",
        type=_positive_int,
        default=1,
        help="Measures to write with --output (default: 1)",
    )
    parser.add_argument(
        "--device",
        "-d",
        type=_device,
        default=None,
        help="Output device index or name (default: system default)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(args: argparse.Namespace) -> int:
    """Load, bind and mix the pattern, then play or export it."""
    pattern = Pattern.parse(args.pattern)
    beats = len(pattern)
    if beats == 0:
        logger.error(f"{args.pattern} contains no tracks")
        return EXIT_ERROR

    if args.instrumentation is not None:
        instrumentation = Instrumentation.from_json(args.instrumentation)
    else:
        instrumentation = Instrumentation.from_pattern(pattern)

    samples_dir = args.samples if args.samples is not None else args.pattern.parent
    tempo = args.bpm
    mix = pattern.bind(instrumentation).sources(samples_dir).mix(tempo)

    if args.output is not None:
        render_to_file(tempo, mix, beats, args.output, repeats=args.repeats)
    elif args.once:
        play_once(tempo, mix, beats, device=args.device)
    else:
        play_repeat(tempo, mix, beats, device=args.device)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    set_global_logging(level=args.log_level)

    try:
        return run(args)
    except StepmixError as exc:
        logger.error(str(exc))
        return EXIT_ERROR
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
