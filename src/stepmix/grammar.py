"""
Track grammar for pattern files.

Each non-blank line of a pattern file declares one track:

    <instrument> <step-token>+ [<amplitude>]

for example

    hi-hat |x-x-|x-x-|x-x-|x-x-| 0.5

The parser is a small recursive-descent parser. Every rule takes the
remaining input and returns ``(value, rest)``; a rule that does not match
raises GrammarError.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations

import re
from typing import Optional

from stepmix.steps import Steps, PLAY_VELOCITY, REFERENCE_FREQUENCY

WHITESPACE = " \t"

# Step tokens
STEP_PLAY = "x"
STEP_SILENT = "-"
SEPARATOR = "|"

# Chromatic note names starting at A4. Flats share a semitone with the
# preceding sharp.
_NOTE_SEMITONES = {
    "A": 0,
    "A#": 1, "Bb": 1,
    "B": 2,
    "C": 3,
    "C#": 4, "Db": 4,
    "D": 5,
    "D#": 6, "Eb": 6,
    "E": 7,
    "F": 8,
    "F#": 9, "Gb": 9,
    "G": 10,
    "G#": 11, "Ab": 11,
}


def _equal_tempered(semitones_above_a4: int) -> float:
    return round(REFERENCE_FREQUENCY * 2.0 ** (semitones_above_a4 / 12.0), 2)


NOTE_FREQUENCIES: dict[str, float] = {
    name: _equal_tempered(semitones) for name, semitones in _NOTE_SEMITONES.items()
}

# D plays softer than the other notes; every other note is at full velocity.
NOTE_VELOCITIES: dict[str, int] = {
    name: 0x3F if name == "D" else PLAY_VELOCITY for name in _NOTE_SEMITONES
}

# Longest tokens first so "A#" is never read as "A" followed by "#".
_STEP_TOKENS = sorted(
    [STEP_PLAY, STEP_SILENT, SEPARATOR, *NOTE_FREQUENCIES],
    key=len,
    reverse=True,
)

_FLOAT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class GrammarError(ValueError):
    """A grammar rule did not match its input."""

    def __init__(self, rule: str, text: str, message: str):
        self.rule = rule
        self.text = text
        super().__init__(f"{rule}: {message} at {text[:20]!r}")


def skip_whitespace(text: str) -> str:
    """Consume zero or more spaces and tabs."""
    return text.lstrip(WHITESPACE)


def parse_instrument(text: str) -> tuple[str, str]:
    """
    Parse an instrument name: a maximal run of non-whitespace characters.

    Returns:
        (name, rest)

    Raises:
        GrammarError: if the input is empty or starts with whitespace
    """
    end = 0
    while end < len(text) and text[end] not in WHITESPACE:
        end += 1
    if end == 0:
        raise GrammarError("instrument", text, "expected an instrument name")
    return text[:end], text[end:]


def _match_step_token(text: str) -> Optional[str]:
    for token in _STEP_TOKENS:
        if text.startswith(token):
            return token
    return None


def parse_steps(text: str) -> tuple[Steps, str]:
    """
    Parse one or more contiguous step tokens.

    'x' plays at the reference pitch, '-' is silent, '|' groups beats
    visually and produces no step, and a note name plays at that note's
    pitch. Notes play at full velocity except D, which plays at 0x3F.

    Returns:
        (steps, rest)

    Raises:
        GrammarError: if no step token is present, or only separators are
    """
    steps = Steps()
    rest = text
    consumed = 0
    while rest:
        token = _match_step_token(rest)
        if token is None:
            break
        rest = rest[len(token):]
        consumed += 1
        if token == STEP_PLAY:
            steps.push(PLAY_VELOCITY, REFERENCE_FREQUENCY)
        elif token == STEP_SILENT:
            steps.push(0, 0.0)
        elif token == SEPARATOR:
            continue
        else:
            steps.push(NOTE_VELOCITIES[token], NOTE_FREQUENCIES[token])

    if consumed == 0:
        raise GrammarError("steps", text, "expected at least one step token")
    if len(steps) == 0:
        raise GrammarError("steps", text, "separators without any steps")
    return steps, rest


def parse_amplitude(text: str) -> tuple[Optional[float], str]:
    """
    Parse an optional amplitude in [0, 1].

    Returns:
        (value, rest); value is None (and rest is the untouched input) when
        no number is present

    Raises:
        GrammarError: if a number is present but out of range
    """
    match = _FLOAT_RE.match(text)
    if match is None:
        return None, text
    value = float(match.group())
    if not 0.0 <= value <= 1.0:
        raise GrammarError("amplitude", text, f"{value} is outside [0, 1]")
    return value, text[match.end():]


def parse_track(line: str) -> tuple[str, Steps, Optional[float]]:
    """
    Parse one full track line.

    The whole line must be consumed; anything left over after the optional
    amplitude (other than whitespace) is an error.

    Returns:
        (instrument, steps, amplitude or None)
    """
    rest = skip_whitespace(line)
    instrument, rest = parse_instrument(rest)
    rest = skip_whitespace(rest)
    steps, rest = parse_steps(rest)
    rest = skip_whitespace(rest)
    amplitude, rest = parse_amplitude(rest)
    rest = skip_whitespace(rest)
    if rest:
        raise GrammarError("track", rest, "unexpected trailing input")
    return instrument, steps, amplitude
