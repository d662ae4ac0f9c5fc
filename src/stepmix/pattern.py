"""
Pattern: the parsed contents of a pattern file, and binding to sample files.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from stepmix.amplitude import Amplitude
from stepmix.errors import (
    DuplicateInstrumentError,
    FileDoesNotExistError,
    PatternParseError,
)
from stepmix.grammar import GrammarError, parse_track
from stepmix.instrumentation import Instrumentation
from stepmix.logger import get_logger
from stepmix.mixer import Track, Tracks
from stepmix.steps import Steps

logger = get_logger(__name__)


def _decode_lines(data: bytes) -> Iterator[str]:
    """Decode a pattern file line by line so a bad byte reports its line."""
    for line_number, raw in enumerate(data.splitlines(), start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            line = raw.decode("utf-8", errors="replace")
            raise PatternParseError(line, line_number, "not valid UTF-8") from exc


class Pattern:
    """
    Read-only mapping of instrument name -> Track (steps and amplitude).

    len(pattern) is the measure length: the longest step sequence across
    instruments, or 0 for an empty pattern. Iterating yields instrument
    names in file order.

    Example:
        >>> pattern = Pattern.from_text("kick x---x---\\nhat -x-x-x-x 0.5\\n")
        >>> len(pattern)
        8
        >>> pattern.get("hat").amplitude
        Amplitude(value=0.5)
    """

    def __init__(self, tracks: Mapping[str, Track] = None):
        self._tracks: dict[str, Track] = dict(tracks or {})

    @classmethod
    def parse(cls, path: Union[str, Path]) -> Pattern:
        """
        Read a pattern file.

        Blank lines are skipped. Parsing stops at the first bad line.

        Raises:
            FileDoesNotExistError: if path is not a regular file
            PatternParseError: if a line is not valid UTF-8 or does not match
                the track grammar
            DuplicateInstrumentError: if an instrument appears twice
        """
        path = Path(path)
        if not path.is_file():
            raise FileDoesNotExistError(path)
        pattern = cls.from_lines(_decode_lines(path.read_bytes()))
        logger.info(f"Loaded pattern {path}: {len(pattern._tracks)} tracks, {len(pattern)} steps")
        return pattern

    @classmethod
    def from_text(cls, text: str) -> Pattern:
        return cls.from_lines(text.splitlines())

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Pattern:
        """Parse an iterable of track lines; same rules as parse()."""
        tracks: dict[str, Track] = {}
        for line_number, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue
            try:
                instrument, steps, amplitude = parse_track(line)
            except GrammarError as exc:
                raise PatternParseError(line, line_number, str(exc)) from exc
            if instrument in tracks:
                raise DuplicateInstrumentError(line, instrument, line_number)
            tracks[instrument] = Track(steps, Amplitude.defaulting(amplitude))
        return cls(tracks)

    @property
    def instruments(self) -> list[str]:
        return list(self._tracks)

    def get(self, instrument: str, default: Optional[Track] = None) -> Optional[Track]:
        return self._tracks.get(instrument, default)

    def bind(self, instrumentation: Instrumentation) -> Tracks:
        """
        Merge the instruments that share a sample file into one track per file.

        For each sample file the steps are the union of its instruments' steps
        (padded to the measure length) and the amplitude is the quietest of
        theirs. Instruments the pattern does not contain are skipped.

        Args:
            instrumentation: Sample file -> instrument names; a plain mapping
                is accepted and normalised like Instrumentation

        Returns:
            Tracks keyed by sample file
        """
        instrumentation = Instrumentation(instrumentation)
        measure = len(self)
        bound: dict[str, Track] = {}
        for sample_file, instruments in instrumentation.items():
            steps = Steps.zeros(measure)
            amplitude = Amplitude.max()
            for instrument in sorted(instruments):
                track = self._tracks.get(instrument)
                if track is None:
                    logger.debug(f"{sample_file}: instrument {instrument!r} not in pattern")
                    continue
                steps = steps.union(track.steps)
                amplitude = amplitude.min(track.amplitude)
            bound[sample_file] = Track(steps, amplitude)
        return Tracks(bound)

    def __getitem__(self, instrument: str) -> Track:
        return self._tracks[instrument]

    def items(self):
        return self._tracks.items()

    def __iter__(self) -> Iterator[str]:
        return iter(self._tracks)

    def __contains__(self, instrument: object) -> bool:
        return instrument in self._tracks

    def __len__(self) -> int:
        return max((len(track.steps) for track in self._tracks.values()), default=0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return self._tracks == other._tracks

    def __str__(self) -> str:
        return "\n".join(
            f"{instrument} {track.steps} {track.amplitude}"
            for instrument, track in self._tracks.items()
        )

    def __repr__(self) -> str:
        return f"Pattern({list(self._tracks)})"
