"""
Tempo: converts beats per minute into step and measure durations.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations

from stepmix.config import AudioFormat, DEFAULT_AUDIO_FORMAT
from stepmix.logger import get_logger

logger = get_logger(__name__)

MIN_BPM = 1
MAX_BPM = 65535

# A beat lasts 60/bpm seconds and a step is a 16th note (a quarter beat).
_SECONDS_PER_STEP_AT_1_BPM = 15.0


class Tempo:
    """
    Playback tempo in beats per minute.

    Args:
        bpm: Integer in [1, 65535]

    Raises:
        ValueError: If bpm is out of range or not an integer

    Example:
        >>> Tempo(120).step_duration(1)
        0.125
        >>> Tempo(60).step_duration(16)
        4.0
    """

    __slots__ = ("_bpm",)

    def __init__(self, bpm: int):
        if isinstance(bpm, bool) or int(bpm) != bpm:
            raise ValueError(f"bpm must be an integer, got {bpm!r}")
        bpm = int(bpm)
        if not MIN_BPM <= bpm <= MAX_BPM:
            raise ValueError(f"bpm must be in [{MIN_BPM}, {MAX_BPM}], got {bpm}")
        self._bpm = bpm

    @property
    def bpm(self) -> int:
        return self._bpm

    def step_duration(self, beats: int = 1) -> float:
        """
        Duration in seconds of `beats` 16th-note steps.

        step_duration(1) is one step; step_duration(16) is a 4/4 measure.
        """
        return beats * _SECONDS_PER_STEP_AT_1_BPM / self._bpm

    def delay_factor(self) -> float:
        """Linear taper used to size the padding of a looped mix."""
        return -self._bpm / 120.0 + 2.0

    def delay_pad_duration(self) -> float:
        """
        Seconds of silence placed before a mix that is played on repeat.

        Together with trimming the mix to one measure, this lands each
        iteration one measure after the previous one instead of right after
        its last audible step. Never negative: above 240 BPM the factor
        goes below zero and the pad is clamped to 0.
        """
        pad = self.step_duration(1) * self.delay_factor()
        if pad < 0.0:
            logger.warning(f"Delay pad at {self._bpm} BPM is negative ({pad:.4f}s); using 0")
            return 0.0
        return pad

    def to_samples(self, seconds: float, audio_format: AudioFormat = DEFAULT_AUDIO_FORMAT) -> int:
        """Seconds to whole frames at the output sample rate."""
        return audio_format.seconds_to_samples(seconds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tempo):
            return NotImplemented
        return self._bpm == other._bpm

    def __hash__(self) -> int:
        return hash(self._bpm)

    def __str__(self) -> str:
        return str(self._bpm)

    def __repr__(self) -> str:
        return f"Tempo({self._bpm})"
