"""
Amplitude: a track's playback volume.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

MIN_AMPLITUDE = 0.0
MAX_AMPLITUDE = 1.0


@dataclass(frozen=True, order=True)
class Amplitude:
    """A linear gain in [0, 1] inclusive. Tracks default to full volume."""

    value: float = MAX_AMPLITUDE

    def __post_init__(self):
        if not MIN_AMPLITUDE <= self.value <= MAX_AMPLITUDE:
            raise ValueError(
                f"amplitude must be in [{MIN_AMPLITUDE}, {MAX_AMPLITUDE}], got {self.value}"
            )

    @classmethod
    def max(cls) -> Amplitude:
        """Full volume."""
        return cls(MAX_AMPLITUDE)

    @classmethod
    def defaulting(cls, value: Optional[float]) -> Amplitude:
        """The given value, or full volume when None."""
        return cls.max() if value is None else cls(float(value))

    def min(self, other: Amplitude) -> Amplitude:
        """The quieter of the two amplitudes."""
        return self if self.value <= other.value else other

    def __float__(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        return str(self.value)
