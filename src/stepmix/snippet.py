"""
Snippet: a window of rendered audio.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations
import numpy as np
from numpy.typing import NDArray

_INT16_SCALE = 32767.0


class Snippet:
    """
    Rendered samples starting at a given sample index.

    Data layout is (frames, channels) float32, nominally in [-1.0, 1.0].
    A mix of several loud hits can exceed that range; clipping happens only
    when converting to 16-bit PCM.
    """

    def __init__(self, start: int, data: NDArray[np.floating]):
        """
        Args:
            start: Sample index of the first frame
            data: Array of shape (frames,) or (frames, channels)

        Raises:
            ValueError: If data is not 1D or 2D
        """
        if data.ndim == 1:
            data = data.reshape(-1, 1)
        elif data.ndim != 2:
            raise ValueError(f"data must be 1D or 2D, got {data.ndim}D")

        if data.dtype != np.float32:
            data = data.astype(np.float32, copy=False)

        self._start = start
        self._data = data

    @property
    def start(self) -> int:
        """Sample index of the first frame."""
        return self._start

    @property
    def end(self) -> int:
        """Sample index one past the last frame."""
        return self._start + self._data.shape[0]

    @property
    def duration(self) -> int:
        """Number of frames."""
        return self._data.shape[0]

    @property
    def channels(self) -> int:
        return self._data.shape[1]

    @property
    def data(self) -> NDArray[np.floating]:
        """The underlying array (not a copy; treat as immutable)."""
        return self._data

    @classmethod
    def from_zeros(cls, start: int, duration: int, channels: int = 1) -> Snippet:
        """Silence of the given size."""
        return cls(start, np.zeros((duration, channels), dtype=np.float32))

    def to_int16(self) -> NDArray[np.int16]:
        """
        Convert to signed 16-bit samples, clipping anything outside [-1, 1].
        """
        clipped = np.clip(self._data, -1.0, 1.0)
        return np.round(clipped * _INT16_SCALE).astype(np.int16)

    def __repr__(self) -> str:
        return (
            f"Snippet(start={self._start}, duration={self.duration}, "
            f"channels={self.channels})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snippet):
            return NotImplemented
        return (
            self._start == other._start
            and self._data.shape == other._data.shape
            and np.allclose(self._data, other._data)
        )
