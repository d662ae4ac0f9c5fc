"""
LoopPE - repeats a region of audio.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from typing import Optional

import numpy as np

from stepmix.processing_element import ProcessingElement
from stepmix.extent import Extent
from stepmix.snippet import Snippet


class LoopPE(ProcessingElement):
    """
    Repeat the region [loop_start, loop_end) of the source, starting at
    sample 0, either forever or `count` times.

    The source must be pure. The loop region is rendered once, on first
    use, and then served from memory, which keeps a looped mix cheap to
    pull from a real-time audio callback.

    Args:
        source: Input PE
        loop_start: First frame of the region (default: source extent start)
        loop_end: End frame of the region (default: source extent end)
        count: Number of repetitions, or None to loop forever

    Raises:
        ValueError: If the region is unbounded or empty

    Example:
        measure = CropPE(mix, Extent(0, 88200))
        forever = LoopPE(measure)
        four_bars = LoopPE(measure, count=4)
    """

    def __init__(
        self,
        source: ProcessingElement,
        loop_start: Optional[int] = None,
        loop_end: Optional[int] = None,
        count: Optional[int] = None,
    ):
        if count is not None and count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        source_extent = source.extent()
        if loop_start is None:
            loop_start = source_extent.start if source_extent.start is not None else 0
        if loop_end is None:
            loop_end = source_extent.end
        if loop_end is None:
            raise ValueError("Cannot loop source with infinite extent without explicit loop_end")
        if loop_end <= loop_start:
            raise ValueError(f"Loop length must be positive, got {loop_end - loop_start}")

        self._source = source
        self._loop_start = int(loop_start)
        self._loop_end = int(loop_end)
        self._count = count
        self._loop_data: Optional[np.ndarray] = None

    @property
    def source(self) -> ProcessingElement:
        return self._source

    @property
    def loop_start(self) -> int:
        return self._loop_start

    @property
    def loop_end(self) -> int:
        return self._loop_end

    @property
    def loop_length(self) -> int:
        return self._loop_end - self._loop_start

    @property
    def count(self) -> Optional[int]:
        """Number of repetitions (None = infinite)."""
        return self._count

    def inputs(self) -> list[ProcessingElement]:
        return [self._source]

    def is_pure(self) -> bool:
        return True

    def channel_count(self) -> Optional[int]:
        return self._source.channel_count()

    def _compute_extent(self) -> Extent:
        if self._count is None:
            return Extent(0, None)
        return Extent(0, self._count * self.loop_length)

    def _on_stop(self) -> None:
        self._loop_data = None

    def _region(self) -> np.ndarray:
        if self._loop_data is None:
            self._loop_data = self._source.render(self._loop_start, self.loop_length).data
        return self._loop_data

    def _render(self, start: int, duration: int) -> Snippet:
        channels = self.channel_count() or 1
        output = np.zeros((duration, channels), dtype=np.float32)

        # Only [0, end) is looped audio; everything else stays silent.
        window = self.extent().intersection(Extent(start, start + duration))
        if window.is_empty():
            return Snippet(start, output)

        positions = np.arange(window.start, window.end) % self.loop_length
        offset = window.start - start
        output[offset:offset + window.duration, :] = self._region()[positions, :]
        return Snippet(start, output)

    def __repr__(self) -> str:
        count_str = f", count={self._count}" if self._count is not None else ""
        return (
            f"LoopPE(source={self._source!r}, "
            f"loop_start={self._loop_start}, loop_end={self._loop_end}{count_str})"
        )
