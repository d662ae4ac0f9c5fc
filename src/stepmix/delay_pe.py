"""
DelayPE - shifts audio later in time by a whole number of samples.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from typing import Optional

from stepmix.processing_element import ProcessingElement
from stepmix.extent import Extent
from stepmix.snippet import Snippet


class DelayPE(ProcessingElement):
    """
    A ProcessingElement that delays its input by a fixed number of samples.

    At output time t the source is read at t - delay, so a positive delay
    pushes audio later and the extent moves with it. Negative delays are
    allowed and pull audio earlier.

    Args:
        source: Input ProcessingElement
        delay: Delay in samples. Floats must be whole numbers.

    Example:
        # Trigger a sample on the fourth 16th note at 120 BPM
        hit = DelayPE(kick, delay=round(3 * 0.125 * 44100))
    """

    def __init__(self, source: ProcessingElement, delay: int):
        if isinstance(delay, float):
            if not delay.is_integer():
                raise ValueError(f"delay must be a whole number of samples, got {delay}")
            delay = int(delay)
        self._source = source
        self._delay = int(delay)

    @property
    def source(self) -> ProcessingElement:
        return self._source

    @property
    def delay(self) -> int:
        """Delay in samples."""
        return self._delay

    def inputs(self) -> list[ProcessingElement]:
        return [self._source]

    def is_pure(self) -> bool:
        return True

    def channel_count(self) -> Optional[int]:
        return self._source.channel_count()

    def _compute_extent(self) -> Extent:
        return self._source.extent().shift(self._delay)

    def _render(self, start: int, duration: int) -> Snippet:
        # Reads before the source's extent come back as zeros.
        source_snippet = self._source.render(start - self._delay, duration)
        return Snippet(start, source_snippet.data)

    def __repr__(self) -> str:
        return f"DelayPE(source={self._source!r}, delay={self._delay})"
