"""
GainPE - scales audio by a fixed amplitude.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from typing import Optional

import numpy as np

from stepmix.processing_element import ProcessingElement
from stepmix.extent import Extent
from stepmix.snippet import Snippet


class GainPE(ProcessingElement):
    """
    A ProcessingElement that multiplies its input by a constant gain.

    The mixer uses it to apply a track's amplitude to every scheduled copy
    of the track's sample.

    Args:
        source: Input ProcessingElement
        gain: Linear multiplier (default: 1.0)

    Example:
        quiet_hat = GainPE(SamplePE.from_file("hat.wav"), gain=0.5)
    """

    def __init__(self, source: ProcessingElement, gain: float = 1.0):
        self._source = source
        self._gain = float(gain)

    @property
    def source(self) -> ProcessingElement:
        return self._source

    @property
    def gain(self) -> float:
        return self._gain

    def inputs(self) -> list[ProcessingElement]:
        return [self._source]

    def is_pure(self) -> bool:
        return True

    def _render(self, start: int, duration: int) -> Snippet:
        source_snippet = self._source.render(start, duration)
        if self._gain == 1.0:
            return source_snippet
        result = source_snippet.data * np.float32(self._gain)
        return Snippet(start, result)

    def _compute_extent(self) -> Extent:
        return self._source.extent()

    def channel_count(self) -> Optional[int]:
        return self._source.channel_count()

    def __repr__(self) -> str:
        return f"GainPE(source={self._source!r}, gain={self._gain})"
