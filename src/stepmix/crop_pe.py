"""
CropPE - limits audio to a time window.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from typing import Optional

import numpy as np

from stepmix.processing_element import ProcessingElement
from stepmix.extent import Extent
from stepmix.snippet import Snippet


class CropPE(ProcessingElement):
    """
    A ProcessingElement that passes its input through only inside a window.

    Samples outside the window are silent. Either bound of the window may be
    None (open). The output extent is the window itself, not its
    intersection with the source: a crop longer than the source pads the
    source with trailing silence, which is how a mix is stretched to
    exactly one measure before looping.

    Args:
        source: Input ProcessingElement
        extent: Window to keep

    Example:
        # Exactly one measure of a mix, with silence after the last hit
        measure = CropPE(mix, Extent(0, 88200))
    """

    def __init__(self, source: ProcessingElement, extent: Extent):
        self._source = source
        self._extent = extent

    @property
    def source(self) -> ProcessingElement:
        return self._source

    @property
    def crop_extent(self) -> Extent:
        return self._extent

    def inputs(self) -> list[ProcessingElement]:
        return [self._source]

    def is_pure(self) -> bool:
        return True

    def _render(self, start: int, duration: int) -> Snippet:
        channels = self.channel_count() or 1
        data = np.zeros((duration, channels), dtype=np.float32)

        overlap = self._extent.intersection(Extent(start, start + duration))
        if overlap.is_empty():
            return Snippet(start, data)

        source_snippet = self._source.render(overlap.start, overlap.duration)
        offset = overlap.start - start
        data[offset:offset + overlap.duration, :] = source_snippet.data
        return Snippet(start, data)

    def _compute_extent(self) -> Extent:
        crop_start, crop_end = self._extent.start, self._extent.end
        source_extent = self._source.extent()
        # Open bounds fall back to the source's bounds.
        start = source_extent.start if crop_start is None else crop_start
        end = source_extent.end if crop_end is None else crop_end
        if start is not None and end is not None and start > end:
            return Extent.empty(start)
        return Extent(start, end)

    def channel_count(self) -> Optional[int]:
        return self._source.channel_count()

    def __repr__(self) -> str:
        return f"CropPE(source={self._source!r}, extent={self._extent!r})"
