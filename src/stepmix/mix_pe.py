"""
MixPE - adds the outputs of any number of PEs together.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from typing import Optional

import numpy as np

from stepmix.processing_element import ProcessingElement
from stepmix.extent import Extent
from stepmix.snippet import Snippet
from stepmix.logger import get_logger

logger = get_logger(__name__)


class MixPE(ProcessingElement):
    """
    An additive mixer over zero or more inputs.

    Inputs are summed sample by sample with no limiting, so several loud
    hits landing together can exceed [-1, 1]. A mixer with no inputs is
    silent and has an empty extent.

    Channel handling:
    - All inputs must have the same channel count
    - `channels` fixes the count up front (required when there are no inputs)

    Extent:
    - The union of all input extents

    Args:
        *inputs: ProcessingElements to mix
        channels: Output channel count (default: taken from the inputs)

    Example:
        mixed = MixPE(DelayPE(kick, 0), DelayPE(kick, 22050), channels=1)
    """

    def __init__(self, *inputs: ProcessingElement, channels: Optional[int] = None):
        if not inputs and channels is None:
            raise ValueError("MixPE with no inputs needs an explicit channel count")
        self._inputs = list(inputs)
        self._channels = channels

    def inputs(self) -> list[ProcessingElement]:
        return self._inputs

    def is_pure(self) -> bool:
        return True

    def _render(self, start: int, duration: int) -> Snippet:
        result = np.zeros((duration, self.channel_count() or 1), dtype=np.float32)
        for inp in self._inputs:
            # Skip inputs with nothing to contribute in this window.
            if not inp.extent().intersection(Extent(start, start + duration)):
                continue
            result += inp.render(start, duration).data
        return Snippet(start, result)

    def _compute_extent(self) -> Extent:
        if not self._inputs:
            return Extent.empty()
        result = self._inputs[0].extent()
        for inp in self._inputs[1:]:
            result = result.union(inp.extent())
        return result

    def channel_count(self) -> Optional[int]:
        if self._channels is not None:
            return self._channels
        return self._inputs[0].channel_count()

    def resolve_channel_count(self, input_channel_counts: list[int]) -> int:
        """
        All inputs must agree on channel count.

        Raises:
            ValueError: If inputs have different channel counts
        """
        if not input_channel_counts:
            raise ValueError("MixPE has no inputs")
        first = input_channel_counts[0]
        for i, count in enumerate(input_channel_counts[1:], start=2):
            if count != first:
                raise ValueError(
                    f"MixPE input channel mismatch: input 1 has {first} channels, "
                    f"input {i} has {count} channels"
                )
        return first

    def __repr__(self) -> str:
        return f"MixPE({len(self._inputs)} inputs)"
