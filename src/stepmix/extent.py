"""
Extent class for the temporal bounds of a ProcessingElement.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations
from typing import Optional


class Extent:
    """
    Half-open range [start, end) of sample indices where a ProcessingElement
    has data.

    Either bound may be None, meaning unbounded in that direction: a looped
    mix has Extent(0, None), a decoded sample has Extent(0, frames).
    """

    def __init__(self, start: Optional[int] = None, end: Optional[int] = None):
        """
        Create an Extent.

        Raises:
            ValueError: If start > end (when both are defined)
        """
        if start is not None and end is not None and start > end:
            raise ValueError(f"start ({start}) must be less than or equal to end ({end})")
        self._start = start
        self._end = end

    @classmethod
    def empty(cls, at: int = 0) -> Extent:
        """An extent holding no samples."""
        return cls(at, at)

    @property
    def start(self) -> Optional[int]:
        """First sample index, or None if unbounded."""
        return self._start

    @property
    def end(self) -> Optional[int]:
        """One past the last sample index, or None if unbounded."""
        return self._end

    @property
    def duration(self) -> Optional[int]:
        """Frame count, or None if either bound is open."""
        if self._start is None or self._end is None:
            return None
        return self._end - self._start

    def is_empty(self) -> bool:
        """True if the extent is finite and holds no samples."""
        return self._start is not None and self._end is not None and self._start == self._end

    def contains(self, sample_index: int) -> bool:
        """True if the sample index lies within this extent."""
        if self._start is not None and sample_index < self._start:
            return False
        if self._end is not None and sample_index >= self._end:
            return False
        return True

    def shift(self, offset: int) -> Extent:
        """The same extent moved later in time by `offset` samples."""
        return Extent(
            None if self._start is None else self._start + offset,
            None if self._end is None else self._end + offset,
        )

    def intersection(self, other: Extent) -> Extent:
        """
        The overlap of two extents.

        Disjoint extents yield an empty extent at the boundary.
        """
        if self.is_empty():
            return Extent(self._start, self._start)
        if other.is_empty():
            return Extent(other._start, other._start)

        if self._start is None:
            new_start = other._start
        elif other._start is None:
            new_start = self._start
        else:
            new_start = max(self._start, other._start)

        if self._end is None:
            new_end = other._end
        elif other._end is None:
            new_end = self._end
        else:
            new_end = min(self._end, other._end)

        if new_start is not None and new_end is not None and new_start > new_end:
            return Extent(new_start, new_start)
        return Extent(new_start, new_end)

    def union(self, other: Extent) -> Extent:
        """The smallest extent containing both. Empty extents add nothing."""
        if self.is_empty():
            return other
        if other.is_empty():
            return self

        if self._start is None or other._start is None:
            new_start = None
        else:
            new_start = min(self._start, other._start)

        if self._end is None or other._end is None:
            new_end = None
        else:
            new_end = max(self._end, other._end)

        return Extent(new_start, new_end)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extent):
            return NotImplemented
        return self._start == other._start and self._end == other._end

    def __repr__(self) -> str:
        start_str = str(self._start) if self._start is not None else "-∞"
        end_str = str(self._end) if self._end is not None else "+∞"
        return f"Extent({start_str}, {end_str})"

    def __bool__(self) -> bool:
        # Empty extents are falsy.
        return not self.is_empty()
