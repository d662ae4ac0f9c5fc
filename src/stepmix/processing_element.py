"""
ProcessingElement and SourcePE abstract base classes.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

from stepmix.extent import Extent
from stepmix.snippet import Snippet
from stepmix.config import handle_error


class ProcessingElement(ABC):
    """
    Abstract base class for the nodes of a mix graph.

    A ProcessingElement produces audio on demand via render(). Elements form
    a directed acyclic graph:
    - Sources (SourcePE subclasses) have no inputs
    - Processors (gain, delay, mix, ...) pull from one or more inputs

    render() always returns a Snippet of exactly the requested size, with
    samples outside extent() zero-filled.

    The sample rate is not global state: Renderer.set_source() calls
    configure() on the root, which pushes the rate down to every element.
    """

    _sample_rate: Optional[int] = None
    _cached_extent: Optional[Extent] = None

    # For impure PEs: end of last render request, used to enforce contiguity
    _last_rendered_end: Optional[int] = None

    @property
    def sample_rate(self) -> Optional[int]:
        """The configured sample rate in Hz, or None before configure()."""
        return self._sample_rate

    def configure(self, sample_rate: int) -> None:
        """
        Record the sample rate on this element and all of its inputs.

        Subclasses that must check the rate override this and call super().
        """
        self._sample_rate = sample_rate
        for input_pe in self.inputs():
            input_pe.configure(sample_rate)

    def render(self, start: int, duration: int) -> Snippet:
        """
        Produce `duration` samples beginning at sample index `start`.

        Raises:
            ValueError: If duration is negative, or if an impure element is
                asked for a non-contiguous range
        """
        if duration < 0:
            raise ValueError(f"duration must be >= 0, got {duration}")

        if duration == 0:
            channels = self.channel_count() or 1
            return Snippet.from_zeros(start, 0, int(channels))

        if not self.is_pure():
            if self._last_rendered_end is not None and start != self._last_rendered_end:
                raise ValueError(
                    f"{self.__class__.__name__} is not pure; render requests must be contiguous. "
                    f"Expected start={self._last_rendered_end}, got start={start}."
                )

        result = self._render(start, duration)

        if not self.is_pure():
            self._last_rendered_end = start + duration
        return result

    @abstractmethod
    def _render(self, start: int, duration: int) -> Snippet:
        """Rendering logic for duration > 0, implemented by subclasses."""
        pass

    def extent(self) -> Extent:
        """
        Where this element has data. Computed once and cached; override
        _compute_extent() rather than this method.
        """
        if self._cached_extent is None:
            self._cached_extent = self._compute_extent()
        return self._cached_extent

    def _compute_extent(self) -> Extent:
        """Default: unbounded in both directions."""
        return Extent(None, None)

    @abstractmethod
    def inputs(self) -> list[ProcessingElement]:
        """The input elements (empty for sources)."""
        pass

    def is_pure(self) -> bool:
        """
        True if render() may be called with arbitrary ranges in any order and
        by several consumers.

        Impure elements (e.g. a file writer) must be rendered contiguously
        and may only feed one consumer. Default: False.
        """
        return False

    def channel_count(self) -> Optional[int]:
        """
        Number of output channels, or None to pass through the primary
        input's count. Sources must return an int.
        """
        return None

    def resolve_channel_count(self, input_channel_counts: list[int]) -> int:
        """
        Output channel count when channel_count() is None.

        Default: the first input's channel count.
        """
        if input_channel_counts:
            return input_channel_counts[0]
        raise ValueError(
            f"{self.__class__.__name__} has no inputs but channel_count() is None"
        )

    def on_start(self) -> None:
        """
        Called once by Renderer.start(), inputs before outputs.

        Resets the contiguity watermark, then calls _on_start() if the
        subclass defines it.
        """
        if not self.is_pure():
            self._last_rendered_end = None
        if hasattr(self, "_on_start"):
            self._on_start()

    def on_stop(self) -> None:
        """Called once by Renderer.stop(), outputs before inputs."""
        if hasattr(self, "_on_stop"):
            self._on_stop()

    def _check_sample_rate(self, expected: int) -> None:
        if self._sample_rate is not None and self._sample_rate != expected:
            handle_error(
                f"{self.__class__.__name__} expects {expected} Hz but the graph "
                f"is configured for {self._sample_rate} Hz",
                exception_class=ValueError,
            )


class SourcePE(ProcessingElement):
    """
    Abstract base class for elements with no inputs.

    Sources are pure by default and must declare a concrete channel count.
    """

    def inputs(self) -> list[ProcessingElement]:
        return []

    def is_pure(self) -> bool:
        return True

    @abstractmethod
    def channel_count(self) -> int:
        """Sources MUST declare their output channel count."""
        pass
