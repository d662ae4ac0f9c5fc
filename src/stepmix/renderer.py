"""
Renderer abstract base class for audio output.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

from stepmix.config import AudioFormat, DEFAULT_AUDIO_FORMAT, handle_error
from stepmix.snippet import Snippet
from stepmix.processing_element import ProcessingElement
from stepmix.logger import get_logger

logger = get_logger(__name__)


class Renderer(ABC):
    """
    Abstract base class for the sinks a mix is rendered into.

    The Renderer owns the sample rate: set_source() configures the whole
    graph with it and validates channel counts and purity before anything
    is rendered.

    Lifecycle:
        1. set_source() - configure and validate the graph
        2. start() - call on_start() on every PE (inputs first)
        3. render() - pull audio and hand it to _output(); may repeat
        4. stop() - call on_stop() on every PE (outputs first)

    Subclasses implement _output().
    """

    def __init__(self, audio_format: AudioFormat = DEFAULT_AUDIO_FORMAT):
        self._format = audio_format
        self._source: Optional[ProcessingElement] = None
        self._channel_count: Optional[int] = None
        self._started: bool = False

    @property
    def audio_format(self) -> AudioFormat:
        return self._format

    @property
    def sample_rate(self) -> int:
        return self._format.sample_rate

    @property
    def source(self) -> Optional[ProcessingElement]:
        return self._source

    @property
    def channel_count(self) -> Optional[int]:
        """Output channel count of the source graph (after set_source())."""
        return self._channel_count

    @property
    def started(self) -> bool:
        return self._started

    def set_source(self, source: ProcessingElement) -> None:
        """
        Configure the graph with the sample rate and validate it.

        Does not start it; call start() explicitly.

        Raises:
            RuntimeError: If called while started (in STRICT mode)
            ValueError: If validation fails (shared impure PE, channel
                mismatch, sample decoded at the wrong rate)
        """
        if self._started:
            if handle_error("Cannot set source while started. Call stop() first."):
                return

        source.configure(self.sample_rate)
        self._channel_count = self._validate_graph(source)
        self._source = source
        logger.info(
            f"Source set: {source.__class__.__name__}, "
            f"sample_rate={self.sample_rate}, "
            f"channel_count={self._channel_count}"
        )

    def start(self) -> None:
        """
        Start every PE in the graph.

        Raises:
            RuntimeError: If no source is set (always) or already started
                (in STRICT mode)
        """
        if self._source is None:
            handle_error("No source set. Call set_source() first.", fatal=True)
            return
        if self._started:
            if handle_error("Already started. Call stop() first."):
                return

        self._start_graph(self._source)
        self._started = True
        logger.info("Renderer started")

    def stop(self) -> None:
        """Stop every PE in the graph. Safe to call more than once."""
        if not self._started:
            return
        if self._source is not None:
            self._stop_graph(self._source)
        self._started = False
        logger.info("Renderer stopped")

    def render(self, start: int, duration: int) -> None:
        """
        Pull `duration` samples from the source and output them.

        Raises:
            RuntimeError: If no source is set or not started (always)
        """
        if self._source is None:
            handle_error("No source set. Call set_source() first.", fatal=True)
            return
        if not self._started:
            handle_error("Not started. Call start() first.", fatal=True)
            return

        snippet = self._source.render(start, duration)
        self._output(snippet)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False

    @abstractmethod
    def _output(self, snippet: Snippet) -> None:
        """Deliver a rendered snippet to the destination."""
        pass

    def _validate_graph(
        self,
        pe: ProcessingElement,
        seen: Optional[dict[int, int]] = None,
    ) -> int:
        """
        Recursively validate the graph and return pe's output channel count.

        Checks that impure PEs have a single consumer and that channel
        counts agree.
        """
        if seen is None:
            seen = {}

        pe_id = id(pe)
        if pe_id in seen:
            if not pe.is_pure():
                raise ValueError(
                    f"{pe.__class__.__name__} is not pure but has multiple sinks. "
                    f"Stateful PEs can only connect to one downstream PE."
                )
            return seen[pe_id]

        input_channel_counts = [self._validate_graph(inp, seen) for inp in pe.inputs()]

        output = pe.channel_count()
        if output is None:
            output = pe.resolve_channel_count(input_channel_counts)
        else:
            for i, count in enumerate(input_channel_counts):
                if count != output:
                    raise ValueError(
                        f"{pe.__class__.__name__} outputs {output} channel(s) but "
                        f"input {i + 1} ({pe.inputs()[i].__class__.__name__}) has {count}"
                    )

        seen[pe_id] = output
        logger.debug(
            f"Validated {pe.__class__.__name__}: "
            f"inputs={input_channel_counts}, output={output}"
        )
        return output

    def _start_graph(
        self,
        pe: ProcessingElement,
        started: Optional[set[int]] = None,
    ) -> None:
        """Call on_start() once per PE, inputs first."""
        if started is None:
            started = set()
        if id(pe) in started:
            return
        started.add(id(pe))

        for input_pe in pe.inputs():
            self._start_graph(input_pe, started)
        pe.on_start()

    def _stop_graph(
        self,
        pe: ProcessingElement,
        stopped: Optional[set[int]] = None,
    ) -> None:
        """Call on_stop() once per PE, outputs first."""
        if stopped is None:
            stopped = set()
        if id(pe) in stopped:
            return
        stopped.add(id(pe))

        pe.on_stop()
        for input_pe in pe.inputs():
            self._stop_graph(input_pe, stopped)
