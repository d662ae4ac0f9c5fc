"""
WavWriterPE - writes audio to a WAV file as a side effect.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from pathlib import Path
from typing import Optional, Union

import soundfile as sf

from stepmix.config import AudioFormat, DEFAULT_AUDIO_FORMAT, handle_error
from stepmix.errors import OutputFileError
from stepmix.extent import Extent
from stepmix.logger import get_logger
from stepmix.processing_element import ProcessingElement
from stepmix.snippet import Snippet

logger = get_logger(__name__)


class WavWriterPE(ProcessingElement):
    """
    A ProcessingElement that passes audio through while writing it to a WAV
    file in the output format (16-bit signed PCM).

    The file is opened on on_start() and closed on on_stop(). Samples beyond
    [-1, 1] are clipped, not wrapped.

    Not pure: it has file side effects, so render requests must be
    contiguous and it may only have one consumer.

    Args:
        source: Input ProcessingElement
        path: Output WAV path
        audio_format: Output format (default: DEFAULT_AUDIO_FORMAT)

    Example:
        writer = WavWriterPE(mix, "groove.wav")
        with NullRenderer() as renderer:
            renderer.set_source(writer)
            renderer.start()
            renderer.render(0, 88200)
    """

    def __init__(
        self,
        source: ProcessingElement,
        path: Union[str, Path],
        audio_format: AudioFormat = DEFAULT_AUDIO_FORMAT,
    ):
        self._source = source
        self._path = str(path)
        self._format = audio_format
        self._file: Optional[sf.SoundFile] = None
        self._frames_written: int = 0

    @property
    def path(self) -> str:
        return self._path

    @property
    def frames_written(self) -> int:
        return self._frames_written

    def inputs(self) -> list[ProcessingElement]:
        return [self._source]

    def is_pure(self) -> bool:
        return False

    def channel_count(self) -> Optional[int]:
        return self._source.channel_count()

    def _on_start(self) -> None:
        channels = self._source.channel_count()
        if channels is None:
            handle_error(
                f"Cannot determine channel count for WavWriterPE. "
                f"Source {self._source.__class__.__name__} returns None for channel_count().",
                fatal=True,
            )
            return
        rate = self.sample_rate or self._format.sample_rate
        try:
            self._file = sf.SoundFile(
                self._path,
                mode="w",
                samplerate=rate,
                channels=channels,
                subtype=self._format.wav_subtype,
            )
        except RuntimeError as exc:  # soundfile's LibsndfileError
            raise OutputFileError(self._path, str(exc)) from exc
        self._frames_written = 0
        logger.info(
            f"Opened {self._path} for writing: "
            f"{channels} channels, {rate} Hz, {self._format.wav_subtype}"
        )

    def _on_stop(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
            logger.info(f"Closed {self._path}: {self._frames_written} frames written")

    def _render(self, start: int, duration: int) -> Snippet:
        snippet = self._source.render(start, duration)
        if self._file is not None:
            self._file.write(snippet.to_int16())
            self._frames_written += snippet.duration
        return snippet

    def _compute_extent(self) -> Extent:
        return self._source.extent()

    def __repr__(self) -> str:
        return f"WavWriterPE(source={self._source!r}, path={self._path!r})"
