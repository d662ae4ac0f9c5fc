"""
SamplePE - an in-memory mono audio sample.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations

from math import gcd
from pathlib import Path
from typing import Union

import numpy as np
import soundfile as sf
from numpy.typing import ArrayLike

from stepmix.config import AudioFormat, DEFAULT_AUDIO_FORMAT
from stepmix.errors import SampleResolutionError
from stepmix.extent import Extent
from stepmix.logger import get_logger
from stepmix.processing_element import SourcePE
from stepmix.snippet import Snippet

logger = get_logger(__name__)


class SamplePE(SourcePE):
    """
    A SourcePE holding a decoded sample, ready to be triggered.

    The whole sample lives in memory as mono float32 at the output sample
    rate, so one SamplePE can feed any number of scheduled copies (it is
    pure). The extent is [0, frames); requests outside it return zeros.
    To start the sample later, wrap it in a DelayPE.

    Args:
        data: Sample frames; 1D, or 2D (frames, channels) which is averaged
              down to mono
        sample_rate: Rate the data is already at
        name: Label used in logs and repr (usually the file name)

    Example:
        kick = SamplePE.from_file("samples/kick.wav")
        hit_on_beat_two = DelayPE(kick, delay=11025)
    """

    def __init__(
        self,
        data: ArrayLike,
        sample_rate: int = DEFAULT_AUDIO_FORMAT.sample_rate,
        name: str = "<array>",
    ):
        frames = np.asarray(data, dtype=np.float32)
        if frames.ndim == 2:
            frames = frames.mean(axis=1, dtype=np.float32)
        elif frames.ndim != 1:
            raise ValueError(f"sample data must be 1D or 2D, got {frames.ndim}D")
        self._data = frames.reshape(-1, 1)
        self._native_rate = int(sample_rate)
        self._name = name

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        audio_format: AudioFormat = DEFAULT_AUDIO_FORMAT,
    ) -> SamplePE:
        """
        Decode an audio file into a mono sample at the output rate.

        Raises:
            SampleResolutionError: if the file is missing or cannot be decoded
        """
        path = Path(path)
        if not path.is_file():
            raise SampleResolutionError(path, "file does not exist")
        try:
            frames, file_rate = sf.read(str(path), dtype="float32", always_2d=True)
        except RuntimeError as exc:  # soundfile's LibsndfileError
            raise SampleResolutionError(path, str(exc)) from exc

        mono = frames.mean(axis=1, dtype=np.float32)
        if file_rate != audio_format.sample_rate:
            mono = _resample(mono, file_rate, audio_format.sample_rate)
        logger.info(
            f"Decoded {path}: {frames.shape[0]} frames, {frames.shape[1]} channels, "
            f"{file_rate} Hz -> {mono.shape[0]} frames at {audio_format.sample_rate} Hz"
        )
        return cls(mono, sample_rate=audio_format.sample_rate, name=path.name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def data(self) -> np.ndarray:
        """The decoded frames, shape (frames, 1)."""
        return self._data

    @property
    def native_rate(self) -> int:
        """Sample rate the frames are stored at."""
        return self._native_rate

    def configure(self, sample_rate: int) -> None:
        super().configure(sample_rate)
        self._check_sample_rate(self._native_rate)

    def channel_count(self) -> int:
        return 1

    def _compute_extent(self) -> Extent:
        return Extent(0, self._data.shape[0])

    def _render(self, start: int, duration: int) -> Snippet:
        n = self._data.shape[0]
        out = np.zeros((duration, 1), dtype=np.float32)
        overlap_start = max(start, 0)
        overlap_end = min(start + duration, n)
        if overlap_start < overlap_end:
            dst = overlap_start - start
            out[dst:dst + (overlap_end - overlap_start)] = self._data[overlap_start:overlap_end]
        return Snippet(start, out)

    def __repr__(self) -> str:
        return f"SamplePE(name={self._name!r}, frames={self._data.shape[0]})"


def _resample(frames: np.ndarray, from_rate: int, to_rate: int) -> np.ndarray:
    # Imported here; only off-rate files need scipy.
    from scipy.signal import resample_poly

    divisor = gcd(int(from_rate), int(to_rate))
    resampled = resample_poly(frames, to_rate // divisor, from_rate // divisor)
    return resampled.astype(np.float32)
