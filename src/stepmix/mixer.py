"""
Mixing engine: turns bound tracks into one scheduled audio graph.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Iterator, NamedTuple, Union

from stepmix.amplitude import Amplitude
from stepmix.config import AudioFormat, DEFAULT_AUDIO_FORMAT
from stepmix.delay_pe import DelayPE
from stepmix.gain_pe import GainPE
from stepmix.logger import get_logger
from stepmix.mix_pe import MixPE
from stepmix.processing_element import ProcessingElement
from stepmix.sample_pe import SamplePE
from stepmix.steps import Steps
from stepmix.tempo import Tempo

logger = get_logger(__name__)


class Track(NamedTuple):
    """The merged steps and amplitude for one sample file."""
    steps: Steps
    amplitude: Amplitude


class Tracks(Mapping):
    """
    Immutable mapping of sample file name -> Track, produced by Pattern.bind().
    """

    def __init__(self, tracks: Mapping[str, Track] = None):
        self._tracks: dict[str, Track] = dict(tracks or {})

    def sources(
        self,
        samples_dir: Union[str, Path],
        audio_format: AudioFormat = DEFAULT_AUDIO_FORMAT,
    ) -> Sources:
        """
        Decode every sample file from samples_dir.

        Raises:
            SampleResolutionError: on the first file that is missing or
                cannot be decoded
        """
        samples_dir = Path(samples_dir)
        resolved = {}
        for sample_file, track in self._tracks.items():
            sample = SamplePE.from_file(samples_dir / sample_file, audio_format)
            resolved[sample] = track
        return Sources(resolved)

    def __getitem__(self, sample_file: str) -> Track:
        return self._tracks[sample_file]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tracks)

    def __len__(self) -> int:
        return len(self._tracks)

    def __repr__(self) -> str:
        body = ", ".join(
            f"{name!r}: ({track.steps}, {track.amplitude})"
            for name, track in self._tracks.items()
        )
        return f"Tracks({{{body}}})"


class Sources(Mapping):
    """
    Immutable mapping of decoded SamplePE -> Track, ready to mix.
    """

    def __init__(self, sources: Mapping[SamplePE, Track] = None):
        self._sources: dict[SamplePE, Track] = dict(sources or {})

    def mix(
        self,
        tempo: Tempo,
        audio_format: AudioFormat = DEFAULT_AUDIO_FORMAT,
    ) -> ProcessingElement:
        """
        Schedule one copy of each sample per active step and sum them.

        A step at index i starts i step durations after sample 0. Copies
        share the decoded sample; only the gain and delay are per copy.
        With no active steps the result is a silent mix with an empty extent.

        Args:
            tempo: Playback tempo
            audio_format: Output format (sample rate and channel count)

        Returns:
            A MixPE over every scheduled copy
        """
        step_seconds = tempo.step_duration(1)
        copies: list[ProcessingElement] = []
        for sample, track in self._sources.items():
            gain = float(track.amplitude)
            for index in track.steps.active_indices():
                delay = tempo.to_samples(step_seconds * index, audio_format)
                copies.append(DelayPE(GainPE(sample, gain), delay))
                logger.debug(
                    f"Scheduled {sample.name} at step {index} "
                    f"(sample {delay}, gain {gain})"
                )
        logger.info(f"Mixed {len(copies)} hits from {len(self._sources)} samples at {tempo} BPM")
        return MixPE(*copies, channels=audio_format.channels)

    def __getitem__(self, sample: SamplePE) -> Track:
        return self._sources[sample]

    def __iter__(self) -> Iterator[SamplePE]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)
