"""
Playback: play a mix once, loop it, or export it to a WAV file.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional, Union

from stepmix.config import AudioFormat, DEFAULT_AUDIO_FORMAT
from stepmix.crop_pe import CropPE
from stepmix.delay_pe import DelayPE
from stepmix.errors import AudioDeviceError
from stepmix.extent import Extent
from stepmix.logger import get_logger
from stepmix.loop_pe import LoopPE
from stepmix.null_renderer import NullRenderer
from stepmix.processing_element import ProcessingElement
from stepmix.renderer import Renderer
from stepmix.tempo import Tempo
from stepmix.wav_writer_pe import WavWriterPE

logger = get_logger(__name__)


def repeat_source(
    tempo: Tempo,
    source: ProcessingElement,
    beats: int,
    audio_format: AudioFormat = DEFAULT_AUDIO_FORMAT,
) -> ProcessingElement:
    """
    Build the graph that plays `source` one measure after another, forever.

    The mix is delayed by the tempo's pad, cut to one measure of `beats`
    steps, and looped.
    """
    pad = tempo.to_samples(tempo.delay_pad_duration(), audio_format)
    measure = tempo.to_samples(tempo.step_duration(beats), audio_format)
    logger.debug(f"Repeat: pad={pad} samples, measure={measure} samples")
    return LoopPE(CropPE(DelayPE(source, pad), Extent(0, measure)))


def play_repeat(
    tempo: Tempo,
    source: ProcessingElement,
    beats: int,
    renderer: Optional[Renderer] = None,
    device: Union[int, str, None] = None,
    audio_format: AudioFormat = DEFAULT_AUDIO_FORMAT,
) -> None:
    """
    Loop the mix on the output device until the process is interrupted.

    Blocks the calling thread; audio is produced on the device's callback
    thread.

    Raises:
        AudioDeviceError: if no device can be opened
    """
    if renderer is None:
        renderer = _default_renderer(audio_format, device)
    renderer.set_source(repeat_source(tempo, source, beats, audio_format))
    with renderer:
        renderer.start()
        renderer.stream_start()
        logger.info(f"Playing {beats} steps on repeat at {tempo} BPM")
        _park()


def play_once(
    tempo: Tempo,
    source: ProcessingElement,
    beats: int,
    renderer: Optional[Renderer] = None,
    device: Union[int, str, None] = None,
    audio_format: AudioFormat = DEFAULT_AUDIO_FORMAT,
) -> None:
    """
    Play one measure of the mix and return.

    The caller sleeps for the length of the measure while the device plays,
    then the stream is stopped.

    Raises:
        AudioDeviceError: if no device can be opened
    """
    if renderer is None:
        renderer = _default_renderer(audio_format, device)
    renderer.set_source(source)
    seconds = tempo.step_duration(beats)
    with renderer:
        renderer.start()
        renderer.stream_start()
        logger.info(f"Playing {beats} steps once at {tempo} BPM ({seconds:.3f}s)")
        time.sleep(seconds)
        renderer.stream_stop()


def render_to_file(
    tempo: Tempo,
    source: ProcessingElement,
    beats: int,
    path: Union[str, Path],
    repeats: int = 1,
    audio_format: AudioFormat = DEFAULT_AUDIO_FORMAT,
) -> Path:
    """
    Render `repeats` measures of the mix to a 16-bit WAV file.

    A single measure is the mix cut at the measure boundary. More than one
    measure uses the same looped graph as play_repeat().

    Returns:
        The path written
    """
    if repeats < 1:
        raise ValueError(f"repeats must be >= 1, got {repeats}")
    path = Path(path)
    measure = tempo.to_samples(tempo.step_duration(beats), audio_format)
    graph = source if repeats == 1 else repeat_source(tempo, source, beats, audio_format)

    writer = WavWriterPE(graph, path, audio_format)
    renderer = NullRenderer(audio_format)
    renderer.set_source(writer)
    with renderer:
        renderer.start()
        renderer.render(0, measure * repeats)
    logger.info(f"Wrote {repeats} x {beats} steps at {tempo} BPM to {path}")
    return path


def _default_renderer(
    audio_format: AudioFormat,
    device: Union[int, str, None] = None,
) -> Renderer:
    try:
        from stepmix.audio_renderer import AudioRenderer
    except (ImportError, OSError) as exc:  # OSError: PortAudio library not found
        raise AudioDeviceError(f"audio output is not available: {exc}") from exc
    return AudioRenderer(audio_format, device=device)


def _park() -> None:
    """Block the calling thread until interrupted."""
    while True:
        time.sleep(3600)
