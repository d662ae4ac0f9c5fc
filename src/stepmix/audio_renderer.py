"""
AudioRenderer - plays audio through the system sound output.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations

import sounddevice as sd

from stepmix.config import AudioFormat, DEFAULT_AUDIO_FORMAT, handle_error
from stepmix.errors import AudioDeviceError
from stepmix.logger import get_logger
from stepmix.renderer import Renderer
from stepmix.snippet import Snippet

logger = get_logger(__name__)


class AudioRenderer(Renderer):
    """
    A Renderer that plays audio on the default (or a chosen) output device.

    Uses sounddevice (PortAudio). Samples are delivered as 16-bit signed
    integers, mono, at 44.1 kHz (the AudioFormat).

    Two modes of operation:
    1. **Blocking**: render() writes each snippet synchronously
    2. **Streaming**: stream_start() plays from a callback on PortAudio's
       own thread until stream_stop() or the optional end position

    Any failure to open or start the device raises AudioDeviceError.

    Args:
        audio_format: Output format (default: DEFAULT_AUDIO_FORMAT)
        device: Output device index or name (default: None = system default)
        blocksize: Frames per callback block (default: 1024)
        latency: PortAudio latency hint ('low', 'high', or seconds)

    Example:
        with AudioRenderer() as renderer:
            renderer.set_source(looped_mix)
            renderer.start()
            renderer.stream_start()
            time.sleep(8.0)
    """

    def __init__(
        self,
        audio_format: AudioFormat = DEFAULT_AUDIO_FORMAT,
        device: int | str | None = None,
        blocksize: int = 1024,
        latency: str | float = "low",
    ):
        super().__init__(audio_format=audio_format)
        self._device = device
        self._blocksize = blocksize
        self._latency = latency

        self._stream: sd.OutputStream | None = None
        self._stream_position: int = 0
        self._stream_end: int | None = None
        self._blocking_stream: sd.OutputStream | None = None

    @property
    def device(self) -> int | str | None:
        return self._device

    @property
    def blocksize(self) -> int:
        return self._blocksize

    def _open_stream(self, **kwargs) -> sd.OutputStream:
        try:
            stream = sd.OutputStream(
                samplerate=self.sample_rate,
                channels=self._channel_count or self._format.channels,
                dtype=self._format.device_dtype,
                device=self._device,
                blocksize=self._blocksize,
                latency=self._latency,
                **kwargs,
            )
            stream.start()
        except (sd.PortAudioError, ValueError) as exc:
            raise AudioDeviceError(f"cannot open audio output device: {exc}") from exc
        return stream

    def _output(self, snippet: Snippet) -> None:
        """Write a snippet to the device, blocking until it is queued."""
        if self._blocking_stream is None:
            self._blocking_stream = self._open_stream()
        self._blocking_stream.write(snippet.to_int16())

    def stream_start(self, start: int = 0, end: int | None = None) -> None:
        """
        Start non-blocking playback from sample `start`.

        Audio is pulled from the source on PortAudio's callback thread.

        Args:
            start: First sample index to play
            end: Sample index to stop at (None = play until stream_stop())

        Raises:
            RuntimeError: If not started or already streaming
            AudioDeviceError: If the device cannot be opened
        """
        if not self._started:
            handle_error("Not started. Call start() first.", fatal=True)
            return
        if self._stream is not None:
            handle_error("Already streaming. Call stream_stop() first.", fatal=True)
            return

        self._stream_position = start
        self._stream_end = end

        def callback(outdata, frames, time_info, status):
            if status:
                logger.warning(f"Stream status: {status}")

            if self._stream_end is not None:
                remaining = self._stream_end - self._stream_position
                if remaining <= 0:
                    outdata.fill(0)
                    raise sd.CallbackStop()
                frames = min(frames, remaining)

            snippet = self._source.render(self._stream_position, frames)
            outdata[:snippet.duration] = snippet.to_int16()
            outdata[snippet.duration:] = 0
            self._stream_position += frames

        self._stream = self._open_stream(callback=callback)
        logger.info(f"Streaming started at position {start}")

    def stream_stop(self) -> None:
        """Stop non-blocking playback. Safe to call when not streaming."""
        if self._stream is not None:
            self._stream.stop()
            self._stream.close()
            self._stream = None
            logger.info(f"Streaming stopped at position {self._stream_position}")

    def stream_wait(self) -> None:
        """Block until a stream with a finite end has finished."""
        if self._stream is not None:
            while self._stream.active:
                sd.sleep(10)

    @property
    def stream_position(self) -> int:
        return self._stream_position

    @property
    def is_streaming(self) -> bool:
        return self._stream is not None and self._stream.active

    def stop(self) -> None:
        """Stop streaming, close the device and stop the graph."""
        self.stream_stop()
        if self._blocking_stream is not None:
            self._blocking_stream.stop()
            self._blocking_stream.close()
            self._blocking_stream = None
        super().stop()

    @staticmethod
    def list_devices():
        """Available audio devices, as reported by PortAudio."""
        return sd.query_devices()

    def __repr__(self) -> str:
        return (
            f"AudioRenderer(sample_rate={self.sample_rate}, "
            f"device={self._device}, blocksize={self._blocksize})"
        )
