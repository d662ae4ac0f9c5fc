"""
Tests for AudioRenderer, with the PortAudio stream replaced by a fake.

Copyright (c) 2026 stepmix contributors

MIT License
"""

import numpy as np
import pytest

try:
    import sounddevice as sd
except (ImportError, OSError):
    pytest.skip("sounddevice/PortAudio not available", allow_module_level=True)

import stepmix.audio_renderer as audio_renderer
from stepmix import AudioDeviceError, SamplePE
from stepmix.audio_renderer import AudioRenderer


class FakeStream:
    """Stands in for sd.OutputStream and remembers what it was given."""

    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.active = False
        self.closed = False
        self.written = []
        FakeStream.instances.append(self)

    def start(self):
        self.active = True

    def stop(self):
        self.active = False

    def close(self):
        self.closed = True

    def write(self, data):
        self.written.append(np.array(data))


@pytest.fixture
def fake_stream(monkeypatch):
    FakeStream.instances = []
    monkeypatch.setattr(audio_renderer.sd, "OutputStream", FakeStream)
    return FakeStream


@pytest.fixture
def renderer():
    renderer = AudioRenderer()
    renderer.set_source(SamplePE(np.array([1.0, 0.5, -0.5, -1.0, 0.25, 0.0])))
    yield renderer
    renderer.stop()


class TestAudioRendererBasics:
    """Test construction without touching the device."""

    def test_defaults(self):
        renderer = AudioRenderer(device="speakers", blocksize=256)
        assert renderer.sample_rate == 44100
        assert renderer.device == "speakers"
        assert renderer.blocksize == 256
        assert "AudioRenderer" in repr(renderer)

    def test_stream_start_requires_start(self, renderer):
        with pytest.raises(RuntimeError, match="Not started"):
            renderer.stream_start()


class TestAudioRendererBlocking:
    """Test blocking writes."""

    def test_render_writes_int16(self, renderer, fake_stream):
        renderer.start()
        renderer.render(0, 4)

        stream = fake_stream.instances[0]
        assert stream.kwargs["samplerate"] == 44100
        assert stream.kwargs["channels"] == 1
        assert stream.kwargs["dtype"] == "int16"
        np.testing.assert_array_equal(stream.written[0][:, 0], [32767, 16384, -16384, -32767])

    def test_stop_closes_stream(self, renderer, fake_stream):
        renderer.start()
        renderer.render(0, 2)
        renderer.stop()
        assert fake_stream.instances[0].closed is True


class TestAudioRendererStreaming:
    """Test the callback-driven path."""

    def test_callback_pulls_from_source(self, renderer, fake_stream):
        renderer.start()
        renderer.stream_start(0, end=6)
        callback = fake_stream.instances[0].kwargs["callback"]

        out = np.zeros((4, 1), dtype=np.int16)
        callback(out, 4, None, None)
        np.testing.assert_array_equal(out[:, 0], [32767, 16384, -16384, -32767])

        callback(out, 4, None, None)
        np.testing.assert_array_equal(out[:, 0], [8192, 0, 0, 0])
        assert renderer.stream_position == 6

        with pytest.raises(sd.CallbackStop):
            callback(out, 4, None, None)

    def test_stream_stop(self, renderer, fake_stream):
        renderer.start()
        renderer.stream_start()
        assert renderer.is_streaming is True
        renderer.stream_stop()
        assert renderer.is_streaming is False
        assert fake_stream.instances[0].closed is True

    def test_stream_twice_rejected(self, renderer, fake_stream):
        renderer.start()
        renderer.stream_start()
        with pytest.raises(RuntimeError, match="Already streaming"):
            renderer.stream_start()


class TestAudioRendererErrors:
    """Test device failures."""

    def test_open_failure_is_audio_device_error(self, renderer, monkeypatch):
        def unavailable(**kwargs):
            raise sd.PortAudioError("no default output device")

        monkeypatch.setattr(audio_renderer.sd, "OutputStream", unavailable)
        renderer.start()
        with pytest.raises(AudioDeviceError, match="no default output device"):
            renderer.stream_start()
