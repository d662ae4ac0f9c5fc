"""
Shared fixtures for the stepmix tests.

Copyright (c) 2026 stepmix contributors

MIT License
"""

import logging

import numpy as np
import pytest
import soundfile as sf

from stepmix.config import ErrorMode, set_error_mode
from stepmix.renderer import Renderer

SAMPLE_RATE = 44100


def write_wav(path, data, sample_rate=SAMPLE_RATE):
    """Write a WAV file in FLOAT format so values read back exactly."""
    sf.write(str(path), np.asarray(data, dtype=np.float32), sample_rate, subtype="FLOAT")
    return path


class FakeStreamRenderer(Renderer):
    """Records the streaming calls an AudioRenderer would receive."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def _output(self, snippet):
        pass

    def stream_start(self, start=0, end=None):
        self.calls.append(("stream_start", start, end))

    def stream_stop(self):
        self.calls.append(("stream_stop",))

    def stop(self):
        self.calls.append(("stop",))
        super().stop()


@pytest.fixture(autouse=True)
def _strict_error_mode():
    set_error_mode(ErrorMode.STRICT)
    yield
    set_error_mode(ErrorMode.STRICT)


@pytest.fixture(autouse=True)
def _restore_logging():
    """set_global_logging() replaces the root handlers; put them back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("stepmix").setLevel(logging.NOTSET)


@pytest.fixture
def samples_dir(tmp_path):
    """A directory holding short constant-valued kick.wav and hat.wav."""
    directory = tmp_path / "samples"
    directory.mkdir()
    write_wav(directory / "kick.wav", np.full(100, 0.5))
    write_wav(directory / "hat.wav", np.full(50, 0.25))
    return directory


@pytest.fixture
def fake_renderer():
    return FakeStreamRenderer()
