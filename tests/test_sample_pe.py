"""
Tests for SamplePE.

Copyright (c) 2026 stepmix contributors

MIT License
"""

import numpy as np
import pytest

from stepmix import Extent, NullRenderer, SamplePE
from stepmix.errors import SampleResolutionError

from conftest import write_wav


class TestSamplePEBasics:
    """Test construction from arrays."""

    def test_mono_data(self):
        sample = SamplePE(np.array([0.1, 0.2, 0.3]))
        assert sample.data.shape == (3, 1)
        assert sample.channel_count() == 1
        assert sample.extent() == Extent(0, 3)

    def test_stereo_data_is_averaged(self):
        sample = SamplePE(np.array([[0.2, 0.6], [1.0, 0.0]]))
        np.testing.assert_array_almost_equal(sample.data[:, 0], [0.4, 0.5])

    def test_rejects_3d_data(self):
        with pytest.raises(ValueError):
            SamplePE(np.zeros((2, 2, 2)))

    def test_is_pure_source(self):
        sample = SamplePE(np.ones(4))
        assert sample.is_pure() is True
        assert sample.inputs() == []

    def test_repr(self):
        assert repr(SamplePE(np.ones(4), name="kick.wav")) == "SamplePE(name='kick.wav', frames=4)"


class TestSamplePERender:
    """Test rendering windows."""

    def setup_method(self):
        self.sample = SamplePE(np.array([0.1, 0.2, 0.3, 0.4]))

    def test_render_inside(self):
        snippet = self.sample.render(1, 2)
        assert snippet.start == 1
        np.testing.assert_array_almost_equal(snippet.data[:, 0], [0.2, 0.3])

    def test_render_straddling_start(self):
        snippet = self.sample.render(-2, 4)
        np.testing.assert_array_almost_equal(snippet.data[:, 0], [0.0, 0.0, 0.1, 0.2])

    def test_render_straddling_end(self):
        snippet = self.sample.render(3, 3)
        np.testing.assert_array_almost_equal(snippet.data[:, 0], [0.4, 0.0, 0.0])

    def test_render_outside_is_silent(self):
        snippet = self.sample.render(100, 5)
        assert snippet.data.shape == (5, 1)
        assert np.all(snippet.data == 0.0)

    def test_render_zero_duration(self):
        assert self.sample.render(0, 0).data.shape == (0, 1)

    def test_negative_duration_raises(self):
        with pytest.raises(ValueError):
            self.sample.render(0, -1)


class TestSamplePEFromFile:
    """Test decoding sample files."""

    def test_from_file(self, samples_dir):
        sample = SamplePE.from_file(samples_dir / "kick.wav")
        assert sample.name == "kick.wav"
        assert sample.native_rate == 44100
        assert sample.extent() == Extent(0, 100)
        np.testing.assert_array_almost_equal(sample.data[:, 0], np.full(100, 0.5))

    def test_stereo_file_is_mixed_to_mono(self, tmp_path):
        data = np.column_stack([np.full(10, 0.2), np.full(10, 0.6)])
        path = write_wav(tmp_path / "stereo.wav", data)
        sample = SamplePE.from_file(path)
        assert sample.channel_count() == 1
        np.testing.assert_array_almost_equal(sample.data[:, 0], np.full(10, 0.4))

    def test_off_rate_file_is_resampled(self, tmp_path):
        path = write_wav(tmp_path / "slow.wav", np.full(100, 0.5), sample_rate=22050)
        sample = SamplePE.from_file(path)
        assert sample.native_rate == 44100
        assert sample.data.shape == (200, 1)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SampleResolutionError) as info:
            SamplePE.from_file(tmp_path / "missing.wav")
        assert info.value.path == tmp_path / "missing.wav"

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "junk.wav"
        path.write_bytes(b"this is not audio")
        with pytest.raises(SampleResolutionError):
            SamplePE.from_file(path)


class TestSamplePESampleRate:
    """Test sample-rate checks when the graph is configured."""

    def test_matching_rate(self):
        renderer = NullRenderer()
        sample = SamplePE(np.ones(4))
        renderer.set_source(sample)
        assert sample.sample_rate == 44100

    def test_mismatched_rate_rejected(self):
        renderer = NullRenderer()
        with pytest.raises(ValueError, match="22050"):
            renderer.set_source(SamplePE(np.ones(4), sample_rate=22050))
