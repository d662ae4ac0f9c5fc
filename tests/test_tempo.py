"""
Tests for Tempo.

Copyright (c) 2026 stepmix contributors

MIT License
"""

import logging

import pytest

from stepmix.config import AudioFormat
from stepmix.tempo import Tempo


class TestTempoBasics:
    """Test construction and validation."""

    @pytest.mark.parametrize("bpm", [1, 120, 65535])
    def test_valid_range(self, bpm):
        assert Tempo(bpm).bpm == bpm

    @pytest.mark.parametrize("bpm", [0, -1, 65536])
    def test_rejects_out_of_range(self, bpm):
        with pytest.raises(ValueError):
            Tempo(bpm)

    def test_rejects_fractional(self):
        with pytest.raises(ValueError, match="integer"):
            Tempo(120.5)

    def test_equality_and_hash(self):
        assert Tempo(120) == Tempo(120)
        assert Tempo(120) != Tempo(121)
        assert len({Tempo(90), Tempo(90)}) == 1

    def test_str_and_repr(self):
        assert str(Tempo(96)) == "96"
        assert repr(Tempo(96)) == "Tempo(96)"


class TestTempoTiming:
    """Test step and pad durations."""

    def test_step_duration_at_120(self):
        assert Tempo(120).step_duration(1) == 0.125

    def test_measure_at_60(self):
        assert Tempo(60).step_duration(16) == 4.0

    def test_step_duration_default_is_one_step(self):
        assert Tempo(120).step_duration() == Tempo(120).step_duration(1)

    def test_delay_factor(self):
        assert Tempo(120).delay_factor() == 1.0
        assert Tempo(60).delay_factor() == 1.5
        assert Tempo(240).delay_factor() == 0.0

    def test_delay_pad_duration(self):
        assert Tempo(120).delay_pad_duration() == pytest.approx(0.125)
        assert Tempo(60).delay_pad_duration() == pytest.approx(0.375)
        assert Tempo(240).delay_pad_duration() == 0.0

    def test_delay_pad_clamped_above_240(self, caplog):
        with caplog.at_level(logging.WARNING, logger="stepmix"):
            pad = Tempo(300).delay_pad_duration()
        assert pad == 0.0
        assert "negative" in caplog.text

    def test_to_samples(self):
        assert Tempo(120).to_samples(0.5) == 22050
        assert Tempo(120).to_samples(0.5, AudioFormat(sample_rate=48000)) == 24000
