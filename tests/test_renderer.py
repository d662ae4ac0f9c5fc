"""
Tests for Renderer and NullRenderer.

Copyright (c) 2026 stepmix contributors

MIT License
"""

import numpy as np
import pytest

from stepmix import (
    DelayPE,
    ErrorMode,
    GainPE,
    MixPE,
    NullRenderer,
    ProcessingElement,
    SamplePE,
    Snippet,
    WavWriterPE,
    set_error_mode,
)


class RecordingPE(ProcessingElement):
    """Pass-through that records lifecycle calls into a shared log."""

    def __init__(self, source, name, log):
        self._source = source
        self._name = name
        self._log = log
        self.rendered = []

    def inputs(self):
        return [self._source]

    def is_pure(self):
        return True

    def _on_start(self):
        self._log.append(("start", self._name))

    def _on_stop(self):
        self._log.append(("stop", self._name))

    def _render(self, start, duration):
        self.rendered.append((start, duration))
        return self._source.render(start, duration)


class CollectingRenderer(NullRenderer):
    def __init__(self):
        super().__init__()
        self.snippets = []

    def _output(self, snippet: Snippet) -> None:
        self.snippets.append(snippet)


class TestRendererLifecycle:
    """Test set_source / start / render / stop ordering."""

    def setup_method(self):
        self.log = []
        self.inner = RecordingPE(SamplePE(np.ones(4)), "inner", self.log)
        self.outer = RecordingPE(self.inner, "outer", self.log)
        self.renderer = CollectingRenderer()

    def test_set_source_configures_graph(self):
        self.renderer.set_source(self.outer)
        assert self.renderer.source is self.outer
        assert self.inner.sample_rate == 44100
        assert self.renderer.channel_count == 1
        assert self.renderer.started is False

    def test_start_visits_inputs_first(self):
        self.renderer.set_source(self.outer)
        self.renderer.start()
        assert self.log == [("start", "inner"), ("start", "outer")]
        assert self.renderer.started is True

    def test_stop_visits_outputs_first(self):
        self.renderer.set_source(self.outer)
        self.renderer.start()
        self.log.clear()
        self.renderer.stop()
        assert self.log == [("stop", "outer"), ("stop", "inner")]

    def test_stop_is_idempotent(self):
        self.renderer.set_source(self.outer)
        self.renderer.start()
        self.renderer.stop()
        self.log.clear()
        self.renderer.stop()
        assert self.log == []

    def test_render_outputs_snippet(self):
        self.renderer.set_source(self.outer)
        self.renderer.start()
        self.renderer.render(2, 4)
        assert self.outer.rendered == [(2, 4)]
        snippet = self.renderer.snippets[0]
        np.testing.assert_array_almost_equal(snippet.data[:, 0], [1.0, 1.0, 0.0, 0.0])

    def test_context_manager_stops(self):
        with self.renderer as renderer:
            renderer.set_source(self.outer)
            renderer.start()
        assert self.renderer.started is False
        assert ("stop", "outer") in self.log

    def test_shared_pure_element_started_once(self):
        mix = MixPE(self.inner, self.inner)
        self.renderer.set_source(mix)
        self.renderer.start()
        assert self.log.count(("start", "inner")) == 1


class TestRendererMisuse:
    """Test error handling for calls out of order."""

    def test_start_without_source(self):
        with pytest.raises(RuntimeError, match="No source set"):
            NullRenderer().start()

    def test_render_without_source(self):
        with pytest.raises(RuntimeError, match="No source set"):
            NullRenderer().render(0, 10)

    def test_render_before_start(self):
        renderer = NullRenderer()
        renderer.set_source(SamplePE(np.ones(4)))
        with pytest.raises(RuntimeError, match="Not started"):
            renderer.render(0, 10)

    def test_start_twice_strict(self):
        renderer = NullRenderer()
        renderer.set_source(SamplePE(np.ones(4)))
        renderer.start()
        with pytest.raises(RuntimeError, match="Already started"):
            renderer.start()

    def test_set_source_while_started_strict(self):
        renderer = NullRenderer()
        renderer.set_source(SamplePE(np.ones(4)))
        renderer.start()
        with pytest.raises(RuntimeError, match="Cannot set source"):
            renderer.set_source(SamplePE(np.ones(2)))

    def test_set_source_while_started_lenient(self, caplog):
        set_error_mode(ErrorMode.LENIENT)
        renderer = NullRenderer()
        first = SamplePE(np.ones(4))
        renderer.set_source(first)
        renderer.start()
        renderer.set_source(SamplePE(np.ones(2)))
        assert renderer.source is first
        assert "Cannot set source" in caplog.text

    def test_render_before_start_is_fatal_even_when_lenient(self):
        set_error_mode(ErrorMode.LENIENT)
        renderer = NullRenderer()
        renderer.set_source(SamplePE(np.ones(4)))
        with pytest.raises(RuntimeError):
            renderer.render(0, 10)


class TestRendererValidation:
    """Test graph validation in set_source()."""

    def test_shared_impure_element_rejected(self, tmp_path):
        writer = WavWriterPE(SamplePE(np.ones(4)), tmp_path / "out.wav")
        with pytest.raises(ValueError, match="not pure"):
            NullRenderer().set_source(MixPE(writer, writer))

    def test_shared_sample_allowed(self):
        sample = SamplePE(np.ones(4))
        mix = MixPE(DelayPE(GainPE(sample, 0.5), 0), DelayPE(GainPE(sample, 1.0), 8))
        renderer = NullRenderer()
        renderer.set_source(mix)
        assert renderer.channel_count == 1
