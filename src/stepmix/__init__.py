"""
stepmix - a step sequencer that mixes sample files from a text pattern.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from stepmix.config import (
    AudioFormat,
    DEFAULT_AUDIO_FORMAT,
    ErrorMode,
    set_error_mode,
    get_error_mode,
    handle_error,
)
from stepmix.errors import (
    StepmixError,
    FileDoesNotExistError,
    PatternParseError,
    DuplicateInstrumentError,
    InstrumentationError,
    SampleResolutionError,
    AudioDeviceError,
    OutputFileError,
)
from stepmix.extent import Extent
from stepmix.snippet import Snippet
from stepmix.processing_element import ProcessingElement, SourcePE
from stepmix.renderer import Renderer
from stepmix.null_renderer import NullRenderer
from stepmix.sample_pe import SamplePE
from stepmix.gain_pe import GainPE
from stepmix.delay_pe import DelayPE
from stepmix.mix_pe import MixPE
from stepmix.crop_pe import CropPE
from stepmix.loop_pe import LoopPE
from stepmix.wav_writer_pe import WavWriterPE
from stepmix.steps import Step, Steps
from stepmix.amplitude import Amplitude
from stepmix.grammar import GrammarError
from stepmix.tempo import Tempo
from stepmix.mixer import Track, Tracks, Sources
from stepmix.instrumentation import Instrumentation
from stepmix.pattern import Pattern
from stepmix.playback import repeat_source, play_repeat, play_once, render_to_file
from stepmix.logger import set_global_logging, get_logger

__version__ = "0.1.0"

# sounddevice loads PortAudio on import, which fails on machines without an
# audio stack; only pay for it when AudioRenderer is actually used.
_lazy_imports = {
    "AudioRenderer": ("stepmix.audio_renderer", "AudioRenderer"),
}


def __getattr__(name):
    if name in _lazy_imports:
        module_name, attr_name = _lazy_imports[name]
        import importlib
        module = importlib.import_module(module_name)
        return getattr(module, attr_name)
    raise AttributeError(f"module 'stepmix' has no attribute {name!r}")


__all__ = [
    # Configuration
    "AudioFormat",
    "DEFAULT_AUDIO_FORMAT",
    "ErrorMode",
    "set_error_mode",
    "get_error_mode",
    "handle_error",
    # Errors
    "StepmixError",
    "FileDoesNotExistError",
    "PatternParseError",
    "DuplicateInstrumentError",
    "InstrumentationError",
    "SampleResolutionError",
    "AudioDeviceError",
    "OutputFileError",
    "GrammarError",
    # Signal graph
    "Extent",
    "Snippet",
    "ProcessingElement",
    "SourcePE",
    "SamplePE",
    "GainPE",
    "DelayPE",
    "MixPE",
    "CropPE",
    "LoopPE",
    "WavWriterPE",
    # Renderers
    "Renderer",
    "NullRenderer",
    "AudioRenderer",
    # Sequencing
    "Step",
    "Steps",
    "Amplitude",
    "Tempo",
    "Pattern",
    "Instrumentation",
    "Track",
    "Tracks",
    "Sources",
    # Playback
    "repeat_source",
    "play_repeat",
    "play_once",
    "render_to_file",
    # Logging
    "set_global_logging",
    "get_logger",
]
