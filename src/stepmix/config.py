"""
Audio format constants and error handling utilities for stepmix.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from dataclasses import dataclass
from enum import Enum
from typing import Type, Optional

from stepmix.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AudioFormat:
    """
    Fixed output format shared by sample decoding, mixing and playback.

    Passed explicitly to the components that need it; there is no way to
    change it at runtime.

    Attributes:
        channels: Number of playback channels
        sample_rate: Playback sample rate in Hz
        wav_subtype: soundfile subtype used when exporting
        device_dtype: Sample representation handed to the output device
    """
    channels: int = 1
    sample_rate: int = 44_100
    wav_subtype: str = "PCM_16"
    device_dtype: str = "int16"

    def seconds_to_samples(self, seconds: float) -> int:
        """Convert seconds to a whole number of frames (nearest sample)."""
        return int(round(seconds * self.sample_rate))


DEFAULT_AUDIO_FORMAT = AudioFormat()


class ErrorMode(Enum):
    """
    Error handling mode for renderer and graph misuse.

    STRICT: All errors raise exceptions (default, fail-fast)
    LENIENT: Non-fatal errors become warnings, execution continues
    """
    STRICT = "strict"
    LENIENT = "lenient"


DEFAULT_ERROR_MODE: ErrorMode = ErrorMode.STRICT


def set_error_mode(mode: ErrorMode) -> None:
    """Set the default error mode."""
    global DEFAULT_ERROR_MODE
    DEFAULT_ERROR_MODE = mode


def get_error_mode() -> ErrorMode:
    """Get the current default error mode."""
    return DEFAULT_ERROR_MODE


def handle_error(
    message: str,
    fatal: bool = False,
    error_mode: Optional[ErrorMode] = None,
    exception_class: Type[Exception] = RuntimeError,
) -> bool:
    """
    Handle an error based on the error mode.

    In STRICT mode (or if fatal=True), raises an exception.
    In LENIENT mode (and fatal=False), logs a warning and returns True.

    Args:
        message: Error description
        fatal: If True, always raise regardless of mode
        error_mode: Override the default error mode (optional)
        exception_class: Exception type to raise (default: RuntimeError)

    Returns:
        True if the caller should continue (warning was issued)

    Raises:
        exception_class: If in STRICT mode or fatal=True

    Example:
        if self._started:
            if handle_error("Already started."):
                return  # lenient: carry on without restarting
    """
    mode = error_mode if error_mode is not None else DEFAULT_ERROR_MODE

    if fatal or mode == ErrorMode.STRICT:
        raise exception_class(message)
    logger.warning(message)
    return True
