"""
Exception types raised by stepmix.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from pathlib import Path
from typing import Optional, Union


class StepmixError(Exception):
    """Base class for every failure surfaced to callers of stepmix."""

    pass


class FileDoesNotExistError(StepmixError):
    """Raised when a pattern or instrumentation path is not a regular file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"file does not exist: {self.path}")


class PatternParseError(StepmixError):
    """Raised when a pattern file line does not match the track grammar."""

    def __init__(self, line: str, line_number: Optional[int] = None, reason: str = ""):
        self.line = line
        self.line_number = line_number
        self.reason = reason
        where = f"line {line_number}" if line_number is not None else "line"
        detail = f" ({reason})" if reason else ""
        super().__init__(f"could not parse {where}: {line!r}{detail}")


class DuplicateInstrumentError(StepmixError):
    """Raised when an instrument name appears on more than one pattern line."""

    def __init__(self, line: str, instrument: str, line_number: Optional[int] = None):
        self.line = line
        self.instrument = instrument
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "line"
        super().__init__(
            f"duplicate instrument {instrument!r} on {where}: {line!r}"
        )


class InstrumentationError(StepmixError):
    """Raised when an instrumentation file cannot be interpreted."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"invalid instrumentation {self.path}: {reason}")


class SampleResolutionError(StepmixError):
    """Raised when a sample file cannot be located or decoded."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot load sample {self.path}: {reason}")


class AudioDeviceError(StepmixError):
    """Raised when no output device is available or playback cannot start."""

    pass


class OutputFileError(StepmixError):
    """Raised when the exported WAV file cannot be created."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot write {self.path}: {reason}")
