"""
Instrumentation: which pattern instruments each sample file plays.

Copyright (c) 2026 stepmix contributors

MIT License

An instrumentation file is a JSON object mapping sample file names (relative
to the samples directory) to one instrument name or a list of them:

    {
      "hat.wav": ["hihat1", "hihat2"],
      "kick.wav": "kick"
    }
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Iterator, Union

from stepmix.errors import FileDoesNotExistError, InstrumentationError
from stepmix.logger import get_logger

if TYPE_CHECKING:
    from stepmix.pattern import Pattern

logger = get_logger(__name__)

InstrumentValue = Union[str, Iterable[str]]


class Instrumentation(Mapping):
    """
    Immutable mapping of sample file name -> frozenset of instrument names.

    Several instruments may share a sample file; Pattern.bind() merges their
    steps into one track per file.

    Args:
        mapping: Sample file -> instrument name or iterable of names
    """

    def __init__(self, mapping: Mapping[str, InstrumentValue] = None):
        self._files: dict[str, frozenset[str]] = {}
        for sample_file, instruments in (mapping or {}).items():
            if isinstance(instruments, str):
                instruments = [instruments]
            self._files[str(sample_file)] = frozenset(instruments)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> Instrumentation:
        """
        Load an instrumentation file.

        Raises:
            FileDoesNotExistError: if path is not a regular file
            InstrumentationError: if the JSON is malformed or has the wrong shape
        """
        json_path = Path(path).expanduser()
        if not json_path.is_file():
            raise FileDoesNotExistError(json_path)
        try:
            with json_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise InstrumentationError(json_path, f"malformed JSON: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise InstrumentationError(json_path, f"not valid UTF-8: {exc}") from exc

        if not isinstance(data, dict):
            raise InstrumentationError(json_path, "must contain a top-level object")
        for sample_file, value in data.items():
            if isinstance(value, str):
                continue
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise InstrumentationError(
                    json_path,
                    f"{sample_file!r} must map to an instrument name or a list of names",
                )

        instrumentation = cls(data)
        logger.info(f"Loaded instrumentation {json_path}: {len(instrumentation)} sample files")
        return instrumentation

    @classmethod
    def from_pattern(cls, pattern: Pattern, extension: str = ".wav") -> Instrumentation:
        """One sample file per instrument, named <instrument><extension>."""
        return cls({f"{instrument}{extension}": instrument for instrument in pattern})

    def __getitem__(self, sample_file: str) -> frozenset[str]:
        return self._files[sample_file]

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        body = ", ".join(
            f"{name!r}: {sorted(instruments)}" for name, instruments in self._files.items()
        )
        return f"Instrumentation({{{body}}})"
