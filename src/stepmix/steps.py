"""
Step sequences: one measure's subdivisions for an instrument or track.

Copyright (c) 2026 stepmix contributors

MIT License
"""

from __future__ import annotations

from itertools import zip_longest
from typing import Iterable, Iterator, NamedTuple, Union, overload

# Velocity and frequency of a played step without a pitch token.
PLAY_VELOCITY = 255
REFERENCE_FREQUENCY = 440.0


class Step(NamedTuple):
    """
    One subdivision of a measure.

    velocity gates playback (0 = silent, 1..255 = played). frequency is a
    pitch hint in Hz carried as metadata; samples are never retuned.
    """
    velocity: int
    frequency: float

    @property
    def active(self) -> bool:
        """True when this step triggers its sample."""
        return self.velocity > 0


SILENT_STEP = Step(0, 0.0)
PLAY_STEP = Step(PLAY_VELOCITY, REFERENCE_FREQUENCY)


class Steps:
    """
    An ordered sequence of Step values, one per subdivision.

    The length is the number of subdivisions in the measure; sixteen is
    conventional but not required.

    Example:
        hat = Steps.from_gates("x-x-")
        off = Steps.from_gates("-x-x")
        both = hat.union(off)     # all four steps active
        both.gates()              # [True, True, True, True]
    """

    def __init__(self, steps: Iterable[Step] = ()):
        self._steps: list[Step] = [Step(int(v), float(f)) for v, f in steps]

    @classmethod
    def zeros(cls, n: int) -> Steps:
        """Create n inactive steps."""
        if n < 0:
            raise ValueError(f"step count must be non-negative, got {n}")
        return cls([SILENT_STEP] * n)

    @classmethod
    def from_gates(cls, gates: Iterable[Union[bool, int, str]]) -> Steps:
        """
        Build a sequence from gate values.

        Accepts booleans/ints (truthy = played) or the characters 'x' and '-'.
        Played steps use the reference pitch.
        """
        steps = []
        for gate in gates:
            if isinstance(gate, str):
                if gate not in ("x", "-"):
                    raise ValueError(f"gate characters must be 'x' or '-', got {gate!r}")
                gate = gate == "x"
            steps.append(PLAY_STEP if gate else SILENT_STEP)
        return cls(steps)

    def push(self, velocity: int, frequency: float) -> None:
        """Append one step. Only the grammar builds sequences this way."""
        if not 0 <= velocity <= 255:
            raise ValueError(f"velocity must be in [0, 255], got {velocity}")
        if frequency < 0.0:
            raise ValueError(f"frequency must be non-negative, got {frequency}")
        self._steps.append(Step(int(velocity), float(frequency)))

    def union(self, other: Steps) -> Steps:
        """
        Combine two sequences step by step.

        At each position the step with the higher velocity wins; on a tie the
        step from `other` is kept. A shorter operand behaves as if padded with
        silent steps, so the result is as long as the longer operand.

        Args:
            other: The sequence to combine with

        Returns:
            A new Steps; neither operand is modified
        """
        combined = []
        for mine, theirs in zip_longest(self._steps, other._steps, fillvalue=SILENT_STEP):
            combined.append(mine if mine.velocity > theirs.velocity else theirs)
        return Steps(combined)

    def gates(self) -> list[bool]:
        """Per-step activity (velocity > 0)."""
        return [step.active for step in self._steps]

    def active_indices(self) -> list[int]:
        """Indices of the steps that trigger playback."""
        return [i for i, step in enumerate(self._steps) if step.active]

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    @overload
    def __getitem__(self, index: int) -> Step: ...

    @overload
    def __getitem__(self, index: slice) -> Steps: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Steps(self._steps[index])
        return self._steps[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Steps):
            return NotImplemented
        return self._steps == other._steps

    def __str__(self) -> str:
        return "".join("x" if step.active else "-" for step in self._steps)

    def __repr__(self) -> str:
        return f"Steps({str(self)!r})"
