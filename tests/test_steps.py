"""
Tests for Step and Steps.

Copyright (c) 2026 stepmix contributors

MIT License
"""

import pytest

from stepmix.steps import Step, Steps, SILENT_STEP, PLAY_STEP


class TestStep:
    """Test the Step value type."""

    def test_active_when_velocity_positive(self):
        assert Step(1, 0.0).active is True
        assert Step(255, 440.0).active is True

    def test_inactive_when_velocity_zero(self):
        assert Step(0, 440.0).active is False

    def test_constants(self):
        assert SILENT_STEP == (0, 0.0)
        assert PLAY_STEP == (255, 440.0)


class TestStepsConstruction:
    """Test the ways of building a Steps sequence."""

    def test_zeros(self):
        steps = Steps.zeros(4)
        assert len(steps) == 4
        assert all(step == SILENT_STEP for step in steps)

    def test_zeros_empty(self):
        assert len(Steps.zeros(0)) == 0

    def test_zeros_negative_raises(self):
        with pytest.raises(ValueError):
            Steps.zeros(-1)

    def test_from_gate_characters(self):
        steps = Steps.from_gates("x-x-")
        assert list(steps) == [PLAY_STEP, SILENT_STEP, PLAY_STEP, SILENT_STEP]

    def test_from_gate_values(self):
        steps = Steps.from_gates([True, 0, 1, False])
        assert steps.gates() == [True, False, True, False]

    def test_from_gates_rejects_unknown_character(self):
        with pytest.raises(ValueError, match="'x' or '-'"):
            Steps.from_gates("x-o-")

    def test_push(self):
        steps = Steps()
        steps.push(255, 523.25)
        steps.push(0, 0.0)
        assert list(steps) == [Step(255, 523.25), Step(0, 0.0)]

    def test_push_rejects_velocity_out_of_range(self):
        steps = Steps()
        with pytest.raises(ValueError, match="velocity"):
            steps.push(256, 440.0)
        with pytest.raises(ValueError, match="velocity"):
            steps.push(-1, 440.0)

    def test_push_rejects_negative_frequency(self):
        with pytest.raises(ValueError, match="frequency"):
            Steps().push(255, -1.0)


class TestStepsUnion:
    """Test combining two step sequences."""

    def test_higher_velocity_wins_ties_favor_other(self):
        a = Steps([Step(255, 440.0), Step(0, 0.0), Step(100, 523.25)])
        b = Steps([Step(255, 493.88), Step(50, 440.0), Step(100, 0.0)])

        result = a.union(b)

        assert list(result) == [Step(255, 493.88), Step(50, 440.0), Step(100, 0.0)]

    def test_self_wins_with_strictly_higher_velocity(self):
        a = Steps([Step(200, 587.33)])
        b = Steps([Step(100, 440.0)])
        assert list(a.union(b)) == [Step(200, 587.33)]

    def test_union_with_itself_is_identity(self):
        a = Steps.from_gates("x--x-x--")
        assert a.union(a) == a

    def test_complementary_gates(self):
        a = Steps.from_gates("x-x-")
        b = Steps.from_gates("-x-x")
        assert a.union(b).gates() == [True, True, True, True]

    def test_operands_unchanged(self):
        a = Steps.from_gates("x---")
        b = Steps.from_gates("-x--")
        a.union(b)
        assert str(a) == "x---"
        assert str(b) == "-x--"

    def test_shorter_self_is_padded(self):
        result = Steps.from_gates("x-").union(Steps.from_gates("-x-x"))
        assert str(result) == "xx-x"

    def test_shorter_other_is_padded(self):
        result = Steps.from_gates("-x-x").union(Steps.from_gates("x-"))
        assert len(result) == 4
        assert str(result) == "xx-x"


class TestStepsAccess:
    """Test sequence protocol and helpers."""

    def test_active_indices(self):
        assert Steps.from_gates("x--x-x").active_indices() == [0, 3, 5]

    def test_indexing(self):
        steps = Steps.from_gates("-x")
        assert steps[1] == PLAY_STEP
        assert steps[-1] == PLAY_STEP

    def test_slice_returns_steps(self):
        part = Steps.from_gates("x-x-xx")[2:5]
        assert isinstance(part, Steps)
        assert str(part) == "x-x"

    def test_equality(self):
        assert Steps.from_gates("x-") == Steps([PLAY_STEP, SILENT_STEP])
        assert Steps.from_gates("x-") != Steps.from_gates("-x")

    def test_str_and_repr(self):
        steps = Steps.from_gates("x-x-")
        assert str(steps) == "x-x-"
        assert repr(steps) == "Steps('x-x-')"
