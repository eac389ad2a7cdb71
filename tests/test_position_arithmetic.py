import math
import pytest

from positions import (
    StridePosition,
    base_length,
    last_offset,
    offset_to_ordinal,
    ordinal_to_offset,
    stride_count,
    tail_gap,
    walk_backward,
    walk_forward,
)
from traversal import PreconditionViolation, SequenceBase


class TestCounting:
    """Test the counting helpers"""

    def test_stride_count_is_ceiling(self):
        """Test count == ceil(length / step) for a grid of lengths and steps"""
        for length in range(0, 60):
            for step in range(1, 15):
                assert stride_count(length, step) == math.ceil(length / step)

    def test_empty_has_no_last(self):
        """Test an empty base exposes nothing"""
        for step in range(1, 6):
            assert stride_count(0, step) == 0
            assert last_offset(0, step) is None
            assert tail_gap(0, step) == 0

    @pytest.mark.parametrize("length, step, expected", [
        (10, 3, 9),
        (11, 3, 9),
        (12, 3, 9),
        (13, 3, 12),
        (100, 50, 50),
        (5, 2, 4),
        (1, 9, 0),
    ])
    def test_last_offset(self, length, step, expected):
        """Test the base offset of the last exposed element"""
        assert last_offset(length, step) == expected

    def test_tail_gap_reaches_the_end(self):
        """Test last offset + tail gap is the base length"""
        for length in range(1, 40):
            for step in range(1, 12):
                gap = tail_gap(length, step)
                assert 1 <= gap <= step
                assert last_offset(length, step) + gap == length

    def test_tail_gap_exact_multiple(self):
        """Test a full step back from the end when the length divides evenly"""
        assert tail_gap(9, 3) == 3
        assert tail_gap(10, 3) == 1
        assert tail_gap(11, 3) == 2


class TestOrdinals:
    """Test mapping between view ordinals and base offsets"""

    def test_ordinal_to_offset(self):
        """Test ordinals map to multiples of step, count maps to the length"""
        assert ordinal_to_offset(0, 10, 3) == 0
        assert ordinal_to_offset(3, 10, 3) == 9
        assert ordinal_to_offset(4, 10, 3) == 10
        assert ordinal_to_offset(0, 0, 3) == 0

    @pytest.mark.parametrize("ordinal", [-1, 5])
    def test_ordinal_out_of_range(self, ordinal):
        """Test ordinals outside 0...count are refused"""
        with pytest.raises(PreconditionViolation):
            ordinal_to_offset(ordinal, 10, 3)

    def test_offset_to_ordinal(self):
        """Test base offsets map back to ordinals"""
        assert offset_to_ordinal(9, 10, 3) == 3
        assert offset_to_ordinal(10, 10, 3) == 4
        assert offset_to_ordinal(10, 11, 5) == 2
        assert offset_to_ordinal(0, 0, 7) == 0

    @pytest.mark.parametrize("offset", [1, 3, 11, -2])
    def test_offset_not_a_boundary(self, offset):
        """Test offsets that are not exposed positions are refused"""
        with pytest.raises(PreconditionViolation):
            offset_to_ordinal(offset, 10, 2)

    def test_inverse(self):
        """Test the two mappings undo each other on every exposed ordinal"""
        length, step = 23, 4
        for ordinal in range(stride_count(length, step) + 1):
            offset = ordinal_to_offset(ordinal, length, step)
            assert offset_to_ordinal(offset, length, step) == ordinal


class TestWalking:
    """Test moving base positions one step at a time"""

    def test_walk_forward_stops_at_end(self):
        """Test the walk is clamped to the end position"""
        base = SequenceBase(range(5))
        assert walk_forward(base, 0, 3) == (3, 3)
        assert walk_forward(base, 3, 4) == (5, 2)
        assert walk_forward(base, 5, 4) == (5, 0)

    def test_walk_backward(self):
        """Test walking back and refusing to pass the start"""
        base = SequenceBase(range(5))
        assert walk_backward(base, 5, 2) == 3
        assert walk_backward(base, 2, 2) == 0
        with pytest.raises(PreconditionViolation):
            walk_backward(base, 2, 3)

    def test_base_length(self):
        """Test the length of a random-access base"""
        assert base_length(SequenceBase(range(42))) == 42
        assert base_length(SequenceBase([])) == 0


class TestStridePosition:
    """Test the position type"""

    def test_equality_and_hash(self):
        """Test positions compare and hash by their base position"""
        assert StridePosition(3) == StridePosition(3)
        assert StridePosition(3) != StridePosition(4)
        assert len({StridePosition(3), StridePosition(3), StridePosition(6)}) == 2

    def test_immutable(self):
        """Test positions cannot be moved in place"""
        position = StridePosition(3)
        with pytest.raises(AttributeError):
            position.base = 6
