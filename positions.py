"""
Position arithmetic for strided views.

A strided view exposes the base positions at offsets 0, step, 2*step, ...
below the base length. Ordinal k of the view maps to base offset k*step; the
end sentinel is ordinal `count` and maps to the base's own end position, which
is generally not a multiple of step away from the start.

The integer helpers here are pure. The walking helpers move a base position
using only the primitives of the base's tier.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from traversal import (
    IndexableCollection,
    PreconditionViolation,
    RandomAccessCollection,
)


@dataclass(frozen=True)
class StridePosition:
    """Position of a strided view; wraps the matching base position."""
    base: Any


def stride_count(length: int, step: int) -> int:
    """Number of exposed elements: ceil(length / step)."""
    return (length + step - 1) // step


def last_offset(length: int, step: int) -> Optional[int]:
    """Base offset of the last exposed element, None when nothing is exposed."""
    count = stride_count(length, step)
    if count == 0:
        return None
    return step * (count - 1)


def tail_gap(length: int, step: int) -> int:
    """
    Distance from the last exposed base offset to the base end.

    This is how far `position_before` must move back from the end sentinel:
    a full step when the length is an exact multiple, the remainder otherwise.
    """
    if length == 0:
        return 0
    return length % step or step


def ordinal_to_offset(ordinal: int, length: int, step: int) -> int:
    """Base offset of view ordinal `ordinal`; ordinal == count maps to `length`."""
    count = stride_count(length, step)
    if not 0 <= ordinal <= count:
        raise PreconditionViolation(f"Ordinal {ordinal} outside 0...{count}")
    if ordinal == count:
        return length
    return ordinal * step


def offset_to_ordinal(offset: int, length: int, step: int) -> int:
    """Inverse of `ordinal_to_offset`; rejects offsets that are not stride boundaries."""
    if offset == length:
        return stride_count(length, step)
    if not 0 <= offset < length or offset % step:
        raise PreconditionViolation(
            f"Base offset {offset} is not a position of a stride by {step} over {length} elements"
        )
    return offset // step


def walk_forward(base: IndexableCollection, position, n: int) -> Tuple[Any, int]:
    """
    Advance `position` by up to `n` base positions, stopping at the end.

    Returns the reached position and how many moves were made.
    """
    end = base.end_position
    moved = 0
    while moved < n and position != end:
        position = base.position_after(position)
        moved += 1
    return position, moved


def walk_backward(base, position, n: int):
    """Move `position` back by exactly `n` base positions."""
    start = base.start_position
    for _ in range(n):
        if position == start:
            raise PreconditionViolation("Stepping before start position")
        position = base.position_before(position)
    return position


def base_length(base: IndexableCollection) -> int:
    """Element count of an indexable base, walking it when it cannot count in O(1)."""
    if isinstance(base, RandomAccessCollection):
        return base.count()
    length = 0
    for _ in base.positions():
        length += 1
    return length


def base_offset(base: RandomAccessCollection, position) -> int:
    return base.distance(base.start_position, position)
