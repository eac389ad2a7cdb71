"""
Traversal contract for the collections a strided view can wrap.

Four tiers, each a strict superset of the previous one:

- Traversable: produces its elements in order, nothing more.
- IndexableCollection: start/end positions, element access by position and
  moving one position forward.
- BidirectionalCollection: can also move one position backward.
- RandomAccessCollection: jumps by an arbitrary offset, measures distances
  and counts its elements in O(1).

Positions are opaque. A collection's end position is a sentinel that is never
addressable.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Iterator

from models import Tier


class StrideError(Exception):
    """Base class for errors raised by striding views."""
    pass


class InvalidStepError(StrideError, ValueError):
    """Raised when a view is built with a step that is not a positive integer."""
    pass


class PreconditionViolation(StrideError, IndexError):
    """Raised when a position is moved or read outside its collection's bounds."""
    pass


class Traversable(ABC):
    """Forward-only collection: a lazy, possibly infinite, ordered source."""
    tier = Tier.FORWARD

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        ...

    def to_list(self):
        return list(self)

    def first(self, default=None):
        """Return the first element, or default if empty"""
        for item in self:
            return item
        return default

    def last(self, default=None):
        """Return the last element, or default if empty"""
        last_item = default
        for item in self:
            last_item = item
        return last_item

    def count(self) -> int:
        """Return the count of elements"""
        count = 0
        for _ in self:
            count += 1
        return count


class IndexableCollection(Traversable):
    """Collection addressable by position, walkable forward one position at a time."""
    tier = Tier.INDEXABLE

    @property
    @abstractmethod
    def start_position(self):
        ...

    @property
    @abstractmethod
    def end_position(self):
        ...

    @abstractmethod
    def element_at(self, position):
        ...

    @abstractmethod
    def position_after(self, position):
        ...

    def is_empty(self) -> bool:
        return self.start_position == self.end_position

    def positions(self) -> Iterator[Any]:
        """Yield every addressable position in order (the end sentinel excluded)"""
        position = self.start_position
        end = self.end_position
        while position != end:
            yield position
            position = self.position_after(position)

    def __iter__(self):
        for position in self.positions():
            yield self.element_at(position)


class BidirectionalCollection(IndexableCollection):
    """Indexable collection that can also step one position backward."""
    tier = Tier.BIDIRECTIONAL

    @abstractmethod
    def position_before(self, position):
        ...

    def last(self, default=None):
        if self.is_empty():
            return default
        return self.element_at(self.position_before(self.end_position))

    def __reversed__(self):
        position = self.end_position
        start = self.start_position
        while position != start:
            position = self.position_before(position)
            yield self.element_at(position)

    def reversed(self) -> "BidirectionalCollection":
        """Lazy reversed view keeping this collection's tier."""
        return reversed_collection(self)


class RandomAccessCollection(BidirectionalCollection):
    """Bidirectional collection with O(1) offsetting, distance and count."""
    tier = Tier.RANDOM_ACCESS

    @abstractmethod
    def position_offset(self, position, k: int, limit=None):
        """
        Return the position `k` steps away from `position`.

        When `limit` is given and the move would pass it, return None instead.
        """
        ...

    @abstractmethod
    def distance(self, start, end) -> int:
        ...

    @abstractmethod
    def count(self) -> int:
        ...

    def position_after(self, position):
        return self.position_offset(position, 1)

    def position_before(self, position):
        return self.position_offset(position, -1)

    def is_empty(self) -> bool:
        return self.count() == 0

    def __len__(self):
        return self.count()

    def __getitem__(self, index):
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(
                f"{type(self).__name__} indices must be integers, not {type(index).__name__}"
            )
        count = self.count()
        if index < 0:
            index += count
        if not 0 <= index < count:
            raise PreconditionViolation(f"index {index} out of range for {count} elements")
        return self.element_at(self.position_offset(self.start_position, index))


class IterableBase(Traversable):
    """Adapts any Python iterable (generators included) to the forward-only tier."""

    def __init__(self, source: Iterable):
        self._source = source

    def __iter__(self):
        return iter(self._source)

    def __repr__(self):
        return f"{type(self).__name__}({self._source!r})"


class SequenceBase(RandomAccessCollection):
    """
    Adapts a `collections.abc.Sequence` (list, tuple, range, str, ...) to the
    random-access tier. Positions are integer offsets, `len(sequence)` being the
    end sentinel.
    """

    def __init__(self, sequence: Sequence):
        self._sequence = sequence

    @property
    def start_position(self) -> int:
        return 0

    @property
    def end_position(self) -> int:
        return len(self._sequence)

    def _check(self, position):
        if isinstance(position, bool) or not isinstance(position, int):
            raise PreconditionViolation(f"Not a position of this sequence: {position!r}")
        if not 0 <= position <= len(self._sequence):
            raise PreconditionViolation(
                f"Position {position} outside 0...{len(self._sequence)}"
            )

    def element_at(self, position):
        self._check(position)
        if position == len(self._sequence):
            raise PreconditionViolation("Reading the end position")
        return self._sequence[position]

    def position_after(self, position):
        self._check(position)
        if position == len(self._sequence):
            raise PreconditionViolation("Advancing past end position")
        return position + 1

    def position_before(self, position):
        self._check(position)
        if position == 0:
            raise PreconditionViolation("Stepping before start position")
        return position - 1

    def position_offset(self, position, k, limit=None):
        self._check(position)
        target = position + k
        if limit is not None and (position <= limit < target or target < limit <= position):
            return None
        if not 0 <= target <= len(self._sequence):
            raise PreconditionViolation(
                f"Offset {k} from {position} leaves 0...{len(self._sequence)}"
            )
        return target

    def distance(self, start, end):
        self._check(start)
        self._check(end)
        return end - start

    def count(self):
        return len(self._sequence)

    def __iter__(self):
        return iter(self._sequence)

    def __repr__(self):
        return f"{type(self).__name__}({self._sequence!r})"


@dataclass(frozen=True)
class ReversedPosition:
    """Position of a reversed collection: addresses the element just before `base`."""
    base: Any


class ReversedBidirectional(BidirectionalCollection):
    """Lazy reversed view of a bidirectional collection."""

    def __init__(self, base: BidirectionalCollection):
        self._base = base

    @property
    def base(self):
        return self._base

    @property
    def start_position(self):
        return ReversedPosition(self._base.end_position)

    @property
    def end_position(self):
        return ReversedPosition(self._base.start_position)

    def element_at(self, position):
        if position == self.end_position:
            raise PreconditionViolation("Reading the end position")
        return self._base.element_at(self._base.position_before(position.base))

    def position_after(self, position):
        if position == self.end_position:
            raise PreconditionViolation("Advancing past end position")
        return ReversedPosition(self._base.position_before(position.base))

    def position_before(self, position):
        if position == self.start_position:
            raise PreconditionViolation("Stepping before start position")
        return ReversedPosition(self._base.position_after(position.base))

    def reversed(self):
        return self._base

    def __reversed__(self):
        return iter(self._base)

    def __repr__(self):
        return f"{type(self).__name__}({self._base!r})"


class ReversedRandomAccess(ReversedBidirectional, RandomAccessCollection):
    """Lazy reversed view of a random-access collection."""

    def position_offset(self, position, k, limit=None):
        base_limit = None if limit is None else limit.base
        moved = self._base.position_offset(position.base, -k, base_limit)
        if moved is None:
            return None
        return ReversedPosition(moved)

    def distance(self, start, end):
        return self._base.distance(end.base, start.base)

    def count(self):
        return self._base.count()


def reversed_collection(base) -> BidirectionalCollection:
    """Reverse a bidirectional (or random-access) collection without copying it."""
    base = as_collection(base)
    if isinstance(base, RandomAccessCollection):
        return ReversedRandomAccess(base)
    if isinstance(base, BidirectionalCollection):
        return ReversedBidirectional(base)
    raise TypeError(f"Cannot reverse {type(base).__name__}: it cannot step backward")


def as_collection(obj) -> Traversable:
    """Return `obj` as a collection of the strongest tier it can honour."""
    if isinstance(obj, Traversable):
        return obj
    if isinstance(obj, Sequence):
        return SequenceBase(obj)
    if isinstance(obj, Iterable):
        return IterableBase(obj)
    raise TypeError(f"{type(obj).__name__} object is not iterable")


def tier_of(collection) -> Tier:
    return as_collection(collection).tier
