"""
Lazy strided views.

`strided_view(base, step)` exposes every `step`-th element of `base` without
copying it. The class of the returned view matches the base's traversal tier:

    forward        -> StridedSequence
    indexable      -> StridedIndexable
    bidirectional  -> StridedBidirectional
    random_access  -> StridedRandomAccess

A view only ever holds its base and its step; every traversal is delegated to
the base through the helpers in `positions`.
"""

import logging
from itertools import islice, zip_longest

from pydantic import ValidationError

from models import StrideConfig, Tier, ViewSummary
from positions import (
    StridePosition,
    base_length,
    base_offset,
    last_offset,
    offset_to_ordinal,
    ordinal_to_offset,
    stride_count,
    tail_gap,
    walk_backward,
    walk_forward,
)
from traversal import (
    BidirectionalCollection,
    IndexableCollection,
    InvalidStepError,
    PreconditionViolation,
    RandomAccessCollection,
    Traversable,
    as_collection,
)

logger = logging.getLogger(__name__)

_MISSING = object()


class StridedView(Traversable):
    """Every `step`-th element of a base collection, starting with the first."""

    def __init__(self, base: Traversable, step: int):
        self._base = base
        self._step = step

    @property
    def base(self) -> Traversable:
        return self._base

    @property
    def step(self) -> int:
        return self._step

    def striding(self, step: int) -> "StridedView":
        """Stride this view again; the result is a single view over the same base."""
        return strided_view(self, step)

    def describe(self) -> ViewSummary:
        count = self.count() if isinstance(self, RandomAccessCollection) else None
        return ViewSummary(
            tier=self.tier,
            step=self._step,
            base_type=type(self._base).__name__,
            count=count,
        )

    def __eq__(self, other):
        if not isinstance(other, StridedView):
            return NotImplemented
        if (
            isinstance(self, RandomAccessCollection)
            and isinstance(other, RandomAccessCollection)
            and self.count() != other.count()
        ):
            return False
        for a, b in zip_longest(self, other, fillvalue=_MISSING):
            if a is _MISSING or b is _MISSING or a != b:
                return False
        return True

    def __repr__(self):
        return f"{type(self).__name__}({self._base!r}, step={self._step})"


class StridedSequence(StridedView):
    """Strided view of a forward-only source."""

    def __iter__(self):
        # islice consumes `step` source elements per produced element
        return islice(iter(self._base), 0, None, self._step)


class StridedIndexable(StridedView, IndexableCollection):
    """Strided view of an indexable, forward-walkable collection."""

    @property
    def start_position(self) -> StridePosition:
        return StridePosition(self._base.start_position)

    @property
    def end_position(self) -> StridePosition:
        return StridePosition(self._base.end_position)

    def element_at(self, position: StridePosition):
        if position.base == self._base.end_position:
            raise PreconditionViolation("Reading the end position")
        return self._base.element_at(position.base)

    def position_after(self, position: StridePosition) -> StridePosition:
        if position.base == self._base.end_position:
            raise PreconditionViolation("Advancing past end position")
        reached, _ = walk_forward(self._base, position.base, self._step)
        return StridePosition(reached)


class StridedBidirectional(StridedIndexable, BidirectionalCollection):
    """Strided view of a bidirectional collection."""

    def position_before(self, position: StridePosition) -> StridePosition:
        if position.base == self._base.start_position:
            raise PreconditionViolation("Stepping before start position")
        if position.base == self._base.end_position:
            # The end sentinel sits `length % step` past the last exposed
            # element, or a full step when the length divides evenly.
            gap = tail_gap(base_length(self._base), self._step)
        else:
            gap = self._step
        return StridePosition(walk_backward(self._base, position.base, gap))


class StridedRandomAccess(StridedBidirectional, RandomAccessCollection):
    """Strided view of a random-access collection; every operation is O(1)."""

    def _ordinal(self, position: StridePosition) -> int:
        return offset_to_ordinal(
            base_offset(self._base, position.base), self._base.count(), self._step
        )

    def _position_at(self, ordinal: int) -> StridePosition:
        offset = ordinal_to_offset(ordinal, self._base.count(), self._step)
        return StridePosition(
            self._base.position_offset(self._base.start_position, offset)
        )

    def count(self) -> int:
        return stride_count(self._base.count(), self._step)

    def element_at(self, position: StridePosition):
        self._ordinal(position)
        return super().element_at(position)

    def position_offset(self, position: StridePosition, k: int, limit=None):
        ordinal = self._ordinal(position)
        target = ordinal + k
        if limit is not None:
            bound = self._ordinal(limit)
            if ordinal <= bound < target or target < bound <= ordinal:
                return None
        count = self.count()
        if not 0 <= target <= count:
            raise PreconditionViolation(
                f"Offset {k} from ordinal {ordinal} leaves 0...{count}"
            )
        return self._position_at(target)

    def position_after(self, position: StridePosition) -> StridePosition:
        if position.base == self._base.end_position:
            raise PreconditionViolation("Advancing past end position")
        return self.position_offset(position, 1)

    def position_before(self, position: StridePosition) -> StridePosition:
        if position.base == self._base.start_position:
            raise PreconditionViolation("Stepping before start position")
        return self.position_offset(position, -1)

    def distance(self, start: StridePosition, end: StridePosition) -> int:
        return self._ordinal(end) - self._ordinal(start)

    def last(self, default=None):
        offset = last_offset(self._base.count(), self._step)
        if offset is None:
            return default
        return self._base.element_at(
            self._base.position_offset(self._base.start_position, offset)
        )

    def __iter__(self):
        for ordinal in range(self.count()):
            yield self._base.element_at(self._position_at(ordinal).base)


_VIEW_CLASSES = {
    Tier.FORWARD: StridedSequence,
    Tier.INDEXABLE: StridedIndexable,
    Tier.BIDIRECTIONAL: StridedBidirectional,
    Tier.RANDOM_ACCESS: StridedRandomAccess,
}


def strided_view(base, step: int) -> StridedView:
    """
    Return a lazy view of every `step`-th element of `base`.

    `base` may be any iterable; sequences keep random access, other iterables
    are walked forward only. Striding a strided view composes the steps into a
    single view over the innermost base. Raises InvalidStepError when `step`
    is not a positive integer.
    """
    try:
        config = StrideConfig(step=step)
    except ValidationError as e:
        raise InvalidStepError(
            f"Invalid step {step!r}: {e.errors()[0]['msg']}"
        ) from e

    if isinstance(base, StridedView):
        logger.debug(
            f"Flattening stride by {config.step} over stride by {base.step} "
            f"into stride by {base.step * config.step}"
        )
        return strided_view(base.base, base.step * config.step)

    collection = as_collection(base)
    view_class = _VIEW_CLASSES[collection.tier]
    logger.debug(f"Built {view_class.__name__} over {type(collection).__name__} with step {config.step}")
    return view_class(collection, config.step)
