import pytest
import gc
import tracemalloc
from itertools import count, islice

from strided import strided_view
from utils import validate_lazy_view


class TestMemoryEfficiency:
    """Test that strided views never copy their base"""

    def test_large_range_not_materialized(self):
        """Test count and last over a huge range use constant memory"""
        gc.collect()
        tracemalloc.start()
        baseline = tracemalloc.get_traced_memory()[0]

        view = strided_view(range(10_000_000), 3)
        total = view.count()
        last = view.last()
        middle = view[1_000_000]

        current, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        assert total == 3_333_334, f"Unexpected count: {total}"
        assert last == 9_999_999, f"Unexpected last: {last}"
        assert middle == 3_000_000, f"Unexpected element: {middle}"
        memory_used = peak - baseline
        assert memory_used < 1_000_000, f"Used too much memory: {memory_used} bytes"

    def test_partial_iteration_scales_with_output(self):
        """Test memory scales with what is consumed, not with the input size"""
        gc.collect()
        tracemalloc.start()
        baseline = tracemalloc.get_traced_memory()[0]

        result = list(islice(strided_view(range(5_000_000), 1000), 10))

        current, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        assert result == [i * 1000 for i in range(10)]
        memory_used = peak - baseline
        assert memory_used < 1_000_000, f"Used too much memory: {memory_used} bytes"

    def test_view_reads_through_to_base(self):
        """Test that changes to the base are visible through the view"""
        source = [1, 2, 3, 4]
        view = strided_view(source, 2)
        source[2] = 99
        assert view.to_list() == [1, 99], "View should not hold a copy of its base"

    def test_views_hold_only_base_and_step(self):
        """Test laziness validation on every tier"""
        for source in ([1, 2, 3], range(10), iter([1, 2]), "swift"):
            assert validate_lazy_view(strided_view(source, 2))
        assert validate_lazy_view(strided_view(range(30), 2).striding(5))
        assert not validate_lazy_view([1, 3, 5])

    def test_forward_source_consumed_on_demand(self):
        """Test a forward-only source is read only as far as results are requested"""
        consumed = 0

        def source():
            nonlocal consumed
            for x in range(100):
                consumed += 1
                yield x

        view = strided_view(source(), 4)
        assert consumed == 0, "Nothing should be read when the view is built"

        result = list(islice(view, 2))
        assert result == [0, 4]
        assert consumed == 5, f"Expected 5 elements read, got {consumed}"

    def test_forward_source_exhausted_mid_skip(self):
        """Test iteration ends cleanly when the source runs out while skipping"""
        assert list(strided_view(iter(range(6)), 4)) == [0, 4]
        assert list(strided_view(iter(range(5)), 4)) == [0, 4]

    def test_infinite_source(self):
        """Test that an infinite source is a valid base"""
        view = strided_view(count(), 5)
        assert list(islice(view, 3)) == [0, 5, 10]
