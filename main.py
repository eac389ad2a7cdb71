from itertools import count, islice
from time import perf_counter

from strided import strided_view
from traversal import reversed_collection


def noisy_source(n):
    # Report every element the source hands out so the skipping is visible
    for x in range(n):
        print(f"  producing {x} ...")
        yield x


print("\n--- Demo: random access (no copy, O(1) positions) ---")
data = range(0, 10_000_000)  # big source; never materialized
view = strided_view(data, 3)
print(f"{view!r}")
print(f"count={view.count()}  last={view.last()}  view[1234]={view[1234]}")
start = view.start_position
print(f"offset 5 from start -> {view.element_at(view.position_offset(start, 5))}")
print(f"distance start..end -> {view.distance(start, view.end_position)}")
print(f"summary: {view.describe()}")

print("\n--- Demo: forward-only source (consumes `step` elements per result) ---")
forward = strided_view(noisy_source(10), 4)
print(f"Result: {list(forward)}")

print("\n--- Demo: infinite source stays lazy ---")
t0 = perf_counter()
evens_of_ten = strided_view(count(0, 10), 2)
print(f"First five: {list(islice(evens_of_ten, 5))}  ({perf_counter() - t0:.4f}s)")

print("\n--- Demo: composition flattens ---")
nested = strided_view(range(0, 11), 2).striding(3)
print(f"{nested!r} -> {nested.to_list()}")

print("\n--- Demo: reversal ---")
a = [0, 1, 2, 3, 4, 5]
print(f"strided by 3, reversed: {list(reversed(strided_view(a, 3)))}")
print(f"reversed, strided by 2: {strided_view(reversed_collection(a), 2).to_list()}")
