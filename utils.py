"""
Utility functions for strided views

Helpers for measuring the cost of traversals and for checking that views
stay lazy and that their positions are consistent in every direction.
"""

import time
import gc
import math
import tracemalloc
import logging
from typing import List, Dict, Any, Sequence

from strided import StridedView, strided_view
from traversal import (
    BidirectionalCollection,
    IndexableCollection,
    PreconditionViolation,
    RandomAccessCollection,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# Global performance tracking
_performance_metrics = {
    "operations": [],
    "total_time_ms": 0.0,
    "total_memory_mb": 0.0,
    "operation_count": 0
}


def _record(performance_info: Dict[str, Any]):
    _performance_metrics["operations"].append(performance_info)
    _performance_metrics["total_time_ms"] += performance_info["execution_time_ms"]
    _performance_metrics["total_memory_mb"] += performance_info["memory_usage_mb"]
    _performance_metrics["operation_count"] += 1


def measure_performance(operation_name: str, func, *args, **kwargs) -> Dict[str, Any]:
    """Measure execution time and peak traced memory of a function call"""
    tracemalloc.start()
    gc.collect()
    start_time = time.perf_counter()

    try:
        result = func(*args, **kwargs)
    except Exception as e:
        execution_time_ms = (time.perf_counter() - start_time) * 1000
        _, peak = tracemalloc.get_traced_memory()
        _record({
            "operation": operation_name,
            "execution_time_ms": execution_time_ms,
            "memory_usage_mb": peak / 1024 / 1024,
            "success": False,
            "error": str(e),
            "timestamp": time.time()
        })
        logger.error(f"{operation_name} failed after {execution_time_ms:.2f}ms: {e}")
        raise
    else:
        execution_time_ms = (time.perf_counter() - start_time) * 1000
        _, peak = tracemalloc.get_traced_memory()
        performance_info = {
            "operation": operation_name,
            "execution_time_ms": execution_time_ms,
            "memory_usage_mb": peak / 1024 / 1024,
            "success": True,
            "result_size": len(result) if hasattr(result, "__len__") else None,
            "timestamp": time.time()
        }
        _record(performance_info)
        logger.info(
            f"{operation_name}: {execution_time_ms:.2f}ms, "
            f"peak {performance_info['memory_usage_mb']:.3f}MB"
        )
        return performance_info
    finally:
        tracemalloc.stop()


def get_performance_summary() -> Dict[str, Any]:
    """Get summary of all performance metrics"""
    count = _performance_metrics["operation_count"]
    if count == 0:
        return {
            "total_operations": 0,
            "total_time_ms": 0.0,
            "total_memory_mb": 0.0,
            "avg_time_ms": 0.0,
            "avg_memory_mb": 0.0
        }

    return {
        "total_operations": count,
        "total_time_ms": _performance_metrics["total_time_ms"],
        "total_memory_mb": _performance_metrics["total_memory_mb"],
        "avg_time_ms": _performance_metrics["total_time_ms"] / count,
        "avg_memory_mb": _performance_metrics["total_memory_mb"] / count
    }


def clear_performance_metrics():
    """Clear all performance metrics"""
    global _performance_metrics
    _performance_metrics = {
        "operations": [],
        "total_time_ms": 0.0,
        "total_memory_mb": 0.0,
        "operation_count": 0
    }


def validate_lazy_view(view) -> bool:
    """A view is lazy when it holds nothing but its base and its step"""
    if not isinstance(view, StridedView):
        return False
    return set(vars(view)) == {"_base", "_step"}


def _expect_violation(errors: List[str], label: str, func, *args):
    try:
        func(*args)
    except PreconditionViolation:
        return
    errors.append(f"{label}: expected PreconditionViolation")


def _validate_one(view: IndexableCollection, label: str) -> List[str]:
    errors = []
    elements = list(view)

    positions = []
    position = view.start_position
    while position != view.end_position:
        positions.append(position)
        position = view.position_after(position)
    end = position
    positions.append(end)

    walked = [view.element_at(p) for p in positions[:-1]]
    if walked != elements:
        errors.append(f"{label}: walking positions gave {walked}, iteration gave {elements}")
    if len(set(positions)) != len(positions):
        errors.append(f"{label}: forward walk visited a position twice")
    _expect_violation(errors, f"{label} position_after(end)", view.position_after, end)
    _expect_violation(errors, f"{label} element_at(end)", view.element_at, end)

    if isinstance(view, BidirectionalCollection):
        backward = [end]
        position = end
        while position != view.start_position:
            position = view.position_before(position)
            backward.append(position)
        if backward[::-1] != positions:
            errors.append(f"{label}: backward walk does not mirror the forward walk")
        if list(reversed(view)) != elements[::-1]:
            errors.append(f"{label}: reversed iteration does not mirror iteration")
        _expect_violation(
            errors, f"{label} position_before(start)", view.position_before, view.start_position
        )

    if isinstance(view, RandomAccessCollection):
        count = view.count()
        if count != len(elements):
            errors.append(f"{label}: count() is {count}, iteration produced {len(elements)}")
        for i, a in enumerate(positions):
            if view.position_offset(view.start_position, i) != a:
                errors.append(f"{label}: offset {i} from start is not the {i}-th position")
            for j, b in enumerate(positions):
                if view.distance(a, b) != j - i:
                    errors.append(f"{label}: distance({i}, {j}) != {j - i}")
                if view.position_offset(a, j - i) != b:
                    errors.append(f"{label}: offset {j - i} from {i} missed position {j}")
        if view.position_offset(view.start_position, count + 1, limit=end) is not None:
            errors.append(f"{label}: offset past the end limit was not refused")
        _expect_violation(
            errors, f"{label} position_offset(start, count + 1)",
            view.position_offset, view.start_position, count + 1
        )

    return errors


def validate_position_traversals(*views) -> Dict[str, Any]:
    """Walk each view's positions in every supported direction and cross-check them"""
    results = {
        "views_tested": 0,
        "all_consistent": True,
        "errors": []
    }

    for i, view in enumerate(views):
        label = f"View {i} ({type(view).__name__})"
        if not isinstance(view, IndexableCollection):
            results["errors"].append(f"{label}: has no positions to traverse")
            results["all_consistent"] = False
            continue
        errors = _validate_one(view, label)
        for error in errors:
            logger.warning(error)
        results["errors"].extend(errors)
        results["all_consistent"] = results["all_consistent"] and not errors
        results["views_tested"] += 1

    return results


def check_composition(source: Sequence, step_chains: List[List[int]]) -> Dict[str, Any]:
    """Check that nested striding matches one stride by the product of the steps"""
    results = {
        "chains_tested": 0,
        "all_chains_equivalent": True,
        "errors": [],
        "chain_results": []
    }

    for i, chain in enumerate(step_chains):
        nested = strided_view(source, chain[0])
        for step in chain[1:]:
            nested = nested.striding(step)
        flat = strided_view(source, math.prod(chain))

        equivalent = nested.to_list() == flat.to_list() and type(nested) is type(flat)
        if not equivalent:
            results["all_chains_equivalent"] = False
            results["errors"].append(
                f"Chain {i} {chain}: nested gave {nested.to_list()}, flat gave {flat.to_list()}"
            )
        results["chain_results"].append({
            "chain_index": i,
            "steps": list(chain),
            "equivalent": equivalent,
            "result_length": len(flat.to_list())
        })
        results["chains_tested"] += 1

    return results
