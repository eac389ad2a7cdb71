"""
Pytest configuration file for the striding view tests.

This file ensures that the project root is in the Python path
so that test files can import strided, positions, traversal, models and utils.
"""

import sys
from pathlib import Path

# Add the parent directory to the Python path
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import pytest

from utils import clear_performance_metrics


@pytest.fixture(autouse=True)
def fresh_performance_metrics():
    """Each test starts with an empty performance log"""
    clear_performance_metrics()
    yield
    clear_performance_metrics()
