"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from pylin import S32, FP64, Vector
from pylin.core.memory import MemoryBindings


class CountingAllocator:
    """
    Allocator that records every allocate/free call.

    Returns bytearrays (not numpy arrays) so tests also cover plain
    buffer-protocol objects. With ``fail_after=n`` the (n+1)-th and later
    allocations return None.
    """

    def __init__(self, fail_after=None):
        self.fail_after = fail_after
        self.allocations = 0
        self.frees = 0
        self.sizes = []
        self.freed = []

    def allocate(self, size):
        if self.fail_after is not None and self.allocations >= self.fail_after:
            return None
        self.allocations += 1
        self.sizes.append(size)
        return bytearray(size)

    def free(self, buffer):
        self.frees += 1
        self.freed.append(buffer)

    @property
    def outstanding(self):
        return self.allocations - self.frees

    @property
    def bindings(self):
        return MemoryBindings(allocate=self.allocate, free=self.free)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def counting():
    """Fresh counting allocator."""
    return CountingAllocator()


@pytest.fixture
def int_pair():
    """Two S32 vectors [1, 2, 3] and [4, 5, 6]."""
    return Vector.from_values([1, 2, 3], S32), Vector.from_values([4, 5, 6], S32)


@pytest.fixture
def float_pair():
    """Two FP64 vectors."""
    return (
        Vector.from_values([1.5, -2.0, 4.25], FP64),
        Vector.from_values([0.5, 8.0, -1.0], FP64),
    )


@pytest.fixture
def make_allocator():
    """Factory for counting allocators, e.g. make_allocator(fail_after=3)."""
    return CountingAllocator
