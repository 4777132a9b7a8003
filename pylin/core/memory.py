"""
Memory bindings, scratch buffers and size arithmetic.

Every container carries a MemoryBindings pair (allocate, free). The pair is
fixed at construction time; there is no later rebinding. Buffers are raw
bytes; the engine views them as numpy uint8 arrays regardless of what the
allocator returned.

Sizes follow the platform size_t range so a shape that would not fit in
memory on a native build is rejected here as well.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray

from pylin.core.exceptions import AllocationError, SizeOverflowError
from pylin.core.protocols import Allocate, Free

logger = logging.getLogger(__name__)


# Largest value representable by the platform's size_t
SIZE_MAX: int = int(np.iinfo(np.uintp).max)


def zalloc(size: int) -> NDArray[np.uint8] | None:
    """
    Zero-initializing allocator.

    Args:
        size: Requested byte count

    Returns:
        A zero-filled uint8 array of ``size`` bytes, or None if the request
        cannot be satisfied
    """
    try:
        return np.zeros(size, dtype=np.uint8)
    except (MemoryError, ValueError):
        return None


def release(buffer: Any) -> None:
    """Standard deallocator. numpy-owned memory is reclaimed on last reference."""
    return None


@dataclass(frozen=True)
class MemoryBindings:
    """
    Allocator/deallocator pair bound to a container.

    Passed once at construction. Scratch buffers used by operations are
    drawn from the same pair, so a custom allocator sees every allocation
    made on behalf of its container.

    Attributes:
        allocate: ``allocate(size) -> buffer | None``
        free: ``free(buffer) -> None``
    """
    allocate: Allocate = zalloc
    free: Free = release


DEFAULT_MEMORY = MemoryBindings()


def as_bytes(buffer: Any) -> NDArray[np.uint8]:
    """
    View any buffer-protocol object as a flat uint8 array without copying.

    The view is writable whenever the underlying buffer is.
    """
    if isinstance(buffer, np.ndarray) and buffer.dtype == np.uint8 and buffer.ndim == 1:
        return buffer
    return np.frombuffer(buffer, dtype=np.uint8)


def checked_size_product(left: int, right: int, what: str) -> int:
    """
    Multiply two sizes, rejecting results outside size_t.

    The product is wrapped to size_t first and then verified by division,
    so the check is the same one a native build would make.

    Args:
        left: First factor (non-negative)
        right: Second factor (non-negative)
        what: Description of the quantity for error messages

    Returns:
        left * right

    Raises:
        SizeOverflowError: If the product does not fit in size_t
    """
    if left > SIZE_MAX or right > SIZE_MAX:
        raise SizeOverflowError(
            f"{what}: factor exceeds size_t ({left} x {right}, limit {SIZE_MAX})",
            factors=(left, right),
            limit=SIZE_MAX,
        )
    product = (left * right) & SIZE_MAX
    if left != 0 and product // left != right:
        raise SizeOverflowError(
            f"{what}: multiplication overflow ({left} x {right} exceeds {SIZE_MAX})",
            factors=(left, right),
            limit=SIZE_MAX,
        )
    return product


def allocate_buffer(memory: MemoryBindings, size: int, what: str) -> Any:
    """
    Allocate through a binding and verify the result.

    A None return, or a buffer shorter than requested, is a failure; a
    short buffer is handed back to ``memory.free`` before raising.

    Returns:
        The raw buffer exactly as the allocator produced it

    Raises:
        AllocationError: If the allocator could not satisfy the request
    """
    buffer = memory.allocate(size)
    if buffer is None:
        raise AllocationError(
            f"{what}: allocator returned no buffer for {size} bytes",
            requested_size=size,
        )
    actual = as_bytes(buffer).nbytes
    if actual < size:
        memory.free(buffer)
        raise AllocationError(
            f"{what}: allocator returned {actual} bytes, expected {size}",
            requested_size=size,
        )
    logger.debug("allocated %d bytes for %s", size, what)
    return buffer


@contextmanager
def scratch(memory: MemoryBindings, size: int, what: str = 'scratch') -> Iterator[NDArray[np.uint8]]:
    """
    Borrow a scratch buffer for the duration of a block.

    The buffer is released through ``memory.free`` on every exit path,
    including exceptions raised inside the block.

    Usage:
        with scratch(vector.memory, vector.element_size) as element:
            vector.read_raw(0, out=element)

    Yields:
        A writable uint8 view of exactly ``size`` bytes
    """
    buffer = allocate_buffer(memory, size, what)
    try:
        yield as_bytes(buffer)[:size]
    finally:
        memory.free(buffer)
