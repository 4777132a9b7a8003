"""
Container base: buffer lifecycle, integrity and raw element access.

Vector and Matrix both derive from Container. A container owns exactly one
contiguous byte buffer of element_size * element_count bytes, allocated once
at construction through its MemoryBindings and never resized. No two
containers share a buffer.

Lifecycle:
    construct -> zero or more operations -> destroy

Construction validates the shape before any allocation, so a rejected
shape allocates nothing. destroy() hands the buffer back to the bound free
callback; afterwards the container fails its integrity check and every
access raises.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import numpy as np
from numpy.typing import NDArray

from pylin.core.exceptions import IndexBoundsError, InvalidContainerError
from pylin.core.memory import (
    DEFAULT_MEMORY,
    MemoryBindings,
    allocate_buffer,
    as_bytes,
    checked_size_product,
)
from pylin.core.status import Status
from pylin.core.types import ElementType, TypeTag
from pylin.core.validation import (
    check_element_buffer,
    check_index,
    check_present,
    check_size,
    check_writable,
)

logger = logging.getLogger(__name__)


class Container:
    """
    Owner of one element buffer plus its shape and bindings.

    Subclasses set ``kind`` and call ``_allocate(element_count)`` from their
    constructor once the shape has been validated.

    Attributes:
        element_type: Descriptor the container was built from
        memory: Allocator/deallocator pair used for the buffer and for
            scratch buffers in operations on this container
    """
    kind = 'container'

    def __init__(
        self,
        element_type: ElementType,
        *,
        memory: MemoryBindings | None = None,
    ):
        check_present(element_type=element_type)
        self.element_type = element_type
        self.memory = memory if memory is not None else DEFAULT_MEMORY
        self.element_size = check_size(element_type.size, 'element_size')
        self.element_count = 0
        self.buffer: Any = None
        self.buffer_size = 0
        self._bytes: NDArray[np.uint8] | None = None

    def _allocate(self, element_count: int) -> None:
        self.buffer_size = checked_size_product(
            self.element_size, element_count, f"{self.kind} buffer size"
        )
        self.buffer = allocate_buffer(self.memory, self.buffer_size, f"{self.kind} storage")
        self._bytes = as_bytes(self.buffer)[:self.buffer_size]
        self.element_count = element_count

    # --- Bindings ---

    @property
    def type_tag(self) -> int:
        return self.element_type.tag

    @property
    def arithmetic(self):
        return self.element_type.arithmetic

    @property
    def shape(self) -> tuple[int, ...]:
        return (self.element_count,)

    def same_shape(self, other: Container) -> bool:
        """Whether element-wise pairing with ``other`` is well defined."""
        return self.element_count == other.element_count

    # --- Integrity ---

    def integrity_failures(self) -> tuple[str, ...]:
        """
        Names of the invariants that do not currently hold.

        Side-effect free. An empty tuple means the container is valid.
        """
        checks = {
            'buffer': self.buffer is not None,
            'element_size': self.element_size != 0,
            'element_count': self.element_count != 0,
            'buffer_size': self.buffer_size != 0,
            'type_tag': self.type_tag != TypeTag.NULL,
            'allocate': self.memory.allocate is not None,
            'free': self.memory.free is not None,
        }
        return tuple(name for name, ok in checks.items() if not ok)

    @property
    def is_valid(self) -> bool:
        return not self.integrity_failures()

    def check_integrity(self, name: str = 'container') -> None:
        """
        Raise if any invariant is violated.

        Raises:
            InvalidContainerError: Listing the failed checks
        """
        failed = self.integrity_failures()
        if failed:
            raise InvalidContainerError(
                f"{name}: invalid {self.kind} ({', '.join(failed)})",
                name=name,
                failed_checks=failed,
            )

    def _storage(self) -> NDArray[np.uint8]:
        if self._bytes is None:
            raise InvalidContainerError(
                f"{self.kind} buffer has been released", failed_checks=('buffer',)
            )
        return self._bytes

    # --- Raw element access ---

    def _check_raw_index(self, index: int) -> int:
        index = check_index(index, 'index')
        if not 0 <= index < self.element_count:
            raise IndexBoundsError(
                f"raw index {index} exceeds element count {self.element_count}",
                index=index,
                bound=self.element_count,
            )
        return index * self.element_size

    def read_raw(self, index: int, out: Any = None) -> NDArray[np.uint8]:
        """
        Copy the element at a flat index.

        Args:
            index: Raw index, 0 <= index < element_count
            out: Optional writable buffer of element_size bytes to copy
                into. Left untouched if the read fails.

        Returns:
            ``out`` as a uint8 view, or a fresh uint8 array

        Raises:
            IndexBoundsError: If index is out of range
            ValidationError: If index is not an integer
        """
        offset = self._check_raw_index(index)
        storage = self._storage()
        element = storage[offset:offset + self.element_size]
        if out is None:
            return element.copy()
        check_element_buffer(out, self.element_size, 'out')
        check_writable(out, 'out')
        target = as_bytes(out)
        target[:] = element
        return target

    def write_raw(self, index: int, source: Any) -> None:
        """
        Copy element_size bytes from ``source`` into a flat index.

        Nothing is written if the index or source is rejected.

        Raises:
            IndexBoundsError: If index is out of range
            ValidationError: If index is not an integer
            DimensionError: If source is not exactly element_size bytes
        """
        offset = self._check_raw_index(index)
        check_element_buffer(source, self.element_size, 'source')
        storage = self._storage()
        storage[offset:offset + self.element_size] = as_bytes(source)

    def load(self, data: Any) -> None:
        """Overwrite the whole buffer from a bytes-like object of buffer_size bytes."""
        storage = self._storage()
        check_element_buffer(data, self.buffer_size, 'data')
        storage[:] = as_bytes(data)

    def tobytes(self) -> bytes:
        """Copy of the whole buffer."""
        return self._storage().tobytes()

    # --- Value access through the element type's dtype ---

    def get_raw(self, index: int) -> Any:
        return self.element_type.decode(self.read_raw(index))

    def set_raw(self, index: int, value: Any) -> None:
        self.write_raw(index, self.element_type.encode(value))

    def _fill(self, values: Iterable[Any]) -> None:
        for index, value in enumerate(values):
            self.set_raw(index, value)

    # --- Compatibility ---

    def compatible(self, other: Container | None) -> Status:
        return compatible(self, other)

    # --- Destruction ---

    def destroy(self) -> None:
        """
        Release the buffer through the bound free callback.

        The shape and bindings are kept; buffer_size drops to zero so the
        container no longer passes its integrity check. Calling destroy()
        again is a no-op.
        """
        if self.buffer is None:
            return
        buffer = self.buffer
        self.buffer = None
        self._bytes = None
        self.buffer_size = 0
        self.memory.free(buffer)
        logger.debug("released %s storage", self.kind)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.destroy()

    def __len__(self) -> int:
        return self.element_count

    def __repr__(self) -> str:
        state = 'valid' if self.is_valid else 'invalid'
        return (
            f"{type(self).__name__}(shape={self.shape}, type_tag={self.type_tag}, "
            f"element_size={self.element_size}, {state})"
        )


def compatible(a: Container | None, b: Container | None) -> Status:
    """
    Check whether two containers may be combined.

    Compatible means: same type tag, same element count (and, for two
    matrices, same width and height), and the very same four arithmetic
    callables. Bindings are compared by identity, not behaviour.

    Returns:
        Status.SUCCESS if compatible, Status.INCOMPATIBLE on a mismatch,
        Status.ERROR if either operand is None
    """
    if a is None or b is None:
        return Status.ERROR
    if (
        a.type_tag != b.type_tag
        or not a.same_shape(b)
        or a.arithmetic.mismatched(b.arithmetic)
    ):
        return Status.INCOMPATIBLE
    return Status.SUCCESS


def validate_integrity(container: Container | None) -> bool:
    """True if ``container`` is present and satisfies every invariant."""
    return container is not None and container.is_valid
