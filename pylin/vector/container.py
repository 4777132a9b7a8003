"""
Vector: a one-dimensional container of caller-typed elements.
"""

from __future__ import annotations

from typing import Any, Iterator, Sequence

from pylin.core.container import Container
from pylin.core.memory import MemoryBindings
from pylin.core.types import ElementType
from pylin.core.validation import check_present, check_size


class Vector(Container):
    """
    Fixed-length vector over an arbitrary element type.

    Construction:
        Vector(S32, 3)
        Vector.from_values([1, 2, 3], S32)
        Vector(my_type, 8, memory=MemoryBindings(my_alloc, my_free))

    Args:
        element_type: Tag, size and arithmetic bindings of the elements
        length: Number of elements, must be positive
        memory: Allocator/deallocator pair; defaults to a zero-filling
            numpy allocator

    Raises:
        NullReferenceError: If element_type is None
        DimensionError: If length or the element size is not positive
        SizeOverflowError: If the buffer size overflows size_t
        AllocationError: If the allocator fails
    """
    kind = 'vector'

    def __init__(
        self,
        element_type: ElementType,
        length: int,
        *,
        memory: MemoryBindings | None = None,
    ):
        super().__init__(element_type, memory=memory)
        self._allocate(check_size(length, 'length'))

    @classmethod
    def from_values(
        cls,
        values: Sequence[Any],
        element_type: ElementType,
        *,
        memory: MemoryBindings | None = None,
    ) -> Vector:
        """Build a vector and fill it by encoding ``values`` with the element dtype."""
        check_present(values=values)
        vector = cls(element_type, len(values), memory=memory)
        vector._fill(values)
        return vector

    def read(self, index: int, out: Any = None):
        """Alias of read_raw(); a vector's index is its raw index."""
        return self.read_raw(index, out)

    def write(self, index: int, source: Any) -> None:
        """Alias of write_raw()."""
        self.write_raw(index, source)

    def get(self, index: int) -> Any:
        return self.get_raw(index)

    def set(self, index: int, value: Any) -> None:
        self.set_raw(index, value)

    def to_list(self) -> list[Any]:
        return [self.get_raw(i) for i in range(self.element_count)]

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_list())
