"""
Matrix: a two-dimensional container with column-major addressing.

Element (row, column) lives at raw index ``row + height * column``. Row and
column are checked against height and width separately, so a pair that
happens to map onto a valid raw index is still rejected if either component
is out of range.
"""

from __future__ import annotations

from typing import Any, Sequence

from pylin.core.container import Container
from pylin.core.exceptions import DimensionError, IndexBoundsError
from pylin.core.memory import MemoryBindings, checked_size_product
from pylin.core.types import ElementType
from pylin.core.validation import check_index, check_present, check_size


class Matrix(Container):
    """
    Fixed-shape matrix over an arbitrary element type.

    Construction:
        Matrix(FP64, width=3, height=2)
        Matrix.from_rows([[1, 2, 3], [4, 5, 6]], S32)

    Args:
        element_type: Tag, size and arithmetic bindings of the elements
        width: Number of columns, must be positive
        height: Number of rows, must be positive
        memory: Allocator/deallocator pair

    Raises:
        DimensionError: If width, height or the element size is not positive
        SizeOverflowError: If width * height or the buffer size overflows
        AllocationError: If the allocator fails
    """
    kind = 'matrix'

    def __init__(
        self,
        element_type: ElementType,
        width: int,
        height: int,
        *,
        memory: MemoryBindings | None = None,
    ):
        super().__init__(element_type, memory=memory)
        self.width = check_size(width, 'width')
        self.height = check_size(height, 'height')
        self._allocate(checked_size_product(self.width, self.height, 'matrix element count'))

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Any]],
        element_type: ElementType,
        *,
        memory: MemoryBindings | None = None,
    ) -> Matrix:
        """
        Build a matrix from a list of equally long rows.

        Raises:
            DimensionError: If rows is empty or ragged
        """
        check_present(rows=rows)
        if not rows:
            raise DimensionError("rows: expected at least one row", expected='> 0', actual=0)
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise DimensionError(
                    f"rows: row {i} has {len(row)} entries, expected {width}",
                    expected=width,
                    actual=len(row),
                )
        matrix = cls(element_type, width, len(rows), memory=memory)
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                matrix.set(r, c, value)
        return matrix

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    def same_shape(self, other: Container) -> bool:
        if isinstance(other, Matrix):
            return self.shape == other.shape
        return super().same_shape(other)

    def integrity_failures(self) -> tuple[str, ...]:
        failed = super().integrity_failures()
        if self.width == 0:
            failed += ('width',)
        if self.height == 0:
            failed += ('height',)
        return failed

    def raw_index(self, row: int, column: int) -> int:
        """
        Column-major raw index of (row, column).

        Raises:
            IndexBoundsError: If row >= height or column >= width
            ValidationError: If row or column is not an integer
        """
        row = check_index(row, 'row')
        column = check_index(column, 'column')
        if not 0 <= row < self.height:
            raise IndexBoundsError(
                f"row {row} exceeds height {self.height}",
                index=(row, column),
                bound=(self.height, self.width),
            )
        if not 0 <= column < self.width:
            raise IndexBoundsError(
                f"column {column} exceeds width {self.width}",
                index=(row, column),
                bound=(self.height, self.width),
            )
        return row + self.height * column

    def read(self, row: int, column: int, out: Any = None):
        """Copy element (row, column); see read_raw()."""
        return self.read_raw(self.raw_index(row, column), out)

    def write(self, row: int, column: int, source: Any) -> None:
        """Copy element_size bytes into (row, column); see write_raw()."""
        self.write_raw(self.raw_index(row, column), source)

    def get(self, row: int, column: int) -> Any:
        return self.get_raw(self.raw_index(row, column))

    def set(self, row: int, column: int, value: Any) -> None:
        self.set_raw(self.raw_index(row, column), value)

    def to_rows(self) -> list[list[Any]]:
        return [
            [self.get(r, c) for c in range(self.width)]
            for r in range(self.height)
        ]
