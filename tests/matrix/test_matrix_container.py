"""
Tests for Matrix construction, column-major addressing and integrity.

Validates:
    - Shape bookkeeping (width, height, element count, buffer size)
    - Column-major raw layout
    - Row and column bounds checked independently
    - Overflow of width * height and of the buffer size
"""

import pytest

from pylin import FP64, S16, S32, U8, Matrix, Vector
from pylin.core.exceptions import (
    DimensionError,
    IndexBoundsError,
    NullReferenceError,
    SizeOverflowError,
    ValidationError,
)
from pylin.core.memory import SIZE_MAX


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestMatrixConstruction:

    def test_shape(self):
        m = Matrix(FP64, width=3, height=2)
        assert m.shape == (2, 3)
        assert m.width == 3
        assert m.height == 2
        assert m.element_count == 6
        assert m.buffer_size == 48
        assert len(m) == 6

    def test_zero_filled(self):
        m = Matrix(S32, 2, 2)
        assert m.to_rows() == [[0, 0], [0, 0]]

    def test_from_rows(self):
        rows = [[1, 2, 3], [4, 5, 6]]
        m = Matrix.from_rows(rows, S32)
        assert m.shape == (2, 3)
        assert m.to_rows() == rows

    def test_single_element(self):
        m = Matrix.from_rows([[9]], S16)
        assert m.get(0, 0) == 9
        assert m.is_valid

    def test_repr(self):
        assert "shape=(2, 3)" in repr(Matrix(U8, 3, 2))

    @pytest.mark.parametrize("width, height, name", [
        (0, 2, "width"),
        (2, 0, "height"),
        (-1, 2, "width"),
    ])
    def test_non_positive_dimension(self, counting, width, height, name):
        with pytest.raises(DimensionError, match=name):
            Matrix(S32, width, height, memory=counting.bindings)
        assert counting.allocations == 0

    def test_element_count_overflow(self, counting):
        with pytest.raises(SizeOverflowError):
            Matrix(U8, SIZE_MAX, 2, memory=counting.bindings)
        assert counting.allocations == 0

    def test_buffer_size_overflow(self, counting):
        # element count fits, element_size * count does not
        with pytest.raises(SizeOverflowError):
            Matrix(FP64, SIZE_MAX // 2, 1, memory=counting.bindings)
        assert counting.allocations == 0

    def test_empty_rows(self):
        with pytest.raises(DimensionError):
            Matrix.from_rows([], S32)

    def test_ragged_rows(self):
        with pytest.raises(DimensionError, match="row 1"):
            Matrix.from_rows([[1, 2], [3]], S32)

    def test_null_rows(self):
        with pytest.raises(NullReferenceError):
            Matrix.from_rows(None, S32)


# ═══════════════════════════════════════════════════════════════════════
# Addressing
# ═══════════════════════════════════════════════════════════════════════


class TestColumnMajor:

    def test_raw_index(self):
        m = Matrix(S32, width=3, height=2)
        assert m.raw_index(0, 0) == 0
        assert m.raw_index(1, 0) == 1
        assert m.raw_index(0, 1) == 2
        assert m.raw_index(1, 2) == 5

    def test_raw_layout(self):
        m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]], S32)
        assert [m.get_raw(i) for i in range(6)] == [1, 4, 2, 5, 3, 6]

    def test_write_read(self):
        m = Matrix(S32, 2, 3)
        m.write(2, 1, S32.encode(-4))
        assert S32.decode(m.read(2, 1)) == -4
        assert m.get_raw(2 + 3 * 1) == -4

    def test_read_into_out(self):
        m = Matrix.from_rows([[1.5, 2.5]], FP64)
        out = bytearray(8)
        m.read(0, 1, out=out)
        assert FP64.decode(out) == 2.5


class TestMatrixBounds:

    def test_row_out_of_range(self):
        m = Matrix(S32, width=3, height=2)
        with pytest.raises(IndexBoundsError, match="row 2 exceeds height 2"):
            m.get(2, 0)

    def test_column_out_of_range(self):
        m = Matrix(S32, width=3, height=2)
        with pytest.raises(IndexBoundsError, match="column 3 exceeds width 3"):
            m.get(0, 3)

    def test_row_overflow_into_next_column_rejected(self):
        # (2, 0) maps onto raw index 2, which exists, but row 2 does not
        m = Matrix.from_rows([[1, 2], [3, 4]], S32)
        before = m.tobytes()
        with pytest.raises(IndexBoundsError) as exc_info:
            m.write(2, 0, S32.encode(99))
        assert exc_info.value.index == (2, 0)
        assert exc_info.value.bound == (2, 2)
        assert m.tobytes() == before

    def test_out_untouched_on_bounds_error(self):
        m = Matrix(S32, 2, 2)
        out = bytearray(b"\xff" * 4)
        with pytest.raises(IndexBoundsError):
            m.read(0, 5, out=out)
        assert bytes(out) == b"\xff" * 4

    def test_negative(self):
        with pytest.raises(IndexBoundsError):
            Matrix(S32, 2, 2).get(-1, 0)


# ═══════════════════════════════════════════════════════════════════════
# Integrity and lifecycle
# ═══════════════════════════════════════════════════════════════════════


class TestMatrixIntegrity:

    def test_valid(self):
        assert Matrix(S32, 2, 2).integrity_failures() == ()

    def test_destroy(self, counting):
        m = Matrix(S32, 2, 2, memory=counting.bindings)
        m.destroy()
        m.destroy()
        assert counting.frees == 1
        assert m.shape == (2, 2)
        assert not m.is_valid

    def test_zeroed_height_reported(self):
        m = Matrix(S32, 2, 2)
        m.height = 0
        assert 'height' in m.integrity_failures()

    def test_vector_and_matrix_pair_by_count(self):
        m = Matrix(S32, 2, 3)
        v = Vector(S32, 6)
        assert m.same_shape(v)
        assert v.same_shape(m)

    def test_matrices_pair_by_shape(self):
        assert not Matrix(S32, 2, 3).same_shape(Matrix(S32, 3, 2))


class TestMatrixIndexAndValueTypes:

    def test_float_row_rejected(self):
        m = Matrix(S32, 2, 2)
        with pytest.raises(ValidationError, match="row"):
            m.get(1.0, 0)

    def test_float_column_rejected(self):
        m = Matrix(S32, 2, 2)
        with pytest.raises(ValidationError, match="column"):
            m.set(0, 0.5, 1)

    def test_from_rows_with_nested_entries(self):
        with pytest.raises(DimensionError):
            Matrix.from_rows([[[1, 2], [3, 4]]], S32)

    def test_set_sequence_leaves_matrix_unchanged(self):
        m = Matrix.from_rows([[1, 2]], S32)
        with pytest.raises(DimensionError):
            m.set(0, 1, [5, 6])
        assert m.to_rows() == [[1, 2]]
