"""
Tests for matrix element-wise operations and scaling.
"""

import numpy as np
import pytest

from pylin import FP64, S32, Matrix, Status, Vector, compatible
from pylin import matrix as mat
from pylin.core.exceptions import (
    DimensionError,
    DivideByZeroError,
    NullReferenceError,
    PartialWriteWarning,
    ValidationError,
)


@pytest.fixture
def pair():
    a = Matrix.from_rows([[1, 2, 3], [4, 5, 6]], S32)
    b = Matrix.from_rows([[6, 5, 4], [3, 2, 1]], S32)
    return a, b


class TestElementwise:

    def test_add(self, pair):
        a, b = pair
        result = Matrix(S32, 3, 2)
        assert mat.add(result, a, b) is result
        assert result.to_rows() == [[7, 7, 7], [7, 7, 7]]

    def test_subtract(self, pair):
        a, b = pair
        result = Matrix(S32, 3, 2)
        mat.subtract(result, a, b)
        assert result.to_rows() == [[-5, -3, -1], [1, 3, 5]]

    def test_multiply(self, pair):
        a, b = pair
        result = Matrix(S32, 3, 2)
        mat.elementwise_multiply(result, a, b)
        assert result.to_rows() == [[6, 10, 12], [12, 10, 6]]

    def test_divide(self, pair):
        a, b = pair
        result = Matrix(S32, 3, 2)
        mat.elementwise_divide(result, b, a)
        assert result.to_rows() == [[6, 2, 1], [0, 0, 0]]

    def test_in_place(self, pair):
        a, b = pair
        mat.add(a, a, b)
        assert a.to_rows() == [[7, 7, 7], [7, 7, 7]]

    def test_float(self, rng):
        x = rng.standard_normal((3, 4))
        y = rng.standard_normal((3, 4))
        a = Matrix.from_rows(x.tolist(), FP64)
        b = Matrix.from_rows(y.tolist(), FP64)
        result = Matrix(FP64, 4, 3)
        mat.elementwise_multiply(result, a, b)
        np.testing.assert_allclose(result.to_rows(), x * y)

    def test_divide_by_zero_atomic(self, pair):
        a, _ = pair
        zeros = Matrix(S32, 3, 2)
        result = Matrix.from_rows([[1, 1, 1], [1, 1, 1]], S32)
        with pytest.raises(DivideByZeroError):
            mat.elementwise_divide(result, a, zeros)
        assert result.to_rows() == [[1, 1, 1], [1, 1, 1]]

    def test_divide_by_zero_non_atomic(self, pair):
        a, _ = pair
        divisor = Matrix.from_rows([[1, 0, 1], [1, 1, 1]], S32)
        result = Matrix(S32, 3, 2)
        with pytest.warns(PartialWriteWarning):
            with pytest.raises(DivideByZeroError):
                mat.elementwise_divide(result, a, divisor, atomic=False)
        # column 0 was written before column 1 failed
        assert result.to_rows() == [[1, 0, 0], [4, 0, 0]]


class TestShapeRules:

    def test_transposed_shapes_incompatible(self):
        a = Matrix(S32, width=3, height=2)
        b = Matrix(S32, width=2, height=3)
        assert compatible(a, b) is Status.INCOMPATIBLE
        with pytest.raises(DimensionError):
            mat.add(Matrix(S32, 3, 2), a, b)

    def test_result_shape_must_match(self, pair):
        a, b = pair
        with pytest.raises(DimensionError, match="result: expected shape"):
            mat.add(Matrix(S32, 2, 3), a, b)

    def test_vector_rejected(self, pair):
        a, _ = pair
        with pytest.raises(ValidationError, match="b: expected Matrix"):
            mat.add(Matrix(S32, 3, 2), a, Vector(S32, 6))

    def test_vector_matrix_compatible_by_count(self):
        assert compatible(Matrix(S32, 3, 2), Vector(S32, 6)) is Status.SUCCESS

    def test_null_operand(self, pair):
        a, _ = pair
        with pytest.raises(NullReferenceError):
            mat.add(Matrix(S32, 3, 2), a, None)


class TestMatrixScale:

    def test_scale(self, pair):
        a, _ = pair
        result = Matrix(S32, 3, 2)
        mat.scale(result, a, S32.encode(-1))
        assert result.to_rows() == [[-1, -2, -3], [-4, -5, -6]]

    def test_scale_inverse(self):
        m = Matrix.from_rows([[2.0, 4.0], [8.0, 16.0]], FP64)
        mat.scale_inverse(m, m, FP64.encode(2.0))
        assert m.to_rows() == [[1.0, 2.0], [4.0, 8.0]]

    def test_scale_result_shape(self, pair):
        a, _ = pair
        with pytest.raises(DimensionError):
            mat.scale(Matrix(S32, 2, 3), a, S32.encode(2))

    def test_scale_rejects_vector(self):
        with pytest.raises(ValidationError):
            mat.scale(Vector(S32, 2), Vector(S32, 2), S32.encode(2))
