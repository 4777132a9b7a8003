"""
Matrix operations.

Element-wise arithmetic and scalar scaling for matrices. These run on the
same combinators as the vector operations; the only extra rule is that every
operand is a Matrix, so width and height must agree as well as the element
count.
"""

from __future__ import annotations

from typing import Any

from pylin.core.arithmetic import Operation
from pylin.core.compute.elementwise import elementwise_apply, scalar_apply
from pylin.core.exceptions import DimensionError, ValidationError
from pylin.matrix.container import Matrix


def _require_matrices(**operands: Any) -> None:
    for name, value in operands.items():
        if value is not None and not isinstance(value, Matrix):
            raise ValidationError(f"{name}: expected Matrix, got {type(value).__name__}")


def add(result: Matrix, a: Matrix, b: Matrix, *, atomic: bool = True) -> Matrix:
    """result = a + b."""
    _require_matrices(result=result, a=a, b=b)
    _require_same_shape(result, a)
    return elementwise_apply(result, a, b, Operation.ADD, atomic=atomic)


def subtract(result: Matrix, a: Matrix, b: Matrix, *, atomic: bool = True) -> Matrix:
    """result = a - b."""
    _require_matrices(result=result, a=a, b=b)
    _require_same_shape(result, a)
    return elementwise_apply(result, a, b, Operation.SUBTRACT, atomic=atomic)


def elementwise_multiply(result: Matrix, a: Matrix, b: Matrix, *, atomic: bool = True) -> Matrix:
    """Hadamard product."""
    _require_matrices(result=result, a=a, b=b)
    _require_same_shape(result, a)
    return elementwise_apply(result, a, b, Operation.MULTIPLY, atomic=atomic)


def elementwise_divide(result: Matrix, a: Matrix, b: Matrix, *, atomic: bool = True) -> Matrix:
    _require_matrices(result=result, a=a, b=b)
    _require_same_shape(result, a)
    return elementwise_apply(result, a, b, Operation.DIVIDE, atomic=atomic)


def scale(result: Matrix, matrix: Matrix, scalar: Any, *, atomic: bool = True) -> Matrix:
    """result = matrix * scalar."""
    _require_matrices(result=result, matrix=matrix)
    _require_same_shape(result, matrix)
    return scalar_apply(result, matrix, scalar, Operation.MULTIPLY, atomic=atomic)


def scale_inverse(result: Matrix, matrix: Matrix, scalar: Any, *, atomic: bool = True) -> Matrix:
    """result = matrix / scalar."""
    _require_matrices(result=result, matrix=matrix)
    _require_same_shape(result, matrix)
    return scalar_apply(result, matrix, scalar, Operation.DIVIDE, atomic=atomic)


def _require_same_shape(result: Matrix | None, matrix: Matrix | None) -> None:
    if result is not None and matrix is not None and result.shape != matrix.shape:
        raise DimensionError(
            f"result: expected shape {matrix.shape}, got {result.shape}",
            expected=matrix.shape,
            actual=result.shape,
        )
