"""
Arithmetic bindings.

An ArithmeticSet is the capability set {add, subtract, multiply, divide} for
one element type. Containers never interpret element bytes themselves; every
numeric step goes through these callbacks.

Binding identity matters: two containers are only compatible when they hold
the very same callables. The builtin sets are cached per dtype for that
reason, so every container built from the same builtin type shares them.

Builtin semantics mirror machine arithmetic for the dtype:
    - integers wrap on overflow and divide with truncation toward zero
    - integer division by zero raises DivideByZeroError
    - floats follow IEEE rules silently (inf/nan, no RuntimeWarning)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

import numpy as np
from numpy.typing import DTypeLike

from pylin.core.exceptions import DivideByZeroError
from pylin.core.protocols import ElementOp, SquareRoot


class Operation(Enum):
    """Selector for one of the four arithmetic bindings."""
    ADD = 'add'
    SUBTRACT = 'subtract'
    MULTIPLY = 'multiply'
    DIVIDE = 'divide'


@dataclass(frozen=True, eq=False)
class ArithmeticSet:
    """
    The four arithmetic bindings of an element type.

    Any binding may be None; operations that need a missing binding raise
    MissingBindingError. Equality is identity, never structural.
    """
    add: ElementOp | None = None
    subtract: ElementOp | None = None
    multiply: ElementOp | None = None
    divide: ElementOp | None = None

    def get(self, operation: Operation) -> ElementOp | None:
        """Return the binding selected by ``operation``."""
        return getattr(self, operation.value)

    def mismatched(self, other: ArithmeticSet) -> tuple[str, ...]:
        """Names of the bindings that are not the same object in both sets."""
        return tuple(
            op.value for op in Operation
            if self.get(op) is not other.get(op)
        )


def _typed(buffer: Any, dtype: np.dtype) -> np.ndarray:
    return np.frombuffer(buffer, dtype=dtype, count=1)


def _float_op(ufunc: np.ufunc, dtype: np.dtype) -> ElementOp:
    def op(result: Any, left: Any, right: Any) -> None:
        with np.errstate(all='ignore'):
            ufunc(_typed(left, dtype), _typed(right, dtype), out=_typed(result, dtype))
    op.__name__ = f"{ufunc.__name__}_{dtype.name}"
    return op


def _int_op(ufunc: np.ufunc, dtype: np.dtype) -> ElementOp:
    def op(result: Any, left: Any, right: Any) -> None:
        with np.errstate(over='ignore'):
            ufunc(_typed(left, dtype), _typed(right, dtype), out=_typed(result, dtype))
    op.__name__ = f"{ufunc.__name__}_{dtype.name}"
    return op


def _int_divide(dtype: np.dtype) -> ElementOp:
    def divide(result: Any, left: Any, right: Any) -> None:
        a = _typed(left, dtype)
        b = _typed(right, dtype)
        if b[0] == 0:
            raise DivideByZeroError(
                f"integer division by zero ({dtype.name})", operand='right'
            )
        with np.errstate(over='ignore'):
            quotient = np.floor_divide(a, b)
            # floor -> truncation when the signs differ and the division is inexact
            if (a[0] < 0) != (b[0] < 0) and a[0] % b[0] != 0:
                quotient = quotient + np.ones(1, dtype=dtype)
        _typed(result, dtype)[:] = quotient
    divide.__name__ = f"divide_{dtype.name}"
    return divide


@lru_cache(maxsize=None)
def _arithmetic_for(dtype: np.dtype) -> ArithmeticSet:
    if np.issubdtype(dtype, np.floating):
        return ArithmeticSet(
            add=_float_op(np.add, dtype),
            subtract=_float_op(np.subtract, dtype),
            multiply=_float_op(np.multiply, dtype),
            divide=_float_op(np.true_divide, dtype),
        )
    if np.issubdtype(dtype, np.integer):
        return ArithmeticSet(
            add=_int_op(np.add, dtype),
            subtract=_int_op(np.subtract, dtype),
            multiply=_int_op(np.multiply, dtype),
            divide=_int_divide(dtype),
        )
    raise TypeError(f"no builtin arithmetic for dtype {dtype}")


def arithmetic_for(dtype: DTypeLike) -> ArithmeticSet:
    """
    Builtin arithmetic set for a numpy integer or floating dtype.

    Repeated calls with the same dtype return the same object.

    Raises:
        TypeError: If the dtype is neither integer nor floating
    """
    return _arithmetic_for(np.dtype(dtype))


@lru_cache(maxsize=None)
def _square_root_for(dtype: np.dtype) -> SquareRoot:
    if np.issubdtype(dtype, np.floating):
        def square_root(output: Any, value: Any) -> None:
            with np.errstate(all='ignore'):
                np.sqrt(_typed(value, dtype), out=_typed(output, dtype))
    elif np.issubdtype(dtype, np.integer):
        def square_root(output: Any, value: Any) -> None:
            x = int(_typed(value, dtype)[0])
            if x < 0:
                raise ValueError(f"square root of negative integer {x}")
            _typed(output, dtype)[0] = math.isqrt(x)
    else:
        raise TypeError(f"no builtin square root for dtype {dtype}")
    square_root.__name__ = f"sqrt_{dtype.name}"
    return square_root


def square_root_for(dtype: DTypeLike) -> SquareRoot:
    """
    Builtin square root callback for a numpy dtype.

    Floats use numpy.sqrt; integers use the floor integer square root.
    """
    return _square_root_for(np.dtype(dtype))
