"""
Vector operations.

This module provides the public arithmetic API for vectors. Every function
validates its operands before touching any output; a call that raises has
left its outputs unchanged (see ``atomic`` for the one exception).

Element-wise:
    add, subtract, elementwise_multiply, elementwise_divide
Scalar:
    scale, scale_inverse
Reductions:
    dot, magnitude_squared
Derived:
    normalize

Results are written into a caller-supplied result container, which may be
one of the operands.

Example:
    >>> from pylin import Vector, S32, dot
    >>> a = Vector.from_values([1, 2, 3], S32)
    >>> b = Vector.from_values([4, 5, 6], S32)
    >>> S32.decode(dot(a, b))
    32
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylin.core.arithmetic import Operation
from pylin.core.compute.elementwise import elementwise_apply, scalar_apply
from pylin.core.compute.reduction import inner_product
from pylin.core.container import Container
from pylin.core.exceptions import DivideByZeroError
from pylin.core.memory import scratch
from pylin.core.protocols import SquareRoot
from pylin.core.validation import check_binding, check_callable, check_present


def add(result: Container, a: Container, b: Container, *, atomic: bool = True) -> Container:
    """result = a + b, element by element."""
    return elementwise_apply(result, a, b, Operation.ADD, atomic=atomic)


def subtract(result: Container, a: Container, b: Container, *, atomic: bool = True) -> Container:
    """result = a - b, element by element."""
    return elementwise_apply(result, a, b, Operation.SUBTRACT, atomic=atomic)


def elementwise_multiply(
    result: Container, a: Container, b: Container, *, atomic: bool = True
) -> Container:
    """result = a * b, element by element (Hadamard product)."""
    return elementwise_apply(result, a, b, Operation.MULTIPLY, atomic=atomic)


def elementwise_divide(
    result: Container, a: Container, b: Container, *, atomic: bool = True
) -> Container:
    """
    result = a / b, element by element.

    With builtin integer types a zero divisor raises DivideByZeroError; with
    atomic=True the result is left untouched.
    """
    return elementwise_apply(result, a, b, Operation.DIVIDE, atomic=atomic)


def dot(a: Container, b: Container, product: Any = None) -> NDArray[np.uint8]:
    """
    Dot product of two compatible vectors.

    Numeric behaviour is exactly that of the bound add and multiply
    callbacks (wraparound, rounding, ...); nothing is normalized.

    Args:
        a: Left operand
        b: Right operand
        product: Optional writable buffer of element_size bytes

    Returns:
        The product as element bytes (``product`` itself if given). Decode
        with ``a.element_type.decode(...)``.
    """
    return inner_product(a, b, product)


def scale(result: Container, vector: Container, scalar: Any, *, atomic: bool = True) -> Container:
    """
    result[i] = vector[i] * scalar.

    Args:
        scalar: Element bytes, e.g. ``FP64.encode(2.0)``
    """
    return scalar_apply(result, vector, scalar, Operation.MULTIPLY, atomic=atomic)


def scale_inverse(
    result: Container, vector: Container, scalar: Any, *, atomic: bool = True
) -> Container:
    """result[i] = vector[i] / scalar."""
    return scalar_apply(result, vector, scalar, Operation.DIVIDE, atomic=atomic)


def magnitude_squared(vector: Container, magnitude: Any = None) -> NDArray[np.uint8]:
    """
    Squared Euclidean magnitude, dot(vector, vector).

    There is no generic square root, so the squared value is what the engine
    can offer; normalize() takes a square-root callback instead.
    """
    check_present(vector=vector)
    check_binding(vector, Operation.ADD, 'vector')
    check_binding(vector, Operation.MULTIPLY, 'vector')
    vector.check_integrity('vector')
    return inner_product(vector, vector, magnitude)


def normalize(
    result: Container,
    vector: Container,
    square_root: SquareRoot,
    *,
    atomic: bool = True,
) -> Container:
    """
    result = vector / |vector|.

    The squared magnitude is computed into a scratch element, turned into
    the magnitude in place by ``square_root(output, input)``, and then used
    as the divisor of scale_inverse().

    Args:
        result: Output container, same layout as vector
        vector: Input vector
        square_root: Element square root callback, e.g. ``FP64.square_root``

    Returns:
        result

    Raises:
        DivideByZeroError: If the squared magnitude is the all-zero pattern
        MissingBindingError: If the divide binding or square_root is missing
    """
    check_present(result=result, vector=vector)
    check_binding(vector, Operation.DIVIDE, 'vector')
    check_callable(square_root, 'square_root')
    vector.check_integrity('vector')

    with scratch(vector.memory, vector.element_size, 'magnitude') as magnitude:
        inner_product(vector, vector, magnitude)
        if not magnitude.any():
            raise DivideByZeroError(
                "vector: zero magnitude, cannot normalize", operand='magnitude'
            )
        square_root(magnitude, magnitude)
        return scalar_apply(result, vector, magnitude, Operation.DIVIDE, atomic=atomic)
