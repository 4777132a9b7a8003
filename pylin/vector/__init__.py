"""
Vector module.

Public API:
    Vector                 - fixed-length container
    add(r, a, b)           - element-wise sum
    subtract(r, a, b)      - element-wise difference
    elementwise_multiply   - Hadamard product
    elementwise_divide     - element-wise quotient
    dot(a, b)              - inner product
    scale(r, v, k)         - multiply by a scalar
    scale_inverse(r, v, k) - divide by a scalar
    magnitude_squared(v)   - dot(v, v)
    normalize(r, v, sqrt)  - v / |v|
"""

from pylin.vector.container import Vector
from pylin.vector.operations import (
    add,
    dot,
    elementwise_divide,
    elementwise_multiply,
    magnitude_squared,
    normalize,
    scale,
    scale_inverse,
    subtract,
)

__all__ = [
    "Vector",
    "add",
    "subtract",
    "elementwise_multiply",
    "elementwise_divide",
    "dot",
    "scale",
    "scale_inverse",
    "magnitude_squared",
    "normalize",
]
