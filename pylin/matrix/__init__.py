"""
Matrix module.

Column-major matrices sharing the vector engine.

Public API:
    Matrix                            - fixed-shape container
    add, subtract                     - element-wise sum/difference
    elementwise_multiply/_divide      - element-wise product/quotient
    scale, scale_inverse              - scalar multiply/divide
"""

from pylin.matrix.container import Matrix
from pylin.matrix.operations import (
    add,
    elementwise_divide,
    elementwise_multiply,
    scale,
    scale_inverse,
    subtract,
)

__all__ = [
    "Matrix",
    "add",
    "subtract",
    "elementwise_multiply",
    "elementwise_divide",
    "scale",
    "scale_inverse",
]
