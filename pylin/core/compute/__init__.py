"""
Shared compute kernels for pylin.

IMPORTANT: These are the container-agnostic combinators. The public,
domain-facing functions live in pylin.vector.operations and
pylin.matrix.operations.

Submodules:
    elementwise: Element-wise and scalar combinators
    reduction: Inner-product accumulation
"""

from pylin.core.compute.elementwise import elementwise_apply, scalar_apply
from pylin.core.compute.reduction import inner_product

__all__ = [
    "elementwise_apply",
    "scalar_apply",
    "inner_product",
]
