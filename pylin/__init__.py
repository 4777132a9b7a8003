"""
pylin: type-generic vectors and matrices with pluggable arithmetic.

Element type, arithmetic and memory allocation are supplied by the caller
as callbacks; the library owns buffer lifecycle, validation and the
element-wise engine.

Submodules:
    core: Element types, bindings, memory, exceptions, engine
    vector: Vector container and operations
    matrix: Matrix container and element-wise operations
"""

__version__ = "0.1.0"

from pylin import matrix, vector
from pylin.core import (
    DEFAULT_MEMORY,
    ArithmeticSet,
    ElementType,
    MemoryBindings,
    Operation,
    PyLinError,
    Status,
    TypeTag,
    compatible,
    validate_integrity,
)
from pylin.core.types import (
    FP16,
    FP32,
    FP64,
    S8,
    S16,
    S32,
    S64,
    SZ,
    U8,
    U16,
    U32,
    U64,
)
from pylin.matrix import Matrix
from pylin.vector import (
    Vector,
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
    "__version__",
    "vector",
    "matrix",
    # Containers
    "Vector",
    "Matrix",
    "compatible",
    "validate_integrity",
    "Status",
    # Element types
    "TypeTag",
    "ElementType",
    "ArithmeticSet",
    "Operation",
    "MemoryBindings",
    "DEFAULT_MEMORY",
    "S8", "U8", "S16", "U16", "S32", "U32", "S64", "U64", "SZ",
    "FP16", "FP32", "FP64",
    # Vector operations
    "add",
    "subtract",
    "elementwise_multiply",
    "elementwise_divide",
    "dot",
    "scale",
    "scale_inverse",
    "magnitude_squared",
    "normalize",
    "PyLinError",
]
