"""
Core infrastructure for pylin.

This module provides shared abstractions, utilities and the operation
engine used by the vector and matrix submodules.

Key components:
    protocols: Callback protocols (ElementOp, SquareRoot, Allocate, Free)
    types: Type tags and element type descriptors
    arithmetic: Arithmetic binding sets
    memory: Memory bindings, scratch buffers, size arithmetic
    container: Container base class and compatibility check
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Element-wise and reduction combinators
"""

from pylin.core.arithmetic import ArithmeticSet, Operation, arithmetic_for, square_root_for
from pylin.core.container import Container, compatible, validate_integrity
from pylin.core.exceptions import (
    AllocationError,
    BindingMismatchError,
    DimensionError,
    DivideByZeroError,
    ErrorKind,
    IndexBoundsError,
    InvalidContainerError,
    MissingBindingError,
    NullReferenceError,
    NumericalError,
    PartialWriteWarning,
    PyLinError,
    PyLinWarning,
    SizeOverflowError,
    ValidationError,
)
from pylin.core.memory import DEFAULT_MEMORY, SIZE_MAX, MemoryBindings, release, zalloc
from pylin.core.status import Status
from pylin.core.types import ElementType, TypeTag

__all__ = [
    # Element types and bindings
    "TypeTag",
    "ElementType",
    "ArithmeticSet",
    "Operation",
    "arithmetic_for",
    "square_root_for",
    # Memory
    "MemoryBindings",
    "DEFAULT_MEMORY",
    "SIZE_MAX",
    "zalloc",
    "release",
    # Containers
    "Container",
    "compatible",
    "validate_integrity",
    "Status",
    # Exceptions
    "PyLinError",
    "PyLinWarning",
    "PartialWriteWarning",
    "ErrorKind",
    "ValidationError",
    "NullReferenceError",
    "DimensionError",
    "BindingMismatchError",
    "MissingBindingError",
    "InvalidContainerError",
    "IndexBoundsError",
    "AllocationError",
    "SizeOverflowError",
    "NumericalError",
    "DivideByZeroError",
]
