"""
Input validation utilities for pylin.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent. Every operation runs them before it
touches any output, which is what guarantees that a failed call has not
mutated anything.

Design principles:
    - No silent coercion of shapes or sizes
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Any

from pylin.core.arithmetic import Operation
from pylin.core.exceptions import (
    BindingMismatchError,
    DimensionError,
    MissingBindingError,
    NullReferenceError,
    ValidationError,
)
from pylin.core.memory import as_bytes
from pylin.core.protocols import ElementOp

if TYPE_CHECKING:
    from pylin.core.container import Container


def check_present(**operands: Any) -> None:
    """
    Verify no operand is None.

    Args:
        **operands: Operands keyed by parameter name

    Raises:
        NullReferenceError: Naming the first missing operand
    """
    for name, value in operands.items():
        if value is None:
            raise NullReferenceError(f"{name}: null reference passed", name=name)


def check_size(value: Any, name: str) -> int:
    """
    Verify a shape component is a positive integer.

    Args:
        value: Candidate size (element count, width, height, element size)
        name: Parameter name for error messages

    Returns:
        The value as a Python int

    Raises:
        ValidationError: If value is not an integer
        DimensionError: If value is zero or negative
    """
    try:
        size = operator.index(value)
    except TypeError:
        raise ValidationError(
            f"{name}: expected an integer, got {type(value).__name__}"
        ) from None
    if size <= 0:
        raise DimensionError(
            f"{name}: must be positive, got {size}", expected='> 0', actual=size
        )
    return size


def check_index(value: Any, name: str) -> int:
    """
    Verify an element index is an integer.

    Range is not checked here; containers raise IndexBoundsError for that.

    Raises:
        ValidationError: If value is not an integer
    """
    try:
        return operator.index(value)
    except TypeError:
        raise ValidationError(
            f"{name}: expected an integer index, got {type(value).__name__}"
        ) from None


def check_element_buffer(buffer: Any, element_size: int, name: str) -> None:
    """
    Verify a bytes-like object holds exactly one element.

    Raises:
        NullReferenceError: If buffer is None
        ValidationError: If buffer does not expose the buffer protocol
        DimensionError: If its byte length differs from element_size
    """
    check_present(**{name: buffer})
    try:
        nbytes = as_bytes(buffer).nbytes
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: not a bytes-like buffer: {e}") from e
    if nbytes != element_size:
        raise DimensionError(
            f"{name}: expected {element_size} bytes, got {nbytes}",
            expected=element_size,
            actual=nbytes,
        )


def check_writable(buffer: Any, name: str) -> None:
    """
    Verify an output buffer can be written.

    Raises:
        ValidationError: If the buffer is read-only
    """
    if not as_bytes(buffer).flags.writeable:
        raise ValidationError(f"{name}: output buffer is read-only")


def check_binding(container: Container, operation: Operation, name: str) -> ElementOp:
    """
    Fetch an arithmetic binding, failing if it is absent.

    Returns:
        The bound callback

    Raises:
        MissingBindingError: If the container has no such binding
    """
    binding = container.arithmetic.get(operation)
    if binding is None:
        raise MissingBindingError(
            f"{name}: no '{operation.value}' binding", binding=operation.value
        )
    return binding


def check_callable(callback: Any, name: str) -> None:
    """
    Verify a caller-supplied callback can be invoked.

    Raises:
        MissingBindingError: If callback is None or not callable
    """
    if callback is None or not callable(callback):
        raise MissingBindingError(f"{name}: callback missing or not callable", binding=name)


def check_compatible(a: Container, b: Container, names: tuple[str, str] = ('a', 'b')) -> None:
    """
    Verify two containers may be combined element-wise.

    Mirrors compatible(), but raises with the reason instead of returning
    a status.

    Raises:
        DimensionError: If element counts (or matrix shapes) differ
        BindingMismatchError: If type tags or arithmetic bindings differ
    """
    left, right = names
    if a.element_count != b.element_count or not a.same_shape(b):
        raise DimensionError(
            f"{left} and {right}: shapes differ ({a.shape} vs {b.shape})",
            expected=a.shape,
            actual=b.shape,
        )
    mismatched = a.arithmetic.mismatched(b.arithmetic)
    if a.type_tag != b.type_tag:
        mismatched = ('type_tag',) + mismatched
    if mismatched:
        raise BindingMismatchError(
            f"{left} and {right}: incompatible {', '.join(mismatched)}",
            mismatched=mismatched,
        )


def check_same_layout(result: Container, source: Container, names: tuple[str, str]) -> None:
    """
    Verify an output container can hold one element per source element.

    Raises:
        DimensionError: If element count or element size differ
    """
    out, src = names
    if result.element_count != source.element_count or result.element_size != source.element_size:
        raise DimensionError(
            f"{out}: expected {source.element_count} elements of {source.element_size} bytes, "
            f"got {result.element_count} of {result.element_size}",
            expected=(source.element_count, source.element_size),
            actual=(result.element_count, result.element_size),
        )
