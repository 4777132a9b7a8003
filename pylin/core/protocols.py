"""
Callback protocols for pylin.

These define the structural interfaces that caller-supplied callbacks must
satisfy. We use Protocol (structural typing) so plain functions, bound
methods and callable objects all qualify.

Element buffers passed to callbacks are writable numpy uint8 arrays of
exactly element_size bytes. Read-only operands may be any bytes-like object.

Design Principles:
    - Callbacks write through their first argument and return nothing
    - Operand buffers are read-only and must not be retained past the call
    - Allocators report failure by returning None, never by raising
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ElementOp(Protocol):
    """
    Binary element arithmetic: result <- left (op) right.

    Must write exactly element_size bytes into result, must not allocate
    from the container's allocator and must not keep references to its
    arguments.
    """

    def __call__(self, result: Any, left: Any, right: Any) -> None:
        ...


@runtime_checkable
class SquareRoot(Protocol):
    """
    Unary element square root: output <- sqrt(input).

    Called in place during normalization, so output and input may be the
    same buffer.
    """

    def __call__(self, output: Any, value: Any) -> None:
        ...


@runtime_checkable
class Allocate(Protocol):
    """
    Buffer allocator.

    Returns a writable buffer of at least size bytes (anything exposing the
    buffer protocol), or None if the request cannot be satisfied.
    """

    def __call__(self, size: int) -> Any:
        ...


@runtime_checkable
class Free(Protocol):
    """
    Buffer deallocator.

    Must accept exactly what the matching allocator returned.
    """

    def __call__(self, buffer: Any) -> None:
        ...
