"""
Element-wise combinators.

elementwise_apply walks two compatible containers in ascending index order,
feeds each pair of elements to one arithmetic binding and writes the output
element into a result container. scalar_apply does the same with a single
shared right-hand operand.

All preconditions are checked before the first element is touched. What
happens on a failure inside the loop (a callback raising, typically integer
division by zero) depends on ``atomic``:

    atomic=True   output elements are staged in a scratch buffer drawn from
                  the result's allocator and committed only after the last
                  element succeeded; result is untouched on failure
    atomic=False  output elements are written straight into result; the
                  elements before the failing index stay written and a
                  PartialWriteWarning is emitted before the error propagates

Scratch buffers are released on every exit path.
"""

from __future__ import annotations

import warnings
from contextlib import ExitStack
from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from pylin.core.arithmetic import Operation
from pylin.core.container import Container
from pylin.core.exceptions import PartialWriteWarning
from pylin.core.memory import as_bytes, scratch
from pylin.core.protocols import ElementOp
from pylin.core.validation import (
    check_binding,
    check_compatible,
    check_element_buffer,
    check_present,
    check_same_layout,
)


def elementwise_apply(
    result: Container,
    a: Container,
    b: Container,
    operation: Operation,
    *,
    atomic: bool = True,
) -> Container:
    """
    result[i] = a[i] (op) b[i] for every index.

    Args:
        result: Output container; same element count and size as ``a``
        a: Left operand
        b: Right operand, compatible with ``a``
        operation: Which of a's arithmetic bindings to apply
        atomic: Stage the output and commit on success (see module docs)

    Returns:
        result

    Raises:
        NullReferenceError: If any container is None
        InvalidContainerError: If any container fails its integrity check
        DimensionError: If shapes differ
        BindingMismatchError: If a and b disagree on type tag or bindings
        MissingBindingError: If a has no binding for ``operation``
        AllocationError: If a scratch buffer cannot be allocated
    """
    check_present(result=result, a=a, b=b)
    check_compatible(a, b)
    op = check_binding(a, operation, 'a')
    a.check_integrity('a')
    b.check_integrity('b')
    result.check_integrity('result')
    check_same_layout(result, a, ('result', 'a'))

    size = a.element_size
    with ExitStack() as stack:
        left = stack.enter_context(scratch(a.memory, size, 'left operand'))
        right = stack.enter_context(scratch(b.memory, size, 'right operand'))
        output = stack.enter_context(scratch(result.memory, size, 'output element'))

        def step(index: int) -> NDArray[np.uint8]:
            a.read_raw(index, out=left)
            b.read_raw(index, out=right)
            op(output, left, right)
            return output

        _drive(result, a.element_count, step, stack, atomic)
    return result


def scalar_apply(
    result: Container,
    source: Container,
    scalar: Any,
    operation: Operation,
    *,
    atomic: bool = True,
) -> Container:
    """
    result[i] = source[i] (op) scalar for every index.

    Args:
        result: Output container; same element count and size as ``source``
        source: Input container
        scalar: Bytes-like object of exactly element_size bytes
        operation: Which of source's arithmetic bindings to apply
        atomic: Stage the output and commit on success

    Returns:
        result

    Raises:
        NullReferenceError: If result, source or scalar is None
        InvalidContainerError: If result or source fails its integrity check
        DimensionError: If the scalar or result layout does not match source
        MissingBindingError: If source has no binding for ``operation``
        AllocationError: If a scratch buffer cannot be allocated
    """
    check_present(result=result, source=source, scalar=scalar)
    op = check_binding(source, operation, 'source')
    source.check_integrity('source')
    result.check_integrity('result')
    check_element_buffer(scalar, source.element_size, 'scalar')
    check_same_layout(result, source, ('result', 'source'))

    size = source.element_size
    with ExitStack() as stack:
        element = stack.enter_context(scratch(source.memory, size, 'element'))
        output = stack.enter_context(scratch(source.memory, size, 'output element'))
        # snapshot: the scalar may alias an element of result
        factor = stack.enter_context(scratch(source.memory, size, 'scalar'))
        factor[:] = as_bytes(scalar)

        def step(index: int) -> NDArray[np.uint8]:
            source.read_raw(index, out=element)
            op(output, element, factor)
            return output

        _drive(result, source.element_count, step, stack, atomic)
    return result


def _drive(
    result: Container,
    count: int,
    step: Callable[[int], NDArray[np.uint8]],
    stack: ExitStack,
    atomic: bool,
) -> None:
    size = result.element_size
    if atomic:
        staged = stack.enter_context(scratch(result.memory, result.buffer_size, 'staged result'))
        for index in range(count):
            staged[index * size:(index + 1) * size] = step(index)
        result.load(staged)
        return

    index = 0
    try:
        for index in range(count):
            result.write_raw(index, step(index))
    except Exception:
        if index > 0:
            warnings.warn(
                f"operation failed at index {index}; elements 0..{index - 1} "
                f"of the result were already written",
                PartialWriteWarning,
                stacklevel=4,
            )
        raise
