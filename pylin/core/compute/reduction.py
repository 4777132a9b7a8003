"""
Inner-product reduction.

Accumulates sum(a[i] * b[i]) using only the operands' add and multiply
bindings. The accumulator starts from the element type's zero() pattern,
all-zero bytes, which is the additive identity for every builtin type.

One product scratch is reused across the loop. The caller's output buffer is
written once, after the whole sum has been formed.
"""

from __future__ import annotations

from contextlib import ExitStack
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylin.core.arithmetic import Operation
from pylin.core.container import Container
from pylin.core.memory import as_bytes, scratch
from pylin.core.validation import (
    check_binding,
    check_compatible,
    check_element_buffer,
    check_present,
    check_writable,
)


def inner_product(a: Container, b: Container, out: Any = None) -> NDArray[np.uint8]:
    """
    Sum of element-wise products of two compatible containers.

    Args:
        a: Left operand
        b: Right operand, compatible with ``a``
        out: Optional writable buffer of element_size bytes for the result.
            Left untouched if the call fails.

    Returns:
        ``out`` as a uint8 view, or a fresh uint8 array holding the product

    Raises:
        NullReferenceError: If a or b is None
        DimensionError: If shapes differ, or out has the wrong size
        BindingMismatchError: If a and b disagree on type tag or bindings
        MissingBindingError: If the add or multiply binding is absent
        InvalidContainerError: If either operand fails its integrity check
    """
    check_present(a=a, b=b)
    check_compatible(a, b)
    add = check_binding(a, Operation.ADD, 'a')
    multiply = check_binding(a, Operation.MULTIPLY, 'a')
    a.check_integrity('a')
    b.check_integrity('b')
    size = a.element_size
    if out is not None:
        check_element_buffer(out, size, 'out')
        check_writable(out, 'out')

    with ExitStack() as stack:
        left = stack.enter_context(scratch(a.memory, size, 'left operand'))
        right = stack.enter_context(scratch(b.memory, size, 'right operand'))
        term = stack.enter_context(scratch(a.memory, size, 'product term'))
        total = stack.enter_context(scratch(a.memory, size, 'accumulator'))
        total[:] = as_bytes(a.element_type.zero())

        for index in range(a.element_count):
            a.read_raw(index, out=left)
            b.read_raw(index, out=right)
            term[:] = 0
            multiply(term, left, right)
            add(total, term, total)

        if out is None:
            return total.copy()
        target = as_bytes(out)
        target[:] = total
        return target
