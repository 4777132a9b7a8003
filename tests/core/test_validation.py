"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_present: None rejection with parameter name
    - check_size: positive integer shape components
    - check_element_buffer / check_writable: element buffers
    - check_binding / check_callable: callback presence
    - check_compatible / check_same_layout: operand pairing
"""

import numpy as np
import pytest

from pylin import S32, S64, FP64, Vector
from pylin.core.arithmetic import ArithmeticSet, Operation
from pylin.core.exceptions import (
    BindingMismatchError,
    DimensionError,
    MissingBindingError,
    NullReferenceError,
    ValidationError,
)
from pylin.core.types import ElementType, TypeTag
from pylin.core.validation import (
    check_binding,
    check_callable,
    check_compatible,
    check_element_buffer,
    check_present,
    check_same_layout,
    check_size,
    check_writable,
)


# ═══════════════════════════════════════════════════════════════════════
# check_present / check_size
# ═══════════════════════════════════════════════════════════════════════


class TestCheckPresent:

    def test_all_present(self):
        check_present(a=1, b="x")

    def test_names_missing_operand(self):
        with pytest.raises(NullReferenceError, match="b: null reference") as exc_info:
            check_present(a=1, b=None)
        assert exc_info.value.name == 'b'


class TestCheckSize:

    def test_positive(self):
        assert check_size(3, 'length') == 3

    def test_numpy_integer(self):
        assert check_size(np.int64(5), 'length') == 5

    def test_zero(self):
        with pytest.raises(DimensionError, match="length: must be positive, got 0"):
            check_size(0, 'length')

    def test_negative(self):
        with pytest.raises(DimensionError):
            check_size(-2, 'width')

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="expected an integer"):
            check_size(2.5, 'height')


# ═══════════════════════════════════════════════════════════════════════
# Element buffers
# ═══════════════════════════════════════════════════════════════════════


class TestElementBuffers:

    def test_exact_size(self):
        check_element_buffer(b"\x00" * 4, 4, 'source')

    def test_wrong_size(self):
        with pytest.raises(DimensionError, match="expected 4 bytes, got 2") as exc_info:
            check_element_buffer(b"\x00" * 2, 4, 'source')
        assert exc_info.value.expected == 4
        assert exc_info.value.actual == 2

    def test_none(self):
        with pytest.raises(NullReferenceError):
            check_element_buffer(None, 4, 'scalar')

    def test_not_a_buffer(self):
        with pytest.raises(ValidationError, match="not a bytes-like"):
            check_element_buffer(3.0, 8, 'scalar')

    def test_writable(self):
        check_writable(bytearray(4), 'out')

    def test_read_only(self):
        with pytest.raises(ValidationError, match="read-only"):
            check_writable(b"\x00" * 4, 'out')


# ═══════════════════════════════════════════════════════════════════════
# Bindings
# ═══════════════════════════════════════════════════════════════════════


class TestBindings:

    def test_present_binding(self):
        v = Vector(S32, 2)
        assert check_binding(v, Operation.ADD, 'v') is S32.arithmetic.add

    def test_missing_binding(self):
        bare = ElementType(tag=TypeTag.S32, size=4, arithmetic=ArithmeticSet())
        v = Vector(bare, 2)
        with pytest.raises(MissingBindingError, match="no 'multiply' binding") as exc_info:
            check_binding(v, Operation.MULTIPLY, 'v')
        assert exc_info.value.binding == 'multiply'

    def test_callable(self):
        check_callable(len, 'square_root')

    @pytest.mark.parametrize("callback", [None, 42])
    def test_not_callable(self, callback):
        with pytest.raises(MissingBindingError):
            check_callable(callback, 'square_root')


# ═══════════════════════════════════════════════════════════════════════
# Operand pairing
# ═══════════════════════════════════════════════════════════════════════


class TestCompatibility:

    def test_compatible(self):
        check_compatible(Vector(S32, 3), Vector(S32, 3))

    def test_length_mismatch(self):
        with pytest.raises(DimensionError, match="shapes differ"):
            check_compatible(Vector(S32, 3), Vector(S32, 4))

    def test_type_mismatch(self):
        with pytest.raises(BindingMismatchError) as exc_info:
            check_compatible(Vector(S32, 3), Vector(S64, 3))
        assert exc_info.value.mismatched[0] == 'type_tag'

    def test_same_layout(self):
        check_same_layout(Vector(FP64, 2), Vector(FP64, 2), ('result', 'a'))

    def test_layout_count_mismatch(self):
        with pytest.raises(DimensionError, match="result: expected 2 elements"):
            check_same_layout(Vector(FP64, 3), Vector(FP64, 2), ('result', 'a'))

    def test_layout_size_mismatch(self):
        with pytest.raises(DimensionError):
            check_same_layout(Vector(S32, 2), Vector(FP64, 2), ('result', 'a'))
