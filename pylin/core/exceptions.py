"""
Exception hierarchy for pylin.

All exceptions inherit from PyLinError to allow catching any
library-specific error. Errors that fall into one of the six operation
failure categories carry an ErrorKind so callers can branch on the category
without matching class names. Generic ValidationError and
InvalidContainerError have no category and leave kind as None.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - An operation that raises has not mutated its outputs
    - Builtin bases (IndexError, MemoryError, ...) are mixed in where they
      describe the same failure, so generic handlers keep working
"""

from enum import Enum


class ErrorKind(Enum):
    """The six failure categories an operation can report."""
    NULL_REFERENCE = 'null_reference'
    SHAPE_MISMATCH = 'shape_mismatch'
    BINDING_MISMATCH = 'binding_mismatch'
    BOUNDS_VIOLATION = 'bounds_violation'
    ALLOCATION_FAILURE = 'allocation_failure'
    DIVIDE_BY_ZERO = 'divide_by_zero'


class PyLinError(Exception):
    """Base exception for all pylin errors."""
    kind: ErrorKind | None = None


class PyLinWarning(UserWarning):
    """Base warning category for non-fatal pylin diagnostics."""
    pass


class PartialWriteWarning(PyLinWarning):
    """
    A non-atomic operation failed after writing part of its result.

    Emitted right before the underlying error propagates.
    """
    pass


class ValidationError(PyLinError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class NullReferenceError(ValidationError):
    """
    A required operand was None.

    Attributes:
        name: Parameter name of the missing operand
    """
    kind = ErrorKind.NULL_REFERENCE

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class DimensionError(ValidationError):
    """
    Container shapes are invalid or inconsistent.

    Raised for zero/negative shape components at construction and for
    operands whose element counts or sizes don't line up.

    Attributes:
        expected: Expected shape or size, if known
        actual: Shape or size that was found, if known
    """
    kind = ErrorKind.SHAPE_MISMATCH

    def __init__(
        self,
        message: str,
        expected: object = None,
        actual: object = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class BindingMismatchError(ValidationError):
    """
    Operands disagree on element type tag or arithmetic bindings.

    Attributes:
        mismatched: Names of the fields that differ
            (e.g. ('type_tag', 'add'))
    """
    kind = ErrorKind.BINDING_MISMATCH

    def __init__(self, message: str, mismatched: tuple[str, ...] = ()):
        super().__init__(message)
        self.mismatched = mismatched


class MissingBindingError(BindingMismatchError):
    """
    A required arithmetic binding or callback is absent.

    Attributes:
        binding: Name of the absent binding ('add', 'square_root', ...)
    """

    def __init__(self, message: str, binding: str | None = None):
        super().__init__(message, mismatched=(binding,) if binding else ())
        self.binding = binding


class InvalidContainerError(ValidationError):
    """
    A container failed its integrity check.

    Attributes:
        name: Parameter name of the container
        failed_checks: Names of the invariants that do not hold
    """

    def __init__(
        self,
        message: str,
        name: str | None = None,
        failed_checks: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.name = name
        self.failed_checks = failed_checks


class IndexBoundsError(PyLinError, IndexError):
    """
    An element index is outside the container.

    Attributes:
        index: The offending index (raw index, or (row, column))
        bound: The exclusive upper bound that was violated
    """
    kind = ErrorKind.BOUNDS_VIOLATION

    def __init__(self, message: str, index: object = None, bound: object = None):
        super().__init__(message)
        self.index = index
        self.bound = bound


class AllocationError(PyLinError, MemoryError):
    """
    An allocator could not provide the requested buffer.

    Attributes:
        requested_size: Byte count that was requested
    """
    kind = ErrorKind.ALLOCATION_FAILURE

    def __init__(self, message: str, requested_size: int | None = None):
        super().__init__(message)
        self.requested_size = requested_size


class SizeOverflowError(AllocationError, OverflowError):
    """
    A buffer size computation overflowed the platform size_t range.

    Attributes:
        factors: The two factors whose product overflowed
        limit: The largest representable size
    """

    def __init__(
        self,
        message: str,
        factors: tuple[int, int] | None = None,
        limit: int | None = None,
    ):
        super().__init__(message)
        self.factors = factors
        self.limit = limit


class NumericalError(PyLinError):
    """
    Numerical computation failed.

    Base class for errors arising from element arithmetic.
    """
    pass


class DivideByZeroError(NumericalError, ZeroDivisionError):
    """
    A division or normalization had a zero divisor.

    Attributes:
        operand: Description of the zero operand
    """
    kind = ErrorKind.DIVIDE_BY_ZERO

    def __init__(self, message: str, operand: str | None = None):
        super().__init__(message)
        self.operand = operand
