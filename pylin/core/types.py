"""
Element type tags and element type descriptors.

A type tag is an integer used only for bookkeeping: the engine compares tags
for equality and rejects TypeTag.NULL, nothing else. Callers may use any
integer outside the predefined range for their own types.

An ElementType bundles everything a container needs to know about its
elements: tag, byte size, arithmetic bindings, and optionally a numpy dtype
that lets values be encoded to and decoded from element bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import numpy as np
from numpy.typing import DTypeLike

from pylin.core.arithmetic import ArithmeticSet, arithmetic_for, square_root_for
from pylin.core.exceptions import DimensionError, ValidationError
from pylin.core.protocols import SquareRoot


class TypeTag(IntEnum):
    """Predefined element type tags. Floating types use negative values."""
    NULL = 0
    S8 = 1
    U8 = 2
    S16 = 3
    U16 = 4
    S32 = 5
    U32 = 6
    S64 = 7
    U64 = 8
    SZ = 9
    FP8 = -1
    FP16 = -2
    FP32 = -3
    FP64 = -4


@dataclass(frozen=True)
class ElementType:
    """
    Descriptor for one element type.

    Attributes:
        tag: Type tag (TypeTag member or any caller-defined int)
        size: Byte width of one element
        arithmetic: The four arithmetic bindings
        dtype: numpy dtype used by encode()/decode(), or None for opaque
            caller-defined types that are only accessed as raw bytes
    """
    tag: int
    size: int
    arithmetic: ArithmeticSet
    dtype: np.dtype | None = None

    @classmethod
    def from_dtype(cls, dtype: DTypeLike, tag: int) -> ElementType:
        """Element type with builtin numpy arithmetic for ``dtype``."""
        dt = np.dtype(dtype)
        return cls(tag=int(tag), size=dt.itemsize, arithmetic=arithmetic_for(dt), dtype=dt)

    @property
    def square_root(self) -> SquareRoot:
        """Builtin square root for this type's dtype."""
        return square_root_for(self._require_dtype())

    def encode(self, value: Any) -> bytes:
        """
        Convert a Python value to element bytes.

        Integers outside the dtype's range wrap as a numpy cast would, as
        long as numpy can represent them at all.

        Raises:
            DimensionError: If value holds more or fewer than one entry
            ValidationError: If value cannot be converted to the dtype
        """
        dt = self._require_dtype()
        try:
            arr = np.asarray(value)
            if arr.size != 1:
                raise DimensionError(
                    f"value: expected a single element, got {arr.size}",
                    expected=1,
                    actual=arr.size,
                )
            with np.errstate(all='ignore'):
                return arr.astype(dt).reshape(-1).tobytes()
        except (OverflowError, TypeError, ValueError) as e:
            raise ValidationError(f"value: cannot convert {value!r} to {dt}: {e}") from e

    def decode(self, buffer: Any) -> Any:
        """Convert element bytes to a Python scalar."""
        dt = self._require_dtype()
        raw = bytes(memoryview(buffer).cast('B'))
        if len(raw) != self.size:
            raise DimensionError(
                f"buffer: expected {self.size} bytes, got {len(raw)}",
                expected=self.size,
                actual=len(raw),
            )
        return np.frombuffer(raw, dtype=dt)[0].item()

    def zero(self) -> bytes:
        """The additive identity; reductions start their accumulator from it."""
        return bytes(self.size)

    def _require_dtype(self) -> np.dtype:
        if self.dtype is None:
            raise ValidationError(
                f"element type with tag {self.tag} has no dtype; use raw byte access"
            )
        return self.dtype


S8 = ElementType.from_dtype(np.int8, TypeTag.S8)
U8 = ElementType.from_dtype(np.uint8, TypeTag.U8)
S16 = ElementType.from_dtype(np.int16, TypeTag.S16)
U16 = ElementType.from_dtype(np.uint16, TypeTag.U16)
S32 = ElementType.from_dtype(np.int32, TypeTag.S32)
U32 = ElementType.from_dtype(np.uint32, TypeTag.U32)
S64 = ElementType.from_dtype(np.int64, TypeTag.S64)
U64 = ElementType.from_dtype(np.uint64, TypeTag.U64)
SZ = ElementType.from_dtype(np.uintp, TypeTag.SZ)
FP16 = ElementType.from_dtype(np.float16, TypeTag.FP16)
FP32 = ElementType.from_dtype(np.float32, TypeTag.FP32)
FP64 = ElementType.from_dtype(np.float64, TypeTag.FP64)

# FP8 has a tag but no builtin element type: numpy has no 8-bit float.
BUILTIN_TYPES: dict[int, ElementType] = {
    t.tag: t for t in (S8, U8, S16, U16, S32, U32, S64, U64, SZ, FP16, FP32, FP64)
}


def element_type_for(tag: int) -> ElementType:
    """
    Look up the builtin element type for a tag.

    Raises:
        KeyError: If the tag has no builtin element type
    """
    if int(tag) not in BUILTIN_TYPES:
        raise KeyError(f"no builtin element type for tag {tag}")
    return BUILTIN_TYPES[int(tag)]
