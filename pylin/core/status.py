"""
Integer status codes for outcome queries.

Compatibility checks return a ternary code rather than a bool because
callers must tell "operands are fine but don't match" apart from
"operands are malformed".

    SUCCESS       0   operands match
    INCOMPATIBLE  1   well-formed operands, structural or binding mismatch
    ERROR        -1   an operand is missing
"""

from enum import IntEnum


class Status(IntEnum):
    SUCCESS = 0
    INCOMPATIBLE = 1
    ERROR = -1

    @property
    def ok(self) -> bool:
        return self is Status.SUCCESS


__all__ = ['Status']
