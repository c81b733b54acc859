"""32-bit unsigned word arithmetic."""

from typing import Annotated

from pydantic import Field, TypeAdapter, ValidationError

U32_MAX = 0xFFFF_FFFF

U32 = Annotated[int, Field(ge=0, le=U32_MAX, strict=True)]
"""An integer in the range ``[0, 2**32 - 1]``."""

_u32_adapter: TypeAdapter[int] = TypeAdapter(U32)


def is_u32(value: object) -> bool:
    """Check whether ``value`` is an ``int`` that fits in 32 unsigned bits.

    ``bool`` is rejected even though it subclasses ``int``.
    """
    try:
        _u32_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def wrapping_add(a: int, b: int) -> int:
    """Add two words modulo 2**32."""
    return (a + b) & U32_MAX


def wrapping_mul(a: int, b: int) -> int:
    """Multiply two words modulo 2**32."""
    return (a * b) & U32_MAX
