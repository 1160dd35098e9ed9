"""
Path-parameter and integer-range helpers shared by the entity routers.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Matches the route constraint: identity segments are decimal digits only.
ID_PATTERN = r"^[0-9]+$"

Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


def parse_identity(raw: str) -> int:
    """
    Parse a digit-only path segment into a 32-bit identity.

    Raises ValueError when the segment is not decimal or does not fit.
    """
    raw = (raw or "").strip()
    if not raw.isdecimal():
        raise ValueError(f"identity {raw!r} is not a decimal number")
    value = int(raw)
    if value > INT32_MAX:
        raise ValueError(f"identity {raw!r} is out of range")
    return value
