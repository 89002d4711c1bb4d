"""Human-friendly byte sizes ("4G", "512k", "4096") -> exact byte counts.

Units are decimal (powers of 1000). The lookup order is fixed:
  1. the whole string as an integer (bare numbers are bytes)
  2. otherwise peel exactly one trailing unit letter and parse the rest

This ordering decides which error a caller sees ("GG" is an integer error,
"1P" is a unit error), so keep it.
"""

from __future__ import annotations

import re
from types import MappingProxyType

from gzcap.errors import InvalidIntegerLiteral, UnrecognizedUnitSuffix

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

UNIT_MULTIPLIERS = MappingProxyType(
    {
        "G": 1_000_000_000,
        "M": 1_000_000,
        "K": 1_000,
    }
)

# int() also accepts whitespace and underscores; a size literal must not.
_INT_RE = re.compile(r"[+-]?[0-9]+")


def _parse_int64(s: str) -> int | None:
    if not _INT_RE.fullmatch(s):
        return None
    v = int(s)
    if not (INT64_MIN <= v <= INT64_MAX):
        return None
    return v


def parse_byte_size(spec: str) -> int:
    """Resolve a size string to a byte count.

    Raises UnrecognizedUnitSuffix if the last character is not G/M/K (any
    case), InvalidIntegerLiteral if the numeric part does not parse or the
    result leaves the signed 64-bit range.
    """
    whole = _parse_int64(spec)
    if whole is not None:
        return whole

    unit = spec[-1:].upper()
    mult = UNIT_MULTIPLIERS.get(unit)
    if mult is None:
        raise UnrecognizedUnitSuffix(unit)

    prefix = spec[:-1]
    n = _parse_int64(prefix)
    if n is None:
        raise InvalidIntegerLiteral(prefix)

    out = n * mult
    if not (INT64_MIN <= out <= INT64_MAX):
        raise InvalidIntegerLiteral(spec, "out of 64-bit range")
    return out
