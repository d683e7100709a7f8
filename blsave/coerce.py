"""
Tolerant field parsers.

Every function here is total: bad, missing or out-of-range input produces the
documented default instead of an exception.  The header and brick decoders
route all of their repair decisions through this module.
"""

from __future__ import annotations

import enum
import math
import re
from typing import Iterable, Mapping, Sequence, Type, TypeVar

from .entities import Color
from .escape import collapse_escapes

T = TypeVar("T")
E = TypeVar("E", bound=enum.Enum)

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _parse_float(token: str | None) -> float | None:
    if token is None:
        return None
    token = token.strip()
    if not _FLOAT_RE.fullmatch(token):
        return None
    value = float(token)
    if not math.isfinite(value):
        return None
    return value


def _parse_int(token: str | None) -> int | None:
    if token is None:
        return None
    token = token.strip()
    if _INT_RE.fullmatch(token):
        try:
            return int(token)
        except ValueError:
            # Past the interpreter's int digit limit; the float path still bounds it.
            pass
    # "2.0" style tokens show up in hand-edited saves; truncate like atoi would.
    value = _parse_float(token)
    if value is None:
        return None
    return int(value)


def coerce_int(token: str | None, default: int) -> int:
    value = _parse_int(token)
    return default if value is None else value


def coerce_float(token: str | None, default: float) -> float:
    value = _parse_float(token)
    return default if value is None else value


def coerce_bool(token: str | None, default: bool) -> bool:
    value = _parse_float(token)
    if value is None:
        return default
    return value != 0


def coerce_enum(
    token: str | None,
    table: Mapping[str, T],
    default: T,
    *,
    case_insensitive: bool = True,
) -> T:
    if token is None:
        return default
    key = token.strip()
    if key in table:
        return table[key]
    # Numeric spellings ("01", "+1", "2.0") name the same code as their integer.
    code = _parse_int(key)
    if code is not None:
        return table.get(str(code), default)
    if case_insensitive:
        folded = key.casefold()
        for name, value in table.items():
            if name.casefold() == folded:
                return value
    return default


def enum_table(enum_cls: Type[E]) -> dict[str, E]:
    """Map both the numeric code and the member name of ``enum_cls`` to members."""

    table: dict[str, E] = {}
    for member in enum_cls:
        table[str(member.value)] = member
        table[member.name.lower()] = member
    return table


def coerce_string(tokens: str | Iterable[str], sep: str = " ") -> str:
    if isinstance(tokens, str):
        text = tokens
    else:
        text = sep.join(tokens)
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        text = text[1:-1]
    return collapse_escapes(text)


def clamp_index(value: int, length: int) -> int:
    if length < 1:
        return 0
    return max(0, min(value, length - 1))


def coerce_index(token: str | None, length: int, default: int = 0) -> int:
    value = coerce_int(token, -1)
    if 0 <= value < length:
        return value
    return default


def coerce_color(tokens: Sequence[str]) -> Color | None:
    """
    Parse one ``r g b a`` palette entry.

    Returns ``None`` for a malformed entry (wrong field count or a channel that
    is not a finite number) so the caller can substitute the default color.
    Entries with any channel above 1 are treated as 0-255 integer colors.
    """

    if len(tokens) != 4:
        return None
    channels = [_parse_float(token) for token in tokens]
    if any(channel is None for channel in channels):
        return None
    values = [float(channel) for channel in channels if channel is not None]
    if any(value > 1.0 for value in values):
        values = [value / 255.0 for value in values]
    r, g, b, a = (max(0.0, min(1.0, value)) for value in values)
    return Color(r, g, b, a)
