"""
Windows-1252 byte table used by the game when it writes save files.

The stock ``cp1252`` codec rejects the five bytes the code page leaves
undefined (0x81, 0x8D, 0x8F, 0x90, 0x9D).  The game writes them through
unchanged, so they map to the code point with the same value here and
decoding never fails.
"""

from __future__ import annotations

from typing import Tuple


def _build_table() -> Tuple[str, ...]:
    chars = []
    for value in range(256):
        try:
            chars.append(bytes([value]).decode("cp1252"))
        except UnicodeDecodeError:
            chars.append(chr(value))
    return tuple(chars)


BYTE_TO_CHAR = _build_table()


def decode_cp1252(data: bytes) -> str:
    return "".join(BYTE_TO_CHAR[b] for b in data)
