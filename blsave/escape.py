"""
TorqueScript-style escape collapsing for save-file text.

Malformed sequences are copied through literally; nothing here raises.
"""

from __future__ import annotations

from typing import Iterator

from .cp1252 import BYTE_TO_CHAR

# \c<x> color/style control codes.  \c0 is special-cased below.
COLOR_CODES = {
    "r": chr(0x0F),
    "p": chr(0x10),
    "o": chr(0x11),
    "1": chr(0x02),
    "2": chr(0x03),
    "3": chr(0x04),
    "4": chr(0x05),
    "5": chr(0x06),
    "6": chr(0x07),
    "7": chr(0x0B),
    "8": chr(0x0C),
    "9": chr(0x0E),
}

SIMPLE_ESCAPES = {"r": "\r", "n": "\n", "t": "\t"}
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def collapse_escapes(text: str) -> str:
    out: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch == "\\":
            _collapse_one(out, chars)
        else:
            out.append(ch)
    return "".join(out)


def _collapse_one(out: list[str], chars: Iterator[str]) -> None:
    kind = next(chars, None)
    if kind is None:
        out.append("\\")
        return
    if kind == "x":
        hex1 = next(chars, None)
        if hex1 is None:
            out.append("\\x")
            return
        hex2 = next(chars, None)
        if hex2 is None:
            out.append("\\x" + hex1)
            return
        if hex1 in HEX_DIGITS and hex2 in HEX_DIGITS:
            out.append(BYTE_TO_CHAR[int(hex1 + hex2, 16)])
        else:
            out.append("\\x" + hex1 + hex2)
        return
    if kind == "c":
        code = next(chars, None)
        if code is None:
            out.append("\\c")
        elif code == "0":
            # A \c0 at the very start is preceded by a \c1 marker.
            if not out:
                out.append(chr(0x02))
            out.append(chr(0x01))
        elif code in COLOR_CODES:
            out.append(COLOR_CODES[code])
        else:
            out.append("\\c" + code)
        return
    out.append(SIMPLE_ESCAPES.get(kind, kind))
