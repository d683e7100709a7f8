from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Tuple

from .config import DEFAULT_OPTIONS, ReaderOptions
from .cp1252 import decode_cp1252
from .errors import StreamReadError

logger = logging.getLogger(__name__)

EXTRA_DATA_PREFIX = "+-"
_CP1252_NAMES = {"cp1252", "windows-1252", "windows1252"}


@dataclass(frozen=True)
class RawRecord:
    """One undecoded brick record: a base line plus its ``+-`` extra lines."""

    line_number: int
    text: str
    name: str | None
    fields: Tuple[str, ...]
    extras: Tuple[str, ...] = ()
    decode_error: str | None = None

    @property
    def is_extra(self) -> bool:
        return self.text.startswith(EXTRA_DATA_PREFIX)


@dataclass(frozen=True)
class _Line:
    number: int
    text: str
    error: str | None = None


def split_fields(text: str) -> Tuple[str | None, Tuple[str, ...]]:
    """
    Split a base line into ``(name, fields)``.

    The name is everything before the first double quote and may contain
    spaces.  Fields after it are separated by single spaces, so two adjacent
    spaces denote an empty field (the game writes an empty print name that
    way).  Lines without a quote return ``None`` and whitespace-split fields.
    """

    quote = text.find('"')
    if quote == -1:
        return None, tuple(text.split())
    rest = text[quote + 1 :]
    if rest.startswith(" "):
        rest = rest[1:]
    rest = rest.replace("\t", " ")
    if not rest:
        return text[:quote], ()
    return text[:quote], tuple(rest.split(" "))


def _strip_terminator(raw: Any) -> Any:
    newline, carriage = ("\n", "\r") if isinstance(raw, str) else (b"\n", b"\r")
    if raw.endswith(newline):
        raw = raw[:-1]
        if raw.endswith(carriage):
            raw = raw[:-1]
    return raw


class LineSource:
    """
    Forward-only line reader over anything with ``readline()``.

    ``readline`` may return bytes (decoded with the configured codec) or str.
    At most one line is held back, either by ``push_back`` or while looking
    for the end of a record's extra-data lines.
    """

    def __init__(self, stream: Any, options: ReaderOptions = DEFAULT_OPTIONS) -> None:
        self._stream = stream
        self.options = options
        self._pending: _Line | None = None
        self._line_number = 0

    @property
    def line_number(self) -> int:
        return self._line_number

    def _read_raw(self) -> Any:
        try:
            return self._stream.readline()
        except OSError as exc:
            raise StreamReadError(f"read failed after line {self._line_number}: {exc}") from exc
        except UnicodeDecodeError as exc:
            # Text streams decode inside readline(), before a line can be isolated.
            raise StreamReadError(f"text stream failed to decode after line {self._line_number}: {exc}") from exc

    def _decode(self, raw: bytes, *, strict: bool) -> Tuple[str, str | None]:
        encoding = self.options.encoding
        if encoding.lower() in _CP1252_NAMES:
            return decode_cp1252(raw), None
        try:
            return raw.decode(encoding), None
        except UnicodeDecodeError as exc:
            if strict:
                return raw.decode(encoding, errors="replace"), f"cannot decode as {encoding}: {exc.reason}"
            return raw.decode(encoding, errors="replace"), None
        except LookupError:
            logger.warning("Unknown encoding %r; falling back to cp1252", encoding)
            return decode_cp1252(raw), None

    def _next(self, *, strict: bool) -> _Line | None:
        if self._pending is not None:
            line, self._pending = self._pending, None
            return line
        raw = self._read_raw()
        if not raw:
            return None
        self._line_number += 1
        raw = _strip_terminator(raw)
        if isinstance(raw, str):
            return _Line(self._line_number, raw)
        text, error = self._decode(raw, strict=strict)
        return _Line(self._line_number, text, error)

    def next_line(self) -> str | None:
        """Next raw line without its terminator, or ``None`` at end of stream."""

        line = self._next(strict=False)
        return None if line is None else line.text

    def push_back(self, text: str) -> None:
        if self._pending is not None:
            raise RuntimeError("only one line of lookahead is supported")
        self._pending = _Line(self._line_number, text)

    def _is_ignorable(self, text: str) -> bool:
        stripped = text.strip()
        if not stripped:
            return True
        prefix = self.options.comment_prefix
        return bool(prefix) and stripped.startswith(prefix)

    def next_record(self) -> RawRecord | None:
        while True:
            line = self._next(strict=True)
            if line is None:
                return None
            if line.error is not None:
                return RawRecord(line.number, line.text, None, (), decode_error=line.error)
            if not self._is_ignorable(line.text):
                break

        extras: list[str] = []
        if not line.text.startswith(EXTRA_DATA_PREFIX):
            while True:
                follow = self._next(strict=True)
                if follow is None:
                    break
                if follow.error is None and self._is_ignorable(follow.text):
                    continue
                if follow.error is None and follow.text.startswith(EXTRA_DATA_PREFIX):
                    extras.append(follow.text)
                    continue
                self._pending = follow
                break

        name, fields = split_fields(line.text)
        return RawRecord(line.number, line.text, name, fields, tuple(extras))
