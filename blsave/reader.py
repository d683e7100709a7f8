from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Tuple

from .bricks import RecordFailed, RecordSkipped, decode_brick
from .config import DEFAULT_OPTIONS, ReaderOptions
from .entities import Brick, Color, SaveMetadata
from .errors import BrickError, StreamReadError
from .header import decode_header
from .lines import LineSource
from .logging import SkipLogger

logger = logging.getLogger(__name__)


class ReaderState(enum.Enum):
    INITIALIZING = "initializing"
    STREAMING = "streaming"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class BrickResult:
    """One item of the brick sequence: either a brick or a per-record error."""

    brick: Brick | None = None
    error: BrickError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Brick:
        if self.error is not None:
            raise self.error
        if self.brick is None:
            raise BrickError("result holds neither a brick nor an error")
        return self.brick


class Reader:
    """
    Single-pass reader for a Blockland save.

    The header is decoded while the reader is constructed; a stream that ends
    before the description raises ``TruncatedHeaderError`` from here.  Iterating
    the reader then yields one ``BrickResult`` per record in stream order.
    Records too sparse to name a shape are skipped and only show up in
    ``skipped_count``.  A second pass needs a new reader over a fresh stream.
    """

    def __init__(
        self,
        stream: Any,
        options: ReaderOptions | None = None,
        *,
        skip_logger: SkipLogger | None = None,
    ) -> None:
        self.options = options or DEFAULT_OPTIONS
        self._state = ReaderState.INITIALIZING
        self._stream = stream
        self._source = LineSource(stream, self.options)
        self._skip_logger = skip_logger
        self.skipped_count = 0
        self.error_count = 0
        self.yielded_count = 0
        self.metadata: SaveMetadata = decode_header(self._source, self.options)
        self._state = ReaderState.STREAMING
        logger.debug(
            "Header decoded: version=%d colors=%d declared_bricks=%d",
            self.metadata.format_version,
            self.metadata.declared_color_count,
            self.metadata.declared_brick_count,
        )

    @classmethod
    def from_path(
        cls,
        path: Path,
        options: ReaderOptions | None = None,
        *,
        skip_logger: SkipLogger | None = None,
    ) -> "Reader":
        handle = Path(path).open("rb")
        try:
            return cls(handle, options, skip_logger=skip_logger)
        except Exception:
            handle.close()
            raise

    @property
    def state(self) -> ReaderState:
        return self._state

    def description(self) -> str:
        return self.metadata.description

    def description_lines(self) -> Tuple[str, ...]:
        return self.metadata.description_lines

    def brick_count(self) -> int:
        """The declared brick count. Not guaranteed to match the body."""

        return self.metadata.declared_brick_count

    def colors(self) -> Tuple[Color, ...]:
        return self.metadata.colors

    def format_version(self) -> int:
        return self.metadata.format_version

    def __iter__(self) -> "Reader":
        return self

    def __next__(self) -> BrickResult:
        if self._state is not ReaderState.STREAMING:
            raise StopIteration
        while True:
            try:
                record = self._source.next_record()
            except StreamReadError:
                self._state = ReaderState.EXHAUSTED
                raise
            if record is None:
                self._state = ReaderState.EXHAUSTED
                raise StopIteration

            outcome = decode_brick(record, self.metadata, self.options)
            if isinstance(outcome, RecordSkipped):
                self.skipped_count += 1
                logger.info("Skipping line %d: %s", outcome.line_number, outcome.reason)
                if self._skip_logger is not None:
                    self._skip_logger.record(
                        line_number=outcome.line_number,
                        kind="skipped",
                        reason=outcome.reason,
                        text=record.text,
                    )
                continue
            if isinstance(outcome, RecordFailed):
                self.error_count += 1
                if self._skip_logger is not None:
                    self._skip_logger.record(
                        line_number=outcome.error.line_number,
                        kind="failed",
                        reason=str(outcome.error),
                        text=record.text,
                    )
                return BrickResult(error=outcome.error)
            self.yielded_count += 1
            return BrickResult(brick=outcome.brick)

    def bricks(self) -> Iterator[Brick]:
        """Yield only the decoded bricks; per-record errors are logged and counted."""

        for result in self:
            if result.brick is None:
                logger.warning("Unreadable brick record: %s", result.error)
                continue
            yield result.brick

    def close(self) -> None:
        self._state = ReaderState.EXHAUSTED
        close = getattr(self._stream, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "Reader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_save(
    stream: Any,
    options: ReaderOptions | None = None,
    *,
    skip_logger: SkipLogger | None = None,
) -> Reader:
    """Decode the header of ``stream`` and return a reader positioned at the first brick."""

    return Reader(stream, options, skip_logger=skip_logger)
