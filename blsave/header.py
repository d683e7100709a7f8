from __future__ import annotations

import logging

from .coerce import clamp_index, coerce_color, coerce_int, coerce_string
from .config import DEFAULT_OPTIONS, ReaderOptions
from .entities import COLORSET_SIZE, DEFAULT_COLOR, Color, SaveMetadata
from .errors import TruncatedHeaderError
from .lines import LineSource

logger = logging.getLogger(__name__)

FORMAT_BANNER = "This is a Blockland save file.  You probably shouldn't modify it cause you'll screw it up."
OLDEST_FORMAT_VERSION = 1
BRICK_COUNT_PREFIX = "Linecount"


def decode_version(marker: str) -> int:
    """Integer markers name a version; the banner and anything else mean the oldest one."""

    version = coerce_int(marker, OLDEST_FORMAT_VERSION)
    if version < OLDEST_FORMAT_VERSION:
        return OLDEST_FORMAT_VERSION
    if version == OLDEST_FORMAT_VERSION and marker.strip() not in ("", str(OLDEST_FORMAT_VERSION), FORMAT_BANNER):
        logger.debug("Unrecognised version marker %r; assuming version %d", marker, OLDEST_FORMAT_VERSION)
    return version


def parse_brick_count_line(line: str) -> int | None:
    """Return the declared count for a ``Linecount N`` line, ``None`` for any other line."""

    head = line.lstrip()
    if head[: len(BRICK_COUNT_PREFIX)].lower() != BRICK_COUNT_PREFIX.lower():
        return None
    return max(0, coerce_int(head[len(BRICK_COUNT_PREFIX) :], 0))


def _read_description(source: LineSource, options: ReaderOptions) -> list[str]:
    count_line = source.next_line()
    if count_line is None:
        raise TruncatedHeaderError("stream ended before the description line count")
    declared = coerce_int(count_line, 0)
    line_count = clamp_index(declared, options.max_description_lines + 1)
    if line_count != declared:
        logger.debug("Description line count %d clamped to %d", declared, line_count)

    lines: list[str] = []
    for idx in range(line_count):
        line = source.next_line()
        if line is None:
            raise TruncatedHeaderError(
                f"stream ended after {idx} of {line_count} description lines"
            )
        lines.append(coerce_string(line))
    return lines


def _read_palette(source: LineSource, options: ReaderOptions) -> tuple[list[Color], int, int]:
    colors: list[Color] = []
    present = 0
    brick_count: int | None = None
    stopped = False

    for _ in range(options.max_palette_lines):
        line = source.next_line()
        if line is None:
            logger.debug("Stream ended inside the colorset after %d entries", present)
            stopped = True
            break
        brick_count = parse_brick_count_line(line)
        if brick_count is not None:
            stopped = True
            break
        if '"' in line:
            # A brick line: the count line is missing entirely.
            source.push_back(line)
            stopped = True
            break
        present += 1
        if present > COLORSET_SIZE:
            continue
        color = coerce_color(line.split())
        if color is None:
            logger.debug("Malformed colorset entry %d %r replaced with default", present - 1, line)
            color = DEFAULT_COLOR
        colors.append(color)

    if not stopped:
        line = source.next_line()
        if line is not None:
            brick_count = parse_brick_count_line(line)
            if brick_count is None:
                source.push_back(line)

    if brick_count is None:
        logger.debug("No Linecount line found; declared brick count defaults to 0")
        brick_count = 0

    colors.extend([DEFAULT_COLOR] * (COLORSET_SIZE - len(colors)))
    return colors, min(present, COLORSET_SIZE), brick_count


def decode_header(source: LineSource, options: ReaderOptions = DEFAULT_OPTIONS) -> SaveMetadata:
    """
    Consume the header records and return the save metadata.

    Only a stream that ends before the version marker and the description
    block are complete is fatal; every later anomaly is repaired.
    """

    marker = source.next_line()
    if marker is None:
        raise TruncatedHeaderError("stream ended before the version marker")
    version = decode_version(marker)
    description = _read_description(source, options)
    colors, declared_colors, brick_count = _read_palette(source, options)
    return SaveMetadata(
        format_version=version,
        description_lines=tuple(description),
        colors=tuple(colors),
        declared_color_count=declared_colors,
        declared_brick_count=brick_count,
    )
