from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from .coerce import coerce_bool, coerce_enum, coerce_float, coerce_index, enum_table
from .config import DEFAULT_OPTIONS, ReaderOptions
from .entities import (
    COLORSET_SIZE,
    Brick,
    BrickExtra,
    BrickFlags,
    ColorFx,
    Rotation,
    SaveMetadata,
    ShapeFx,
)
from .errors import BrickError
from .lines import EXTRA_DATA_PREFIX, RawRecord

# Positions of the base-line fields after the closing quote.
FIELD_X = 0
FIELD_Y = 1
FIELD_Z = 2
FIELD_ANGLE = 3
FIELD_BASEPLATE = 4
FIELD_COLOR = 5
FIELD_PRINT = 6
FIELD_COLOR_FX = 7
FIELD_SHAPE_FX = 8
FIELD_RAYCASTING = 9
FIELD_COLLISION = 10
FIELD_RENDERING = 11
BASE_FIELD_COUNT = 12

ROTATION_TABLE = enum_table(Rotation)
COLOR_FX_TABLE = enum_table(ColorFx)
SHAPE_FX_TABLE = enum_table(ShapeFx)

FLAG_FIELDS = (
    (FIELD_BASEPLATE, BrickFlags.BASEPLATE),
    (FIELD_RAYCASTING, BrickFlags.RAYCASTING),
    (FIELD_COLLISION, BrickFlags.COLLISION),
    (FIELD_RENDERING, BrickFlags.RENDERING),
)


@dataclass(frozen=True)
class BrickDecoded:
    brick: Brick


@dataclass(frozen=True)
class RecordSkipped:
    line_number: int
    reason: str


@dataclass(frozen=True)
class RecordFailed:
    error: BrickError


DecodeOutcome = Union[BrickDecoded, RecordSkipped, RecordFailed]


def _field(fields: Sequence[str], idx: int) -> str | None:
    return fields[idx] if idx < len(fields) else None


def parse_extra(line: str) -> BrickExtra:
    body = line[len(EXTRA_DATA_PREFIX) :] if line.startswith(EXTRA_DATA_PREFIX) else line
    for idx, ch in enumerate(body):
        if ch in " \t":
            return BrickExtra(kind=body[:idx], value=body[idx + 1 :])
    return BrickExtra(kind=body, value="")


def _decode_flags(fields: Sequence[str]) -> BrickFlags:
    flags = BrickFlags.NONE
    for idx, flag in FLAG_FIELDS:
        if coerce_bool(_field(fields, idx), False):
            flags |= flag
    return flags


def decode_brick(
    record: RawRecord,
    metadata: SaveMetadata,
    options: ReaderOptions = DEFAULT_OPTIONS,
) -> DecodeOutcome:
    """
    Turn one raw record into a brick, a skip signal, or a per-record error.

    Field-level problems never reach the caller: each field goes through the
    coercion layer and falls back to its default.  Records that do not even
    name a shape are skipped.  Only unreadable records produce an error.
    """

    if record.decode_error is not None:
        return RecordFailed(BrickError(record.decode_error, line_number=record.line_number))
    if options.reject_nul_bytes and ("\x00" in record.text or any("\x00" in extra for extra in record.extras)):
        return RecordFailed(BrickError("record contains NUL bytes", line_number=record.line_number))
    if record.is_extra:
        return RecordSkipped(record.line_number, "extra data with no brick before it")
    if record.name is None:
        return RecordSkipped(record.line_number, "no quoted shape name")
    if not record.name.strip():
        return RecordSkipped(record.line_number, "empty shape name")

    fields = record.fields
    palette_size = metadata.declared_color_count or COLORSET_SIZE
    brick = Brick(
        ui_name=record.name,
        position=(
            coerce_float(_field(fields, FIELD_X), 0.0),
            coerce_float(_field(fields, FIELD_Y), 0.0),
            coerce_float(_field(fields, FIELD_Z), 0.0),
        ),
        rotation=coerce_enum(_field(fields, FIELD_ANGLE), ROTATION_TABLE, Rotation.NONE),
        color_index=coerce_index(_field(fields, FIELD_COLOR), palette_size, 0),
        print_name=_field(fields, FIELD_PRINT) or "",
        color_fx=coerce_enum(_field(fields, FIELD_COLOR_FX), COLOR_FX_TABLE, ColorFx.NONE),
        shape_fx=coerce_enum(_field(fields, FIELD_SHAPE_FX), SHAPE_FX_TABLE, ShapeFx.NONE),
        flags=_decode_flags(fields),
        trailing=tuple(token for token in fields[BASE_FIELD_COUNT:] if token),
        extras=tuple(parse_extra(line) for line in record.extras),
        line_number=record.line_number,
    )
    return BrickDecoded(brick)
