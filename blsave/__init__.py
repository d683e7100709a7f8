"""
Tolerant reader for Blockland ``.bls`` save files.

Malformed input is repaired or skipped the way the game itself handles it,
so one bad record never stops a read.
"""

from .coerce import (
    clamp_index,
    coerce_bool,
    coerce_color,
    coerce_enum,
    coerce_float,
    coerce_index,
    coerce_int,
    coerce_string,
    enum_table,
)
from .config import DEFAULT_OPTIONS, ReaderOptions
from .entities import (
    COLORSET_SIZE,
    DEFAULT_COLOR,
    Brick,
    BrickExtra,
    BrickFlags,
    Color,
    ColorFx,
    Rotation,
    SaveMetadata,
    ShapeFx,
)
from .errors import BlsError, BrickError, HeaderError, StreamReadError, TruncatedHeaderError
from .escape import collapse_escapes
from .header import BRICK_COUNT_PREFIX, FORMAT_BANNER, OLDEST_FORMAT_VERSION, decode_header
from .bricks import BrickDecoded, RecordFailed, RecordSkipped, decode_brick
from .lines import EXTRA_DATA_PREFIX, LineSource, RawRecord, split_fields
from .logging import SkipLogger
from .reader import BrickResult, Reader, ReaderState, open_save

__all__ = [
    "clamp_index",
    "coerce_bool",
    "coerce_color",
    "coerce_enum",
    "coerce_float",
    "coerce_index",
    "coerce_int",
    "coerce_string",
    "enum_table",
    "DEFAULT_OPTIONS",
    "ReaderOptions",
    "COLORSET_SIZE",
    "DEFAULT_COLOR",
    "Brick",
    "BrickExtra",
    "BrickFlags",
    "Color",
    "ColorFx",
    "Rotation",
    "SaveMetadata",
    "ShapeFx",
    "BlsError",
    "BrickError",
    "HeaderError",
    "StreamReadError",
    "TruncatedHeaderError",
    "collapse_escapes",
    "BRICK_COUNT_PREFIX",
    "FORMAT_BANNER",
    "OLDEST_FORMAT_VERSION",
    "decode_header",
    "BrickDecoded",
    "RecordFailed",
    "RecordSkipped",
    "decode_brick",
    "EXTRA_DATA_PREFIX",
    "LineSource",
    "RawRecord",
    "split_fields",
    "SkipLogger",
    "BrickResult",
    "Reader",
    "ReaderState",
    "open_save",
]
