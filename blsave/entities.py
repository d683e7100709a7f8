from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import NamedTuple, Tuple

COLORSET_SIZE = 64


class Color(NamedTuple):
    r: float
    g: float
    b: float
    a: float

    @property
    def is_opaque(self) -> bool:
        return self.a >= 1.0

    def to_rgba8(self) -> Tuple[int, int, int, int]:
        r, g, b, a = (int(round(max(0.0, min(1.0, c)) * 255)) for c in self)
        return (r, g, b, a)


DEFAULT_COLOR = Color(0.0, 0.0, 0.0, 0.0)


class Rotation(enum.IntEnum):
    NONE = 0
    DEG_90 = 1
    DEG_180 = 2
    DEG_270 = 3


class ColorFx(enum.IntEnum):
    NONE = 0
    PEARL = 1
    CHROME = 2
    GLOW = 3
    BLINK = 4
    SWIRL = 5
    RAINBOW = 6


class ShapeFx(enum.IntEnum):
    NONE = 0
    UNDULO = 1
    WATER = 2


class BrickFlags(enum.Flag):
    NONE = 0
    BASEPLATE = enum.auto()
    RAYCASTING = enum.auto()
    COLLISION = enum.auto()
    RENDERING = enum.auto()


@dataclass(frozen=True)
class SaveMetadata:
    format_version: int
    description_lines: Tuple[str, ...]
    colors: Tuple[Color, ...]
    declared_color_count: int
    declared_brick_count: int

    @property
    def description(self) -> str:
        return "\n".join(self.description_lines)

    def color_for(self, index: int) -> Color:
        from .coerce import clamp_index

        return self.colors[clamp_index(index, len(self.colors))]


@dataclass(frozen=True)
class BrickExtra:
    kind: str
    value: str


@dataclass(frozen=True)
class Brick:
    ui_name: str
    position: Tuple[float, float, float]
    rotation: Rotation = Rotation.NONE
    color_index: int = 0
    print_name: str = ""
    color_fx: ColorFx = ColorFx.NONE
    shape_fx: ShapeFx = ShapeFx.NONE
    flags: BrickFlags = BrickFlags.NONE
    trailing: Tuple[str, ...] = ()
    extras: Tuple[BrickExtra, ...] = ()
    line_number: int = 0

    @property
    def is_baseplate(self) -> bool:
        return bool(self.flags & BrickFlags.BASEPLATE)

    @property
    def raycasting(self) -> bool:
        return bool(self.flags & BrickFlags.RAYCASTING)

    @property
    def collision(self) -> bool:
        return bool(self.flags & BrickFlags.COLLISION)

    @property
    def rendering(self) -> bool:
        return bool(self.flags & BrickFlags.RENDERING)

    @property
    def owner_id(self) -> int | None:
        for extra in self.extras:
            if extra.kind.upper() == "OWNER":
                try:
                    return int(extra.value.split()[0])
                except (IndexError, ValueError):
                    return None
        return None
