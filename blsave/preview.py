"""
Pillow previews of a decoded save: the colorset as a swatch grid, and a
top-down plan of brick positions tinted with their palette colors.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence, Tuple

from PIL import Image, ImageDraw

from .entities import Brick, Color

BACKGROUND = (255, 255, 255, 0)
OUTLINE = (64, 64, 64, 255)


def render_colorset(
    colors: Sequence[Color],
    destination: Path | None = None,
    *,
    cell_px: int = 32,
    columns: int = 8,
) -> Image.Image:
    rows = max(1, (len(colors) + columns - 1) // columns)
    image = Image.new("RGBA", (columns * cell_px, rows * cell_px), BACKGROUND)
    draw = ImageDraw.Draw(image)
    for idx, color in enumerate(colors):
        row, col = divmod(idx, columns)
        x0, y0 = col * cell_px, row * cell_px
        draw.rectangle(
            [x0, y0, x0 + cell_px - 1, y0 + cell_px - 1],
            fill=color.to_rgba8(),
            outline=OUTLINE,
        )
    if destination is not None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        image.save(destination)
    return image


def _build_transform(
    bricks: Sequence[Brick],
    size_px: int,
    padding_ratio: float,
) -> Callable[[Tuple[float, float]], Tuple[float, float]]:
    xs = [brick.position[0] for brick in bricks]
    ys = [brick.position[1] for brick in bricks]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    width = max(max_x - min_x, 1e-9)
    height = max(max_y - min_y, 1e-9)
    pad = max(width, height) * padding_ratio + 1.0

    world_min_x = min_x - pad
    world_min_y = min_y - pad
    world_width = width + 2 * pad
    world_height = height + 2 * pad
    scale = min(size_px / world_width, size_px / world_height)
    offset_x = (size_px - world_width * scale) / 2.0
    offset_y = (size_px - world_height * scale) / 2.0

    def transform(point: Tuple[float, float]) -> Tuple[float, float]:
        x, y = point
        px = (x - world_min_x) * scale + offset_x
        py = size_px - ((y - world_min_y) * scale + offset_y)
        return px, py

    return transform


def render_plan(
    bricks: Sequence[Brick],
    colors: Sequence[Color],
    destination: Path | None = None,
    *,
    size_px: int = 512,
    padding_ratio: float = 0.05,
    marker_px: int = 2,
) -> Image.Image:
    image = Image.new("RGBA", (size_px, size_px), BACKGROUND)
    if bricks:
        transform = _build_transform(bricks, size_px, padding_ratio)
        draw = ImageDraw.Draw(image)
        # Lower bricks first so the top layer stays visible.
        for brick in sorted(bricks, key=lambda item: item.position[2]):
            if not brick.rendering:
                continue
            px, py = transform((brick.position[0], brick.position[1]))
            fill = colors[brick.color_index].to_rgba8() if brick.color_index < len(colors) else OUTLINE
            draw.rectangle(
                [px - marker_px, py - marker_px, px + marker_px, py + marker_px],
                fill=fill,
            )
    if destination is not None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        image.save(destination)
    return image
