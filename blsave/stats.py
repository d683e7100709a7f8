from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Sequence, Tuple

import numpy as np

from .entities import COLORSET_SIZE, Brick, BrickFlags

Vec3 = Tuple[float, float, float]

FLAG_NAMES = (
    ("baseplate", BrickFlags.BASEPLATE),
    ("raycasting", BrickFlags.RAYCASTING),
    ("collision", BrickFlags.COLLISION),
    ("rendering", BrickFlags.RENDERING),
)


@dataclass(frozen=True)
class BrickStats:
    count: int
    bounds: Tuple[Vec3, Vec3] | None
    centroid: Vec3 | None
    color_usage: Tuple[int, ...]
    top_names: Tuple[Tuple[str, int], ...]
    flag_counts: Dict[str, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "bounds": [list(corner) for corner in self.bounds] if self.bounds else None,
            "centroid": list(self.centroid) if self.centroid else None,
            "color_usage": list(self.color_usage),
            "top_names": [[name, count] for name, count in self.top_names],
            "flag_counts": dict(self.flag_counts),
        }


def positions_array(bricks: Sequence[Brick]) -> np.ndarray:
    if not bricks:
        return np.zeros((0, 3), dtype=np.float64)
    return np.array([brick.position for brick in bricks], dtype=np.float64)


def _vec(values: np.ndarray) -> Vec3:
    x, y, z = (float(v) for v in values)
    return (x, y, z)


def summarize_bricks(bricks: Iterable[Brick], *, top: int = 10) -> BrickStats:
    items = list(bricks)
    positions = positions_array(items)
    color_ids = np.fromiter((brick.color_index for brick in items), dtype=np.int64, count=len(items))
    usage = np.bincount(color_ids, minlength=COLORSET_SIZE)[:COLORSET_SIZE]

    bounds = None
    centroid = None
    if len(items):
        bounds = (_vec(positions.min(axis=0)), _vec(positions.max(axis=0)))
        centroid = _vec(positions.mean(axis=0))

    flag_counts = {
        name: sum(1 for brick in items if brick.flags & flag)
        for name, flag in FLAG_NAMES
    }
    names = Counter(brick.ui_name for brick in items).most_common(top)
    return BrickStats(
        count=len(items),
        bounds=bounds,
        centroid=centroid,
        color_usage=tuple(int(v) for v in usage),
        top_names=tuple(names),
        flag_counts=flag_counts,
    )
