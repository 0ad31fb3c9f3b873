"""Pixel <-> feet mapping for the sketch canvas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from deckcalc.core.geometry.kernel import Point


@dataclass(frozen=True)
class Viewport:
    """Uniform-scale affine map between canvas pixels and deck feet.

    ``pixel = pad + (feet - origin) * scale``. The default is the identity
    map, so callers that already work in feet can use it directly.
    """

    origin_x: float = 0.0
    origin_y: float = 0.0
    scale: float = 1.0  # pixels per foot
    pad: float = 0.0

    def to_feet(self, px: Sequence[float]) -> Point:
        return Point(
            (px[0] - self.pad) / self.scale + self.origin_x,
            (px[1] - self.pad) / self.scale + self.origin_y,
        )

    def to_pixels(self, p: Sequence[float]) -> Point:
        return Point(
            self.pad + (p[0] - self.origin_x) * self.scale,
            self.pad + (p[1] - self.origin_y) * self.scale,
        )

    def to_dict(self) -> dict:
        return {
            "origin_x": self.origin_x,
            "origin_y": self.origin_y,
            "scale": self.scale,
            "pad": self.pad,
        }


def fit_viewport(
    points: Sequence[Sequence[float]],
    width: float,
    height: float,
    pad: float = 24.0,
    min_extent: tuple[float, float] = (20.0, 13.0),
) -> Viewport:
    """Fit the outline into a padded canvas.

    The visible area always contains the origin and at least
    ``min_extent`` feet, so an empty or tiny sketch still shows a
    usable grid. Extents below one foot are treated as one foot.
    """
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    min_x = min(xs + [0.0])
    min_y = min(ys + [0.0])
    max_x = max(xs + [min_extent[0]])
    max_y = max(ys + [min_extent[1]])
    w = max_x - min_x
    h = max_y - min_y
    scale = min(
        (width - pad * 2) / max(w, 1.0),
        (height - pad * 2) / max(h, 1.0),
    )
    return Viewport(origin_x=min_x, origin_y=min_y, scale=scale, pad=pad)
