# src/navgraph_viz/capsule.py
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
from shapely.geometry import LineString, Point, Polygon

from .viz_style import RGBA


class Capsule:
    """
    Line segment swept by a disc of radius `half_width`.

    Both the drawn lane and its hit-test region. Colors are set per end and
    interpolated along the segment when drawn.
    """

    def __init__(
        self,
        start: Sequence[float],
        end: Sequence[float],
        half_width: float,
        start_color: RGBA,
        end_color: RGBA,
    ):
        self.start = np.asarray(start, dtype=float)
        self.end = np.asarray(end, dtype=float)
        self.half_width = float(half_width)
        self.start_color = tuple(start_color)
        self.end_color = tuple(end_color)

    def set_start_color(self, color: RGBA) -> "Capsule":
        self.start_color = tuple(color)
        return self

    def set_end_color(self, color: RGBA) -> "Capsule":
        self.end_color = tuple(color)
        return self

    def pick(self, x: float, y: float) -> bool:
        p = np.array([x, y], dtype=float)
        d = self.end - self.start
        lengthsq = float(d @ d)
        if lengthsq == 0.0:
            return float(np.linalg.norm(p - self.start)) <= self.half_width
        t = float(np.clip((p - self.start) @ d / lengthsq, 0.0, 1.0))
        closest = self.start + t * d
        return float(np.linalg.norm(p - closest)) <= self.half_width

    def polygon(self, resolution: int = 8) -> Polygon:
        if np.allclose(self.start, self.end):
            return Point(self.start).buffer(self.half_width, quad_segs=resolution)
        return LineString([self.start, self.end]).buffer(self.half_width, quad_segs=resolution)

    def color_bands(self, n: int = 8, resolution: int = 8) -> List[Tuple[np.ndarray, RGBA]]:
        """
        Split the capsule into `n` flat-capped slices plus the two round caps,
        each paired with its interpolated color. Returns [(exterior_xy, rgba)].
        """
        c0 = np.asarray(self.start_color, dtype=float)
        c1 = np.asarray(self.end_color, dtype=float)
        if n <= 1 or np.allclose(c0, c1) or np.allclose(self.start, self.end):
            # single piece, mean color
            return [(np.asarray(self.polygon(resolution).exterior.coords), tuple((c0 + c1) / 2))]

        bands: List[Tuple[np.ndarray, RGBA]] = []
        cap0 = Point(self.start).buffer(self.half_width, quad_segs=resolution)
        cap1 = Point(self.end).buffer(self.half_width, quad_segs=resolution)
        bands.append((np.asarray(cap0.exterior.coords), tuple(c0)))
        bands.append((np.asarray(cap1.exterior.coords), tuple(c1)))

        d = self.end - self.start
        for k in range(n):
            a = self.start + d * (k / n)
            b = self.start + d * ((k + 1) / n)
            piece = LineString([a, b]).buffer(self.half_width, cap_style="flat")
            t = (k + 0.5) / n
            bands.append((np.asarray(piece.exterior.coords), tuple(c0 * (1 - t) + c1 * t)))
        return bands
