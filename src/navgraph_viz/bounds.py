# src/navgraph_viz/bounds.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence, Tuple

import numpy as np


def _inf() -> np.ndarray:
    return np.full(2, np.inf)


@dataclass
class Bounds:
    min: np.ndarray = field(default_factory=_inf)
    max: np.ndarray = field(default_factory=lambda: -_inf())

    def extend(self, point: Sequence[float]) -> "Bounds":
        p = np.asarray(point, dtype=float)
        self.min = np.minimum(self.min, p)
        self.max = np.maximum(self.max, p)
        return self

    def padded(self, amount: float) -> "Bounds":
        return Bounds(self.min - amount, self.max + amount)

    def is_empty(self) -> bool:
        return bool(np.any(self.max < self.min))

    def contains(self, x: float, y: float, margin: float = 0.0) -> bool:
        if x < self.min[0] - margin or y < self.min[1] - margin:
            return False
        if self.max[0] + margin < x or self.max[1] + margin < y:
            return False
        return True

    @property
    def width(self) -> float:
        return float(self.max[0] - self.min[0])

    @property
    def height(self) -> float:
        return float(self.max[1] - self.min[1])

    @property
    def center(self) -> np.ndarray:
        return (self.min + self.max) * 0.5


def compute_fit(
    bounds_list: Iterable[Bounds],
    *,
    aspect: float,
    margin: float = 0.02,
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """
    Fit the union of `bounds_list` into a viewport whose width/height ratio is
    `aspect`. Returns (xlim, ylim) in world units.

    `margin` is a fraction of the larger span added on every side; the shorter
    axis is widened around its centre so the world aspect matches the viewport.
    """
    boxes = [b for b in bounds_list if not b.is_empty()]
    if not boxes:
        raise ValueError("compute_fit needs at least one non-empty Bounds")
    if aspect <= 0:
        raise ValueError(f"aspect must be > 0, got {aspect}")

    lo = np.min([b.min for b in boxes], axis=0)
    hi = np.max([b.max for b in boxes], axis=0)
    span = np.maximum(hi - lo, 1e-9)
    pad = margin * float(span.max())
    w, h = span[0] + 2 * pad, span[1] + 2 * pad

    if w / h < aspect:
        w = h * aspect
    else:
        h = w / aspect

    cx, cy = (lo + hi) * 0.5
    return (cx - w / 2, cx + w / 2), (cy - h / 2, cy + h / 2)
