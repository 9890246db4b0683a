# src/navgraph_viz/labels.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from matplotlib.font_manager import FontProperties
from matplotlib.path import Path
from matplotlib.textpath import TextPath
from matplotlib.transforms import Affine2D

from .graph import Waypoint
from .viz_style import RGBA, TEXT_SCALE


def default_font() -> FontProperties:
    # DejaVu Sans ships with matplotlib
    return FontProperties(family="DejaVu Sans")


@dataclass
class Label:
    """A text string laid out in world units, centred on `anchor`."""
    text: str
    anchor: np.ndarray
    size: int
    color: RGBA
    font: FontProperties
    width: float = 0.0
    height: float = 0.0

    def _text_path(self) -> TextPath:
        return TextPath((0.0, 0.0), self.text, size=self.size, prop=self.font)

    def measure(self) -> "Label":
        ext = self._text_path().get_extents()
        self.width = float(ext.width) * TEXT_SCALE
        self.height = float(ext.height) * TEXT_SCALE
        return self

    def resize(self, size: int, font: Optional[FontProperties] = None) -> "Label":
        self.size = int(size)
        if font is not None:
            self.font = font
        return self.measure()

    def path(self) -> Path:
        tp = self._text_path()
        ext = tp.get_extents()
        xf = (
            Affine2D()
            .translate(-(ext.x0 + ext.width / 2), -(ext.y0 + ext.height / 2))
            .scale(TEXT_SCALE)
            .translate(float(self.anchor[0]), float(self.anchor[1]))
        )
        return xf.transform_path(tp)


def make_label(
    text: str,
    anchor: Sequence[float],
    font: FontProperties,
    size: int,
    color: RGBA,
) -> Label:
    return Label(
        text=text,
        anchor=np.array(anchor, dtype=float),
        size=int(size),
        color=tuple(color),
        font=font,
    ).measure()


def waypoint_label_text(waypoint: Waypoint) -> str:
    if waypoint.name is not None:
        return f"{waypoint.name} ({waypoint.index})"
    return str(waypoint.index)


def connector_label_text(dest_map: str, dest_label: str) -> str:
    return f"[{dest_map}::{dest_label}]"


def connector_anchor(parent: Label) -> np.ndarray:
    """World position just below `parent` (y grows upwards)."""
    return parent.anchor - np.array([0.0, parent.height])
