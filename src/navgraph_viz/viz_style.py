# src/navgraph_viz/viz_style.py
from __future__ import annotations
from typing import Tuple

RGBA = Tuple[float, float, float, float]


def _rgb(r: int, g: int, b: int, a: int = 255) -> RGBA:
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


# -----------------------------
# Default element colors
# -----------------------------
LANE_ENTRY_COLOR: RGBA = _rgb(255, 255, 255)
LANE_EXIT_COLOR: RGBA = _rgb(255 // 3, 255 // 3, 255 // 3)
WAYPOINT_COLOR: RGBA = _rgb(0, 0, 255)
ARROW_COLOR: RGBA = _rgb(255, 0, 0)

# -----------------------------
# Highlight colors (selection)
# -----------------------------
HIGHLIGHT_ENTRY_COLOR: RGBA = _rgb(0, 255, 255)     # cyan
HIGHLIGHT_EXIT_COLOR: RGBA = _rgb(255, 255, 0)      # yellow
HIGHLIGHT_WAYPOINT_COLOR: RGBA = _rgb(255, 0, 255)  # magenta

# -----------------------------
# Text
# -----------------------------
LABEL_COLOR: RGBA = _rgb(192, 192, 192)
CONNECTOR_LABEL_COLOR: RGBA = _rgb(144, 238, 144)
DEFAULT_TEXT_SIZE: int = 24
TEXT_SCALE: float = 1.0 / 40.0  # world units per font unit

BACKGROUND_COLOR: RGBA = _rgb(0, 0, 0)
