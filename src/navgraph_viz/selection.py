# src/navgraph_viz/selection.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .capsule import Capsule
from .projection import Circle, ElementType, GraphProjection, Pick
from .viz_style import (
    HIGHLIGHT_ENTRY_COLOR,
    HIGHLIGHT_EXIT_COLOR,
    HIGHLIGHT_WAYPOINT_COLOR,
    LANE_ENTRY_COLOR,
    LANE_EXIT_COLOR,
    RGBA,
    WAYPOINT_COLOR,
)

# (lane entry, lane exit, waypoint)
Palette = Tuple[RGBA, RGBA, RGBA]
DEFAULT_PALETTE: Palette = (LANE_ENTRY_COLOR, LANE_EXIT_COLOR, WAYPOINT_COLOR)
HIGHLIGHT_PALETTE: Palette = (HIGHLIGHT_ENTRY_COLOR, HIGHLIGHT_EXIT_COLOR, HIGHLIGHT_WAYPOINT_COLOR)

# "waypoint" | "bi" | "mono"
PrimitiveRef = Tuple[str, Union[Circle, Capsule]]


def find_primitive(proj: GraphProjection, chosen: Pick) -> Optional[PrimitiveRef]:
    """Look up the drawn primitive for `chosen` across every floor."""
    for bucket in proj.floors.values():
        if chosen.type == ElementType.WAYPOINT:
            for circle, index in zip(bucket.waypoints, bucket.waypoint_indices):
                if index == chosen.index:
                    return "waypoint", circle
        else:
            for capsule, index in zip(bucket.bi_lanes, bucket.bi_indices):
                if index == chosen.index:
                    return "bi", capsule
            for capsule, index in zip(bucket.mono_lanes, bucket.mono_indices):
                if index == chosen.index:
                    return "mono", capsule
    return None


def change_color(proj: GraphProjection, chosen: Pick, palette: Palette) -> bool:
    ref = find_primitive(proj, chosen)
    if ref is None:
        return False

    entry_color, exit_color, waypoint_color = palette
    kind, prim = ref
    if kind == "waypoint":
        prim.color = waypoint_color
    elif kind == "bi":
        prim.set_start_color(entry_color).set_end_color(entry_color)
    else:
        prim.set_start_color(entry_color).set_end_color(exit_color)
    return True


@dataclass
class SelectionState:
    selected: Optional[Pick] = None

    def select(self, proj: GraphProjection, chosen: Pick) -> None:
        if self.selected is not None:
            change_color(proj, self.selected, DEFAULT_PALETTE)
        change_color(proj, chosen, HIGHLIGHT_PALETTE)
        self.selected = chosen

    def deselect(self, proj: GraphProjection) -> None:
        if self.selected is not None:
            change_color(proj, self.selected, DEFAULT_PALETTE)
        self.selected = None
