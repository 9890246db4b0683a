# src/navgraph_viz/view.py
from __future__ import annotations

from typing import List, Optional

import pandas as pd
from matplotlib.artist import Artist
from matplotlib.axes import Axes
from matplotlib.font_manager import FontProperties

from .bounds import Bounds
from .graph import NavGraph
from .picking import pick_element
from .projection import (
    GraphProjection,
    Pick,
    ProjectionConfig,
    build_projection,
    projection_summary,
    relayout_labels,
)
from .render import draw_bucket
from .selection import SelectionState
from .viz_style import DEFAULT_TEXT_SIZE


class GraphView:
    """
    Pickable, per-floor view of a navigation graph.

    Built once from the graph; afterwards only element colors (through
    select/deselect) and label layout (through set_text_size) change.
    """

    def __init__(
        self,
        graph: NavGraph,
        lane_width: float,
        font: Optional[FontProperties] = None,
        *,
        text_size: int = DEFAULT_TEXT_SIZE,
        show_progress: bool = False,
    ):
        cfg = ProjectionConfig(lane_width=lane_width, text_size=text_size, show_progress=show_progress)
        self._proj: GraphProjection = build_projection(graph, cfg, font)
        self._current_map: Optional[str] = self._proj.first_map
        self._selection = SelectionState()

    @property
    def projection(self) -> GraphProjection:
        return self._proj

    def waypoint_radius(self) -> float:
        return self._proj.waypoint_radius()

    def bounds(self) -> Bounds:
        return self._proj.bounds

    def get_map_names(self) -> List[str]:
        return list(self._proj.floors)

    def choose_map(self, name: str) -> bool:
        if name not in self._proj.floors:
            self._current_map = None
            return False
        self._current_map = name
        return True

    def current_map(self) -> Optional[str]:
        return self._current_map

    def pick(self, x: float, y: float) -> Optional[Pick]:
        return pick_element(self._proj, self._current_map, x, y)

    def select(self, chosen: Pick) -> None:
        self._selection.select(self._proj, chosen)

    def deselect(self) -> None:
        self._selection.deselect(self._proj)

    def selected(self) -> Optional[Pick]:
        return self._selection.selected

    def draw(self, ax: Axes, *, band_count: int = 8) -> List[Artist]:
        if self._current_map is None:
            return []
        return draw_bucket(ax, self._proj.floors[self._current_map], band_count=band_count)

    def set_text_size(self, size: int) -> None:
        relayout_labels(self._proj, size)

    def text_size(self) -> int:
        return self._proj.text_size

    def summary(self) -> pd.DataFrame:
        return projection_summary(self._proj)
