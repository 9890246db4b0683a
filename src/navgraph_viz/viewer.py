# src/navgraph_viz/viewer.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import matplotlib.pyplot as plt

from .bounds import compute_fit
from .graph import NavGraph
from .projection import ElementType, Pick
from .view import GraphView
from .viz_style import BACKGROUND_COLOR, DEFAULT_TEXT_SIZE

MIN_TEXT_SIZE = 4
TEXT_SIZE_STEP = 4


@dataclass(frozen=True)
class ViewerConfig:
    lane_width: float = 0.5
    text_size: int = DEFAULT_TEXT_SIZE
    fit_margin: float = 0.02
    figsize: Tuple[float, float] = (10, 8)
    band_count: int = 8
    initial_map: Optional[str] = None


def describe_pick(graph: NavGraph, pick: Optional[Pick]) -> str:
    if pick is None:
        return "nothing selected"
    if pick.type == ElementType.WAYPOINT:
        wp = graph.get_waypoint(pick.index)
        name = f" '{wp.name}'" if wp.name is not None else ""
        return f"waypoint {wp.index}{name} @ ({wp.location[0]:.2f}, {wp.location[1]:.2f})"
    lane = graph.get_lane(pick.index)
    kind = "bidirectional" if graph.lane_from(lane.exit, lane.entry) is not None else "one-way"
    return f"lane {lane.index}: {lane.entry} -> {lane.exit} ({kind})"


class GraphViewer:
    """
    Interactive matplotlib window around a GraphView.

    Left click picks and selects, empty space deselects. Keys:
      ] / [   next / previous floor
      + / -   larger / smaller labels
      escape  deselect
    """

    def __init__(self, graph: NavGraph, cfg: Optional[ViewerConfig] = None):
        self.cfg = cfg or ViewerConfig()
        self.graph = graph
        self.view = GraphView(graph, self.cfg.lane_width, text_size=self.cfg.text_size)
        if self.cfg.initial_map is not None and not self.view.choose_map(self.cfg.initial_map):
            raise KeyError(
                f"unknown map {self.cfg.initial_map!r}; available: {sorted(self.view.get_map_names())}"
            )

        self.fig, self.ax = plt.subplots(figsize=self.cfg.figsize)
        self.fig.canvas.mpl_connect("button_press_event", self._on_click)
        self.fig.canvas.mpl_connect("key_press_event", self._on_key_press)
        self.fig.canvas.mpl_connect("resize_event", self._on_resize)
        self._fit()
        self.redraw()

    # ---------- view ----------
    def _fit(self) -> None:
        if self.view.bounds().is_empty():
            return
        w, h = self.fig.get_size_inches()
        xlim, ylim = compute_fit([self.view.bounds()], aspect=w / h, margin=self.cfg.fit_margin)
        self.ax.set_xlim(*xlim)
        self.ax.set_ylim(*ylim)

    def redraw(self) -> None:
        xlim, ylim = self.ax.get_xlim(), self.ax.get_ylim()
        self.ax.clear()
        self.ax.set_facecolor(BACKGROUND_COLOR)
        self.ax.set_aspect("equal", adjustable="box")
        self.view.draw(self.ax, band_count=self.cfg.band_count)
        self.ax.set_xlim(*xlim)
        self.ax.set_ylim(*ylim)
        self.ax.set_title(
            f"map: {self.view.current_map() or '-'} | {describe_pick(self.graph, self.view.selected())}"
        )
        self.fig.canvas.draw_idle()

    def cycle_map(self, step: int) -> None:
        names = sorted(self.view.get_map_names())
        if not names:
            return
        current = self.view.current_map()
        i = names.index(current) if current in names else -1
        self.view.choose_map(names[(i + step) % len(names)])

    # ---------- events ----------
    def _on_click(self, event) -> None:
        if event.inaxes is not self.ax or event.button != 1:
            return
        if event.xdata is None or event.ydata is None:
            return
        chosen = self.view.pick(event.xdata, event.ydata)
        if chosen is None:
            self.view.deselect()
        else:
            self.view.select(chosen)
        self.redraw()

    def _on_key_press(self, event) -> None:
        if event.key == "]":
            self.cycle_map(+1)
        elif event.key == "[":
            self.cycle_map(-1)
        elif event.key in ("+", "="):
            self.view.set_text_size(self.view.text_size() + TEXT_SIZE_STEP)
        elif event.key == "-":
            self.view.set_text_size(max(MIN_TEXT_SIZE, self.view.text_size() - TEXT_SIZE_STEP))
        elif event.key == "escape":
            self.view.deselect()
        else:
            return
        self.redraw()

    def _on_resize(self, event) -> None:
        self._fit()
        self.redraw()

    def show(self) -> None:
        plt.show()


def render_to_file(
    graph: NavGraph,
    out_path: str,
    cfg: Optional[ViewerConfig] = None,
    *,
    map_name: Optional[str] = None,
    dpi: int = 150,
) -> str:
    """Render one floor (default: the initial one) to an image file."""
    cfg = cfg or ViewerConfig()
    view = GraphView(graph, cfg.lane_width, text_size=cfg.text_size)
    if map_name is not None and not view.choose_map(map_name):
        raise KeyError(f"unknown map {map_name!r}; available: {sorted(view.get_map_names())}")

    fig, ax = plt.subplots(figsize=cfg.figsize)
    try:
        ax.set_facecolor(BACKGROUND_COLOR)
        ax.set_aspect("equal", adjustable="box")
        view.draw(ax, band_count=cfg.band_count)
        if not view.bounds().is_empty():
            w, h = fig.get_size_inches()
            xlim, ylim = compute_fit([view.bounds()], aspect=w / h, margin=cfg.fit_margin)
            ax.set_xlim(*xlim)
            ax.set_ylim(*ylim)
        ax.set_title(f"map: {view.current_map() or '-'}")
        fig.savefig(out_path, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    return out_path
