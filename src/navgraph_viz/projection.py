# src/navgraph_viz/projection.py
from __future__ import annotations

import enum
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

import numpy as np
import pandas as pd
from matplotlib.font_manager import FontProperties
from tqdm import tqdm

from .bounds import Bounds
from .capsule import Capsule
from .graph import NavGraph
from .labels import (
    Label,
    connector_anchor,
    connector_label_text,
    default_font,
    make_label,
    waypoint_label_text,
)
from .viz_style import (
    ARROW_COLOR,
    CONNECTOR_LABEL_COLOR,
    DEFAULT_TEXT_SIZE,
    LABEL_COLOR,
    LANE_ENTRY_COLOR,
    LANE_EXIT_COLOR,
    RGBA,
    WAYPOINT_COLOR,
)

WAYPOINT_RADIUS_FACTOR = 0.30
ARROW_SIDE = 0.25
ARROW_CENTER_SPACING = 0.0625


class ElementType(enum.Enum):
    WAYPOINT = "waypoint"
    LANE = "lane"


@dataclass(frozen=True)
class Pick:
    type: ElementType
    index: int


@dataclass
class Circle:
    center: np.ndarray
    radius: float
    color: RGBA


@dataclass
class ArrowGlyph:
    vertices: np.ndarray  # (3, 2): two base corners then the tip
    color: RGBA = ARROW_COLOR

    def centroid(self) -> np.ndarray:
        return self.vertices.mean(axis=0)


@dataclass
class FloorBucket:
    """Render/pick primitives of one floor, kept as parallel arrays."""
    bi_lanes: List[Capsule] = field(default_factory=list)
    bi_indices: List[int] = field(default_factory=list)

    mono_lanes: List[Capsule] = field(default_factory=list)
    mono_indices: List[int] = field(default_factory=list)
    mono_arrows: List[ArrowGlyph] = field(default_factory=list)

    waypoints: List[Circle] = field(default_factory=list)
    waypoint_p: List[np.ndarray] = field(default_factory=list)
    waypoint_indices: List[int] = field(default_factory=list)

    waypoint_labels: Dict[int, Label] = field(default_factory=dict)
    connector_labels: Dict[int, Label] = field(default_factory=dict)

    def check(self) -> None:
        assert len(self.bi_lanes) == len(self.bi_indices)
        assert len(self.mono_lanes) == len(self.mono_indices) == len(self.mono_arrows)
        assert len(self.waypoints) == len(self.waypoint_p) == len(self.waypoint_indices)


@dataclass(frozen=True)
class ProjectionConfig:
    lane_width: float = 0.5
    text_size: int = DEFAULT_TEXT_SIZE
    show_progress: bool = False


@dataclass
class GraphProjection:
    floors: Dict[str, FloorBucket]
    bounds: Bounds
    lane_width: float
    font: FontProperties
    text_size: int
    skipped_lanes: List[int] = field(default_factory=list)
    first_map: Optional[str] = None

    def waypoint_radius(self) -> float:
        return WAYPOINT_RADIUS_FACTOR * self.lane_width


def make_lane_arrow(p0: np.ndarray, p1: np.ndarray) -> ArrowGlyph:
    """
    Triangle pointing p0 -> p1, sitting on the segment midpoint. Sizes are in
    world units along the unit direction, independent of the lane length.
    """
    center = (p0 + p1) * 0.5
    diff = p1 - p0
    length = float(np.linalg.norm(diff))
    diff_norm = diff / length if length > 0.0 else np.array([1.0, 0.0])
    perp = np.array([-diff_norm[1], diff_norm[0]])

    base = center + ARROW_CENTER_SPACING * diff_norm
    vertices = np.array([
        base - perp * ARROW_SIDE,
        base + perp * ARROW_SIDE,
        center + diff_norm * (0.5 + ARROW_CENTER_SPACING),
    ])
    return ArrowGlyph(vertices=vertices)


def _lane_capsule(p0: np.ndarray, p1: np.ndarray, lane_width: float, bidirectional: bool) -> Capsule:
    return Capsule(
        p0, p1, lane_width / 2.0,
        start_color=LANE_ENTRY_COLOR,
        end_color=LANE_ENTRY_COLOR if bidirectional else LANE_EXIT_COLOR,
    )


def build_projection(
    graph: NavGraph,
    cfg: ProjectionConfig,
    font: Optional[FontProperties] = None,
) -> GraphProjection:
    """
    Project a directed navigation graph into per-floor render buckets.

    1) every waypoint gets a label in its floor bucket
    2) each lane becomes either a connector label (floors differ), a
       bidirectional capsule (reverse lane exists) or a one-way capsule plus an
       arrow; endpoints get a circle the first time they show up on a floor
    3) the aggregate bounds over all lane endpoints is padded by lane_width/2
    """
    if cfg.lane_width <= 0:
        raise ValueError(f"lane_width must be > 0, got {cfg.lane_width}")
    if cfg.text_size <= 0:
        raise ValueError(f"text_size must be > 0, got {cfg.text_size}")

    font = font or default_font()
    floors: Dict[str, FloorBucket] = defaultdict(FloorBucket)
    bounds = Bounds()
    proj = GraphProjection(
        floors=floors,
        bounds=bounds,
        lane_width=float(cfg.lane_width),
        font=font,
        text_size=int(cfg.text_size),
    )
    r_wp = proj.waypoint_radius()

    # 1) labels first, connector labels refer to them
    for wp in graph.waypoints:
        floors[wp.map_name].waypoint_labels[wp.index] = make_label(
            waypoint_label_text(wp), wp.location, font, cfg.text_size, LABEL_COLOR,
        )

    # unordered pair -> directions already drawn
    emitted: Dict[Tuple[int, int], Set[Tuple[int, int]]] = defaultdict(set)
    seen_on_floor: Dict[str, Set[int]] = defaultdict(set)

    lanes = graph.lanes
    if cfg.show_progress:
        lanes = tqdm(lanes, desc="Projecting lanes")

    # 2) lanes
    for lane in lanes:
        j0, j1 = lane.entry, lane.exit
        w0, w1 = graph.get_waypoint(j0), graph.get_waypoint(j1)

        if w0.map_name != w1.map_name:
            bucket0 = floors[w0.map_name]
            if j0 in bucket0.connector_labels:
                continue
            parent = bucket0.waypoint_labels[j0]
            dest = floors[w1.map_name].waypoint_labels[j1]
            bucket0.connector_labels[j0] = make_label(
                connector_label_text(w1.map_name, dest.text),
                connector_anchor(parent),
                font, parent.size, CONNECTOR_LABEL_COLOR,
            )
            continue

        if j0 == j1:
            proj.skipped_lanes.append(lane.index)
            continue

        pair = (min(j0, j1), max(j0, j1))
        if (j0, j1) in emitted[pair]:
            continue
        emitted[pair].add((j0, j1))

        bucket = floors[w0.map_name]
        if proj.first_map is None:
            proj.first_map = w0.map_name

        bidirectional = graph.lane_from(j1, j0) is not None
        if bidirectional:
            emitted[pair].add((j1, j0))

        p0, p1 = w0.location, w1.location
        bounds.extend(p0)
        bounds.extend(p1)

        capsule = _lane_capsule(p0, p1, cfg.lane_width, bidirectional)
        if bidirectional:
            bucket.bi_lanes.append(capsule)
            bucket.bi_indices.append(lane.index)
        else:
            bucket.mono_lanes.append(capsule)
            bucket.mono_indices.append(lane.index)
            bucket.mono_arrows.append(make_lane_arrow(p0, p1))

        seen = seen_on_floor[w0.map_name]
        for j, p in ((j0, p0), (j1, p1)):
            if j in seen:
                continue
            seen.add(j)
            bucket.waypoints.append(Circle(center=p.copy(), radius=r_wp, color=WAYPOINT_COLOR))
            bucket.waypoint_p.append(p.copy())
            bucket.waypoint_indices.append(j)

    # 3) keep lane ends inside the view
    proj.bounds = bounds.padded(cfg.lane_width / 2.0)
    proj.floors = dict(floors)
    for bucket in proj.floors.values():
        bucket.check()
    return proj


def relayout_labels(proj: GraphProjection, size: int, font: Optional[FontProperties] = None) -> None:
    """Re-measure every label at `size` and move connector labels under their parents."""
    if size <= 0:
        raise ValueError(f"text size must be > 0, got {size}")
    if font is not None:
        proj.font = font
    proj.text_size = int(size)

    for bucket in proj.floors.values():
        for label in bucket.waypoint_labels.values():
            label.resize(size, proj.font)
        for j, label in bucket.connector_labels.items():
            label.resize(size, proj.font)
            label.anchor = connector_anchor(bucket.waypoint_labels[j])


def projection_summary(proj: GraphProjection) -> pd.DataFrame:
    rows: List[dict] = []
    for map_name, bucket in proj.floors.items():
        rows.append({
            "map": map_name,
            "n_waypoints": len(bucket.waypoints),
            "n_bi_lanes": len(bucket.bi_lanes),
            "n_mono_lanes": len(bucket.mono_lanes),
            "n_connectors": len(bucket.connector_labels),
            "n_labels": len(bucket.waypoint_labels),
        })
    df = pd.DataFrame(rows, columns=[
        "map", "n_waypoints", "n_bi_lanes", "n_mono_lanes", "n_connectors", "n_labels",
    ])
    return df.sort_values("map").reset_index(drop=True)
