# src/navgraph_viz/graph.py
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
import networkx as nx


@dataclass(frozen=True, eq=False)
class Waypoint:
    index: int
    location: np.ndarray
    map_name: str
    name: Optional[str] = None


@dataclass(frozen=True)
class Lane:
    index: int
    entry: int
    exit: int


class NavGraph:
    """
    Directed navigation graph spread over one or more floors.

    Waypoints and lanes are indexed by insertion order. The topology is kept in
    a networkx MultiDiGraph (nodes = waypoint indices, one edge per lane with
    a ``lane`` attribute) so reverse-lane lookups stay cheap.
    """

    def __init__(self):
        self._waypoints: List[Waypoint] = []
        self._lanes: List[Lane] = []
        self._G = nx.MultiDiGraph()

    # ---------- construction ----------
    def add_waypoint(
        self,
        map_name: str,
        location: Iterable[float],
        name: Optional[str] = None,
    ) -> Waypoint:
        loc = np.array(location, dtype=float)
        if loc.shape != (2,):
            raise ValueError(f"waypoint location must be 2D, got shape {loc.shape}")
        loc.setflags(write=False)
        wp = Waypoint(index=len(self._waypoints), location=loc, map_name=str(map_name), name=name)
        self._waypoints.append(wp)
        self._G.add_node(wp.index, map=wp.map_name, pos=(float(loc[0]), float(loc[1])))
        return wp

    def add_lane(self, entry: int, exit: int) -> Lane:
        for w in (entry, exit):
            if not 0 <= w < len(self._waypoints):
                raise IndexError(f"lane references unknown waypoint {w}")
        lane = Lane(index=len(self._lanes), entry=int(entry), exit=int(exit))
        self._lanes.append(lane)
        self._G.add_edge(lane.entry, lane.exit, lane=lane.index)
        return lane

    def add_bidirectional_lane(self, w0: int, w1: int) -> Tuple[Lane, Lane]:
        return self.add_lane(w0, w1), self.add_lane(w1, w0)

    # ---------- queries ----------
    @property
    def waypoints(self) -> List[Waypoint]:
        return list(self._waypoints)

    @property
    def lanes(self) -> List[Lane]:
        return list(self._lanes)

    def num_waypoints(self) -> int:
        return len(self._waypoints)

    def num_lanes(self) -> int:
        return len(self._lanes)

    def get_waypoint(self, index: int) -> Waypoint:
        return self._waypoints[index]

    def get_lane(self, index: int) -> Lane:
        return self._lanes[index]

    def lane_from(self, entry: int, exit: int) -> Optional[Lane]:
        """Return the lowest-indexed lane going entry -> exit, if any."""
        edges = self._G.get_edge_data(entry, exit)
        if not edges:
            return None
        return self._lanes[min(d["lane"] for d in edges.values())]

    def map_names(self) -> List[str]:
        seen: Dict[str, None] = {}
        for wp in self._waypoints:
            seen.setdefault(wp.map_name, None)
        return list(seen)

    def to_networkx(self) -> nx.MultiDiGraph:
        return self._G


# ---------- I/O ----------
def nav_graph_from_dict(data: dict) -> NavGraph:
    """
    Build a NavGraph from a plain dict:
      {"waypoints": [{"map": str, "x": float, "y": float, "name": str?}, ...],
       "lanes": [{"entry": int, "exit": int, "bidirectional": bool?}, ...]}
    """
    if not isinstance(data, dict):
        raise ValueError("nav graph document must be an object")

    waypoints = data.get("waypoints", [])
    lanes = data.get("lanes", [])
    for key, items in (("waypoints", waypoints), ("lanes", lanes)):
        if not isinstance(items, list):
            raise ValueError(f"'{key}' must be a list, got {type(items).__name__}")

    graph = NavGraph()
    for i, item in enumerate(waypoints):
        if not isinstance(item, dict):
            raise ValueError(f"waypoint #{i} must be an object, got {type(item).__name__}")
        try:
            map_name = item["map"]
            xy = (float(item["x"]), float(item["y"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"waypoint #{i} is malformed: {e!r}") from e
        name = item.get("name")
        graph.add_waypoint(map_name, xy, name=str(name) if name is not None else None)

    for i, item in enumerate(lanes):
        if not isinstance(item, dict):
            raise ValueError(f"lane #{i} must be an object, got {type(item).__name__}")
        try:
            entry, exit = int(item["entry"]), int(item["exit"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"lane #{i} is malformed: {e!r}") from e
        if item.get("bidirectional", False):
            graph.add_bidirectional_lane(entry, exit)
        else:
            graph.add_lane(entry, exit)

    return graph


def load_nav_graph_json(path: str) -> NavGraph:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return nav_graph_from_dict(data)


def nav_graph_from_networkx(
    G: nx.Graph,
    *,
    map_key: str = "map",
    pos_key: str = "pos",
    name_key: str = "name",
) -> NavGraph:
    """
    Convert a networkx DiGraph / MultiDiGraph into a NavGraph.
    Node order gives waypoint indices, edge order gives lane indices.
    """
    graph = NavGraph()
    node_to_index: Dict[object, int] = {}
    for n, attr in G.nodes(data=True):
        if map_key not in attr or pos_key not in attr:
            raise ValueError(f"node {n!r}: missing '{map_key}' or '{pos_key}' attribute")
        wp = graph.add_waypoint(attr[map_key], attr[pos_key], name=attr.get(name_key))
        node_to_index[n] = wp.index

    for u, v in G.edges():
        graph.add_lane(node_to_index[u], node_to_index[v])
        if not G.is_directed():
            graph.add_lane(node_to_index[v], node_to_index[u])

    return graph
