# src/navgraph_viz/picking.py
from __future__ import annotations

from typing import Optional

import numpy as np

from .projection import ElementType, GraphProjection, Pick


def pick_element(
    proj: GraphProjection,
    map_name: Optional[str],
    x: float,
    y: float,
) -> Optional[Pick]:
    """
    Resolve a world point on `map_name` to at most one graph element.

    Waypoints are tested first, then bidirectional lanes, then one-way lanes;
    within each class the earliest-built element wins.
    """
    if map_name is None or map_name not in proj.floors:
        return None

    r_wp = proj.waypoint_radius()
    if not proj.bounds.contains(x, y, margin=r_wp):
        return None

    bucket = proj.floors[map_name]
    assert len(bucket.waypoints) == len(bucket.waypoint_indices)
    assert len(bucket.waypoints) == len(bucket.waypoint_p)

    if bucket.waypoint_p:
        dist = np.linalg.norm(np.asarray(bucket.waypoint_p) - np.array([x, y]), axis=1)
        hits = np.flatnonzero(dist <= r_wp)
        if hits.size:
            return Pick(ElementType.WAYPOINT, bucket.waypoint_indices[int(hits[0])])

    for capsule, index in zip(bucket.bi_lanes, bucket.bi_indices):
        if capsule.pick(x, y):
            return Pick(ElementType.LANE, index)

    for capsule, index in zip(bucket.mono_lanes, bucket.mono_indices):
        if capsule.pick(x, y):
            return Pick(ElementType.LANE, index)

    return None
