# src/navgraph_viz/render.py
from __future__ import annotations

from typing import Iterable, List

from matplotlib.artist import Artist
from matplotlib.axes import Axes
from matplotlib.collections import PatchCollection, PolyCollection
from matplotlib.patches import Circle as CirclePatch
from matplotlib.patches import PathPatch

from .capsule import Capsule
from .labels import Label
from .projection import FloorBucket

# draw order, back to front
Z_MONO_LANES = 1
Z_BI_LANES = 2
Z_ARROWS = 3
Z_WAYPOINTS = 4
Z_WAYPOINT_LABELS = 5
Z_CONNECTOR_LABELS = 6


def _capsules_artist(capsules: Iterable[Capsule], band_count: int, zorder: int) -> PolyCollection:
    verts, colors = [], []
    for capsule in capsules:
        for xy, rgba in capsule.color_bands(band_count):
            verts.append(xy)
            colors.append(rgba)
    return PolyCollection(verts, facecolors=colors, edgecolors="none", zorder=zorder)


def _labels_artist(labels: Iterable[Label], zorder: int) -> List[Artist]:
    artists: List[Artist] = []
    for label in labels:
        artists.append(PathPatch(
            label.path(), facecolor=label.color, edgecolor="none", zorder=zorder,
        ))
    return artists


def draw_bucket(ax: Axes, bucket: FloorBucket, *, band_count: int = 8) -> List[Artist]:
    """
    Add the bucket's primitives to `ax`: one-way lanes, bidirectional lanes,
    arrows, waypoints, waypoint labels, connector labels.
    """
    artists: List[Artist] = [
        _capsules_artist(bucket.mono_lanes, band_count, Z_MONO_LANES),
        _capsules_artist(bucket.bi_lanes, band_count, Z_BI_LANES),
        PolyCollection(
            [a.vertices for a in bucket.mono_arrows],
            facecolors=[a.color for a in bucket.mono_arrows],
            edgecolors="none",
            zorder=Z_ARROWS,
        ),
        PatchCollection(
            [CirclePatch(tuple(c.center), c.radius) for c in bucket.waypoints],
            facecolors=[c.color for c in bucket.waypoints],
            edgecolors="none",
            zorder=Z_WAYPOINTS,
        ),
    ]
    artists += _labels_artist(bucket.waypoint_labels.values(), Z_WAYPOINT_LABELS)
    artists += _labels_artist(bucket.connector_labels.values(), Z_CONNECTOR_LABELS)

    for artist in artists:
        if isinstance(artist, PathPatch):
            ax.add_patch(artist)
        else:
            ax.add_collection(artist, autolim=False)
    return artists
