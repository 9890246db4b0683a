from collections import Counter

import numpy as np
import pytest

from navgraph_viz import (
    GraphView,
    NavGraph,
    ProjectionConfig,
    build_projection,
    projection_summary,
    relayout_labels,
)
from navgraph_viz.projection import make_lane_arrow
from navgraph_viz.viz_style import LANE_ENTRY_COLOR, LANE_EXIT_COLOR


def _build(graph, lane_width=2.0, **kw):
    return build_projection(graph, ProjectionConfig(lane_width=lane_width, **kw))


def test_single_lane_bounds(single_lane_graph):
    proj = _build(single_lane_graph, lane_width=2.0)
    assert np.allclose(proj.bounds.min, [-1.0, -1.0])
    assert np.allclose(proj.bounds.max, [11.0, 1.0])


def test_one_way_lane_gets_capsule_and_arrow(single_lane_graph):
    proj = _build(single_lane_graph)
    bucket = proj.floors["L1"]

    assert bucket.bi_lanes == []
    assert bucket.mono_indices == [0]
    assert len(bucket.mono_arrows) == 1

    capsule = bucket.mono_lanes[0]
    assert capsule.start_color == LANE_ENTRY_COLOR
    assert capsule.end_color == LANE_EXIT_COLOR
    assert capsule.half_width == pytest.approx(1.0)

    centroid = bucket.mono_arrows[0].centroid()
    assert centroid[1] == pytest.approx(0.0)
    # on the midpoint, pushed forward along the lane
    assert centroid[0] > 5.0


def test_arrow_geometry():
    arrow = make_lane_arrow(np.array([0.0, 0.0]), np.array([0.0, 4.0]))
    base0, base1, tip = arrow.vertices
    assert np.allclose(tip, [0.0, 2.5625])
    assert np.allclose(sorted([base0[0], base1[0]]), [-0.25, 0.25])
    assert np.allclose([base0[1], base1[1]], [2.0625, 2.0625])


def test_reverse_lanes_fold_into_one_bidirectional_capsule():
    g = NavGraph()
    g.add_waypoint("L1", (0, 0))
    g.add_waypoint("L1", (5, 0))
    g.add_lane(1, 0)
    g.add_lane(0, 1)

    bucket = _build(g).floors["L1"]
    assert bucket.bi_indices == [0]
    assert bucket.mono_lanes == []
    assert bucket.mono_arrows == []
    capsule = bucket.bi_lanes[0]
    assert capsule.start_color == capsule.end_color == LANE_ENTRY_COLOR
    # first lane decides the capsule direction
    assert np.allclose(capsule.start, [5, 0])


def test_duplicate_directed_lane_is_drawn_once():
    g = NavGraph()
    g.add_waypoint("L1", (0, 0))
    g.add_waypoint("L1", (5, 0))
    g.add_lane(0, 1)
    g.add_lane(0, 1)

    bucket = _build(g).floors["L1"]
    assert bucket.mono_indices == [0]


def test_cross_floor_lane_becomes_connector(two_floor_graph):
    proj = _build(two_floor_graph)
    l1 = proj.floors["L1"]

    all_lane_indices = l1.bi_indices + l1.mono_indices
    all_lane_indices += proj.floors["L2"].bi_indices + proj.floors["L2"].mono_indices
    assert 5 not in all_lane_indices

    assert list(l1.connector_labels) == [2]
    assert proj.floors["L2"].connector_labels == {}
    connector = l1.connector_labels[2]
    assert connector.text == "[L2::lift_b (4)]"

    parent = l1.waypoint_labels[2]
    assert connector.anchor[0] == pytest.approx(parent.anchor[0])
    assert connector.anchor[1] == pytest.approx(parent.anchor[1] - parent.height)
    assert connector.anchor[1] < parent.anchor[1]


def test_cross_floor_lane_does_not_touch_bounds():
    g = NavGraph()
    g.add_waypoint("L1", (0, 0))
    g.add_waypoint("L1", (1, 0))
    g.add_waypoint("L2", (100, 100))
    g.add_lane(0, 1)
    g.add_lane(1, 2)

    proj = _build(g, lane_width=1.0)
    assert np.allclose(proj.bounds.max, [1.5, 0.5])


def test_waypoint_labels_and_circles(two_floor_graph):
    proj = _build(two_floor_graph)
    l1, l2 = proj.floors["L1"], proj.floors["L2"]

    assert sorted(l1.waypoint_labels) == [0, 1, 2, 3]
    assert sorted(l2.waypoint_labels) == [4, 5]
    assert l1.waypoint_labels[0].text == "charger (0)"
    assert l1.waypoint_labels[1].text == "1"

    # waypoint 3 has no lanes: label only
    assert l1.waypoint_indices == [0, 1, 2]
    assert 3 not in l1.waypoint_indices
    assert l2.waypoint_indices == [4, 5]

    for bucket in (l1, l2):
        for circle, p, j in zip(bucket.waypoints, bucket.waypoint_p, bucket.waypoint_indices):
            assert np.allclose(circle.center, p)
            assert np.allclose(p, two_floor_graph.get_waypoint(j).location)
            assert circle.radius == pytest.approx(0.3 * 2.0)


def test_self_loop_lane_is_skipped():
    g = NavGraph()
    g.add_waypoint("L1", (0, 0))
    g.add_waypoint("L1", (1, 0))
    g.add_lane(0, 0)
    g.add_lane(0, 1)

    proj = _build(g)
    assert proj.skipped_lanes == [0]
    assert proj.floors["L1"].mono_indices == [1]


def test_first_map_is_first_floor_with_a_lane():
    g = NavGraph()
    g.add_waypoint("A", (0, 0))
    g.add_waypoint("B", (0, 0))
    g.add_waypoint("B", (1, 0))
    g.add_lane(0, 1)  # cross-floor, no capsule
    g.add_lane(1, 2)
    assert _build(g).first_map == "B"


def test_rejects_bad_config(single_lane_graph):
    with pytest.raises(ValueError):
        _build(single_lane_graph, lane_width=0.0)
    with pytest.raises(ValueError):
        _build(single_lane_graph, text_size=0)


def test_random_graph_invariants():
    rng = np.random.default_rng(7)
    g = NavGraph()
    for i in range(40):
        g.add_waypoint("L1" if i < 25 else "L2", rng.uniform(-50, 50, size=2))
    for _ in range(120):
        a, b = rng.integers(0, 40, size=2)
        if a != b:
            g.add_lane(int(a), int(b))

    proj = _build(g, lane_width=1.0, show_progress=False)

    directed = {(ln.entry, ln.exit) for ln in g.lanes
                if g.get_waypoint(ln.entry).map_name == g.get_waypoint(ln.exit).map_name}
    pairs = Counter()
    for bucket in proj.floors.values():
        bucket.check()
        for i in bucket.bi_indices:
            lane = g.get_lane(i)
            assert (lane.exit, lane.entry) in directed
            pairs[frozenset((lane.entry, lane.exit))] += 1
        for i in bucket.mono_indices:
            lane = g.get_lane(i)
            assert (lane.exit, lane.entry) not in directed
            pairs[frozenset((lane.entry, lane.exit))] += 1
        # each waypoint at most once per floor
        assert len(set(bucket.waypoint_indices)) == len(bucket.waypoint_indices)

    assert set(pairs) == {frozenset(d) for d in directed}
    assert all(n == 1 for n in pairs.values())

    referenced = {j for d in directed for j in d}
    drawn = {j for b in proj.floors.values() for j in b.waypoint_indices}
    assert drawn == referenced


def test_summary(two_floor_graph):
    df = projection_summary(_build(two_floor_graph))
    assert list(df["map"]) == ["L1", "L2"]
    row = df.set_index("map").loc["L1"]
    assert row["n_waypoints"] == 3
    assert row["n_bi_lanes"] == 1
    assert row["n_mono_lanes"] == 1
    assert row["n_connectors"] == 1
    assert row["n_labels"] == 4


def test_first_cross_floor_lane_owns_the_connector():
    g = NavGraph()
    g.add_waypoint("L1", (0, 0))
    g.add_waypoint("L2", (0, 0), name="lift_b")
    g.add_waypoint("L3", (0, 0), name="lift_c")
    g.add_lane(0, 1)
    g.add_lane(0, 2)

    proj = _build(g)
    connectors = proj.floors["L1"].connector_labels
    assert list(connectors) == [0]
    assert connectors[0].text == "[L2::lift_b (1)]"
    assert proj.floors["L2"].connector_labels == {}
    assert proj.floors["L3"].connector_labels == {}


def test_graph_without_same_floor_lanes():
    g = NavGraph()
    g.add_waypoint("L1", (0, 0))
    g.add_waypoint("L2", (3, 4))
    g.add_lane(0, 1)
    g.add_lane(1, 0)

    proj = _build(g)
    assert proj.bounds.is_empty()
    assert proj.first_map is None
    for bucket in proj.floors.values():
        assert bucket.bi_lanes == [] and bucket.mono_lanes == []
        assert bucket.waypoints == []

    view = GraphView(g, lane_width=2.0)
    assert view.current_map() is None
    assert view.pick(0.0, 0.0) is None
    assert view.choose_map("L1") is True
    for x, y in [(0.0, 0.0), (3.0, 4.0), (1e6, -1e6)]:
        assert view.pick(x, y) is None


def test_relayout_labels_accepts_new_font():
    from matplotlib.font_manager import FontProperties

    g = NavGraph()
    g.add_waypoint("L1", (0, 0), name="dock")
    proj = _build(g)
    font = FontProperties(family="DejaVu Sans", weight="bold")

    relayout_labels(proj, 36, font=font)
    label = proj.floors["L1"].waypoint_labels[0]
    assert proj.text_size == 36
    assert proj.font is font
    assert label.size == 36
    assert label.font is font
