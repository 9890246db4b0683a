import matplotlib

matplotlib.use("Agg")

import pytest

from navgraph_viz import NavGraph


@pytest.fixture
def single_lane_graph():
    # one one-way lane (0,0) -> (10,0)
    g = NavGraph()
    g.add_waypoint("L1", (0.0, 0.0))
    g.add_waypoint("L1", (10.0, 0.0))
    g.add_lane(0, 1)
    return g


@pytest.fixture
def two_floor_graph():
    """
    L1: 0 <-> 1 (bidirectional), 1 -> 2 (one-way), 3 isolated
    L2: 4 <-> 5
    cross-floor: 2 -> 4 (lane 5)
    """
    g = NavGraph()
    g.add_waypoint("L1", (0.0, 0.0), name="charger")   # 0
    g.add_waypoint("L1", (10.0, 0.0))                   # 1
    g.add_waypoint("L1", (10.0, 10.0), name="lift_a")   # 2
    g.add_waypoint("L1", (-20.0, -20.0))                # 3
    g.add_waypoint("L2", (0.0, 0.0), name="lift_b")     # 4
    g.add_waypoint("L2", (0.0, 5.0))                    # 5
    g.add_lane(0, 1)  # 0
    g.add_lane(1, 0)  # 1
    g.add_lane(1, 2)  # 2
    g.add_lane(4, 5)  # 3
    g.add_lane(5, 4)  # 4
    g.add_lane(2, 4)  # 5
    return g
