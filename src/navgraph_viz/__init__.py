__version__ = "0.1.0"

from .graph import (
    Waypoint,
    Lane,
    NavGraph,
    load_nav_graph_json,
    nav_graph_from_dict,
    nav_graph_from_networkx,
)
from .bounds import Bounds, compute_fit
from .capsule import Capsule
from .projection import (
    ElementType,
    Pick,
    FloorBucket,
    ProjectionConfig,
    GraphProjection,
    build_projection,
    relayout_labels,
    projection_summary,
)
from .picking import pick_element
from .selection import SelectionState
from .view import GraphView
from .viewer import ViewerConfig, GraphViewer, render_to_file

__all__ = [
    # source graph
    "Waypoint",
    "Lane",
    "NavGraph",
    "load_nav_graph_json",
    "nav_graph_from_dict",
    "nav_graph_from_networkx",

    # geometry
    "Bounds",
    "compute_fit",
    "Capsule",

    # projection / picking / selection
    "ElementType",
    "Pick",
    "FloorBucket",
    "ProjectionConfig",
    "GraphProjection",
    "build_projection",
    "relayout_labels",
    "projection_summary",
    "pick_element",
    "SelectionState",

    # views
    "GraphView",
    "ViewerConfig",
    "GraphViewer",
    "render_to_file",
]
