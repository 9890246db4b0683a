import argparse
import sys

from .graph import load_nav_graph_json
from .projection import ProjectionConfig, build_projection, projection_summary
from .viewer import GraphViewer, ViewerConfig, render_to_file


def main(argv=None):
    p = argparse.ArgumentParser(prog="navgraph-viz")
    p.add_argument("graph", type=str, help="nav graph JSON file")
    p.add_argument("--lane-width", type=float, default=0.5)
    p.add_argument("--text-size", type=int, default=24)
    p.add_argument("--map", type=str, default=None)
    p.add_argument("--save", type=str, default=None, help="render to this image instead of opening a window")
    p.add_argument("--summary", action="store_true", help="print per-floor counts")
    args = p.parse_args(argv)

    try:
        graph = load_nav_graph_json(args.graph)
    except (OSError, ValueError, IndexError) as e:
        print(f"[NAVGRAPH ERROR] cannot load {args.graph}: {type(e).__name__}: {e}")
        return 1

    cfg = ViewerConfig(
        lane_width=args.lane_width,
        text_size=args.text_size,
        initial_map=args.map,
    )

    try:
        proj = build_projection(graph, ProjectionConfig(lane_width=cfg.lane_width, text_size=cfg.text_size))
    except ValueError as e:
        print(f"[NAVGRAPH ERROR] {e}")
        return 1

    if args.map is not None and args.map not in proj.floors:
        print(f"[NAVGRAPH ERROR] unknown map {args.map!r}; available: {sorted(proj.floors)}")
        return 2

    if args.summary:
        print(projection_summary(proj).to_string(index=False))
        if proj.skipped_lanes:
            print(f"skipped self-loop lanes: {proj.skipped_lanes}")

    try:
        if args.save:
            render_to_file(graph, args.save, cfg, map_name=args.map)
            print(f"saved {args.save}")
        elif not args.summary:
            GraphViewer(graph, cfg).show()
    except KeyError as e:
        print(f"[NAVGRAPH ERROR] {e.args[0]}")
        return 2
    except ValueError as e:
        print(f"[NAVGRAPH ERROR] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
