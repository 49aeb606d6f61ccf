#!/usr/bin/env python3
import argparse, json, sys
from dataclasses import asdict

import pandas as pd

from campusnav.app.graph_loader import load_graph_json
from campusnav.app.graph_model import build_routing_graph


def graph_report(graph) -> dict:
    rg = build_routing_graph(graph)
    nodes = pd.DataFrame([asdict(n) for n in graph.nodes])
    edges = pd.DataFrame([asdict(e) for e in graph.edges])

    isolated = sorted(nid for nid, nbrs in rg.adjacency.items() if not nbrs)
    report = {
        "nodes": int(len(nodes)),
        "edges": int(len(edges)),
        "dropped_edges": rg.dropped_edges,
        "isolated_nodes": isolated,
        "stairs_share": float((~edges["no_stairs"].astype(bool)).mean()) if len(edges) else 0.0,
        "indoor_share": float((nodes["indoor"] == True).mean()) if len(nodes) else 0.0,  # noqa: E712
        "outside_campus_share": float((nodes["outside_campus"] == True).mean()) if len(nodes) else 0.0,  # noqa: E712
    }
    return report


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Sanity-check a campus graph JSON file")
    ap.add_argument("--graph", required=True, help="e.g., data/graphs/upper_campus.json")
    args = ap.parse_args(argv)

    report = graph_report(load_graph_json(args.graph))
    print(json.dumps(report, indent=2))

    if report["dropped_edges"]:
        print(f"{len(report['dropped_edges'])} edges reference missing nodes or carry bad distances")
        return 1
    print("OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
