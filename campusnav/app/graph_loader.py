# campusnav/app/graph_loader.py
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np
import pandas as pd
from scipy.spatial import cKDTree

from .graph_model import Edge, GraphData, Node

logger = logging.getLogger("campusnav.loader")

NODE_FLAG_COLUMNS = ["outside_campus", "indoor", "elevator", "different_floor"]
EDGE_COLUMN_ALIASES = {"sourceId": "source_id", "targetId": "target_id"}


def _opt_bool(value) -> Optional[bool]:
    if value is None:
        return None
    if not isinstance(value, (list, dict)) and pd.isna(value):
        return None
    return bool(value)


def frames_to_graph(nodes_df: pd.DataFrame, edges_df: pd.DataFrame) -> GraphData:
    nodes_df = nodes_df.copy()
    edges_df = edges_df.rename(columns=EDGE_COLUMN_ALIASES)

    for col in NODE_FLAG_COLUMNS:
        if col not in nodes_df.columns:
            nodes_df[col] = None
    if "name" not in nodes_df.columns:
        nodes_df["name"] = ""
    if "no_stairs" not in nodes_df.columns:
        nodes_df["no_stairs"] = True
    if "no_stairs" not in edges_df.columns:
        edges_df["no_stairs"] = True

    nodes: List[Node] = []
    for r in nodes_df.to_dict("records"):
        nodes.append(Node(
            id=str(r["id"]),
            x=float(r["x"]),
            y=float(r["y"]),
            name="" if pd.isna(r["name"]) else str(r["name"]),
            no_stairs=_opt_bool(r["no_stairs"]) is not False,
            outside_campus=_opt_bool(r["outside_campus"]),
            indoor=_opt_bool(r["indoor"]),
            elevator=_opt_bool(r["elevator"]),
            different_floor=_opt_bool(r["different_floor"]),
        ))

    edges: List[Edge] = []
    for i, r in enumerate(edges_df.to_dict("records")):
        src, dst = str(r["source_id"]), str(r["target_id"])
        edge_id = r.get("id")
        if edge_id is None or (not isinstance(edge_id, str) and pd.isna(edge_id)):
            edge_id = f"{src}-{dst}-{i}"
        edges.append(Edge(
            id=str(edge_id),
            source_id=src,
            target_id=dst,
            distance=float(r["distance"]),
            no_stairs=_opt_bool(r["no_stairs"]) is not False,
        ))

    return GraphData(nodes=nodes, edges=edges)


def graph_from_dict(raw: Dict[str, Any]) -> GraphData:
    nodes_df = pd.DataFrame(raw.get("nodes", []))
    edges_df = pd.DataFrame(raw.get("edges", []))
    if nodes_df.empty:
        nodes_df = pd.DataFrame(columns=["id", "x", "y"])
    if edges_df.empty:
        edges_df = pd.DataFrame(columns=["id", "source_id", "target_id", "distance"])
    return frames_to_graph(nodes_df, edges_df)


def load_graph_json(path: Union[str, Path]) -> GraphData:
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    return graph_from_dict(raw)


def load_graph_tables(prefix: str) -> GraphData:
    nodes = pd.read_parquet(prefix + ".nodes.parquet")
    edges = pd.read_parquet(prefix + ".edges.parquet")
    return frames_to_graph(nodes, edges)


@dataclass
class CampusGraph:
    key: str
    graph: GraphData
    meta: Dict[str, Any] = field(default_factory=dict)
    kdtree: Optional[cKDTree] = None
    node_index: Dict[str, Node] = field(default_factory=dict)  # node_id -> Node

    def __post_init__(self):
        if not self.node_index:
            self.node_index = {n.id: n for n in self.graph.nodes}
        if self.kdtree is None and self.graph.nodes:
            pts = np.c_[[n.x for n in self.graph.nodes], [n.y for n in self.graph.nodes]]
            self.kdtree = cKDTree(pts)

    def node(self, node_id: str) -> Optional[Node]:
        return self.node_index.get(node_id)

    def nearest_node(self, x: float, y: float) -> Optional[str]:
        if self.kdtree is None:
            return None
        _, idx = self.kdtree.query([x, y], k=1)
        return self.graph.nodes[int(idx)].id

    def search(self, query: str, min_length: int = 2, limit: int = 5) -> List[Node]:
        # name suggestions for the search box
        if not query or len(query) < min_length:
            return []
        q = query.lower()
        hits = [n for n in self.graph.nodes if n.name and q in n.name.lower()]
        return hits[:limit]


def load_campus(prefix: str, key: str) -> CampusGraph:
    json_path = Path(prefix + ".json")
    if json_path.exists():
        graph = load_graph_json(json_path)
    else:
        graph = load_graph_tables(prefix)

    meta_path = Path(prefix + ".meta.json")
    meta: Dict[str, Any] = {}
    if meta_path.exists():
        with open(meta_path, encoding="utf-8") as f:
            meta = json.load(f)

    logger.info("loaded campus graph", extra={"campus": key, "nodes": len(graph.nodes), "edges": len(graph.edges)})
    return CampusGraph(key=key, graph=graph, meta=meta)
