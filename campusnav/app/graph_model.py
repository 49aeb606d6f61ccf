# campusnav/app/graph_model.py
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger("campusnav.graph")


@dataclass(frozen=True)
class Node:
    id: str
    x: float
    y: float
    name: str = ""
    no_stairs: bool = True
    outside_campus: Optional[bool] = None
    indoor: Optional[bool] = None
    elevator: Optional[bool] = None
    different_floor: Optional[bool] = None  # carried for consumers, solver ignores it

    @property
    def indoor_safe(self) -> bool:
        return self.indoor is True and self.outside_campus is not True


@dataclass(frozen=True)
class Edge:
    id: str
    source_id: str
    target_id: str
    distance: float
    no_stairs: bool = True


@dataclass(frozen=True)
class GraphData:
    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()

    def __post_init__(self):
        # accept lists from loaders but store immutably
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))


@dataclass(frozen=True)
class Neighbor:
    node_id: str
    distance: float
    no_stairs: bool
    edge: Edge


@dataclass
class RoutingGraph:
    """Adjacency view over a GraphData.

    Every accepted edge is registered in both directions. Edges whose
    endpoints are missing, or whose distance is negative or not finite,
    are left out of the adjacency instead of failing the build.
    """

    nodes: Dict[str, Node]
    adjacency: Dict[str, List[Neighbor]]
    dropped_edges: List[str] = field(default_factory=list)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def neighbors(self, node_id: str) -> List[Neighbor]:
        return self.adjacency.get(node_id, [])


def _usable_distance(edge: Edge) -> bool:
    try:
        d = float(edge.distance)
    except (TypeError, ValueError):
        return False
    return math.isfinite(d) and d >= 0.0


def build_adjacency(nodes: Iterable[Node], edges: Iterable[Edge]) -> RoutingGraph:
    node_map: Dict[str, Node] = {}
    for n in nodes:
        node_map[n.id] = n

    adj: Dict[str, List[Neighbor]] = {nid: [] for nid in node_map}
    dropped: List[str] = []
    for e in edges:
        if e.source_id not in node_map or e.target_id not in node_map:
            dropped.append(e.id)
            continue
        if not _usable_distance(e):
            dropped.append(e.id)
            continue
        d = float(e.distance)
        adj[e.source_id].append(Neighbor(e.target_id, d, bool(e.no_stairs), e))
        if e.target_id != e.source_id:
            adj[e.target_id].append(Neighbor(e.source_id, d, bool(e.no_stairs), e))

    if dropped:
        logger.debug("dropped %d edges while building adjacency", len(dropped), extra={"edge_ids": dropped[:20]})
    return RoutingGraph(nodes=node_map, adjacency=adj, dropped_edges=dropped)


def build_routing_graph(graph: GraphData) -> RoutingGraph:
    if graph is None:
        raise TypeError("graph must not be None")
    return build_adjacency(graph.nodes, graph.edges)
