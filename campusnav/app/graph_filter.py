# campusnav/app/graph_filter.py
from typing import Callable, Iterable, List, Optional, Set

from .graph_model import Edge, GraphData, Node

NodePredicate = Callable[[Node], bool]


def filter_graph(
    graph: GraphData,
    edge_predicate: Callable[[Edge], bool],
    node_predicate: Optional[NodePredicate] = None,
    pinned: Iterable[str] = (),
) -> GraphData:
    """Derive a constrained subgraph without touching the source graph.

    Keeps edges accepted by ``edge_predicate`` whose endpoints both exist
    (and both pass ``node_predicate`` when one is given). Nodes survive if
    they are an endpoint of a kept edge or are listed in ``pinned``; a
    pinned node stays even when it ends up isolated.
    """
    if graph is None:
        raise TypeError("graph must not be None")

    by_id = {n.id: n for n in graph.nodes}

    def node_ok(node_id: str) -> bool:
        n = by_id.get(node_id)
        if n is None:
            return False
        return node_predicate is None or bool(node_predicate(n))

    kept_edges: List[Edge] = []
    keep_ids: Set[str] = set()
    for e in graph.edges:
        if not edge_predicate(e):
            continue
        if not (node_ok(e.source_id) and node_ok(e.target_id)):
            continue
        kept_edges.append(e)
        keep_ids.add(e.source_id)
        keep_ids.add(e.target_id)

    keep_ids.update(nid for nid in pinned if nid in by_id)

    # preserve source ordering so results are stable across calls
    kept_nodes = [n for n in graph.nodes if n.id in keep_ids]
    return GraphData(nodes=kept_nodes, edges=kept_edges)


def indoor_safe(node: Node) -> bool:
    return node.indoor_safe
