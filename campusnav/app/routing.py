# campusnav/app/routing.py
import heapq
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .costs import (
    CostFn,
    RoutePreferences,
    compile_preferences,
    crosses_campus_boundary,
    crosses_indoor_outdoor,
)
from .graph_filter import filter_graph, indoor_safe
from .graph_model import Edge, GraphData, Node, RoutingGraph, build_routing_graph

logger = logging.getLogger("campusnav.routing")

PHASE_INDOOR = "indoor"
PHASE_FULL = "full"


@dataclass(frozen=True)
class SolvedPath:
    path: Tuple[str, ...]
    cost: float
    # (from_id, to_id, edge, step_cost) per traversed edge
    hops: Tuple[Tuple[str, str, Edge, float], ...] = ()


@dataclass(frozen=True)
class RouteStep:
    from_node: str
    to_node: str
    edge_id: str
    distance: float
    cost: float
    notes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Route:
    path: Tuple[str, ...]
    cost: float
    phase: str
    steps: Tuple[RouteStep, ...] = ()

    @property
    def total_distance(self) -> float:
        return float(sum(s.distance for s in self.steps))  # actual distance, not penalized

    @property
    def stairs_edges(self) -> int:
        return sum(1 for s in self.steps if "stairs" in s.notes)

    @property
    def indoor_share(self) -> float:
        indoor_steps = sum(1 for s in self.steps if "indoor" in s.notes)
        return indoor_steps / max(1, len(self.path) - 1)


# Solver

def dijkstra_path(rg: RoutingGraph, src: str, dst: str, cost_fn: CostFn) -> Optional[SolvedPath]:
    """Single-source Dijkstra with early exit at ``dst``.

    Returns None when either endpoint is missing from ``rg`` or ``dst``
    cannot be reached from ``src``.
    """
    if rg is None:
        raise TypeError("routing graph must not be None")
    if src not in rg or dst not in rg:
        return None
    if src == dst:
        return SolvedPath(path=(src,), cost=0.0)

    INF = float("inf")
    dist_cost: Dict[str, float] = {src: 0.0}
    prev: Dict[str, Tuple[str, Edge, float]] = {}
    done = set()

    pq: List[Tuple[float, str]] = [(0.0, src)]
    while pq:
        d, u = heapq.heappop(pq)
        if u in done:
            continue
        done.add(u)
        if u == dst:
            break
        cur = rg.nodes[u]
        for nb in rg.neighbors(u):
            v = nb.node_id
            if v in done:
                continue
            w = float(cost_fn(cur, rg.nodes[v], nb.edge))
            if not np.isfinite(w) or w < 0:
                continue
            nd = d + w
            if nd < dist_cost.get(v, INF):
                dist_cost[v] = nd
                prev[v] = (u, nb.edge, w)
                heapq.heappush(pq, (nd, v))

    if dst not in done:
        return None

    # Reconstruct path of node ids and traversed edges
    path_rev: List[str] = [dst]
    hops_rev: List[Tuple[str, str, Edge, float]] = []
    cur_id = dst
    while cur_id != src:
        u, edge, w = prev[cur_id]
        hops_rev.append((u, cur_id, edge, w))
        path_rev.append(u)
        cur_id = u

    return SolvedPath(
        path=tuple(reversed(path_rev)),
        cost=dist_cost[dst],
        hops=tuple(reversed(hops_rev)),
    )


def _step_notes(a: Node, b: Node, edge: Edge) -> Tuple[str, ...]:
    notes = []
    if not edge.no_stairs:
        notes.append("stairs")
    if a.indoor is True and b.indoor is True:
        notes.append("indoor")
    if crosses_indoor_outdoor(a, b):
        notes.append("outdoor_transition")
    if crosses_campus_boundary(a, b):
        notes.append("campus_boundary")
    if a.elevator or b.elevator:
        notes.append("elevator")
    return tuple(notes)


def _as_route(rg: RoutingGraph, solved: SolvedPath, phase: str) -> Route:
    steps = tuple(
        RouteStep(
            from_node=u,
            to_node=v,
            edge_id=edge.id,
            distance=float(edge.distance),
            cost=w,
            notes=_step_notes(rg.nodes[u], rg.nodes[v], edge),
        )
        for u, v, edge, w in solved.hops
    )
    return Route(path=solved.path, cost=solved.cost, phase=phase, steps=steps)


# Two-phase strategy

def plan_route(
    graph: GraphData,
    start_id: str,
    end_id: str,
    prefs: Optional[RoutePreferences] = None,
    pinned: Iterable[str] = (),
) -> Optional[Route]:
    """Route from ``start_id`` to ``end_id`` honouring ``prefs``.

    When outdoor minimisation is on and both endpoints are indoor-safe, an
    indoor-only subgraph is tried first and its result wins whenever it
    finds a path. Otherwise (or if that fails) the stairs-filtered full
    graph is searched with every penalty applied. None means no route.
    """
    if graph is None:
        raise TypeError("graph must not be None")
    prefs = prefs or RoutePreferences()
    model = compile_preferences(prefs)

    by_id = {n.id: n for n in graph.nodes}
    start = by_id.get(start_id)
    end = by_id.get(end_id)
    if start is None or end is None:
        logger.debug("endpoint missing from graph", extra={"start_id": start_id, "end_id": end_id})
        return None

    pins = {start_id, end_id, *pinned}

    if prefs.minimizes_outdoor and start.indoor_safe and end.indoor_safe:
        indoor_model = compile_preferences(prefs.without_outdoor_penalty())
        sub = filter_graph(graph, indoor_model.is_admissible, indoor_safe, pins)
        rg = build_routing_graph(sub)
        solved = dijkstra_path(rg, start_id, end_id, indoor_model.cost)
        if solved is not None:
            logger.debug("indoor-only route found", extra={"hops": len(solved.path) - 1})
            return _as_route(rg, solved, PHASE_INDOOR)
        logger.debug("no indoor-only route, falling back to full graph")

    full = filter_graph(graph, model.is_admissible, None, pins)
    rg = build_routing_graph(full)
    solved = dijkstra_path(rg, start_id, end_id, model.cost)
    if solved is None:
        logger.debug("no route", extra={"start_id": start_id, "end_id": end_id})
        return None
    return _as_route(rg, solved, PHASE_FULL)


def find_shortest_path(
    graph: GraphData,
    start_id: str,
    end_id: str,
    prefs: Optional[RoutePreferences] = None,
) -> Optional[List[str]]:
    route = plan_route(graph, start_id, end_id, prefs)
    return list(route.path) if route is not None else None
