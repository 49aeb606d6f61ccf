# campusnav/app/main.py
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
from typing import Dict

from .costs import RoutePreferences
from .errors import GraphNotFound, UnknownLocation
from .graph_loader import load_campus, CampusGraph
from .logging_utils import get_logger, log_event
from .route_cache import RouteCache, is_miss, route_key
from .routing import plan_route
from .schemas import Endpoint, Prefs, RouteRequest, RouteResponse, RouteTotals, SearchResponse
from .settings import settings

app = FastAPI(title="Campus Navigator API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger = get_logger()

_cache: Dict[str, CampusGraph] = {}
route_cache = RouteCache(settings.route_cache_max_entries)


def load_campus_graph(campus_key: str) -> CampusGraph:
    if campus_key in _cache:
        return _cache[campus_key]
    prefix = Path(settings.data_dir) / campus_key
    json_ok = Path(str(prefix) + ".json").exists()
    nodes_ok = Path(str(prefix) + ".nodes.parquet").exists()
    edges_ok = Path(str(prefix) + ".edges.parquet").exists()
    if not (json_ok or (nodes_ok and edges_ok)):
        raise GraphNotFound(f"Campus graph not found for key '{campus_key}'")
    cg = load_campus(str(prefix), campus_key)
    _cache[campus_key] = cg
    return cg


def get_campus(campus_key: str) -> CampusGraph:
    try:
        return load_campus_graph(campus_key)
    except GraphNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


def resolve_endpoint(cg: CampusGraph, ep: Endpoint) -> str:
    if ep.node_id is not None:
        if cg.node(ep.node_id) is None:
            raise UnknownLocation(ep.node_id)
        return ep.node_id
    nid = cg.nearest_node(ep.point.x, ep.point.y)
    if nid is None:
        raise UnknownLocation(f"({ep.point.x}, {ep.point.y})")
    return nid


def to_preferences(prefs: Prefs) -> RoutePreferences:
    outdoor = prefs.penalties.outdoor
    boundary = prefs.penalties.campus_boundary
    return RoutePreferences.from_options(
        prefs.avoid_stairs,
        prefs.minimize_outdoor,
        outdoor_penalty=settings.outdoor_penalty if outdoor is None else outdoor,
        campus_boundary_penalty=settings.campus_boundary_penalty if boundary is None else boundary,
    )


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


@app.get("/campuses/{campus_key}/search", response_model=SearchResponse)
def search(campus_key: str, q: str = ""):
    cg = get_campus(campus_key)
    hits = cg.search(q, settings.search_min_query_length, settings.search_max_results)
    return {
        "campus": campus_key,
        "query": q,
        "results": [
            {"id": n.id, "name": n.name, "x": n.x, "y": n.y, "indoor": n.indoor, "outside_campus": n.outside_campus}
            for n in hits
        ],
    }


@app.post("/route", response_model=RouteResponse)
def route(req: RouteRequest):
    cg = get_campus(req.campus_key)
    try:
        src = resolve_endpoint(cg, req.start)
        dst = resolve_endpoint(cg, req.end)
    except UnknownLocation as e:
        raise HTTPException(status_code=404, detail=str(e))

    prefs = to_preferences(req.prefs)
    key = route_key(req.campus_key, prefs, src, dst, req.pinned)
    result = route_cache.get(key)
    if is_miss(result):
        result = plan_route(cg.graph, src, dst, prefs, pinned=req.pinned)
        route_cache.set(key, result)

    meta = {"campus": req.campus_key, **cg.meta}
    if result is None:
        log_event("route_not_found", campus=req.campus_key, start=src, end=dst)
        return {"found": False, "meta": meta}

    coords = [[cg.node(nid).x, cg.node(nid).y] for nid in result.path]
    totals = RouteTotals(
        cost=result.cost,
        distance=result.total_distance,
        stairs_edges=result.stairs_edges,
        indoor_share=result.indoor_share,
    )
    log_event(
        "route_computed",
        campus=req.campus_key,
        start=src,
        end=dst,
        phase=result.phase,
        hops=len(result.path) - 1,
        cost=result.cost,
    )
    return {
        "found": True,
        "phase": result.phase,
        "path": list(result.path),
        "coordinates": coords,
        "steps": [
            {
                "from_node": s.from_node,
                "to_node": s.to_node,
                "edge_id": s.edge_id,
                "distance": s.distance,
                "cost": s.cost,
                "notes": list(s.notes),
            }
            for s in result.steps
        ],
        "totals": totals.model_dump(),
        "meta": meta,
    }
