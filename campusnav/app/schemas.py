from pydantic import BaseModel, Field, model_validator
from typing import List, Optional, Dict

class Point(BaseModel):
    x: float
    y: float

class Endpoint(BaseModel):
    node_id: Optional[str] = None
    point: Optional[Point] = None

    @model_validator(mode="after")
    def _one_of(self):
        if self.node_id is None and self.point is None:
            raise ValueError("endpoint needs node_id or point")
        return self

class Penalties(BaseModel):
    outdoor: Optional[float] = None
    campus_boundary: Optional[float] = None

class Prefs(BaseModel):
    avoid_stairs: bool = True
    minimize_outdoor: bool = True
    penalties: Penalties = Field(default_factory=Penalties)

class RouteRequest(BaseModel):
    campus_key: str
    start: Endpoint
    end: Endpoint
    prefs: Prefs = Field(default_factory=Prefs)
    pinned: List[str] = []

class Step(BaseModel):
    from_node: str
    to_node: str
    edge_id: str
    distance: float
    cost: float
    notes: List[str] = []

class RouteTotals(BaseModel):
    cost: float
    distance: float
    stairs_edges: int
    indoor_share: float

class RouteResponse(BaseModel):
    found: bool
    phase: Optional[str] = None
    path: List[str] = []
    coordinates: List[List[float]] = []
    steps: List[Step] = []
    totals: Optional[RouteTotals] = None
    meta: Dict = {}

class NodeSummary(BaseModel):
    id: str
    name: str
    x: float
    y: float
    indoor: Optional[bool] = None
    outside_campus: Optional[bool] = None

class SearchResponse(BaseModel):
    campus: str
    query: str
    results: List[NodeSummary] = []
