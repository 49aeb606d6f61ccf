# campusnav/app/costs.py
import math
from dataclasses import dataclass, replace
from typing import Callable

from .graph_model import Edge, Node

CostFn = Callable[[Node, Node, Edge], float]


def _clamp_penalty(value) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(v) or v < 0:
        return 0.0
    return v


@dataclass(frozen=True)
class RoutePreferences:
    """Per-request accessibility preferences.

    Penalties below zero (or not finite) are clamped to zero on
    construction, so a preferences object is always usable as-is.
    """

    disallow_stairs: bool = False
    outdoor_penalty: float = 0.0
    campus_boundary_penalty: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "disallow_stairs", bool(self.disallow_stairs))
        object.__setattr__(self, "outdoor_penalty", _clamp_penalty(self.outdoor_penalty))
        object.__setattr__(self, "campus_boundary_penalty", _clamp_penalty(self.campus_boundary_penalty))

    @property
    def minimizes_outdoor(self) -> bool:
        return self.outdoor_penalty > 0

    def without_outdoor_penalty(self) -> "RoutePreferences":
        return replace(self, outdoor_penalty=0.0)

    @classmethod
    def from_options(
        cls,
        avoid_stairs: bool,
        minimize_outdoor: bool,
        *,
        outdoor_penalty: float,
        campus_boundary_penalty: float,
    ) -> "RoutePreferences":
        # app toggles -> cost model; the campus boundary penalty is always on
        return cls(
            disallow_stairs=avoid_stairs,
            outdoor_penalty=outdoor_penalty if minimize_outdoor else 0.0,
            campus_boundary_penalty=campus_boundary_penalty,
        )


# Node classification helpers

def is_indoor(node: Node) -> bool:
    return node.indoor is True


def is_outdoor(node: Node) -> bool:
    return node.indoor is False or node.outside_campus is True


def crosses_indoor_outdoor(a: Node, b: Node) -> bool:
    # exactly one endpoint indoor, the other one outdoor
    if is_indoor(a) == is_indoor(b):
        return False
    other = b if is_indoor(a) else a
    return is_outdoor(other)


def crosses_campus_boundary(a: Node, b: Node) -> bool:
    return bool(a.outside_campus) != bool(b.outside_campus)


@dataclass(frozen=True)
class CostModel:
    prefs: RoutePreferences

    def is_admissible(self, edge: Edge) -> bool:
        return not (self.prefs.disallow_stairs and not edge.no_stairs)

    def cost(self, from_node: Node, to_node: Node, edge: Edge) -> float:
        base = float(edge.distance)
        cost = base

        # Outdoor penalty (indoor <-> outdoor transitions only)
        if self.prefs.outdoor_penalty > 0 and crosses_indoor_outdoor(from_node, to_node):
            cost += self.prefs.outdoor_penalty

        # Campus boundary penalty
        if self.prefs.campus_boundary_penalty > 0 and crosses_campus_boundary(from_node, to_node):
            cost += self.prefs.campus_boundary_penalty

        if cost <= 0:
            return max(base, 0.0)
        return cost


def compile_preferences(prefs: RoutePreferences) -> CostModel:
    if prefs is None:
        raise TypeError("prefs must not be None")
    return CostModel(prefs)
