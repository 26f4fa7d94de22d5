from .model import NearestNode, TripPlan
from .router import Router
from .router_configuration import RouterConfiguration
from .trip_planner import TripPlanner

__all__ = [
    "Router",
    "RouterConfiguration",
    "TripPlanner",
    "TripPlan",
    "NearestNode",
]
