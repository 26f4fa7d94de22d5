from .exceptions import InvalidNodeError, PathIntegrityError
from .fare_calculator import FareCalculator, FareConfiguration
from .model import DetailedPath, PathResult
from .nearest_node_locator import NearestNodeLocator
from .node_id import (
    CURRENT_LOCATION,
    DESTINATION,
    NodeId,
    OsmNodeId,
    SyntheticNodeId,
)
from .path_detailer import PathDetailer
from .path_solver import Heuristic, PathSolver
from .priority_queue import PriorityQueue
from .road_graph import RoadGraph
from .road_graph_builder import RoadGraphBuilder

__all__ = [
    "RoadGraph",
    "RoadGraphBuilder",
    "NearestNodeLocator",
    "PathSolver",
    "Heuristic",
    "PathDetailer",
    "PriorityQueue",
    "FareCalculator",
    "FareConfiguration",
    "PathResult",
    "DetailedPath",
    "NodeId",
    "OsmNodeId",
    "SyntheticNodeId",
    "CURRENT_LOCATION",
    "DESTINATION",
    "InvalidNodeError",
    "PathIntegrityError",
]
