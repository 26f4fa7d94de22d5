from pydantic import BaseModel, ConfigDict

from geo_math import Point
from road_graph.node_id import NodeId


class DetailedPath(BaseModel):
    model_config = ConfigDict(frozen=True)

    points: list[Point]
    distance: float
    estimated_time: float
    fare: float


class PathResult(BaseModel):
    """
    Result of a shortest path search.
    Attributes:
        path (list[NodeId]): IDs of the graph nodes along the path.
        distance (float): Length of the detailed path in meters.
        estimated_time (float): Estimated travel time in minutes.
        fare (float): Price of the trip.
    """

    model_config = ConfigDict(frozen=True)

    path: list[NodeId]
    distance: float
    estimated_time: float
    fare: float
