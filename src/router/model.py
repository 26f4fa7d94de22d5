from pydantic import BaseModel, ConfigDict

from geo_math import Point
from road_graph import NodeId


class TripPlan(BaseModel):
    """
    Route between two points with its metrics. When no road route could be found,
    `points` contains only the origin and the destination and `is_fallback` is set.
    """

    model_config = ConfigDict(frozen=True)

    origin: Point
    destination: Point
    points: list[Point]
    distance: float
    estimated_time: float
    fare: float
    is_fallback: bool = False


class NearestNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_id: NodeId
    point: Point
    distance: float
