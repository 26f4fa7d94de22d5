from .osm_data import OSMData, OSMNode, OSMWay, WayTags
from .road_type import FALLBACK_SPEED_KPH, RoadType

__all__ = [
    "OSMData",
    "OSMNode",
    "OSMWay",
    "WayTags",
    "RoadType",
    "FALLBACK_SPEED_KPH",
]
