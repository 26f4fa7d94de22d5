from .geo_math import EARTH_RADIUS_M, bearing, covering_radius, distance, midpoint
from .point import Point

__all__ = [
    "Point",
    "EARTH_RADIUS_M",
    "distance",
    "bearing",
    "midpoint",
    "covering_radius",
]
