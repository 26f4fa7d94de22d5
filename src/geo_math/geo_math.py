import math

from pyproj import Geod

from geo_math.point import Point

EARTH_RADIUS_M = 6_371_000.0

_geod = Geod(ellps="WGS84")


def distance(a: Point, b: Point) -> float:
    """
    Great-circle distance in meters between two points (haversine formula).
    """

    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    delta_lat = lat2 - lat1
    delta_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bearing(a: Point, b: Point) -> float:
    """
    Forward azimuth from `a` to `b` in degrees, normalized to [0, 360).
    """

    azimuth, _, _ = _geod.inv(a.longitude, a.latitude, b.longitude, b.latitude)
    normalized = azimuth % 360.0
    return 0.0 if normalized >= 360.0 else normalized


def midpoint(a: Point, b: Point) -> Point:
    azimuth, _, length = _geod.inv(a.longitude, a.latitude, b.longitude, b.latitude)
    lon, lat, _ = _geod.fwd(a.longitude, a.latitude, azimuth, length / 2)
    return Point(latitude=lat, longitude=lon)


def covering_radius(a: Point, b: Point, margin_m: float = 0.0) -> float:
    """
    Radius of a circle centered at the midpoint of `a` and `b` which contains
    both points, extended by `margin_m`.
    """

    return distance(a, b) / 2 + margin_m
