from geo_math import Point


class NetworkFetchError(Exception):
    """
    Road network data could not be retrieved from the Overpass API,
    even after retrying.
    """

    def __init__(self, center: Point, radius_m: float, attempts: int):
        self.center = center
        self.radius_m = radius_m
        self.attempts = attempts
        super().__init__(
            f"Failed to fetch road network around "
            f"({center.latitude}, {center.longitude}) with radius {radius_m:.0f} m "
            f"after {attempts} attempts."
        )
