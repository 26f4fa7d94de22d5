import logging

from geo_math import Point, covering_radius, distance, midpoint
from road_graph import CURRENT_LOCATION, DESTINATION
from router.model import TripPlan
from router.router import Router

logger = logging.getLogger(__name__)


class TripPlanner:
    """
    TripPlanner computes a route between two arbitrary points.

    Road data is fetched once for a region covering both points. Origin and
    destination are added to the graph as synthetic nodes connected to the
    nearest road nodes, origin -> road and road -> destination. When the points
    can't be snapped to the road network or no route exists, a straight line
    between them is returned instead, priced by its great-circle distance.
    """

    def __init__(self, router: Router):
        self._router = router

    def _get_straight_line_trip(self, origin: Point, destination: Point) -> TripPlan:
        configuration = self._router.configuration
        trip_distance = distance(origin, destination)

        return TripPlan(
            origin=origin,
            destination=destination,
            points=[origin, destination],
            distance=trip_distance,
            estimated_time=trip_distance / 1000 / configuration.average_speed_kph * 60,
            fare=self._router.fare_calculator.calculate_fare(trip_distance),
            is_fallback=True,
        )

    def plan_trip(self, origin: Point, destination: Point) -> TripPlan:
        """
        Raises NetworkFetchError when road data can't be fetched.
        """

        configuration = self._router.configuration

        with self._router.lock:
            self._router.fetch_road_network(
                midpoint(origin, destination),
                covering_radius(origin, destination, configuration.fetch_margin_m),
            )

            start_node_id = self._router.find_nearest_osm_node(origin)
            end_node_id = self._router.find_nearest_osm_node(destination)
            if start_node_id is None or end_node_id is None:
                logger.warning(
                    "No road network nodes near the trip endpoints, "
                    "falling back to a straight line"
                )
                return self._get_straight_line_trip(origin, destination)

            self._router.add_node(CURRENT_LOCATION, origin)
            self._router.add_edge(CURRENT_LOCATION, start_node_id)
            self._router.add_node(DESTINATION, destination)
            self._router.add_edge(end_node_id, DESTINATION)

            path_result = self._router.find_shortest_path(CURRENT_LOCATION, DESTINATION)
            if path_result is None:
                logger.warning("No route found, falling back to a straight line")
                return self._get_straight_line_trip(origin, destination)

            return TripPlan(
                origin=origin,
                destination=destination,
                points=self._router.get_detailed_path_coordinates(path_result.path),
                distance=path_result.distance,
                estimated_time=path_result.estimated_time,
                fare=path_result.fare,
            )
