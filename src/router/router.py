import logging
import threading
from datetime import timedelta
from typing import Sequence

from geo_math import Point
from osm_data import OSMData
from overpass_client import OverpassClient
from road_graph import (
    FareCalculator,
    NearestNodeLocator,
    NodeId,
    OsmNodeId,
    PathDetailer,
    PathResult,
    PathSolver,
    RoadGraph,
    RoadGraphBuilder,
)
from road_network_cache import RoadNetworkCache
from router.router_configuration import RouterConfiguration

logger = logging.getLogger(__name__)


class Router:
    """
    Router owns a road graph built from OpenStreetMap data and answers routing
    queries against it.

    Fetching road data replaces the whole working set of OSM nodes and ways and
    rebuilds the graph from scratch, it does not merge regions fetched before.
    The new graph is built aside and swapped in only when the fetch succeeds,
    so a failed fetch leaves the previous graph untouched. All graph reads and
    writes are serialized with a reentrant lock available as `lock`.
    """

    def __init__(
        self,
        configuration: RouterConfiguration | None = None,
        *,
        overpass_client: OverpassClient | None = None,
        cache: RoadNetworkCache | None = None,
    ):
        self._configuration = configuration or RouterConfiguration.get_default()
        self._overpass_client = overpass_client or OverpassClient(
            self._configuration.overpass_url,
            timeout_seconds=self._configuration.overpass_timeout_seconds,
            max_retries=self._configuration.max_retries,
            retry_delay_seconds=self._configuration.retry_delay_seconds,
        )
        self._cache = cache or RoadNetworkCache(
            timedelta(hours=self._configuration.cache_ttl_hours)
        )
        self._fare_calculator = FareCalculator(self._configuration.fare)

        self.lock = threading.RLock()
        self._osm_data = OSMData()
        self._graph = RoadGraph()

    @property
    def configuration(self) -> RouterConfiguration:
        return self._configuration

    @property
    def fare_calculator(self) -> FareCalculator:
        return self._fare_calculator

    @property
    def graph(self) -> RoadGraph:
        return self._graph

    @property
    def osm_data(self) -> OSMData:
        return self._osm_data

    def _get_osm_data(self, center: Point, radius_m: float) -> OSMData:
        if (cached_data := self._cache.get(center, radius_m)) is not None:
            logger.info("Using cached road network data")
            return cached_data

        logger.info(
            "Fetching road network data around %s,%s with radius %.0f m",
            center.latitude,
            center.longitude,
            radius_m,
        )
        result = self._overpass_client.get_road_network(center, radius_m)
        return self._cache.store(
            center, radius_m, OSMData.from_overpass_result(result)
        )

    def fetch_road_network(self, center: Point, radius_m: float = 1000.0) -> None:
        """
        Loads roads within `radius_m` meters of `center` (from cache when possible)
        and rebuilds the road graph from them. Raises NetworkFetchError when
        the data can't be fetched.
        """

        with self.lock:
            osm_data = self._get_osm_data(center, radius_m)
            graph = RoadGraphBuilder.build_graph(
                osm_data.nodes, osm_data.ways.values()
            )

            self._osm_data, self._graph = osm_data, graph
            logger.info(
                "Road graph built with %d nodes and %d edges from %d ways",
                len(graph),
                graph.edge_count,
                len(osm_data.ways),
            )

    def clear_cache(self) -> None:
        self._cache.clear()

    def find_nearest_osm_node(
        self, point: Point, radius_m: float | None = None
    ) -> NodeId | None:
        with self.lock:
            locator = NearestNodeLocator(
                self._graph,
                (OsmNodeId(value=node_id) for node_id in self._osm_data.way_node_ids),
            )
            return locator.find_nearest_node(
                point,
                radius_m
                if radius_m is not None
                else self._configuration.search_radius_m,
            )

    def _get_path_detailer(self) -> PathDetailer:
        return PathDetailer(self._graph, self._osm_data, self._fare_calculator)

    def find_shortest_path(self, start: NodeId, end: NodeId) -> PathResult | None:
        with self.lock:
            path_solver = PathSolver(
                self._graph,
                self._get_path_detailer(),
                self._configuration.heuristic,
            )
            return path_solver.find_shortest_path(start, end)

    def get_detailed_path_coordinates(self, path: Sequence[NodeId]) -> list[Point]:
        with self.lock:
            return self._get_path_detailer().get_detailed_path_coordinates(path)

    def add_node(self, node_id: NodeId, point: Point) -> None:
        with self.lock:
            self._graph.add_node(node_id, point)

    def add_edge(
        self,
        source: NodeId,
        destination: NodeId,
        distance_m: float | None = None,
        speed_limit_kph: float | None = None,
    ) -> float:
        with self.lock:
            return self._graph.add_edge(
                source, destination, distance_m, speed_limit_kph
            )
