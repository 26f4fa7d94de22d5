import logging
from typing import Iterable

from geo_math import Point, distance
from road_graph.node_id import NodeId
from road_graph.road_graph import RoadGraph

logger = logging.getLogger(__name__)


class NearestNodeLocator:
    """
    Snaps geographic points to usable nodes of a road graph. A node is usable when
    it belongs to at least one road way and has at least one outgoing edge.
    """

    DEFAULT_SEARCH_RADIUS_M = 500.0

    def __init__(self, graph: RoadGraph, way_node_ids: Iterable[NodeId]):
        self._graph = graph
        self._way_node_ids = list(way_node_ids)

    def _get_usable_nodes_by_distance(self, point: Point) -> list[tuple[float, NodeId]]:
        return [
            (distance(point, self._graph.point(node_id)), node_id)
            for node_id in self._way_node_ids
            if self._graph.connection_count(node_id) > 0
        ]

    def find_nearest_node(
        self, point: Point, radius_m: float = DEFAULT_SEARCH_RADIUS_M
    ) -> NodeId | None:
        """
        Returns the closest usable node within `radius_m`. When there is none,
        the search is repeated with the doubled radius and finally without any
        radius limit. Returns None only when the graph has no usable nodes at all.
        """

        candidates = self._get_usable_nodes_by_distance(point)
        if not candidates:
            logger.warning("No usable road network nodes available")
            return None

        for search_radius in (radius_m, radius_m * 2):
            within_radius = [item for item in candidates if item[0] <= search_radius]
            if within_radius:
                return min(within_radius, key=lambda item: item[0])[1]

            logger.debug("No usable node within %.0f m of %s", search_radius, point)

        return min(candidates, key=lambda item: item[0])[1]
