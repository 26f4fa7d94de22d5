import logging
import math
from enum import Enum
from itertools import pairwise
from typing import Callable, Sequence

from geo_math import Point, distance
from osm_data import RoadType
from road_graph.exceptions import InvalidNodeError, PathIntegrityError
from road_graph.model import PathResult
from road_graph.node_id import NodeId
from road_graph.path_detailer import PathDetailer
from road_graph.priority_queue import PriorityQueue
from road_graph.road_graph import RoadGraph

logger = logging.getLogger(__name__)


class Heuristic(Enum):
    """
    Estimates of the remaining cost used by the A* search.

    MANHATTAN_DEGREES sums absolute latitude and longitude differences. It is cheap,
    but its scale does not match travel time weights, so found paths may be longer
    than the optimal ones.

    TRAVEL_TIME_LOWER_BOUND is the great-circle distance travelled at the highest
    speed present in the graph, in minutes. It never overestimates the remaining
    travel time, so found paths are optimal.
    """

    MANHATTAN_DEGREES = "manhattan_degrees"
    TRAVEL_TIME_LOWER_BOUND = "travel_time_lower_bound"


class PathSolver:
    def __init__(
        self,
        graph: RoadGraph,
        path_detailer: PathDetailer,
        heuristic: Heuristic = Heuristic.MANHATTAN_DEGREES,
    ):
        self._graph = graph
        self._path_detailer = path_detailer
        self._heuristic = heuristic

    @staticmethod
    def _manhattan_degrees(point: Point, goal: Point) -> float:
        return abs(goal.longitude - point.longitude) + abs(
            goal.latitude - point.latitude
        )

    def _get_estimate_function(self, goal: Point) -> Callable[[Point], float]:
        match self._heuristic:
            case Heuristic.MANHATTAN_DEGREES:
                return lambda point: self._manhattan_degrees(point, goal)
            case Heuristic.TRAVEL_TIME_LOWER_BOUND:
                top_speed_kph = max(
                    self._graph.max_speed() or 0.0,
                    RoadType.MOTORWAY.default_speed_kph,
                )
                return lambda point: distance(point, goal) / 1000 / top_speed_kph * 60

    @staticmethod
    def _reconstruct_path(
        came_from: dict[NodeId, NodeId], current: NodeId
    ) -> list[NodeId]:
        path = [current]
        while current in came_from:
            current = came_from[current]
            path.append(current)
        path.reverse()
        return path

    def _search(self, start: NodeId, end: NodeId) -> list[NodeId] | None:
        estimate = self._get_estimate_function(self._graph.point(end))

        open_set: set[NodeId] = {start}
        closed_set: set[NodeId] = set()
        came_from: dict[NodeId, NodeId] = {}
        g_score: dict[NodeId, float] = {start: 0.0}

        frontier: PriorityQueue[NodeId] = PriorityQueue()
        frontier.push(start, estimate(self._graph.point(start)))

        while frontier:
            current = frontier.pop()
            if current in closed_set:
                continue

            if current == end:
                return self._reconstruct_path(came_from, current)

            open_set.discard(current)
            closed_set.add(current)

            for neighbor, weight in self._graph.neighbors(current).items():
                if neighbor in closed_set:
                    continue

                tentative_g_score = g_score[current] + weight
                if neighbor in open_set and tentative_g_score >= g_score.get(
                    neighbor, math.inf
                ):
                    continue

                open_set.add(neighbor)
                came_from[neighbor] = current
                g_score[neighbor] = tentative_g_score
                frontier.push(
                    neighbor,
                    tentative_g_score + estimate(self._graph.point(neighbor)),
                )

        return None

    def validate_path(self, path: Sequence[NodeId]) -> None:
        for node_id in path:
            if node_id not in self._graph:
                raise InvalidNodeError(node_id)

        for source, destination in pairwise(path):
            if not self._graph.has_edge(source, destination):
                logger.error(
                    "Reconstructed path is not connected between %s and %s",
                    source,
                    destination,
                )
                raise PathIntegrityError(source, destination)

    def find_shortest_path(self, start: NodeId, end: NodeId) -> PathResult | None:
        """
        Searches for the path with the lowest total edge weight from `start` to `end`
        using A*. Returns None when `end` can't be reached from `start`.

        Raises InvalidNodeError when any of the nodes is not in the graph
        and PathIntegrityError when the found path is not connected.
        """

        if start not in self._graph:
            raise InvalidNodeError(start)
        if end not in self._graph:
            raise InvalidNodeError(end)

        path = self._search(start, end)
        if path is None:
            logger.warning("No path found between nodes %s and %s", start, end)
            return None

        self.validate_path(path)
        detailed_path = self._path_detailer.detail_path(path)

        return PathResult(
            path=path,
            distance=detailed_path.distance,
            estimated_time=detailed_path.estimated_time,
            fare=detailed_path.fare,
        )
