from itertools import pairwise
from typing import Iterable, Sequence

from geo_math import Point, distance
from osm_data import FALLBACK_SPEED_KPH, OSMData, OSMWay
from road_graph.fare_calculator import FareCalculator
from road_graph.model import DetailedPath
from road_graph.node_id import NodeId, OsmNodeId
from road_graph.road_graph import RoadGraph

Leg = tuple[list[Point], float]


class PathDetailer:
    """
    Expands paths of graph nodes into dense polylines by reinserting the vertices
    of the OSM ways between consecutive path nodes, and computes trip metrics
    based on these polylines.

    For a pair of nodes joined by an edge, the way the edge was built from is
    used. Otherwise every way containing both nodes is considered and the one
    joining them over the fewest vertices wins. OSM nodes are matched with way
    vertices by ID, nodes added to the graph by hand (e.g. the current location
    of a user) by their coordinates.
    """

    COORDINATE_TOLERANCE_DEG = 1e-4

    def __init__(
        self, graph: RoadGraph, osm_data: OSMData, fare_calculator: FareCalculator
    ):
        self._graph = graph
        self._fare_calculator = fare_calculator
        self._way_points: dict[int, tuple[OSMWay, list[Point]]] = {
            way.id: (way, osm_data.way_points(way)) for way in osm_data.ways.values()
        }

    @classmethod
    def _is_close(cls, a: Point, b: Point) -> bool:
        return (
            abs(a.latitude - b.latitude) < cls.COORDINATE_TOLERANCE_DEG
            and abs(a.longitude - b.longitude) < cls.COORDINATE_TOLERANCE_DEG
        )

    def _get_way_indices(
        self, way: OSMWay, points: Sequence[Point], node_id: NodeId
    ) -> list[int]:
        if isinstance(node_id, OsmNodeId):
            return [
                i
                for i, osm_node_id in enumerate(way.nodes)
                if osm_node_id == node_id.value
            ]

        point = self._graph.point(node_id)
        return [
            i for i, candidate in enumerate(points) if self._is_close(candidate, point)
        ]

    @staticmethod
    def _get_closest_indices(
        start_indices: Iterable[int], end_indices: Sequence[int]
    ) -> tuple[int, int] | None:
        """
        Pair of start and end indices with the fewest vertices between them.
        A closed way lists its first node twice, so the pair going forward
        is preferred on ties.
        """

        return min(
            (
                (start_index, end_index)
                for start_index in start_indices
                for end_index in end_indices
            ),
            key=lambda indices: (abs(indices[1] - indices[0]), indices[0] > indices[1]),
            default=None,
        )

    def _get_candidate_ways(
        self, start: NodeId, end: NodeId
    ) -> Iterable[tuple[OSMWay, list[Point]]]:
        if self._graph.has_edge(start, end):
            way_id = self._graph.nx_graph.edges[start, end]["way_id"]
            if way_id in self._way_points:
                return [self._way_points[way_id]]

        return self._way_points.values()

    def _find_connecting_way(
        self, start: NodeId, end: NodeId
    ) -> tuple[OSMWay, list[Point], int, int] | None:
        connecting_way: tuple[OSMWay, list[Point], int, int] | None = None

        for way, points in self._get_candidate_ways(start, end):
            indices = self._get_closest_indices(
                self._get_way_indices(way, points, start),
                self._get_way_indices(way, points, end),
            )
            if indices is None:
                continue

            start_index, end_index = indices
            if connecting_way is None or abs(end_index - start_index) < abs(
                connecting_way[3] - connecting_way[2]
            ):
                connecting_way = (way, points, start_index, end_index)

        return connecting_way

    def _get_leg(self, start: NodeId, end: NodeId) -> Leg:
        """
        Polyline from `start` to `end` together with the speed it is travelled at.
        When no way connects the nodes, they are joined with a straight segment.
        """

        start_point, end_point = self._graph.point(start), self._graph.point(end)

        if (connecting_way := self._find_connecting_way(start, end)) is None:
            return [start_point, end_point], FALLBACK_SPEED_KPH

        way, points, start_index, end_index = connecting_way
        step = 1 if start_index <= end_index else -1
        intermediate_points = [
            points[i] for i in range(start_index + step, end_index, step)
        ]

        return (
            [start_point, *intermediate_points, end_point],
            way.tags.highway.default_speed_kph,
        )

    def _get_legs(self, path: Sequence[NodeId]) -> list[Leg]:
        return [self._get_leg(start, end) for start, end in pairwise(path)]

    def _join_legs(self, path: Sequence[NodeId], legs: Sequence[Leg]) -> list[Point]:
        if not path:
            return []

        detailed_points = [self._graph.point(path[0])]
        for leg_points, _ in legs:
            detailed_points.extend(leg_points[1:])

        return detailed_points

    def get_detailed_path_coordinates(self, path: Sequence[NodeId]) -> list[Point]:
        """
        Returns the polyline of the path. Between each pair of consecutive nodes,
        the intermediate vertices of the way connecting them are inserted
        in the direction of travel.
        """

        return self._join_legs(path, self._get_legs(path))

    @staticmethod
    def calculate_distance(points: Sequence[Point]) -> float:
        return sum(distance(start, end) for start, end in pairwise(points))

    @classmethod
    def calculate_travel_time(cls, points: Sequence[Point], speed_kph: float) -> float:
        """
        Travel time in minutes along `points` at a constant speed.
        """

        return cls.calculate_distance(points) / 1000 / speed_kph * 60

    def detail_path(self, path: Sequence[NodeId]) -> DetailedPath:
        legs = self._get_legs(path)
        points = self._join_legs(path, legs)
        path_distance = self.calculate_distance(points)

        return DetailedPath(
            points=points,
            distance=path_distance,
            estimated_time=sum(
                self.calculate_travel_time(leg_points, speed)
                for leg_points, speed in legs
            ),
            fare=self._fare_calculator.calculate_fare(path_distance),
        )
