from itertools import pairwise

import pytest

from conftest import build_graph, osm_node, osm_way
from geo_math import Point, distance
from osm_data import OSMData
from road_graph import (
    FareCalculator,
    OsmNodeId,
    PathDetailer,
    RoadGraph,
    SyntheticNodeId,
)


class TestPathDetailer:
    WAY_COORDINATES = [
        (13.6195, 123.1814),
        (13.6197, 123.1816),
        (13.6199, 123.1818),
        (13.6200, 123.1820),
    ]

    @pytest.fixture
    def path_detailer(
        self,
        residential_graph: RoadGraph,
        residential_osm_data: OSMData,
        fare_calculator: FareCalculator,
    ) -> PathDetailer:
        return PathDetailer(residential_graph, residential_osm_data, fare_calculator)

    @pytest.mark.parametrize(
        ("path", "expected_coordinates"),
        [
            pytest.param([1, 4], WAY_COORDINATES, id="forward"),
            pytest.param([4, 1], WAY_COORDINATES[::-1], id="reverse"),
            pytest.param([1, 2, 3, 4], WAY_COORDINATES, id="all nodes"),
            pytest.param([2, 4], WAY_COORDINATES[1:], id="part of the way"),
            pytest.param([3], WAY_COORDINATES[2:3], id="single node"),
        ],
    )
    def test_get_detailed_path_coordinates(
        self,
        path_detailer: PathDetailer,
        path: list[int],
        expected_coordinates: list[tuple[float, float]],
    ) -> None:
        # Act
        points = path_detailer.get_detailed_path_coordinates(
            [OsmNodeId(value=node_id) for node_id in path]
        )

        # Assert
        assert [point.coordinates for point in points] == expected_coordinates

    def test_empty_path(self, path_detailer: PathDetailer) -> None:
        # Assert
        assert path_detailer.get_detailed_path_coordinates([]) == []

    def test_straight_segment(
        self, residential_graph: RoadGraph, path_detailer: PathDetailer
    ) -> None:
        # Arrange
        off_road = Point(latitude=13.6300, longitude=123.1900)
        node_id = SyntheticNodeId(name="destination")
        residential_graph.add_node(node_id, off_road)

        # Act
        points = path_detailer.get_detailed_path_coordinates(
            [OsmNodeId(value=3), node_id]
        )

        # Assert
        assert points == [residential_graph.point(OsmNodeId(value=3)), off_road]

    def test_detail_path(self, path_detailer: PathDetailer) -> None:
        # Act
        detailed_path = path_detailer.detail_path(
            [OsmNodeId(value=1), OsmNodeId(value=4)]
        )

        # Assert
        way_points = [
            Point(latitude=latitude, longitude=longitude)
            for latitude, longitude in self.WAY_COORDINATES
        ]
        expected_distance = sum(
            distance(start, end) for start, end in pairwise(way_points)
        )
        assert len(detailed_path.points) == 4
        assert detailed_path.distance == pytest.approx(expected_distance)
        assert detailed_path.estimated_time == pytest.approx(
            expected_distance / 1000 / 30 * 60
        )
        assert detailed_path.fare == 50.0


    def test_closed_way(self, fare_calculator: FareCalculator) -> None:
        # Arrange
        graph, osm_data = build_graph(
            [
                osm_node(1, 0.0, 0.0),
                osm_node(2, 0.0, 0.001),
                osm_node(3, 0.001, 0.001),
                osm_node(4, 0.001, 0.0),
                osm_way(
                    100, [1, 2, 3, 4, 1], highway="tertiary", junction="roundabout"
                ),
            ]
        )
        path_detailer = PathDetailer(graph, osm_data, fare_calculator)
        start, end = OsmNodeId(value=4), OsmNodeId(value=1)

        # Act
        detailed_path = path_detailer.detail_path([start, end])

        # Assert
        assert detailed_path.points == [graph.point(start), graph.point(end)]
        assert detailed_path.distance == pytest.approx(
            distance(graph.point(start), graph.point(end))
        )
        assert detailed_path.estimated_time == pytest.approx(
            detailed_path.distance / 1000 / 40 * 60
        )

    def test_shortcut_way(self, fare_calculator: FareCalculator) -> None:
        # Arrange
        graph, osm_data = build_graph(
            [
                osm_node(1, 0.0, 0.0),
                osm_node(2, 0.0, 0.01),
                osm_node(3, 0.001, 0.005),
                osm_way(100, [1, 3, 2], highway="residential"),
                osm_way(101, [1, 2], highway="primary"),
            ]
        )
        path_detailer = PathDetailer(graph, osm_data, fare_calculator)
        start, end = OsmNodeId(value=1), OsmNodeId(value=2)

        # Act
        detailed_path = path_detailer.detail_path([start, end])

        # Assert
        assert detailed_path.points == [graph.point(start), graph.point(end)]
        assert detailed_path.distance == pytest.approx(
            distance(graph.point(start), graph.point(end))
        )
        assert detailed_path.estimated_time == pytest.approx(
            detailed_path.distance / 1000 / 60 * 60
        )

    def test_synthetic_node_on_way(
        self, residential_graph: RoadGraph, path_detailer: PathDetailer
    ) -> None:
        # Arrange
        node_id = SyntheticNodeId(name="current")
        residential_graph.add_node(
            node_id, Point(latitude=13.61971, longitude=123.18161)
        )
        residential_graph.add_edge(node_id, OsmNodeId(value=4))

        # Act
        points = path_detailer.get_detailed_path_coordinates(
            [node_id, OsmNodeId(value=4)]
        )

        # Assert
        assert [point.coordinates for point in points] == [
            (13.61971, 123.18161),
            *self.WAY_COORDINATES[2:],
        ]
