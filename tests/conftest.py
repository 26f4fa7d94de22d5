from typing import Any

import httpx
import overpy
import pytest

from geo_math import Point
from osm_data import OSMData
from overpass_client import OverpassClient
from road_graph import FareCalculator, FareConfiguration, RoadGraph, RoadGraphBuilder
from road_network_cache import RoadNetworkCache
from router import Router, RouterConfiguration

ORIGIN = Point(latitude=13.6195, longitude=123.1814)
DESTINATION = Point(latitude=13.6200, longitude=123.1820)


def osm_node(node_id: int, lat: float, lon: float) -> dict[str, Any]:
    return {"type": "node", "id": node_id, "lat": lat, "lon": lon}


def osm_way(way_id: int, node_ids: list[int], **tags: str) -> dict[str, Any]:
    return {"type": "way", "id": way_id, "nodes": node_ids, "tags": tags}


def overpass_result(elements: list[dict[str, Any]]) -> overpy.Result:
    return overpy.Result.from_json({"elements": elements})


def overpass_response(elements: list[dict[str, Any]]) -> httpx.Response:
    return httpx.Response(
        200,
        json={"elements": elements},
        request=httpx.Request("POST", OverpassClient.DEFAULT_URL),
    )


def build_graph(elements: list[dict[str, Any]]) -> tuple[RoadGraph, OSMData]:
    osm_data = OSMData.from_overpass_result(overpass_result(elements))
    graph = RoadGraphBuilder.build_graph(osm_data.nodes, osm_data.ways.values())
    return graph, osm_data


@pytest.fixture
def residential_way_elements() -> list[dict[str, Any]]:
    return [
        osm_node(1, 13.6195, 123.1814),
        osm_node(2, 13.6197, 123.1816),
        osm_node(3, 13.6199, 123.1818),
        osm_node(4, 13.6200, 123.1820),
        osm_way(100, [1, 2, 3, 4], highway="residential", name="Rizal Street"),
    ]


@pytest.fixture
def residential_overpass_result(
    residential_way_elements: list[dict[str, Any]],
) -> overpy.Result:
    return overpass_result(residential_way_elements)


@pytest.fixture
def nodes_without_ways_overpass_result() -> overpy.Result:
    return overpass_result(
        [
            osm_node(1, 13.6195, 123.1814),
            osm_node(2, 13.6197, 123.1816),
        ]
    )


@pytest.fixture
def residential_overpass_response(
    residential_way_elements: list[dict[str, Any]],
) -> httpx.Response:
    return overpass_response(residential_way_elements)


@pytest.fixture
def nodes_without_ways_overpass_response() -> httpx.Response:
    return overpass_response(
        [
            osm_node(1, 13.6195, 123.1814),
            osm_node(2, 13.6197, 123.1816),
        ]
    )


@pytest.fixture
def residential_osm_data(residential_overpass_result: overpy.Result) -> OSMData:
    return OSMData.from_overpass_result(residential_overpass_result)


@pytest.fixture
def residential_graph(residential_osm_data: OSMData) -> RoadGraph:
    return RoadGraphBuilder.build_graph(
        residential_osm_data.nodes, residential_osm_data.ways.values()
    )


@pytest.fixture
def fare_calculator() -> FareCalculator:
    return FareCalculator(
        FareConfiguration(base_fare=50, per_km_rate=15, base_km=1, minimum_fare=20)
    )


@pytest.fixture
def router_configuration() -> RouterConfiguration:
    return RouterConfiguration(
        retry_delay_seconds=0,
        fare=FareConfiguration(
            base_fare=50, per_km_rate=15, base_km=1, minimum_fare=20
        ),
    )


@pytest.fixture
def router(router_configuration: RouterConfiguration) -> Router:
    return Router(router_configuration, cache=RoadNetworkCache())
