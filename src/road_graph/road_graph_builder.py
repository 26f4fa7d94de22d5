import logging
from itertools import pairwise
from typing import Iterable, Mapping

from geo_math import distance
from osm_data import OSMNode, OSMWay
from road_graph.node_id import OsmNodeId
from road_graph.road_graph import RoadGraph

logger = logging.getLogger(__name__)


class RoadGraphBuilder:
    """
    RoadGraphBuilder transforms OSM road nodes and ways into a directed RoadGraph.

    For each pair of consecutive way nodes an edge weighted with the travel time
    is added. The speed limit comes from the `maxspeed` tag of the way or from the
    default speed of its road type. One-way roads (`oneway=yes`, roundabouts and
    motorways) get a single edge in the direction of the way, `oneway=-1` roads
    get a single edge against it and all other roads get edges in both directions.

    Once all ways are processed, nodes which cannot be reached from the first node
    of the graph are removed, so every remaining node belongs to one network.
    """

    SPARSE_AVERAGE_DEGREE = 1.5

    @classmethod
    def build_graph(
        cls, nodes: Mapping[int, OSMNode], ways: Iterable[OSMWay]
    ) -> RoadGraph:
        graph = RoadGraph()

        for way in ways:
            cls._add_way(graph, nodes, way)

        cls._remove_isolated_nodes(graph)
        return graph

    @staticmethod
    def _add_way(graph: RoadGraph, nodes: Mapping[int, OSMNode], way: OSMWay) -> None:
        speed_limit = way.tags.speed_limit_kph

        for source_id, destination_id in pairwise(way.nodes):
            if (
                source_id == destination_id
                or source_id not in nodes
                or destination_id not in nodes
            ):
                continue

            source, destination = nodes[source_id], nodes[destination_id]
            source_node_id = OsmNodeId(value=source_id)
            destination_node_id = OsmNodeId(value=destination_id)

            for node_id, osm_node in (
                (source_node_id, source),
                (destination_node_id, destination),
            ):
                if node_id not in graph:
                    graph.add_node(node_id, osm_node.point)

            edge_distance = distance(source.point, destination.point)

            if not way.tags.is_reversed_oneway:
                graph.add_edge(
                    source_node_id,
                    destination_node_id,
                    edge_distance,
                    speed_limit,
                    way_id=way.id,
                )
            if way.tags.is_reversed_oneway or not way.tags.is_oneway:
                graph.add_edge(
                    destination_node_id,
                    source_node_id,
                    edge_distance,
                    speed_limit,
                    way_id=way.id,
                )

    @classmethod
    def _remove_isolated_nodes(cls, graph: RoadGraph) -> None:
        removed_nodes = graph.remove_unreachable_nodes()
        if removed_nodes:
            logger.warning(
                "Removed %d isolated nodes from the road graph", len(removed_nodes)
            )

        if graph and graph.average_degree() < cls.SPARSE_AVERAGE_DEGREE:
            logger.warning(
                "Road graph is sparse (average degree %.2f), "
                "path finding results may be poor",
                graph.average_degree(),
            )
