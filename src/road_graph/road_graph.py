from typing import Iterator

import networkx as nx

from geo_math import Point, bearing, distance
from road_graph.exceptions import InvalidNodeError
from road_graph.node_id import NodeId


class RoadGraph:
    """
    Directed, weighted road graph backed by a NetworkX DiGraph.

    Nodes are identified by `NodeId` and carry their geographic position in the
    `point` attribute. Edges carry:
    - weight: travel time in minutes when the speed limit is known,
      otherwise the distance in meters,
    - distance: length of the edge in meters,
    - azimuth: forward azimuth from source to destination in degrees,
    - max_speed: speed limit in km/h or None,
    - way_id: ID of the OSM way the edge was built from or None.
    """

    def __init__(self, graph: "nx.DiGraph[NodeId] | None" = None):
        self._graph: "nx.DiGraph[NodeId]" = (
            graph if graph is not None else nx.DiGraph()
        )

    @property
    def nx_graph(self) -> "nx.DiGraph[NodeId]":
        return self._graph

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self._graph.nodes)

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def point(self, node_id: NodeId) -> Point:
        if node_id not in self._graph:
            raise InvalidNodeError(node_id)
        return self._graph.nodes[node_id]["point"]

    def neighbors(self, node_id: NodeId) -> dict[NodeId, float]:
        if node_id not in self._graph:
            raise InvalidNodeError(node_id)
        return {
            neighbor: data["weight"] for neighbor, data in self._graph[node_id].items()
        }

    def connection_count(self, node_id: NodeId) -> int:
        return self._graph.out_degree(node_id) if node_id in self._graph else 0

    def has_edge(self, source: NodeId, destination: NodeId) -> bool:
        return self._graph.has_edge(source, destination)

    def weight(self, source: NodeId, destination: NodeId) -> float:
        return self._graph[source][destination]["weight"]

    def max_speed(self) -> float | None:
        return max(
            (
                speed
                for _, _, speed in self._graph.edges.data("max_speed")
                if speed is not None
            ),
            default=None,
        )

    def add_node(self, node_id: NodeId, point: Point) -> None:
        """
        Adds a node to the graph. An existing node with the same ID is replaced
        together with all of its edges.
        """

        if node_id in self._graph:
            self._graph.remove_node(node_id)
        self._graph.add_node(node_id, point=point)

    def add_edge(
        self,
        source: NodeId,
        destination: NodeId,
        distance_m: float | None = None,
        speed_limit_kph: float | None = None,
        *,
        way_id: int | None = None,
    ) -> float:
        """
        Adds a directed edge and returns its weight. Without `distance_m` the
        great-circle distance between both nodes is used. With `speed_limit_kph`
        the weight is the travel time in minutes, otherwise it's the distance in meters.
        """

        source_point = self.point(source)
        destination_point = self.point(destination)

        if distance_m is None:
            distance_m = distance(source_point, destination_point)

        weight = (
            (distance_m / 1000) / (speed_limit_kph / 60)
            if speed_limit_kph
            else distance_m
        )

        self._graph.add_edge(
            source,
            destination,
            weight=weight,
            distance=distance_m,
            azimuth=bearing(source_point, destination_point),
            max_speed=speed_limit_kph or None,
            way_id=way_id,
        )
        return weight

    def remove_unreachable_nodes(self, start: NodeId | None = None) -> set[NodeId]:
        """
        Removes all nodes which cannot be reached by a breadth-first search along
        outgoing edges from `start` (by default the first node added to the graph).
        Returns the removed nodes.
        """

        if not self._graph:
            return set()

        if start is None:
            start = next(iter(self._graph.nodes))

        reachable = set(nx.bfs_tree(self._graph, start).nodes)
        unreachable = set(self._graph.nodes) - reachable
        self._graph.remove_nodes_from(unreachable)

        return unreachable

    def average_degree(self) -> float:
        """
        Average number of undirected connections per node, counting a pair of
        opposite edges as a single connection.
        """

        if not self._graph:
            return 0.0
        return self.edge_count / 2 / len(self)
