from typing import Any


class InvalidNodeError(ValueError):
    """
    Node with provided ID is not present in the road graph.
    """

    def __init__(self, node_id: Any) -> None:
        super().__init__(node_id)

        self.node_id = node_id

    def __str__(self) -> str:
        return f"Node {self.node_id} not found in the road graph."


class PathIntegrityError(RuntimeError):
    """
    Reconstructed path contains two consecutive nodes which are not connected
    by an edge of the road graph.
    """

    def __init__(self, source_node_id: Any, destination_node_id: Any) -> None:
        super().__init__(source_node_id, destination_node_id)

        self.source_node_id = source_node_id
        self.destination_node_id = destination_node_id

    def __str__(self) -> str:
        return (
            f"Path is broken between nodes {self.source_node_id} "
            f"and {self.destination_node_id}: no such edge in the road graph."
        )
