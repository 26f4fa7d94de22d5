from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class OsmNodeId(BaseModel):
    """
    ID of a graph node built from an OpenStreetMap node.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["osm"] = Field(default="osm")
    value: int

    def __str__(self) -> str:
        return f"osm/{self.value}"


class SyntheticNodeId(BaseModel):
    """
    ID of a node added to the graph by hand, e.g. the current location of a user.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["synthetic"] = Field(default="synthetic")
    name: str

    def __str__(self) -> str:
        return f"synthetic/{self.name}"


NodeId = Annotated[OsmNodeId | SyntheticNodeId, Field(discriminator="kind")]

CURRENT_LOCATION = SyntheticNodeId(name="current")
DESTINATION = SyntheticNodeId(name="destination")
