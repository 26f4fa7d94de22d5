import logging
import re
from functools import cached_property
from typing import ClassVar, Mapping, Self

import overpy
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from geo_math import Point
from osm_data.road_type import RoadType

logger = logging.getLogger(__name__)


class OSMNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    lat: float
    lon: float

    @property
    def point(self) -> Point:
        return Point(latitude=self.lat, longitude=self.lon)


class WayTags(BaseModel):
    """
    Tags of an OSM way relevant for routing. Tags which do not affect routing
    are kept in `other`.
    """

    _KNOWN_TAGS: ClassVar[frozenset[str]] = frozenset(
        {"highway", "oneway", "maxspeed", "junction", "access"}
    )
    _ONEWAY_VALUES: ClassVar[frozenset[str]] = frozenset({"yes", "true", "1"})
    _MAXSPEED_REGEX: ClassVar[re.Pattern[str]] = re.compile(
        r"^\s*(\d+(?:\.\d+)?)\s*(mph)?", re.IGNORECASE
    )
    _MPH_TO_KPH: ClassVar[float] = 1.609344

    model_config = ConfigDict(frozen=True)

    highway: RoadType
    oneway: str | None = None
    maxspeed: str | None = None
    junction: str | None = None
    access: str | None = None
    other: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_osm_tags(cls, tags: Mapping[str, str]) -> Self:
        return cls(
            highway=RoadType.get_by_value_safe(tags.get("highway")),
            oneway=tags.get("oneway"),
            maxspeed=tags.get("maxspeed"),
            junction=tags.get("junction"),
            access=tags.get("access"),
            other={
                key: value
                for key, value in tags.items()
                if key not in cls._KNOWN_TAGS
            },
        )

    @property
    def is_oneway(self) -> bool:
        return (
            self.oneway in self._ONEWAY_VALUES
            or self.junction == "roundabout"
            or self.highway.is_motorway
        )

    @property
    def is_reversed_oneway(self) -> bool:
        return self.oneway == "-1"

    @property
    def speed_limit_kph(self) -> float:
        """
        Speed from the `maxspeed` tag when it starts with a positive number
        (values in mph are converted), otherwise the default speed of the road type.
        """

        if self.maxspeed and (match := self._MAXSPEED_REGEX.match(self.maxspeed)):
            speed = float(match.group(1))
            if match.group(2):
                speed *= self._MPH_TO_KPH
            if speed > 0:
                return speed

        return self.highway.default_speed_kph


class OSMWay(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    nodes: list[int]
    tags: WayTags

    @field_validator("nodes", mode="after")
    @classmethod
    def validate_nodes(cls, value: list[int]) -> list[int]:
        if len(value) < 2:
            raise ValueError("way must reference at least two nodes")
        return value

    @field_validator("tags", mode="after")
    @classmethod
    def validate_highway(cls, value: WayTags) -> WayTags:
        if not value.highway.is_routable:
            raise ValueError("way has no recognized highway tag")
        return value


class OSMData(BaseModel):
    """
    Working set of OSM road nodes and ways returned by a single road network query.
    Ways which are not routable (unknown `highway` tag, less than two nodes or
    references to nodes missing from the response) are excluded on ingestion.
    """

    nodes: dict[int, OSMNode] = Field(default_factory=dict)
    ways: dict[int, OSMWay] = Field(default_factory=dict)

    @classmethod
    def from_overpass_result(cls, result: overpy.Result) -> Self:
        nodes = {
            node.id: OSMNode(id=node.id, lat=float(node.lat), lon=float(node.lon))
            for node in result.get_nodes()
        }

        ways: dict[int, OSMWay] = {}
        for way in result.get_ways():
            try:
                ways[way.id] = OSMWay(
                    id=way.id,
                    nodes=[node.id for node in way.get_nodes()],
                    tags=WayTags.from_osm_tags(way.tags),
                )
            except (overpy.exception.DataIncomplete, ValidationError):
                logger.debug("Skipping way %s, it is not a routable road", way.id)

        return cls(nodes=nodes, ways=ways)

    @cached_property
    def way_node_ids(self) -> list[int]:
        """
        IDs of nodes referenced by at least one way, in order of first appearance.
        """

        return list(
            dict.fromkeys(
                node_id
                for way in self.ways.values()
                for node_id in way.nodes
                if node_id in self.nodes
            )
        )

    def way_points(self, way: OSMWay) -> list[Point]:
        return [
            self.nodes[node_id].point for node_id in way.nodes if node_id in self.nodes
        ]
