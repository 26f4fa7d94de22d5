from enum import Enum
from typing import Any, Self

FALLBACK_SPEED_KPH = 30.0


class RoadType(Enum):
    UNKNOWN = "unknown"
    MOTORWAY = "motorway"
    MOTORWAY_LINK = "motorway_link"
    TRUNK = "trunk"
    TRUNK_LINK = "trunk_link"
    PRIMARY = "primary"
    PRIMARY_LINK = "primary_link"
    SECONDARY = "secondary"
    SECONDARY_LINK = "secondary_link"
    TERTIARY = "tertiary"
    TERTIARY_LINK = "tertiary_link"
    RESIDENTIAL = "residential"
    UNCLASSIFIED = "unclassified"
    SERVICE = "service"

    @classmethod
    def get_by_value_safe(cls, value: Any) -> Self:
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def routable(cls) -> list[Self]:
        return [road_type for road_type in cls if road_type.is_routable]

    @property
    def is_routable(self) -> bool:
        return self != RoadType.UNKNOWN

    @property
    def base_type(self) -> "RoadType":
        """
        Road classification with the `_link` suffix stripped, e.g. the base type
        of `primary_link` is `primary`.
        """

        return RoadType.get_by_value_safe(self.value.removesuffix("_link"))

    @property
    def is_motorway(self) -> bool:
        return self.base_type == RoadType.MOTORWAY

    @property
    def default_speed_kph(self) -> float:
        return _DEFAULT_SPEEDS_KPH.get(self.base_type, FALLBACK_SPEED_KPH)


_DEFAULT_SPEEDS_KPH: dict[RoadType, float] = {
    RoadType.MOTORWAY: 100.0,
    RoadType.TRUNK: 80.0,
    RoadType.PRIMARY: 60.0,
    RoadType.SECONDARY: 50.0,
    RoadType.TERTIARY: 40.0,
    RoadType.RESIDENTIAL: 30.0,
    RoadType.UNCLASSIFIED: 30.0,
    RoadType.SERVICE: 20.0,
}
