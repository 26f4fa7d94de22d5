from pydantic import BaseModel, ConfigDict, Field


class Point(BaseModel):
    """
    Geographic position in WGS84 degrees.
    Attributes:
        latitude (float): Latitude in decimal degrees.
        longitude (float): Longitude in decimal degrees.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)
