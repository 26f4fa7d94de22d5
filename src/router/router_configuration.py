import logging
import os
from pathlib import Path
from typing import ClassVar, Self

from pydantic import BaseModel, Field, ValidationError

from overpass_client import OverpassClient
from road_graph import FareConfiguration, Heuristic

logger = logging.getLogger(__name__)


class RouterConfiguration(BaseModel):
    CONFIGURATION_PATH: ClassVar[Path] = Path(
        os.environ.get("ROUTER_CONFIGURATION_PATH", "./router_configuration.json")
    )

    overpass_url: str = OverpassClient.DEFAULT_URL
    overpass_timeout_seconds: int = Field(default=25, gt=0)
    max_retries: int = Field(default=3, ge=1)
    retry_delay_seconds: float = Field(default=1.0, ge=0)
    cache_ttl_hours: float = Field(default=24.0, gt=0)
    search_radius_m: float = Field(default=500.0, gt=0)
    fetch_margin_m: float = Field(default=1000.0, ge=0)
    average_speed_kph: float = Field(default=40.0, gt=0)
    heuristic: Heuristic = Heuristic.MANHATTAN_DEGREES
    fare: FareConfiguration = Field(default_factory=FareConfiguration)

    @classmethod
    def from_path(cls, path: Path) -> Self:
        try:
            return cls.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as exc:
            logger.exception(f"Invalid configuration file: {path}", exc_info=exc)
            raise

    @classmethod
    def get_default(cls) -> Self:
        """
        Returns configuration from the file at `CONFIGURATION_PATH`,
        or the built-in defaults when there is no such file.
        """

        if cls.CONFIGURATION_PATH.is_file():
            return cls.from_path(cls.CONFIGURATION_PATH)

        return cls()
