import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from road_graph import FareConfiguration, Heuristic
from router import RouterConfiguration


class TestRouterConfiguration:
    def test_from_path(self, tmp_path: Path) -> None:
        # Arrange
        path = tmp_path / "router_configuration.json"
        path.write_text(
            '{"search_radius_m": 250, "heuristic": "travel_time_lower_bound", '
            '"fare": {"base_fare": 40, "per_km_rate": 13.5}}',
            encoding="utf-8",
        )

        # Act
        configuration = RouterConfiguration.from_path(path)

        # Assert
        assert configuration.search_radius_m == 250.0
        assert configuration.heuristic == Heuristic.TRAVEL_TIME_LOWER_BOUND
        assert configuration.fare == FareConfiguration(base_fare=40, per_km_rate=13.5)
        assert configuration.max_retries == 3

    def test_from_path_invalid_json(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        # Arrange
        path = tmp_path / "router_configuration.json"
        path.write_text('{"max_retries": 0}', encoding="utf-8")

        # Act
        with pytest.raises(ValidationError), caplog.at_level(
            logging.ERROR, "router.router_configuration"
        ):
            RouterConfiguration.from_path(path)

        # Assert
        assert f"Invalid configuration file: {path}" in caplog.text

    def test_get_default(self, tmp_path: Path) -> None:
        # Arrange
        path = tmp_path / "router_configuration.json"
        path.write_text('{"average_speed_kph": 25}', encoding="utf-8")

        # Act
        with patch.object(RouterConfiguration, "CONFIGURATION_PATH", path):
            configuration = RouterConfiguration.get_default()

        # Assert
        assert configuration.average_speed_kph == 25.0

    def test_get_default_without_file(self, tmp_path: Path) -> None:
        # Act
        with patch.object(
            RouterConfiguration, "CONFIGURATION_PATH", tmp_path / "missing.json"
        ):
            configuration = RouterConfiguration.get_default()

        # Assert
        assert configuration == RouterConfiguration()
