import pytest

from road_graph import FareCalculator, FareConfiguration


class TestFareCalculator:
    @pytest.mark.parametrize(
        ("distance_m", "expected_fare"),
        [
            pytest.param(0.0, 50.0, id="no distance"),
            pytest.param(500.0, 50.0, id="within base distance"),
            pytest.param(1000.0, 50.0, id="base distance"),
            pytest.param(3200.0, 83.0, id="beyond base distance"),
            pytest.param(1033.0, 50.0, id="rounded down"),
            pytest.param(1034.0, 51.0, id="rounded up"),
        ],
    )
    def test_calculate_fare(
        self, fare_calculator: FareCalculator, distance_m: float, expected_fare: float
    ) -> None:
        # Assert
        assert fare_calculator.calculate_fare(distance_m) == expected_fare

    def test_round_half_up(self) -> None:
        # Arrange
        fare_calculator = FareCalculator(
            FareConfiguration(base_fare=10, per_km_rate=1, base_km=0)
        )

        # Assert
        assert fare_calculator.calculate_fare(2500.0) == 13.0

    def test_minimum_fare(self) -> None:
        # Arrange
        fare_calculator = FareCalculator(
            FareConfiguration(base_fare=5, per_km_rate=1, base_km=1, minimum_fare=20)
        )

        # Assert
        assert fare_calculator.calculate_fare(3000.0) == 20.0
        assert fare_calculator.calculate_fare(30000.0) == 34.0

    def test_default_configuration(self) -> None:
        # Arrange
        fare_calculator = FareCalculator(FareConfiguration())

        # Assert
        assert fare_calculator.calculate_fare(3000.0) == 37.0
