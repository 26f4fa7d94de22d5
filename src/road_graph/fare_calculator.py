from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, Field


class FareConfiguration(BaseModel):
    """
    Tariff used to price a trip. `base_fare` covers the first `base_km` kilometers,
    the remaining distance is charged `per_km_rate` per kilometer.
    The final fare is rounded to a whole amount and is never below `minimum_fare`.
    """

    model_config = ConfigDict(frozen=True)

    base_fare: float = Field(default=15.0, ge=0)
    per_km_rate: float = Field(default=11.0, ge=0)
    base_km: float = Field(default=1.0, ge=0)
    minimum_fare: float = Field(default=0.0, ge=0)


class FareCalculator:
    def __init__(self, fare_configuration: FareConfiguration):
        self._fare_configuration = fare_configuration

    @property
    def fare_configuration(self) -> FareConfiguration:
        return self._fare_configuration

    def calculate_fare(self, distance_m: float) -> float:
        configuration = self._fare_configuration
        distance_km = distance_m / 1000

        fare = configuration.base_fare
        if distance_km > configuration.base_km:
            fare += (distance_km - configuration.base_km) * configuration.per_km_rate

        rounded_fare = Decimal(str(fare)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return max(float(rounded_fare), configuration.minimum_fare)
