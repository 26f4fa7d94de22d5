import logging
import time

import httpx
import overpy

from geo_math import Point
from osm_data import RoadType
from overpass_client.exceptions import NetworkFetchError

logger = logging.getLogger(__name__)


class OverpassClient:
    DEFAULT_URL = "https://overpass-api.de/api/interpreter"
    CONNECT_TIMEOUT_SECONDS = 10.0
    READ_TIMEOUT_MARGIN_SECONDS = 5.0

    _ROAD_NETWORK_QUERY_TEMPLATE = """
    [out:json][timeout:{timeout}];
    (
        way["highway"~"^({road_types})$"](around:{radius},{lat},{lon});
    );
    (._; >;);
    out body;
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        *,
        timeout_seconds: int = 25,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
    ):
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1.")

        self._url = url
        self._overpass = overpy.Overpass(url=url)
        self._timeout_seconds = timeout_seconds
        self._http_timeout = httpx.Timeout(
            timeout_seconds + self.READ_TIMEOUT_MARGIN_SECONDS,
            connect=self.CONNECT_TIMEOUT_SECONDS,
        )
        self._max_retries = max_retries
        self._retry_delay_seconds = retry_delay_seconds

    def get_road_network_query(self, center: Point, radius_m: float) -> str:
        return self._ROAD_NETWORK_QUERY_TEMPLATE.format(
            timeout=self._timeout_seconds,
            road_types="|".join(road_type.value for road_type in RoadType.routable()),
            radius=f"{radius_m:.0f}",
            lat=center.latitude,
            lon=center.longitude,
        )

    def _query(self, query: str) -> overpy.Result:
        """
        Sends the query with a client-side timeout slightly above the server-side
        one, so a stalled connection fails instead of blocking forever.
        """

        response = httpx.post(
            self._url, data={"data": query}, timeout=self._http_timeout
        )
        response.raise_for_status()
        return self._overpass.parse_json(response.content)

    def get_road_network(self, center: Point, radius_m: float) -> overpy.Result:
        """
        Queries roads within `radius_m` meters of `center` together with their nodes.
        Failed or timed out requests are retried with a linearly increasing delay.
        When all attempts fail, a NetworkFetchError is raised.
        """

        query = self.get_road_network_query(center, radius_m)

        last_error: BaseException | None = None
        for attempt in range(1, self._max_retries + 1):
            try:
                return self._query(query)
            except (httpx.HTTPError, overpy.exception.OverPyException) as exc:
                last_error = exc
                logger.warning(
                    "Overpass request failed (attempt %d/%d): %s",
                    attempt,
                    self._max_retries,
                    exc,
                )

            if attempt < self._max_retries:
                time.sleep(attempt * self._retry_delay_seconds)

        raise NetworkFetchError(center, radius_m, self._max_retries) from last_error
