import os
import threading
from datetime import datetime, timedelta

from pydantic import BaseModel, Field

from geo_math import Point
from osm_data import OSMData


class RoadNetworkCacheEntry(BaseModel):
    data: OSMData
    timestamp: datetime = Field(default_factory=datetime.now)


class RoadNetworkCache:
    """
    In-memory cache of road network query results keyed by query parameters.
    Entries older than `ttl_timedelta` are dropped lazily when read.
    """

    DEFAULT_TTL = timedelta(
        hours=float(os.environ.get("ROAD_NETWORK_CACHE_TTL_HOURS", "24"))
    )

    def __init__(self, ttl_timedelta: timedelta = DEFAULT_TTL) -> None:
        self.ttl_timedelta = ttl_timedelta
        self._entries: dict[str, RoadNetworkCacheEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def get_cache_key(center: Point, radius_m: float) -> str:
        return f"{center.latitude},{center.longitude},{float(radius_m)}"

    def is_fresh(self, entry: RoadNetworkCacheEntry) -> bool:
        return datetime.now() - entry.timestamp < self.ttl_timedelta

    def get(self, center: Point, radius_m: float) -> OSMData | None:
        cache_key = self.get_cache_key(center, radius_m)

        with self._lock:
            if (entry := self._entries.get(cache_key)) is None:
                return None

            if not self.is_fresh(entry):
                del self._entries[cache_key]
                return None

            return entry.data

    def store(self, center: Point, radius_m: float, data: OSMData) -> OSMData:
        with self._lock:
            self._entries[self.get_cache_key(center, radius_m)] = (
                RoadNetworkCacheEntry(data=data, timestamp=datetime.now())
            )

        return data

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
