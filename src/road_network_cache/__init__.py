from .road_network_cache import RoadNetworkCache, RoadNetworkCacheEntry

__all__ = ["RoadNetworkCache", "RoadNetworkCacheEntry"]
