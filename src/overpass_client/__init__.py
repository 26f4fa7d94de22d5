from .exceptions import NetworkFetchError
from .overpass_client import OverpassClient

__all__ = ["OverpassClient", "NetworkFetchError"]
