"""Response cache adapters."""

from bahn_route.adapters.cache.cache_janitor import CacheJanitor
from bahn_route.adapters.cache.file_response_cache import FileResponseCache

__all__ = ["CacheJanitor", "FileResponseCache"]
