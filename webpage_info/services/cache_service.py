import logging
from abc import ABC, abstractmethod
from typing import Optional

from cachetools import TTLCache

from webpage_info.core.config import settings
from webpage_info.core.models import WebpageInfo

logger = logging.getLogger(__name__)


class CacheInterface(ABC):
    """Interface for caching following the Dependency Inversion Principle"""

    @abstractmethod
    def get(self, key: str) -> Optional[WebpageInfo]:
        """
        Get a webpage from cache.

        Args:
            key: The cache key (the requested URL)

        Returns:
            The cached WebpageInfo if found, None otherwise
        """
        pass

    @abstractmethod
    def set(self, key: str, value: WebpageInfo) -> None:
        """
        Set a webpage in cache.

        Args:
            key: The cache key (the requested URL)
            value: The WebpageInfo to cache
        """
        pass


class WebpageInfoCache(CacheInterface):
    """
    TTL cache of fetched webpages with configurable size and TTL.
    """

    def __init__(self, maxsize: int = None, ttl: int = None):
        """
        Initialize the cache.

        Args:
            maxsize: Maximum number of items to cache (uses config default if None)
            ttl: Time to live in seconds (uses config default if None)
        """
        if maxsize is None:
            maxsize = settings.cache_maxsize
        if ttl is None:
            ttl = settings.cache_ttl_seconds

        self.cache: TTLCache[str, WebpageInfo] = TTLCache(maxsize=maxsize, ttl=ttl)

    def get(self, key: str) -> Optional[WebpageInfo]:
        logger.debug(f"Checking cache for key: {key}")
        cached_item = self.cache.get(key)
        if cached_item is not None:
            logger.debug(f"Cache hit for key: {key}")
        else:
            logger.debug(f"Cache miss for key: {key}")
        return cached_item

    def set(self, key: str, value: WebpageInfo) -> None:
        logger.debug(f"Storing webpage in cache for key: {key}")
        self.cache[key] = value
