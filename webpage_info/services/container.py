from typing import Dict, Optional, Type, TypeVar

from webpage_info.core.config import HttpOptions

from .cache_service import CacheInterface, WebpageInfoCache
from .url_validator import SSRFURLValidator, URLValidatorInterface
from .web_fetcher import WebFetcher, WebFetcherInterface
from .webpage_service import WebpageInfoService

T = TypeVar('T')


class ServiceContainer:
    """Wires the SSRF gate, fetcher, cache and webpage service together"""

    def __init__(self, options: Optional[HttpOptions] = None):
        self._services: Dict[Type, object] = {}
        self._options = options if options is not None else HttpOptions.default()
        self._register_services()

    def _register_services(self) -> None:
        validator = SSRFURLValidator()
        fetcher = WebFetcher(validator)
        cache = WebpageInfoCache()

        self._services[HttpOptions] = self._options
        self._services[URLValidatorInterface] = validator
        self._services[WebFetcherInterface] = fetcher
        self._services[CacheInterface] = cache
        self._services[WebpageInfoService] = WebpageInfoService(fetcher, cache, self._options)

    def get_webpage_service(self) -> WebpageInfoService:
        return self._services[WebpageInfoService]  # type: ignore

    def get_service(self, interface: Type[T]) -> T:
        """Look up a registered service by its interface or class"""
        try:
            return self._services[interface]  # type: ignore
        except KeyError:
            raise ValueError(f"No service registered for {interface.__name__}") from None


container = ServiceContainer()
