import logging
from typing import Any, Dict, Optional

from webpage_info.core.config import HttpOptions
from webpage_info.core.models import HtmlInfo, WebpageInfo
from webpage_info.services.cache_service import CacheInterface
from webpage_info.services.exceptions import URLValidationError
from webpage_info.services.web_fetcher import WebFetcherInterface

logger = logging.getLogger(__name__)


class WebpageInfoService:
    """
    Fetch-and-extract service used by the HTTP API, with caching
    """

    def __init__(
        self,
        web_fetcher: WebFetcherInterface,
        cache: CacheInterface,
        options: Optional[HttpOptions] = None
    ):
        self.web_fetcher = web_fetcher
        self.cache = cache
        self.options = options

    async def get_webpage_info(self, url: str) -> Dict[str, Any]:
        """
        Get webpage information for a URL, served from cache when possible.

        Args:
            url: The URL to fetch

        Returns:
            WebpageInfo as a dictionary plus a ``cached`` flag

        Raises:
            URLValidationError: If the URL is empty
            ServiceError: If fetching or the content-type check fails
        """
        if not url or not url.strip():
            logger.warning("Empty or whitespace-only URL parameter provided")
            raise URLValidationError("URL parameter is required")

        url = url.strip()
        logger.info(f"Getting webpage info for URL: {url}")

        cached = self.cache.get(url)
        if cached is not None:
            logger.info(f"Webpage info retrieved from cache for URL: {url}")
            result = cached.to_dict()
            result["cached"] = True
            return result

        options = self.options if self.options is not None else HttpOptions.default()
        info = await WebpageInfo.fetch_with_options(url, options, web_fetcher=self.web_fetcher)

        self.cache.set(url, info)
        logger.info(f"Webpage info extracted and cached for URL: {url}")

        result = info.to_dict()
        result["cached"] = False
        return result

    def parse_html(self, html: str, base_url: Optional[str] = None) -> Dict[str, Any]:
        """Extract metadata from HTML supplied by the caller"""
        logger.info(f"Parsing {len(html)} characters of HTML (base URL: {base_url})")
        return HtmlInfo.from_string(html, base_url).to_dict()
