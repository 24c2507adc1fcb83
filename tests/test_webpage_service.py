from unittest.mock import AsyncMock, MagicMock

import pytest
from webpage_info.core.config import HttpOptions
from webpage_info.core.models import HtmlInfo, HttpInfo, WebpageInfo
from webpage_info.services.cache_service import CacheInterface
from webpage_info.services.exceptions import SSRFBlockedError, URLValidationError
from webpage_info.services.web_fetcher import WebFetcherInterface
from webpage_info.services.webpage_service import WebpageInfoService


class TestWebpageInfoService:
    """Unit tests for WebpageInfoService"""

    def setup_method(self):
        """Set up test fixtures before each test method."""
        self.mock_web_fetcher = AsyncMock(spec=WebFetcherInterface)
        self.mock_cache = MagicMock(spec=CacheInterface)
        self.options = HttpOptions(block_private_ips=False)
        self.service = WebpageInfoService(
            web_fetcher=self.mock_web_fetcher,
            cache=self.mock_cache,
            options=self.options
        )

    @pytest.mark.asyncio
    async def test_get_webpage_info_with_valid_url(self):
        """Test a cache miss fetches, parses and stores the result."""
        # Arrange
        test_url = "https://example.com"
        self.mock_cache.get.return_value = None  # No cache hit
        self.mock_web_fetcher.fetch.return_value = HttpInfo(
            url="https://example.com/",
            status_code=200,
            content_type="text/html",
            body="<html><head><title>Test</title><meta name='description' content='A test page'></head></html>",
        )

        # Act
        result = await self.service.get_webpage_info(test_url)

        # Assert
        assert result["html"]["title"] == "Test"
        assert result["html"]["description"] == "A test page"
        assert result["http"]["url"] == "https://example.com/"
        assert result["cached"] is False

        # Verify interactions
        self.mock_cache.get.assert_called_once_with(test_url)
        self.mock_web_fetcher.fetch.assert_awaited_once_with(test_url, self.options)
        stored_url, stored_info = self.mock_cache.set.call_args.args
        assert stored_url == test_url
        assert stored_info.html.title == "Test"

    @pytest.mark.asyncio
    async def test_get_webpage_info_with_cached_result(self):
        """Test that a cache hit skips fetching."""
        # Arrange
        test_url = "https://example.com"
        self.mock_cache.get.return_value = WebpageInfo(
            http=HttpInfo(url=test_url, status_code=200),
            html=HtmlInfo(title="Cached"),
        )

        # Act
        result = await self.service.get_webpage_info(test_url)

        # Assert
        assert result["html"]["title"] == "Cached"
        assert result["cached"] is True
        self.mock_web_fetcher.fetch.assert_not_called()
        self.mock_cache.set.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["", "   "])
    async def test_get_webpage_info_with_empty_url(self, url):
        """Test that an empty URL raises URLValidationError."""
        with pytest.raises(URLValidationError) as exc_info:
            await self.service.get_webpage_info(url)

        assert exc_info.value.reason == "URL parameter is required"
        self.mock_cache.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_webpage_info_strips_url(self):
        """Test that surrounding whitespace is removed before lookup."""
        self.mock_cache.get.return_value = WebpageInfo(
            http=HttpInfo(url="https://example.com", status_code=200),
            html=HtmlInfo(),
        )

        await self.service.get_webpage_info("  https://example.com  ")

        self.mock_cache.get.assert_called_once_with("https://example.com")

    @pytest.mark.asyncio
    async def test_errors_are_not_cached(self):
        """Test that fetch failures propagate and nothing is stored."""
        self.mock_cache.get.return_value = None
        self.mock_web_fetcher.fetch.side_effect = SSRFBlockedError("blocked request to internal host: localhost")

        with pytest.raises(SSRFBlockedError):
            await self.service.get_webpage_info("http://localhost")

        self.mock_cache.set.assert_not_called()

    def test_parse_html(self):
        """Test parsing caller-supplied HTML."""
        result = self.service.parse_html('<title>Doc</title><a href="next">Next</a>', "https://example.com/a/")

        assert result["title"] == "Doc"
        assert result["links"] == [{"url": "https://example.com/a/next", "text": "Next"}]
        self.mock_web_fetcher.fetch.assert_not_called()
