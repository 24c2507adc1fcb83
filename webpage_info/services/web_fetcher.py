import asyncio
import logging
import re
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

import httpx

from webpage_info.core.config import HttpOptions
from webpage_info.core.models import HttpInfo
from webpage_info.services.exceptions import HTTPFetchError, URLParseError
from webpage_info.services.url_validator import URLValidatorInterface

logger = logging.getLogger(__name__)

# RFC 9110 token characters for header names
_HEADER_NAME_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
# Visible ASCII, space, tab and obs-text; no control characters
_HEADER_VALUE_RE = re.compile(r"[\t\x20-\x7e\x80-\xff]*")


def build_request_headers(options: HttpOptions) -> httpx.Headers:
    """Default headers for the client, skipping malformed extra headers"""
    headers = httpx.Headers({"User-Agent": options.user_agent})
    for name, value in options.headers:
        if not _HEADER_NAME_RE.fullmatch(name) or not _HEADER_VALUE_RE.fullmatch(value):
            logger.debug(f"Dropping malformed request header {name!r}")
            continue
        headers[name] = value
    return headers


class WebFetcherInterface(ABC):
    """Interface for fetching web content following the Dependency Inversion Principle"""

    @abstractmethod
    async def fetch(self, url: str, options: HttpOptions) -> HttpInfo:
        pass


class WebFetcher(WebFetcherInterface):
    """
    Fetches a URL with SSRF protection and a hard cap on the downloaded body
    """

    def __init__(
        self,
        url_validator: URLValidatorInterface,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.url_validator = url_validator
        self.transport = transport

    async def fetch(self, url: str, options: Optional[HttpOptions] = None) -> HttpInfo:
        """
        Perform one GET request, following redirects when enabled.

        Args:
            url: The URL to fetch
            options: Request options, defaults when omitted

        Returns:
            HttpInfo with the final URL, status, headers and the decoded body

        Raises:
            URLValidationError: If the URL is malformed or uses an unsupported scheme
            SSRFBlockedError: If the URL or a redirect target is internal
            URLParseError: If the transport cannot parse the URL
            HTTPFetchError: On transport failure or when the timeout expires
        """
        if options is None:
            options = HttpOptions.default()

        logger.info(f"Fetching URL: {url}")

        if options.block_private_ips:
            await self.url_validator.validate(url)

        try:
            httpx.URL(url)
        except httpx.InvalidURL as e:
            raise URLParseError(str(e)) from e

        try:
            http_info = await asyncio.wait_for(self._fetch(url, options), timeout=options.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Request to {url} timed out after {options.timeout} seconds")
            raise HTTPFetchError(f"request timed out after {options.timeout} seconds")

        logger.info(f"Fetched {http_info.url} with status {http_info.status_code}")
        return http_info

    async def _fetch(self, url: str, options: HttpOptions) -> HttpInfo:
        try:
            async with self._build_client(options) as client:
                async with client.stream("GET", url) as response:
                    return await self._response_to_info(response, options.max_body_size)
        except httpx.InvalidURL as e:
            raise URLParseError(str(e)) from e
        except httpx.HTTPError as e:
            logger.error(f"Request error occurred while fetching URL {url}: {str(e)}")
            raise HTTPFetchError(str(e) or type(e).__name__) from e

    def _build_client(self, options: HttpOptions) -> httpx.AsyncClient:
        event_hooks = {}
        if options.block_private_ips:
            event_hooks["request"] = [self._redirect_guard()]

        return httpx.AsyncClient(
            headers=build_request_headers(options),
            verify=not options.allow_insecure,
            follow_redirects=options.follow_redirects,
            max_redirects=options.max_redirects,
            timeout=httpx.Timeout(options.timeout),
            event_hooks=event_hooks,
            transport=self.transport,
        )

    def _redirect_guard(self) -> Callable:
        """Request hook re-validating every redirect target"""
        requests_sent = 0

        async def validate_redirect(request: httpx.Request) -> None:
            nonlocal requests_sent
            requests_sent += 1
            # The first request already went through the gate
            if requests_sent > 1:
                await self.url_validator.validate(str(request.url))

        return validate_redirect

    async def _response_to_info(self, response: httpx.Response, max_body_size: int) -> HttpInfo:
        headers, content_type = self._read_headers(response)

        body = bytearray()
        async for chunk in response.aiter_bytes():
            remaining = max_body_size - len(body)
            if remaining <= 0:
                break
            body.extend(chunk[:remaining])
            if len(chunk) > remaining:
                logger.info(f"Response body of {response.url} truncated at {max_body_size} bytes")
                break

        return HttpInfo(
            url=str(response.url),
            status_code=response.status_code,
            headers=headers,
            content_type=content_type,
            redirect_count=len(response.history),
            body=body.decode("utf-8", errors="replace"),
        )

    @staticmethod
    def _read_headers(response: httpx.Response) -> Tuple[List[Tuple[str, str]], Optional[str]]:
        headers = []
        content_type = None
        for raw_name, raw_value in response.headers.raw:
            try:
                value = raw_value.decode("utf-8")
            except UnicodeDecodeError:
                continue
            name = raw_name.decode("latin-1")
            headers.append((name, value))
            if content_type is None and name.lower() == "content-type":
                content_type = value.split(";", 1)[0].strip()
        return headers, content_type
