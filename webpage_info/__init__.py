"""
Extract metadata from web pages: title, description, language, canonical and
feed URLs, meta tags, OpenGraph, Schema.org JSON-LD, links and body text.

Parsing a string::

    from webpage_info import HtmlInfo

    info = HtmlInfo.from_string("<html><head><title>Hello</title></head></html>")
    assert info.title == "Hello"

Fetching a page (SSRF-guarded, body capped at 10 MiB by default)::

    from webpage_info import HttpOptions, WebpageInfo

    info = await WebpageInfo.fetch("https://example.org")
    options = HttpOptions(timeout=60.0, user_agent="MyBot/1.0")
    info = await WebpageInfo.fetch_with_options("https://example.org", options)
"""

from webpage_info.core.config import HttpOptions, Settings, settings
from webpage_info.core.models import HtmlInfo, HttpInfo, Link, WebpageInfo
from webpage_info.core.opengraph import Opengraph, OpengraphMedia
from webpage_info.core.schema_org import SchemaOrg
from webpage_info.services.exceptions import (
    FileReadError,
    HTTPFetchError,
    ParseError,
    SSRFBlockedError,
    ServiceError,
    UnsupportedContentTypeError,
    URLParseError,
    URLValidationError,
)
from webpage_info.version import __version__

__all__ = [
    "HtmlInfo",
    "HttpInfo",
    "HttpOptions",
    "Link",
    "Opengraph",
    "OpengraphMedia",
    "SchemaOrg",
    "Settings",
    "WebpageInfo",
    "settings",
    "FileReadError",
    "HTTPFetchError",
    "ParseError",
    "SSRFBlockedError",
    "ServiceError",
    "UnsupportedContentTypeError",
    "URLParseError",
    "URLValidationError",
    "__version__",
]
