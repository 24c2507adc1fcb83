import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from webpage_info.core.opengraph import Opengraph
from webpage_info.core.schema_org import SchemaOrg

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


@dataclass
class Link:
    """An ``<a href>`` found in the document"""
    # Absolute when a base URL was given and the join succeeded
    url: str
    text: str
    rel: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"url": self.url, "text": self.text}
        if self.rel is not None:
            result["rel"] = self.rel
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Link":
        return cls(url=data["url"], text=data["text"], rel=data.get("rel"))


@dataclass
class HtmlInfo:
    """
    Metadata extracted from one HTML document.

    Optional scalar fields are ``None`` when the source element is missing or
    empty after trimming; they are never empty strings.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    canonical_url: Optional[str] = None
    feed_url: Optional[str] = None
    language: Optional[str] = None
    text_content: str = ""
    meta: Dict[str, str] = field(default_factory=dict)
    opengraph: Opengraph = field(default_factory=Opengraph)
    schema_org: List[SchemaOrg] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)

    @classmethod
    def from_string(cls, html: str, base_url: Optional[str] = None) -> "HtmlInfo":
        """
        Parse an HTML string.

        Args:
            html: HTML content to parse
            base_url: Base URL for resolving relative links, ignored when unparsable

        Returns:
            The extracted HtmlInfo
        """
        from webpage_info.services.html_parser import HTMLParser

        return HTMLParser(html, base_url).extract()

    @classmethod
    def from_file(cls, path: PathLike, base_url: Optional[str] = None) -> "HtmlInfo":
        """
        Parse a UTF-8 encoded HTML file.

        Raises:
            FileReadError: If the file cannot be read or decoded
        """
        from webpage_info.services.exceptions import FileReadError

        try:
            with open(path, "r", encoding="utf-8") as f:
                html = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read HTML file {path}: {str(e)}")
            raise FileReadError(str(e)) from e

        return cls.from_string(html, base_url)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "title": self.title,
            "description": self.description,
            "canonical_url": self.canonical_url,
            "feed_url": self.feed_url,
            "language": self.language,
            "text_content": self.text_content,
            "meta": dict(self.meta),
            "opengraph": self.opengraph.to_dict(),
            "schema_org": [item.to_dict() for item in self.schema_org],
            "links": [link.to_dict() for link in self.links],
        }
        return {key: value for key, value in result.items() if value is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HtmlInfo":
        return cls(
            title=data.get("title"),
            description=data.get("description"),
            canonical_url=data.get("canonical_url"),
            feed_url=data.get("feed_url"),
            language=data.get("language"),
            text_content=data.get("text_content", ""),
            meta=dict(data.get("meta") or {}),
            opengraph=Opengraph.from_dict(data.get("opengraph") or {}),
            schema_org=[SchemaOrg.from_dict(item) for item in data.get("schema_org") or []],
            links=[Link.from_dict(item) for item in data.get("links") or []],
        )


@dataclass
class HttpInfo:
    """What the transport reported for one fetch"""
    # Final URL after redirects
    url: str
    status_code: int
    # Server order, names as received
    headers: List[Tuple[str, str]] = field(default_factory=list)
    # Media type only, parameters stripped
    content_type: Optional[str] = None
    redirect_count: int = 0
    body: str = ""

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "url": self.url,
            "status_code": self.status_code,
            "headers": [[name, value] for name, value in self.headers],
            "content_type": self.content_type,
            "redirect_count": self.redirect_count,
            "body": self.body,
        }
        return {key: value for key, value in result.items() if value is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HttpInfo":
        return cls(
            url=data["url"],
            status_code=data["status_code"],
            headers=[(name, value) for name, value in data.get("headers") or []],
            content_type=data.get("content_type"),
            redirect_count=data.get("redirect_count", 0),
            body=data.get("body", ""),
        )


@dataclass
class WebpageInfo:
    """HTTP transfer information together with the parsed HTML"""
    http: HttpInfo
    html: HtmlInfo

    @classmethod
    async def fetch(cls, url: str) -> "WebpageInfo":
        """Fetch and parse a webpage with default options"""
        from webpage_info.core.config import HttpOptions

        return await cls.fetch_with_options(url, HttpOptions.default())

    @classmethod
    async def fetch_with_options(cls, url: str, options, web_fetcher=None) -> "WebpageInfo":
        """
        Fetch and parse a webpage.

        Args:
            url: The URL to fetch
            options: HttpOptions for the request
            web_fetcher: Fetcher to use instead of a default SSRF-guarded one

        Raises:
            UnsupportedContentTypeError: If the response is neither HTML nor XML
            ServiceError: Any error raised by the fetcher
        """
        from webpage_info.services.exceptions import UnsupportedContentTypeError
        from webpage_info.services.url_validator import SSRFURLValidator
        from webpage_info.services.web_fetcher import WebFetcher

        if web_fetcher is None:
            web_fetcher = WebFetcher(SSRFURLValidator())

        http_info = await web_fetcher.fetch(url, options)

        content_type = http_info.content_type
        if content_type is not None and "html" not in content_type and "xml" not in content_type:
            logger.warning(f"URL {url} did not return HTML content. Content-Type: {content_type}")
            raise UnsupportedContentTypeError(content_type)

        html = HtmlInfo.from_string(http_info.body, http_info.url)
        return cls(http=http_info, html=html)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "http": self.http.to_dict(),
            "html": self.html.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebpageInfo":
        return cls(
            http=HttpInfo.from_dict(data["http"]),
            html=HtmlInfo.from_dict(data["html"]),
        )
