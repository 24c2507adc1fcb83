"""HTML parsing utilities for metadata extraction"""

import logging
from typing import Dict, List, Optional, Set, Tuple
from urllib.parse import urljoin, urlsplit, uses_relative

import httpx
import soupsieve as sv
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import NavigableString, PageElement, PreformattedString

from webpage_info.core.models import HtmlInfo, Link
from webpage_info.core.opengraph import Opengraph
from webpage_info.core.schema_org import SchemaOrg
from webpage_info.services.exceptions import ParseError


logger = logging.getLogger(__name__)

FEED_MIME_TYPES = (
    "application/atom+xml",
    "application/rss+xml",
    "application/json",
    "application/xml",
    "text/xml",
)

# Resource limits for hostile or oversized documents
MAX_LINKS = 10_000
MAX_SCHEMA_ORG_ITEMS = 100
MAX_TEXT_CONTENT_LEN = 1_000_000  # bytes of UTF-8

_SPECIAL_SCHEMES = ("http", "https", "ftp", "ws", "wss", "file")

# Compiled once at import and only read afterwards
_CANONICAL = sv.compile('link[rel="canonical"]')
_FEED = sv.compile('link[rel="alternate"]')
_EXCLUDED = sv.compile("script, style, noscript")
_LINKS = sv.compile("a[href]")
_JSON_LD = sv.compile('script[type="application/ld+json"]')


def _truncate_utf8(text: str, max_bytes: int) -> str:
    """Longest prefix of ``text`` that fits in ``max_bytes`` bytes of UTF-8"""
    return text.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")


def _join_url(base_url: str, href: str) -> str:
    """
    Resolve ``href`` against ``base_url``.

    Backslashes before the query count as slashes for web schemes, relative
    references resolve against hierarchical bases of any scheme, and http(s)
    results are normalised (lowercase scheme and host, no default port,
    percent-encoded path).

    Raises:
        ValueError: If the reference cannot be resolved against the base
    """
    base = urlsplit(base_url)
    base_scheme = base.scheme.lower()

    if base_scheme in _SPECIAL_SCHEMES:
        end = min((i for i in (href.find("?"), href.find("#")) if i >= 0), default=len(href))
        href = href[:end].replace("\\", "/") + href[end:]

    if urlsplit(href).scheme or base_scheme in uses_relative:
        joined = urljoin(base_url, href)
    elif base.netloc:
        # urljoin leaves unknown schemes alone; resolve as if the base were http
        joined = urljoin("http" + base_url[len(base.scheme):], href)
        joined = base.scheme + joined[len("http"):]
    else:
        raise ValueError(f"cannot resolve against opaque base {base_url!r}")

    if urlsplit(joined).scheme.lower() in ("http", "https"):
        joined = str(httpx.URL(joined))
    return joined


def _is_text_node(node: PageElement) -> bool:
    # Comments, doctypes, CDATA and processing instructions are not text
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


class HTMLParser:
    """Encapsulates HTML parsing functionality"""

    def __init__(self, html: str, base_url: Optional[str] = None):
        """
        Initialize the HTML parser

        Args:
            html: HTML content to parse
            base_url: Base URL for resolving relative links
        """
        self.base_url = self._parse_base_url(base_url)
        try:
            # Keep attribute values verbatim, e.g. rel="nofollow noopener"
            self.soup = BeautifulSoup(html, "lxml", multi_valued_attributes=None)
        except ParserRejectedMarkup as e:
            logger.error(f"HTML parser rejected the document: {str(e)}")
            raise ParseError(f"failed to parse HTML: {str(e)}") from e

    @staticmethod
    def _parse_base_url(base_url: Optional[str]) -> Optional[str]:
        if base_url is None:
            return None
        try:
            parsed = urlsplit(base_url)
        except ValueError:
            logger.debug(f"Ignoring unparsable base URL: {base_url}")
            return None
        if not parsed.scheme:
            logger.debug(f"Ignoring relative base URL: {base_url}")
            return None
        return base_url

    def extract(self) -> HtmlInfo:
        """Extract all information from the parsed document"""
        meta, description, opengraph = self.get_meta_tags()

        return HtmlInfo(
            title=self.get_title(),
            description=description,
            canonical_url=self.get_canonical_url(),
            feed_url=self.get_feed_url(),
            language=self.get_language(),
            text_content=self.get_text_content(),
            meta=meta,
            opengraph=opengraph,
            schema_org=self.get_schema_org(),
            links=self.get_links(),
        )

    def get_title(self) -> Optional[str]:
        """Text of the first <title> element"""
        title_tag = self.soup.find("title")
        if title_tag is None:
            return None
        return title_tag.get_text().strip() or None

    def get_language(self) -> Optional[str]:
        """lang attribute of the <html> element"""
        html_tag = self.soup.find("html")
        if html_tag is None or html_tag.get("lang") is None:
            return None
        return html_tag["lang"].strip() or None

    def get_canonical_url(self) -> Optional[str]:
        """href of <link rel="canonical">, verbatim apart from trimming"""
        canonical_tag = _CANONICAL.select_one(self.soup)
        if canonical_tag is None or canonical_tag.get("href") is None:
            return None
        return canonical_tag["href"].strip() or None

    def get_feed_url(self) -> Optional[str]:
        """href of the first RSS/Atom/JSON feed declared with <link rel="alternate">"""
        for link_tag in _FEED.iselect(self.soup):
            if link_tag.get("type") in FEED_MIME_TYPES:
                href = link_tag.get("href")
                if href is None:
                    return None
                return href.strip() or None
        return None

    def get_meta_tags(self) -> Tuple[Dict[str, str], Optional[str], Opengraph]:
        """
        Collect every <meta> tag.

        Returns:
            The meta mapping, the page description and the OpenGraph data
        """
        meta: Dict[str, str] = {}
        description = None
        opengraph = Opengraph()

        for meta_tag in self.soup.find_all("meta"):
            content = meta_tag.get("content")
            if content is None:
                charset = meta_tag.get("charset")
                if charset is not None:
                    meta["charset"] = charset
                continue

            key = meta_tag.get("property")
            if key is None:
                key = meta_tag.get("name")
            if key is None:
                key = meta_tag.get("http-equiv")
            if key is None:
                continue

            key = key.strip()
            content = content.strip()
            meta[key] = content

            if key.startswith("og:"):
                opengraph.extend(key[3:], content)
            if key == "description" and content:
                description = content

        return meta, description, opengraph

    def get_text_content(self) -> str:
        """
        Visible text of <body>, one space between fragments.

        Text under script, style and noscript is skipped. The result is capped
        at MAX_TEXT_CONTENT_LEN bytes.
        """
        body = self.soup.find("body")
        if body is None:
            return ""

        excluded: Set[int] = {id(tag) for tag in _EXCLUDED.select(self.soup)}

        parts: List[str] = []
        size = 0
        for node in body.descendants:
            if size >= MAX_TEXT_CONTENT_LEN:
                break
            if not _is_text_node(node):
                continue
            if any(id(parent) in excluded for parent in node.parents):
                continue

            fragment = node.strip()
            if not fragment:
                continue

            if parts:
                parts.append(" ")
                size += 1
            remaining = MAX_TEXT_CONTENT_LEN - size
            fragment_size = len(fragment.encode("utf-8"))
            if fragment_size <= remaining:
                parts.append(fragment)
                size += fragment_size
            else:
                parts.append(_truncate_utf8(fragment, remaining))
                break

        return "".join(parts)

    def get_links(self) -> List[Link]:
        """Every <a href> in document order, resolved against the base URL"""
        links: List[Link] = []
        for anchor in _LINKS.iselect(self.soup):
            href = anchor["href"].strip()
            if not href or href.startswith("javascript:"):
                continue

            links.append(Link(
                url=self._resolve(href),
                text=anchor.get_text().strip(),
                rel=anchor.get("rel"),
            ))
            if len(links) >= MAX_LINKS:
                logger.debug(f"Link limit of {MAX_LINKS} reached, ignoring the rest")
                break
        return links

    def _resolve(self, href: str) -> str:
        if self.base_url is None:
            return href
        try:
            return _join_url(self.base_url, href)
        except (ValueError, httpx.InvalidURL) as e:
            logger.debug(f"Failed to resolve link {href!r}: {str(e)}")
            return href

    def get_schema_org(self) -> List[SchemaOrg]:
        """Extract JSON-LD structured data"""
        items: List[SchemaOrg] = []
        for script in _JSON_LD.iselect(self.soup):
            items.extend(SchemaOrg.parse(script.get_text()))
            if len(items) >= MAX_SCHEMA_ORG_ITEMS:
                break
        return items[:MAX_SCHEMA_ORG_ITEMS]
