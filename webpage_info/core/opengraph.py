"""
OpenGraph (https://ogp.me/) records and the accumulator that folds flat
``og:*`` meta properties into grouped media objects.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# Upper bound per media collection (images, videos, audios)
MAX_MEDIA_ITEMS = 100

_U32_MAX = 2 ** 32 - 1
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")


def _parse_u32(content: str) -> Optional[int]:
    if not _UNSIGNED_RE.fullmatch(content):
        return None
    value = int(content)
    return value if value <= _U32_MAX else None


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class OpengraphMedia:
    """Image, video or audio object described by OpenGraph"""
    url: str
    secure_url: Optional[str] = None
    mime_type: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    alt: Optional[str] = None
    properties: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "url": self.url,
            "secure_url": self.secure_url,
            "mime_type": self.mime_type,
            "width": self.width,
            "height": self.height,
            "alt": self.alt,
            "properties": dict(self.properties),
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OpengraphMedia":
        return cls(
            url=data["url"],
            secure_url=data.get("secure_url"),
            mime_type=data.get("mime_type"),
            width=data.get("width"),
            height=data.get("height"),
            alt=data.get("alt"),
            properties=dict(data.get("properties") or {}),
        )

    def apply(self, suffix: str, content: str) -> None:
        """Set a sub-property such as ``width`` from ``og:image:width``"""
        if suffix == "secure_url":
            self.secure_url = content
        elif suffix == "type":
            self.mime_type = content
        elif suffix == "width":
            self.width = _parse_u32(content)
        elif suffix == "height":
            self.height = _parse_u32(content)
        elif suffix == "alt":
            self.alt = content
        elif suffix:
            self.properties[suffix] = content


@dataclass
class Opengraph:
    """
    OpenGraph metadata of a page.

    Media sub-properties (``og:image:width`` and friends) carry no explicit
    grouping, so they attach to the most recently started item of their
    collection. Both ``og:image`` and ``og:image:url`` start a new item.
    """
    og_type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    site_name: Optional[str] = None
    locale: Optional[str] = None
    locale_alternates: List[str] = field(default_factory=list)
    images: List[OpengraphMedia] = field(default_factory=list)
    videos: List[OpengraphMedia] = field(default_factory=list)
    audios: List[OpengraphMedia] = field(default_factory=list)
    # og:* names without a dedicated field
    properties: Dict[str, str] = field(default_factory=dict)

    def extend(self, property_name: str, content: str) -> None:
        """
        Fold one property into the record.

        Args:
            property_name: Property without the ``og:`` prefix, e.g. ``image:width``
            content: Already trimmed content attribute
        """
        if property_name == "type":
            self.og_type = content
        elif property_name in ("title", "description", "url", "site_name", "locale"):
            setattr(self, property_name, content)
        elif property_name == "locale:alternate":
            self.locale_alternates.append(content)
        elif property_name.startswith("image"):
            self._extend_media("image", property_name, content, self.images)
        elif property_name.startswith("video"):
            self._extend_media("video", property_name, content, self.videos)
        elif property_name.startswith("audio"):
            self._extend_media("audio", property_name, content, self.audios)
        else:
            self.properties[property_name] = content

    @staticmethod
    def _extend_media(
        media_type: str,
        property_name: str,
        content: str,
        collection: List[OpengraphMedia]
    ) -> None:
        if property_name in (media_type, media_type + ":url"):
            if len(collection) < MAX_MEDIA_ITEMS:
                collection.append(OpengraphMedia(url=content))
            else:
                logger.debug(f"Dropping og:{property_name}, {media_type} limit reached")
            return

        if not collection:
            return

        prefix = media_type + ":"
        suffix = property_name[len(prefix):] if property_name.startswith(prefix) else ""
        collection[-1].apply(suffix, content)

    def is_empty(self) -> bool:
        """True when neither type, title, description, url nor any image is known"""
        return (
            self.og_type is None
            and self.title is None
            and self.description is None
            and self.url is None
            and not self.images
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "og_type": self.og_type,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "site_name": self.site_name,
            "locale": self.locale,
            "locale_alternates": list(self.locale_alternates),
            "images": [media.to_dict() for media in self.images],
            "videos": [media.to_dict() for media in self.videos],
            "audios": [media.to_dict() for media in self.audios],
            "properties": dict(self.properties),
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Opengraph":
        return cls(
            og_type=data.get("og_type"),
            title=data.get("title"),
            description=data.get("description"),
            url=data.get("url"),
            site_name=data.get("site_name"),
            locale=data.get("locale"),
            locale_alternates=list(data.get("locale_alternates") or []),
            images=[OpengraphMedia.from_dict(item) for item in data.get("images") or []],
            videos=[OpengraphMedia.from_dict(item) for item in data.get("videos") or []],
            audios=[OpengraphMedia.from_dict(item) for item in data.get("audios") or []],
            properties=dict(data.get("properties") or {}),
        )
