import asyncio
import ipaddress
import logging
import re
import socket
from abc import ABC, abstractmethod
from typing import List
from urllib.parse import urlsplit

import httpx

from webpage_info.services.exceptions import SSRFBlockedError, URLValidationError
from webpage_info.services.ip_classifier import is_internal_host, is_private_ip

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")

# Code points a host name may not contain: controls, space, delimiters and %
_FORBIDDEN_HOST_RE = re.compile(r"[\x00-\x20\x7f#%/:<>?@\[\\\]^|]")


async def resolve_host(host: str, port: int) -> List[str]:
    """Resolve ``host:port`` to the list of addresses the transport may connect to"""
    loop = asyncio.get_running_loop()
    infos = await loop.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    return [sockaddr[0] for _, _, _, _, sockaddr in infos]


class URLValidatorInterface(ABC):
    """Interface for URL validation following the Dependency Inversion Principle"""

    @abstractmethod
    async def validate(self, url: str) -> None:
        """
        Check that a URL is well formed and safe to request.

        Args:
            url: The URL string to validate

        Raises:
            URLValidationError: If the URL is malformed or uses an unsupported scheme
            SSRFBlockedError: If the URL targets an internal host or address
        """
        pass


class SSRFURLValidator(URLValidatorInterface):
    """
    Validates URLs and prevents SSRF attacks.

    Only http and https are accepted, well-known internal host names are
    refused, and the host is resolved so that every address it points to can
    be checked against private, loopback, link-local, multicast, documentation
    and reserved ranges.
    """

    async def validate(self, url: str) -> None:
        try:
            parsed = urlsplit(url)
            port = parsed.port
        except ValueError as e:
            raise URLValidationError(str(e)) from e

        if not parsed.scheme:
            raise URLValidationError("relative URL without a base")

        scheme = parsed.scheme.lower()
        if scheme not in ALLOWED_SCHEMES:
            logger.warning(f"Refusing URL with unsupported scheme: {url}")
            raise URLValidationError(f"unsupported scheme '{scheme}', only http/https allowed")

        host = parsed.hostname
        if not host:
            raise URLValidationError("missing host")

        self._check_host_syntax(host)

        try:
            httpx.URL(url)
        except httpx.InvalidURL as e:
            raise URLValidationError(str(e)) from e

        if is_internal_host(host):
            logger.warning(f"Blocked request to internal host: {host}")
            raise SSRFBlockedError(f"blocked request to internal host: {host}")

        if port is None:
            port = 443 if scheme == "https" else 80

        try:
            addresses = await resolve_host(host, port)
        except (socket.gaierror, UnicodeError) as e:
            # Unresolvable hosts are left for the transport to report
            logger.debug(f"DNS resolution failed for {host}: {str(e)}")
            return

        for address in addresses:
            if is_private_ip(address):
                logger.warning(f"Blocked request to private IP {address} resolved from {host}")
                raise SSRFBlockedError(
                    f"blocked request to private IP: {address} (resolved from {host})"
                )

    @staticmethod
    def _check_host_syntax(host: str) -> None:
        # urlsplit strips the brackets of IPv6 literals, so a colon means one
        if ":" in host:
            if "%" in host:
                raise URLValidationError(f"invalid host '{host}': IPv6 zone identifiers are not allowed")
            try:
                ipaddress.IPv6Address(host)
            except ValueError as e:
                raise URLValidationError(f"invalid host '{host}': {str(e)}") from e
            return

        if _FORBIDDEN_HOST_RE.search(host):
            raise URLValidationError(f"invalid host '{host}': forbidden character")
