from dataclasses import dataclass, field
from typing import List, Tuple

from pydantic_settings import SettingsConfigDict, BaseSettings

from webpage_info.version import __version__, HOMEPAGE


class Settings(BaseSettings):
    """Library and server settings loaded from environment variables."""

    # Server settings
    server_host: str = "0.0.0.0"
    server_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_file: str = ""

    # Cache settings
    cache_maxsize: int = 100
    cache_ttl_seconds: int = 600  # 10 minutes default

    # Fetching settings
    fetch_timeout: float = 30.0
    fetch_max_redirects: int = 10
    fetch_max_body_size: int = 10 * 1024 * 1024  # 10 MiB
    fetch_follow_redirects: bool = True
    fetch_block_private_ips: bool = True
    fetch_allow_insecure: bool = False
    fetch_user_agent: str = f"webpage-info/{__version__} ({HOMEPAGE})"

    # Environment
    environment: str = "development"  # development, staging, production

    model_config = SettingsConfigDict(
        env_prefix="WEBPAGE_INFO_",
        env_file=".env",  # Load from .env file if it exists
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields in env file
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"


# Create a single instance of settings
settings = Settings()


@dataclass
class HttpOptions:
    """
    Options for a single guarded fetch.

    Defaults are taken from ``settings`` at construction time, so they can be
    tuned through ``WEBPAGE_INFO_FETCH_*`` environment variables.
    """
    # Accept invalid TLS certificates. Allows man-in-the-middle attacks.
    allow_insecure: bool = field(default_factory=lambda: settings.fetch_allow_insecure)
    follow_redirects: bool = field(default_factory=lambda: settings.fetch_follow_redirects)
    max_redirects: int = field(default_factory=lambda: settings.fetch_max_redirects)
    # Total request deadline in seconds, body streaming included
    timeout: float = field(default_factory=lambda: settings.fetch_timeout)
    # Responses larger than this are silently truncated
    max_body_size: int = field(default_factory=lambda: settings.fetch_max_body_size)
    # SSRF gate: scheme, internal host names and resolved private addresses
    block_private_ips: bool = field(default_factory=lambda: settings.fetch_block_private_ips)
    user_agent: str = field(default_factory=lambda: settings.fetch_user_agent)
    headers: List[Tuple[str, str]] = field(default_factory=list)

    @classmethod
    def default(cls) -> "HttpOptions":
        return cls()

    def add_header(self, name: str, value: str) -> "HttpOptions":
        """Append an extra request header and return the options for chaining"""
        self.headers.append((name, value))
        return self
