"""Configuration management for TVGlance."""

from pydantic import PositiveInt, field_validator
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from urllib.parse import urlparse


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # TVMaze
    tvmaze_base_url: str = "https://api.tvmaze.com"
    attribution_url: str = "https://tvmaze.com/"

    # Network settings
    request_timeout: PositiveInt = 30  # Seconds per upstream request
    user_agent: str = "TVGlance/0.1 (+https://tvmaze.com/api)"
    # Proxy configuration in the format http://host:port or socks5://host:port
    proxy: str | None = None

    # Sessions
    session_cookie_name: str = "tvglance_session"
    max_sessions: PositiveInt = 1000

    @field_validator("tvmaze_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("TVMaze base URL must be an absolute http(s) URL")
        return v.rstrip("/")

    @field_validator("proxy")
    @classmethod
    def validate_proxy(cls, v: str | None) -> str | None:
        if v is None:
            return v

        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https", "socks4", "socks5", "socks5h"):
            raise ValueError(
                "Proxy must be a valid URL with scheme http/https/socks4/socks5/socks5h"
            )
        if not parsed.netloc:
            raise ValueError("Proxy must have a host and port")
        return v

    # App settings
    debug: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
