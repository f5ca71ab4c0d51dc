from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
BROWSER_ACCEPT = (
    "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
)
BROWSER_ACCEPT_LANGUAGE = "en-US,en;q=0.5"


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    app_name: str = Field(
        default="Link Preview API",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Development mode; also forces DEBUG logging",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    host: str = Field(default="127.0.0.1", description="Bind address for run()")
    port: int = Field(default=8000, description="Bind port for run()")
    allowed_origins: list[str] = Field(
        default=[
            "tauri://localhost",
            "http://tauri.localhost",
            "http://localhost:1420",
        ],
        description="CORS origins of the desktop web front end",
    )

    # Outbound request headers, browser values by default.
    user_agent: str = Field(default=BROWSER_USER_AGENT)
    accept: str = Field(default=BROWSER_ACCEPT)
    accept_language: str = Field(default=BROWSER_ACCEPT_LANGUAGE)
    fetch_timeout: Optional[float] = Field(
        default=10.0,
        description="Per-request timeout in seconds; None disables it",
    )
    follow_redirects: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level

    def request_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
            "Accept-Language": self.accept_language,
        }


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
