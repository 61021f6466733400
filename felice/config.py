"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RESULTS_PER_PAGE = 20
DEFAULT_ERROR_MESSAGE = "An error occurred while fetching search results."
FAVICON_SERVICE_URL = "https://www.google.com/s2/favicons?domain={hostname}"


class BingSettings(BaseModel):
    api_key: SecretStr | None = Field(
        default=None,
        description="Subscription key sent as the Ocp-Apim-Subscription-Key header.",
    )
    web_search_url: AnyHttpUrl = Field(default="https://api.bing.microsoft.com/v7.0/search")
    image_search_url: AnyHttpUrl = Field(
        default="https://api.bing.microsoft.com/v7.0/images/search"
    )
    results_per_page: int = Field(default=RESULTS_PER_PAGE, ge=1, le=150)
    request_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-request timeout; None waits indefinitely.",
    )


class FilterSettings(BaseModel):
    """Static blocklists applied to every page of results."""

    model_config = ConfigDict(frozen=True)

    blocked_keywords: tuple[str, ...] = ("keyword1", "keyword2", "keyword3")
    blocked_domains: tuple[str, ...] = ("example.com", "anotherexample.com")

    @field_validator("blocked_keywords", "blocked_domains")
    @classmethod
    def _lowercase(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(item.strip().lower() for item in value if item and item.strip())


class FeliceSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FELICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    bing: BingSettings = Field(default_factory=BingSettings)
    filters: FilterSettings = Field(default_factory=FilterSettings)
    favicon_service_url: str = Field(
        default=FAVICON_SERVICE_URL,
        description="Favicon image URL template; must contain {hostname}.",
    )
    error_message: str = Field(default=DEFAULT_ERROR_MESSAGE, min_length=1)

    @field_validator("favicon_service_url")
    @classmethod
    def _require_hostname_placeholder(cls, value: str) -> str:
        if "{hostname}" not in value:
            raise ValueError("favicon_service_url must contain a {hostname} placeholder")
        try:
            value.format(hostname="example.com")
        except (AttributeError, KeyError, IndexError, ValueError) as exc:
            raise ValueError(
                "favicon_service_url may only use the {hostname} placeholder"
            ) from exc
        return value


@lru_cache
def get_settings() -> FeliceSettings:
    """Return cached settings instance."""

    return FeliceSettings()


__all__ = [
    "BingSettings",
    "DEFAULT_ERROR_MESSAGE",
    "FAVICON_SERVICE_URL",
    "FeliceSettings",
    "FilterSettings",
    "RESULTS_PER_PAGE",
    "get_settings",
]
