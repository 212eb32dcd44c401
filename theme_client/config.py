from __future__ import annotations

from functools import lru_cache
import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SHOP_DOMAIN_RE = re.compile(r"^[a-z0-9][a-z0-9-]*\.myshopify\.com$")
_LIVE_THEME_ALIASES = {"", "live"}


class Settings(BaseSettings):
    THEMEKIT_DOMAIN: str
    THEMEKIT_PASSWORD: str = Field(min_length=1)
    THEMEKIT_THEME_ID: str | None = None
    THEMEKIT_PROXY: str | None = None
    THEMEKIT_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    THEMEKIT_API_CALLS_PER_SECOND: float = Field(default=2.0, gt=0)
    THEMEKIT_DIRECTORY: str = "."
    THEMEKIT_IGNORED_FILES: str = ""
    THEMEKIT_IGNORES: str = ""

    @field_validator("THEMEKIT_DOMAIN")
    @classmethod
    def validate_domain(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not _SHOP_DOMAIN_RE.fullmatch(normalized):
            raise ValueError("THEMEKIT_DOMAIN must be a valid *.myshopify.com domain")
        return normalized

    @field_validator("THEMEKIT_THEME_ID")
    @classmethod
    def validate_theme_id(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip()
        if cleaned.lower() in _LIVE_THEME_ALIASES:
            return None
        if not cleaned.isdigit():
            raise ValueError("THEMEKIT_THEME_ID must be a numeric theme id or 'live'")
        return cleaned

    @field_validator("THEMEKIT_PROXY")
    @classmethod
    def validate_proxy(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @property
    def ignored_file_patterns(self) -> list[str]:
        return [item.strip() for item in self.THEMEKIT_IGNORED_FILES.split(",") if item.strip()]

    @property
    def ignore_file_paths(self) -> list[str]:
        return [item.strip() for item in self.THEMEKIT_IGNORES.split(",") if item.strip()]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
