from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

PUBLISHED_ROLE = "main"


class Theme(BaseModel):
    id: int = 0
    name: str = ""
    role: str = ""
    previewable: bool = False
    processing: bool = False

    @property
    def is_published(self) -> bool:
        return self.role == PUBLISHED_ROLE

    def to_payload(self) -> dict[str, Any]:
        # Zero-valued fields are left out so partial updates only touch what is set.
        return self.model_dump(exclude_defaults=True)


class Shop(BaseModel):
    id: int = 0
    name: str = ""
    city: str = ""
    country: str = ""
    description: str = ""


class Asset(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: str = ""
    value: str | None = None
    attachment: str | None = None
    content_type: str | None = None
    public_url: str | None = None
    size: int | None = None
    checksum: str | None = None
    theme_id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ShopResponse(Shop):
    errors: dict[str, list[str]] | None = None

    def to_shop(self) -> Shop:
        return Shop.model_validate(self.model_dump(exclude={"errors"}))


class ThemeResponse(BaseModel):
    theme: Theme | None = None
    errors: dict[str, list[str]] | None = None


class ThemesResponse(BaseModel):
    themes: list[Theme] | None = None
    errors: dict[str, list[str]] | None = None


class AssetResponse(BaseModel):
    asset: Asset | None = None
    errors: dict[str, list[str]] | None = None


class AssetsResponse(BaseModel):
    assets: list[Asset] | None = None
    errors: dict[str, list[str]] | None = None


class FlatErrorResponse(BaseModel):
    errors: str | None = None
