from theme_client.client import Bound, ThemeClient, Unbound
from theme_client.config import Settings, get_settings
from theme_client.errors import (
    CriticalFileError,
    FieldValidationError,
    MalformedResponseError,
    MissingAssetNameError,
    NotPartOfThemeError,
    RequestRejectedError,
    ShopDomainNotFoundError,
    ThemeClientError,
    ThemeIdRequiredError,
    ThemeNameRequiredError,
    ThemeNotFoundError,
    TransportError,
)
from theme_client.file_filter import FileFilter, NullFileFilter, PatternFileFilter
from theme_client.schemas import Asset, Shop, Theme
from theme_client.transport import HttpTransport, HttpxTransport

__all__ = [
    "Asset",
    "Bound",
    "CriticalFileError",
    "FieldValidationError",
    "FileFilter",
    "HttpTransport",
    "HttpxTransport",
    "MalformedResponseError",
    "MissingAssetNameError",
    "NotPartOfThemeError",
    "NullFileFilter",
    "PatternFileFilter",
    "RequestRejectedError",
    "Settings",
    "Shop",
    "ShopDomainNotFoundError",
    "Theme",
    "ThemeClient",
    "ThemeClientError",
    "ThemeIdRequiredError",
    "ThemeNameRequiredError",
    "ThemeNotFoundError",
    "TransportError",
    "Unbound",
    "get_settings",
]
