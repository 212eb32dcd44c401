from __future__ import annotations

from dataclasses import dataclass
import logging
from urllib.parse import urlencode

import httpx

from theme_client.config import Settings
from theme_client.decoder import DecodeOutcome, decode_response
from theme_client.errors import (
    CriticalFileError,
    FieldValidationError,
    MalformedResponseError,
    MissingAssetNameError,
    NotPartOfThemeError,
    ShopDomainNotFoundError,
    ThemeClientError,
    ThemeIdRequiredError,
    ThemeNameRequiredError,
    ThemeNotFoundError,
)
from theme_client.file_filter import FileFilter, NullFileFilter, PatternFileFilter
from theme_client.schemas import (
    PUBLISHED_ROLE,
    Asset,
    AssetResponse,
    AssetsResponse,
    Shop,
    ShopResponse,
    Theme,
    ThemeResponse,
    ThemesResponse,
)
from theme_client.sentences import to_messages, to_sentence
from theme_client.transport import HttpTransport, HttpxTransport

logger = logging.getLogger(__name__)

GENERATED_ASSET_CONFLICT = "Cannot overwrite generated asset"
SHADOW_SUFFIX = ".liquid"
_MAX_CONFLICT_RETRIES = 1


@dataclass(frozen=True)
class Unbound:
    """Calls target the shop's live theme through the unscoped endpoints."""


@dataclass(frozen=True)
class Bound:
    theme_id: str


SessionState = Unbound | Bound


def _raise_for_field_errors(outcome: DecodeOutcome) -> None:
    if outcome.kind == "field_errors":
        raise FieldValidationError(
            message=to_sentence(to_messages(outcome.field_errors)),
            errors=outcome.field_errors,
            status_code=outcome.status_code,
        )


class ThemeClient:
    """Synchronous client for the theme and asset REST resources of one shop.

    A client starts either unbound (operating on the live theme) or bound to a
    theme id. A successful ``create_theme`` binds it to the new theme for the
    rest of its life. Instances are meant to have a single owner.
    """

    def __init__(
        self,
        transport: HttpTransport,
        file_filter: FileFilter | None = None,
        *,
        theme_id: str | int | None = None,
    ) -> None:
        self._transport = transport
        self._filter = file_filter or NullFileFilter()
        cleaned = str(theme_id).strip() if theme_id is not None else ""
        self._session: SessionState = Bound(theme_id=cleaned) if cleaned else Unbound()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ThemeClient":
        file_filter = PatternFileFilter.from_config(
            directory=settings.THEMEKIT_DIRECTORY,
            patterns=settings.ignored_file_patterns,
            ignore_files=settings.ignore_file_paths,
        )
        transport = HttpxTransport(
            domain=settings.THEMEKIT_DOMAIN,
            password=settings.THEMEKIT_PASSWORD,
            timeout_seconds=settings.THEMEKIT_TIMEOUT_SECONDS,
            proxy=settings.THEMEKIT_PROXY,
            api_calls_per_second=settings.THEMEKIT_API_CALLS_PER_SECOND,
        )
        return cls(transport, file_filter, theme_id=settings.THEMEKIT_THEME_ID)

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def theme_id(self) -> str | None:
        if isinstance(self._session, Bound):
            return self._session.theme_id
        return None

    def _require_theme_id(self, message: str) -> str:
        if isinstance(self._session, Bound):
            return self._session.theme_id
        raise ThemeIdRequiredError(message=message)

    def _theme_path(self, theme_id: str) -> str:
        return f"/admin/themes/{theme_id}.json"

    def _asset_path(self, query: dict[str, str] | None = None) -> str:
        if isinstance(self._session, Bound):
            path = f"/admin/themes/{self._session.theme_id}/assets.json"
        else:
            path = "/admin/assets.json"
        if query:
            path = f"{path}?{urlencode(sorted(query.items()))}"
        return path

    def get_shop(self) -> Shop:
        response = self._transport.get("/meta.json")
        if response.status_code == 404:
            raise ShopDomainNotFoundError()
        outcome = decode_response(response, ShopResponse)
        payload = outcome.unwrap()
        _raise_for_field_errors(outcome)
        if payload is None:
            return Shop()
        return payload.to_shop()

    def list_themes(self) -> list[Theme]:
        response = self._transport.get("/admin/themes.json")
        outcome = decode_response(response, ThemesResponse)
        payload = outcome.unwrap()
        _raise_for_field_errors(outcome)
        if payload is None:
            return []
        return payload.themes or []

    def create_theme(self, name: str, *, src: str | None = None) -> Theme:
        if not name or not name.strip():
            raise ThemeNameRequiredError()

        body = Theme(name=name).to_payload()
        if src:
            body["src"] = src
        response = self._transport.post("/admin/themes.json", {"theme": body})
        outcome = decode_response(response, ThemeResponse)
        payload = outcome.unwrap()
        _raise_for_field_errors(outcome)

        theme = payload.theme if payload is not None else None
        if theme is None or not theme.id:
            raise MalformedResponseError(status_code=outcome.status_code)
        self._session = Bound(theme_id=str(theme.id))
        logger.info("Created theme %s (%s); client now bound to it", theme.id, theme.name)
        return theme

    def get_theme_info(self) -> Theme:
        theme_id = self._require_theme_id("cannot get info without a theme id")
        response = self._transport.get(self._theme_path(theme_id))
        if response.status_code == 404:
            raise ThemeNotFoundError()
        outcome = decode_response(response, ThemeResponse)
        payload = outcome.unwrap()
        _raise_for_field_errors(outcome)
        if payload is None or payload.theme is None:
            return Theme()
        return payload.theme

    def publish_theme(self) -> None:
        theme_id = self._require_theme_id("cannot publish a theme without a theme id set")
        response = self._transport.put(
            self._theme_path(theme_id),
            {"theme": Theme(role=PUBLISHED_ROLE).to_payload()},
        )
        if response.status_code == 404:
            raise ThemeNotFoundError()
        outcome = decode_response(response, ThemeResponse)
        outcome.unwrap()
        _raise_for_field_errors(outcome)

    def list_asset_keys(self) -> list[str]:
        """Return the sorted asset keys of the theme, without asset bodies.

        Ignored keys are dropped first. When both ``K`` and ``K.liquid`` remain
        only ``K.liquid`` is kept. Pairs are detected by adjacency among the
        remaining sorted keys, so a key sorting between ``K`` and ``K.liquid``
        hides the pair.
        """
        response = self._transport.get(self._asset_path({"fields": "key"}))
        if response.status_code == 404:
            raise ThemeNotFoundError()
        outcome = decode_response(response, AssetsResponse)
        payload = outcome.unwrap()
        _raise_for_field_errors(outcome)
        if payload is None or not payload.assets:
            return []

        candidates = [
            key for key in sorted(asset.key for asset in payload.assets) if not self._filter.match(key)
        ]
        filtered: list[str] = []
        for index, key in enumerate(candidates):
            if index + 1 < len(candidates) and candidates[index + 1] == key + SHADOW_SUFFIX:
                continue
            filtered.append(key)
        return filtered

    def get_asset(self, key: str) -> Asset:
        response = self._transport.get(self._asset_path({"asset[key]": key}))
        if response.status_code == 404:
            raise NotPartOfThemeError()
        outcome = decode_response(response, AssetResponse)
        payload = outcome.unwrap()
        _raise_for_field_errors(outcome)
        if payload is None or payload.asset is None:
            return Asset()
        return payload.asset

    def create_asset(self, asset: Asset) -> None:
        self.update_asset(asset)

    def update_asset(self, asset: Asset) -> None:
        for attempt in range(_MAX_CONFLICT_RETRIES + 1):
            response = self._transport.put(self._asset_path(), {"asset": asset.to_payload()})
            if response.status_code == 404:
                raise NotPartOfThemeError()
            outcome = decode_response(response, AssetResponse)
            outcome.unwrap()
            if outcome.kind != "field_errors":
                return

            asset_errors = outcome.field_errors.get("asset")
            if not asset_errors:
                _raise_for_field_errors(outcome)

            if (
                attempt < _MAX_CONFLICT_RETRIES
                and outcome.status_code == 422
                and GENERATED_ASSET_CONFLICT in asset_errors[0]
            ):
                logger.debug("Generated asset blocks %s; removing shadow and retrying", asset.key)
                self._delete_shadow(asset.key)
                continue

            raise FieldValidationError(
                message=to_sentence(asset_errors),
                errors=outcome.field_errors,
                status_code=outcome.status_code,
            )

    def _delete_shadow(self, key: str) -> None:
        shadow_key = key + SHADOW_SUFFIX
        try:
            self.delete_asset(Asset(key=shadow_key))
        except (ThemeClientError, httpx.HTTPError, OSError) as exc:
            # The retried update reports the real outcome.
            logger.debug("Ignoring failed delete of generated asset %s: %s", shadow_key, exc)

    def delete_asset(self, asset: Asset) -> None:
        if not asset.key:
            raise MissingAssetNameError()
        response = self._transport.delete(self._asset_path({"asset[key]": asset.key}))
        if response.status_code == 403:
            raise CriticalFileError()
        if response.status_code == 404:
            raise NotPartOfThemeError()
        if response.status_code == 406:
            raise MissingAssetNameError(status_code=406)
        outcome = decode_response(response, AssetResponse)
        outcome.unwrap()
        _raise_for_field_errors(outcome)
