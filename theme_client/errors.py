from __future__ import annotations


class ThemeClientError(RuntimeError):
    def __init__(self, *, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ThemeNameRequiredError(ThemeClientError):
    def __init__(self) -> None:
        super().__init__(message="theme name is required to create a theme")


class ThemeIdRequiredError(ThemeClientError):
    pass


class MissingAssetNameError(ThemeClientError):
    def __init__(self, *, status_code: int | None = None) -> None:
        super().__init__(
            message="asset has no name so could not be processed",
            status_code=status_code,
        )


class TransportError(ThemeClientError):
    pass


class MalformedResponseError(ThemeClientError):
    def __init__(self, *, status_code: int | None = None) -> None:
        super().__init__(message="received a malformed response", status_code=status_code)


class ThemeNotFoundError(ThemeClientError):
    def __init__(self) -> None:
        super().__init__(message="requested theme was not found", status_code=404)


class ShopDomainNotFoundError(ThemeClientError):
    def __init__(self) -> None:
        super().__init__(message="provided myshopify domain does not exist", status_code=404)


class NotPartOfThemeError(ThemeClientError):
    def __init__(self) -> None:
        super().__init__(message="this file is not part of your theme", status_code=404)


class CriticalFileError(ThemeClientError):
    def __init__(self) -> None:
        super().__init__(
            message=(
                "this file is critical and removing it would cause your theme "
                "to become non-functional"
            ),
            status_code=403,
        )


class RequestRejectedError(ThemeClientError):
    """The API rejected the whole request with a flat ``{"errors": "..."}`` body."""


class FieldValidationError(ThemeClientError):
    """One or more attributes failed validation; the message is the rendered sentence."""

    def __init__(
        self,
        *,
        message: str,
        errors: dict[str, list[str]],
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, status_code=status_code)
        self.errors = errors
