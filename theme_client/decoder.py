from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Generic, Literal, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from theme_client.errors import MalformedResponseError, RequestRejectedError
from theme_client.schemas import FlatErrorResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

OutcomeKind = Literal["value", "field_errors", "flat_error", "malformed"]


@dataclass(frozen=True)
class DecodeOutcome(Generic[ModelT]):
    kind: OutcomeKind
    status_code: int
    value: ModelT | None = None
    field_errors: dict[str, list[str]] = field(default_factory=dict)
    flat_error: str = ""

    def unwrap(self) -> ModelT | None:
        """Return the decoded value, raising for request-level failures.

        Field errors are not raised here: the value is returned and the caller
        decides how to render ``field_errors`` for its operation.
        """
        if self.kind == "malformed":
            raise MalformedResponseError(status_code=self.status_code)
        if self.kind == "flat_error":
            raise RequestRejectedError(message=self.flat_error, status_code=self.status_code)
        return self.value


def _read_body(response: httpx.Response) -> bytes | None:
    try:
        return response.read()
    except (httpx.HTTPError, httpx.StreamError, OSError) as exc:
        logger.debug("Failed to read response body: %s", exc)
        return None
    finally:
        response.close()


def _validate(model: type[ModelT], body: bytes) -> ModelT | None:
    try:
        return model.model_validate_json(body)
    except ValidationError:
        return None


def decode_response(response: httpx.Response, model: type[ModelT]) -> DecodeOutcome[ModelT]:
    status_code = response.status_code
    body = _read_body(response)
    if body is None:
        return DecodeOutcome(kind="malformed", status_code=status_code)

    value = _validate(model, body)
    flat = _validate(FlatErrorResponse, body)

    if value is None and flat is None:
        return DecodeOutcome(kind="malformed", status_code=status_code)
    if flat is not None and flat.errors:
        return DecodeOutcome(kind="flat_error", status_code=status_code, flat_error=flat.errors)

    errors = getattr(value, "errors", None)
    if isinstance(errors, dict) and errors:
        return DecodeOutcome(kind="field_errors", status_code=status_code, value=value, field_errors=errors)
    return DecodeOutcome(kind="value", status_code=status_code, value=value)
