"""Translation of transport failures into ``ClientError`` lists.

Provider failures are ``botocore.exceptions.ClientError`` instances; every
other exception is reported with the generic internal error code.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from botocore.exceptions import ClientError as ProviderError

from r2store.domain.results import ClientError

INTERNAL_SERVER_ERROR = "InternalServerError"
NOT_FOUND = "NotFound"

# Matched literally; only this message is unwrapped to its inner cause.
SAVE_CHANGES_MESSAGE = (
    "An error occurred while saving the entity changes. "
    "See the inner exception for details."
)


class StorageError(RuntimeError):
    """Raised when object storage operations fail outside of a ClientResult."""


class ExistenceCheckError(StorageError):
    """Raised when the metadata lookup before a delete fails unexpectedly.

    The original provider exception is available as ``__cause__``.
    """


class ClientClosedError(StorageError):
    """Raised when an operation is attempted on a closed client."""


def status_name(status: int | str | None) -> str | None:
    """Return the PascalCase name of an HTTP status (``404`` -> ``NotFound``)."""
    if status is None:
        return None
    try:
        phrase = HTTPStatus(int(status)).phrase
    except ValueError:
        return None
    return "".join(part[:1].upper() + part[1:] for part in phrase.replace("-", " ").split())


def provider_error_code(exc: ProviderError) -> str:
    """Return the error code string reported by the provider."""
    error: dict[str, Any] = exc.response.get("Error", {}) or {}
    return str(error.get("Code") or "")


def _provider_status_code(exc: ProviderError) -> str:
    metadata: dict[str, Any] = exc.response.get("ResponseMetadata", {}) or {}
    name = status_name(metadata.get("HTTPStatusCode"))
    if name:
        return name
    code = provider_error_code(exc)
    return status_name(code) or code or INTERNAL_SERVER_ERROR


def _provider_message(exc: ProviderError) -> str:
    error: dict[str, Any] = exc.response.get("Error", {}) or {}
    return str(error.get("Message") or exc)


def _unwrap(exc: BaseException, message: str) -> str:
    if message != SAVE_CHANGES_MESSAGE:
        return message
    inner = exc.__cause__ or exc.__context__
    if inner is None:
        return message
    if isinstance(inner, ProviderError):
        return _provider_message(inner)
    return str(inner)


def to_client_errors(exc: BaseException) -> list[ClientError]:
    """Convert a caught exception into a list with one ``ClientError``."""
    if isinstance(exc, ProviderError):
        code = _provider_status_code(exc)
        message = _provider_message(exc)
    else:
        code = INTERNAL_SERVER_ERROR
        message = str(exc)
    return [ClientError(code=code, description=_unwrap(exc, message))]


def fail_errors() -> list[ClientError]:
    """Errors for a failure that produced no exception to translate."""
    return [ClientError(code=INTERNAL_SERVER_ERROR, description="Internal Server Error")]


def file_not_found_errors() -> list[ClientError]:
    return [ClientError(code=NOT_FOUND, description="File not found.")]
