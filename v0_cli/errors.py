"""Error types and the error-classification layer for v0 CLI commands."""

import functools
import sys
from enum import Enum
from typing import Any, Callable, TypeVar

import httpx
import structlog

logger = structlog.get_logger()

F = TypeVar("F", bound=Callable[..., Any])

NOT_AUTHENTICATED_MESSAGE = "Not authenticated. Run 'v0 login' or set V0_API_KEY."
RATE_LIMITED_MESSAGE = "Rate limited. Try again shortly."
PAYLOAD_TOO_LARGE_MESSAGE = "Payload too large. Try reducing the number or size of files."
UNKNOWN_ERROR_MESSAGE = "Unknown error"


class ErrorKind(Enum):
    """Closed set of remote error tags."""

    UNAUTHORIZED = "unauthorized_error"
    NOT_FOUND = "not_found_error"
    RATE_LIMITED = "too_many_requests_error"
    PAYLOAD_TOO_LARGE = "payload_too_large_error"
    OTHER = "other"


class V0Error(Exception):
    """Base class for all errors raised by the v0 CLI."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ParseError(V0Error):
    """A local JSON file exists but could not be parsed."""


class ValidationError(V0Error):
    """Required input was missing or a response had an unexpected shape."""


class ApiError(V0Error):
    """A request to the v0 API failed."""

    kind = ErrorKind.OTHER

    def __init__(self, message: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(ApiError):
    """No API key is available, or the API rejected it."""

    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(ApiError):
    """The requested remote resource does not exist."""

    kind = ErrorKind.NOT_FOUND


class RateLimitedError(ApiError):
    kind = ErrorKind.RATE_LIMITED


class PayloadTooLargeError(ApiError):
    kind = ErrorKind.PAYLOAD_TOO_LARGE


_ERRORS_BY_KIND: dict[ErrorKind, type[ApiError]] = {
    ErrorKind.UNAUTHORIZED: AuthenticationError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.RATE_LIMITED: RateLimitedError,
    ErrorKind.PAYLOAD_TOO_LARGE: PayloadTooLargeError,
    ErrorKind.OTHER: ApiError,
}

_KINDS_BY_STATUS: dict[int, ErrorKind] = {
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.UNAUTHORIZED,
    404: ErrorKind.NOT_FOUND,
    413: ErrorKind.PAYLOAD_TOO_LARGE,
    429: ErrorKind.RATE_LIMITED,
}


def _error_kind(tag: Any, status_code: int) -> ErrorKind:
    for kind in ErrorKind:
        if kind is not ErrorKind.OTHER and kind.value == tag:
            return kind
    return _KINDS_BY_STATUS.get(status_code, ErrorKind.OTHER)


def translate_response(response: httpx.Response) -> ApiError:
    """Build the typed error for a failed API response.

    The tag is read from the body's ``error.type`` and falls back to the HTTP
    status code. The message is the nested ``error.message``, else a top-level
    ``message``, else a generic description of the status.

    Args:
        response: Non-successful response from the v0 API

    Returns:
        An ApiError subclass matching the error kind
    """
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}

    nested = body.get("error")
    if not isinstance(nested, dict):
        nested = {}

    kind = _error_kind(nested.get("type"), response.status_code)
    message = nested.get("message") or body.get("message") or f"Request failed with status {response.status_code}"

    logger.debug("Translated API error", status_code=response.status_code, kind=kind.value)
    return _ERRORS_BY_KIND[kind](str(message), status_code=response.status_code)


def classify(error: BaseException) -> str:
    """Return the user-facing message for an error raised by a command."""
    if isinstance(error, AuthenticationError):
        return NOT_AUTHENTICATED_MESSAGE
    if isinstance(error, NotFoundError):
        return f"Not found: {error.message}"
    if isinstance(error, RateLimitedError):
        return RATE_LIMITED_MESSAGE
    if isinstance(error, PayloadTooLargeError):
        return PAYLOAD_TOO_LARGE_MESSAGE
    if isinstance(error, V0Error) and error.message:
        return error.message
    return str(error) or UNKNOWN_ERROR_MESSAGE


def handle_errors(func: F) -> F:
    """Wrap a command so any failure prints a classified message and exits 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger.debug("Command failed", command=func.__name__, error_type=type(e).__name__, error=str(e))
            print(classify(e), file=sys.stderr)
            raise SystemExit(1) from e

    return wrapper  # type: ignore[return-value]
