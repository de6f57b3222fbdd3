"""Custom exceptions for the image API"""
import json
from typing import Dict, Optional, Type


class DalleError(Exception):
    """Base exception for image API errors"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class PreconditionError(DalleError):
    """Exception for invalid or missing call arguments, raised before any request is sent"""
    pass


class SerializationError(DalleError):
    """Exception for failures while building a request body"""
    pass


class DecodeError(DalleError):
    """Exception for a successful response whose body is not a valid envelope"""
    pass


class StatusError(DalleError):
    """Exception for a non-200 HTTP status.

    ``body`` keeps the raw response text and ``detail`` the service's own
    error message when the body is the usual ``{"error": {"message": ...}}``
    object. Neither changes which subclass is raised.
    """
    default_message = "unexpected status"

    def __init__(self, status_code: int, body: str = "", detail: Optional[str] = None):
        self.body = body or ""
        self.detail = detail
        message = self.default_message
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, status_code)


class BadRequestError(StatusError):
    default_message = "bad request"


class UnauthorizedError(StatusError):
    default_message = "unauthorized"


class ForbiddenError(StatusError):
    default_message = "forbidden"


class NotFoundError(StatusError):
    default_message = "not found"


class RateLimitError(StatusError):
    default_message = "too many requests"


class InternalServerError(StatusError):
    default_message = "internal server error"


class BadGatewayError(StatusError):
    default_message = "bad gateway"


class ServiceUnavailableError(StatusError):
    default_message = "service unavailable"


class GatewayTimeoutError(StatusError):
    default_message = "gateway timeout"


class UnknownStatusError(StatusError):
    default_message = "unknown error"


STATUS_ERRORS: Dict[int, Type[StatusError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    429: RateLimitError,
    500: InternalServerError,
    502: BadGatewayError,
    503: ServiceUnavailableError,
    504: GatewayTimeoutError,
}


def error_for_status(status_code: int) -> Type[StatusError]:
    """Return the exception class for a non-200 status code"""
    return STATUS_ERRORS.get(status_code, UnknownStatusError)


def _extract_detail(body: str) -> Optional[str]:
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(error, str):
        return error
    return None


def raise_for_status(status_code: int, body: str = "") -> None:
    """Raise the mapped StatusError unless the status is exactly 200."""
    if status_code == 200:
        return
    error_class = error_for_status(status_code)
    raise error_class(status_code, body=body, detail=_extract_detail(body))
