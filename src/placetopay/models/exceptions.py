"""Custom exceptions for the PlacetoPay SDK."""

from typing import Any


class PlacetoPayError(Exception):
    """Base exception for every error raised by the SDK."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ValidationError(PlacetoPayError):
    """
    Raised before any network call when a request breaks a documented constraint.

    This is a TERMINAL error. It is never retried; the message names the
    offending field.
    """

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.details = details


class NetworkError(PlacetoPayError):
    """
    Raised when the request never produced an HTTP response.

    Examples:
    - DNS resolution failures
    - Connection refused / reset
    - Timeout enforced by the transport
    """

    def __init__(self, message: str):
        super().__init__(message, "NETWORK_ERROR")


class HttpError(PlacetoPayError):
    """
    Raised when the gateway answers with a non-2xx status.

    Carries the HTTP status and the parsed body so callers can branch on
    gateway reason codes. Retried only when the status is listed in the
    active RetryPolicy.
    """

    def __init__(
        self,
        message: str,
        http_status: int,
        response_body: Any = None,
    ):
        super().__init__(message, "HTTP_ERROR")
        self.http_status = http_status
        self.response_body = response_body


class InvalidResponseError(PlacetoPayError):
    """
    Raised when the response body cannot be parsed as JSON.

    Kept apart from HttpError: a parse failure is never retried, whatever
    the HTTP status that came with it.
    """

    def __init__(self, message: str, http_status: int, response_body: Any = None):
        super().__init__(message, "INVALID_RESPONSE")
        self.http_status = http_status
        self.response_body = response_body


class StatusError(PlacetoPayError):
    """
    Raised when the HTTP call succeeded but the gateway status rejects the operation.

    This is a TERMINAL business outcome and is never retried.
    """

    def __init__(self, message: str, status: Any, response_body: Any = None):
        super().__init__(message, "STATUS_ERROR")
        self.status = status
        self.response_body = response_body


class MissingStatusError(PlacetoPayError):
    """Raised when a gateway response lacks the mandatory status block."""

    def __init__(self, message: str, response_body: Any = None):
        super().__init__(message, "MISSING_STATUS")
        self.response_body = response_body


class FinalStatusTimeout(PlacetoPayError):
    """Raised when polling a session never reached a terminal status."""

    def __init__(self, message: str, last_status: str | None = None):
        super().__init__(message, "TIMEOUT_FINAL_STATUS")
        self.last_status = last_status
