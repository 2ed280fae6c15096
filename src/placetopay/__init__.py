"""PlacetoPay SDK: checkout, gateway, webhooks and Asobancaria files."""

from placetopay.config import ClientConfig, PlacetoPayEnvironment, PlacetoPaySettings
from placetopay.client import PlacetoPayClient
from placetopay.core.auth import (
    Auth,
    FixedTimeProvider,
    OffsetTimeProvider,
    SystemTimeProvider,
    TimeProvider,
    build_auth,
)
from placetopay.core.retry import DEFAULT_RETRY_POLICY, RetryPolicy, with_retry
from placetopay.core.session_outcome import SessionOutcome, summarize_session_outcome
from placetopay.invoice.asobancaria2001 import build_billing_file, build_collection_file
from placetopay.models.exceptions import (
    FinalStatusTimeout,
    HttpError,
    InvalidResponseError,
    MissingStatusError,
    NetworkError,
    PlacetoPayError,
    StatusError,
    ValidationError,
)
from placetopay.services.webhook_verifier import VerificationReason, WebhookVerifier

__version__ = "0.1.0"

__all__ = [
    "Auth",
    "ClientConfig",
    "DEFAULT_RETRY_POLICY",
    "FinalStatusTimeout",
    "FixedTimeProvider",
    "HttpError",
    "InvalidResponseError",
    "MissingStatusError",
    "NetworkError",
    "OffsetTimeProvider",
    "PlacetoPayClient",
    "PlacetoPayEnvironment",
    "PlacetoPayError",
    "PlacetoPaySettings",
    "RetryPolicy",
    "SessionOutcome",
    "StatusError",
    "SystemTimeProvider",
    "TimeProvider",
    "ValidationError",
    "VerificationReason",
    "WebhookVerifier",
    "build_auth",
    "build_billing_file",
    "build_collection_file",
    "summarize_session_outcome",
    "with_retry",
]
