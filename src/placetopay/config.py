"""Configuration management for the PlacetoPay SDK."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

import httpx
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from placetopay.core.auth import TimeProvider
from placetopay.core.retry import DEFAULT_RETRY_POLICY, RetryPolicy

DEFAULT_TIMEOUT_MS = 15000
DEFAULT_IDEMPOTENCY_HEADER = "Idempotency-Key"
DEFAULT_ENV_PREFIX = "PLACETOPAY_"

# Hooks receive a context dict and may be sync or async
RequestHook = Callable[[dict[str, Any]], Awaitable[None] | None]
ResponseHook = Callable[[dict[str, Any]], Awaitable[None] | None]


class PlacetoPayEnvironment:
    """Public checkout hosts."""

    CHECKOUT_TEST = "https://checkout-test.placetopay.com"
    CHECKOUT_PROD = "https://checkout.placetopay.com"


@dataclass
class ClientConfig:
    """
    Settings consumed by PlacetoPayClient and HttpClient.

    ``transport`` replaces the network layer of the underlying
    httpx.AsyncClient (e.g. httpx.MockTransport in tests).
    """

    login: str
    secret_key: str
    base_url: str
    gateway_base_url: str | None = None

    default_locale: str | None = None
    return_url_base: str | None = None
    cancel_url_base: str | None = None

    timeout_ms: int = DEFAULT_TIMEOUT_MS
    retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY
    time_provider: TimeProvider | None = None
    # Logs seed/nonce of outgoing auth blocks; never enable in production
    debug_auth: bool = False
    extra_headers: dict[str, str] = field(default_factory=dict)
    idempotency_header: str = DEFAULT_IDEMPOTENCY_HEADER

    on_request: RequestHook | None = None
    on_response: ResponseHook | None = None
    transport: httpx.AsyncBaseTransport | None = None


class PlacetoPaySettings(BaseSettings):
    """Client settings loaded from environment variables (prefix PLACETOPAY_ by default)."""

    login: str | None = None
    secret_key: str | None = None
    base_url: str | None = None
    gateway_base_url: str | None = None
    default_locale: str | None = None
    time_offset_ms: float | None = None
    time_offset_minutes: float | None = None
    debug_auth: bool = False
    log_level: str = "INFO"
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    # Shared with the host application, read without prefix
    public_base_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("PUBLIC_BASE_URL", "public_base_url"),
    )

    model_config = SettingsConfigDict(
        env_prefix=DEFAULT_ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )
