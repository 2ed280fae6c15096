"""PlacetoPay client: wires transports, carriers and services."""

import structlog

from placetopay.carrier.rest_carrier import RestCarrier
from placetopay.config import DEFAULT_ENV_PREFIX, ClientConfig, PlacetoPaySettings
from placetopay.core.auth import OffsetTimeProvider, SystemTimeProvider, TimeProvider
from placetopay.core.http_client import HttpClient
from placetopay.models.exceptions import ValidationError
from placetopay.services.autopay_service import AutopayService
from placetopay.services.gateway_service import GatewayService
from placetopay.services.payment_link_service import PaymentLinkService
from placetopay.services.refund_service import RefundService
from placetopay.services.report_service import ReportService
from placetopay.services.session_service import SessionService
from placetopay.services.transaction_service import TransactionService
from placetopay.services.webhook_verifier import WebhookVerifier

logger = structlog.get_logger(__name__)

MAX_TIME_OFFSET_MS = 30 * 60 * 1000


class PlacetoPayClient:
    """
    Entry point to the PlacetoPay services.

    Checkout services (sessions, transactions, refunds, payment links) go to
    ``base_url``; gateway, autopay and report services go to
    ``gateway_base_url`` when it is set and differs.

    Usage:
        async with PlacetoPayClient(config) as client:
            session = await client.sessions.create(request)
    """

    def __init__(self, config: ClientConfig):
        if not config.login:
            raise ValidationError("login is required")
        if not config.secret_key:
            raise ValidationError("secretKey is required")
        if not config.base_url:
            raise ValidationError("baseUrl is required")

        self.config = config
        time_provider = config.time_provider or SystemTimeProvider()

        self._http = HttpClient(config)
        carrier = RestCarrier(self._http)

        if config.gateway_base_url and config.gateway_base_url != config.base_url:
            self._gateway_http = HttpClient(config, base_url=config.gateway_base_url)
            gateway_carrier = RestCarrier(self._gateway_http)
        else:
            self._gateway_http = self._http
            gateway_carrier = carrier

        credentials = (config.login, config.secret_key, time_provider)

        self.sessions = SessionService(
            carrier,
            *credentials,
            default_locale=config.default_locale,
            return_url_base=config.return_url_base,
            cancel_url_base=config.cancel_url_base,
        )
        self.transactions = TransactionService(carrier, *credentials)
        self.refunds = RefundService(carrier, *credentials)
        self.webhooks = WebhookVerifier(config.secret_key)
        self.gateway = GatewayService(
            gateway_carrier, *credentials, default_locale=config.default_locale
        )
        self.payment_links = PaymentLinkService(carrier, *credentials)
        self.autopay = AutopayService(gateway_carrier, *credentials)
        self.reports = ReportService(gateway_carrier, *credentials)

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_ENV_PREFIX, **overrides) -> "PlacetoPayClient":
        """
        Build a client from ``{prefix}LOGIN``, ``{prefix}SECRET_KEY`` and
        ``{prefix}BASE_URL`` (required) plus the optional variables read by
        PlacetoPaySettings. ``overrides`` are applied to the resulting
        ClientConfig (e.g. ``transport`` or ``retry_policy``).
        """
        settings = PlacetoPaySettings(_env_prefix=prefix)

        if not settings.login or not settings.secret_key or not settings.base_url:
            raise ValidationError(
                f"Missing environment variables: {prefix}LOGIN, {prefix}SECRET_KEY, {prefix}BASE_URL"
            )

        config = ClientConfig(
            login=settings.login,
            secret_key=settings.secret_key,
            base_url=settings.base_url,
            gateway_base_url=settings.gateway_base_url,
            default_locale=settings.default_locale,
            return_url_base=settings.public_base_url,
            cancel_url_base=settings.public_base_url,
            timeout_ms=settings.timeout_ms,
            time_provider=resolve_time_provider(settings, prefix),
            debug_auth=settings.debug_auth,
        )
        for name, value in overrides.items():
            setattr(config, name, value)

        return cls(config)

    async def aclose(self) -> None:
        await self._http.close()
        if self._gateway_http is not self._http:
            await self._gateway_http.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


def resolve_time_provider(
    settings: PlacetoPaySettings, prefix: str = DEFAULT_ENV_PREFIX
) -> TimeProvider:
    """
    Clock for auth seeds, shifted by the configured offset.

    ``time_offset_ms`` wins over ``time_offset_minutes``; offsets beyond
    +/-30 minutes are rejected.
    """
    if settings.time_offset_ms is not None:
        offset_ms = settings.time_offset_ms
    elif settings.time_offset_minutes is not None:
        offset_ms = settings.time_offset_minutes * 60_000
    else:
        return SystemTimeProvider()

    if abs(offset_ms) > MAX_TIME_OFFSET_MS:
        raise ValidationError(
            f"{prefix}TIME_OFFSET_MS/{prefix}TIME_OFFSET_MINUTES out of range (max +/-30 minutes)"
        )

    logger.info("placetopay_time_offset_applied", offset_ms=offset_ms)
    return OffsetTimeProvider(offset_ms)
