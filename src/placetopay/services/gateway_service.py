"""Gateway endpoints: direct processing, tokenization, queries and reports."""

from typing import Any

import structlog

from placetopay.carrier.base import Carrier
from placetopay.core.auth import TimeProvider
from placetopay.core.metadata import assert_metadata_format
from placetopay.core.url import assert_valid_url
from placetopay.core.validation import (
    assert_future_expiration,
    assert_locale_pattern,
    assert_required,
)
from placetopay.models.exceptions import ValidationError
from placetopay.models.gateway import (
    CollectRequest,
    Gateway3dsRequest,
    GatewayAccountValidatorRequest,
    GatewayAccountValidatorResponse,
    GatewayBasicResponse,
    GatewayCashOrderRequest,
    GatewayInformationRequest,
    GatewayInformationResponse,
    GatewayOtpRequest,
    GatewayPinpadRequest,
    GatewayProcessRequest,
    GatewayProcessResponse,
    GatewayQueryRequest,
    GatewayQueryResponse,
    GatewayReportRequest,
    GatewayReportResponse,
    GatewayRequest,
    GatewaySearchRequest,
    GatewaySearchResponse,
    GatewayTokenizeRequest,
    GatewayTokenRequest,
    GatewayTransactionRequest,
    InstrumentInvalidateRequest,
)
from placetopay.services.base import BaseService, ModelT

logger = structlog.get_logger(__name__)

DEFAULT_LOCALE = "es_UY"


def _require_reference(request: Any) -> None:
    if not (request.internal_reference or request.request_id or request.reference):
        raise ValidationError("internalReference, requestId or reference is required")


class GatewayService(BaseService):
    """
    Gateway API client.

    Gateway statuses are strict (OK, FAILED, APPROVED, PENDING, REJECTED
    depending on the endpoint) and are returned as received. Requests carrying
    an ``idempotency_key`` send it as a header, never in the body.
    """

    def __init__(
        self,
        carrier: Carrier,
        login: str,
        secret_key: str,
        time_provider: TimeProvider | None = None,
        default_locale: str | None = None,
    ) -> None:
        super().__init__(carrier, login, secret_key, time_provider)
        self.default_locale = default_locale

    def _resolve_locale(self, locale: str | None) -> str:
        resolved = locale or self.default_locale or DEFAULT_LOCALE
        assert_locale_pattern(resolved)
        return resolved

    async def _send(
        self,
        path: str,
        request: GatewayRequest,
        model: type[ModelT],
        label: str,
        localized: bool = False,
    ) -> ModelT:
        body = self._body(request)
        if localized:
            body["locale"] = self._resolve_locale(request.locale)

        raw = await self.carrier.post(path, body, idempotency_key=request.idempotency_key)
        return self._parse(raw, model, label)

    async def collect(self, request: CollectRequest) -> GatewayBasicResponse:
        """
        Charge a stored token (``/api/collect``).

        Requires payment, instrument, payer, ip address, user agent and a
        valid return URL; expiration and metadata are checked when present.
        """
        assert_required(request.payment, "payment")
        assert_required(request.instrument, "instrument")
        assert_required(request.payer, "payer")
        assert_required(request.ip_address, "ipAddress")
        assert_required(request.user_agent, "userAgent")
        assert_required(request.return_url, "returnUrl", " for collect")
        assert_valid_url(request.return_url, "returnUrl")
        assert_future_expiration(request.expiration, self.time_provider)
        assert_metadata_format(request.metadata)

        response = await self._send(
            "/api/collect", request, GatewayBasicResponse, "collect", localized=True
        )
        logger.info(
            "placetopay_collect_executed",
            request_id=response.request_id,
            status=response.status.status if response.status else None,
        )
        return response

    async def invalidate_instrument(
        self, request: InstrumentInvalidateRequest
    ) -> GatewayBasicResponse:
        assert_required(request.instrument, "instrument")
        return await self._send(
            "/api/instrument/invalidate",
            request,
            GatewayBasicResponse,
            "instrument invalidate",
            localized=True,
        )

    async def instrument_information(
        self, request: GatewayInformationRequest
    ) -> GatewayInformationResponse:
        """Routing information for an instrument (provider, card types, 3DS/OTP flags)."""
        assert_required(request.payment, "payment")
        assert_required(request.instrument, "instrument")
        assert_required(request.ip_address, "ipAddress")
        assert_required(request.user_agent, "userAgent")
        assert_metadata_format(request.metadata)

        return await self._send(
            "/api/gateway/information",
            request,
            GatewayInformationResponse,
            "gateway information",
            localized=True,
        )

    async def lookup_token(self, request: GatewayTokenRequest) -> GatewayBasicResponse:
        assert_required(request.instrument, "instrument")
        return await self._send(
            "/api/gateway/token",
            request,
            GatewayBasicResponse,
            "gateway token",
            localized=True,
        )

    async def process(self, request: GatewayProcessRequest) -> GatewayProcessResponse:
        assert_required(request.payment, "payment")
        assert_required(request.instrument, "instrument")
        assert_required(request.payer, "payer")
        assert_required(request.ip_address, "ipAddress")
        assert_required(request.user_agent, "userAgent")

        return await self._send(
            "/gateway/process",
            request,
            GatewayProcessResponse,
            "gateway process",
            localized=True,
        )

    async def query(self, request: GatewayQueryRequest) -> GatewayQueryResponse:
        _require_reference(request)
        return await self._send(
            "/gateway/query", request, GatewayQueryResponse, "gateway query"
        )

    async def search(self, request: GatewaySearchRequest) -> GatewaySearchResponse:
        return await self._send(
            "/gateway/search", request, GatewaySearchResponse, "gateway search"
        )

    async def transaction(self, request: GatewayTransactionRequest) -> GatewayProcessResponse:
        """Checkout, reauthorize or reverse a pre-authorization."""
        assert_required(request.action, "action")
        assert_required(request.internal_reference, "internalReference")
        return await self._send(
            "/gateway/transaction",
            request,
            GatewayProcessResponse,
            "gateway transaction",
        )

    async def tokenize(self, request: GatewayTokenizeRequest) -> GatewayBasicResponse:
        assert_required(request.instrument, "instrument")
        return await self._send(
            "/gateway/tokenize", request, GatewayBasicResponse, "gateway tokenize"
        )

    async def otp(self, request: GatewayOtpRequest) -> GatewayBasicResponse:
        assert_required(request.internal_reference, "internalReference")
        assert_required(request.otp, "otp")
        return await self._send("/gateway/otp", request, GatewayBasicResponse, "gateway otp")

    async def three_ds(self, request: Gateway3dsRequest) -> GatewayBasicResponse:
        assert_required(request.internal_reference, "internalReference")
        return await self._send("/gateway/3ds", request, GatewayBasicResponse, "gateway 3ds")

    async def report(self, request: GatewayReportRequest) -> GatewayReportResponse:
        _require_reference(request)
        return await self._send(
            "/gateway/report", request, GatewayReportResponse, "gateway report"
        )

    async def pinpad(self, request: GatewayPinpadRequest) -> GatewayBasicResponse:
        return await self._send(
            "/gateway/pinpad", request, GatewayBasicResponse, "gateway pinpad"
        )

    async def account_validator(
        self, request: GatewayAccountValidatorRequest
    ) -> GatewayAccountValidatorResponse:
        assert_required(request.instrument, "instrument")
        assert_required(request.ip_address, "ipAddress")
        assert_required(request.user_agent, "userAgent")
        return await self._send(
            "/gateway/account-validator",
            request,
            GatewayAccountValidatorResponse,
            "gateway account-validator",
        )

    async def cash_order(self, request: GatewayCashOrderRequest) -> GatewayBasicResponse:
        assert_required(request.payment, "payment")
        assert_required(request.payer, "payer")
        return await self._send(
            "/gateway/cashorder", request, GatewayBasicResponse, "gateway cashorder"
        )
