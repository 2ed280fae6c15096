"""Checkout session lifecycle: create, query, cancel and poll."""

import asyncio
from typing import Iterable

import structlog

from placetopay.carrier.base import Carrier
from placetopay.core.auth import Auth, TimeProvider
from placetopay.core.documents import validate_person_document
from placetopay.core.metadata import assert_metadata_format
from placetopay.core.url import assert_valid_url, build_return_url
from placetopay.core.validation import (
    assert_attempts_limit,
    assert_fields_limits,
    assert_future_expiration,
    assert_locale_pattern,
    assert_required,
)
from placetopay.models.exceptions import (
    FinalStatusTimeout,
    PlacetoPayError,
    StatusError,
    ValidationError,
)
from placetopay.models.redirect import (
    RedirectInformation,
    RedirectRequest,
    RedirectResponse,
)
from placetopay.models.status import StatusCode
from placetopay.services.base import BaseService

logger = structlog.get_logger(__name__)

DEFAULT_LOCALE = "es_UY"
DEFAULT_POLL_INTERVAL_MS = 4000
DEFAULT_POLL_ATTEMPTS = 15
DEFAULT_FINAL_STATUSES = (
    StatusCode.APPROVED.value,
    StatusCode.REJECTED.value,
    StatusCode.APPROVED_PARTIAL.value,
    StatusCode.PARTIAL_EXPIRED.value,
)


class SessionService(BaseService):
    """
    Checkout sessions (``/api/session``).

    ``create`` runs every documented pre-flight check (required fields,
    URLs, locale, expiration window, extra-field limits, metadata and
    documents) before the carrier is touched.
    """

    def __init__(
        self,
        carrier: Carrier,
        login: str,
        secret_key: str,
        time_provider: TimeProvider | None = None,
        default_locale: str | None = None,
        return_url_base: str | None = None,
        cancel_url_base: str | None = None,
    ) -> None:
        super().__init__(carrier, login, secret_key, time_provider)
        self.default_locale = default_locale
        self.return_url_base = return_url_base
        self.cancel_url_base = cancel_url_base

    async def create(
        self,
        request: RedirectRequest,
        locale: str | None = None,
        auth_override: Auth | None = None,
    ) -> RedirectResponse:
        """
        Create a checkout session.

        Args:
            request: Session request
            locale: Overrides request.locale and the client default
            auth_override: Pre-built auth block (e.g. signed elsewhere)

        Returns:
            RedirectResponse with request_id and process_url

        Raises:
            ValidationError: Request breaks a documented constraint (no network call made)
            StatusError: Gateway answered with a non-OK status
            PlacetoPayError: OK response without request_id/process_url
        """
        self._validate_create(request)

        return_url = request.return_url or self._url_from_metadata(
            request, self.return_url_base, "returnPath", "returnParams"
        )
        assert_required(
            return_url,
            "returnUrl",
            " (direct or via returnUrlBase + metadata.returnPath)",
        )
        assert_valid_url(return_url, "returnUrl")

        cancel_url = request.cancel_url or self._url_from_metadata(
            request, self.cancel_url_base, "cancelPath", "cancelParams"
        )
        if cancel_url:
            assert_valid_url(cancel_url, "cancelUrl")

        resolved_locale = locale or request.locale or self.default_locale or DEFAULT_LOCALE
        assert_locale_pattern(resolved_locale)

        body = request.to_payload()
        body.update(
            {
                "locale": resolved_locale,
                "returnUrl": return_url,
                "auth": (auth_override.to_dict() if auth_override else self._auth()),
            }
        )
        if cancel_url:
            body["cancelUrl"] = cancel_url

        raw = await self.carrier.post("/api/session", body)
        response = self._parse(raw, RedirectResponse, "create")

        if response.status.status != StatusCode.OK.value:
            raise StatusError(
                f"Session not created: {response.status.message}",
                response.status,
                raw,
            )
        if not response.request_id or not response.process_url:
            raise PlacetoPayError("Missing requestId or processUrl")

        logger.info(
            "placetopay_session_created",
            request_id=response.request_id,
            process_url=response.process_url,
        )
        return response

    def _validate_create(self, request: RedirectRequest) -> None:
        assert_required(request.ip_address, "ipAddress")
        assert_required(request.user_agent, "userAgent")
        if not request.payment and not request.payments and not request.subscription:
            raise ValidationError("You must provide payment, payments or subscription")

        assert_locale_pattern(request.locale)
        assert_future_expiration(request.expiration, self.time_provider)
        assert_attempts_limit(request.attempts_limit)
        assert_metadata_format(request.metadata)

        assert_fields_limits(request.fields, "request")
        if request.payment is not None:
            assert_fields_limits(request.payment.fields, "payment")
        for index, payment in enumerate(request.payments or []):
            assert_fields_limits(payment.fields, f"payments[{index}]")
        if request.subscription is not None:
            assert_fields_limits(request.subscription.fields, "subscription")

        validate_person_document(request.buyer, "buyer")
        validate_person_document(request.payer, "payer")

    @staticmethod
    def _url_from_metadata(
        request: RedirectRequest,
        base: str | None,
        path_key: str,
        params_key: str,
    ) -> str | None:
        metadata = request.metadata or {}
        if not base or not metadata.get(path_key):
            return None
        return build_return_url(base, str(metadata[path_key]), metadata.get(params_key))

    async def get(self, request_id: int | str) -> RedirectInformation:
        """Query the current state of a session."""
        assert_required(request_id, "requestId")

        raw = await self.carrier.post(f"/api/session/{request_id}", {"auth": self._auth()})
        info = self._parse(raw, RedirectInformation, "query")
        if not info.request_id:
            info.request_id = int(request_id)
        return info

    async def cancel(self, request_id: int | str) -> RedirectInformation:
        """Cancel a pending session."""
        assert_required(request_id, "requestId")

        raw = await self.carrier.post(
            f"/api/session/{request_id}/cancel", {"auth": self._auth()}
        )
        return self._parse(raw, RedirectInformation, "cancel")

    async def wait_for_final_status(
        self,
        request_id: int | str,
        poll_interval_ms: float = DEFAULT_POLL_INTERVAL_MS,
        max_attempts: int = DEFAULT_POLL_ATTEMPTS,
        final_statuses: Iterable[str] | None = None,
    ) -> RedirectInformation:
        """
        Poll a session sequentially until it reaches a terminal status.

        Raises:
            FinalStatusTimeout: No terminal status after ``max_attempts`` queries
        """
        finals = set(final_statuses or DEFAULT_FINAL_STATUSES)
        last_status = None

        for attempt in range(1, max_attempts + 1):
            info = await self.get(request_id)
            last_status = info.status.status
            if last_status in finals:
                return info

            logger.debug(
                "placetopay_session_pending",
                request_id=request_id,
                status=last_status,
                attempt=attempt,
            )
            if attempt < max_attempts:
                await asyncio.sleep(poll_interval_ms / 1000)

        raise FinalStatusTimeout(
            f"Session {request_id} did not reach a final status in time",
            last_status,
        )
