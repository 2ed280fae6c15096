"""Unit tests for SessionService."""

from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest

from placetopay.core.auth import build_auth
from placetopay.models.exceptions import (
    FinalStatusTimeout,
    MissingStatusError,
    PlacetoPayError,
    StatusError,
    ValidationError,
)
from placetopay.models.payment import Address, Payment, Person
from placetopay.models.redirect import RedirectRequest, SubscriptionRequest
from placetopay.services.session_service import SessionService

from conftest import FIXED_NOW, LOGIN, SECRET_KEY, FakeCarrier, ok_status

CREATED = {
    "status": ok_status("OK", "PC", "La petición se ha procesado correctamente"),
    "requestId": 12345,
    "processUrl": "https://checkout-test.placetopay.com/spa/session/12345/abc",
}


def make_service(carrier, time_provider, **kwargs) -> SessionService:
    return SessionService(carrier, LOGIN, SECRET_KEY, time_provider, **kwargs)


def make_request(**overrides) -> RedirectRequest:
    data = {
        "payment": {
            "reference": "ORDER-1001",
            "description": "Test order",
            "amount": {"currency": "COP", "total": 10000},
        },
        "ip_address": "127.0.0.1",
        "user_agent": "pytest",
        "return_url": "https://shop.example.com/return",
        "expiration": (FIXED_NOW + timedelta(hours=1)).isoformat(),
    }
    data.update(overrides)
    return RedirectRequest(**data)


class TestSessionCreate:
    @pytest.mark.asyncio
    async def test_create_success(self, time_provider):
        carrier = FakeCarrier(CREATED)
        service = make_service(carrier, time_provider)

        response = await service.create(make_request())

        assert response.request_id == 12345
        assert response.process_url.endswith("/12345/abc")

        call = carrier.last_call
        assert call["path"] == "/api/session"
        body = call["body"]
        assert body["locale"] == "es_UY"
        assert body["returnUrl"] == "https://shop.example.com/return"
        assert body["ipAddress"] == "127.0.0.1"
        assert body["payment"]["amount"] == {"currency": "COP", "total": 10000.0}
        assert body["auth"]["login"] == LOGIN
        assert body["auth"]["seed"] == "2024-01-01T12:00:00.000Z"
        assert set(body["auth"]) == {"login", "tranKey", "nonce", "seed"}

    @pytest.mark.asyncio
    async def test_locale_resolution_order(self, time_provider):
        carrier = FakeCarrier(CREATED, CREATED, CREATED)
        service = make_service(carrier, time_provider, default_locale="en_US")

        await service.create(make_request())
        await service.create(make_request(locale="pt_BR"))
        await service.create(make_request(locale="pt_BR"), locale="es_CO")

        assert [c["body"]["locale"] for c in carrier.calls] == ["en_US", "pt_BR", "es_CO"]

    @pytest.mark.asyncio
    async def test_auth_override(self, time_provider):
        carrier = FakeCarrier(CREATED)
        service = make_service(carrier, time_provider)
        auth = build_auth("other-login", "other-secret", time_provider, lambda: b"\x01" * 16)

        await service.create(make_request(), auth_override=auth)

        assert carrier.last_call["body"]["auth"] == auth.to_dict()

    @pytest.mark.asyncio
    async def test_return_url_from_base_and_metadata(self, time_provider):
        carrier = FakeCarrier(CREATED)
        service = make_service(
            carrier,
            time_provider,
            return_url_base="https://shop.example.com",
            cancel_url_base="https://shop.example.com",
        )
        request = make_request(
            return_url=None,
            metadata={
                "returnPath": "/checkout/return",
                "returnParams": {"order": "1001"},
                "cancelPath": "/checkout/cancel",
            },
        )

        await service.create(request)

        body = carrier.last_call["body"]
        assert body["returnUrl"] == "https://shop.example.com/checkout/return?order=1001"
        assert body["cancelUrl"] == "https://shop.example.com/checkout/cancel"

    @pytest.mark.asyncio
    async def test_subscription_only_request(self, time_provider):
        carrier = FakeCarrier(CREATED)
        service = make_service(carrier, time_provider)
        request = make_request(
            payment=None, subscription=SubscriptionRequest(reference="SUB-1")
        )

        await service.create(request)

        assert carrier.last_call["body"]["subscription"] == {"reference": "SUB-1"}

    @pytest.mark.asyncio
    async def test_unknown_request_keys_are_forwarded(self, time_provider):
        carrier = FakeCarrier(CREATED)
        service = make_service(carrier, time_provider)

        await service.create(make_request(captureAddress=True))

        assert carrier.last_call["body"]["captureAddress"] is True


class TestSessionCreateValidation:
    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"ip_address": None}, "ipAddress is required"),
            ({"user_agent": ""}, "userAgent is required"),
            ({"payment": None}, "payment, payments or subscription"),
            ({"return_url": None}, "returnUrl is required"),
            ({"return_url": "not-a-url"}, "returnUrl must be a valid URL"),
            ({"cancel_url": "/cancel"}, "cancelUrl must be a valid URL"),
            ({"locale": "es-CO"}, "locale must match pattern"),
            ({"attempts_limit": 0}, "attemptsLimit"),
            ({"metadata": {"initiatorIndicator": "ROBOT"}}, "initiatorIndicator"),
            ({"fields": [{"keyword": "k" * 60}]}, "request.fields keyword"),
        ],
    )
    @pytest.mark.asyncio
    async def test_rejected_before_network(self, time_provider, overrides, message):
        carrier = FakeCarrier(CREATED)
        service = make_service(carrier, time_provider)

        with pytest.raises(ValidationError, match=message):
            await service.create(make_request(**overrides))

        assert carrier.calls == []

    @pytest.mark.asyncio
    async def test_expiration_too_soon(self, time_provider):
        carrier = FakeCarrier(CREATED)
        service = make_service(carrier, time_provider)
        request = make_request(expiration=(FIXED_NOW + timedelta(minutes=2)).isoformat())

        with pytest.raises(ValidationError, match="expiration"):
            await service.create(request)
        assert carrier.calls == []

    @pytest.mark.asyncio
    async def test_payment_fields_limit(self, time_provider):
        carrier = FakeCarrier(CREATED)
        service = make_service(carrier, time_provider)
        payment = Payment(
            reference="ORDER-1",
            amount={"currency": "COP", "total": 1},
            fields=[{"keyword": f"k{i}"} for i in range(51)],
        )

        with pytest.raises(ValidationError, match="payment.fields exceeds 50"):
            await service.create(make_request(payment=payment))

    @pytest.mark.asyncio
    async def test_payments_list_fields_are_checked(self, time_provider):
        carrier = FakeCarrier(CREATED)
        service = make_service(carrier, time_provider)
        payments = [
            Payment(reference="A", fields=[{"keyword": "ok"}]),
            Payment(reference="B", fields=[{"keyword": "k", "displayOn": "never"}]),
        ]

        with pytest.raises(ValidationError, match=r"payments\[1\].fields displayOn"):
            await service.create(make_request(payment=None, payments=payments))

    @pytest.mark.asyncio
    async def test_buyer_document(self, time_provider):
        carrier = FakeCarrier(CREATED)
        service = make_service(carrier, time_provider)
        buyer = Person(document="12AB", document_type="CC", address=Address(country="CO"))

        with pytest.raises(ValidationError, match="^buyer.document"):
            await service.create(make_request(buyer=buyer))
        assert carrier.calls == []


class TestSessionCreateResponses:
    @pytest.mark.asyncio
    async def test_failed_status_raises_status_error(self, time_provider):
        rejected = {"status": ok_status("FAILED", 401, "Autenticación fallida")}
        service = make_service(FakeCarrier(rejected), time_provider)

        with pytest.raises(StatusError) as exc_info:
            await service.create(make_request())

        assert exc_info.value.status.status == "FAILED"
        assert exc_info.value.response_body == rejected
        assert exc_info.value.code == "STATUS_ERROR"

    @pytest.mark.asyncio
    async def test_missing_status(self, time_provider):
        service = make_service(FakeCarrier({"requestId": 1}), time_provider)

        with pytest.raises(MissingStatusError):
            await service.create(make_request())

    @pytest.mark.asyncio
    async def test_missing_process_url(self, time_provider):
        response = {"status": ok_status("OK"), "requestId": 1}
        service = make_service(FakeCarrier(response), time_provider)

        with pytest.raises(PlacetoPayError, match="Missing requestId or processUrl"):
            await service.create(make_request())


class TestSessionQueries:
    @pytest.mark.asyncio
    async def test_get(self, time_provider, approved_session_body):
        carrier = FakeCarrier(approved_session_body)
        service = make_service(carrier, time_provider)

        info = await service.get(12345)

        assert carrier.last_call["path"] == "/api/session/12345"
        assert set(carrier.last_call["body"]) == {"auth"}
        assert info.status.status == "APPROVED"
        assert info.payment[0].internal_reference == 987654

    @pytest.mark.asyncio
    async def test_get_fills_missing_request_id(self, time_provider):
        service = make_service(FakeCarrier({"status": ok_status("PENDING")}), time_provider)

        info = await service.get("777")

        assert info.request_id == 777

    @pytest.mark.asyncio
    async def test_get_requires_id(self, time_provider):
        with pytest.raises(ValidationError, match="requestId is required"):
            await make_service(FakeCarrier(), time_provider).get("")

    @pytest.mark.asyncio
    async def test_cancel(self, time_provider):
        carrier = FakeCarrier({"requestId": 5, "status": ok_status("REJECTED", "?C")})
        service = make_service(carrier, time_provider)

        info = await service.cancel(5)

        assert carrier.last_call["path"] == "/api/session/5/cancel"
        assert info.status.status == "REJECTED"

    @pytest.mark.asyncio
    async def test_each_call_signs_a_fresh_auth_block(self, time_provider):
        carrier = FakeCarrier({"status": ok_status("PENDING")}, {"status": ok_status("PENDING")})
        service = make_service(carrier, time_provider)

        await service.get(1)
        await service.get(1)

        first, second = (c["body"]["auth"] for c in carrier.calls)
        assert first["nonce"] != second["nonce"]


class TestWaitForFinalStatus:
    @pytest.mark.asyncio
    async def test_polls_until_final(self, time_provider, approved_session_body):
        carrier = FakeCarrier(
            {"requestId": 12345, "status": ok_status("PENDING")},
            {"requestId": 12345, "status": ok_status("PENDING")},
            approved_session_body,
        )
        service = make_service(carrier, time_provider)

        with patch(
            "placetopay.services.session_service.asyncio.sleep", new_callable=AsyncMock
        ) as sleep:
            info = await service.wait_for_final_status(12345)

        assert info.status.status == "APPROVED"
        assert len(carrier.calls) == 3
        assert sleep.await_count == 2
        sleep.assert_awaited_with(4.0)

    @pytest.mark.asyncio
    async def test_timeout(self, time_provider):
        carrier = FakeCarrier(*[{"status": ok_status("PENDING")} for _ in range(3)])
        service = make_service(carrier, time_provider)

        with patch(
            "placetopay.services.session_service.asyncio.sleep", new_callable=AsyncMock
        ) as sleep:
            with pytest.raises(FinalStatusTimeout) as exc_info:
                await service.wait_for_final_status(1, poll_interval_ms=10, max_attempts=3)

        assert exc_info.value.last_status == "PENDING"
        assert exc_info.value.code == "TIMEOUT_FINAL_STATUS"
        assert len(carrier.calls) == 3
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_custom_final_statuses(self, time_provider):
        carrier = FakeCarrier({"status": ok_status("PENDING_VALIDATION")})
        service = make_service(carrier, time_provider)

        info = await service.wait_for_final_status(1, final_statuses=["PENDING_VALIDATION"])

        assert info.status.status == "PENDING_VALIDATION"

    @pytest.mark.asyncio
    async def test_failed_is_not_final_by_default(self, time_provider):
        carrier = FakeCarrier(
            {"status": ok_status("FAILED")}, {"status": ok_status("REJECTED")}
        )
        service = make_service(carrier, time_provider)

        with patch("placetopay.services.session_service.asyncio.sleep", new_callable=AsyncMock):
            info = await service.wait_for_final_status(1)

        assert info.status.status == "REJECTED"
