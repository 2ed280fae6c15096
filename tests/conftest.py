"""Shared fixtures for PlacetoPay SDK tests.

This module provides:
- A fixed clock so auth seeds and expiration checks are deterministic
- An in-memory Carrier that records calls and replays canned responses
- Sample checkout payloads
"""

from datetime import datetime, timezone
from typing import Any

import pytest

from placetopay.carrier.base import Carrier
from placetopay.core.auth import FixedTimeProvider

LOGIN = "test-login"
SECRET_KEY = "test-secret"
FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeCarrier(Carrier):
    """Carrier returning queued responses (or raising queued exceptions)."""

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    async def post(
        self,
        path,
        body,
        headers=None,
        idempotency_key=None,
        response_type="json",
    ):
        self.calls.append(
            {
                "path": path,
                "body": body,
                "headers": headers,
                "idempotency_key": idempotency_key,
                "response_type": response_type,
            }
        )
        if not self.responses:
            return {"status": {"status": "OK", "reason": "00", "message": "ok"}}

        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last_call(self) -> dict[str, Any]:
        return self.calls[-1]


def ok_status(status: str = "OK", reason: Any = "00", message: str = "ok") -> dict[str, Any]:
    return {
        "status": status,
        "reason": reason,
        "message": message,
        "date": "2024-01-01T12:00:00-05:00",
    }


@pytest.fixture
def time_provider():
    return FixedTimeProvider(FIXED_NOW)


@pytest.fixture
def carrier():
    return FakeCarrier()


@pytest.fixture
def sample_payment():
    return {
        "reference": "ORDER-1001",
        "description": "Test order",
        "amount": {"currency": "COP", "total": 10000},
    }


@pytest.fixture
def approved_session_body():
    """Session query response with one approved attempt."""
    return {
        "requestId": 12345,
        "status": ok_status("APPROVED", "00", "La petición ha sido aprobada exitosamente"),
        "request": {
            "payment": {
                "reference": "ORDER-1001",
                "amount": {"currency": "COP", "total": 10000},
            }
        },
        "payment": [
            {
                "status": ok_status("APPROVED", "00", "Aprobada"),
                "internalReference": 987654,
                "reference": "ORDER-1001",
                "paymentMethod": "visa",
                "amount": {
                    "from": {"currency": "COP", "total": 10000},
                    "to": {"currency": "COP", "total": 10000},
                    "factor": 1,
                },
                "authorization": "999999",
                "receipt": "1234",
            }
        ],
    }
