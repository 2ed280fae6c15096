"""Payment link and autopay contracts."""

from typing import Any

from placetopay.models.base import GatewayModel
from placetopay.models.payment import Amount
from placetopay.models.status import Status


class PaymentLinkCreateRequest(GatewayModel):
    name: str | None = None
    reference: str | None = None
    description: str | None = None
    amount: Amount | None = None
    expiration_date: str | None = None
    payment_expiration: int | None = None
    send_email: bool | None = None
    emails: list[str] | None = None


class PaymentLinkCreateResponse(GatewayModel):
    status: Status | None = None
    id: int | None = None
    url: str | None = None


class PaymentLinkInfo(GatewayModel):
    """
    Payment link detail.

    Unlike other endpoints, ``status`` here is the link state string
    (e.g. "ACTIVE"), not a Status block.
    """

    id: int | None = None
    status: str | dict[str, Any] | None = None
    url: str | None = None
    expiration_date: str | None = None
    name: str | None = None
    reference: str | None = None
    description: str | None = None
    total_payments: int | None = None
    available_payments: int | None = None
    payment_expiration: int | None = None
    amount: Amount | None = None
    site: dict[str, Any] | None = None
    created_at: str | None = None
    updated_at: str | None = None
    payment_methods: list[str] | None = None


class PaymentLinkDisableResponse(GatewayModel):
    status: Status | None = None
    id: int | None = None


class AutopayRecurring(GatewayModel):
    type: str | None = None
    periodicity: str | None = None
    interval: int | None = None
    max_periods: int | None = None
    next_payment: str | None = None
    start_date: str | None = None
    due_date: str | None = None


class AutopaySubscription(GatewayModel):
    reference: str
    id: int | str | None = None
    description: str | None = None
    recurring: AutopayRecurring | None = None
    amount: Amount | None = None


class AutopayRequest(GatewayModel):
    """Body of autopay create/update calls."""

    subscription: AutopaySubscription | None = None
    due_day: str | None = None
    additional: dict[str, Any] | None = None
    expiration: str | None = None
    return_url: str | None = None
    locale: str | None = None


class AutopayCreateResponse(GatewayModel):
    status: Status | None = None
    id: int | str | None = None
    process_url: str | None = None
    request_id: int | None = None


class AutopayBasicResponse(GatewayModel):
    status: Status | None = None
