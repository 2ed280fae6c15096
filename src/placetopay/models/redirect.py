"""Checkout (redirection) contracts: sessions, transactions, refunds and notifications."""

from typing import Any, Literal

from placetopay.models.base import GatewayModel
from placetopay.models.payment import (
    Amount,
    AmountConversion,
    NameValuePair,
    Payment,
    Person,
)
from placetopay.models.status import Status


class SubscriptionRequest(GatewayModel):
    reference: str
    description: str | None = None
    amount: Amount | None = None
    fields: list[NameValuePair] | None = None


class RedirectRequest(GatewayModel):
    """
    Body of a checkout session creation.

    Required fields (ip_address, user_agent, one of payment/payments/subscription,
    return_url) are enforced by SessionService so every failure surfaces as the
    SDK's own ValidationError.
    """

    locale: str | None = None
    payment: Payment | None = None
    payments: list[Payment] | None = None
    subscription: SubscriptionRequest | None = None
    buyer: Person | None = None
    payer: Person | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    return_url: str | None = None
    cancel_url: str | None = None
    expiration: str | None = None
    payment_method: str | None = None
    fields: list[NameValuePair] | None = None
    skip_result: bool | None = None
    no_buyer_fill: bool | None = None
    attempts_limit: int | None = None
    type: str | None = None
    metadata: dict[str, Any] | None = None


class RedirectResponse(GatewayModel):
    status: Status
    request_id: int | None = None
    process_url: str | None = None


class Transaction(GatewayModel):
    """A payment attempt as reported by a session or gateway query."""

    status: Status | None = None
    internal_reference: int | None = None
    reference: str | None = None
    payment_method: str | None = None
    payment_method_name: str | None = None
    issuer_name: str | None = None
    amount: Amount | AmountConversion | None = None
    authorization: str | int | None = None
    receipt: str | int | None = None
    franchise: str | None = None
    refunded: bool | None = None
    processor_fields: list[NameValuePair] | dict[str, Any] | None = None


class RedirectInformation(GatewayModel):
    """Full state of a checkout session (query, cancel, reverse responses)."""

    request_id: int | None = None
    status: Status | None = None
    request: RedirectRequest | None = None
    payment: list[Transaction] | Transaction | None = None
    subscription: dict[str, Any] | None = None


TransactionAction = Literal["checkout", "reauthorization", "reverse"]


class TransactionActionRequest(GatewayModel):
    action: TransactionAction
    internal_reference: int
    amount: Amount | None = None
    fields: list[NameValuePair] | None = None


class RefundRequest(GatewayModel):
    internal_reference: int
    amount: Amount | None = None
    fields: list[NameValuePair] | None = None


class CheckoutNotification(GatewayModel):
    """
    Webhook body posted by checkout when a session changes state.

    Only ``request_id``, ``status.status`` and ``status.date`` are covered by
    ``signature``; every other field can be altered without invalidating it.
    """

    status: Status | None = None
    request_id: int | str | None = None
    reference: str | None = None
    signature: str | None = None
