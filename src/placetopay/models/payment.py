"""Payment, amount and person contracts."""

from typing import Any

from pydantic import Field

from placetopay.models.base import GatewayModel


class TaxDetail(GatewayModel):
    kind: str | None = None
    amount: float | None = None
    base: float | None = None


class AmountDetail(GatewayModel):
    kind: str | None = None
    amount: float | None = None


class Amount(GatewayModel):
    """Amount to charge, optionally broken down into taxes and details."""

    currency: str
    total: float
    taxes: list[TaxDetail] | None = None
    details: list[AmountDetail] | None = None


class AmountBase(GatewayModel):
    currency: str | None = None
    total: float | None = None


class AmountConversion(GatewayModel):
    """Amount as reported on a processed transaction (``from`` -> ``to``)."""

    from_: AmountBase | None = Field(default=None, alias="from")
    to: AmountBase | None = None
    factor: float | None = None


class NameValuePair(GatewayModel):
    """Extra field attached to a session, payment or transaction."""

    keyword: str
    value: Any = None
    display_on: str | None = None


class Item(GatewayModel):
    sku: str | None = None
    name: str | None = None
    category: str | None = None
    qty: int | None = None
    price: float | None = None


class Recurring(GatewayModel):
    periodicity: str | None = None
    interval: int | None = None
    next_payment: str | None = None
    max_periods: int | None = None
    due_date: str | None = None
    notification_url: str | None = None


class Payment(GatewayModel):
    reference: str | None = None
    description: str | None = None
    amount: Amount | None = None
    allow_partial: bool | None = None
    items: list[Item] | None = None
    shipping: dict[str, Any] | None = None
    discount: dict[str, Any] | None = None
    recurring: Recurring | None = None
    subscribe: bool | None = None
    fields: list[NameValuePair] | None = None


class Address(GatewayModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone: str | None = None


class Person(GatewayModel):
    document: str | None = None
    document_type: str | None = None
    name: str | None = None
    surname: str | None = None
    company: str | None = None
    email: str | None = None
    mobile: str | None = None
    address: Address | None = None
