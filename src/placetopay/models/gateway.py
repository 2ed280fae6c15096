"""Gateway API contracts (direct processing, tokenization, queries, reports)."""

from typing import Any

from pydantic import Field

from placetopay.models.base import GatewayModel
from placetopay.models.payment import (
    Amount,
    AmountConversion,
    NameValuePair,
    Payment,
    Person,
)
from placetopay.models.status import Status


class TokenInstrument(GatewayModel):
    token: str
    subtoken: str | None = None


class Instrument(GatewayModel):
    token: TokenInstrument | None = None
    card: dict[str, Any] | None = None
    account: dict[str, Any] | None = None
    otp: str | None = None
    pin: str | None = None


class GatewayRequest(GatewayModel):
    """
    Common shape of gateway requests.

    ``idempotency_key`` is never serialized into the body; services move it
    to the configured idempotency header.
    """

    locale: str | None = None
    provider: str | None = None
    metadata: dict[str, Any] | None = None
    idempotency_key: str | None = Field(default=None, exclude=True)


class CollectRequest(GatewayRequest):
    payer: Person | None = None
    buyer: Person | None = None
    payment: Payment | None = None
    instrument: Instrument | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    return_url: str | None = None
    expiration: str | None = None
    type: str | None = None
    fields: list[NameValuePair] | None = None


class InstrumentInvalidateRequest(GatewayRequest):
    instrument: Instrument | None = None


class GatewayInformationRequest(GatewayRequest):
    payment: Payment | None = None
    instrument: Instrument | None = None
    ip_address: str | None = None
    user_agent: str | None = None


class GatewayTokenRequest(GatewayRequest):
    instrument: Instrument | None = None


class GatewayProcessRequest(GatewayRequest):
    payment: Payment | None = None
    instrument: Instrument | None = None
    payer: Person | None = None
    buyer: Person | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    additional: dict[str, Any] | None = None
    initiator_indicator: str | None = None
    orchestrator: dict[str, Any] | None = None
    capture: bool | None = None


class GatewayQueryRequest(GatewayRequest):
    request_id: int | str | None = None
    internal_reference: int | str | None = None
    reference: str | None = None
    notify: bool | None = None
    data: bool | None = None


class GatewaySearchRequest(GatewayRequest):
    filters: dict[str, Any] | None = None
    pagination: dict[str, int] | None = None


class GatewayTransactionRequest(GatewayRequest):
    action: str | None = None
    internal_reference: int | str | None = None
    amount: Amount | None = None
    fields: list[NameValuePair] | None = None


class GatewayTokenizeRequest(GatewayRequest):
    instrument: Instrument | None = None
    payer: Person | None = None


class GatewayOtpRequest(GatewayRequest):
    internal_reference: int | str | None = None
    otp: str | None = None


class Gateway3dsRequest(GatewayRequest):
    internal_reference: int | str | None = None
    pares: str | None = None
    c_res: str | None = None


class GatewayReportRequest(GatewayRequest):
    internal_reference: int | str | None = None
    request_id: int | str | None = None
    reference: str | None = None
    filters: dict[str, Any] | None = None
    callback_url: str | None = None


class GatewayPinpadRequest(GatewayRequest):
    pass


class GatewayAccountValidatorRequest(GatewayRequest):
    instrument: Instrument | None = None
    payment: Payment | None = None
    ip_address: str | None = None
    user_agent: str | None = None


class GatewayCashOrderRequest(GatewayRequest):
    payment: Payment | None = None
    payer: Person | None = None
    buyer: Person | None = None


class GatewayTransaction(GatewayModel):
    """Transaction record returned by process/query/search/report."""

    status: Status | None = None
    date: str | None = None
    transaction_date: str | None = None
    request_id: int | None = None
    internal_reference: int | None = None
    process_url: str | None = None
    reference: str | None = None
    payment_method: str | None = None
    franchise: str | None = None
    franchise_name: str | None = None
    issuer_name: str | None = None
    amount: AmountConversion | None = None
    authorization: str | int | None = None
    receipt: str | int | None = None
    type: str | None = None
    refunded: bool | None = None
    last_digits: str | None = None
    provider: str | None = None
    processor_fields: dict[str, Any] | None = None
    additional: dict[str, Any] | None = None
    dispersion: list[dict[str, Any]] | None = None


class GatewayProcessResponse(GatewayTransaction):
    pass


class GatewayQueryResponse(GatewayModel):
    status: Status | None = None
    transactions: list[GatewayTransaction] | None = None


class GatewaySearchResponse(GatewayQueryResponse):
    request_id: int | None = None


class GatewayReportResponse(GatewayQueryResponse):
    id: int | str | None = None


class GatewayBasicResponse(GatewayModel):
    """Response of endpoints that only return a status plus loose data."""

    status: Status | None = None
    request_id: int | None = None
    internal_reference: int | None = None
    process_url: str | None = None
    provider: str | None = None
    service_code: str | None = None
    data: dict[str, Any] | None = None


class GatewayInformationResponse(GatewayModel):
    status: Status | None = None
    provider: str | None = None
    service_code: str | None = None
    card_type: str | None = None
    card_types: list[str] | None = None
    display_interest: bool | None = None
    require_otp: bool | None = None
    require_cvv2: bool | None = None
    three_ds: str | None = Field(default=None, alias="threeDS")
    credits: list[dict[str, Any]] | None = None
    require_avs: bool | None = None
    zip_code_format: str | None = None
    account_verification: bool | None = None
    require_pin: bool | None = None
    require_redirection: bool | None = None
    bank_list: list[dict[str, Any]] | None = None


class GatewayAccountValidatorResponse(GatewayModel):
    status: Status | None = None
    provider: str | None = None
    service_code: str | None = None
    card_type: str | None = None
    card_types: list[str] | None = None
    three_ds: str | None = Field(default=None, alias="threeDS")
    bank_list: list[dict[str, Any]] | None = None
