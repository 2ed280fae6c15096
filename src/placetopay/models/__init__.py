"""Data contracts and exceptions for the PlacetoPay SDK."""

from placetopay.models.base import GatewayModel
from placetopay.models.exceptions import (
    FinalStatusTimeout,
    HttpError,
    InvalidResponseError,
    MissingStatusError,
    NetworkError,
    PlacetoPayError,
    StatusError,
    ValidationError,
)
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
    GatewaySearchRequest,
    GatewaySearchResponse,
    GatewayTokenizeRequest,
    GatewayTokenRequest,
    GatewayTransaction,
    GatewayTransactionRequest,
    Instrument,
    InstrumentInvalidateRequest,
    TokenInstrument,
)
from placetopay.models.links import (
    AutopayBasicResponse,
    AutopayCreateResponse,
    AutopayRecurring,
    AutopayRequest,
    AutopaySubscription,
    PaymentLinkCreateRequest,
    PaymentLinkCreateResponse,
    PaymentLinkDisableResponse,
    PaymentLinkInfo,
)
from placetopay.models.payment import (
    Address,
    Amount,
    AmountBase,
    AmountConversion,
    AmountDetail,
    Item,
    NameValuePair,
    Payment,
    Person,
    Recurring,
    TaxDetail,
)
from placetopay.models.redirect import (
    CheckoutNotification,
    RedirectInformation,
    RedirectRequest,
    RedirectResponse,
    RefundRequest,
    SubscriptionRequest,
    Transaction,
    TransactionActionRequest,
)
from placetopay.models.status import Status, StatusCode

__all__ = [
    "Address",
    "Amount",
    "AmountBase",
    "AmountConversion",
    "AmountDetail",
    "AutopayBasicResponse",
    "AutopayCreateResponse",
    "AutopayRecurring",
    "AutopayRequest",
    "AutopaySubscription",
    "CheckoutNotification",
    "CollectRequest",
    "FinalStatusTimeout",
    "Gateway3dsRequest",
    "GatewayAccountValidatorRequest",
    "GatewayAccountValidatorResponse",
    "GatewayBasicResponse",
    "GatewayCashOrderRequest",
    "GatewayInformationRequest",
    "GatewayInformationResponse",
    "GatewayModel",
    "GatewayOtpRequest",
    "GatewayPinpadRequest",
    "GatewayProcessRequest",
    "GatewayProcessResponse",
    "GatewayQueryRequest",
    "GatewayQueryResponse",
    "GatewayReportRequest",
    "GatewayReportResponse",
    "GatewaySearchRequest",
    "GatewaySearchResponse",
    "GatewayTokenizeRequest",
    "GatewayTokenRequest",
    "GatewayTransaction",
    "GatewayTransactionRequest",
    "HttpError",
    "Instrument",
    "InstrumentInvalidateRequest",
    "InvalidResponseError",
    "Item",
    "MissingStatusError",
    "NameValuePair",
    "NetworkError",
    "Payment",
    "PaymentLinkCreateRequest",
    "PaymentLinkCreateResponse",
    "PaymentLinkDisableResponse",
    "PaymentLinkInfo",
    "Person",
    "PlacetoPayError",
    "Recurring",
    "RedirectInformation",
    "RedirectRequest",
    "RedirectResponse",
    "RefundRequest",
    "Status",
    "StatusCode",
    "StatusError",
    "SubscriptionRequest",
    "TaxDetail",
    "TokenInstrument",
    "Transaction",
    "TransactionActionRequest",
    "ValidationError",
]
