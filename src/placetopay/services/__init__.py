"""PlacetoPay service layer."""

from placetopay.services.autopay_service import AutopayService
from placetopay.services.gateway_service import GatewayService
from placetopay.services.payment_link_service import PaymentLinkService
from placetopay.services.refund_service import RefundService
from placetopay.services.report_service import ReportService
from placetopay.services.session_service import SessionService
from placetopay.services.transaction_service import TransactionService
from placetopay.services.webhook_verifier import VerificationReason, WebhookVerifier

__all__ = [
    "AutopayService",
    "GatewayService",
    "PaymentLinkService",
    "RefundService",
    "ReportService",
    "SessionService",
    "TransactionService",
    "VerificationReason",
    "WebhookVerifier",
]
