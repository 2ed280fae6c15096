"""Status block returned by every PlacetoPay endpoint."""

from enum import Enum

from placetopay.models.base import GatewayModel


class StatusCode(str, Enum):
    """Status values documented for sessions, transactions and gateway calls."""

    OK = "OK"
    FAILED = "FAILED"
    APPROVED = "APPROVED"
    APPROVED_PARTIAL = "APPROVED_PARTIAL"
    PARTIAL_EXPIRED = "PARTIAL_EXPIRED"
    REJECTED = "REJECTED"
    PENDING = "PENDING"
    PENDING_VALIDATION = "PENDING_VALIDATION"
    REFUNDED = "REFUNDED"


class Status(GatewayModel):
    """
    Gateway status.

    ``status`` is kept as a plain string: the gateway may introduce values
    that are not listed in StatusCode.
    """

    status: str
    reason: str | int | None = None
    message: str | None = None
    date: str | None = None
