"""Refunds of approved checkout payments (``/api/reverse``)."""

import structlog

from placetopay.core.validation import assert_required
from placetopay.models.redirect import RedirectInformation, RefundRequest
from placetopay.services.base import BaseService

logger = structlog.get_logger(__name__)


class RefundService(BaseService):
    async def refund(self, request: RefundRequest) -> RedirectInformation:
        """
        Reverse an approved payment.

        The returned status is the gateway's verdict; a REJECTED refund is
        returned, not raised.
        """
        assert_required(request.internal_reference, "internalReference")

        raw = await self.carrier.post("/api/reverse", self._body(request))
        info = self._parse(raw, RedirectInformation, "reverse")

        logger.info(
            "placetopay_refund_requested",
            internal_reference=request.internal_reference,
            status=info.status.status if info.status else None,
        )
        return info
