"""Payment links (``/api/payment-link``)."""

from placetopay.core.validation import assert_required
from placetopay.models.exceptions import PlacetoPayError
from placetopay.models.links import (
    PaymentLinkCreateRequest,
    PaymentLinkCreateResponse,
    PaymentLinkDisableResponse,
    PaymentLinkInfo,
)
from placetopay.services.base import BaseService


class PaymentLinkService(BaseService):
    async def create(self, request: PaymentLinkCreateRequest) -> PaymentLinkCreateResponse:
        assert_required(request.amount, "amount")

        raw = await self.carrier.post("/api/payment-link", self._body(request))
        return self._parse(raw, PaymentLinkCreateResponse, "payment-link create")

    async def get(self, link_id: int | str) -> PaymentLinkInfo:
        """
        Fetch a link.

        The response carries the link state in ``status`` (e.g. "ACTIVE")
        rather than a status block, so it is not required here.
        """
        assert_required(link_id, "linkId")

        raw = await self.carrier.post(f"/api/payment-link/{link_id}", {"auth": self._auth()})
        if not isinstance(raw, dict):
            raise PlacetoPayError("Unexpected payment-link response")
        return PaymentLinkInfo.model_validate(raw)

    async def disable(self, link_id: int | str) -> PaymentLinkDisableResponse:
        assert_required(link_id, "linkId")

        raw = await self.carrier.post(
            f"/api/payment-link/disable/{link_id}", {"auth": self._auth()}
        )
        return self._parse(raw, PaymentLinkDisableResponse, "payment-link disable")
