"""Actions over checkout pre-authorizations (``/api/transaction``)."""

from placetopay.core.validation import assert_required
from placetopay.models.payment import Amount, NameValuePair
from placetopay.models.redirect import RedirectInformation, TransactionActionRequest
from placetopay.services.base import BaseService


class TransactionService(BaseService):
    async def action(self, request: TransactionActionRequest) -> RedirectInformation:
        assert_required(request.action, "action")
        assert_required(request.internal_reference, "internalReference")

        raw = await self.carrier.post("/api/transaction", self._body(request))
        return self._parse(raw, RedirectInformation, "transaction")

    async def checkout(self, internal_reference: int, amount: Amount) -> RedirectInformation:
        return await self.action(
            TransactionActionRequest(
                action="checkout", internal_reference=internal_reference, amount=amount
            )
        )

    async def reauthorize(self, internal_reference: int, amount: Amount) -> RedirectInformation:
        return await self.action(
            TransactionActionRequest(
                action="reauthorization",
                internal_reference=internal_reference,
                amount=amount,
            )
        )

    async def reverse(
        self,
        internal_reference: int,
        fields: list[NameValuePair] | None = None,
    ) -> RedirectInformation:
        return await self.action(
            TransactionActionRequest(
                action="reverse", internal_reference=internal_reference, fields=fields
            )
        )
