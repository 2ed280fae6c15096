"""Autopay (recurring charges) endpoints under ``/gateway/autopay``."""

from typing import Any

from placetopay.core.validation import assert_required
from placetopay.models.links import (
    AutopayBasicResponse,
    AutopayCreateResponse,
    AutopayRequest,
)
from placetopay.services.base import BaseService


class AutopayService(BaseService):
    async def create(self, request: AutopayRequest) -> AutopayCreateResponse:
        assert_required(request.subscription, "subscription")

        raw = await self.carrier.post("/gateway/autopay/create", self._body(request))
        return self._parse(raw, AutopayCreateResponse, "autopay create")

    async def update(self, request: AutopayRequest) -> AutopayBasicResponse:
        assert_required(request.subscription, "subscription")

        raw = await self.carrier.post("/gateway/autopay/update", self._body(request))
        return self._parse(raw, AutopayBasicResponse, "autopay update")

    async def cancel(self, autopay_id: int | str) -> AutopayBasicResponse:
        assert_required(autopay_id, "autopayId")

        raw = await self.carrier.post(
            "/gateway/autopay/cancel", {"auth": self._auth(), "id": autopay_id}
        )
        return self._parse(raw, AutopayBasicResponse, "autopay cancel")

    async def search(self, filters: dict[str, Any] | None = None) -> AutopayBasicResponse:
        body: dict[str, Any] = {"auth": self._auth()}
        if filters is not None:
            body["filters"] = filters

        raw = await self.carrier.post("/gateway/autopay/search", body)
        return self._parse(raw, AutopayBasicResponse, "autopay search")

    async def transactions(self, autopay_id: int | str) -> AutopayBasicResponse:
        assert_required(autopay_id, "autopayId")

        raw = await self.carrier.post(
            "/gateway/autopay/transactions", {"auth": self._auth(), "id": autopay_id}
        )
        return self._parse(raw, AutopayBasicResponse, "autopay transactions")
