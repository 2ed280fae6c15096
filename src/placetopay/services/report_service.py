"""Asynchronous transaction reports."""

from placetopay.core.url import assert_valid_url
from placetopay.core.validation import assert_required
from placetopay.models.exceptions import InvalidResponseError
from placetopay.models.gateway import GatewayReportRequest, GatewayReportResponse
from placetopay.services.base import BaseService


class ReportService(BaseService):
    """
    Report generation is two-step: ``request_report`` schedules it (the
    gateway may call ``callback_url`` when ready) and ``obtain_report``
    downloads the plain-text/CSV result by id.
    """

    async def request_report(self, request: GatewayReportRequest) -> GatewayReportResponse:
        if request.callback_url:
            assert_valid_url(request.callback_url, "callbackUrl")

        raw = await self.carrier.post("/gateway/report", self._body(request))
        return self._parse(raw, GatewayReportResponse, "gateway report")

    async def obtain_report(self, report_id: int | str) -> str:
        assert_required(report_id, "id")

        raw = await self.carrier.post(
            "/gateway/report/obtain",
            {"auth": self._auth(), "id": report_id},
            headers={"Accept": "text/plain"},
            response_type="text",
        )
        if not isinstance(raw, str):
            raise InvalidResponseError("Report body is not text", 200, raw)
        return raw
