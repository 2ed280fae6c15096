"""Carrier backed by the JSON HTTP client."""

from typing import Any

from placetopay.carrier.base import Carrier
from placetopay.core.http_client import HttpClient, ResponseType


class RestCarrier(Carrier):
    def __init__(self, http: HttpClient) -> None:
        self.http = http

    async def post(
        self,
        path: str,
        body: Any,
        headers: dict[str, str] | None = None,
        idempotency_key: str | None = None,
        response_type: ResponseType = "json",
    ) -> Any:
        return await self.http.post(
            path,
            body,
            headers=headers,
            idempotency_key=idempotency_key,
            response_type=response_type,
        )
