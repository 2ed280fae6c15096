"""Carrier interface between services and the HTTP transport."""

from abc import ABC, abstractmethod
from typing import Any

from placetopay.core.http_client import ResponseType


class Carrier(ABC):
    """
    Abstract boundary used by every service to reach PlacetoPay.

    Services depend on this interface only, so tests can substitute an
    in-memory carrier for the REST one.
    """

    @abstractmethod
    async def post(
        self,
        path: str,
        body: Any,
        headers: dict[str, str] | None = None,
        idempotency_key: str | None = None,
        response_type: ResponseType = "json",
    ) -> Any:
        """
        Send ``body`` to ``path`` and return the decoded response.

        Raises:
            HttpError, NetworkError, InvalidResponseError: transport failures
        """
        pass
