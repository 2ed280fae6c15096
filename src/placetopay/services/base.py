"""Shared plumbing for PlacetoPay services."""

from typing import Any, TypeVar

from placetopay.carrier.base import Carrier
from placetopay.core.auth import SystemTimeProvider, TimeProvider, build_auth
from placetopay.models.base import GatewayModel
from placetopay.models.exceptions import MissingStatusError

ModelT = TypeVar("ModelT", bound=GatewayModel)


class BaseService:
    """
    Base class for services calling PlacetoPay through a Carrier.

    Holds the credentials and clock; a fresh auth block is built for every
    outbound call and never cached.
    """

    def __init__(
        self,
        carrier: Carrier,
        login: str,
        secret_key: str,
        time_provider: TimeProvider | None = None,
    ) -> None:
        self.carrier = carrier
        self.login = login
        self.secret_key = secret_key
        self.time_provider = time_provider or SystemTimeProvider()

    def _auth(self) -> dict[str, str]:
        return build_auth(self.login, self.secret_key, self.time_provider).to_dict()

    def _body(self, request: GatewayModel | None = None, **extra: Any) -> dict[str, Any]:
        """Serialize ``request`` and attach a fresh auth block."""
        body = request.to_payload() if request is not None else {}
        body.update({key: value for key, value in extra.items() if value is not None})
        body["auth"] = self._auth()
        return body

    @staticmethod
    def _parse(response: Any, model: type[ModelT], label: str) -> ModelT:
        """Require a status block in ``response`` and parse it into ``model``."""
        if not isinstance(response, dict) or not response.get("status"):
            raise MissingStatusError(f"Missing status in {label} response", response)
        return model.model_validate(response)
