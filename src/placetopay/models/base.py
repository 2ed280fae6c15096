"""Shared base model for PlacetoPay JSON contracts."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GatewayModel(BaseModel):
    """
    Base class for every request/response shape exchanged with PlacetoPay.

    Attributes are snake_case in Python and camelCase on the wire. Keys the
    SDK does not model are kept in ``model_extra`` so newer gateway fields
    survive a parse/serialize cycle.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body expected by the gateway."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    @property
    def extensions(self) -> dict[str, Any]:
        """Unknown keys received from (or destined to) the gateway."""
        return dict(self.model_extra or {})
