"""Validation of the documented ``metadata`` keys."""

import re
from typing import Any, Mapping

from placetopay.models.exceptions import ValidationError

INITIATOR_INDICATORS = (
    "AGENT",
    "CARDHOLDER_COF",
    "CARDHOLDER_RECURRING_VARIABLE_AMOUNT",
    "CARDHOLDER_RECURRING_FIXED_AMOUNT",
    "CARDHOLDER_WITH_INSTALLMENTS",
    "MERCHANT_COF",
    "MERCHANT_RECURRING_VARIABLE_AMOUNT",
    "MERCHANT_RECURRING_FIXED_AMOUNT",
    "MERCHANT_WITH_INSTALLMENTS",
)

EBT_DELIVERY_INDICATORS = (
    "DIRECT_DELIVERY",
    "CUSTOMER_PICKUP",
    "COMMERCIAL_SHIPPING",
    "OTHER",
    "NOT_AVAILABLE",
)

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def assert_metadata_format(metadata: Mapping[str, Any] | None) -> None:
    if not metadata:
        return

    initiator = metadata.get("initiatorIndicator")
    if initiator and str(initiator) not in INITIATOR_INDICATORS:
        raise ValidationError(
            f"metadata.initiatorIndicator must be one of {', '.join(INITIATOR_INDICATORS)}"
        )

    ebt = metadata.get("EBTDeliveryIndicator")
    if ebt and str(ebt) not in EBT_DELIVERY_INDICATORS:
        raise ValidationError(
            f"metadata.EBTDeliveryIndicator must be one of {', '.join(EBT_DELIVERY_INDICATORS)}"
        )

    opening_date = metadata.get("openingDate")
    if opening_date and not _ISO_DATE.fullmatch(str(opening_date)):
        raise ValidationError("metadata.openingDate must be YYYY-MM-DD")
