"""Pre-flight validators for documented PlacetoPay field constraints.

Each validator returns silently or raises ValidationError naming the field.
They run before any network call so malformed requests fail locally.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

from placetopay.core.auth import TimeProvider
from placetopay.models.exceptions import ValidationError

LOCALE_PATTERN = re.compile(r"\w{2}_[A-Z]{2}")

MIN_EXPIRATION_MINUTES = 5

MAX_FIELDS = 50
MAX_KEYWORD_LENGTH = 50
MAX_VALUE_LENGTH = 255
DISPLAY_ON_VALUES = ("none", "payment", "receipt", "both", "approved")


def assert_locale_pattern(locale: str | None, field_name: str = "locale") -> None:
    if not locale:
        return

    if not LOCALE_PATTERN.fullmatch(locale):
        raise ValidationError(
            f"{field_name} must match pattern xx_YY (example: es_CO, en_US)"
        )


def parse_datetime(value: str) -> datetime:
    """Parse an ISO-8601 date-time; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def assert_future_expiration(
    expiration: str | None,
    time_provider: TimeProvider,
    min_minutes: int = MIN_EXPIRATION_MINUTES,
    field_name: str = "expiration",
) -> None:
    if not expiration:
        return

    try:
        parsed = parse_datetime(expiration)
    except ValueError as e:
        raise ValidationError(f"{field_name} must be a valid date-time string") from e

    min_allowed = time_provider.now() + timedelta(minutes=min_minutes)
    if parsed < min_allowed:
        raise ValidationError(
            f"{field_name} must be at least {min_minutes} minutes in the future"
        )


def _field_attr(field: Any, name: str) -> Any:
    if isinstance(field, dict):
        if name == "display_on":
            return field.get("displayOn", field.get("display_on"))
        return field.get(name)
    return getattr(field, name, None)


def assert_fields_limits(fields: Iterable[Any] | None, context: str) -> None:
    """
    Check the extra-field list of a request, payment or subscription.

    Args:
        fields: NameValuePair models or plain dicts
        context: Prefix used in error messages (e.g. "payment")
    """
    if fields is None:
        return
    fields = list(fields)

    if len(fields) > MAX_FIELDS:
        raise ValidationError(f"{context}.fields exceeds {MAX_FIELDS} entries")

    for field in fields:
        keyword = _field_attr(field, "keyword")
        if not keyword or len(keyword) > MAX_KEYWORD_LENGTH:
            raise ValidationError(
                f"{context}.fields keyword is required and max {MAX_KEYWORD_LENGTH} chars"
            )

        value = _field_attr(field, "value")
        if isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
            raise ValidationError(
                f"{context}.fields value exceeds {MAX_VALUE_LENGTH} characters"
            )

        display_on = _field_attr(field, "display_on")
        if display_on and display_on not in DISPLAY_ON_VALUES:
            raise ValidationError(
                f"{context}.fields displayOn must be one of {'|'.join(DISPLAY_ON_VALUES)}"
            )


def assert_attempts_limit(attempts_limit: int | None) -> None:
    if attempts_limit is None:
        return
    if attempts_limit <= 0:
        raise ValidationError("attemptsLimit must be greater than 0")


def assert_required(value: Any, field_name: str, hint: str = "") -> None:
    """Raise when a mandatory field is missing (None or empty string)."""
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required{hint}")
