"""Return/cancel URL helpers."""

from typing import Mapping

import httpx

from placetopay.models.exceptions import ValidationError


def build_return_url(
    base: str,
    path: str,
    params: Mapping[str, str | int] | None = None,
) -> str:
    """Join ``path`` onto ``base`` and set ``params`` as query parameters."""
    if not base:
        raise ValidationError("returnUrl base is required")
    if not path:
        raise ValidationError("returnUrl path is required")

    try:
        url = httpx.URL(base).join(path)
    except httpx.InvalidURL as e:
        raise ValidationError(f"returnUrl base must be a valid URL: {base}") from e

    if params:
        url = url.copy_merge_params({key: str(value) for key, value in params.items()})

    return str(url)


def assert_valid_url(value: str | None, field_name: str = "url") -> None:
    """Require an absolute URL (scheme and host)."""
    try:
        url = httpx.URL(value or "")
    except httpx.InvalidURL as e:
        raise ValidationError(f"{field_name} must be a valid URL") from e

    if not url.scheme or not url.host:
        raise ValidationError(f"{field_name} must be a valid URL")
