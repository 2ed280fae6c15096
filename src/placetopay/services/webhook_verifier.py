"""Signature verification for PlacetoPay notifications.

Checkout notifications are signed with
``hash(str(requestId) + status.status + status.date + secretKey)``:
SHA-256 when the signature carries the ``sha256:`` prefix, SHA-1 for older
integrations that send a bare digest. Event notifications (chargebacks and
similar) are signed with HMAC-SHA256 over the raw body.
"""

import hashlib
import hmac
from enum import Enum
from typing import Any, Mapping

import structlog

from placetopay.models.redirect import CheckoutNotification

logger = structlog.get_logger(__name__)

SHA256_PREFIX = "sha256:"


class VerificationReason(str, Enum):
    VALID = "valid"
    MISSING_SIGNATURE = "missing-signature"
    MISSING_STATUS_OR_DATE = "missing-status-or-date"
    LENGTH_MISMATCH = "length-mismatch"
    SIGNATURE_MISMATCH = "signature-mismatch"


def _as_mapping(notification: CheckoutNotification | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(notification, CheckoutNotification):
        return notification.model_dump(by_alias=True)
    return notification


def _compare(generated: str, received: str) -> VerificationReason:
    if len(generated) != len(received):
        return VerificationReason.LENGTH_MISMATCH
    if not hmac.compare_digest(generated.encode("utf-8"), received.encode("utf-8")):
        return VerificationReason.SIGNATURE_MISMATCH
    return VerificationReason.VALID


class WebhookVerifier:
    """
    Verifies notification signatures. Fails closed: anything missing or
    malformed is reported as invalid, never raised.
    """

    def __init__(self, secret_key: str) -> None:
        self.secret_key = secret_key

    def verify(
        self,
        notification: CheckoutNotification | Mapping[str, Any],
        secret_key_override: str | None = None,
    ) -> bool:
        return (
            self.verify_with_reason(notification, secret_key_override)
            is VerificationReason.VALID
        )

    def verify_with_reason(
        self,
        notification: CheckoutNotification | Mapping[str, Any],
        secret_key_override: str | None = None,
    ) -> VerificationReason:
        """
        Verify a checkout notification and report why it failed.

        Args:
            notification: Parsed model or the raw JSON mapping
            secret_key_override: Secret of another site sharing this verifier

        Returns:
            VerificationReason.VALID or the first failed check
        """
        data = _as_mapping(notification)
        received = data.get("signature")
        if not received or not isinstance(received, str):
            return VerificationReason.MISSING_SIGNATURE

        status = data.get("status")
        if not isinstance(status, Mapping) or not status.get("status") or not status.get("date"):
            return VerificationReason.MISSING_STATUS_OR_DATE

        secret = secret_key_override or self.secret_key
        payload = (
            str(data.get("requestId", data.get("request_id")))
            + str(status["status"])
            + str(status["date"])
            + secret
        ).encode("utf-8")

        if received.startswith(SHA256_PREFIX):
            received = received[len(SHA256_PREFIX):]
            generated = hashlib.sha256(payload).hexdigest()
        else:
            generated = hashlib.sha1(payload).hexdigest()

        reason = _compare(generated, received)
        if reason is not VerificationReason.VALID:
            logger.warning("placetopay_webhook_rejected", reason=reason.value)
        return reason

    def verify_hmac(
        self,
        raw_body: str | bytes,
        signature: str | None,
        secret_key_override: str | None = None,
    ) -> bool:
        """Check an HMAC-SHA256 hex signature over the raw notification body."""
        if not signature:
            return False

        for prefix in ("sha256=", SHA256_PREFIX):
            if signature.startswith(prefix):
                signature = signature[len(prefix):]
                break

        if isinstance(raw_body, str):
            raw_body = raw_body.encode("utf-8")

        secret = (secret_key_override or self.secret_key).encode("utf-8")
        generated = hmac.new(secret, raw_body, hashlib.sha256).hexdigest()
        return _compare(generated, signature) is VerificationReason.VALID
