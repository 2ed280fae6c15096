"""Unit tests for WebhookVerifier."""

import hashlib
import hmac
from unittest.mock import patch

import pytest
from structlog.testing import capture_logs

from placetopay.models.redirect import CheckoutNotification
from placetopay.services.webhook_verifier import VerificationReason, WebhookVerifier

from conftest import SECRET_KEY

DATE = "2024-01-01T12:00:00-05:00"


def sign(request_id, status, date, secret=SECRET_KEY, algorithm="sha256"):
    payload = f"{request_id}{status}{date}{secret}".encode("utf-8")
    return hashlib.new(algorithm, payload).hexdigest()


def notification(signature, request_id=12345, status="APPROVED", date=DATE):
    return {
        "requestId": request_id,
        "reference": "ORDER-1001",
        "signature": signature,
        "status": {"status": status, "reason": "00", "message": "Aprobada", "date": date},
    }


@pytest.fixture
def verifier():
    return WebhookVerifier(SECRET_KEY)


class TestCheckoutSignature:
    def test_sha256_prefixed_signature(self, verifier):
        body = notification("sha256:" + sign(12345, "APPROVED", DATE))

        assert verifier.verify(body) is True
        assert verifier.verify_with_reason(body) is VerificationReason.VALID

    def test_legacy_sha1_signature(self, verifier):
        body = notification(sign(12345, "APPROVED", DATE, algorithm="sha1"))

        assert verifier.verify(body) is True

    def test_uppercase_signature_is_rejected(self, verifier):
        body = notification("sha256:" + sign(12345, "APPROVED", DATE).upper())

        assert verifier.verify(body) is False
        assert verifier.verify_with_reason(body) is VerificationReason.SIGNATURE_MISMATCH

    def test_string_request_id(self, verifier):
        body = notification("sha256:" + sign(12345, "APPROVED", DATE), request_id="12345")

        assert verifier.verify(body) is True

    def test_parsed_model(self, verifier):
        model = CheckoutNotification.model_validate(
            notification("sha256:" + sign(12345, "APPROVED", DATE))
        )

        assert verifier.verify(model) is True

    def test_tampered_status(self, verifier):
        body = notification("sha256:" + sign(12345, "REJECTED", DATE), status="APPROVED")

        with capture_logs() as logs:
            reason = verifier.verify_with_reason(body)

        assert reason is VerificationReason.SIGNATURE_MISMATCH
        assert logs == [
            {
                "event": "placetopay_webhook_rejected",
                "log_level": "warning",
                "reason": "signature-mismatch",
            }
        ]

    def test_wrong_secret(self, verifier):
        body = notification("sha256:" + sign(12345, "APPROVED", DATE, secret="other"))

        assert verifier.verify(body) is False

    def test_secret_override(self, verifier):
        body = notification("sha256:" + sign(12345, "APPROVED", DATE, secret="site-b"))

        assert verifier.verify(body, secret_key_override="site-b") is True
        assert verifier.verify(body) is False

    def test_sha1_digest_sent_with_sha256_prefix(self, verifier):
        body = notification("sha256:" + sign(12345, "APPROVED", DATE, algorithm="sha1"))

        assert verifier.verify_with_reason(body) is VerificationReason.LENGTH_MISMATCH

    def test_length_mismatch_skips_constant_time_compare(self, verifier):
        body = notification("sha256:abc")

        with patch(
            "placetopay.services.webhook_verifier.hmac.compare_digest"
        ) as compare_digest:
            reason = verifier.verify_with_reason(body)

        assert reason is VerificationReason.LENGTH_MISMATCH
        compare_digest.assert_not_called()

    @pytest.mark.parametrize("signature", [None, "", 12345])
    def test_missing_signature(self, verifier, signature):
        assert (
            verifier.verify_with_reason(notification(signature))
            is VerificationReason.MISSING_SIGNATURE
        )

    @pytest.mark.parametrize(
        "status",
        [None, {"status": "APPROVED"}, {"date": DATE}, "APPROVED"],
    )
    def test_missing_status_or_date(self, verifier, status):
        body = notification("sha256:" + sign(12345, "APPROVED", DATE))
        body["status"] = status

        assert verifier.verify_with_reason(body) is VerificationReason.MISSING_STATUS_OR_DATE


class TestHmacSignature:
    RAW = b'{"type":"CHARGEBACK","internalReference":987654}'

    def _hmac(self, body=RAW, secret=SECRET_KEY):
        return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()

    def test_valid(self, verifier):
        assert verifier.verify_hmac(self.RAW, self._hmac()) is True

    def test_string_body(self, verifier):
        assert verifier.verify_hmac(self.RAW.decode("utf-8"), self._hmac()) is True

    @pytest.mark.parametrize("prefix", ["sha256=", "sha256:"])
    def test_prefixed(self, verifier, prefix):
        assert verifier.verify_hmac(self.RAW, prefix + self._hmac()) is True

    def test_tampered_body(self, verifier):
        assert verifier.verify_hmac(self.RAW + b" ", self._hmac()) is False

    def test_uppercase_signature_is_rejected(self, verifier):
        assert verifier.verify_hmac(self.RAW, self._hmac().upper()) is False

    def test_missing_or_short_signature(self, verifier):
        assert verifier.verify_hmac(self.RAW, None) is False
        assert verifier.verify_hmac(self.RAW, "") is False
        assert verifier.verify_hmac(self.RAW, "deadbeef") is False

    def test_secret_override(self, verifier):
        signature = self._hmac(secret="site-b")

        assert verifier.verify_hmac(self.RAW, signature, secret_key_override="site-b") is True
        assert verifier.verify_hmac(self.RAW, signature) is False
