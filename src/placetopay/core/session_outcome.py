"""Read-only summary of a queried checkout session."""

from dataclasses import dataclass, field
from typing import Any, Mapping

from placetopay.models.payment import Amount, AmountConversion
from placetopay.models.redirect import RedirectInformation, Transaction
from placetopay.models.status import StatusCode

FINAL_STATUSES = frozenset(
    {
        StatusCode.APPROVED.value,
        StatusCode.REJECTED.value,
        StatusCode.APPROVED_PARTIAL.value,
        StatusCode.PARTIAL_EXPIRED.value,
        StatusCode.FAILED.value,
    }
)

_PAID_ATTEMPT_STATUSES = frozenset(
    {StatusCode.APPROVED.value, StatusCode.APPROVED_PARTIAL.value}
)


@dataclass(frozen=True)
class PaymentAttemptSummary:
    internal_reference: int | None = None
    reference: str | None = None
    status: str | None = None
    reason: str | int | None = None
    message: str | None = None
    authorization: str | int | None = None
    receipt: str | int | None = None
    payment_method: str | None = None
    amount: float | None = None
    currency: str | None = None


@dataclass(frozen=True)
class SessionOutcome:
    """
    Derived view of a session: computed on every query, never persisted.

    - final: status is terminal
    - paid: status is exactly APPROVED
    - partially_paid: APPROVED_PARTIAL, or something was paid without a full approval
    """

    status: str | None
    final: bool
    paid: bool
    partially_paid: bool
    expired_partial: bool
    paid_total: float
    pending_total: float
    request_id: int | None = None
    total_requested: float | None = None
    currency: str | None = None
    attempts: list[PaymentAttemptSummary] = field(default_factory=list)


def _to_number(value: Any) -> float:
    if value is None:
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def _attempt_amount(transaction: Transaction) -> tuple[float | None, str | None]:
    amount = transaction.amount
    if isinstance(amount, AmountConversion):
        for side in (amount.to, amount.from_):
            if side is not None and side.total is not None:
                return _to_number(side.total), side.currency
        return None, None
    if isinstance(amount, Amount):
        return _to_number(amount.total), amount.currency
    return None, None


def _requested(info: RedirectInformation) -> tuple[float | None, str | None]:
    request = info.request
    if request is None:
        return None, None

    if request.payment is not None and request.payment.amount is not None:
        return _to_number(request.payment.amount.total), request.payment.amount.currency

    if request.payments is not None:
        total = sum(
            _to_number(p.amount.total) for p in request.payments if p.amount is not None
        )
        first = request.payments[0] if request.payments else None
        currency = first.amount.currency if first is not None and first.amount else None
        return total, currency

    return None, None


def _attempts(info: RedirectInformation) -> list[Transaction]:
    if info.payment is None:
        return []
    if isinstance(info.payment, Transaction):
        return [info.payment]
    return list(info.payment)


def summarize_session_outcome(
    info: RedirectInformation | Mapping[str, Any],
) -> SessionOutcome:
    """
    Reduce a session's payment attempts to paid/partial/pending totals.

    Args:
        info: Session query response, as a model or the raw JSON mapping

    Returns:
        SessionOutcome for the session's current state.
    """
    if not isinstance(info, RedirectInformation):
        info = RedirectInformation.model_validate(info)

    status = info.status.status if info.status is not None else None
    total_requested, currency = _requested(info)

    attempts = []
    for transaction in _attempts(info):
        amount, attempt_currency = _attempt_amount(transaction)
        attempt_status = transaction.status
        attempts.append(
            PaymentAttemptSummary(
                internal_reference=transaction.internal_reference,
                reference=transaction.reference,
                status=attempt_status.status if attempt_status else None,
                reason=attempt_status.reason if attempt_status else None,
                message=attempt_status.message if attempt_status else None,
                authorization=transaction.authorization,
                receipt=transaction.receipt,
                payment_method=transaction.payment_method,
                amount=amount,
                currency=attempt_currency or currency,
            )
        )

    paid_total = sum(
        _to_number(a.amount) for a in attempts if a.status in _PAID_ATTEMPT_STATUSES
    )
    pending_total = (
        max(total_requested - paid_total, 0) if total_requested is not None else 0
    )

    paid = status == StatusCode.APPROVED.value
    partially_paid = status == StatusCode.APPROVED_PARTIAL.value or (
        paid_total > 0 and not paid
    )

    return SessionOutcome(
        request_id=info.request_id,
        status=status,
        final=status in FINAL_STATUSES,
        paid=paid,
        partially_paid=partially_paid,
        expired_partial=status == StatusCode.PARTIAL_EXPIRED.value,
        total_requested=total_requested,
        currency=currency,
        paid_total=paid_total,
        pending_total=pending_total,
        attempts=attempts,
    )
