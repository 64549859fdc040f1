"""Payment arithmetic for installment charges"""

from datetime import date
from typing import Iterable, Optional, Tuple

from boxschool_billing.domain.models import PaymentOutcome, STATUS_PAID, STATUS_PARTIAL, STATUS_UNPAID


def remaining_cents(amount_cents: int, paid_cents: int) -> int:
    return max(0, amount_cents - paid_cents)


def apply_installment_payment(
    amount_cents: int,
    paid_cents: int,
    requested_cents: Optional[int] = None,
) -> PaymentOutcome:
    """
    Apply a (total or partial) payment to an installment.

    - Payment is capped at what is still owed; omitted amount pays it all
    - Status becomes "paid" once fully covered, otherwise "partial"
    - A fully paid installment is left unchanged (applied_cents == 0)
    """
    remaining = remaining_cents(amount_cents, paid_cents)

    if remaining <= 0:
        return PaymentOutcome(paid_cents=paid_cents, applied_cents=0, status=STATUS_PAID)

    applied = min(requested_cents, remaining) if requested_cents is not None else remaining
    new_paid = paid_cents + applied
    status = STATUS_PAID if new_paid >= amount_cents else STATUS_PARTIAL

    return PaymentOutcome(paid_cents=new_paid, applied_cents=applied, status=status)


def days_late(due_on: date, amount_cents: int, paid_cents: int, today: date) -> int:
    """Days past due for an unsettled charge; 0 when settled or not yet due"""
    if due_on >= today or paid_cents >= amount_cents:
        return 0
    return (today - due_on).days


def totals(charges: Iterable[Tuple[int, int]]) -> Tuple[int, int, int]:
    """
    Aggregate (amount_cents, paid_cents) pairs.

    Returns: (total_cents, paid_cents, pending_cents)
    """
    total = 0
    paid = 0
    for amount_cents, paid_cents in charges:
        total += amount_cents
        paid += paid_cents
    return total, paid, max(0, total - paid)


def initial_payment_state(paid: bool, amount_cents: int) -> Tuple[int, str]:
    """(paid_cents, status) for the initial payment toggle"""
    if paid:
        return amount_cents, STATUS_PAID
    return 0, STATUS_UNPAID
