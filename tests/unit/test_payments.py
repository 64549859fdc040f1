"""Unit tests for payment arithmetic"""

from datetime import date

from boxschool_billing.domain.payments import (
    apply_installment_payment,
    days_late,
    initial_payment_state,
    remaining_cents,
    totals,
)


def test_apply_payment_without_amount_pays_remaining():
    outcome = apply_installment_payment(3333, 1000)

    assert outcome.applied_cents == 2333
    assert outcome.paid_cents == 3333
    assert outcome.status == "paid"


def test_apply_partial_payment():
    outcome = apply_installment_payment(3333, 0, 1000)

    assert outcome.applied_cents == 1000
    assert outcome.paid_cents == 1000
    assert outcome.status == "partial"


def test_apply_payment_is_capped_at_remaining():
    outcome = apply_installment_payment(3333, 3000, 5000)

    assert outcome.applied_cents == 333
    assert outcome.paid_cents == 3333
    assert outcome.status == "paid"


def test_apply_payment_on_settled_installment_changes_nothing():
    outcome = apply_installment_payment(3333, 3333, 500)

    assert outcome.applied_cents == 0
    assert outcome.paid_cents == 3333
    assert outcome.status == "paid"


def test_remaining_never_negative():
    assert remaining_cents(1000, 1500) == 0
    assert remaining_cents(1000, 250) == 750


def test_days_late():
    today = date(2026, 3, 10)

    assert days_late(date(2026, 2, 5), 3334, 0, today) == 33
    assert days_late(date(2026, 3, 5), 3333, 1000, today) == 5
    assert days_late(date(2026, 3, 10), 3333, 0, today) == 0  # due today
    assert days_late(date(2026, 4, 5), 3333, 0, today) == 0
    assert days_late(date(2026, 2, 5), 3334, 3334, today) == 0  # settled


def test_totals():
    assert totals([(3334, 3334), (3333, 1000), (3333, 0)]) == (10000, 4334, 5666)
    assert totals([]) == (0, 0, 0)


def test_initial_payment_state():
    assert initial_payment_state(True, 15000) == (15000, "paid")
    assert initial_payment_state(False, 15000) == (0, "unpaid")
