"""Unit tests for installment schedule generation"""

from datetime import date

import pytest
from dateutil.relativedelta import relativedelta

from boxschool_billing.domain.exceptions import CreditPlanConflictError
from boxschool_billing.domain.installments import generate_schedule, plan_after_paid, schedule_for_plan, split_cents
from boxschool_billing.domain.models import EnrollmentBillingPlan


def test_schedule_rolls_first_due_to_next_month():
    """Billing day before the start day pushes the first cuota a month"""
    schedule = generate_schedule(date(2026, 1, 15), 5, 3, 10000)

    assert [e.idx for e in schedule] == [1, 2, 3]
    assert [e.due_on for e in schedule] == [date(2026, 2, 5), date(2026, 3, 5), date(2026, 4, 5)]
    assert [e.amount_cents for e in schedule] == [3334, 3333, 3333]


def test_schedule_keeps_first_due_in_start_month():
    """Billing day on or after the start day stays in the same month"""
    schedule = generate_schedule(date(2026, 1, 1), 5, 2, 9999)

    assert [e.due_on for e in schedule] == [date(2026, 1, 5), date(2026, 2, 5)]
    assert [e.amount_cents for e in schedule] == [5000, 4999]


def test_schedule_billing_day_equal_to_start_day_does_not_roll():
    schedule = generate_schedule(date(2026, 3, 5), 5, 1, 5000)
    assert schedule[0].due_on == date(2026, 3, 5)


def test_schedule_sum_matches_plan_total():
    """No cent is lost or gained for any split"""
    for total in (0, 1, 7, 9999, 10000, 123457):
        for count in (1, 2, 3, 7, 12, 36):
            schedule = generate_schedule(date(2026, 1, 15), 10, count, total)
            assert len(schedule) == count
            assert sum(e.amount_cents for e in schedule) == total


def test_schedule_front_loads_remainder():
    """First total % N cuotas carry the extra cent"""
    total, count = 10007, 6  # base 1667, remainder 5
    schedule = generate_schedule(date(2026, 1, 1), 1, count, total)

    base, remainder = divmod(total, count)
    assert [e.amount_cents for e in schedule[:remainder]] == [base + 1] * remainder
    assert [e.amount_cents for e in schedule[remainder:]] == [base] * (count - remainder)


def test_schedule_due_dates_step_one_calendar_month():
    schedule = generate_schedule(date(2026, 10, 20), 12, 6, 60000)

    for previous, current in zip(schedule, schedule[1:]):
        assert current.due_on == previous.due_on + relativedelta(months=1)
    # Crosses the year boundary
    assert schedule[2].due_on == date(2027, 1, 12)


def test_schedule_zero_installments_is_empty():
    assert generate_schedule(date(2026, 1, 15), 5, 0, 10000) == []
    assert generate_schedule(date(2026, 1, 15), 5, -2, 10000) == []


def test_schedule_zero_total_still_has_dates():
    schedule = generate_schedule(date(2026, 1, 15), 5, 3, 0)

    assert [e.amount_cents for e in schedule] == [0, 0, 0]
    assert schedule[0].due_on == date(2026, 2, 5)


def test_schedule_billing_day_31_clamps_to_month_end():
    """Day 31 lands on each month's last day without drifting"""
    schedule = generate_schedule(date(2026, 1, 10), 31, 4, 40000)

    assert [e.due_on for e in schedule] == [
        date(2026, 1, 31),
        date(2026, 2, 28),
        date(2026, 3, 31),
        date(2026, 4, 30),
    ]


def test_schedule_billing_day_30_in_leap_february():
    schedule = generate_schedule(date(2028, 2, 3), 30, 2, 2000)
    assert [e.due_on for e in schedule] == [date(2028, 2, 29), date(2028, 3, 30)]


def test_schedule_clamped_first_due_before_start_rolls_forward():
    """Roll-forward compares the clamped date against the start date"""
    schedule = generate_schedule(date(2026, 2, 28), 31, 2, 100)
    assert schedule[0].due_on == date(2026, 2, 28)

    schedule = generate_schedule(date(2026, 4, 30), 29, 2, 100)
    assert [e.due_on for e in schedule] == [date(2026, 5, 29), date(2026, 6, 29)]


def test_schedule_is_idempotent():
    first = generate_schedule(date(2026, 5, 20), 15, 5, 50003)
    second = generate_schedule(date(2026, 5, 20), 15, 5, 50003)
    assert first == second


def test_schedule_for_plan_uses_plan_fields():
    plan = EnrollmentBillingPlan(
        starts_on=date(2026, 1, 15),
        billing_day=5,
        installments_count=3,
        plan_total_cents=10000,
    )
    assert schedule_for_plan(plan) == generate_schedule(date(2026, 1, 15), 5, 3, 10000)


def test_split_cents():
    assert split_cents(10, 3) == [4, 3, 3]
    assert split_cents(9, 3) == [3, 3, 3]
    assert split_cents(2, 5) == [1, 1, 0, 0, 0]
    assert split_cents(100, 0) == []


def test_plan_after_paid_without_payments_is_unchanged():
    plan = EnrollmentBillingPlan(date(2026, 1, 15), 5, 4, 12000)
    assert plan_after_paid(plan, []) is plan


def test_plan_after_paid_spreads_balance_after_last_paid_period():
    plan = EnrollmentBillingPlan(date(2026, 1, 15), 5, 4, 12000)

    remaining = plan_after_paid(plan, [(date(2026, 2, 1), 3334)])

    assert remaining == EnrollmentBillingPlan(date(2026, 3, 1), 5, 3, 8666)
    entries = schedule_for_plan(remaining)
    assert 3334 + sum(e.amount_cents for e in entries) == 12000
    assert entries[0].due_on == date(2026, 3, 5)


def test_plan_after_paid_keeps_later_start_date():
    plan = EnrollmentBillingPlan(date(2026, 6, 20), 5, 3, 9000)

    remaining = plan_after_paid(plan, [(date(2026, 2, 1), 3000)])

    assert remaining.starts_on == date(2026, 6, 20)


def test_plan_after_paid_fully_covered_plan_has_no_cuotas():
    plan = EnrollmentBillingPlan(date(2026, 1, 15), 5, 2, 6000)

    remaining = plan_after_paid(plan, [(date(2026, 2, 1), 3000), (date(2026, 3, 1), 3000)])

    assert remaining.installments_count == 0
    assert schedule_for_plan(remaining) == []


def test_plan_after_paid_rejects_plans_paid_cuotas_exceed():
    paid = [(date(2026, 2, 1), 3334), (date(2026, 3, 1), 3333)]

    # More paid cuotas than the plan has
    with pytest.raises(CreditPlanConflictError):
        plan_after_paid(EnrollmentBillingPlan(date(2026, 1, 15), 5, 1, 10000), paid)

    # Paid amount above the plan total
    with pytest.raises(CreditPlanConflictError):
        plan_after_paid(EnrollmentBillingPlan(date(2026, 1, 15), 5, 3, 5000), paid)

    # Every cuota paid with balance left over
    with pytest.raises(CreditPlanConflictError):
        plan_after_paid(EnrollmentBillingPlan(date(2026, 1, 15), 5, 2, 10000), paid)
