"""Installment schedule generation for enrollment credit plans"""

from datetime import date
from typing import List, Sequence, Tuple

from boxschool_billing.domain.exceptions import CreditPlanConflictError
from boxschool_billing.domain.models import EnrollmentBillingPlan, InstallmentScheduleEntry
from boxschool_billing.utils.date_utils import add_months, clamp_day, day_in_month


def split_cents(total_cents: int, parts: int) -> List[int]:
    """
    Split an amount into `parts` integer shares that add up exactly.

    The rounding remainder is front-loaded: the first `total % parts`
    shares carry one extra cent.

    Example:
        10000 cents / 3 → [3334, 3333, 3333]
    """
    if parts <= 0:
        return []

    base = total_cents // parts
    remainder = total_cents - base * parts
    return [base + (1 if i < remainder else 0) for i in range(parts)]


def generate_schedule(
    starts_on: date,
    billing_day: int,
    installments_count: int,
    plan_total_cents: int,
) -> List[InstallmentScheduleEntry]:
    """
    Generate monthly cuotas for an enrollment credit plan.

    Rules:
    - First due date is `billing_day` in the month of `starts_on`, pushed
      one month forward when that falls before `starts_on`
    - Following due dates step by one calendar month
    - Earliest installments absorb the rounding remainder (one cent each)
    - Billing days past a month's end clamp to that month's last day

    Args:
        starts_on: Enrollment start date
        billing_day: Preferred day-of-month for each due date (1-28 expected)
        installments_count: Number of cuotas; zero or less yields no entries
        plan_total_cents: Total plan amount in cents

    Returns:
        Entries ordered by idx (1-based)

    Example:
        2026-01-15, day 5, 3 cuotas, 10000 cents →
        [(1, 2026-02-05, 3334), (2, 2026-03-05, 3333), (3, 2026-04-05, 3333)]
    """
    if installments_count <= 0:
        return []

    first_due = clamp_day(starts_on.year, starts_on.month, billing_day)
    months_ahead = 1 if first_due < starts_on else 0

    amounts = split_cents(plan_total_cents, installments_count)

    return [
        InstallmentScheduleEntry(
            idx=i + 1,
            due_on=day_in_month(starts_on, months_ahead + i, billing_day),
            amount_cents=amount,
        )
        for i, amount in enumerate(amounts)
    ]


def schedule_for_plan(plan: EnrollmentBillingPlan) -> List[InstallmentScheduleEntry]:
    """Generate the schedule for a plan record"""
    return generate_schedule(
        plan.starts_on,
        plan.billing_day,
        plan.installments_count,
        plan.plan_total_cents,
    )


def plan_after_paid(
    plan: EnrollmentBillingPlan,
    paid_installments: Sequence[Tuple[date, int]],
) -> EnrollmentBillingPlan:
    """
    Plan for the cuotas still to schedule when some are already paid.

    Paid cuotas count against both the installment count and the total.
    The remaining balance is spread over the remaining cuotas, starting the
    month after the last paid period, so paid and new cuotas together add
    up to the plan total.

    Args:
        plan: Plan requested for the enrollment
        paid_installments: (period_start, amount_cents) of each paid cuota

    Raises:
        CreditPlanConflictError: paid cuotas already exceed the new plan
    """
    if not paid_installments:
        return plan

    remaining_count = plan.installments_count - len(paid_installments)
    remaining_cents = plan.plan_total_cents - sum(amount for _, amount in paid_installments)

    if remaining_count < 0 or remaining_cents < 0 or (remaining_count == 0 and remaining_cents > 0):
        raise CreditPlanConflictError(
            f"{len(paid_installments)} paid installments do not fit a plan of "
            f"{plan.installments_count} installments for {plan.plan_total_cents} cents"
        )

    next_period = add_months(max(period for period, _ in paid_installments), 1)

    return EnrollmentBillingPlan(
        starts_on=max(plan.starts_on, next_period),
        billing_day=plan.billing_day,
        installments_count=remaining_count,
        plan_total_cents=remaining_cents,
    )
