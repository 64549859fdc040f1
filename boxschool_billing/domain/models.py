"""Domain models - pure Python dataclasses representing billing entities"""

from dataclasses import dataclass
from datetime import date

# Charge concepts
CONCEPT_INSTALLMENT = "installment"
CONCEPT_INITIAL_PAYMENT = "initial_payment"

# Charge statuses
STATUS_UNPAID = "unpaid"
STATUS_PARTIAL = "partial"
STATUS_PAID = "paid"


@dataclass(frozen=True)
class EnrollmentBillingPlan:
    """Credit plan inputs taken from an enrollment"""

    starts_on: date
    billing_day: int
    installments_count: int
    plan_total_cents: int


@dataclass(frozen=True)
class InstallmentScheduleEntry:
    """Single cuota in a computed schedule"""

    idx: int
    due_on: date
    amount_cents: int


@dataclass(frozen=True)
class PaymentOutcome:
    """Result of applying a payment to a charge"""

    paid_cents: int
    applied_cents: int
    status: str
