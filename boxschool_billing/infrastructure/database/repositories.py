"""Data access layer for enrollments and charges"""

from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from boxschool_billing.infrastructure.database.models import Enrollment, Charge
from boxschool_billing.domain.exceptions import ChargeNotFoundError, EnrollmentNotFoundError, NotAnInstallmentError
from boxschool_billing.domain.models import (
    CONCEPT_INITIAL_PAYMENT,
    CONCEPT_INSTALLMENT,
    STATUS_PARTIAL,
    STATUS_PAID,
    STATUS_UNPAID,
    EnrollmentBillingPlan,
    InstallmentScheduleEntry,
    PaymentOutcome,
)
from boxschool_billing.utils.date_utils import month_start


class EnrollmentRepository:
    """Repository for enrollments (read + credit plan settings)"""

    def __init__(self, db: Session):
        self.db = db

    def get_enrollment(self, enrollment_id: int) -> Enrollment:
        """Fetch enrollment or raise EnrollmentNotFoundError"""
        enrollment = self.db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()
        if enrollment is None:
            raise EnrollmentNotFoundError(f"Enrollment {enrollment_id} not found")
        return enrollment

    def get_active_for_student(self, student_id: int) -> Optional[Enrollment]:
        """Most recent active enrollment of a student"""
        return (
            self.db.query(Enrollment)
            .filter(Enrollment.student_id == student_id, Enrollment.status == "active")
            .order_by(Enrollment.starts_on.desc(), Enrollment.id.desc())
            .first()
        )

    def save_credit_plan(
        self,
        enrollment: Enrollment,
        plan_total_cents: int,
        installments_count: int,
        billing_day: Optional[int],
        today: date,
    ) -> EnrollmentBillingPlan:
        """
        Store credit settings on the enrollment and return the plan to schedule.

        billing_day None keeps the day already stored on the enrollment.
        """
        enrollment.plan_total_cents = plan_total_cents
        enrollment.installments_count = installments_count
        if billing_day is not None:
            enrollment.billing_day = billing_day
        self.db.flush()

        return EnrollmentBillingPlan(
            starts_on=enrollment.starts_on or today,
            billing_day=enrollment.billing_day,
            installments_count=installments_count,
            plan_total_cents=plan_total_cents,
        )


class ChargeRepository:
    """Repository for installment and initial payment charges"""

    def __init__(self, db: Session):
        self.db = db

    def _installments_query(self, enrollment_id: int):
        return self.db.query(Charge).filter(
            Charge.enrollment_id == enrollment_id,
            Charge.concept == CONCEPT_INSTALLMENT,
        )

    def delete_open_installments(self, enrollment_id: int) -> int:
        """Delete unpaid/partial installments; paid ones are kept"""
        open_charges = (
            self._installments_query(enrollment_id)
            .filter(Charge.status.in_([STATUS_UNPAID, STATUS_PARTIAL]))
            .all()
        )
        for charge in open_charges:
            self.db.delete(charge)
        self.db.flush()
        return len(open_charges)

    def paid_installments(self, enrollment_id: int) -> List[Charge]:
        """Installments already settled in full"""
        return (
            self._installments_query(enrollment_id)
            .filter(Charge.status == STATUS_PAID)
            .order_by(Charge.period_start)
            .all()
        )

    def create_installments(
        self,
        enrollment: Enrollment,
        entries: Iterable[InstallmentScheduleEntry],
    ) -> List[Charge]:
        """Persist one unpaid installment charge per schedule entry"""
        created = []
        for entry in entries:
            charge = Charge(
                student_id=enrollment.student_id,
                enrollment_id=enrollment.id,
                category_id=enrollment.category_id,
                concept=CONCEPT_INSTALLMENT,
                period_start=month_start(entry.due_on),
                due_on=entry.due_on,
                amount_cents=entry.amount_cents,
                paid_cents=0,
                status=STATUS_UNPAID,
            )
            self.db.add(charge)
            created.append(charge)

        self.db.flush()
        return created

    def list_installments(self, enrollment_id: int) -> List[Charge]:
        """Installments of an enrollment ordered by due date"""
        return self._installments_query(enrollment_id).order_by(Charge.due_on, Charge.id).all()

    def get_installment(self, charge_id: int) -> Charge:
        """Fetch an installment charge or raise"""
        charge = self.db.query(Charge).filter(Charge.id == charge_id).first()
        if charge is None:
            raise ChargeNotFoundError(f"Charge {charge_id} not found")
        if charge.concept != CONCEPT_INSTALLMENT:
            raise NotAnInstallmentError(f"Charge {charge_id} is not an installment")
        return charge

    def record_payment(
        self,
        charge: Charge,
        outcome: PaymentOutcome,
        method: str,
        paid_on: date,
    ) -> Charge:
        """Write a payment outcome onto the charge"""
        if outcome.applied_cents <= 0:
            return charge

        charge.paid_cents = outcome.paid_cents
        charge.status = outcome.status
        charge.method = method
        charge.paid_on = paid_on
        self.db.flush()
        return charge

    def get_initial_payment(self, enrollment_id: int) -> Optional[Charge]:
        return (
            self.db.query(Charge)
            .filter(Charge.enrollment_id == enrollment_id, Charge.concept == CONCEPT_INITIAL_PAYMENT)
            .with_for_update()
            .first()
        )

    def ensure_initial_payment(self, enrollment: Enrollment, today: date, fallback_amount_cents: int = 0) -> Charge:
        """
        Return the enrollment's initial payment charge, creating it if missing.

        Amount is the category's monthly fee; fallback_amount_cents is used
        when the category has none.
        """
        charge = self.get_initial_payment(enrollment.id)
        if charge is not None:
            return charge

        amount = (enrollment.category.monthly_fee_cents if enrollment.category else None) or 0
        if amount <= 0:
            amount = fallback_amount_cents

        starts_on = enrollment.starts_on or today
        charge = Charge(
            student_id=enrollment.student_id,
            enrollment_id=enrollment.id,
            category_id=enrollment.category_id,
            concept=CONCEPT_INITIAL_PAYMENT,
            period_start=month_start(starts_on),
            due_on=starts_on,
            amount_cents=amount,
            paid_cents=0,
            status=STATUS_UNPAID,
        )
        self.db.add(charge)
        self.db.flush()
        return charge

    def set_initial_payment(
        self,
        charge: Charge,
        paid_cents: int,
        status: str,
        method: Optional[str],
        paid_on: Optional[date],
    ) -> Charge:
        charge.paid_cents = paid_cents
        charge.status = status
        charge.method = method
        charge.paid_on = paid_on
        self.db.flush()
        return charge
