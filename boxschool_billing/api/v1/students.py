"""GET /v1/students/{student_id}/payments - Payment summary of the active enrollment"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from boxschool_billing.api.v1.schemas import StudentInstallmentItem, StudentPaymentsResponse, StudentPaymentsSummary
from boxschool_billing.domain.payments import totals
from boxschool_billing.infrastructure.database.session import get_db
from boxschool_billing.infrastructure.database.repositories import ChargeRepository, EnrollmentRepository

router = APIRouter()


@router.get("/students/{student_id}/payments", response_model=StudentPaymentsResponse)
def get_student_payments(student_id: int, db: Session = Depends(get_db)):
    """
    Totals and numbered installments of the student's latest active enrollment.

    Returns:
        data=None when the student has no active enrollment
    """
    enrollment = EnrollmentRepository(db).get_active_for_student(student_id)
    if enrollment is None:
        return StudentPaymentsResponse(student_id=student_id, data=None)

    installments = ChargeRepository(db).list_installments(enrollment.id)
    total_cents, paid_cents, pending_cents = totals((c.amount_cents, c.paid_cents) for c in installments)

    category = enrollment.category
    summary = StudentPaymentsSummary(
        enrollment_id=enrollment.id,
        category_name=category.name if category else "Plan",
        category_level=(category.level or "") if category else "",
        total_cents=total_cents,
        paid_cents=paid_cents,
        pending_cents=pending_cents,
        installments=[
            StudentInstallmentItem(
                id=c.id,
                number=number,
                amount_cents=c.amount_cents,
                paid_cents=c.paid_cents,
                due_on=c.due_on,
                paid_on=c.paid_on,
                status=c.status,
                method=c.method,
            )
            for number, c in enumerate(installments, start=1)
        ],
    )

    return StudentPaymentsResponse(student_id=student_id, data=summary)
