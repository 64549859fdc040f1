"""GET/POST /v1/enrollments/{enrollment_id}/initial-payment - Initial payment state"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from boxschool_billing.api.v1.schemas import ChargeSchema, InitialPaymentRequest
from boxschool_billing.api.dependencies import get_request_id, get_today, require_roles
from boxschool_billing.config import settings
from boxschool_billing.domain.exceptions import EnrollmentNotFoundError
from boxschool_billing.domain.models import CONCEPT_INITIAL_PAYMENT, STATUS_PAID
from boxschool_billing.domain.payments import initial_payment_state
from boxschool_billing.domain.permissions import BILLING_ROLES
from boxschool_billing.infrastructure.database.session import get_db
from boxschool_billing.infrastructure.database.models import Charge, Enrollment
from boxschool_billing.infrastructure.database.repositories import ChargeRepository, EnrollmentRepository
from boxschool_billing.infrastructure.observability.metrics import record_payment

router = APIRouter()


def _ensure_initial_payment(
    db: Session,
    charge_repo: ChargeRepository,
    enrollment: Enrollment,
    today: date,
    fallback_amount_cents: int = 0,
) -> Charge:
    """Create-or-read the initial payment, re-reading when a concurrent request created it first"""
    try:
        charge = charge_repo.ensure_initial_payment(enrollment, today, fallback_amount_cents)
        db.commit()
    except IntegrityError:
        db.rollback()
        charge = charge_repo.get_initial_payment(enrollment.id)
        if charge is None:
            raise
    return charge


@router.get("/enrollments/{enrollment_id}/initial-payment", response_model=ChargeSchema)
def get_initial_payment(
    enrollment_id: int,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """Initial payment charge; created unpaid from the category fee when missing"""
    try:
        enrollment = EnrollmentRepository(db).get_enrollment(enrollment_id)
    except EnrollmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    charge = _ensure_initial_payment(db, ChargeRepository(db), enrollment, today)
    return ChargeSchema.from_charge(charge, today)


@router.post(
    "/enrollments/{enrollment_id}/initial-payment",
    response_model=ChargeSchema,
    dependencies=[Depends(require_roles(*BILLING_ROLES))],
)
def save_initial_payment(
    enrollment_id: int,
    request_body: InitialPaymentRequest,
    request: Request,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """
    Mark the initial payment as paid or unpaid.

    paid=true settles the full amount (method defaults to cash, date to today);
    paid=false clears amount paid, date and method.
    """
    request_id = get_request_id(request)
    charge_repo = ChargeRepository(db)

    try:
        enrollment = EnrollmentRepository(db).get_enrollment(enrollment_id)
        charge = _ensure_initial_payment(db, charge_repo, enrollment, today, request_body.amount_cents or 0)
        newly_paid = request_body.paid and charge.status != STATUS_PAID

        paid_cents, status = initial_payment_state(request_body.paid, charge.amount_cents)
        if request_body.paid:
            method = request_body.method or settings.default_payment_method
            charge_repo.set_initial_payment(charge, paid_cents, status, method, request_body.paid_on or today)
        else:
            charge_repo.set_initial_payment(charge, paid_cents, status, None, None)

        db.commit()

    except EnrollmentNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error saving initial payment: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if newly_paid:
        record_payment(CONCEPT_INITIAL_PAYMENT, charge.method, status, paid_cents)

    return ChargeSchema.from_charge(charge, today)
