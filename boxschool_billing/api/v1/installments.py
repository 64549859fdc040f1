"""Installment endpoints: list an enrollment's cuotas and pay one"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from boxschool_billing.api.v1.schemas import ChargeSchema, InstallmentsResponse, PayInstallmentRequest
from boxschool_billing.api.dependencies import get_request_id, get_today, require_roles
from boxschool_billing.domain.exceptions import ChargeNotFoundError, EnrollmentNotFoundError, NotAnInstallmentError
from boxschool_billing.domain.models import CONCEPT_INSTALLMENT
from boxschool_billing.domain.payments import apply_installment_payment
from boxschool_billing.domain.permissions import BILLING_ROLES
from boxschool_billing.infrastructure.database.session import get_db
from boxschool_billing.infrastructure.database.repositories import ChargeRepository, EnrollmentRepository
from boxschool_billing.infrastructure.observability.logging import log_installment_payment
from boxschool_billing.infrastructure.observability.metrics import record_payment

router = APIRouter()


@router.get("/enrollments/{enrollment_id}/installments", response_model=InstallmentsResponse)
def list_installments(
    enrollment_id: int,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """Installments of an enrollment ordered by due date, with days late"""
    try:
        enrollment = EnrollmentRepository(db).get_enrollment(enrollment_id)
    except EnrollmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    charges = ChargeRepository(db).list_installments(enrollment.id)
    return InstallmentsResponse(
        enrollment_id=enrollment.id,
        installments=[ChargeSchema.from_charge(c, today) for c in charges],
    )


@router.post(
    "/installments/{charge_id}/pay",
    response_model=ChargeSchema,
    dependencies=[Depends(require_roles(*BILLING_ROLES))],
)
def pay_installment(
    charge_id: int,
    request_body: PayInstallmentRequest,
    request: Request,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """
    Pay an installment in full or in part.

    Amount is capped at what is still owed; an already settled
    installment is returned unchanged.
    """
    request_id = get_request_id(request)
    charge_repo = ChargeRepository(db)

    try:
        charge = charge_repo.get_installment(charge_id)
        outcome = apply_installment_payment(charge.amount_cents, charge.paid_cents, request_body.paid_cents)
        charge_repo.record_payment(charge, outcome, request_body.method, request_body.paid_on or today)
        db.commit()

    except (ChargeNotFoundError, NotAnInstallmentError) as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error paying installment: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if outcome.applied_cents > 0:
        record_payment(CONCEPT_INSTALLMENT, request_body.method, outcome.status, outcome.applied_cents)
        log_installment_payment(request_id, charge.id, request_body.method, outcome.applied_cents, outcome.status)

    return ChargeSchema.from_charge(charge, today)
