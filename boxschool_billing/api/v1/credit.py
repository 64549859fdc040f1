"""POST /v1/enrollments/{enrollment_id}/credit - Save and (re)generate a credit plan"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from boxschool_billing.api.v1.schemas import CreditPlanRequest, CreditPlanResponse, ChargeSchema, EnrollmentPlanSchema
from boxschool_billing.api.dependencies import get_request_id, get_today, require_roles
from boxschool_billing.domain.exceptions import CreditPlanConflictError, EnrollmentNotFoundError
from boxschool_billing.domain.installments import plan_after_paid, schedule_for_plan
from boxschool_billing.domain.permissions import BILLING_ROLES
from boxschool_billing.infrastructure.database.session import get_db
from boxschool_billing.infrastructure.database.repositories import ChargeRepository, EnrollmentRepository
from boxschool_billing.infrastructure.observability.logging import log_schedule_saved
from boxschool_billing.infrastructure.observability.metrics import record_schedule

router = APIRouter()


@router.post(
    "/enrollments/{enrollment_id}/credit",
    response_model=CreditPlanResponse,
    status_code=201,
    dependencies=[Depends(require_roles(*BILLING_ROLES))],
)
def save_credit_plan(
    enrollment_id: int,
    request_body: CreditPlanRequest,
    request: Request,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """
    Store credit settings and regenerate the enrollment's installments.

    Flow (single transaction):
    1. Save plan total, installment count and billing day on the enrollment
    2. Delete unpaid/partial installments (paid ones are kept)
    3. Generate the schedule from starts_on (today if unset). Paid cuotas
       count against the plan: the unpaid balance is spread over the
       remaining cuotas, starting after the last paid period
    4. Persist one unpaid charge per generated cuota

    A plan that paid cuotas already exceed answers 409.
    """
    request_id = get_request_id(request)

    try:
        enrollment_repo = EnrollmentRepository(db)
        charge_repo = ChargeRepository(db)

        enrollment = enrollment_repo.get_enrollment(enrollment_id)
        plan = enrollment_repo.save_credit_plan(
            enrollment,
            plan_total_cents=request_body.plan_total_cents,
            installments_count=request_body.installments_count,
            billing_day=request_body.billing_day,
            today=today,
        )

        removed = charge_repo.delete_open_installments(enrollment.id)
        paid = [(c.period_start, c.amount_cents) for c in charge_repo.paid_installments(enrollment.id)]
        created = charge_repo.create_installments(enrollment, schedule_for_plan(plan_after_paid(plan, paid)))

        db.commit()

    except EnrollmentNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    except CreditPlanConflictError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error saving credit plan: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_schedule("credit_plan", installments_created=len(created))
    log_schedule_saved(
        request_id,
        enrollment.id,
        plan.installments_count,
        plan.plan_total_cents,
        removed,
        len(created),
    )

    return CreditPlanResponse(
        enrollment=EnrollmentPlanSchema.from_enrollment(enrollment),
        installments=[ChargeSchema.from_charge(c, today) for c in charge_repo.list_installments(enrollment.id)],
    )
