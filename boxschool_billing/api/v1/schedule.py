"""POST /v1/schedule/preview - Compute an installment schedule without saving it"""

from fastapi import APIRouter

from boxschool_billing.api.v1.schemas import SchedulePreviewRequest, SchedulePreviewResponse, ScheduleEntrySchema
from boxschool_billing.domain.installments import generate_schedule
from boxschool_billing.infrastructure.observability.metrics import record_schedule

router = APIRouter()


@router.post("/schedule/preview", response_model=SchedulePreviewResponse)
def preview_schedule(request_body: SchedulePreviewRequest):
    """Return due dates and amounts for a credit plan (pure computation)"""
    entries = generate_schedule(
        request_body.starts_on,
        request_body.billing_day,
        request_body.installments_count,
        request_body.plan_total_cents,
    )
    record_schedule("preview")

    return SchedulePreviewResponse(
        plan_total_cents=request_body.plan_total_cents,
        installments=[
            ScheduleEntrySchema(idx=e.idx, due_on=e.due_on, amount_cents=e.amount_cents)
            for e in entries
        ],
    )
