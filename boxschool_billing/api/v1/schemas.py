"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from boxschool_billing.config import settings
from boxschool_billing.domain.payments import days_late
from boxschool_billing.infrastructure.database.models import Charge, Enrollment

PaymentMethod = Literal["cash", "card", "yape", "plin", "transfer"]


class SchedulePreviewRequest(BaseModel):
    """Request body for POST /v1/schedule/preview"""

    starts_on: date
    billing_day: int = Field(..., ge=1, le=28, description="Day of month for each due date")
    installments_count: int = Field(..., ge=1, le=settings.max_installments)
    plan_total_cents: int = Field(..., ge=0, description="Plan total in cents")


class ScheduleEntrySchema(BaseModel):
    """Single computed cuota"""

    idx: int
    due_on: date
    amount_cents: int


class SchedulePreviewResponse(BaseModel):
    """Response for POST /v1/schedule/preview"""

    plan_total_cents: int
    installments: List[ScheduleEntrySchema]


class CreditPlanRequest(BaseModel):
    """Request body for POST /v1/enrollments/{id}/credit"""

    plan_total_cents: int = Field(..., ge=1)
    installments_count: int = Field(..., ge=1, le=settings.max_installments)
    billing_day: Optional[int] = Field(None, ge=1, le=28, description="Keeps the enrollment's billing day when omitted")


class ChargeSchema(BaseModel):
    """Installment or initial payment charge"""

    id: int
    enrollment_id: int
    concept: str
    period_start: date
    due_on: date
    amount_cents: int
    paid_cents: int
    status: str
    paid_on: Optional[date] = None
    method: Optional[str] = None
    days_late: int = 0

    @classmethod
    def from_charge(cls, charge: Charge, today: date) -> "ChargeSchema":
        return cls(
            id=charge.id,
            enrollment_id=charge.enrollment_id,
            concept=charge.concept,
            period_start=charge.period_start,
            due_on=charge.due_on,
            amount_cents=charge.amount_cents,
            paid_cents=charge.paid_cents,
            status=charge.status,
            paid_on=charge.paid_on,
            method=charge.method,
            days_late=days_late(charge.due_on, charge.amount_cents, charge.paid_cents, today),
        )


class EnrollmentPlanSchema(BaseModel):
    """Enrollment with its credit plan settings"""

    id: int
    student_id: int
    category_id: Optional[int] = None
    starts_on: Optional[date] = None
    status: str
    billing_day: int
    plan_total_cents: Optional[int] = None
    installments_count: Optional[int] = None

    @classmethod
    def from_enrollment(cls, enrollment: Enrollment) -> "EnrollmentPlanSchema":
        return cls(
            id=enrollment.id,
            student_id=enrollment.student_id,
            category_id=enrollment.category_id,
            starts_on=enrollment.starts_on,
            status=enrollment.status,
            billing_day=enrollment.billing_day,
            plan_total_cents=enrollment.plan_total_cents,
            installments_count=enrollment.installments_count,
        )


class CreditPlanResponse(BaseModel):
    """Response for POST /v1/enrollments/{id}/credit"""

    enrollment: EnrollmentPlanSchema
    installments: List[ChargeSchema]


class InstallmentsResponse(BaseModel):
    """Response for GET /v1/enrollments/{id}/installments"""

    enrollment_id: int
    installments: List[ChargeSchema]


class PayInstallmentRequest(BaseModel):
    """Request body for POST /v1/installments/{id}/pay"""

    method: PaymentMethod
    paid_on: Optional[date] = None
    paid_cents: Optional[int] = Field(None, ge=1, description="Partial amount; omit to pay the rest")


class InitialPaymentRequest(BaseModel):
    """Request body for POST /v1/enrollments/{id}/initial-payment"""

    paid: bool
    method: Optional[PaymentMethod] = None
    paid_on: Optional[date] = None
    amount_cents: Optional[int] = Field(None, ge=1, description="Used when the category has no monthly fee")


class StudentInstallmentItem(BaseModel):
    """Numbered installment in a student's payment summary"""

    id: int
    number: int
    amount_cents: int
    paid_cents: int
    due_on: date
    paid_on: Optional[date] = None
    status: str
    method: Optional[str] = None


class StudentPaymentsSummary(BaseModel):
    """Payment status of a student's active enrollment"""

    enrollment_id: int
    category_name: str
    category_level: str
    total_cents: int
    paid_cents: int
    pending_cents: int
    installments: List[StudentInstallmentItem]


class StudentPaymentsResponse(BaseModel):
    """Response for GET /v1/students/{id}/payments"""

    student_id: int
    data: Optional[StudentPaymentsSummary] = None
