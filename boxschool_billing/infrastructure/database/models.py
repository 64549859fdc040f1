"""SQLAlchemy ORM models for enrollments and their charges"""

from sqlalchemy import Column, String, BigInteger, DateTime, Date, Integer, ForeignKey, Text, UniqueConstraint, Index
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

from boxschool_billing.config import settings

Base = declarative_base()


class Category(Base):
    """Membership category (class group) a student enrolls in"""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    level = Column(Text, nullable=True)
    monthly_fee_cents = Column(BigInteger, nullable=True)

    enrollments = relationship("Enrollment", back_populates="category")


class Enrollment(Base):
    """Student enrollment in a category, with its credit plan settings"""

    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    starts_on = Column(Date, nullable=True)
    ends_on = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="active")

    # Credit plan
    billing_day = Column(Integer, nullable=False, default=lambda: settings.default_billing_day)
    plan_total_cents = Column(BigInteger, nullable=True)
    installments_count = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    category = relationship("Category", back_populates="enrollments")
    charges = relationship("Charge", back_populates="enrollment", cascade="all, delete-orphan")


class Charge(Base):
    """Amount owed by a student: an installment or the initial payment"""

    __tablename__ = "charges"
    __table_args__ = (
        UniqueConstraint("enrollment_id", "concept", "period_start", name="uq_charge_period"),
        Index("ix_charge_student_status_due", "student_id", "status", "due_on"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, nullable=False)
    enrollment_id = Column(Integer, ForeignKey("enrollments.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, nullable=True)

    concept = Column(String(50), nullable=False, default="installment")
    period_start = Column(Date, nullable=False)
    due_on = Column(Date, nullable=False)

    amount_cents = Column(BigInteger, nullable=False)
    paid_cents = Column(BigInteger, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="unpaid")
    paid_on = Column(Date, nullable=True)
    method = Column(String(20), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    enrollment = relationship("Enrollment", back_populates="charges")
