"""Structured JSON logging for billing events"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from boxschool_billing.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger"""
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)


def log_schedule_saved(
    request_id: str,
    enrollment_id: int,
    installments_count: int,
    plan_total_cents: int,
    removed_count: int,
    created_count: int,
) -> None:
    """Log credit plan (re)generation for an enrollment"""
    logging.info(
        "Credit plan saved",
        extra={
            "request_id": request_id,
            "enrollment_id": enrollment_id,
            "step": "credit_plan_saved",
            "installments_count": installments_count,
            "plan_total_cents": plan_total_cents,
            "removed_installments": removed_count,
            "created_installments": created_count,
        },
    )


def log_installment_payment(
    request_id: str,
    charge_id: int,
    method: str,
    applied_cents: int,
    status: str,
) -> None:
    """Log a payment applied to an installment"""
    logging.info(
        "Installment payment recorded",
        extra={
            "request_id": request_id,
            "charge_id": charge_id,
            "step": "installment_payment",
            "method": method,
            "applied_cents": applied_cents,
            "payment_status": status,
        },
    )
