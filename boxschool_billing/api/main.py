"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from boxschool_billing.api.middleware import RequestIDMiddleware, MetricsMiddleware
from boxschool_billing.api.v1 import credit, initial_payment, installments, schedule, students
from boxschool_billing.infrastructure.observability.logging import setup_logging
from boxschool_billing.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Box School Billing",
        description="Enrollment credit plans, installments and payments",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(schedule.router, prefix="/v1", tags=["schedule"])
    app.include_router(credit.router, prefix="/v1", tags=["credit"])
    app.include_router(installments.router, prefix="/v1", tags=["installments"])
    app.include_router(initial_payment.router, prefix="/v1", tags=["initial-payment"])
    app.include_router(students.router, prefix="/v1", tags=["students"])

    return app


app = create_app()
