"""Pytest fixtures for testing"""

import os

# Point the app at SQLite before any module builds the engine
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from boxschool_billing.api.main import create_app
from boxschool_billing.api.dependencies import get_today
from boxschool_billing.infrastructure.database.models import Base, Category, Enrollment
from boxschool_billing.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed business date for lateness and default paid_on
TODAY = date(2026, 3, 10)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and fixed date"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def category(db: Session) -> Category:
    """Category with a monthly fee"""
    cat = Category(name="Boxeo Juvenil", level="Intermedio", monthly_fee_cents=15000)
    db.add(cat)
    db.commit()
    return cat


@pytest.fixture
def enrollment(db: Session, category: Category) -> Enrollment:
    """Active enrollment starting mid-January 2026"""
    enr = Enrollment(
        student_id=7,
        category_id=category.id,
        starts_on=date(2026, 1, 15),
        status="active",
        billing_day=5,
    )
    db.add(enr)
    db.commit()
    return enr
