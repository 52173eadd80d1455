# tests/conftest.py
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import infra.db.models  # noqa: F401
from infra.db.base import Base
from infra.services import build_service_dict

from core.models import CostType, FinancialRecord, RecordType


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    # Same wiring as the application, but on the test session
    return build_service_dict(session)


@pytest.fixture
def now():
    return datetime(2024, 12, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_record():
    counter = {"n": 0}

    def _make(date, type, amount, *, category="General", project_id="p-1", cost_type=None):
        counter["n"] += 1
        return FinancialRecord(
            id=f"r-{counter['n']}",
            date=date,
            type=RecordType(type),
            category=category,
            amount=float(amount),
            project_id=project_id,
            cost_type=CostType(cost_type) if cost_type else None,
            description="test",
            user_id="u-1",
        )

    return _make
