"""Shared test fixtures."""

import os
from datetime import date

import pytest

# Antes de importar feedlot: settings se leen al importar
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_TO_FILE", "false")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from feedlot.api.deps import get_id_generator  # noqa: E402
from feedlot.core.ids import SequenceIdGenerator  # noqa: E402
from feedlot.db import Base, get_db, make_engine, make_session_factory  # noqa: E402
from feedlot.main import app  # noqa: E402
from feedlot.models.feeding_plan import PlanStatus  # noqa: E402
from feedlot.models.operation import InviteCode  # noqa: E402
from feedlot.models.pen import CattleType  # noqa: E402
from feedlot.schemas.feeding_plan import FeedingPlanCreate  # noqa: E402
from feedlot.schemas.operation import OperationCreate  # noqa: E402
from feedlot.schemas.pen import PenCreate  # noqa: E402
from feedlot.services import operation_service, pen_service, plan_catalog  # noqa: E402

OPERATOR = "operator@example.com"
OTHER_OPERATOR = "someone.else@example.com"


@pytest.fixture
def engine():
    """In-memory SQLite shared by every connection of the test."""
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def ids():
    return SequenceIdGenerator()


@pytest.fixture
def operation(db, ids):
    """Operation for OPERATOR, created through its invite code."""
    db.add(InviteCode(code="RANCH2025", operator_email=OPERATOR))
    db.commit()
    return operation_service.create_operation(
        db,
        OperationCreate(
            name="Rolling Hills Feedlot",
            operator_email=OPERATOR,
            location="Garden City, KS",
            invite_code="RANCH2025",
        ),
        ids=ids,
    )


@pytest.fixture
def make_pen(db, ids):
    """Factory for pens owned by OPERATOR unless told otherwise."""

    def _make_pen(**overrides):
        data = {
            "name": "Pen A-1",
            "capacity": 25,
            "current": 20,
            "cattle_type": CattleType.STEERS,
            "starting_weight": 600,
            "market_weight": 1300,
            "operator_email": OPERATOR,
        }
        today = overrides.pop("today", date(2025, 1, 1))
        data.update(overrides)
        return pen_service.create_pen(db, PenCreate(**data), ids=ids, today=today)

    return _make_pen


@pytest.fixture
def pen(make_pen, operation):
    return make_pen()


def plan_payload(pen_id, **overrides):
    data = {
        "pen_id": pen_id,
        "plan_name": "High Protein Growth Phase",
        "start_date": date(2025, 1, 1),
        "days_to_feed": 45,
        "status": PlanStatus.ACTIVE,
        "feed_type": "High Protein Mix",
        "operator_email": OPERATOR,
        "schedules": [
            {
                "time": "7:00 AM",
                "total_amount": 45,
                "ingredients": [
                    {"name": "Corn Grain", "category": "Grain", "amount": 20, "percentage": 44.4},
                    {"name": "Soybean Meal", "category": "Protein", "amount": 12, "percentage": 26.7},
                    {"name": "Alfalfa Hay", "category": "Feedstuff", "amount": 13, "percentage": 28.9},
                ],
            }
        ],
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_plan(db, ids):
    def _make_plan(pen_id, **overrides):
        return plan_catalog.publish_plan(
            db, FeedingPlanCreate(**plan_payload(pen_id, **overrides)), ids=ids
        )

    return _make_plan


@pytest.fixture
def client(db, ids):
    """API client wired to the test session and the sequential id generator."""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_id_generator] = lambda: ids
    yield TestClient(app)
    app.dependency_overrides.clear()
