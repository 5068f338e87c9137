"""Two writers on the same pen through separate sessions and connections."""

import threading
from datetime import date

import pytest

from feedlot.core.errors import InvariantViolation
from feedlot.core.ids import SequenceIdGenerator
from feedlot.db import Base, make_engine, make_session_factory
from feedlot.models.cattle_sale import CattleSale
from feedlot.models.death_loss import DeathLoss, LossReason
from feedlot.models.operation import InviteCode
from feedlot.models.pen import CattleType, Pen, PenStatus
from feedlot.schemas.death_loss import DeathLossCreate
from feedlot.schemas.operation import OperationCreate
from feedlot.schemas.pen import PenCreate
from feedlot.schemas.sale import CattleSaleCreate
from feedlot.services import death_loss_service, operation_service, pen_service, sale_service

from .conftest import OPERATOR


@pytest.fixture
def file_sessions(tmp_path):
    """Session factory over a file-backed SQLite, one connection per session."""
    engine = make_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    Base.metadata.create_all(bind=engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def small_pen(file_sessions):
    ids = SequenceIdGenerator()
    with file_sessions() as db:
        db.add(InviteCode(code="RANCH2025", operator_email=OPERATOR))
        db.commit()
        operation_service.create_operation(
            db,
            OperationCreate(
                name="Rolling Hills Feedlot",
                operator_email=OPERATOR,
                location="Garden City, KS",
                invite_code="RANCH2025",
            ),
            ids=ids,
        )
        pen = pen_service.create_pen(
            db,
            PenCreate(
                name="Pen A-1",
                capacity=5,
                current=5,
                cattle_type=CattleType.STEERS,
                starting_weight=600,
                market_weight=1300,
                operator_email=OPERATOR,
            ),
            ids=ids,
            today=date(2025, 1, 1),
        )
        return pen.pen_id


@pytest.fixture
def both_validated(monkeypatch):
    """Holds each writer right after its head-count check until the other one gets there too."""
    barrier = threading.Barrier(2, timeout=5)
    resolve = operation_service.resolve_operation_id

    def _resolve(db, operator_email):
        operation_id = resolve(db, operator_email)
        barrier.wait()
        return operation_id

    monkeypatch.setattr(operation_service, "resolve_operation_id", _resolve)


def _run_in_threads(file_sessions, write, count=2):
    errors = []

    def _worker(index):
        with file_sessions() as db:
            try:
                write(db, SequenceIdGenerator(start=index * 100 + 1))
            except InvariantViolation as exc:
                errors.append(exc)

    threads = [threading.Thread(target=_worker, args=(i,)) for i in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)
    return errors


class TestConcurrentHeadcount:
    def test_second_death_loss_is_rejected(self, file_sessions, small_pen, both_validated):
        loss_in = DeathLossCreate(
            pen_id=small_pen,
            loss_date=date(2025, 2, 3),
            reason=LossReason.DISEASE,
            cattle_count=5,
            estimated_weight=850,
            operator_email=OPERATOR,
        )

        errors = _run_in_threads(
            file_sessions,
            lambda db, ids: death_loss_service.record_death_loss(db, loss_in, ids=ids),
        )

        with file_sessions() as db:
            losses = db.query(DeathLoss).all()
            pen = db.get(Pen, small_pen)

            assert len(errors) == 1
            assert len(losses) == 1
            assert sum(loss.cattle_count for loss in losses) + pen.current == 5
            assert pen.current == 0

    def test_pen_is_sold_once(self, file_sessions, small_pen, both_validated):
        sale_in = CattleSaleCreate(
            pen_id=small_pen,
            sale_date=date(2025, 7, 20),
            final_weight=1300,
            price_per_cwt=180,
            operator_email=OPERATOR,
        )

        errors = _run_in_threads(
            file_sessions,
            lambda db, ids: sale_service.sell_all_cattle(db, sale_in, ids=ids),
        )

        with file_sessions() as db:
            sales = db.query(CattleSale).all()
            pen = db.get(Pen, small_pen)

            assert len(errors) == 1
            assert len(sales) == 1
            assert sales[0].cattle_count == 5
            assert pen.current == 0
            assert pen.status == PenStatus.INACTIVE
