"""Tests for the sample data loader."""

from datetime import date

from feedlot.models.feeding_plan import FeedingPlan, ScheduleChange
from feedlot.models.nutritionist import Nutritionist
from feedlot.models.operation import InviteCode
from feedlot.models.pen import Pen, PenStatus
from feedlot.seed_data import SAMPLE_OPERATOR, seed_all
from feedlot.services import operation_service, report_service

TODAY = date(2025, 1, 16)


class TestSeedData:
    def test_loads_sample_operation_data(self, db):
        seed_all(db, today=TODAY)

        assert db.query(InviteCode).count() == 4
        assert db.query(Nutritionist).count() == 3
        assert db.query(Pen).count() == 3
        assert db.query(FeedingPlan).count() == 3
        assert db.query(ScheduleChange).count() == 3

    def test_is_idempotent(self, db):
        seed_all(db, today=TODAY)
        seed_all(db, today=TODAY)

        assert db.query(Pen).count() == 3
        assert db.query(FeedingPlan).count() == 3

    def test_dashboard_over_sample_data(self, db):
        seed_all(db, today=TODAY)

        totals = report_service.dashboard_stats(db, SAMPLE_OPERATOR)

        assert totals.total_pens == 3
        assert totals.total_cattle == 51
        assert totals.active_schedules == 2

    def test_upcoming_changes_over_sample_data(self, db):
        seed_all(db, today=TODAY)

        changes = report_service.upcoming_changes(db, SAMPLE_OPERATOR, today=TODAY)

        assert [c.change_id for c in changes] == ["CHANGE-003", "CHANGE-002"]

    def test_maintenance_pen(self, db):
        seed_all(db, today=TODAY)

        pen = db.get(Pen, "pen-003")

        assert pen.status == PenStatus.MAINTENANCE
        assert pen.current == 0

    def test_invite_code_valid_for_its_email(self, db):
        seed_all(db, today=TODAY)
        assert operation_service.validate_invite_code(db, "RANCH2025", SAMPLE_OPERATOR)
        assert not operation_service.validate_invite_code(db, "RANCH2025", "jane.smith@example.com")
