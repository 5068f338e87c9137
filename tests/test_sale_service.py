"""Tests for partial and full cattle sales."""

from datetime import date

import pytest

from feedlot.core.errors import InvariantViolation, NotFoundError, ValidationError
from feedlot.models.pen import PenStatus
from feedlot.schemas.sale import CattleSaleCreate, PartialSaleCreate
from feedlot.services import pen_service, sale_service

from .conftest import OPERATOR, OTHER_OPERATOR

SALE_DATE = date(2025, 7, 20)


def _partial(pen_id, cattle_count, final_weight=1200, price_per_cwt=180, operator_email=OPERATOR):
    return PartialSaleCreate(
        pen_id=pen_id,
        sale_date=SALE_DATE,
        cattle_count=cattle_count,
        final_weight=final_weight,
        price_per_cwt=price_per_cwt,
        buyer="Tri-State Packers",
        operator_email=operator_email,
    )


def _full(pen_id, final_weight=1300, price_per_cwt=180, sale_date=SALE_DATE, operator_email=OPERATOR):
    return CattleSaleCreate(
        pen_id=pen_id,
        final_weight=final_weight,
        price_per_cwt=price_per_cwt,
        sale_date=sale_date,
        operator_email=operator_email,
    )


class TestPartialSale:
    def test_revenue_and_head_count(self, db, ids, pen):
        sale = sale_service.record_partial_sale(db, _partial(pen.pen_id, 5), ids=ids)

        assert sale.partial_sale_id == "PSALE-001"
        assert sale.total_revenue == 10800
        assert pen.current == 15
        assert pen.status == PenStatus.ACTIVE

    def test_selling_every_head_keeps_pen_active(self, db, ids, pen):
        sale_service.record_partial_sale(db, _partial(pen.pen_id, 20), ids=ids)

        assert pen.current == 0
        assert pen.status == PenStatus.ACTIVE

    @pytest.mark.parametrize("count", [0, 21])
    def test_count_out_of_range(self, db, ids, pen, count):
        with pytest.raises(ValidationError):
            sale_service.record_partial_sale(db, _partial(pen.pen_id, count), ids=ids)

        db.refresh(pen)
        assert pen.current == 20
        assert sale_service.list_partial_sales_for_pen(db, pen.pen_id) == []

    def test_other_operator(self, db, ids, pen):
        with pytest.raises(NotFoundError):
            sale_service.record_partial_sale(
                db, _partial(pen.pen_id, 1, operator_email=OTHER_OPERATOR), ids=ids
            )


class TestSellAllCattle:
    def test_without_plans_uses_default_days_on_feed(self, db, ids, pen):
        sale = sale_service.sell_all_cattle(db, _full(pen.pen_id), ids=ids)

        assert sale.sale_id == "SALE-001"
        assert sale.cattle_count == 20
        assert sale.days_on_feed == 180
        assert sale.average_daily_gain == 3.89
        assert sale.total_revenue == 20 * 1300 * 180 / 100

    def test_snapshots_pen_fields(self, db, ids, pen):
        sale = sale_service.sell_all_cattle(db, _full(pen.pen_id), ids=ids)

        assert sale.pen_name == "Pen A-1"
        assert sale.cattle_type == pen.cattle_type
        assert sale.starting_weight == 600

    def test_earliest_plan_start_sets_days_on_feed(self, db, ids, pen, make_plan):
        make_plan(pen.pen_id, start_date=date(2025, 3, 1))
        make_plan(pen.pen_id, start_date=date(2025, 1, 1))

        sale = sale_service.sell_all_cattle(db, _full(pen.pen_id), ids=ids)

        assert sale.days_on_feed == (SALE_DATE - date(2025, 1, 1)).days

    def test_gain_for_known_window(self, db, ids, make_pen, make_plan, operation):
        pen = make_pen(starting_weight=650, market_weight=1400)
        make_plan(pen.pen_id, start_date=date(2025, 1, 1))

        sale = sale_service.sell_all_cattle(
            db, _full(pen.pen_id, final_weight=1350, sale_date=date(2025, 7, 20)), ids=ids
        )

        assert sale.days_on_feed == 200
        assert sale.average_daily_gain == 3.5

    def test_plan_after_sale_gives_zero_gain(self, db, ids, pen, make_plan):
        make_plan(pen.pen_id, start_date=date(2025, 8, 1))

        sale = sale_service.sell_all_cattle(db, _full(pen.pen_id), ids=ids)

        assert sale.days_on_feed < 0
        assert sale.average_daily_gain == 0.0

    def test_pen_becomes_inactive_and_caches_gain(self, db, ids, pen):
        sale = sale_service.sell_all_cattle(db, _full(pen.pen_id), ids=ids)

        assert pen.current == 0
        assert pen.status == PenStatus.INACTIVE
        assert pen.is_sold
        assert pen.average_daily_gain == sale.average_daily_gain

    def test_second_full_sale_rejected(self, db, ids, pen):
        sale_service.sell_all_cattle(db, _full(pen.pen_id), ids=ids)

        with pytest.raises(InvariantViolation):
            sale_service.sell_all_cattle(db, _full(pen.pen_id), ids=ids)

        assert len(sale_service.list_cattle_sales_for_pen(db, pen.pen_id)) == 1

    def test_operator_without_operation(self, db, ids, make_pen):
        pen = make_pen()

        with pytest.raises(NotFoundError):
            sale_service.sell_all_cattle(db, _full(pen.pen_id), ids=ids)

        db.refresh(pen)
        assert pen.status == PenStatus.ACTIVE
        assert pen.current == 20


class TestPenLifecycle:
    """Create, weigh, sell part of the pen, then sell the rest."""

    def test_end_to_end(self, db, ids, pen):
        pen_service.update_weight(db, pen.pen_id, 900, OPERATOR, record_date=date(2025, 3, 1))

        partial = sale_service.record_partial_sale(
            db, _partial(pen.pen_id, 4, final_weight=950, price_per_cwt=175), ids=ids
        )
        assert pen.current == 16
        assert partial.total_revenue == 6650

        sale = sale_service.sell_all_cattle(
            db, _full(pen.pen_id, final_weight=1300, price_per_cwt=180), ids=ids
        )
        assert sale.cattle_count == 16
        assert sale.total_revenue == 37440
        assert pen.current == 0
        assert pen.status == PenStatus.INACTIVE

        assert [s.sale_id for s in sale_service.list_cattle_sales_by_operator(db, OPERATOR)] == ["SALE-001"]
        assert [s.partial_sale_id for s in sale_service.list_partial_sales_by_operator(db, OPERATOR)] == [
            "PSALE-001"
        ]
