from typing import List, Optional

from sqlalchemy.orm import Session

from feedlot.core.config import settings
from feedlot.core.errors import InvariantViolation, ValidationError
from feedlot.core.ids import IdGenerator, default_id_generator
from feedlot.core.logging import get_logger
from feedlot.db import atomic
from feedlot.models.cattle_sale import CattleSale
from feedlot.models.partial_sale import PartialSale
from feedlot.schemas.sale import CattleSaleCreate, PartialSaleCreate
from feedlot.services import metrics, operation_service, pen_service, plan_catalog
from feedlot.services.pen_service import HeadcountCause

logger = get_logger(module="sale_service")


# ---------- Venta parcial ----------

def record_partial_sale(
    db: Session,
    sale_in: PartialSaleCreate,
    ids: Optional[IdGenerator] = None,
) -> PartialSale:
    """
    Vende parte del corral. Puede vaciarlo, pero el corral sigue Active:
    solo la venta total lo pasa a Inactive.
    """
    with atomic(db):
        pen = pen_service.require_pen(db, sale_in.pen_id, sale_in.operator_email, for_update=True)

        if sale_in.cattle_count < 1 or sale_in.cattle_count > pen.current:
            logger.warning(
                "Venta parcial rechazada: cabezas fuera de rango",
                pen_id=pen.pen_id,
                cattle_count=sale_in.cattle_count,
                current=pen.current,
            )
            raise ValidationError(
                "Partial sale count must be between 1 and the pen's current head count",
                cattle_count=sale_in.cattle_count,
                current=pen.current,
            )

        operation_id = operation_service.resolve_operation_id(db, sale_in.operator_email)

        db_obj = PartialSale(
            partial_sale_id=(ids or default_id_generator).new_id("partial_sale"),
            operation_id=operation_id,
            total_revenue=metrics.sale_revenue(
                sale_in.final_weight, sale_in.price_per_cwt, sale_in.cattle_count
            ),
            **sale_in.model_dump(),
        )
        db.add(db_obj)
        pen_service.apply_headcount_delta(
            db, pen.pen_id, -sale_in.cattle_count, HeadcountCause.PARTIAL_SALE
        )

    logger.info(
        "Venta parcial registrada en servicio",
        partial_sale_id=db_obj.partial_sale_id,
        pen_id=db_obj.pen_id,
        cattle_count=db_obj.cattle_count,
        total_revenue=db_obj.total_revenue,
        remaining=pen.current,
    )

    return db_obj


def list_partial_sales_by_operator(db: Session, operator_email: str) -> List[PartialSale]:
    return (
        db.query(PartialSale)
        .filter(PartialSale.operator_email == operator_email)
        .order_by(PartialSale.created_at, PartialSale.partial_sale_id)
        .all()
    )


def list_partial_sales_for_pen(db: Session, pen_id: str) -> List[PartialSale]:
    return (
        db.query(PartialSale)
        .filter(PartialSale.pen_id == pen_id)
        .order_by(PartialSale.created_at, PartialSale.partial_sale_id)
        .all()
    )


# ---------- Venta total ----------

def sell_all_cattle(
    db: Session,
    sale_in: CattleSaleCreate,
    ids: Optional[IdGenerator] = None,
) -> CattleSale:
    with atomic(db):
        pen = pen_service.require_pen(db, sale_in.pen_id, sale_in.operator_email, for_update=True)

        # Vender 0 cabezas no es una venta: la segunda venta total falla
        if pen.current <= 0:
            logger.warning(
                "Venta total rechazada: corral sin cabezas",
                pen_id=pen.pen_id,
                status=pen.status.value,
            )
            raise InvariantViolation("Pen has no cattle to sell", pen_id=pen.pen_id)

        operation_id = operation_service.resolve_operation_id(db, sale_in.operator_email)

        # Cabezas antes de vaciar el corral
        cattle_count = pen.current

        start_date = metrics.feed_start_date(
            plan_catalog.plan_start_dates(db, pen.pen_id),
            sale_in.sale_date,
            default_days=settings.DEFAULT_DAYS_ON_FEED,
        )
        days_on_feed = metrics.days_on_feed(start_date, sale_in.sale_date)
        average_daily_gain = metrics.average_daily_gain(
            pen.starting_weight, sale_in.final_weight, days_on_feed
        )

        db_obj = CattleSale(
            sale_id=(ids or default_id_generator).new_id("cattle_sale"),
            operation_id=operation_id,
            pen_id=pen.pen_id,
            sale_date=sale_in.sale_date,
            final_weight=sale_in.final_weight,
            price_per_cwt=sale_in.price_per_cwt,
            pen_name=pen.name,
            cattle_type=pen.cattle_type,
            starting_weight=pen.starting_weight,
            cattle_count=cattle_count,
            total_revenue=metrics.sale_revenue(
                sale_in.final_weight, sale_in.price_per_cwt, cattle_count
            ),
            days_on_feed=days_on_feed,
            average_daily_gain=average_daily_gain,
            operator_email=sale_in.operator_email,
        )
        db.add(db_obj)

        pen.average_daily_gain = average_daily_gain
        pen_service.apply_headcount_delta(db, pen.pen_id, -cattle_count, HeadcountCause.FULL_SALE)

    logger.info(
        "Venta total registrada en servicio",
        sale_id=db_obj.sale_id,
        pen_id=db_obj.pen_id,
        cattle_count=cattle_count,
        total_revenue=db_obj.total_revenue,
        days_on_feed=days_on_feed,
        average_daily_gain=average_daily_gain,
    )

    return db_obj


def list_cattle_sales_by_operator(db: Session, operator_email: str) -> List[CattleSale]:
    return (
        db.query(CattleSale)
        .filter(CattleSale.operator_email == operator_email)
        .order_by(CattleSale.created_at, CattleSale.sale_id)
        .all()
    )


def list_cattle_sales_for_pen(db: Session, pen_id: str) -> List[CattleSale]:
    return (
        db.query(CattleSale)
        .filter(CattleSale.pen_id == pen_id)
        .order_by(CattleSale.created_at, CattleSale.sale_id)
        .all()
    )
