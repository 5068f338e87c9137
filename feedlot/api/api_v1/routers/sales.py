from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from feedlot.api.deps import get_id_generator, to_http_exception
from feedlot.core.errors import LedgerError
from feedlot.core.ids import IdGenerator
from feedlot.core.logging import get_logger
from feedlot.db import get_db
from feedlot.schemas.sale import (
    CattleSaleCreate,
    CattleSaleRead,
    PartialSaleCreate,
    PartialSaleRead,
)
from feedlot.services import report_service, sale_service

router = APIRouter(tags=["sales"])
logger = get_logger(module="sales")


# ---------- Ventas parciales ----------

@router.get("/partial-sales/", response_model=List[PartialSaleRead])
def list_partial_sales(
    operator_email: str,
    db: Session = Depends(get_db),
):
    sales = report_service.partial_sales_by_operator(db=db, operator_email=operator_email)
    logger.info(
        "Listando ventas parciales",
        operator_email=operator_email,
        sales_count=len(sales),
    )
    return sales


@router.post(
    "/partial-sales/",
    response_model=PartialSaleRead,
    status_code=status.HTTP_201_CREATED,
)
def record_partial_sale(
    sale_in: PartialSaleCreate,
    db: Session = Depends(get_db),
    ids: IdGenerator = Depends(get_id_generator),
):
    try:
        sale = sale_service.record_partial_sale(db=db, sale_in=sale_in, ids=ids)
    except LedgerError as exc:
        logger.warning("Venta parcial rechazada", pen_id=sale_in.pen_id, error=str(exc))
        raise to_http_exception(exc) from exc

    logger.info(
        "Venta parcial registrada",
        partial_sale_id=sale.partial_sale_id,
        pen_id=sale.pen_id,
        total_revenue=sale.total_revenue,
    )
    return sale


# ---------- Ventas totales ----------

@router.get("/cattle-sales/", response_model=List[CattleSaleRead])
def list_cattle_sales(
    operator_email: str,
    db: Session = Depends(get_db),
):
    sales = report_service.sales_by_operator(db=db, operator_email=operator_email)
    logger.info(
        "Listando ventas totales",
        operator_email=operator_email,
        sales_count=len(sales),
    )
    return sales


@router.post(
    "/cattle-sales/",
    response_model=CattleSaleRead,
    status_code=status.HTTP_201_CREATED,
)
def sell_all_cattle(
    sale_in: CattleSaleCreate,
    db: Session = Depends(get_db),
    ids: IdGenerator = Depends(get_id_generator),
):
    try:
        sale = sale_service.sell_all_cattle(db=db, sale_in=sale_in, ids=ids)
    except LedgerError as exc:
        logger.warning("Venta total rechazada", pen_id=sale_in.pen_id, error=str(exc))
        raise to_http_exception(exc) from exc

    logger.info(
        "Venta total registrada",
        sale_id=sale.sale_id,
        pen_id=sale.pen_id,
        total_revenue=sale.total_revenue,
    )
    return sale
