# =========================================================
# SALES ROUTER
#
# - Create and cancel go through the sale workflow, which owns
#   the transaction and the stock changes
# - Everything else is read-only
# =========================================================

import logging
import math
from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, status, Request
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from pos_api.database import get_db
from pos_api.core.config import settings
from pos_api.core.errors import unwrap
from pos_api.core.rate_limiter import limiter
from pos_api.models.sales import PaymentMethod, SaleStatus
from pos_api.schemas.sale import SaleCreate, SalePage, SaleResponse
from pos_api.services import sale_service
from pos_api.services.sale_service import SaleLineRequest

logger = logging.getLogger("pos_api.sales")

router = APIRouter(prefix="/api/v1/sales", tags=["Sales"])


# =========================================================
# CREATE SALE
# =========================================================
@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.SALES_RATE_LIMIT)
def create_sale(
    request: Request,
    sale_data: SaleCreate,
    db: Session = Depends(get_db),
):
    lines = [
        SaleLineRequest(product_id=item.product_id, quantity=item.quantity)
        for item in sale_data.items
    ]

    try:
        result = sale_service.create_sale(
            db,
            customer_name=sale_data.customer_name,
            payment_method=sale_data.payment_method,
            lines=lines,
        )
    except SQLAlchemyError:
        logger.exception("Database error while creating sale")
        raise HTTPException(status_code=500, detail="Unable to complete sale")

    return unwrap(result)


# =========================================================
# LIST SALES (PAGINATED)
# =========================================================
@router.get("", response_model=SalePage)
def list_sales(
    db: Session = Depends(get_db),
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
):
    sales, total = sale_service.list_sales(db, page, size)

    return {
        "items": sales,
        "total": total,
        "page": page,
        "size": size,
        "pages": math.ceil(total / size) if total else 0,
    }


# =========================================================
# FILTERED QUERIES
# Declared before /{sale_id} so the paths are not read as ids
# =========================================================
@router.get("/customer", response_model=list[SaleResponse])
def sales_by_customer(
    customer_name: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    return sale_service.sales_by_customer(db, customer_name)


@router.get("/date-range", response_model=list[SaleResponse])
def sales_by_date_range(
    start_date: datetime,
    end_date: datetime,
    db: Session = Depends(get_db),
):
    return unwrap(sale_service.sales_by_date_range(db, start_date, end_date))


@router.get("/payment-method", response_model=list[SaleResponse])
def sales_by_payment_method(
    payment_method: PaymentMethod,
    db: Session = Depends(get_db),
):
    return sale_service.sales_by_payment_method(db, payment_method)


@router.get("/status", response_model=list[SaleResponse])
def sales_by_status(
    sale_status: SaleStatus = Query(..., alias="status"),
    db: Session = Depends(get_db),
):
    return sale_service.sales_by_status(db, sale_status)


@router.get("/above-amount", response_model=list[SaleResponse])
def sales_above_amount(
    min_amount: Decimal = Query(..., ge=0),
    db: Session = Depends(get_db),
):
    return sale_service.sales_above_amount(db, min_amount)


# =========================================================
# GET SINGLE SALE
# =========================================================
@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(
    sale_id: int,
    db: Session = Depends(get_db),
):
    return unwrap(sale_service.get_sale(db, sale_id))


# =========================================================
# CANCEL SALE
# =========================================================
@router.post("/{sale_id}/cancel", response_model=SaleResponse)
@limiter.limit(settings.SALES_RATE_LIMIT)
def cancel_sale(
    request: Request,
    sale_id: int,
    db: Session = Depends(get_db),
):
    try:
        result = sale_service.cancel_sale(db, sale_id)
    except SQLAlchemyError:
        logger.exception("Database error while cancelling sale %s", sale_id)
        raise HTTPException(status_code=500, detail="Unable to cancel sale")

    return unwrap(result)
