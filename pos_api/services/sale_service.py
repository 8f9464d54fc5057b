# =========================================================
# SALE WORKFLOW
#
# create_sale:
# - Every line is checked against current stock, priced from the
#   product (client prices are never trusted) and deducted from stock
# - Header, items and stock changes commit together or not at all
#
# cancel_sale:
# - One-way COMPLETED/PENDING -> CANCELLED
# - Restores the stock deducted by each item
# =========================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple, Union

from sqlalchemy.orm import Session

from pos_api.models.sale_items import SaleItem
from pos_api.models.sales import PaymentMethod, Sale, SaleStatus
from pos_api.repositories.products import ProductStore
from pos_api.repositories.sales import SaleStore
from pos_api.repositories.unit_of_work import UnitOfWork
from pos_api.services.errors import (
    ServiceError,
    insufficient_stock,
    invalid_operation,
    invalid_state,
    is_error,
    not_found,
)

logger = logging.getLogger("pos_api.sales")

CENTS = Decimal("0.01")

# Largest value a Numeric(10, 2) column holds
MAX_AMOUNT = Decimal("99999999.99")


@dataclass(frozen=True, slots=True)
class SaleLineRequest:
    product_id: int
    quantity: int


# =========================================================
# CREATE SALE
# =========================================================
def create_sale(
    db: Session,
    customer_name: Optional[str],
    payment_method: PaymentMethod,
    lines: Sequence[SaleLineRequest],
) -> Union[Sale, ServiceError]:
    if not lines:
        return invalid_operation("Sale must contain at least one item")

    products = ProductStore(db)
    sales = SaleStore(db)

    with UnitOfWork(db) as uow:
        sale = sales.create(
            Sale(
                customer_name=customer_name,
                payment_method=payment_method,
                status=SaleStatus.COMPLETED,
                total_amount=Decimal("0.00"),
            )
        )

        total_amount = Decimal("0.00")

        for line in lines:
            if line.quantity is None or line.quantity <= 0:
                return invalid_operation("Item quantity must be greater than zero")

            product = products.get_by_id(line.product_id, for_update=True)

            if product is None:
                logger.warning("Sale rejected: product %s not found", line.product_id)
                return not_found("Product", line.product_id)

            if product.stock_quantity < line.quantity:
                logger.warning(
                    "Sale rejected: %s requested %s, %s available",
                    product.name,
                    line.quantity,
                    product.stock_quantity,
                )
                return insufficient_stock(product.name, line.quantity, product.stock_quantity)

            unit_price = Decimal(product.price).quantize(CENTS)
            line_total = (unit_price * line.quantity).quantize(CENTS)

            if total_amount + line_total > MAX_AMOUNT:
                return invalid_operation(f"Sale total cannot exceed {MAX_AMOUNT}")

            sales.add_line(
                sale.id,
                SaleItem(
                    product_id=product.id,
                    quantity=line.quantity,
                    unit_price=unit_price,
                    line_total=line_total,
                ),
            )

            adjusted = products.adjust_stock(product.id, -line.quantity)
            if is_error(adjusted):
                return adjusted

            total_amount += line_total

        sale.total_amount = total_amount
        sales.update_header(sale)

        sale_id = sale.id
        uow.commit()

    logger.info(
        "Sale %s created: %s item(s), total %s, paid by %s",
        sale_id,
        len(lines),
        total_amount,
        payment_method.value,
    )

    return sales.get_with_lines(sale_id)


# =========================================================
# CANCEL SALE
# =========================================================
def cancel_sale(db: Session, sale_id: int) -> Union[Sale, ServiceError]:
    products = ProductStore(db)
    sales = SaleStore(db)

    with UnitOfWork(db) as uow:
        sale = sales.get_by_id(sale_id, for_update=True)

        if sale is None:
            return not_found("Sale", sale_id)

        if sale.status == SaleStatus.CANCELLED:
            logger.warning("Sale %s is already cancelled", sale_id)
            return invalid_state("Sale is already cancelled")

        # No upper bound on restored stock
        for item in sales.list_lines(sale_id):
            restored = products.adjust_stock(item.product_id, item.quantity)
            if is_error(restored):
                return restored

        sale.status = SaleStatus.CANCELLED
        sales.update_header(sale)

        uow.commit()

    logger.info("Sale %s cancelled and stock restored", sale_id)

    return sales.get_with_lines(sale_id)


# =========================================================
# QUERIES
# =========================================================
def get_sale(db: Session, sale_id: int) -> Union[Sale, ServiceError]:
    sale = SaleStore(db).get_with_lines(sale_id)
    if sale is None:
        return not_found("Sale", sale_id)
    return sale


def list_sales(db: Session, page: int, size: int) -> Tuple[List[Sale], int]:
    return SaleStore(db).page(page, size)


def sales_by_customer(db: Session, customer_name: str) -> List[Sale]:
    return SaleStore(db).by_customer_name(customer_name)


def sales_by_date_range(
    db: Session,
    start_date: datetime,
    end_date: datetime,
) -> Union[List[Sale], ServiceError]:
    if end_date < start_date:
        return invalid_operation("end_date must not be before start_date")
    return SaleStore(db).by_date_range(start_date, end_date)


def sales_by_payment_method(db: Session, payment_method: PaymentMethod) -> List[Sale]:
    return SaleStore(db).by_payment_method(payment_method)


def sales_by_status(db: Session, status: SaleStatus) -> List[Sale]:
    return SaleStore(db).by_status(status)


def sales_above_amount(db: Session, min_amount: Decimal) -> List[Sale]:
    return SaleStore(db).above_amount(min_amount)
