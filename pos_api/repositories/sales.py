"""
Sale store (persistence).

Sale headers and their items. Items are always fetched with an explicit
query so nothing is lazy-loaded once the session has moved on.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, selectinload

from pos_api.models.sale_items import SaleItem
from pos_api.models.sales import PaymentMethod, Sale, SaleStatus


class SaleStore:
    def __init__(self, db: Session):
        self.db = db

    def _with_lines(self) -> Query:
        return self.db.query(Sale).options(
            selectinload(Sale.items).selectinload(SaleItem.product)
        )

    def create(self, sale: Sale) -> Sale:
        self.db.add(sale)
        self.db.flush()
        return sale

    def add_line(self, sale_id: int, line: SaleItem) -> SaleItem:
        line.sale_id = sale_id
        self.db.add(line)
        self.db.flush()
        return line

    def get_by_id(self, sale_id: int, *, for_update: bool = False) -> Optional[Sale]:
        query = self.db.query(Sale).filter(Sale.id == sale_id)
        if for_update:
            query = query.with_for_update().populate_existing()
        return query.first()

    def get_with_lines(self, sale_id: int) -> Optional[Sale]:
        return self._with_lines().filter(Sale.id == sale_id).first()

    def list_lines(self, sale_id: int) -> List[SaleItem]:
        return (
            self.db.query(SaleItem)
            .filter(SaleItem.sale_id == sale_id)
            .order_by(SaleItem.id)
            .all()
        )

    def update_header(self, sale: Sale) -> Sale:
        self.db.add(sale)
        self.db.flush()
        return sale

    def page(self, page: int, size: int) -> Tuple[List[Sale], int]:
        total = self.db.query(func.count(Sale.id)).scalar()
        items = (
            self._with_lines()
            .order_by(Sale.created_at.desc(), Sale.id.desc())
            .limit(size)
            .offset(page * size)
            .all()
        )
        return items, total

    def by_customer_name(self, customer_name: str) -> List[Sale]:
        return (
            self._with_lines()
            .filter(Sale.customer_name.ilike(f"%{customer_name}%"))
            .order_by(Sale.id)
            .all()
        )

    def by_date_range(self, start: datetime, end: datetime) -> List[Sale]:
        return (
            self._with_lines()
            .filter(Sale.created_at.between(start, end))
            .order_by(Sale.created_at, Sale.id)
            .all()
        )

    def by_payment_method(self, payment_method: PaymentMethod) -> List[Sale]:
        return (
            self._with_lines()
            .filter(Sale.payment_method == payment_method)
            .order_by(Sale.id)
            .all()
        )

    def by_status(self, status: SaleStatus) -> List[Sale]:
        return (
            self._with_lines()
            .filter(Sale.status == status)
            .order_by(Sale.id)
            .all()
        )

    def above_amount(self, min_amount: Decimal) -> List[Sale]:
        return (
            self._with_lines()
            .filter(Sale.total_amount >= min_amount)
            .order_by(Sale.total_amount.desc(), Sale.id)
            .all()
        )
