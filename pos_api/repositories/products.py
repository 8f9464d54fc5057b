"""
Product store (persistence).

Single-table reads and writes for products plus the stock adjustment
primitive. Nothing in here commits: callers own the transaction through
UnitOfWork.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from pos_api.models.products import Product
from pos_api.models.sale_items import SaleItem
from pos_api.services.errors import ServiceError, invalid_operation, not_found

logger = logging.getLogger("pos_api.products")


class ProductStore:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, product_id: int, *, for_update: bool = False) -> Optional[Product]:
        query = self.db.query(Product).filter(Product.id == product_id)
        if for_update:
            # SQLite ignores FOR UPDATE, other backends lock the row.
            # populate_existing re-reads values already held by the session
            query = query.with_for_update().populate_existing()
        return query.first()

    def exists(self, product_id: int) -> bool:
        return (
            self.db.query(Product.id)
            .filter(Product.id == product_id)
            .first()
            is not None
        )

    def adjust_stock(self, product_id: int, delta: int) -> Union[Product, ServiceError]:
        """
        Apply a signed delta to a product's stock quantity.

        This is the only sanctioned way to change stock once a product
        exists. The row is locked for the rest of the caller's transaction
        and the new quantity is flushed, not committed.

        Returns the updated product, NOT_FOUND if the product does not
        exist, or INVALID_OPERATION if the result would be negative.
        """
        product = self.get_by_id(product_id, for_update=True)

        if product is None:
            return not_found("Product", product_id)

        new_quantity = product.stock_quantity + delta
        if new_quantity < 0:
            logger.warning(
                "Refusing stock adjustment for product %s: %s %+d would go negative",
                product_id,
                product.stock_quantity,
                delta,
            )
            return invalid_operation("Stock cannot be negative")

        product.stock_quantity = new_quantity
        self.db.flush()

        logger.info(
            "Stock for product %s adjusted by %+d to %s",
            product_id,
            delta,
            new_quantity,
        )
        return product

    def get_by_barcode(self, barcode: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.barcode == barcode).first()

    def barcode_taken(self, barcode: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(Product.id).filter(Product.barcode == barcode)
        if exclude_id is not None:
            query = query.filter(Product.id != exclude_id)
        return query.first() is not None

    def list_all(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id).all()

    def list_by_category(self, category_id: int) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(Product.category_id == category_id)
            .order_by(Product.id)
            .all()
        )

    def search_by_name(self, name: str) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(Product.name.ilike(f"%{name}%"))
            .order_by(Product.name)
            .all()
        )

    def list_low_stock(self, threshold: int) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(Product.stock_quantity <= threshold)
            .order_by(Product.stock_quantity, Product.id)
            .all()
        )

    def is_referenced_by_sales(self, product_id: int) -> bool:
        return (
            self.db.query(SaleItem.id)
            .filter(SaleItem.product_id == product_id)
            .first()
            is not None
        )

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.flush()
