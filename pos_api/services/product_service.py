# pos_api/services/product_service.py

import logging
from decimal import Decimal
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from pos_api.models.products import Product
from pos_api.repositories.categories import CategoryStore
from pos_api.repositories.products import ProductStore
from pos_api.repositories.unit_of_work import UnitOfWork
from pos_api.services.errors import ServiceError, conflict, is_error, not_found

logger = logging.getLogger("pos_api.products")


def get_product(db: Session, product_id: int) -> Union[Product, ServiceError]:
    product = ProductStore(db).get_by_id(product_id)
    if product is None:
        return not_found("Product", product_id)
    return product


def get_product_by_barcode(db: Session, barcode: str) -> Union[Product, ServiceError]:
    product = ProductStore(db).get_by_barcode(barcode)
    if product is None:
        return not_found("Product", barcode, field_name="barcode")
    return product


def list_products(db: Session) -> List[Product]:
    return ProductStore(db).list_all()


def products_by_category(db: Session, category_id: int) -> List[Product]:
    return ProductStore(db).list_by_category(category_id)


def search_products(db: Session, name: str) -> List[Product]:
    return ProductStore(db).search_by_name(name)


def low_stock_products(db: Session, threshold: int) -> List[Product]:
    return ProductStore(db).list_low_stock(threshold)


def create_product(
    db: Session,
    name: str,
    price: Decimal,
    stock_quantity: int,
    description: Optional[str] = None,
    barcode: Optional[str] = None,
    category_id: Optional[int] = None,
) -> Union[Product, ServiceError]:
    products = ProductStore(db)

    with UnitOfWork(db) as uow:
        if barcode is not None and products.barcode_taken(barcode):
            return conflict(f"Product with barcode '{barcode}' already exists")

        if category_id is not None and CategoryStore(db).get_by_id(category_id) is None:
            return not_found("Category", category_id)

        product = products.add(
            Product(
                name=name,
                description=description,
                price=price,
                stock_quantity=stock_quantity,
                barcode=barcode,
                category_id=category_id,
            )
        )
        product_id = product.id
        uow.commit()

    logger.info("Product %s created with stock %s", product_id, stock_quantity)
    return products.get_by_id(product_id)


def update_product(
    db: Session,
    product_id: int,
    changes: dict,
) -> Union[Product, ServiceError]:
    """
    Apply a partial update.

    A new stock_quantity is turned into a delta against the current stock and
    goes through ProductStore.adjust_stock like every other stock change.
    """
    products = ProductStore(db)

    with UnitOfWork(db) as uow:
        product = products.get_by_id(product_id, for_update=True)

        if product is None:
            return not_found("Product", product_id)

        barcode = changes.get("barcode")
        if barcode is not None and products.barcode_taken(barcode, exclude_id=product_id):
            return conflict(f"Product with barcode '{barcode}' already exists")

        category_id = changes.get("category_id")
        if category_id is not None and CategoryStore(db).get_by_id(category_id) is None:
            return not_found("Category", category_id)

        for field in ("name", "price"):
            if changes.get(field) is not None:
                setattr(product, field, changes[field])

        # Optional columns can be cleared with an explicit null
        for field in ("description", "barcode", "category_id"):
            if field in changes:
                setattr(product, field, changes[field])

        # Field edits must reach the row before adjust_stock re-reads it
        db.flush()

        if changes.get("stock_quantity") is not None:
            delta = changes["stock_quantity"] - product.stock_quantity
            if delta:
                adjusted = products.adjust_stock(product_id, delta)
                if is_error(adjusted):
                    return adjusted

        uow.commit()

    return products.get_by_id(product_id)


def delete_product(db: Session, product_id: int) -> Optional[ServiceError]:
    products = ProductStore(db)

    with UnitOfWork(db) as uow:
        product = products.get_by_id(product_id)

        if product is None:
            return not_found("Product", product_id)

        if products.is_referenced_by_sales(product_id):
            return conflict("Product is referenced by existing sales and cannot be deleted")

        products.delete(product)
        uow.commit()

    logger.info("Product %s deleted", product_id)
    return None


def update_stock(db: Session, product_id: int, delta: int) -> Union[Product, ServiceError]:
    products = ProductStore(db)

    with UnitOfWork(db) as uow:
        adjusted = products.adjust_stock(product_id, delta)
        if is_error(adjusted):
            return adjusted
        uow.commit()

    return products.get_by_id(product_id)
