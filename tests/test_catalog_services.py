"""
Tests for `pos_api/services/product_service.py` and `category_service.py`.
"""

from __future__ import annotations

from decimal import Decimal

from pos_api.models.products import Product
from pos_api.models.sales import PaymentMethod
from pos_api.services import category_service, product_service, sale_service
from pos_api.services.errors import ErrorKind, is_error
from pos_api.services.sale_service import SaleLineRequest


def test_create_product_with_category(db_session, make_category) -> None:
    books = make_category(name="Books")

    product = product_service.create_product(
        db_session,
        name="Python Cookbook",
        price=Decimal("39.99"),
        stock_quantity=60,
        barcode="1234567890129",
        category_id=books.id,
    )

    assert not is_error(product)
    assert product.category_name == "Books"
    assert product_service.get_product_by_barcode(db_session, "1234567890129").id == product.id


def test_create_product_duplicate_barcode(db_session, make_product) -> None:
    make_product(barcode="1234567890123")

    result = product_service.create_product(
        db_session,
        name="Another phone",
        price=Decimal("10.00"),
        stock_quantity=1,
        barcode="1234567890123",
    )

    assert result.kind == ErrorKind.CONFLICT
    assert db_session.query(Product).count() == 1


def test_create_product_unknown_category(db_session) -> None:
    result = product_service.create_product(
        db_session,
        name="Orphan",
        price=Decimal("1.00"),
        stock_quantity=1,
        category_id=77,
    )

    assert result.kind == ErrorKind.NOT_FOUND
    assert result.details["entity"] == "Category"


def test_get_by_missing_barcode(db_session) -> None:
    result = product_service.get_product_by_barcode(db_session, "000")

    assert result.kind == ErrorKind.NOT_FOUND
    assert result.details["field"] == "barcode"


def test_update_product_stock_goes_through_adjustment(db_session, make_product) -> None:
    product = make_product(stock=10)

    updated = product_service.update_product(db_session, product.id, {"stock_quantity": 25, "name": "iPhone 15 Pro"})

    assert updated.stock_quantity == 25
    assert updated.name == "iPhone 15 Pro"


def test_update_product_barcode_conflict(db_session, make_product) -> None:
    make_product(name="A", barcode="111")
    other = make_product(name="B", barcode="222")

    result = product_service.update_product(db_session, other.id, {"barcode": "111"})

    assert result.kind == ErrorKind.CONFLICT
    db_session.expire_all()
    assert db_session.get(Product, other.id).barcode == "222"


def test_update_stock_delta(db_session, make_product) -> None:
    product = make_product(stock=10)

    assert product_service.update_stock(db_session, product.id, -10).stock_quantity == 0
    assert product_service.update_stock(db_session, product.id, -1).kind == ErrorKind.INVALID_OPERATION


def test_delete_product_referenced_by_sale_is_refused(db_session, make_product) -> None:
    product = make_product(stock=10)
    sale_service.create_sale(
        db_session,
        customer_name=None,
        payment_method=PaymentMethod.CASH,
        lines=[SaleLineRequest(product_id=product.id, quantity=1)],
    )

    result = product_service.delete_product(db_session, product.id)

    assert result.kind == ErrorKind.CONFLICT
    assert db_session.query(Product).count() == 1


def test_delete_unsold_product(db_session, make_product) -> None:
    product = make_product(stock=10)

    assert product_service.delete_product(db_session, product.id) is None
    assert product_service.get_product(db_session, product.id).kind == ErrorKind.NOT_FOUND


def test_category_crud(db_session) -> None:
    created = category_service.create_category(db_session, "Clothing", "Apparel")
    assert created.name == "Clothing"

    duplicate = category_service.create_category(db_session, "Clothing")
    assert duplicate.kind == ErrorKind.CONFLICT

    updated = category_service.update_category(db_session, created.id, {"description": "Apparel and fashion items"})
    assert updated.description == "Apparel and fashion items"
    assert updated.name == "Clothing"

    assert [c.name for c in category_service.list_categories(db_session)] == ["Clothing"]


def test_delete_category_uncategorises_products(db_session, make_category, make_product) -> None:
    electronics = make_category(name="Electronics")
    phone = make_product(category=electronics)

    assert category_service.delete_category(db_session, electronics.id) is None

    db_session.expire_all()
    assert db_session.get(Product, phone.id).category_id is None
    assert category_service.get_category(db_session, electronics.id).kind == ErrorKind.NOT_FOUND
