# pos_api/routers/products.py

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from pos_api.database import get_db
from pos_api.core.config import settings
from pos_api.core.errors import unwrap
from pos_api.services import product_service
from pos_api.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)

router = APIRouter(
    prefix="/api/v1/products",
    tags=["Products"],
)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
):
    return unwrap(
        product_service.create_product(
            db,
            name=product_data.name,
            price=product_data.price,
            stock_quantity=product_data.stock_quantity,
            description=product_data.description,
            barcode=product_data.barcode,
            category_id=product_data.category_id,
        )
    )


@router.get("", response_model=list[ProductResponse])
def list_products(db: Session = Depends(get_db)):
    return product_service.list_products(db)


@router.get("/search", response_model=list[ProductResponse])
def search_products(
    name: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    return product_service.search_products(db, name)


@router.get("/low-stock", response_model=list[ProductResponse])
def low_stock_products(
    threshold: int = Query(settings.LOW_STOCK_THRESHOLD, ge=0),
    db: Session = Depends(get_db),
):
    return product_service.low_stock_products(db, threshold)


@router.get("/barcode/{barcode}", response_model=ProductResponse)
def get_product_by_barcode(barcode: str, db: Session = Depends(get_db)):
    return unwrap(product_service.get_product_by_barcode(db, barcode))


@router.get("/category/{category_id}", response_model=list[ProductResponse])
def products_by_category(category_id: int, db: Session = Depends(get_db)):
    return product_service.products_by_category(db, category_id)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return unwrap(product_service.get_product(db, product_id))


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
):
    return unwrap(
        product_service.update_product(
            db,
            product_id,
            product_data.model_dump(exclude_unset=True),
        )
    )


@router.patch("/{product_id}/stock", response_model=ProductResponse)
def update_stock(
    product_id: int,
    quantity: int = Query(..., description="Signed change to apply to the stock"),
    db: Session = Depends(get_db),
):
    return unwrap(product_service.update_stock(db, product_id, quantity))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    unwrap(product_service.delete_product(db, product_id))
    return None
