# schemas/sale.py

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List
from decimal import Decimal

from pos_api.models.sales import PaymentMethod, SaleStatus


class SaleItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(..., ge=1)

    # Accepted for client compatibility; prices always come from the product
    unit_price: Decimal | None = None
    total_price: Decimal | None = None


class SaleCreate(BaseModel):
    customer_name: str | None = Field(None, max_length=200)
    payment_method: PaymentMethod
    items: List[SaleItemCreate] = Field(..., min_length=1)


class SaleItemResponse(BaseModel):
    id: int
    product_id: int
    product_name: str | None = None
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    class Config:
        from_attributes = True


class SaleResponse(BaseModel):
    id: int
    customer_name: str | None
    total_amount: Decimal
    payment_method: PaymentMethod
    status: SaleStatus
    created_at: datetime
    updated_at: datetime | None = None
    items: List[SaleItemResponse]

    class Config:
        from_attributes = True


class SalePage(BaseModel):
    items: List[SaleResponse]
    total: int
    page: int
    size: int
    pages: int
