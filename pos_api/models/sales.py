# models/sales.py

import enum

from sqlalchemy import Column, Enum, Index, Integer, DateTime, Numeric, String
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from pos_api.database import Base


class PaymentMethod(str, enum.Enum):
    CASH = "CASH"
    CARD = "CARD"
    MOBILE = "MOBILE"


class SaleStatus(str, enum.Enum):
    COMPLETED = "COMPLETED"
    PENDING = "PENDING"
    CANCELLED = "CANCELLED"


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)

    customer_name = Column(String(200), nullable=True)

    # Derived from the sale items, never set by callers
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)

    payment_method = Column(
        Enum(PaymentMethod, native_enum=False, length=20),
        nullable=False,
        default=PaymentMethod.CASH,
    )
    status = Column(
        Enum(SaleStatus, native_enum=False, length=20),
        nullable=False,
        default=SaleStatus.COMPLETED,
        index=True,
    )

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    items = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="SaleItem.id",
    )

    __table_args__ = (
        Index("ix_sales_payment_method_created", "payment_method", "created_at"),
    )
