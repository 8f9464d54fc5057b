"""
Business failures returned by the service layer.

Services return either their result or a ServiceError. Nothing here is an
exception: routers decide how each kind maps to an HTTP response, and
unexpected database faults still propagate as SQLAlchemy exceptions.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "NOT_FOUND"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    INVALID_STATE = "INVALID_STATE"
    INVALID_OPERATION = "INVALID_OPERATION"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True, slots=True)
class ServiceError:
    """
    A caller-fixable failure.

    kind: which family of failure this is
    message: human readable description, safe to show to API clients
    details: structured context (entity, key, quantities...)
    """
    kind: ErrorKind
    message: str
    details: Mapping[str, Any] = field(default_factory=dict)


def is_error(value: Any) -> bool:
    return isinstance(value, ServiceError)


def not_found(entity: str, key: Any, field_name: str = "id") -> ServiceError:
    return ServiceError(
        kind=ErrorKind.NOT_FOUND,
        message=f"{entity} not found with {field_name}: '{key}'",
        details={"entity": entity, "field": field_name, "key": key},
    )


def insufficient_stock(product_name: str, requested: int, available: int) -> ServiceError:
    return ServiceError(
        kind=ErrorKind.INSUFFICIENT_STOCK,
        message=(
            f"Insufficient stock for product '{product_name}'. "
            f"Requested: {requested}, Available: {available}"
        ),
        details={
            "product_name": product_name,
            "requested": requested,
            "available": available,
        },
    )


def invalid_state(reason: str) -> ServiceError:
    return ServiceError(kind=ErrorKind.INVALID_STATE, message=reason)


def invalid_operation(reason: str) -> ServiceError:
    return ServiceError(kind=ErrorKind.INVALID_OPERATION, message=reason)


def conflict(reason: str) -> ServiceError:
    return ServiceError(kind=ErrorKind.CONFLICT, message=reason)
