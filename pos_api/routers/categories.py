# pos_api/routers/categories.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pos_api.database import get_db
from pos_api.core.errors import unwrap
from pos_api.services import category_service
from pos_api.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
)

router = APIRouter(
    prefix="/api/v1/categories",
    tags=["Categories"],
)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db),
):
    return unwrap(
        category_service.create_category(
            db,
            name=category_data.name,
            description=category_data.description,
        )
    )


@router.get("", response_model=list[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    return category_service.list_categories(db)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return unwrap(category_service.get_category(db, category_id))


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    db: Session = Depends(get_db),
):
    return unwrap(
        category_service.update_category(
            db,
            category_id,
            category_data.model_dump(exclude_unset=True),
        )
    )


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    unwrap(category_service.delete_category(db, category_id))
    return None
