# pos_api/services/category_service.py

import logging
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from pos_api.models.categories import Category
from pos_api.repositories.categories import CategoryStore
from pos_api.repositories.unit_of_work import UnitOfWork
from pos_api.services.errors import ServiceError, conflict, not_found

logger = logging.getLogger("pos_api.categories")


def get_category(db: Session, category_id: int) -> Union[Category, ServiceError]:
    category = CategoryStore(db).get_by_id(category_id)
    if category is None:
        return not_found("Category", category_id)
    return category


def list_categories(db: Session) -> List[Category]:
    return CategoryStore(db).list_all()


def create_category(
    db: Session,
    name: str,
    description: Optional[str] = None,
) -> Union[Category, ServiceError]:
    categories = CategoryStore(db)

    with UnitOfWork(db) as uow:
        if categories.get_by_name(name) is not None:
            return conflict(f"Category '{name}' already exists")

        category = categories.add(Category(name=name, description=description))
        category_id = category.id
        uow.commit()

    logger.info("Category %s created", category_id)
    return categories.get_by_id(category_id)


def update_category(
    db: Session,
    category_id: int,
    changes: dict,
) -> Union[Category, ServiceError]:
    categories = CategoryStore(db)

    with UnitOfWork(db) as uow:
        category = categories.get_by_id(category_id)

        if category is None:
            return not_found("Category", category_id)

        name = changes.get("name")
        if name is not None and name != category.name and categories.get_by_name(name) is not None:
            return conflict(f"Category '{name}' already exists")

        if name is not None:
            category.name = name

        if "description" in changes:
            category.description = changes["description"]

        db.flush()
        uow.commit()

    return categories.get_by_id(category_id)


def delete_category(db: Session, category_id: int) -> Optional[ServiceError]:
    categories = CategoryStore(db)

    with UnitOfWork(db) as uow:
        category = categories.get_by_id(category_id)

        if category is None:
            return not_found("Category", category_id)

        detached = categories.count_products(category_id)
        categories.delete(category)
        uow.commit()

    logger.info("Category %s deleted, %s product(s) left uncategorised", category_id, detached)
    return None
