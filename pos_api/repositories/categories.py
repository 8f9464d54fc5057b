# pos_api/repositories/categories.py

from typing import List, Optional

from sqlalchemy.orm import Session

from pos_api.models.categories import Category
from pos_api.models.products import Product


class CategoryStore:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def get_by_name(self, name: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.name == name).first()

    def list_all(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def add(self, category: Category) -> Category:
        self.db.add(category)
        self.db.flush()
        return category

    def count_products(self, category_id: int) -> int:
        return (
            self.db.query(Product)
            .filter(Product.category_id == category_id)
            .count()
        )

    def delete(self, category: Category) -> None:
        # Products outlive their category
        for product in category.products:
            product.category_id = None
        self.db.delete(category)
        self.db.flush()
