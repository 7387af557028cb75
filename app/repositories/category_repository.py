"""
Category persistence
"""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.product import Product


class CategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name.asc()).all()

    def get(self, category_id: int) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def product_count(self, category_id: int) -> int:
        return self.db.query(func.count(Product.id)).filter(Product.category_id == category_id).scalar() or 0

    def save(self, category: Category) -> Category:
        self.db.add(category)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(category)
        return category

    def delete(self, category: Category) -> None:
        self.db.delete(category)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
