"""
Product persistence
"""
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session, joinedload, selectinload

from app.models.category import Category
from app.models.product import Product
from app.models.product_image import ProductImage


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_category(self, category_id: int) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def save_product_with_images(self, product: Product, images: Sequence[ProductImage]) -> Product:
        """Insert the product and its images in one transaction"""
        product.images = list(images)
        self.db.add(product)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self.find_product_with_images(product.id)

    def find_product_with_images(self, product_id: str) -> Optional[Product]:
        return (
            self.db.query(Product)
            .options(joinedload(Product.category), selectinload(Product.images))
            .filter(Product.id == str(product_id))
            .first()
        )

    def list_products(self, page: int, limit: int, category_id: Optional[int] = None) -> Tuple[List[Product], int]:
        query = self.db.query(Product)
        if category_id is not None:
            query = query.filter(Product.category_id == category_id)

        total = query.count()
        products = (
            query.options(joinedload(Product.category), selectinload(Product.images))
            .order_by(Product.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return products, total

    def delete_product(self, product: Product) -> None:
        """Delete the product row; its image rows go with it"""
        self.db.delete(product)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
