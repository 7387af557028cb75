from app.models.category import Category
from app.models.product import Product
from app.models.product_image import ProductImage

__all__ = [
    "Category",
    "Product",
    "ProductImage",
]
