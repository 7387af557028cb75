import logging
from typing import List

from app.exceptions import NotFoundFailure, ValidationFailure
from app.models.category import Category
from app.repositories.category_repository import CategoryRepository
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, repository: CategoryRepository):
        self.repository = repository

    def _get_or_raise(self, category_id: int) -> Category:
        category = self.repository.get(category_id)
        if category is None:
            logger.warning(f"Category {category_id} not found")
            raise NotFoundFailure(f"Category {category_id} not found")
        return category

    def list_categories(self) -> List[CategoryResponse]:
        categories = self.repository.list_categories()
        logger.info(f"Fetched {len(categories)} categories")
        return [CategoryResponse.model_validate(c) for c in categories]

    def get_category(self, category_id: int) -> CategoryResponse:
        return CategoryResponse.model_validate(self._get_or_raise(category_id))

    def create_category(self, data: CategoryCreate) -> CategoryResponse:
        category = self.repository.save(Category(name=data.name, description=data.description))
        logger.info(f"Created category {category.id}")
        return CategoryResponse.model_validate(category)

    def update_category(self, category_id: int, data: CategoryUpdate) -> CategoryResponse:
        category = self._get_or_raise(category_id)
        category.name = data.name
        category.description = data.description
        category = self.repository.save(category)
        logger.info(f"Updated category {category_id}")
        return CategoryResponse.model_validate(category)

    def delete_category(self, category_id: int) -> None:
        category = self._get_or_raise(category_id)
        if self.repository.product_count(category_id):
            raise ValidationFailure(["Category still has products and cannot be deleted"])
        self.repository.delete(category)
        logger.info(f"Deleted category {category_id}")
