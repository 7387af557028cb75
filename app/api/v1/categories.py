"""
Category Endpoints
"""
from fastapi import APIRouter, Depends, status
from app.api.deps import get_category_service
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.schemas.common import ResponseModel
from app.services.category_service import CategoryService

router = APIRouter()


@router.get("", response_model=ResponseModel)
def get_categories(service: CategoryService = Depends(get_category_service)):
    """Get all categories"""
    return ResponseModel(success=True, data=service.list_categories())


@router.get("/{category_id}", response_model=ResponseModel)
def get_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    """Get category details"""
    return ResponseModel(success=True, data=service.get_category(category_id))


@router.post("", response_model=ResponseModel, status_code=status.HTTP_201_CREATED)
def create_category(category_data: CategoryCreate, service: CategoryService = Depends(get_category_service)):
    """Create a new category"""
    return ResponseModel(
        success=True,
        data=service.create_category(category_data),
        message="Category created successfully"
    )


@router.put("/{category_id}", response_model=ResponseModel)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    service: CategoryService = Depends(get_category_service)
):
    """Update a category"""
    return ResponseModel(
        success=True,
        data=service.update_category(category_id, category_data),
        message="Category updated successfully"
    )


@router.delete("/{category_id}", response_model=ResponseModel)
def delete_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    """Delete a category that has no products"""
    service.delete_category(category_id)
    return ResponseModel(success=True, message="Category deleted successfully")
