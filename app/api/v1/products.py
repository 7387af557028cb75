"""
Product Endpoints
"""
from fastapi import APIRouter, Depends, Query, status, UploadFile, File, Form
from pydantic import ValidationError
from typing import List, Optional
from app.api.deps import get_product_creator, get_product_remover, get_product_queries
from app.exceptions import ValidationFailure
from app.schemas.common import ResponseModel, PaginatedResponse, PaginationModel
from app.schemas.product import ProductCreate
from app.services.media_client import UploadRequest
from app.services.product_service import (
    ProductDeletionOrchestrator, ProductImageOrchestrator, ProductQueryService
)
from app.utils.pagination import paginate

router = APIRouter()


FORM_FIELD_NAMES = {"stock_quantity": "stockQuantity", "category_id": "categoryId"}


def field_label(loc) -> str:
    parts = [FORM_FIELD_NAMES.get(str(part), str(part)) for part in loc]
    return ".".join(parts) or "body"


def validation_messages(exc: ValidationError) -> List[str]:
    """One message per violated field, named as the form names it"""
    return [
        f"{field_label(err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]


async def read_upload_requests(images: Optional[List[UploadFile]]) -> List[UploadRequest]:
    """Read submitted files into memory, skipping empty form parts with no filename"""
    requests = []
    for image in images or []:
        if not image.filename:
            continue
        content = await image.read()
        requests.append(UploadRequest(
            filename=image.filename,
            content_type=image.content_type or "",
            content=content,
        ))
    return requests


@router.get("", response_model=ResponseModel)
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    categoryId: Optional[int] = Query(None, ge=1),
    queries: ProductQueryService = Depends(get_product_queries)
):
    """List products, newest first"""
    products, total = queries.list_products(page, limit, categoryId)
    return ResponseModel(
        success=True,
        data=PaginatedResponse(
            items=products,
            pagination=PaginationModel(**paginate(page, limit, total))
        )
    )


@router.get("/{product_id}", response_model=ResponseModel)
def get_product(product_id: str, queries: ProductQueryService = Depends(get_product_queries)):
    """Get product details with category and images"""
    return ResponseModel(success=True, data=queries.get_product(product_id))


@router.post("", response_model=ResponseModel, status_code=status.HTTP_201_CREATED)
async def create_product(
    name: str = Form(...),
    description: Optional[str] = Form(None),
    price: str = Form(...),
    stockQuantity: str = Form("0"),
    categoryId: str = Form(...),
    images: Optional[List[UploadFile]] = File(None),
    creator: ProductImageOrchestrator = Depends(get_product_creator)
):
    """
    Create a product from form data with up to 3 images (jpg, jpeg, png; 5MB each).

    The first image becomes the primary image.
    """
    try:
        data = ProductCreate(
            name=name,
            description=description,
            price=price,
            stock_quantity=stockQuantity,
            category_id=categoryId,
        )
    except ValidationError as e:
        raise ValidationFailure(validation_messages(e))

    creator.check_image_count(sum(1 for image in images or [] if image.filename))
    files = await read_upload_requests(images)
    product = await creator.create_product(data, files)

    return ResponseModel(
        success=True,
        data=product,
        message="Product created successfully"
    )


@router.delete("/{product_id}", response_model=ResponseModel)
async def delete_product(product_id: str, remover: ProductDeletionOrchestrator = Depends(get_product_remover)):
    """Delete a product and, best effort, its images on Cloudinary"""
    await remover.delete_product(product_id)
    return ResponseModel(
        success=True,
        message="Product deleted successfully"
    )
