import logging
from typing import Optional
from fastapi import Depends
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.repositories.category_repository import CategoryRepository
from app.repositories.product_repository import ProductRepository
from app.services.batch_uploader import BatchUploader
from app.services.category_service import CategoryService
from app.services.media_client import CloudinaryClient
from app.services.product_service import (
    ProductDeletionOrchestrator, ProductImageOrchestrator, ProductQueryService
)

logger = logging.getLogger(__name__)

_media_client: Optional[CloudinaryClient] = None


def cloudinary_configured() -> bool:
    return bool(settings.CLOUDINARY_CLOUD_NAME and settings.CLOUDINARY_API_KEY and settings.CLOUDINARY_API_SECRET)


def get_media_client() -> Optional[CloudinaryClient]:
    """Shared Cloudinary client, created on first use; None while credentials are missing"""
    global _media_client
    if _media_client is None:
        if not cloudinary_configured():
            logger.warning("Cloudinary configuration is missing; image uploads and deletes are unavailable")
            return None
        _media_client = CloudinaryClient(settings)
    return _media_client


async def close_media_client() -> None:
    global _media_client
    if _media_client is not None:
        await _media_client.aclose()
        _media_client = None


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)


def get_product_creator(
    repository: ProductRepository = Depends(get_product_repository),
    client=Depends(get_media_client)
) -> ProductImageOrchestrator:
    return ProductImageOrchestrator(repository, BatchUploader(client, settings), settings)


def get_product_remover(
    repository: ProductRepository = Depends(get_product_repository),
    client=Depends(get_media_client)
) -> ProductDeletionOrchestrator:
    return ProductDeletionOrchestrator(repository, client)


def get_product_queries(repository: ProductRepository = Depends(get_product_repository)) -> ProductQueryService:
    return ProductQueryService(repository)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(CategoryRepository(db))
