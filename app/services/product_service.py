"""
Product creation and deletion, including their Cloudinary image handling
"""
import logging
from typing import List, Optional, Sequence, Tuple

from app.config import Settings, settings as default_settings
from app.exceptions import NotFoundFailure, ValidationFailure
from app.models.product import Product
from app.models.product_image import ProductImage
from app.repositories.product_repository import ProductRepository
from app.schemas.product import ProductCreate, ProductResponse
from app.services.batch_uploader import BatchUploader
from app.services.media_client import UploadOutcome, UploadRequest

logger = logging.getLogger(__name__)


def to_product_response(product: Product) -> ProductResponse:
    return ProductResponse.model_validate(product)


def build_image_records(outcomes: Sequence[UploadOutcome]) -> List[ProductImage]:
    """One record per uploaded file, in submission order; the first one is primary"""
    return [
        ProductImage(
            image_url=outcome.url,
            public_id=outcome.public_id,
            display_order=index,
            is_primary=index == 0,
        )
        for index, outcome in enumerate(outcomes)
    ]


class ProductImageOrchestrator:
    def __init__(self, repository: ProductRepository, uploader: BatchUploader, config: Optional[Settings] = None):
        self.repository = repository
        self.uploader = uploader
        self.config = config or default_settings

    def check_image_count(self, count: int) -> None:
        if count > self.config.MAX_PRODUCT_IMAGES:
            raise ValidationFailure([f"A product can have at most {self.config.MAX_PRODUCT_IMAGES} images"])

    async def create_product(self, data: ProductCreate, files: Sequence[UploadRequest] = ()) -> ProductResponse:
        """
        Create a product and upload its images.

        The category is checked before anything is sent to Cloudinary. If any
        image fails, nothing is persisted and every failure is reported.
        """
        logger.info(f"Creating product {data.name!r} with {len(files)} image(s)")

        self.check_image_count(len(files))

        category = self.repository.find_category(data.category_id)
        if category is None:
            logger.warning(f"Category {data.category_id} not found, rejecting product {data.name!r}")
            raise ValidationFailure(["Category does not exist"])

        images: List[ProductImage] = []
        if files:
            outcomes = await self.uploader.upload_all(files, max_concurrency=self.config.UPLOAD_CONCURRENCY)
            failed = [o for o in outcomes if not o.success]
            if failed:
                uploaded = [o.public_id for o in outcomes if o.success]
                logger.warning(
                    f"{len(failed)} of {len(outcomes)} image(s) failed for product {data.name!r}; "
                    f"not persisting. Already uploaded: {uploaded}"
                )
                raise ValidationFailure([f"{o.filename}: {o.error}" for o in failed])
            images = build_image_records(outcomes)

        product = Product(
            name=data.name,
            description=data.description,
            price=data.price,
            stock_quantity=data.stock_quantity,
            category_id=category.id,
        )
        product = self.repository.save_product_with_images(product, images)

        logger.info(f"Created product {product.id} with {len(images)} image(s)")
        return to_product_response(product)


class ProductDeletionOrchestrator:
    def __init__(self, repository: ProductRepository, client):
        self.repository = repository
        self.client = client

    async def delete_product(self, product_id: str) -> None:
        """
        Delete a product after trying to remove its images from Cloudinary.

        A failed remote delete is logged and skipped; the asset is left orphaned
        and the row is deleted regardless.
        """
        product = self.repository.find_product_with_images(product_id)
        if product is None:
            logger.warning(f"Product {product_id} not found")
            raise NotFoundFailure("Product not found")

        for image in product.images:
            if not image.public_id:
                continue
            if self.client is None:
                logger.warning(f"Cloudinary is not configured, leaving image {image.public_id} on the host")
                continue
            try:
                await self.client.delete(image.public_id)
            except Exception as e:
                logger.warning(f"Error deleting image {image.public_id} from Cloudinary: {e}", exc_info=True)

        self.repository.delete_product(product)
        logger.info(f"Deleted product {product_id}")


class ProductQueryService:
    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def get_product(self, product_id: str) -> ProductResponse:
        product = self.repository.find_product_with_images(product_id)
        if product is None:
            raise NotFoundFailure("Product not found")
        return to_product_response(product)

    def list_products(self, page: int, limit: int, category_id: Optional[int] = None) -> Tuple[List[ProductResponse], int]:
        products, total = self.repository.list_products(page, limit, category_id)
        return [to_product_response(p) for p in products], total
