"""
Concurrent upload of a product's image batch
"""
import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from app.config import Settings, settings as default_settings
from app.services.media_client import UploadOutcome, UploadRequest

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png"}


def validate_image(request: UploadRequest, config: Optional[Settings] = None) -> Optional[str]:
    """Return an error message if the file must not be uploaded, else None"""
    config = config or default_settings
    filename = request.filename or "image"

    if request.size == 0:
        return "File is empty"

    if request.size > config.MAX_IMAGE_SIZE:
        limit_mb = config.MAX_IMAGE_SIZE // (1024 * 1024)
        return f"File size exceeds {limit_mb}MB limit"

    allowed = config.allowed_image_extensions()
    file_ext = Path(filename).suffix.lower().lstrip(".")
    content_type = (request.content_type or "").lower()
    if file_ext not in allowed or content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
        return f"Invalid file type. Allowed: {', '.join(allowed)}"

    return None


class BatchUploader:
    def __init__(self, client, config: Optional[Settings] = None):
        self.client = client
        self.config = config or default_settings

    async def upload_all(self, files: Sequence[UploadRequest], max_concurrency: int) -> List[UploadOutcome]:
        """
        Validate and upload every file, at most ``max_concurrency`` at a time.

        Outcomes are returned in input order. A failing file never stops the
        others; the caller decides what a partial failure means.
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        gate = asyncio.Semaphore(max_concurrency)

        async def upload_one(request: UploadRequest) -> UploadOutcome:
            error = validate_image(request, self.config)
            if error:
                logger.warning(f"Rejected image {request.filename} before upload: {error}")
                return UploadOutcome.failed(request.filename, error)

            if self.client is None:
                logger.warning(f"Cannot upload image {request.filename}: Cloudinary is not configured")
                return UploadOutcome.failed(request.filename, "Media host is not configured")

            async with gate:
                try:
                    return await self.client.upload(request)
                except Exception as e:
                    logger.error(f"Error uploading image {request.filename}: {e}", exc_info=True)
                    return UploadOutcome.failed(request.filename, f"Upload failed ({e})")

        return list(await asyncio.gather(*(upload_one(f) for f in files)))
