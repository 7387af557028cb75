"""
Cloudinary media host client

Uploads product images and deletes them again by their public id, using the
signed REST upload API over ``httpx``.
"""
import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from app.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class MediaHostError(Exception):
    """Raised when the media host is misconfigured or rejects a delete"""


@dataclass
class UploadRequest:
    """One image received with a product-creation request"""
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class UploadOutcome:
    success: bool
    filename: str
    url: Optional[str] = None
    public_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, filename: str, url: str, public_id: str) -> "UploadOutcome":
        return cls(success=True, filename=filename, url=url, public_id=public_id)

    @classmethod
    def failed(cls, filename: str, error: str) -> "UploadOutcome":
        return cls(success=False, filename=filename, error=error)


def sign_params(params: Dict[str, Any], api_secret: str) -> str:
    """Cloudinary signature: SHA-1 of the sorted ``key=value`` pairs followed by the secret"""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] not in (None, ""))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"Media host returned HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return f"Media host returned HTTP {response.status_code}"


class CloudinaryClient:
    def __init__(self, config: Optional[Settings] = None, http_client: Optional[httpx.AsyncClient] = None):
        config = config or default_settings
        if not (config.CLOUDINARY_CLOUD_NAME and config.CLOUDINARY_API_KEY and config.CLOUDINARY_API_SECRET):
            raise MediaHostError("Cloudinary configuration is missing")

        self.cloud_name = config.CLOUDINARY_CLOUD_NAME
        self.api_key = config.CLOUDINARY_API_KEY
        self.api_secret = config.CLOUDINARY_API_SECRET
        self.folder = config.CLOUDINARY_FOLDER
        self.transformation = config.CLOUDINARY_TRANSFORMATION
        self.base_url = f"{config.CLOUDINARY_API_BASE.rstrip('/')}/{self.cloud_name}/image"
        self._http = http_client or httpx.AsyncClient(timeout=config.CLOUDINARY_TIMEOUT_SECONDS)

    def _signed(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params = {**params, "timestamp": int(time.time())}
        params["signature"] = sign_params(params, self.api_secret)
        params["api_key"] = self.api_key
        return params

    async def upload(self, request: UploadRequest) -> UploadOutcome:
        """
        Upload one image.

        Rejections reported by the host (quota, unsupported format, bad
        signature) come back as a failed outcome. Transport errors are raised.
        """
        data = self._signed({"folder": self.folder, "transformation": self.transformation})
        files = {"file": (request.filename, request.content, request.content_type)}

        response = await self._http.post(f"{self.base_url}/upload", data=data, files=files)
        if response.is_error:
            message = _error_message(response)
            logger.error(f"Cloudinary rejected upload of {request.filename}: {message}")
            return UploadOutcome.failed(request.filename, message)

        body = response.json()
        if body.get("error"):
            message = _error_message(response)
            logger.error(f"Cloudinary rejected upload of {request.filename}: {message}")
            return UploadOutcome.failed(request.filename, message)

        logger.info(f"Image uploaded to Cloudinary. Public ID: {body['public_id']}")
        return UploadOutcome.ok(request.filename, body["secure_url"], body["public_id"])

    async def delete(self, public_id: str) -> None:
        if not public_id:
            return

        response = await self._http.post(f"{self.base_url}/destroy", data=self._signed({"public_id": public_id}))
        if response.is_error:
            raise MediaHostError(_error_message(response))

        result = response.json().get("result")
        # "not found" means the asset is already gone
        if result not in ("ok", "not found"):
            raise MediaHostError(f"Unexpected destroy result for {public_id}: {result}")

        logger.info(f"Image deleted from Cloudinary. Public ID: {public_id}")

    async def aclose(self) -> None:
        await self._http.aclose()
