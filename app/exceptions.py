"""
Domain errors raised by the catalog services.

They are mapped to HTTP responses by the exception handlers in ``app.main``.
"""
from typing import Iterable, List


class CatalogError(Exception):
    """Base class for errors the API reports to clients"""


class ValidationFailure(CatalogError):
    """Bad input, rejected images, unknown category or a failed upload batch"""

    def __init__(self, messages: Iterable[str]):
        self.messages: List[str] = [m for m in messages if m]
        super().__init__(", ".join(self.messages) or "Validation failed")


class NotFoundFailure(CatalogError):
    """Requested product or category does not exist"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
