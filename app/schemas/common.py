from typing import Optional, Any, Dict, List
from pydantic import BaseModel


class ResponseModel(BaseModel):
    """Standard API response envelope"""
    success: bool
    data: Optional[Any] = None
    message: Optional[str] = None
    error: Optional[Dict[str, Any]] = None


class ErrorDetail(BaseModel):
    code: str
    details: Optional[Any] = None


class PaginationModel(BaseModel):
    currentPage: int
    totalPages: int
    totalItems: int
    itemsPerPage: int
    hasNext: bool
    hasPrev: bool


class PaginatedResponse(BaseModel):
    items: List[Any]
    pagination: PaginationModel


def error_envelope(message: str, code: str, details: Any = None) -> Dict[str, Any]:
    """Build the JSON body returned for failed requests"""
    return ResponseModel(
        success=False,
        message=message,
        error=ErrorDetail(code=code, details=details).model_dump(),
    ).model_dump(mode="json")
