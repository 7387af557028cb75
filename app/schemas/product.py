from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from app.schemas.category import CategoryResponse


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    price: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2)
    stock_quantity: int = Field(default=0, ge=0)
    category_id: int = Field(..., gt=0)


class ProductImageResponse(BaseModel):
    id: str
    image_url: str
    is_primary: bool
    display_order: int

    class Config:
        from_attributes = True


class ProductResponse(BaseModel):
    id: str
    name: str
    description: Optional[str]
    price: Decimal
    stock_quantity: int
    category_id: int
    category: Optional[CategoryResponse] = None
    images: List[ProductImageResponse] = Field(default_factory=list)
    primary_image: Optional[ProductImageResponse] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
