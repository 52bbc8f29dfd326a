from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
import datetime


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Name of the product")
    description: Optional[str] = Field(None, max_length=2000, description="Optional product description")
    price: float = Field(default=0.0, ge=0, description="Unit price of the product")
    stock: int = Field(default=0, ge=0, description="Units currently in stock")
    category: Optional[str] = Field(None, max_length=100, description="Category label, e.g. 'Dairy'")
    supplier: Optional[str] = Field(None, max_length=255, description="Name of the supplier")

class ProductCreate(ProductBase):
    pass

class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="New name of the product")
    description: Optional[str] = Field(None, max_length=2000, description="New description")
    price: Optional[float] = Field(None, ge=0, description="New unit price")
    stock: Optional[int] = Field(None, ge=0, description="New stock level")
    category: Optional[str] = Field(None, max_length=100, description="New category label")
    supplier: Optional[str] = Field(None, max_length=255, description="New supplier name")

class ProductResponse(ProductBase):
    public_id: str = Field(..., description="Public unique identifier for the product (KSUID)")
    created_at: datetime.datetime = Field(..., description="Timestamp of when the product was created")
    updated_at: datetime.datetime = Field(..., description="Timestamp of when the product was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        protected_namespaces=(),
    )

class PaginatedProductResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    page: int
    size: int

class TotalStockResponse(BaseModel):
    total_stock: int
