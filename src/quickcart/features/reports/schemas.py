"""Inventory Report Schemas

Value types shared by the report pipeline:

1. ProductRecord - the read-only product row fed into a report
2. InventoryStats - summary statistics computed from a record set

Both are frozen; a report never mutates its inputs or its stats."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ProductRecord(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
    category: Optional[str] = None
    supplier: Optional[str] = None

    # from_attributes lets a Product ORM row be validated directly
    model_config = ConfigDict(frozen=True, from_attributes=True)


class InventoryStats(BaseModel):
    total_products: int = Field(0, description="Number of records in the report")
    total_stock: int = Field(0, description="Sum of stock over all records")
    average_price: float = Field(0.0, description="Mean price, rounded half-up to 2 decimals")
    total_value: float = Field(0.0, description="Sum of price * stock, rounded half-up to 2 decimals")
    category_count: int = Field(0, description="Number of distinct (case-sensitive) categories")

    model_config = ConfigDict(frozen=True)
