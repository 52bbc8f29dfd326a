"""API routes for managing products and their stock statistics."""
from fastapi import APIRouter, status, Query
from typing import Optional

from .schemas import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    PaginatedProductResponse,
    TotalStockResponse,
)
from ..reports.schemas import InventoryStats
from . import service

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "/",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
)
async def create_product(product_in: ProductCreate):
    return await service.create_product(product_in)


@router.get(
    "/",
    response_model=PaginatedProductResponse,
    summary="List products",
)
async def list_products(
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(10, ge=1, le=100, description="Number of products per page"),
    category: Optional[str] = Query(None, description="Only products in this category"),
):
    return await service.list_products(page, size, category)


# Must stay above the /{product_public_id} routes
@router.get(
    "/stats/total-stock",
    response_model=TotalStockResponse,
    summary="Total units in stock across all products",
    tags=["Stats"],
)
async def get_total_stock():
    return await service.get_total_stock()


@router.get(
    "/stats/inventory",
    response_model=InventoryStats,
    summary="Inventory summary statistics",
    tags=["Stats"],
)
async def get_inventory_stats():
    return await service.get_inventory_stats()


@router.get(
    "/{product_public_id}",
    response_model=ProductResponse,
    summary="Get a specific product",
)
async def get_product(product_public_id: str):
    return await service.get_product(product_public_id)


@router.put(
    "/{product_public_id}",
    response_model=ProductResponse,
    summary="Update a product",
)
async def update_product(product_public_id: str, product_in: ProductUpdate):
    return await service.update_product(product_public_id, product_in)


@router.delete(
    "/{product_public_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
)
async def delete_product(product_public_id: str):
    await service.delete_product(product_public_id)
    return None
