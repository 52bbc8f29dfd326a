import logging
from typing import Optional
from fastapi import HTTPException, status
from .models import Product
from .schemas import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    PaginatedProductResponse,
    TotalStockResponse,
)
from ..reports import service as report_service
from ..reports.schemas import InventoryStats

logger = logging.getLogger(__name__)


def _to_product_response(product: Product) -> ProductResponse:
    """Converts a Product model instance to a ProductResponse schema."""
    return ProductResponse.model_validate(product)


async def _get_product_or_404(product_public_id: str) -> Product:
    product = await Product.get_or_none(public_id=product_public_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
        )
    return product


async def create_product(product_in: ProductCreate) -> ProductResponse:
    """
    Creates a new product.

    Args:
        product_in: The data for the new product.

    Returns:
        The created product.
    """
    try:
        product = await Product.create(**product_in.model_dump())
    except Exception as e:
        logger.error(f"Error creating product: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create product.",
        )
    logger.info(f"Created product {product.public_id} ({product.name})")
    return _to_product_response(product)


async def list_products(
    page: int, size: int, category: Optional[str]
) -> PaginatedProductResponse:
    """
    Lists products ordered by name.

    Args:
        page: The page number.
        size: The number of products per page.
        category: Only return products with exactly this category label.

    Returns:
        A paginated list of products.
    """
    offset = (page - 1) * size
    filters = {}
    if category:
        filters["category"] = category

    products = (
        await Product.filter(**filters).order_by("name").offset(offset).limit(size)
    )
    total = await Product.filter(**filters).count()
    return PaginatedProductResponse(
        items=[_to_product_response(p) for p in products],
        total=total,
        page=page,
        size=size,
    )


async def get_product(product_public_id: str) -> ProductResponse:
    product = await _get_product_or_404(product_public_id)
    return _to_product_response(product)


async def update_product(
    product_public_id: str, product_in: ProductUpdate
) -> ProductResponse:
    """
    Updates the fields of a product that were provided.

    Args:
        product_public_id: The public ID of the product to update.
        product_in: The new data for the product.

    Returns:
        The updated product.
    """
    product = await _get_product_or_404(product_public_id)

    update_data = product_in.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No fields for update"
        )

    for key, value in update_data.items():
        setattr(product, key, value)
    await product.save()
    return _to_product_response(product)


async def delete_product(product_public_id: str):
    """
    Permanently deletes a product.

    Args:
        product_public_id: The public ID of the product to delete.
    """
    product = await _get_product_or_404(product_public_id)
    await product.delete()
    logger.info(f"Deleted product {product_public_id}")
    return None


async def get_total_stock() -> TotalStockResponse:
    """Total units in stock across all products; 0 when there are none."""
    stats = await report_service.generate_inventory_stats()
    return TotalStockResponse(total_stock=stats.total_stock)


async def get_inventory_stats() -> InventoryStats:
    return await report_service.generate_inventory_stats()
