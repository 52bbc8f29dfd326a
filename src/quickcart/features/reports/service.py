"""
Reports Service Module

Bridges the persistence layer and the report pipeline: loads products as
read-only ProductRecord values and hands them to the aggregator or the PDF
generator.
"""

import datetime
import logging
from typing import List, Optional

from fastapi.concurrency import run_in_threadpool

from ..products.models import Product
from .aggregator import aggregate
from .generator import InventoryReportGenerator, ReportDocument
from .schemas import InventoryStats, ProductRecord

logger = logging.getLogger(__name__)


async def load_product_records() -> List[ProductRecord]:
    """
    Loads every product as a ProductRecord, in insertion order.

    Returns:
        List[ProductRecord]: Immutable copies of the product rows.
    """
    products = await Product.all().order_by("id")
    return [ProductRecord.model_validate(product) for product in products]


async def generate_inventory_stats() -> InventoryStats:
    """
    Computes the inventory summary over all products.

    Returns:
        InventoryStats: totals, rounded averages and distinct category count.
    """
    records = await load_product_records()
    return aggregate(records)


async def generate_products_report(
    generated_at: Optional[datetime.datetime] = None,
) -> ReportDocument:
    """
    Renders the product inventory PDF.

    Rendering is CPU bound, so it runs in the threadpool with a generator
    built for this request only.

    Args:
        generated_at: Timestamp printed on the report; defaults to now.

    Returns:
        ReportDocument: The finished PDF and its metadata.

    Raises:
        ReportGenerationFailed: If any stage of the report fails.
    """
    records = await load_product_records()
    logger.info(f"Generating inventory report for {len(records)} products")
    generator = InventoryReportGenerator()
    return await run_in_threadpool(generator.generate, records, generated_at)
