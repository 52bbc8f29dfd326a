"""Summary statistics over a product record set."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Iterable

from .schemas import InventoryStats, ProductRecord

TWO_PLACES = Decimal("0.01")


def _to_decimal(value: float) -> Decimal:
    # str() keeps the shortest repr, so 1.005 stays 1.005 instead of 1.00499...
    return Decimal(str(value))


def round_half_up(value: Decimal) -> float:
    if not value.is_finite():
        return float(value)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus two decimals
        ctx.prec = max(28, value.adjusted() + 3)
        return float(value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def aggregate(records: Iterable[ProductRecord]) -> InventoryStats:
    """
    Computes inventory statistics for a set of product records.

    Missing prices or stock levels are left out of the sums and the mean,
    the same way a database $sum/$avg ignores absent values. Negative or
    non-finite values are not validated and flow into the result unchanged.

    Args:
        records: The product records to summarise.

    Returns:
        InventoryStats: count, total stock, average price, total value and
        number of distinct categories. All zero for an empty record set.
    """
    total_products = 0
    total_stock = 0
    price_sum = Decimal(0)
    priced_count = 0
    total_value = Decimal(0)
    categories = set()

    with localcontext() as ctx:
        # inf * 0 and inf - inf give NaN, as float arithmetic does
        ctx.traps[InvalidOperation] = False

        for record in records:
            total_products += 1
            if record.stock is not None:
                total_stock += record.stock
            if record.price is not None:
                price_sum += _to_decimal(record.price)
                priced_count += 1
                if record.stock is not None:
                    total_value += _to_decimal(record.price) * record.stock
            if record.category is not None:
                categories.add(record.category)

        average_price = price_sum / priced_count if priced_count else Decimal(0)

    return InventoryStats(
        total_products=total_products,
        total_stock=total_stock,
        average_price=round_half_up(average_price),
        total_value=round_half_up(total_value),
        category_count=len(categories),
    )
