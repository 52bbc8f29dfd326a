import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from tortoise import Tortoise

from quickcart.core.config import DATABASE_URL
from quickcart.core.logging_config import configure_logging
from quickcart.features.products.models import Product
from quickcart.features.reports import service as report_service
from quickcart.features.reports.exceptions import ReportGenerationFailed
from quickcart.features.reports.generator import stat_entries, ReportSettings

logger = logging.getLogger(__name__)

TORTOISE_ORM_CONFIG = {
    "connections": {
        "default": DATABASE_URL
    },
    "apps": {
        "models": {
            "models": [
                "quickcart.features.products.models",
                "aerich.models"   # For Aerich migrations
            ],
            "default_connection": "default",
        }
    },
    "use_tz": False,
    "timezone": "UTC"
}


app = typer.Typer(name="quickcart-cli", help="CLI for Quick Cart inventory data and reports.")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level.")):
    configure_logging(level="DEBUG" if verbose else "INFO")


# Shared async context manager for database connection
class DBConnection:
    async def __aenter__(self):
        await Tortoise.init(config=TORTOISE_ORM_CONFIG)
        await Tortoise.generate_schemas(safe=True) # Generate schema if it doesn't exist
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()


@app.command("report")
def report_command(
    output: Path = typer.Option(Path("products.pdf"), "--output", "-o", help="Where to write the PDF.")
):
    """Renders the product inventory report to a PDF file."""
    asyncio.run(_write_report(output))

async def _write_report(output: Path):
    async with DBConnection():
        try:
            document = await report_service.generate_products_report()
        except ReportGenerationFailed as e:
            typer.secho(f"Error: could not generate the report: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
    output.write_bytes(document.content)
    typer.secho(
        f"Wrote {output} ({document.row_count} products, {document.page_count} page(s)).",
        fg=typer.colors.GREEN,
    )


@app.command("stats")
def stats_command():
    """Prints the inventory summary statistics."""
    asyncio.run(_print_stats())

async def _print_stats():
    async with DBConnection():
        stats = await report_service.generate_inventory_stats()
    for label, value in stat_entries(stats, ReportSettings().currency_prefix):
        typer.echo(f"{label:<15} {value}")


@app.command("add-product")
def add_product_command(
    name: str = typer.Option(..., prompt=True, help="Product name."),
    price: float = typer.Option(..., prompt=True, min=0, help="Unit price."),
    stock: int = typer.Option(0, min=0, help="Units in stock."),
    category: Optional[str] = typer.Option(None, help="Category label."),
    supplier: Optional[str] = typer.Option(None, help="Supplier name."),
):
    """Adds a product to the catalogue."""
    asyncio.run(_add_product(name, price, stock, category, supplier))

async def _add_product(name: str, price: float, stock: int, category: Optional[str], supplier: Optional[str]):
    async with DBConnection():
        product = await Product.create(
            name=name, price=price, stock=stock, category=category, supplier=supplier
        )
        typer.secho(f"Product '{product.name}' created with ID: {product.public_id}", fg=typer.colors.GREEN)


@app.command("test-db-connection")
def test_db_connection_command_sync():
    """Tests the database connection and counts products."""
    asyncio.run(_test_db_connection())

async def _test_db_connection():
    async with DBConnection():
        typer.echo("Successfully connected to the database.")
        product_count = await Product.all().count()
        typer.echo(f"Found {product_count} product(s) in the database.")


if __name__ == "__main__":
    app()
