"""
Root conftest for the pytest test suite.

Database-backed tests get a fresh, isolated in-memory SQLite database per
test, initialised with an async-native fixture. Pure tests of the report
pipeline do not need the database and do not request it.

Key Fixtures:
- `anyio_backend`: Specifies the asyncio backend.
- `initialize_test_db`: Creates a fresh DB schema for one test.
- `app_for_testing`: The FastAPI application with a lifespan that opens a
  per-test SQLite file, so the TestClient event loop owns its connection.
- `client`: A TestClient bound to `app_for_testing`. Seed data through the
  API; `product_factory` rows live in a different database.
- `product_factory`: Creates Product rows.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Generator, Optional

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from tortoise import Tortoise
from tortoise.contrib.fastapi import RegisterTortoise

from quickcart.features.products.models import Product
from quickcart.main import app as actual_app


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """
    Specifies the asyncio backend for pytest-asyncio.
    """
    return "asyncio"


@pytest_asyncio.fixture(scope="function")
async def initialize_test_db() -> AsyncGenerator[None, None]:
    """
    Creates a fresh in-memory database and schema for a test and tears it
    down afterwards.
    """
    test_db_config = {
        "connections": {"default": "sqlite://:memory:"},
        "apps": {
            "models": {
                "models": ["quickcart.features.products.models"],
                "default_connection": "default",
            }
        },
    }
    await Tortoise.init(config=test_db_config)
    await Tortoise.generate_schemas()

    yield

    await Tortoise.close_connections()


@pytest.fixture(scope="function")
def app_for_testing(tmp_path) -> Generator[FastAPI, Any, None]:
    """
    Provides the FastAPI application wired to a fresh SQLite file.

    The schema is created inside the app's own lifespan, which runs on the
    TestClient's event loop, so requests and schema share one connection.
    """
    original_lifespan = actual_app.router.lifespan_context
    test_db_config = {
        "connections": {"default": f"sqlite://{tmp_path / 'test.sqlite3'}"},
        "apps": {
            "models": {
                "models": ["quickcart.features.products.models"],
                "default_connection": "default",
            }
        },
    }

    @asynccontextmanager
    async def test_lifespan(app: FastAPI):
        async with RegisterTortoise(app, config=test_db_config, generate_schemas=True):
            yield

    actual_app.router.lifespan_context = test_lifespan

    yield actual_app

    # Restore the original lifespan context after the test
    actual_app.router.lifespan_context = original_lifespan


@pytest.fixture(scope="function")
def client(app_for_testing: FastAPI) -> Generator[TestClient, Any, None]:
    """
    Provides a starlette TestClient.
    """
    with TestClient(app_for_testing) as tc:
        yield tc


@pytest_asyncio.fixture
async def product_factory(initialize_test_db):
    """A factory to create products."""

    async def _factory(
        name: str,
        price: float = 10.0,
        stock: int = 5,
        category: Optional[str] = "Groceries",
        supplier: Optional[str] = "Acme Wholesale",
    ) -> Product:
        return await Product.create(
            name=name,
            price=price,
            stock=stock,
            category=category,
            supplier=supplier,
        )

    return _factory
