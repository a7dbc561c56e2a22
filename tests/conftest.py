import os

# Settings are read at import time, so the environment is prepared first.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("INTERNAL_API_KEY", "test-internal-key")
os.environ["OTEL_ENABLED"] = "false"
os.environ["METRICS_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["AUTH_RATE_LIMIT"] = "10/minute"
os.environ["CATALOG_RETRY_BACKOFF_SECONDS"] = "0"

import httpx
import pytest
from httpx import ASGITransport

from shared.config.database import Base, build_engine, build_session_factory, get_db
from shared.resilience import QueryCache, RetryPolicy

from services.auth_service.main import auth_app
from services.order_service.main import order_app
from services.payment_service.main import payment_app
from services.product_service.client import FakeStoreClient
from services.product_service.main import product_app
from services.product_service.router import get_product_service
from services.product_service.service import ProductService

CATALOG_URL = "https://catalog.test"


@pytest.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


def _override_db(app, session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db


async def _client_for(app):
    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def auth_client(session_factory):
    _override_db(auth_app, session_factory)
    async for client in _client_for(auth_app):
        yield client


@pytest.fixture
async def order_client(session_factory):
    _override_db(order_app, session_factory)
    async for client in _client_for(order_app):
        yield client


@pytest.fixture
async def payment_client(session_factory):
    _override_db(payment_app, session_factory)
    async for client in _client_for(payment_app):
        yield client


class FakeCatalog:
    """In-process stand-in for the remote catalog, served through httpx.MockTransport."""

    def __init__(self):
        self.products = {
            1: {"id": 1, "title": "Backpack", "price": 109.95, "category": "men's clothing",
                "description": "Fits 15 inch laptops", "image": "https://img.test/1.jpg",
                "rating": {"rate": 3.9, "count": 120}},
            2: {"id": 2, "title": "Slim Fit T-Shirt", "price": 22.3, "category": "men's clothing",
                "description": "Slim-fitting style", "image": "https://img.test/2.jpg",
                "rating": {"rate": 4.1, "count": 259}},
            5: {"id": 5, "title": "Bracelet", "price": 695, "category": "jewelery",
                "description": "Gold and silver", "image": "https://img.test/5.jpg",
                "rating": {"rate": 4.6, "count": 400}},
        }
        self.calls = []
        # Number of upcoming requests that fail at the transport layer
        self.transport_failures = 0
        self.error_status = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append(path)
        if self.transport_failures:
            self.transport_failures -= 1
            raise httpx.ConnectError("connection refused", request=request)
        if self.error_status:
            return httpx.Response(self.error_status, json={"message": "boom"})

        if path == "/products":
            return httpx.Response(200, json=list(self.products.values()))
        if path == "/products/categories":
            return httpx.Response(200, json=sorted({p["category"] for p in self.products.values()}))
        if path.startswith("/products/category/"):
            category = path[len("/products/category/"):]
            if category == "missing":
                return httpx.Response(404)
            return httpx.Response(200, json=[p for p in self.products.values() if p["category"] == category])
        if path.startswith("/products/"):
            product_id = int(path.rsplit("/", 1)[1])
            if product_id == 404:
                return httpx.Response(404)
            product = self.products.get(product_id)
            # The live catalog answers unknown ids with 200 and an empty body
            if product is None:
                return httpx.Response(200, content=b"")
            return httpx.Response(200, json=product)
        return httpx.Response(404)

    def calls_to(self, path: str) -> int:
        return self.calls.count(path)


@pytest.fixture
def fake_catalog():
    return FakeCatalog()


@pytest.fixture
async def product_service(fake_catalog):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_catalog.handler), base_url=CATALOG_URL)
    service = ProductService(
        FakeStoreClient(http_client),
        cache=QueryCache(),
        retry_policy=RetryPolicy(max_attempts=3, backoff_seconds=0),
    )
    yield service
    await http_client.aclose()


@pytest.fixture
async def product_client(product_service):
    product_app.dependency_overrides[get_product_service] = lambda: product_service
    async for client in _client_for(product_app):
        yield client
