"""
VSRAdmin Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The app is built with `create_app(ServiceBundle(...))`, so route tests
       run against AsyncMock collaborators and a real logo store in a temp dir.
       The SQL adapters are tested separately against a throwaway SQLite file.

Fixture Hierarchy (all function-scoped):
    ├── company_service / instruction_service / customer_service: AsyncMock fakes
    ├── logo_root: temp directory the logo store writes into
    ├── logo_service: LogoService over a LocalBlobStore at logo_root
    ├── services: ServiceBundle wiring the above together
    ├── test_client: HTTPX AsyncClient for the app built from `services`
    └── session_factory: async_sessionmaker over a fresh SQLite database
"""

import os
import tempfile

# Override settings for testing BEFORE any vsradmin import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="vsradmin_test_"), "unused.db"
)
os.environ["LOGO_STORAGE_ROOT"] = tempfile.mkdtemp(prefix="vsradmin_logos_")
os.environ["ENVIRONMENT"] = "production"
os.environ["PAGE_POLICY"] = "reject"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from vsradmin.database import build_engine, build_session_factory, create_all
from vsradmin.main import ServiceBundle, create_app
from vsradmin.schemas.customer import CompanySummary
from vsradmin.services.base import CompanyService, CustomerService, InstructionService
from vsradmin.services.logo_service import LocalBlobStore, LogoService


def client_for(app) -> AsyncClient:
    """AsyncClient routed straight into an ASGI app (no server, no lifespan)."""
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


# ══════════════════════════════════════════════════════════════════════════
# Collaborator Fakes
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def company_service():
    """
    CompanyService fake.

    create_company echoes the customer back as a CompanySummary so the
    restaurant route can be exercised end to end without a database.
    """
    service = AsyncMock(spec=CompanyService)

    async def _create(customer, logo_key):
        return CompanySummary(did=customer.did, name=customer.name, logo=logo_key)

    service.create_company.side_effect = _create
    return service


@pytest.fixture
def instruction_service():
    return AsyncMock(spec=InstructionService)


@pytest.fixture
def customer_service():
    return AsyncMock(spec=CustomerService)


@pytest.fixture
def logo_root(tmp_path):
    """Not created up front: the store creates it on the first write."""
    return tmp_path / "restaurantlogo"


@pytest.fixture
def logo_service(logo_root):
    return LogoService(LocalBlobStore(str(logo_root)), extension=".jpg")


@pytest.fixture
def services(company_service, instruction_service, customer_service, logo_service):
    return ServiceBundle(
        company=company_service,
        instructions=instruction_service,
        customers=customer_service,
        logos=logo_service,
    )


@pytest_asyncio.fixture
async def test_client(services):
    """
    Provides an async HTTP client for the app composed from `services`.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    async with client_for(create_app(services)) as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# SQL Adapter Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """A fresh SQLite database with every table created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'vsradmin.db'}")
    await create_all(engine)
    yield build_session_factory(engine)
    await engine.dispose()
