"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from decimal import Decimal

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from tallybook.application.services import reset_services
from tallybook.config import reset_settings
from tallybook.core.entities import LineDiscount, LineItem, TaxTreatment
from tallybook.infrastructure.numbering import reset_sequence_allocator


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Give every test fresh settings, services and number sequences."""
    reset_settings()
    reset_services()
    reset_sequence_allocator()
    yield
    reset_settings()
    reset_services()
    reset_sequence_allocator()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create sync test client."""
    from tallybook.api.main import app

    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    from tallybook.api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def gst() -> TaxTreatment:
    return TaxTreatment(rate_percent=Decimal("10"), name="GST")


@pytest.fixture
def reverse_charge_vat() -> TaxTreatment:
    return TaxTreatment(
        rate_percent=Decimal("20"),
        name="VAT (Reverse Charge)",
        is_reverse_charge=True,
    )


@pytest.fixture
def make_line():
    """Factory for line items; defaults to one unit at $10.00 with no tax."""

    def _make_line(
        quantity="1",
        unit_price_cents: int = 1000,
        discount: LineDiscount | None = None,
        tax: TaxTreatment | None = None,
        name: str = "Item",
    ) -> LineItem:
        return LineItem(
            name=name,
            quantity=quantity,
            unit_price_cents=unit_price_cents,
            discount=discount or LineDiscount(),
            tax=tax or TaxTreatment(),
        )

    return _make_line


@pytest.fixture
def sample_totals_payload() -> dict:
    """Two GST lines, one with a 25% discount."""
    return {
        "lines": [
            {
                "name": "Consulting",
                "quantity": 2,
                "unit_price_cents": 1000,
                "tax": {"rate_percent": 10, "name": "GST"},
            },
            {
                "name": "Install",
                "quantity": 1,
                "unit_price_cents": 10000,
                "discount": {"type": "PERCENT", "value": 25},
                "tax": {"rate_percent": 10, "name": "GST"},
            },
        ],
    }
