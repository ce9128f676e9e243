"""API tests for totals endpoints."""

from unittest.mock import AsyncMock, Mock

import pytest

from tallybook.api.dependencies import get_calculate_totals_use_case
from tallybook.api.main import app
from tallybook.application.use_cases.calculate_totals import CalculateTotalsUseCase


class TestCalculateTotals:
    async def test_totals(self, async_client, sample_totals_payload):
        response = await async_client.post("/api/totals", json=sample_totals_payload)
        assert response.status_code == 200
        data = response.json()
        assert data["currency"] == "AUD"
        assert data["subtotal_cents"] == 12000
        assert data["line_discount_cents"] == 2500
        assert data["net_subtotal_cents"] == 9500
        assert data["tax_cents"] == 950
        assert data["total_cents"] == 10450
        assert data["balance_cents"] == 10450
        assert data["deposit_amount_cents"] is None
        assert data["has_mixed_rates"] is False
        assert len(data["tax_breakdown"]) == 1
        assert data["tax_breakdown"][0]["taxable_cents"] == 9500

    async def test_reverse_charge_breakdown(self, async_client):
        payload = {
            "lines": [
                {"quantity": 1, "unit_price_cents": 10000, "tax": {"rate_percent": 10, "name": "GST"}},
                {
                    "quantity": 1,
                    "unit_price_cents": 5000,
                    "tax": {
                        "rate_percent": 20,
                        "name": "VAT (Reverse Charge)",
                        "is_reverse_charge": True,
                    },
                },
            ]
        }
        response = await async_client.post("/api/totals", json=payload)
        assert response.status_code == 200
        data = response.json()
        assert data["tax_cents"] == 1000
        assert data["has_reverse_charge"] is True
        groups = data["tax_breakdown"]
        assert groups[1]["tax_cents"] == 0
        assert groups[1]["display_rate"] == "RC 0%"
        assert groups[1]["rate_percent"] == 20.0

    async def test_deposit_and_payment(self, async_client):
        payload = {
            "lines": [{"quantity": 1, "unit_price_cents": 20000}],
            "deposit_request": {"type": "percent", "value": 25},
            "paid_cents": 3000,
        }
        response = await async_client.post("/api/totals", json=payload)
        data = response.json()
        assert data["deposit_amount_cents"] == 5000
        assert data["balance_cents"] == 17000

    async def test_deposit_over_total_rejected(self, async_client):
        payload = {
            "lines": [{"quantity": 1, "unit_price_cents": 20000}],
            "deposit_request": {"type": "fixed", "value": 250},
        }
        response = await async_client.post("/api/totals", json=payload)
        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "INVALID_DEPOSIT_AMOUNT"
        assert "cannot exceed the document total" in data["message"]
        assert data["details"]["deposit_cents"] == 25000
        assert data["hint"]
        assert data["path"] == "/api/totals"

    async def test_negative_price_rejected(self, async_client):
        payload = {"lines": [{"quantity": 1, "unit_price_cents": -100}]}
        response = await async_client.post("/api/totals", json=payload)
        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "NEGATIVE_QUANTITY_OR_PRICE"
        assert data["details"]["line_index"] == 0

    async def test_discount_range_rejected(self, async_client):
        payload = {
            "lines": [
                {
                    "quantity": 1,
                    "unit_price_cents": 1000,
                    "discount": {"type": "PERCENT", "value": 120},
                }
            ]
        }
        response = await async_client.post("/api/totals", json=payload)
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_DISCOUNT_RANGE"

    async def test_malformed_body(self, async_client):
        response = await async_client.post("/api/totals", json={"lines": [{"quantity": "abc"}]})
        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert "quantity" in data["detail"]

    async def test_request_id_header(self, async_client, sample_totals_payload):
        response = await async_client.post("/api/totals", json=sample_totals_payload)
        assert "X-Request-ID" in response.headers
        assert response.headers["X-Response-Time"].endswith("ms")

    async def test_inclusive_mode(self, async_client):
        payload = {
            "lines": [{"quantity": 1, "unit_price_cents": 1100, "tax_code": "GST"}],
            "pricing_mode": "INCLUSIVE",
        }
        response = await async_client.post("/api/totals", json=payload)
        data = response.json()
        assert data["pricing_mode"] == "INCLUSIVE"
        assert data["tax_cents"] == 100
        assert data["total_cents"] == 1100


class TestCalculateLine:
    async def test_line(self, async_client):
        payload = {
            "line": {
                "quantity": 1,
                "unit_price_cents": 1000,
                "discount": {"type": "AMOUNT", "value": 1000},
                "tax_code": "GST",
            }
        }
        response = await async_client.post("/api/totals/line", json=payload)
        assert response.status_code == 200
        data = response.json()
        assert data["net_cents"] == 0
        assert data["total_cents"] == 0

    async def test_line_quantity_zero(self, async_client):
        payload = {"line": {"quantity": 0, "unit_price_cents": 1000}}
        response = await async_client.post("/api/totals/line", json=payload)
        assert response.status_code == 400
        assert response.json()["error_code"] == "NEGATIVE_QUANTITY_OR_PRICE"


class TestDependencyOverride:
    @pytest.fixture
    def failing_use_case(self):
        uc = Mock(spec=CalculateTotalsUseCase)
        uc.execute = AsyncMock(side_effect=ValueError("bad currency"))
        return uc

    async def test_value_error_maps_to_400(self, async_client, failing_use_case):
        app.dependency_overrides[get_calculate_totals_use_case] = lambda: failing_use_case
        try:
            response = await async_client.post("/api/totals", json={"lines": []})
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "ValueError"
        assert data["message"] == "bad currency"
