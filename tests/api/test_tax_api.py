"""API tests for tax resolution."""

from tallybook.config import reset_settings


class TestResolveTax:
    async def test_standard_category(self, async_client):
        response = await async_client.post("/api/tax/resolve", json={"category": "STANDARD"})
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "GST"
        assert data["rate_percent"] == 10.0
        assert data["is_reverse_charge"] is False
        assert data["explanation"] == "Standard GST rate"

    async def test_export_customer(self, async_client):
        payload = {
            "category": "STANDARD",
            "customer": {"customer_type": "BUSINESS", "country_code": "US"},
        }
        response = await async_client.post("/api/tax/resolve", json=payload)
        data = response.json()
        assert data["name"] == "GST Zero-rated Export"
        assert data["category"] == "ZERO"

    async def test_invalid_country_code(self, async_client):
        payload = {"customer": {"country_code": "USA"}}
        response = await async_client.post("/api/tax/resolve", json=payload)
        assert response.status_code == 422

    async def test_misconfigured_scheme(self, async_client, monkeypatch):
        monkeypatch.setenv("TAX_COUNTRY_CODE", "NZ")
        reset_settings()
        response = await async_client.post("/api/tax/resolve", json={"category": "STANDARD"})
        assert response.status_code == 500
        data = response.json()
        assert data["error_code"] == "ConfigurationError"
        assert data["details"]["country_code"] == "NZ"
        assert "TAX_" in data["hint"]
