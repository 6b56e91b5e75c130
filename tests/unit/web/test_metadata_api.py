"""HTTP tests for reference data and health endpoints."""


class TestCoffeeMetadata:
    """Tests for GET /api/v1/metadata/coffee."""

    async def test_lists_types_sizes_and_limits(self, client):
        response = await client.get("/api/v1/metadata/coffee")

        assert response.status_code == 200
        data = response.json()
        types = {item["name"]: item for item in data["coffeeTypes"]}
        sizes = {item["name"]: item for item in data["sizes"]}

        assert len(types) == 8
        assert types["FlatWhite"] == {"name": "FlatWhite", "displayName": "Flat White", "baseCaffeineMg": 130}
        assert types["Espresso"]["displayName"] == "Espresso"
        assert [item["name"] for item in data["sizes"]] == ["Small", "Medium", "Large", "ExtraLarge"]
        assert sizes["ExtraLarge"] == {"name": "ExtraLarge", "displayName": "Extra Large", "multiplier": 1.6}
        assert data["limits"] == {"maxDailyEntries": 10, "maxDailyCaffeineMg": 1000}

    async def test_does_not_issue_session(self, client):
        response = await client.get("/api/v1/metadata/coffee")
        assert "coffee-session" not in response.headers.get("set-cookie", "")


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestOpenApi:
    async def test_documents_session_cookie(self, client):
        response = await client.get("/openapi.json")

        schema = response.json()
        assert schema["info"]["title"] == "Coffee Tracker API"
        assert schema["components"]["securitySchemes"]["SessionCookie"]["name"] == "coffee-session"
