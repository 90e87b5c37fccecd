"""
API Tests
=========

Tests for the HTTP surface: health, evaluation and the rule catalog.
"""

import pytest

from regmatch.models.schemas.rule import CatalogItem
from regmatch.services.rule_service import RuleService


@pytest.fixture
async def seeded(db_session, catalog_data):
    items = [CatalogItem.model_validate(entry) for entry in catalog_data]
    await RuleService(db_session).ingest_catalog(items)


class TestHealth:
    """Tests for service metadata endpoints."""

    async def test_health(self, client):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "api": "healthy",
            "database": "healthy",
            "rules": 0,
        }

    async def test_health_reports_rule_count(self, client, seeded):
        response = await client.get("/api/v1/health")

        assert response.json()["rules"] == 11

    def test_endpoints_share_one_session_dependency(self):
        from fastapi.routing import APIRoute

        from regmatch.deps import get_db
        from regmatch.main import app

        session_routes = {
            route.path: {dep.call for dep in route.dependant.dependencies}
            for route in app.routes
            if isinstance(route, APIRoute) and route.dependant.dependencies
        }

        assert set(session_routes) == {
            "/api/v1/health",
            "/api/v1/evaluate",
            "/api/v1/rules",
            "/api/v1/rules/stats",
            "/api/v1/rules/catalog",
        }
        assert all(calls == {get_db} for calls in session_routes.values())

    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/api/docs"


class TestEvaluateEndpoint:
    """Tests for POST /api/v1/evaluate."""

    async def test_returns_matches_with_wire_names(self, client, seeded):
        response = await client.post(
            "/api/v1/evaluate",
            json={"state": "ny", "city": "New York", "employees": 3, "hasEmployees": True},
        )

        assert response.status_code == 200
        body = response.json()
        titles = {rule["title"] for rule in body["matched"]}
        assert "NYC: Sexual Harassment Training" in titles
        assert "New York: Sexual Harassment Policy & Annual Training" in titles
        assert body["stats"] == {"poolCount": 11, "matchedCount": len(body["matched"])}
        assert body["input"]["state"] == "NY"
        assert body["input"]["hasEmployees"] is True
        assert body["warnings"] == [
            "Industry-specific rules may be missing because NAICS was not provided.",
            "ZIP-based rules may be less precise because ZIP was not provided.",
        ]

    async def test_matched_rules_carry_requirements(self, client, seeded):
        response = await client.post(
            "/api/v1/evaluate",
            json={"state": "CA", "revenueUSD": 26000000, "collectsPII": True},
        )

        [rule] = response.json()["matched"]
        assert rule["jurisdiction"] == "state"
        assert rule["references"] == [{"label": rule["title"], "url": "https://cppa.ca.gov/"}]
        assert len(rule["requirements"]) == 2

    async def test_missing_state_is_rejected(self, client):
        response = await client.post("/api/v1/evaluate", json={"employees": 4})

        assert response.status_code == 422

    async def test_malformed_state_is_rejected(self, client):
        response = await client.post("/api/v1/evaluate", json={"state": "California"})

        assert response.status_code == 422

    async def test_misconfigured_rule_is_a_server_error(self, client, add_rule):
        await add_rule("Bank charter", {"mode": "all", "predicates": [{"custom": "isBank"}]})

        response = await client.post("/api/v1/evaluate", json={"state": "CA"})

        assert response.status_code == 500
        assert "Unknown custom predicate 'isBank'" in response.json()["detail"]


class TestRulesEndpoints:
    """Tests for browsing and statistics."""

    async def test_list_rules(self, client, seeded):
        response = await client.get("/api/v1/rules", params={"jurisdiction": "state", "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 3
        assert len(body["rules"]) == 2
        assert "conditions" in body["rules"][0]

    async def test_list_rules_rejects_bad_paging(self, client):
        assert (await client.get("/api/v1/rules", params={"limit": 0})).status_code == 422
        assert (await client.get("/api/v1/rules", params={"offset": -1})).status_code == 422

    async def test_list_rules_rejects_unknown_jurisdiction(self, client):
        response = await client.get("/api/v1/rules", params={"jurisdiction": "county"})

        assert response.status_code == 422

    async def test_stats(self, client, seeded):
        response = await client.get("/api/v1/rules/stats")

        assert response.status_code == 200
        body = response.json()
        assert {row["jurisdiction"]: row["count"] for row in body["byJurisdiction"]} == {
            "federal": 6,
            "state": 3,
            "local": 2,
        }
        assert body["byAuthority"][0] == {"authority": "OSHA (DOL)", "count": 2}


class TestCatalogEndpoint:
    """Tests for POST /api/v1/rules/catalog."""

    async def test_ingests_catalog(self, client, catalog_data):
        first = await client.post("/api/v1/rules/catalog", json=catalog_data)
        second = await client.post("/api/v1/rules/catalog", json=catalog_data)

        assert first.status_code == 201
        assert first.json() == {"created": 11, "skipped": 0, "warnings": []}
        assert second.json()["skipped"] == 11

    async def test_rejects_unknown_custom_predicate(self, client):
        entry = {
            "title": "Bank charter",
            "url": "https://example.gov/bank",
            "source": "example.gov",
            "jurisdiction": "federal",
            "authority": "OCC",
            "conditions": {"mode": "all", "predicates": [{"custom": "isBank"}]},
            "requirements": [{"action": "Apply for a charter"}],
        }

        response = await client.post("/api/v1/rules/catalog", json=[entry])

        assert response.status_code == 400
        assert "isBank" in response.json()["detail"]

    async def test_rejects_malformed_entry(self, client):
        response = await client.post("/api/v1/rules/catalog", json=[{"title": "Incomplete"}])

        assert response.status_code == 422
