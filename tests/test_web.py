"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from pricecast.web.app import create_app


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


SIMULATION_BODY = {
    "ticker": "ASML",
    "current_price": 850.0,
    "investment_amount": 10000.0,
    "target_amount": 15000.0,
    "simulation_count": 400,
    "seed": 42,
}


class TestSystem:
    def test_health(self, client):
        resp = client.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestAssets:
    def test_list(self, client):
        resp = client.get("/api/v1/assets")
        assert resp.status_code == 200
        assert len(resp.json()["data"]) == 10

    def test_known(self, client):
        data = client.get("/api/v1/assets/aapl").json()["data"]
        assert data["name"] == "Apple Inc."
        assert data["known"] is True

    def test_unknown_never_404(self, client):
        resp = client.get("/api/v1/assets/NOPE")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["sector"] == "General"
        assert data["known"] is False


class TestSimulation:
    def test_run(self, client):
        resp = client.post("/api/v1/simulations", json=SIMULATION_BODY)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["seed"] == 42
        assert data["simulation_count"] == 400
        assert sum(b["count"] for b in data["histogram"]) == 400
        assert len(data["percentile_bands"]) == 26
        assert len(data["sample_paths"]) == 100
        assert data["recommendation"]["action"] in {
            "STRONG_BUY", "BUY", "HOLD", "HOLD_REDUCE", "SELL",
        }
        assert data["profile"]["name"] == "ASML Holding N.V."

    def test_seeded_runs_match(self, client):
        r1 = client.post("/api/v1/simulations", json=SIMULATION_BODY).json()["data"]
        r2 = client.post("/api/v1/simulations", json=SIMULATION_BODY).json()["data"]
        assert r1["statistics"] == r2["statistics"]
        assert r1["investment"] == r2["investment"]

    def test_invalid_parameter(self, client):
        body = {**SIMULATION_BODY, "current_price": 0}
        resp = client.post("/api/v1/simulations", json=body)
        assert resp.status_code == 422
        error = resp.json()["error"]
        assert error["code"] == "invalid_parameter"
        assert error["field"] == "current_price"

    def test_degenerate_numeric(self, client):
        body = {**SIMULATION_BODY, "drift": 1e5, "volatility": 0.0, "simulation_count": 10}
        resp = client.post("/api/v1/simulations", json=body)
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "degenerate_numeric"

    @pytest.mark.parametrize("overrides", [
        {"volatility": 1e200, "simulation_count": 10},
        {"current_price": 1e306, "investment_amount": 1e306, "volatility": 0.3,
         "drift": 0.1, "simulation_count": 1000},
    ])
    def test_non_finite_inputs_map_to_422(self, client, overrides):
        resp = client.post("/api/v1/simulations", json={**SIMULATION_BODY, **overrides})
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "degenerate_numeric"

    def test_default_count_from_settings(self, client, settings):
        body = {k: v for k, v in SIMULATION_BODY.items() if k != "simulation_count"}
        data = client.post("/api/v1/simulations", json=body).json()["data"]
        assert data["simulation_count"] == settings.simulation_default_count
