"""
FastAPI endpoint tests for the Bet Notation Engine API.

Uses httpx + FastAPI TestClient — no real server needed.
"""

from __future__ import annotations

import api
import pytest
from api import app
from fastapi.testclient import TestClient

from bet_notation.processor import BetProcessor

client = TestClient(app)


@pytest.fixture(scope="module", autouse=True)
def _warm_processor() -> None:
    """Initialise the processor once for all API tests (bypasses lifespan)."""
    api._processor = BetProcessor()
    yield  # type: ignore[misc]
    api._processor = None


CHANNELS = [
    {"id": "A", "label": "A", "multipliers": {"2D": 2, "3D": 3}},
    {"id": "B", "label": "B", "multipliers": {"2D": 1.5, "3D": 2.5}},
]


class TestHealthEndpoint:
    def test_health_returns_200(self) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200

    def test_health_response_shape(self) -> None:
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["max_digit_frequency"] == 3
        assert data["allow_simple_range"] is False


class TestPrefixEndpoint:
    def test_valid_prefix(self) -> None:
        data = client.post("/prefix", json={"text": "12X3"}).json()
        assert data == {"text": "12X3", "valid": True}

    def test_empty_prefix_is_valid(self) -> None:
        assert client.post("/prefix", json={"text": ""}).json()["valid"] is True

    def test_frequency_cap_rejects_prefix(self) -> None:
        assert client.post("/prefix", json={"text": "1111X"}).json()["valid"] is False


class TestValidateEndpoint:
    def test_accepted_notation(self) -> None:
        data = client.post("/validate", json={"text": "12X34X56"}).json()
        assert data["accepted"] is True
        assert data["shape"] == "CROSS_PRODUCT"

    def test_rejected_notation_still_reports_shape(self) -> None:
        data = client.post("/validate", json={"text": "1234"}).json()
        assert data["accepted"] is False
        assert data["shape"] == "PLAIN"

    def test_garbage_is_invalid_shape(self) -> None:
        data = client.post("/validate", json={"text": "12+34"}).json()
        assert data["accepted"] is False
        assert data["shape"] == "INVALID"


class TestProcessEndpoint:
    def test_priced_bet(self) -> None:
        resp = client.post(
            "/process", json={"text": "12", "channels": CHANNELS, "amount": 10, "currency": "USD"}
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["syntax_type"] == "2D"
        assert data["combined_numbers"] == ["12"]
        assert data["channel_multiplier_sum"] == 3.5
        assert data["total_amount"] == "35.00"
        assert data["currency"] == "USD"

    def test_cross_product(self) -> None:
        data = client.post(
            "/process", json={"text": "12X34", "channels": CHANNELS, "amount": 10}
        ).json()
        assert data["combined_numbers"] == ["13", "14", "23", "24"]
        assert data["number_of_combinations"] == 4

    def test_engine_error_is_a_200_result(self) -> None:
        resp = client.post("/process", json={"text": "12>34", "channels": CHANNELS, "amount": 10})
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "error"
        assert data["kind"] == "INVALID_RANGE"
        assert data["error"].startswith("Invalid range")

    def test_returns_every_combination(self) -> None:
        data = client.post(
            "/process", json={"text": "9876543210X", "channels": CHANNELS, "amount": 1}
        ).json()
        assert data["number_of_combinations"] == 720
        assert len(data["combined_numbers"]) == 720

    def test_no_channels(self) -> None:
        data = client.post("/process", json={"text": "12", "channels": [], "amount": 10}).json()
        assert data["kind"] == "NO_CHANNEL_SELECTED"


class TestRequestValidation:
    def test_empty_body_returns_422(self) -> None:
        resp = client.post("/process", json={})
        assert resp.status_code == 422

    def test_malformed_channel_returns_422(self) -> None:
        bad = [{"id": "A", "label": "A", "multipliers": {"2D": 2}}]
        resp = client.post("/process", json={"text": "12", "channels": bad, "amount": 10})
        assert resp.status_code == 422

    def test_non_numeric_amount_returns_422(self) -> None:
        resp = client.post("/process", json={"text": "12", "channels": CHANNELS, "amount": "ten"})
        assert resp.status_code == 422

    def test_missing_content_type_returns_422(self) -> None:
        resp = client.post("/prefix")
        assert resp.status_code == 422
