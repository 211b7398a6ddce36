"""
Integration tests for the ratings API.

Uses httpx.AsyncClient + ASGITransport for in-process HTTP round-trips.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from rating_service.api.app import create_app
from rating_service.api.config import ApiSettings

SMALL_SETTINGS = ApiSettings(max_observations=50)


def _make_client(settings: ApiSettings = SMALL_SETTINGS) -> AsyncClient:
    app = create_app(settings=settings)
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://testserver")


def _session() -> list[dict[str, float]]:
    return [
        {"x": 1, "b": 30, "T": 15},
        {"x": 1, "b": 40, "T": 25},
        {"x": 0, "b": 60, "T": 40},
        {"x": 1, "b": 20, "T": 5},
        {"x": 0, "b": 70, "T": 60},
    ]


class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_health(self) -> None:
        async with _make_client() as client:
            resp = await client.get("/api/v1/health")
            assert resp.status_code == 200
            data = resp.json()
            assert data["status"] == "ok"
            assert data["version"] == "0.1.0"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self) -> None:
        async with _make_client() as client:
            resp = await client.get(
                "/api/v1/health", headers={"X-Request-ID": "abc123"}
            )
            assert resp.headers["X-Request-ID"] == "abc123"


class TestComputeRatings:
    @pytest.mark.asyncio
    async def test_session_trace(self) -> None:
        async with _make_client() as client:
            resp = await client.post(
                "/api/v1/ratings", json={"observations": _session()}
            )
            assert resp.status_code == 200
            data = resp.json()

            ratings = [r["rating"] for r in data["ratings"]]
            expected = [25.2, 25.5, 25.5, 25.6, 25.6]
            assert ratings == pytest.approx(expected, abs=0.05)
            assert [r["index"] for r in data["ratings"]] == [0, 1, 2, 3, 4]
            assert data["ratings"][0]["prior"] == 25.0
            assert data["ratings"][2]["b"] == 60.0
            assert data["final_rating"] == ratings[-1]
            assert data["model_version"] == "0.1.0"

    @pytest.mark.asyncio
    async def test_golden_single_observation(self) -> None:
        async with _make_client() as client:
            resp = await client.post(
                "/api/v1/ratings",
                json={"observations": [{"x": 1, "b": 25, "T": 30}]},
            )
            assert resp.status_code == 200
            rating = resp.json()["ratings"][0]["rating"]
            assert rating == pytest.approx(25.1, abs=0.05)

    @pytest.mark.asyncio
    async def test_empty_observations(self) -> None:
        async with _make_client() as client:
            resp = await client.post(
                "/api/v1/ratings", json={"observations": []}
            )
            assert resp.status_code == 200
            data = resp.json()
            assert data["ratings"] == []
            assert data["final_rating"] is None

    @pytest.mark.asyncio
    async def test_config_override(self) -> None:
        async with _make_client() as client:
            resp = await client.post(
                "/api/v1/ratings",
                json={
                    "observations": [{"x": 1, "b": 25, "T": 30}],
                    "config": {"sigma": 10.0},
                },
            )
            assert resp.status_code == 200
            rating = resp.json()["ratings"][0]["rating"]
            assert rating == pytest.approx(26.6, abs=0.05)

    @pytest.mark.asyncio
    async def test_settings_supply_initial_prior(self) -> None:
        settings = ApiSettings(max_observations=50, initial_prior=40.0)
        async with _make_client(settings) as client:
            resp = await client.post(
                "/api/v1/ratings",
                json={"observations": [{"x": 1, "b": 25, "T": 30}]},
            )
            assert resp.status_code == 200
            point = resp.json()["ratings"][0]
            assert point["prior"] == 40.0
            assert point["rating"] == pytest.approx(40.0, abs=0.05)


class TestErrors:
    @pytest.mark.asyncio
    async def test_too_many_observations(self) -> None:
        observations = [{"x": 1, "b": 25, "T": 30}] * 51
        async with _make_client() as client:
            resp = await client.post(
                "/api/v1/ratings", json={"observations": observations}
            )
            assert resp.status_code == 422
            assert resp.json()["code"] == "DATA_SIZE_EXCEEDED"

    @pytest.mark.asyncio
    async def test_invalid_correctness(self) -> None:
        async with _make_client() as client:
            resp = await client.post(
                "/api/v1/ratings",
                json={"observations": [{"x": 3, "b": 25, "T": 30}]},
            )
            assert resp.status_code == 422
            data = resp.json()
            assert data["code"] == "VALIDATION_ERROR"
            assert data["request_id"] is not None

    @pytest.mark.asyncio
    async def test_negative_response_time(self) -> None:
        async with _make_client() as client:
            resp = await client.post(
                "/api/v1/ratings",
                json={"observations": [{"x": 1, "b": 25, "T": -0.5}]},
            )
            assert resp.status_code == 422
            assert resp.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_missing_field(self) -> None:
        async with _make_client() as client:
            resp = await client.post(
                "/api/v1/ratings",
                json={"observations": [{"x": 1, "b": 25}]},
            )
            assert resp.status_code == 422
            assert resp.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_invalid_config(self) -> None:
        async with _make_client() as client:
            resp = await client.post(
                "/api/v1/ratings",
                json={
                    "observations": [{"x": 1, "b": 25, "T": 30}],
                    "config": {"lower_bound": 80, "upper_bound": 20},
                },
            )
            assert resp.status_code == 422
            assert resp.json()["code"] == "INVALID_CONFIG"

    @pytest.mark.asyncio
    async def test_model_domain_error_returns_partial_trace(self) -> None:
        observations = [
            {"x": 1, "b": 25, "T": 30},
            {"x": 0, "b": -40, "T": 10},
            {"x": 1, "b": 50, "T": 20},
        ]
        async with _make_client() as client:
            resp = await client.post(
                "/api/v1/ratings",
                json={"observations": observations},
                headers={"X-Request-ID": "step-fail"},
            )
            assert resp.status_code == 422
            data = resp.json()
            assert data["code"] == "MODEL_DOMAIN_ERROR"
            assert data["index"] == 1
            assert data["request_id"] == "step-fail"
            assert len(data["partial_ratings"]) == 1
            assert data["prior"] == data["partial_ratings"][0]["rating"]
