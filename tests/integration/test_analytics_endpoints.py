# -*- coding: utf-8 -*-
"""Integration tests for the analytics endpoints (/analytics/*)."""
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from app.exceptions import EmptyInputError
from app.services import ComplianceReportService, GeospatialAnalyticsService

AGENT_A = "7f5d7c1e-2b7a-4a51-9a55-0d3b1f7c2a10"
AGENT_B = "0c6a4b7e-91d2-4f3a-8e1c-5a2b9d3e4f60"

NEARBY = [(14.5995, 120.9842), (14.6000, 120.9850), (14.6010, 120.9845)]
FAR = [(15.0500, 120.9842), (14.1500, 120.9842)]


class TestAnalyticsHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/analytics/health")

        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["service"] == "DBSCAN Geospatial Analytics API"
        assert data["version"] == "1.0.0"
        assert data["timestamp"]


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_no_reports(self, client):
        resp = await client.get("/analytics/analyze")

        assert resp.status_code == 200, resp.text
        assert resp.json() == {
            "success": True,
            "message": "No compliance reports with location data found",
            "data": {
                "totalReports": 0,
                "clusters": [],
                "statistics": {
                    "totalClusters": 0,
                    "totalCompliantReports": 0,
                    "totalNonCompliantReports": 0,
                    "averageReportsPerCluster": 0,
                },
            },
        }

    @pytest.mark.asyncio
    async def test_reports_without_location_are_not_analyzed(self, client, submit):
        await submit()
        await submit()

        with patch.object(GeospatialAnalyticsService, "analyze") as analyze:
            resp = await client.get("/analytics/analyze")

        assert resp.status_code == 200
        assert resp.json()["data"]["totalReports"] == 0
        analyze.assert_not_called()

    @pytest.mark.asyncio
    async def test_clusters_and_noise(self, client, submit):
        for lat, lng in NEARBY:
            await submit(lat, lng, status="COMPLIANT")
        for lat, lng in FAR:
            await submit(lat, lng, status="FRAUDULENT")
        await submit()

        resp = await client.get("/analytics/analyze?maxDistance=2&minPoints=3")

        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Compliance analysis completed successfully"
        assert body["parameters"] == {"maxDistance": 2.0, "minPoints": 3, "agentId": "all"}
        summary = body["data"]["summary"]
        assert summary["total_points"] == 5
        assert summary["n_clusters"] == 1
        assert summary["n_noise_points"] == 2
        assert summary["noise_percentage"] == pytest.approx(40)
        assert summary["compliance_overview"] == {
            "total_compliant": 3,
            "total_non_compliant": 0,
            "total_fraudulent": 2,
        }
        cluster = body["data"]["clusters"][0]
        assert cluster["size"] == 3
        assert cluster["compliance_stats"] == {
            "compliant": 3,
            "non_compliant": 0,
            "fraudulent": 0,
        }
        assert body["data"]["clustering_params"] == {"eps_km": 2.0, "min_samples": 3}
        point = cluster["points"][0]
        assert point["coordinates"] == [point["lng"], point["lat"]]
        assert point["report"]["location"]["address"] == "Manila, Philippines"

    @pytest.mark.asyncio
    async def test_default_parameters(self, client, submit):
        for lat, lng in NEARBY + FAR:
            await submit(lat, lng)

        resp = await client.get("/analytics/analyze")

        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["parameters"] == {"maxDistance": 1000.0, "minPoints": 3, "agentId": "all"}
        assert body["data"]["summary"]["n_clusters"] == 1
        assert body["data"]["clusters"][0]["size"] == 5

    @pytest.mark.asyncio
    async def test_unparseable_numbers_fall_back_to_defaults(self, client, submit):
        for lat, lng in NEARBY:
            await submit(lat, lng)

        resp = await client.get("/analytics/analyze?maxDistance=abc&minPoints=0")

        assert resp.status_code == 200, resp.text
        assert resp.json()["parameters"]["maxDistance"] == 1000.0
        assert resp.json()["parameters"]["minPoints"] == 3

    @pytest.mark.asyncio
    async def test_agent_filter(self, client, submit):
        for lat, lng in NEARBY:
            await submit(lat, lng, agent_id=AGENT_A)
        await submit(*FAR[0], agent_id=AGENT_B)

        resp = await client.get(f"/analytics/analyze?agentId={AGENT_B}&minPoints=1")

        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["parameters"]["agentId"] == AGENT_B
        assert body["data"]["summary"]["total_points"] == 1
        assert body["data"]["clusters"][0]["points"][0]["report"]["agent_id"] == AGENT_B

    @pytest.mark.asyncio
    async def test_agent_without_reports(self, client, submit):
        await submit(*NEARBY[0], agent_id=AGENT_A)

        resp = await client.get(f"/analytics/analyze?agentId={uuid4()}")

        assert resp.status_code == 200
        assert resp.json()["data"]["totalReports"] == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "query, message",
        [
            (
                "maxDistance=-5",
                "maxDistance must be positive and minPoints must be at least 1",
            ),
            ("minPoints=-1", "maxDistance must be positive and minPoints must be at least 1"),
            ("maxDistance=inf", "maxDistance must be positive and minPoints must be at least 1"),
            ("minPoints=2.5", "minPoints must be an integer"),
            ("agentId=not-a-uuid", "agentId must be a valid UUID"),
        ],
    )
    async def test_invalid_parameters(self, client, query, message):
        with patch.object(ComplianceReportService, "get_located_reports") as loader:
            resp = await client.get(f"/analytics/analyze?{query}")

        assert resp.status_code == 400
        assert resp.json() == {
            "success": False,
            "error": "Invalid parameters",
            "message": message,
        }
        loader.assert_not_called()

    @pytest.mark.asyncio
    async def test_engine_failure_maps_to_500(self, client, submit):
        await submit(*NEARBY[0])

        with patch.object(
            GeospatialAnalyticsService,
            "analyze",
            side_effect=EmptyInputError("No reports with valid location data found"),
        ):
            resp = await client.get("/analytics/analyze")

        assert resp.status_code == 500
        assert resp.json() == {
            "success": False,
            "error": "Failed to perform compliance analysis",
            "message": "No reports with valid location data found",
        }

    @pytest.mark.asyncio
    async def test_error_without_message(self, client, submit):
        await submit(*NEARBY[0])

        with patch.object(GeospatialAnalyticsService, "analyze", side_effect=RuntimeError()):
            resp = await client.get("/analytics/analyze")

        assert resp.status_code == 500
        assert resp.json()["message"] == "Unknown error"


class TestAnalyticsCache:
    @pytest.mark.asyncio
    async def test_results_are_cached(self, client, submit, fake_cache):
        for lat, lng in NEARBY:
            await submit(lat, lng)

        first = await client.get("/analytics/analyze?maxDistance=2")
        assert first.status_code == 200
        assert "analytics:all:2.0:3" in fake_cache.store

        with patch.object(
            ComplianceReportService, "get_located_reports", new=AsyncMock()
        ) as loader:
            second = await client.get("/analytics/analyze?maxDistance=2")

        assert second.status_code == 200
        assert second.json() == first.json()
        loader.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close_distances_are_cached_separately(self, client, submit, fake_cache):
        for lat, lng in NEARBY:
            await submit(lat, lng)

        first = await client.get("/analytics/analyze?maxDistance=0.0500001&minPoints=1")
        second = await client.get("/analytics/analyze?maxDistance=0.05000014&minPoints=1")

        assert first.json()["parameters"]["maxDistance"] == 0.0500001
        assert second.json()["parameters"]["maxDistance"] == 0.05000014
        assert second.json()["data"]["clustering_params"]["eps_km"] == 0.05000014
        assert fake_cache.set_calls == 2

    @pytest.mark.asyncio
    async def test_new_report_invalidates_cache(self, client, submit, fake_cache):
        for lat, lng in NEARBY:
            await submit(lat, lng)
        await client.get("/analytics/analyze")
        assert fake_cache.store

        await submit(*FAR[0])
        assert fake_cache.store == {}

        resp = await client.get("/analytics/analyze")
        assert resp.json()["data"]["summary"]["total_points"] == 4

    @pytest.mark.asyncio
    async def test_no_data_response_is_not_cached(self, client, submit, fake_cache):
        await client.get("/analytics/analyze")

        assert fake_cache.set_calls == 0

    @pytest.mark.asyncio
    async def test_cache_outage_does_not_fail_analysis(self, client, submit, fake_cache):
        for lat, lng in NEARBY:
            await submit(lat, lng)
        fake_cache.failing = True

        resp = await client.get("/analytics/analyze")

        assert resp.status_code == 200, resp.text
        assert resp.json()["data"]["summary"]["n_clusters"] == 1


class TestHealthcheck:
    @pytest.mark.asyncio
    async def test_healthy(self, client):
        resp = await client.get("/health")

        assert resp.status_code == 200
        assert resp.json() == {"status": "OK"}

    @pytest.mark.asyncio
    async def test_redis_unavailable(self, client, fake_cache):
        fake_cache.failing = True

        resp = await client.get("/health")

        assert resp.status_code == 503
        assert resp.json() == {"status": "Service Unavailable"}
