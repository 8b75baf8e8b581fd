"""Tests for health check endpoints."""

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, Mock, patch

from laptop_saw.api.app import create_app
from laptop_saw.api.health import (
    API_VERSION,
    basic_health_check,
    detailed_health_check,
    liveness_check,
    readiness_check,
)
from laptop_saw.repositories.memory import InMemoryCriteriaRepository
from laptop_saw.services.decision_support import DecisionSupportService


class TestBasicHealthCheck:
    """Test cases for basic health check endpoint."""

    @pytest.mark.asyncio
    async def test_basic_health_check_success(self):
        """Test successful basic health check."""
        result = await basic_health_check()

        assert result.status == "healthy"
        assert result.version == API_VERSION
        assert result.uptime_seconds >= 0
        assert result.timestamp is not None

    @patch('laptop_saw.api.health.datetime')
    @pytest.mark.asyncio
    async def test_basic_health_check_with_mocked_time(self, mock_datetime):
        """Test basic health check with mocked time."""
        mock_now = Mock()
        mock_now.isoformat.return_value = "2024-01-01T12:00:00"
        mock_now.__sub__ = Mock(return_value=Mock(total_seconds=Mock(return_value=5.0)))
        mock_datetime.now.return_value = mock_now

        result = await basic_health_check()

        assert result.timestamp == "2024-01-01T12:00:00"
        assert result.uptime_seconds == 5.0

    @pytest.mark.asyncio
    async def test_liveness_check(self):
        """Test liveness check."""
        result = await liveness_check()

        assert result["status"] == "alive"
        assert result["uptime_seconds"] >= 0


class TestReadinessCheck:
    """Test cases for readiness check endpoint."""

    @pytest.mark.asyncio
    async def test_ready(self, service):
        """Test a service with criteria is ready."""
        result = await readiness_check(service)

        assert result["status"] == "ready"
        assert result["laptops"] == 3
        assert result["criteria"] == 5

    @pytest.mark.asyncio
    async def test_not_ready_without_criteria(self, laptop_repository):
        """Test a service without criteria is not ready."""
        service = DecisionSupportService(laptop_repository, InMemoryCriteriaRepository())

        with pytest.raises(HTTPException) as exc_info:
            await readiness_check(service)

        assert exc_info.value.status_code == 503
        assert "No criteria" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_not_ready_when_store_fails(self):
        """Test store failures make the service not ready."""
        service = Mock()
        service.get_statistics = AsyncMock(side_effect=OSError("data file unavailable"))

        with pytest.raises(HTTPException) as exc_info:
            await readiness_check(service)

        assert exc_info.value.status_code == 503
        assert "data file unavailable" in exc_info.value.detail


class TestDetailedHealthCheck:
    """Test cases for detailed health check endpoint."""

    @pytest.mark.asyncio
    async def test_healthy(self, service):
        """Test a valid weighting reports healthy."""
        result = await detailed_health_check(service)

        assert result["status"] == "healthy"
        assert result["issues"] == []
        assert result["components"]["catalog"]["laptops"] == 3
        assert result["components"]["criteria"]["weights_valid"] is True
        assert result["components"]["criteria"]["weight_total"] == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_degraded_when_weights_invalid(self, service):
        """Test weights not summing to 1.0 degrade the service."""
        await service.criteria_repository.update_weights({"c-price": 0.9})

        result = await detailed_health_check(service)

        assert result["status"] == "degraded"
        assert result["issues"] == ["criteria_weights_invalid"]

    @pytest.mark.asyncio
    async def test_degraded_without_criteria(self, laptop_repository):
        """Test an empty criteria store degrades the service."""
        service = DecisionSupportService(laptop_repository, InMemoryCriteriaRepository())

        result = await detailed_health_check(service)

        assert result["status"] == "degraded"
        assert "no_criteria" in result["issues"]


class TestHealthRoutes:
    """Test cases for the mounted health routes."""

    def test_routes(self, service):
        """Test health routes are reachable through the app."""
        with TestClient(create_app(service)) as client:
            assert client.get("/health/").json()["status"] == "healthy"
            assert client.get("/health/liveness").status_code == 200
            assert client.get("/health/readiness").json()["status"] == "ready"
            assert client.get("/health/detailed").json()["status"] == "healthy"
