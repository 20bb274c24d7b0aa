# tests/core/test_routing.py
"""
Тесты для клиента Geoapify и оценщиков маршрутов.
"""

from __future__ import annotations

import json
from typing import Any, Callable
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from driver_match.common.constants import VehicleProfile
from driver_match.core.errors import ConfigurationError, UnresolvableRoute, UpstreamError
from driver_match.core.models import Candidate, GeoPoint
from driver_match.core.routing.client import GeoapifyClient
from driver_match.core.routing.service import ProximityEstimator, TripDistanceEstimator


BASE_URL = "https://geo.test/v1"


def _client(handler: Callable[[httpx.Request], httpx.Response], api_key: str = "key") -> GeoapifyClient:
    """GeoapifyClient поверх MockTransport."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeoapifyClient(api_key=api_key, base_url=BASE_URL, timeout=1.0, client=http)


class TestGeoapifyClient:
    """Тесты для GeoapifyClient."""

    def test_init_from_settings(self) -> None:
        """Параметры берутся из конфига, если не заданы."""
        with patch("driver_match.config.settings") as mock_settings:
            mock_settings.routing.GEOAPIFY_API_KEY = "config_key"
            mock_settings.routing.GEOAPIFY_BASE_URL = "https://example.test/v1/"
            mock_settings.routing.REQUEST_TIMEOUT = 2.0

            client = GeoapifyClient()

        assert client._api_key == "config_key"
        assert client._base_url == "https://example.test/v1"

    @pytest.mark.asyncio
    async def test_route_matrix_request(self) -> None:
        """Проверяет метод, URL, параметры и тело запроса матрицы."""
        captured: dict[str, Any] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["path"] = request.url.path
            captured["params"] = dict(request.url.params)
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"sources_to_targets": []})

        client = _client(handler)
        data = await client.route_matrix(
            sources=[GeoPoint(14.60, 120.98), GeoPoint(14.61, 120.99)],
            targets=[GeoPoint(14.62, 121.00)],
            mode=VehicleProfile.MOTORCYCLE,
        )

        assert data == {"sources_to_targets": []}
        assert captured["method"] == "POST"
        assert captured["path"] == "/v1/routematrix"
        assert captured["params"] == {"apiKey": "key"}
        assert captured["body"] == {
            "mode": "motorcycle",
            "sources": [{"location": [120.98, 14.60]}, {"location": [120.99, 14.61]}],
            "targets": [{"location": [121.00, 14.62]}],
        }

    @pytest.mark.asyncio
    async def test_route_request(self) -> None:
        """Проверяет параметры запроса маршрута."""
        captured: dict[str, Any] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["path"] = request.url.path
            captured["params"] = dict(request.url.params)
            return httpx.Response(200, json={"features": []})

        client = _client(handler)
        await client.route(
            waypoints=[GeoPoint(14.6, 120.98), GeoPoint(14.61, 121.0)],
            mode=VehicleProfile.DRIVE,
        )

        assert captured["method"] == "GET"
        assert captured["path"] == "/v1/routing"
        assert captured["params"] == {
            "waypoints": "14.6,120.98|14.61,121.0",
            "mode": "drive",
            "apiKey": "key",
        }

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        """Статус не 2xx -> UpstreamError, тело ошибки не попадает в сообщение."""
        client = _client(lambda request: httpx.Response(403, text="Invalid apiKey secret-details"))

        with pytest.raises(UpstreamError) as exc_info:
            await client.route_matrix([GeoPoint(1, 1)], [GeoPoint(2, 2)], VehicleProfile.MOTORCYCLE)

        assert exc_info.value.message == "Failed to fetch route matrix"
        assert "secret" not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        """Сетевая ошибка -> UpstreamError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timeout", request=request)

        client = _client(handler)

        with pytest.raises(UpstreamError) as exc_info:
            await client.route([GeoPoint(1, 1), GeoPoint(2, 2)], VehicleProfile.MOTORCYCLE)

        assert exc_info.value.message == "Failed to fetch trip route"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [b"not json", b"[1, 2, 3]"])
    async def test_unexpected_body(self, content: bytes) -> None:
        """Ответ не JSON-объект -> UpstreamError."""
        client = _client(lambda request: httpx.Response(200, content=content))

        with pytest.raises(UpstreamError):
            await client.route([GeoPoint(1, 1), GeoPoint(2, 2)], VehicleProfile.MOTORCYCLE)

    @pytest.mark.asyncio
    async def test_missing_api_key(self) -> None:
        """Без ключа -> ConfigurationError, запрос не выполняется."""
        handler = AsyncMock()
        client = _client(handler, api_key="")

        with pytest.raises(ConfigurationError) as exc_info:
            await client.route_matrix([GeoPoint(1, 1)], [GeoPoint(2, 2)], VehicleProfile.MOTORCYCLE)

        assert exc_info.value.status_code == 500
        handler.assert_not_called()

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        """Проверяет закрытие HTTP клиента."""
        client = _client(lambda request: httpx.Response(200, json={}))
        await client.close()
        assert client._client.is_closed


class TestProximityEstimator:
    """Тесты для ProximityEstimator."""

    @pytest.fixture
    def geoapify(self) -> AsyncMock:
        return AsyncMock(spec=GeoapifyClient)

    @pytest.mark.asyncio
    async def test_empty_candidates(self, geoapify: AsyncMock, pickup_point: GeoPoint) -> None:
        """Без кандидатов провайдер не вызывается."""
        estimator = ProximityEstimator(geoapify, VehicleProfile.MOTORCYCLE)

        assert await estimator.estimate([], pickup_point) == []
        geoapify.route_matrix.assert_not_called()

    @pytest.mark.asyncio
    async def test_single_matrix_call(
        self,
        geoapify: AsyncMock,
        pickup_point: GeoPoint,
        sample_candidates: list[Candidate],
    ) -> None:
        """Один запрос матрицы на всех кандидатов, результаты в исходном порядке."""
        geoapify.route_matrix.return_value = {
            "sources_to_targets": [
                [{"time": 120, "distance": 800}],
                [{"distance": 500}],
                [{"time": 60.5, "distance": 300}],
            ]
        }
        estimator = ProximityEstimator(geoapify, VehicleProfile.MOTORCYCLE)

        results = await estimator.estimate(sample_candidates, pickup_point)

        geoapify.route_matrix.assert_awaited_once_with(
            sources=[c.location for c in sample_candidates],
            targets=[pickup_point],
            mode=VehicleProfile.MOTORCYCLE,
        )
        assert [r.candidate.vehicle_id for r in results] == ["v1", "v2", "v3"]
        assert [r.eta_seconds for r in results] == [120.0, None, 60.5]
        assert [r.distance_meters for r in results] == [800.0, 500.0, 300.0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"sources_to_targets": None},
            {"sources_to_targets": [[]]},
            {"sources_to_targets": [[None]]},
            {"sources_to_targets": [[{"time": None, "distance": "far"}]]},
            {"sources_to_targets": [[{"time": 10**400, "distance": -10**400}]]},
        ],
    )
    async def test_missing_cells_are_unknown(
        self,
        geoapify: AsyncMock,
        pickup_point: GeoPoint,
        sample_candidates: list[Candidate],
        data: dict[str, Any],
    ) -> None:
        """Отсутствующие ячейки дают None, а не ошибку."""
        geoapify.route_matrix.return_value = data
        estimator = ProximityEstimator(geoapify, VehicleProfile.MOTORCYCLE)

        results = await estimator.estimate(sample_candidates, pickup_point)

        assert len(results) == 3
        assert all(r.eta_seconds is None and r.distance_meters is None for r in results)

    @pytest.mark.asyncio
    async def test_provider_error_propagates(
        self,
        geoapify: AsyncMock,
        pickup_point: GeoPoint,
        sample_candidates: list[Candidate],
    ) -> None:
        """Ошибка провайдера прерывает оценку."""
        geoapify.route_matrix.side_effect = UpstreamError("Failed to fetch route matrix")
        estimator = ProximityEstimator(geoapify, VehicleProfile.MOTORCYCLE)

        with pytest.raises(UpstreamError):
            await estimator.estimate(sample_candidates, pickup_point)


class TestTripDistanceEstimator:
    """Тесты для TripDistanceEstimator."""

    @pytest.fixture
    def geoapify(self) -> AsyncMock:
        return AsyncMock(spec=GeoapifyClient)

    @pytest.mark.asyncio
    async def test_distance(
        self,
        geoapify: AsyncMock,
        pickup_point: GeoPoint,
        dropoff_point: GeoPoint,
    ) -> None:
        """Расстояние берётся из первого маршрута."""
        geoapify.route.return_value = {
            "features": [
                {"properties": {"distance": 2500, "time": 400}},
                {"properties": {"distance": 9999}},
            ]
        }
        estimator = TripDistanceEstimator(geoapify, VehicleProfile.MOTORCYCLE)

        trip = await estimator.estimate(pickup_point, dropoff_point)

        assert trip.meters == 2500.0
        geoapify.route.assert_awaited_once_with(
            waypoints=[pickup_point, dropoff_point],
            mode=VehicleProfile.MOTORCYCLE,
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"features": []},
            {"features": [{}]},
            {"features": [{"properties": {}}]},
            {"features": [{"properties": {"distance": None}}]},
            {"features": [{"properties": {"distance": -1}}]},
            {"features": [{"properties": {"distance": 10**400}}]},
        ],
    )
    async def test_unresolvable(
        self,
        geoapify: AsyncMock,
        pickup_point: GeoPoint,
        dropoff_point: GeoPoint,
        data: dict[str, Any],
    ) -> None:
        """Нет маршрута -> UnresolvableRoute (400)."""
        geoapify.route.return_value = data
        estimator = TripDistanceEstimator(geoapify, VehicleProfile.MOTORCYCLE)

        with pytest.raises(UnresolvableRoute) as exc_info:
            await estimator.estimate(pickup_point, dropoff_point)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Could not calculate trip distance"
