# driver_match/core/routing/client.py
"""
HTTP-клиент Geoapify.
Матрица маршрутов (routematrix) и построение маршрута (routing).

Клиент только ходит в API и отдаёт сырой JSON. Разбор ответов
выполняется в оценщиках (estimators), сразу на границе вызова.
"""

from __future__ import annotations

from typing import Any

import httpx

from driver_match.common.constants import VehicleProfile
from driver_match.common.logger import log_debug, log_error
from driver_match.core.errors import ConfigurationError, UpstreamError
from driver_match.core.models import GeoPoint


# Сколько символов тела ошибки писать в лог
ERROR_BODY_LOG_LIMIT = 1000


class GeoapifyClient:
    """
    Клиент API Geoapify.

    Реализует:
    - Матрицу времени/расстояния many-to-one (POST /routematrix)
    - Маршрут между точками (GET /routing)
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            api_key: API ключ Geoapify (берётся из конфига если None)
            base_url: Базовый URL API
            timeout: Таймаут запросов в секундах
            client: Готовый httpx клиент (для тестов)
        """
        if api_key is None or base_url is None or timeout is None:
            from driver_match.config import settings
            api_key = settings.routing.GEOAPIFY_API_KEY if api_key is None else api_key
            base_url = settings.routing.GEOAPIFY_BASE_URL if base_url is None else base_url
            timeout = settings.routing.REQUEST_TIMEOUT if timeout is None else timeout

        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Закрывает HTTP клиент."""
        await self._client.aclose()

    def _require_api_key(self) -> str:
        if not self._api_key:
            raise ConfigurationError()
        return self._api_key

    async def _send(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict[str, str],
        json_body: dict[str, Any] | None = None,
        failure_message: str,
    ) -> dict[str, Any]:
        """
        Выполняет запрос и возвращает JSON ответа.

        Raises:
            UpstreamError: Сетевая ошибка, статус не 2xx или не JSON
        """
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.request(method, url, params=params, json=json_body)
        except httpx.HTTPError as e:
            await log_error(f"Geoapify {operation}: сетевая ошибка {type(e).__name__}")
            raise UpstreamError(failure_message) from e

        if not response.is_success:
            await log_error(
                f"Geoapify {operation} Error: HTTP {response.status_code}",
                extra={"body": response.text[:ERROR_BODY_LOG_LIMIT]},
            )
            raise UpstreamError(failure_message)

        try:
            data = response.json()
        except ValueError as e:
            await log_error(f"Geoapify {operation}: ответ не является JSON")
            raise UpstreamError(failure_message) from e

        if not isinstance(data, dict):
            await log_error(f"Geoapify {operation}: неожиданный формат ответа")
            raise UpstreamError(failure_message)

        await log_debug(f"Geoapify {operation}: HTTP {response.status_code}")
        return data

    async def route_matrix(
        self,
        sources: list[GeoPoint],
        targets: list[GeoPoint],
        mode: VehicleProfile,
    ) -> dict[str, Any]:
        """
        Матрица времени и расстояния от каждого source до каждого target.

        Returns:
            JSON ответа; sources_to_targets[source][target] = {time, distance, ...}
        """
        api_key = self._require_api_key()
        body = {
            "mode": mode.value,
            "sources": [{"location": point.as_lon_lat()} for point in sources],
            "targets": [{"location": point.as_lon_lat()} for point in targets],
        }
        return await self._send(
            "Matrix",
            "POST",
            "/routematrix",
            params={"apiKey": api_key},
            json_body=body,
            failure_message="Failed to fetch route matrix",
        )

    async def route(
        self,
        waypoints: list[GeoPoint],
        mode: VehicleProfile,
    ) -> dict[str, Any]:
        """
        Маршрут через точки waypoints.

        Returns:
            GeoJSON FeatureCollection; расстояние в features[0].properties.distance (м)
        """
        api_key = self._require_api_key()
        return await self._send(
            "Routing",
            "GET",
            "/routing",
            params={
                "waypoints": "|".join(point.as_lat_lon_str() for point in waypoints),
                "mode": mode.value,
                "apiKey": api_key,
            },
            failure_message="Failed to fetch trip route",
        )
