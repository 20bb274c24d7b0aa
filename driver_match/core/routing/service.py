# driver_match/core/routing/service.py
"""
Оценка времени подачи и расстояния поездки.
Ответы Geoapify разбираются здесь, дальше передаются только типизированные модели.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from driver_match.common.constants import TypeMsg, VehicleProfile
from driver_match.common.logger import log_info
from driver_match.core.errors import UnresolvableRoute
from driver_match.core.models import Candidate, GeoPoint, ProximityResult, TripDistance
from driver_match.core.routing.client import GeoapifyClient


def _as_number(value: Any) -> Optional[float]:
    """Число из JSON или None (bool, строки, NaN не принимаются)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _matrix_cell(data: dict[str, Any], source_index: int) -> dict[str, Any]:
    """Ячейка sources_to_targets[source_index][0] или пустой словарь."""
    rows = data.get("sources_to_targets")
    if not isinstance(rows, list) or source_index >= len(rows):
        return {}
    row = rows[source_index]
    if not isinstance(row, list) or not row:
        return {}
    cell = row[0]
    return cell if isinstance(cell, dict) else {}


class ProximityEstimator:
    """Время и расстояние от каждого кандидата до точки подачи."""

    def __init__(self, client: GeoapifyClient, profile: VehicleProfile) -> None:
        self._client = client
        self._profile = profile

    async def estimate(
        self,
        candidates: list[Candidate],
        pickup: GeoPoint,
    ) -> list[ProximityResult]:
        """
        Один запрос матрицы на всех кандидатов.

        Returns:
            ProximityResult на каждого кандидата в исходном порядке;
            поля None, если в матрице нет данных для кандидата

        Raises:
            UpstreamError: Ошибка провайдера
            ConfigurationError: Не задан API ключ
        """
        if not candidates:
            return []

        data = await self._client.route_matrix(
            sources=[candidate.location for candidate in candidates],
            targets=[pickup],
            mode=self._profile,
        )

        results = []
        unknown = 0
        for index, candidate in enumerate(candidates):
            cell = _matrix_cell(data, index)
            eta = _as_number(cell.get("time"))
            distance = _as_number(cell.get("distance"))
            if eta is None:
                unknown += 1
            results.append(ProximityResult(
                candidate=candidate,
                eta_seconds=eta,
                distance_meters=distance,
            ))

        if unknown:
            await log_info(
                f"Нет данных о времени подачи для {unknown} из {len(candidates)} кандидатов",
                type_msg=TypeMsg.DEBUG,
            )
        return results


class TripDistanceEstimator:
    """Дорожное расстояние от точки подачи до точки высадки."""

    def __init__(self, client: GeoapifyClient, profile: VehicleProfile) -> None:
        self._client = client
        self._profile = profile

    async def estimate(self, pickup: GeoPoint, dropoff: GeoPoint) -> TripDistance:
        """
        Returns:
            TripDistance

        Raises:
            UnresolvableRoute: В ответе нет маршрута или расстояния
            UpstreamError: Ошибка провайдера
            ConfigurationError: Не задан API ключ
        """
        data = await self._client.route(waypoints=[pickup, dropoff], mode=self._profile)

        features = data.get("features")
        feature = features[0] if isinstance(features, list) and features else None
        properties = feature.get("properties") if isinstance(feature, dict) else None
        meters = _as_number(properties.get("distance")) if isinstance(properties, dict) else None

        if meters is None or meters < 0:
            await log_info("Маршрут поездки не построен", type_msg=TypeMsg.WARNING)
            raise UnresolvableRoute()

        return TripDistance(meters=meters)
