# driver_match/core/ranking/service.py
"""
Ранжирование кандидатов по времени подачи.
"""

from __future__ import annotations

import math
from typing import Iterable

from driver_match.core.models import Fare, ProximityResult, RankedCandidate, TripDistance


def eta_sort_key(result: RankedCandidate) -> float:
    """Ключ сортировки: неизвестное время подачи считается бесконечным."""
    if result.eta_seconds is None:
        return math.inf
    return result.eta_seconds


class Ranker:
    """
    Сводит данные о близости с ценой поездки и отбирает лучших.

    Сортировка стабильная: кандидаты с одинаковым временем подачи
    (в том числе неизвестным) сохраняют исходный порядок.
    """

    def __init__(self, limit: int = 3) -> None:
        if limit < 1:
            raise ValueError("limit должен быть >= 1")
        self._limit = limit

    @property
    def limit(self) -> int:
        return self._limit

    def rank(
        self,
        proximity: Iterable[ProximityResult],
        fare: Fare,
        trip: TripDistance,
    ) -> list[RankedCandidate]:
        """
        Args:
            proximity: Результаты оценки близости по каждому кандидату
            fare: Стоимость поездки (одинакова для всех кандидатов)
            trip: Расстояние поездки

        Returns:
            Не более limit кандидатов по возрастанию времени подачи
        """
        merged = [
            RankedCandidate(
                vehicle_id=item.candidate.vehicle_id,
                external_reference_id=item.candidate.external_reference_id,
                eta_seconds=item.eta_seconds,
                distance_meters=item.distance_meters,
                fare=fare,
                trip_distance_meters=trip.meters,
            )
            for item in proximity
        ]
        merged.sort(key=eta_sort_key)
        return merged[:self._limit]
