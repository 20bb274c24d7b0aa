# driver_match/core/dispatch/service.py
"""
Подбор ближайших водителей для заявки на подачу.

Порядок:
1. Проверка координат
2. Контекст пассажира и поиск кандидатов (параллельно)
3. Время подачи каждого кандидата (матрица маршрутов)
4. Расстояние поездки
5. Стоимость поездки
6. Ранжирование и отсечение

Любая ошибка прерывает обработку заявки, повторов нет.
Пустой список кандидатов означает успешный ранний выход без обращений к маршрутизации.
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Optional

from driver_match.common.constants import TypeMsg
from driver_match.common.logger import log_info
from driver_match.core.candidates.service import CandidateLocator
from driver_match.core.models import Candidate, GeoPoint, RankedCandidate, RiderContext
from driver_match.core.pricing.service import FareCalculator
from driver_match.core.ranking.service import Ranker
from driver_match.core.riders.service import RiderContextResolver
from driver_match.core.routing.service import ProximityEstimator, TripDistanceEstimator
from driver_match.core.validation import parse_pickup_request


class NearestDriversService:
    """Сервис подбора и тарификации ближайших водителей."""

    def __init__(
        self,
        riders: RiderContextResolver,
        locator: CandidateLocator,
        proximity: ProximityEstimator,
        trip_distance: TripDistanceEstimator,
        fares: FareCalculator,
        ranker: Ranker,
        reject_zero_coordinates: bool = True,
    ) -> None:
        self._riders = riders
        self._locator = locator
        self._proximity = proximity
        self._trip_distance = trip_distance
        self._fares = fares
        self._ranker = ranker
        self._reject_zero_coordinates = reject_zero_coordinates

    async def find_nearest_drivers(
        self,
        payload: Mapping[str, Any] | None,
        authorization: Optional[str],
    ) -> list[RankedCandidate]:
        """
        Args:
            payload: Тело запроса с pickup_lat/pickup_lng/dropoff_lat/dropoff_lng
            authorization: Заголовок Authorization

        Returns:
            До limit кандидатов, отсортированных по времени подачи

        Raises:
            DispatchError: Любая ошибка этапов (InvalidRequest, Unauthorized,
                UpstreamError, UnresolvableRoute, ConfigurationError)
        """
        request = await parse_pickup_request(payload, reject_zero=self._reject_zero_coordinates)

        rider, candidates = await self._resolve_rider_and_candidates(authorization, request.pickup)
        if not candidates:
            await log_info("Рядом с точкой подачи нет автомобилей", type_msg=TypeMsg.DEBUG)
            return []

        proximity = await self._proximity.estimate(candidates, request.pickup)
        trip = await self._trip_distance.estimate(request.pickup, request.dropoff)
        fare = self._fares.calculate(trip, rider.is_discount_eligible)
        ranked = self._ranker.rank(proximity, fare, trip)

        await log_info(
            f"Подобрано {len(ranked)} из {len(candidates)} кандидатов, "
            f"поездка {trip.meters:.0f} м, цена {fare.rounded()} {fare.currency}",
            type_msg=TypeMsg.INFO,
        )
        return ranked

    async def _resolve_rider_and_candidates(
        self,
        authorization: Optional[str],
        pickup: GeoPoint,
    ) -> tuple[RiderContext, list[Candidate]]:
        """
        Параллельно определяет пассажира и ищет кандидатов.
        Ошибка пассажира (в т.ч. Unauthorized) всегда приоритетнее ошибки поиска.
        """
        rider_result, candidates_result = await asyncio.gather(
            self._riders.resolve(authorization),
            self._locator.locate(pickup),
            return_exceptions=True,
        )

        if isinstance(rider_result, BaseException):
            raise rider_result
        if isinstance(candidates_result, BaseException):
            raise candidates_result

        return rider_result, candidates_result
