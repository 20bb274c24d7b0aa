# driver_match/services/nearest_drivers/dependencies.py
"""
Зависимости для Nearest Drivers Service.
Инициализация и управление ресурсами.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from driver_match.infra.database import DatabaseManager
from driver_match.infra.redis_client import RedisClient

if TYPE_CHECKING:
    from driver_match.core.dispatch.service import NearestDriversService
    from driver_match.core.routing.client import GeoapifyClient


# Глобальные экземпляры ресурсов
_db: Optional[DatabaseManager] = None
_redis: Optional[RedisClient] = None
_geoapify: Optional["GeoapifyClient"] = None

# Сервисы
_nearest_drivers_service: Optional["NearestDriversService"] = None


def build_nearest_drivers_service(
    db: DatabaseManager,
    redis: RedisClient,
    geoapify: "GeoapifyClient",
) -> "NearestDriversService":
    """Собирает конвейер подбора из ресурсов и настроек."""
    from driver_match.config import settings
    from driver_match.core.candidates.service import CandidateLocator
    from driver_match.core.dispatch.service import NearestDriversService
    from driver_match.core.pricing.service import FareCalculator
    from driver_match.core.ranking.service import Ranker
    from driver_match.core.riders.repository import ProfileRepository, SessionRepository
    from driver_match.core.riders.service import RiderContextResolver
    from driver_match.core.routing.service import ProximityEstimator, TripDistanceEstimator

    profile = settings.routing.VEHICLE_PROFILE

    return NearestDriversService(
        riders=RiderContextResolver(
            sessions=SessionRepository(redis),
            profiles=ProfileRepository(db),
        ),
        locator=CandidateLocator(db),
        proximity=ProximityEstimator(geoapify, profile),
        trip_distance=TripDistanceEstimator(geoapify, profile),
        fares=FareCalculator.from_settings(),
        ranker=Ranker(limit=settings.matching.MAX_RESULTS),
        reject_zero_coordinates=settings.matching.REJECT_ZERO_COORDINATES,
    )


async def init_dependencies() -> None:
    """Инициализация всех зависимостей сервиса."""
    global _db, _redis, _geoapify, _nearest_drivers_service

    from driver_match.common.constants import TypeMsg
    from driver_match.common.logger import log_info, log_warning
    from driver_match.config import settings
    from driver_match.core.routing.client import GeoapifyClient

    _db = DatabaseManager()
    await _db.connect()
    await log_info("PostgreSQL подключён", type_msg=TypeMsg.DEBUG)

    _redis = RedisClient()
    await _redis.connect()
    await log_info("Redis подключён", type_msg=TypeMsg.DEBUG)

    _geoapify = GeoapifyClient()
    if not settings.routing.GEOAPIFY_API_KEY:
        await log_warning("GEOAPIFY_API_KEY не задан: заявки с кандидатами будут отклоняться")

    _nearest_drivers_service = build_nearest_drivers_service(_db, _redis, _geoapify)

    await log_info("Nearest Drivers Service инициализирован", type_msg=TypeMsg.INFO)


async def close_dependencies() -> None:
    """Закрытие всех ресурсов."""
    global _db, _redis, _geoapify, _nearest_drivers_service

    from driver_match.common.constants import TypeMsg
    from driver_match.common.logger import log_info

    _nearest_drivers_service = None

    if _geoapify:
        await _geoapify.close()
        _geoapify = None
        await log_info("HTTP клиент Geoapify закрыт", type_msg=TypeMsg.DEBUG)

    if _redis:
        await _redis.disconnect()
        _redis = None

    if _db:
        await _db.disconnect()
        _db = None


async def get_db() -> DatabaseManager:
    """Получение экземпляра DatabaseManager."""
    if _db is None:
        raise RuntimeError("DatabaseManager не инициализирован")
    return _db


async def get_redis() -> RedisClient:
    """Получение экземпляра RedisClient."""
    if _redis is None:
        raise RuntimeError("RedisClient не инициализирован")
    return _redis


async def get_nearest_drivers_service() -> "NearestDriversService":
    """Получение экземпляра NearestDriversService."""
    if _nearest_drivers_service is None:
        raise RuntimeError("NearestDriversService не инициализирован")
    return _nearest_drivers_service
