# driver_match/core/riders/repository.py
"""
Репозитории данных пассажира: сессии (Redis) и профили (PostgreSQL).
Только чтение.
"""

from __future__ import annotations

from typing import Optional

import asyncpg
from redis.exceptions import RedisError

from driver_match.common.logger import log_error
from driver_match.core.errors import UpstreamError
from driver_match.infra.database import CONNECTION_ERRORS, DatabaseManager
from driver_match.infra.redis_client import RedisClient


class SessionRepository:
    """Хранилище сессий: токен доступа -> ID пользователя."""

    KEY_PREFIX = "session"

    def __init__(self, redis: RedisClient) -> None:
        self._redis = redis

    async def get_user_id(self, token: str) -> Optional[str]:
        """
        Возвращает ID пользователя по токену сессии.

        Returns:
            ID пользователя или None, если сессии нет

        Raises:
            UpstreamError: Redis недоступен
        """
        try:
            session = await self._redis.get_json(f"{self.KEY_PREFIX}:{token}")
        except (RedisError, OSError) as e:
            await log_error(f"Ошибка чтения сессии из Redis: {type(e).__name__}")
            raise UpstreamError("Failed to resolve session") from e

        if not isinstance(session, dict):
            return None

        user_id = session.get("user_id")
        if user_id in (None, ""):
            return None
        return str(user_id)


class ProfileRepository:
    """Профили пассажиров."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def get_discount_flag(self, user_id: str) -> Optional[bool]:
        """
        Возвращает признак льготного тарифа (студент).

        Returns:
            Значение флага или None, если профиля или поля нет

        Raises:
            UpstreamError: Ошибка БД
        """
        try:
            row = await self._db.fetchrow(
                """
                SELECT is_student
                FROM profiles
                WHERE id = $1
                """,
                user_id,
            )
        except (asyncpg.PostgresError, *CONNECTION_ERRORS) as e:
            await log_error(f"Ошибка получения профиля пассажира: {type(e).__name__}")
            raise UpstreamError("Failed to load rider profile") from e

        if row is None:
            return None
        return row["is_student"]
