# driver_match/infra/redis_client.py
"""
Клиент Redis.
Используется как хранилище сессий: токен -> идентификатор пользователя.
"""

from __future__ import annotations

import json
from typing import Any

import redis.asyncio as redis

from driver_match.common.constants import TypeMsg
from driver_match.common.logger import log_error, log_info


class RedisClient:
    """Асинхронный клиент Redis с пространством имён ключей."""

    def __init__(self, namespace: str = "driver_match") -> None:
        self._client: redis.Redis | None = None
        self._namespace = namespace

    @property
    def client(self) -> redis.Redis:
        """Возвращает клиент Redis."""
        if self._client is None:
            raise RuntimeError("Redis клиент не инициализирован. Вызовите connect() сначала.")
        return self._client

    def _make_key(self, key: str) -> str:
        """Добавляет namespace к ключу."""
        return f"{self._namespace}:{key}"

    async def connect(
        self,
        url: str | None = None,
        max_connections: int = 50,
    ) -> None:
        """
        Подключается к Redis.

        Args:
            url: URL Redis (если None, берётся из конфига)
            max_connections: Максимальное количество соединений
        """
        if self._client is not None:
            return

        if url is None:
            from driver_match.config import settings
            url = settings.redis.url
            max_connections = settings.redis.REDIS_MAX_CONNECTIONS
            self._namespace = settings.redis.REDIS_NAMESPACE

        await log_info("Подключение к Redis...", type_msg=TypeMsg.INFO)

        client = redis.from_url(
            url,
            max_connections=max_connections,
            decode_responses=True,
        )
        try:
            await client.ping()
        except Exception:
            await client.aclose()
            raise

        self._client = client
        await log_info("Подключение к Redis установлено", type_msg=TypeMsg.INFO)

    async def disconnect(self) -> None:
        """Закрывает соединение с Redis."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            await log_info("Соединение с Redis закрыто", type_msg=TypeMsg.INFO)

    async def ping(self) -> bool:
        return await self.client.ping()

    async def get(self, key: str) -> str | None:
        """Получает значение по ключу."""
        return await self.client.get(self._make_key(key))

    async def get_json(self, key: str) -> Any:
        """
        Получает и парсит JSON.

        Returns:
            Распарсенное значение или None, если ключа нет или JSON битый
        """
        data = await self.get(key)
        if data is None:
            return None

        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            await log_error(f"Некорректный JSON в ключе {key.split(':', 1)[0]}: {e}")
            return None
