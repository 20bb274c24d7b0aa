# driver_match/infra/__init__.py
"""
Инфраструктурный слой.
Работа с внешними хранилищами: PostgreSQL, Redis.
"""

from driver_match.infra.database import DatabaseManager
from driver_match.infra.redis_client import RedisClient

__all__ = [
    "DatabaseManager",
    "RedisClient",
]
