# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("DB_PASSWORD", "test_password")
os.environ.setdefault("REDIS_PASSWORD", "")
os.environ.setdefault("GEOAPIFY_API_KEY", "test_api_key")

from driver_match.core.models import Candidate, GeoPoint  # noqa: E402


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Путь к файлу конфигурации."""
    return project_root / "config" / "config.json"


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Мок конфигурации для тестов."""
    return {
        "PROJECT_NAME": "driver_match_test",
        "VERSION": "1.0.0-test",
        "DEBUG": True,
        "ENVIRONMENT": "test",
        "NEAREST_DRIVERS_HOST": "127.0.0.1",
        "NEAREST_DRIVERS_PORT": 9092,
        "LOG_LEVEL": "DEBUG",
        "LOG_FORMAT": "colored",
        "LOG_TO_FILE": False,
        "LOG_FILE_PATH": "logs/test.log",
        "DB_HOST": "localhost",
        "DB_PORT": 5432,
        "DB_NAME": "driver_match_test",
        "DB_USER": "postgres",
        "DB_MIN_POOL_SIZE": 1,
        "DB_MAX_POOL_SIZE": 2,
        "DB_CONNECT_ATTEMPTS": 2,
        "DB_CONNECT_DELAY": 0.1,
        "REDIS_HOST": "localhost",
        "REDIS_PORT": 6379,
        "REDIS_DB": 1,
        "REDIS_NAMESPACE": "driver_match_test",
        "GEOAPIFY_BASE_URL": "https://geo.test/v1",
        "VEHICLE_PROFILE": "drive",
        "ROUTING_REQUEST_TIMEOUT": 3.5,
        "BASE_FARE": 40.0,
        "INCLUDED_KM": 2.0,
        "FARE_PER_KM": 10.0,
        "DISCOUNT_FRACTION": 0.1,
        "CURRENCY": "PHP",
        "MAX_RESULTS": 5,
        "REJECT_ZERO_COORDINATES": False,
    }


# =============================================================================
# ФИКСТУРЫ ИНФРАСТРУКТУРЫ (МОКИ)
# =============================================================================

@pytest.fixture
def mock_db() -> AsyncMock:
    """Мок менеджера базы данных."""
    db = AsyncMock()
    db.fetchrow = AsyncMock(return_value=None)
    db.fetch = AsyncMock(return_value=[])
    db.fetchval = AsyncMock(return_value=None)
    return db


@pytest.fixture
def mock_redis() -> AsyncMock:
    """Мок клиента Redis."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.get_json = AsyncMock(return_value=None)
    redis.ping = AsyncMock(return_value=True)
    return redis


# =============================================================================
# ФИКСТУРЫ МОДЕЛЕЙ
# =============================================================================

@pytest.fixture
def pickup_point() -> GeoPoint:
    """Точка подачи."""
    return GeoPoint(latitude=14.5995, longitude=120.9842)


@pytest.fixture
def dropoff_point() -> GeoPoint:
    """Точка высадки."""
    return GeoPoint(latitude=14.6091, longitude=121.0223)


@pytest.fixture
def valid_payload() -> dict[str, Any]:
    """Корректное тело запроса."""
    return {
        "pickup_lat": 14.5995,
        "pickup_lng": 120.9842,
        "dropoff_lat": 14.6091,
        "dropoff_lng": 121.0223,
    }


@pytest.fixture
def sample_candidates() -> list[Candidate]:
    """Три автомобиля рядом с точкой подачи."""
    return [
        Candidate("v1", "uts-1", GeoPoint(14.6001, 120.9850)),
        Candidate("v2", None, GeoPoint(14.5980, 120.9830)),
        Candidate("v3", "uts-3", GeoPoint(14.6010, 120.9870)),
    ]


# =============================================================================
# УТИЛИТЫ
# =============================================================================

@pytest.fixture
def temp_config_file(tmp_path: Path, mock_config: dict[str, Any]) -> Path:
    """Создаёт временный файл конфигурации."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(mock_config, ensure_ascii=False, indent=2))
    return config_file
