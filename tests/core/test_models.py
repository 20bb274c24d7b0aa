# tests/core/test_models.py
"""
Тесты для доменных моделей и ошибок.
"""

from __future__ import annotations

import dataclasses
from decimal import Decimal

import pytest

from driver_match.core.errors import (
    ConfigurationError,
    DispatchError,
    InvalidRequest,
    Unauthorized,
    UnresolvableRoute,
    UpstreamError,
)
from driver_match.core.models import GeoPoint, TripDistance


class TestGeoPoint:
    """Тесты для dataclass GeoPoint."""

    def test_lon_lat_order(self) -> None:
        """Формат [lon, lat] для матрицы маршрутов."""
        assert GeoPoint(14.6, 120.98).as_lon_lat() == [120.98, 14.6]

    def test_lat_lon_string(self) -> None:
        """Формат 'lat,lon' для waypoints."""
        assert GeoPoint(14.6, 120.98).as_lat_lon_str() == "14.6,120.98"

    def test_frozen(self) -> None:
        """Модель неизменяема."""
        point = GeoPoint(1.0, 2.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            point.latitude = 3.0  # type: ignore[misc]


class TestTripDistance:
    """Тесты для dataclass TripDistance."""

    def test_kilometers(self) -> None:
        """Перевод в километры без потери точности."""
        assert TripDistance(2500).kilometers == Decimal("2.5")
        assert TripDistance(1234.5).kilometers == Decimal("1.2345")


class TestErrors:
    """Тесты для иерархии ошибок."""

    @pytest.mark.parametrize(
        ("error_cls", "status", "message"),
        [
            (InvalidRequest, 400, "Missing coordinates"),
            (Unauthorized, 401, "Unauthorized"),
            (UpstreamError, 502, "Upstream service failed"),
            (UnresolvableRoute, 400, "Could not calculate trip distance"),
            (ConfigurationError, 500, "Service misconfigured"),
        ],
    )
    def test_defaults(self, error_cls: type[DispatchError], status: int, message: str) -> None:
        """Статус и сообщение по умолчанию."""
        error = error_cls()

        assert isinstance(error, DispatchError)
        assert error.status_code == status
        assert error.message == message
        assert str(error) == message

    def test_custom_message(self) -> None:
        """Сообщение можно переопределить."""
        assert UpstreamError("Failed to fetch trip route").message == "Failed to fetch trip route"
