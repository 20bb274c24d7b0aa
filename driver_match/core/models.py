# driver_match/core/models.py
"""
Доменные модели подбора водителей.
Все объекты живут в пределах одного запроса и неизменяемы.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


@dataclass(frozen=True)
class GeoPoint:
    """Точка на карте."""
    latitude: float
    longitude: float

    def as_lon_lat(self) -> list[float]:
        """Координаты в порядке [lon, lat] (формат Geoapify)."""
        return [self.longitude, self.latitude]

    def as_lat_lon_str(self) -> str:
        """Координаты строкой 'lat,lon' для параметра waypoints."""
        return f"{self.latitude},{self.longitude}"


@dataclass(frozen=True)
class PickupRequest:
    """Заявка на подачу: точка посадки и точка высадки."""
    pickup: GeoPoint
    dropoff: GeoPoint


@dataclass(frozen=True)
class RiderContext:
    """Контекст пассажира, влияющий на цену."""
    is_discount_eligible: bool = False


@dataclass(frozen=True)
class Candidate:
    """Автомобиль, найденный рядом с точкой подачи."""
    vehicle_id: str
    external_reference_id: Optional[str]
    location: GeoPoint


@dataclass(frozen=True)
class ProximityResult:
    """
    Время и расстояние от кандидата до точки подачи.
    None означает «неизвестно», а не ноль.
    """
    candidate: Candidate
    eta_seconds: Optional[float] = None
    distance_meters: Optional[float] = None


@dataclass(frozen=True)
class TripDistance:
    """Дорожное расстояние поездки."""
    meters: float

    @property
    def kilometers(self) -> Decimal:
        return Decimal(str(self.meters)) / Decimal(1000)


@dataclass(frozen=True)
class Fare:
    """Стоимость поездки (без округления)."""
    amount: Decimal
    currency: str = "PHP"

    def rounded(self) -> Decimal:
        """Сумма, округлённая до копеек (half-up)."""
        return self.amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class RankedCandidate:
    """Кандидат в итоговой выдаче."""
    vehicle_id: str
    external_reference_id: Optional[str]
    eta_seconds: Optional[float]
    distance_meters: Optional[float]
    fare: Fare
    trip_distance_meters: float
