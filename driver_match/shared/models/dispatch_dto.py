# driver_match/shared/models/dispatch_dto.py
"""
DTO ответа подбора ближайших водителей.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from driver_match.core.models import RankedCandidate


class DriverOfferDTO(BaseModel):
    """Кандидат в ответе API."""

    vehicle_id: str
    uts_id: Optional[str] = None
    eta_to_pickup_seconds: Optional[float] = None
    distance_to_pickup_meters: Optional[float] = None
    trip_fare: float = Field(..., description="Стоимость поездки, округлена до 2 знаков")
    trip_distance_meters: float

    @classmethod
    def from_ranked(cls, ranked: RankedCandidate) -> "DriverOfferDTO":
        """Строит DTO из доменной модели (округление цены здесь)."""
        return cls(
            vehicle_id=ranked.vehicle_id,
            uts_id=ranked.external_reference_id,
            eta_to_pickup_seconds=ranked.eta_seconds,
            distance_to_pickup_meters=ranked.distance_meters,
            trip_fare=float(ranked.fare.rounded()),
            trip_distance_meters=ranked.trip_distance_meters,
        )


class NearestDriversResponse(BaseModel):
    """Ответ подбора: список кандидатов (может быть пустым)."""

    drivers: list[DriverOfferDTO] = Field(default_factory=list)
