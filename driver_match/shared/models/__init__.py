# driver_match/shared/models/__init__.py
"""
Общие DTO и Pydantic-модели.
"""

from driver_match.shared.models.common import ErrorResponse, HealthStatus
from driver_match.shared.models.dispatch_dto import DriverOfferDTO, NearestDriversResponse

__all__ = [
    "ErrorResponse",
    "HealthStatus",
    "DriverOfferDTO",
    "NearestDriversResponse",
]
