# driver_match/core/routing/__init__.py
"""
Маршрутизация.
Клиент Geoapify и оценка времени подачи и расстояния поездки.
"""

from driver_match.core.routing.client import GeoapifyClient
from driver_match.core.routing.service import ProximityEstimator, TripDistanceEstimator

__all__ = [
    "GeoapifyClient",
    "ProximityEstimator",
    "TripDistanceEstimator",
]
