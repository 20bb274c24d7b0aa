# driver_match/core/__init__.py
"""
Доменный слой (Core Domain).
Правила подбора, тарификации и ранжирования водителей.
"""

from driver_match.core.dispatch import NearestDriversService
from driver_match.core.pricing import FareCalculator
from driver_match.core.ranking import Ranker

__all__ = [
    "NearestDriversService",
    "FareCalculator",
    "Ranker",
]
