# driver_match/core/pricing/__init__.py
"""
Тарификация поездки.
"""

from driver_match.core.pricing.service import FareCalculator

__all__ = [
    "FareCalculator",
]
