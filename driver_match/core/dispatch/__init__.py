# driver_match/core/dispatch/__init__.py
"""
Подбор ближайших водителей: сборка этапов в один конвейер.
"""

from driver_match.core.dispatch.service import NearestDriversService

__all__ = [
    "NearestDriversService",
]
