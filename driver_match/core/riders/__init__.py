# driver_match/core/riders/__init__.py
"""
Домен пассажиров.
Сессии, профили и контекст для расчёта цены.
"""

from driver_match.core.riders.repository import ProfileRepository, SessionRepository
from driver_match.core.riders.service import RiderContextResolver, extract_bearer_token

__all__ = [
    "ProfileRepository",
    "SessionRepository",
    "RiderContextResolver",
    "extract_bearer_token",
]
