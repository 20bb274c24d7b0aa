# driver_match/core/candidates/__init__.py
"""
Поиск кандидатов рядом с точкой подачи.
"""

from driver_match.core.candidates.service import CandidateLocator

__all__ = [
    "CandidateLocator",
]
