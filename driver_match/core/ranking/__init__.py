# driver_match/core/ranking/__init__.py
"""
Ранжирование кандидатов.
"""

from driver_match.core.ranking.service import Ranker, eta_sort_key

__all__ = [
    "Ranker",
    "eta_sort_key",
]
