# driver_match/common/__init__.py
"""
Общие утилиты, константы и логгер.
"""

from driver_match.common.logger import get_logger, log_info, log_error, log_warning, log_debug
from driver_match.common.constants import TypeMsg

__all__ = [
    "get_logger",
    "log_info",
    "log_error",
    "log_warning",
    "log_debug",
    "TypeMsg",
]
