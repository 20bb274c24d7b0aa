# driver_match/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class Environment(str, Enum):
    """Окружение запуска."""
    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class VehicleProfile(str, Enum):
    """Профиль транспорта для маршрутизации (параметр mode в Geoapify)."""
    MOTORCYCLE = "motorcycle"
    DRIVE = "drive"
    SCOOTER = "scooter"
    BICYCLE = "bicycle"


class LogFormat(str, Enum):
    """Формат вывода логов."""
    JSON = "json"
    COLORED = "colored"


# Поля тела запроса с координатами
PICKUP_LAT = "pickup_lat"
PICKUP_LNG = "pickup_lng"
DROPOFF_LAT = "dropoff_lat"
DROPOFF_LNG = "dropoff_lng"

COORDINATE_FIELDS: tuple[str, ...] = (PICKUP_LAT, PICKUP_LNG, DROPOFF_LAT, DROPOFF_LNG)

# Заголовки, разрешённые для CORS (клиенты передают токен и apikey)
CORS_ALLOWED_HEADERS: list[str] = [
    "authorization",
    "x-client-info",
    "apikey",
    "content-type",
]

REQUEST_ID_HEADER = "X-Request-ID"
