# driver_match/core/errors.py
"""
Ошибки подбора водителей.

Каждая ошибка несёт HTTP-статус и безопасное для клиента сообщение.
Детали (тела ответов провайдеров, идентификаторы пользователей) в сообщение
не попадают, они только логируются на стороне сервера.
"""

from __future__ import annotations


class DispatchError(Exception):
    """Базовая ошибка обработки заявки."""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(DispatchError):
    """Во входных данных отсутствуют или некорректны координаты."""

    status_code = 400
    default_message = "Missing coordinates"


class Unauthorized(DispatchError):
    """Не удалось определить пользователя по сессии."""

    status_code = 401
    default_message = "Unauthorized"


class UpstreamError(DispatchError):
    """Внешний сервис (БД, Redis, маршрутизация) вернул ошибку."""

    status_code = 502
    default_message = "Upstream service failed"


class UnresolvableRoute(DispatchError):
    """Провайдер маршрутизации не вернул расстояние поездки."""

    status_code = 400
    default_message = "Could not calculate trip distance"


class ConfigurationError(DispatchError):
    """Не задан обязательный секрет или ключ."""

    status_code = 500
    default_message = "Service misconfigured"
