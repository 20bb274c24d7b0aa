# driver_match/core/riders/service.py
"""
Определение контекста пассажира (право на скидку).
"""

from __future__ import annotations

from typing import Optional

from driver_match.common.logger import log_debug
from driver_match.core.errors import Unauthorized
from driver_match.core.models import RiderContext
from driver_match.core.riders.repository import ProfileRepository, SessionRepository


BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Извлекает токен из заголовка 'Authorization: Bearer <token>'."""
    if not authorization:
        return None
    if not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class RiderContextResolver:
    """
    Определяет пассажира по сессии и читает его флаг скидки.

    Отсутствие профиля или поля трактуется как отсутствие скидки,
    но никогда наоборот.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        profiles: ProfileRepository,
    ) -> None:
        self._sessions = sessions
        self._profiles = profiles

    async def resolve(self, authorization: Optional[str]) -> RiderContext:
        """
        Args:
            authorization: Значение заголовка Authorization

        Returns:
            RiderContext

        Raises:
            Unauthorized: Нет токена или сессии
            UpstreamError: Хранилище недоступно
        """
        token = extract_bearer_token(authorization)
        if token is None:
            raise Unauthorized()

        user_id = await self._sessions.get_user_id(token)
        if user_id is None:
            raise Unauthorized()

        flag = await self._profiles.get_discount_flag(user_id)
        context = RiderContext(is_discount_eligible=flag is True)

        await log_debug(f"Контекст пассажира определён, скидка: {context.is_discount_eligible}")
        return context
