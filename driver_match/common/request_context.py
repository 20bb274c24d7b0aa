# driver_match/common/request_context.py
"""
Идентификатор текущего запроса.
Хранится в ContextVar, чтобы логи одного запроса можно было связать между собой.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from driver_match.common.constants import REQUEST_ID_HEADER


_request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")


def get_request_id() -> str:
    """Возвращает ID текущего запроса (пустая строка вне запроса)."""
    return _request_id_ctx.get()


def set_request_id(request_id: str) -> None:
    """Устанавливает ID запроса для текущего контекста."""
    _request_id_ctx.set(request_id)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware для сквозного ID запроса.
    Берёт ID из заголовка или генерирует новый и возвращает его в ответе.
    """

    def __init__(self, app, header_name: str = REQUEST_ID_HEADER) -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(self.header_name) or uuid.uuid4().hex
        token = _request_id_ctx.set(request_id)
        try:
            response: Response = await call_next(request)
        finally:
            _request_id_ctx.reset(token)
        response.headers.setdefault(self.header_name, request_id)
        return response
