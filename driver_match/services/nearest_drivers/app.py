# driver_match/services/nearest_drivers/app.py
"""
FastAPI приложение для Nearest Drivers Service.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from driver_match.common.constants import CORS_ALLOWED_HEADERS, REQUEST_ID_HEADER, TypeMsg
from driver_match.common.logger import log_error, log_info, setup_logging
from driver_match.common.request_context import RequestIDMiddleware
from driver_match.config import settings
from driver_match.core.dispatch.service import NearestDriversService
from driver_match.core.errors import DispatchError, InvalidRequest
from driver_match.services.nearest_drivers.dependencies import (
    get_db,
    get_nearest_drivers_service,
    get_redis,
)
from driver_match.shared.models.common import ErrorResponse, HealthStatus
from driver_match.shared.models.dispatch_dto import DriverOfferDTO, NearestDriversResponse


# =============================================================================
# LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Жизненный цикл приложения."""
    setup_logging()
    await log_info("Nearest Drivers Service запускается...", type_msg=TypeMsg.INFO)

    from driver_match.services.nearest_drivers.dependencies import (
        close_dependencies,
        init_dependencies,
    )
    await init_dependencies()

    yield

    await close_dependencies()
    await log_info("Nearest Drivers Service остановлен", type_msg=TypeMsg.INFO)


# =============================================================================
# MIDDLEWARE
# =============================================================================

async def catch_unexpected_errors(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """
    Непредвиденные ошибки: полный трейсбек в лог, клиенту общий ответ.
    Регистрируется внутри CORS и RequestIDMiddleware.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        await log_error(
            f"Необработанная ошибка {type(exc).__name__} на {request.url.path}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal server error").model_dump(),
        )


# =============================================================================
# ПРИЛОЖЕНИЕ
# =============================================================================

app = FastAPI(
    title="Nearest Drivers Service",
    description="Подбор ближайших водителей и расчёт стоимости поездки",
    version=settings.system.VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Порядок снаружи внутрь: RequestIDMiddleware -> CORS -> catch_unexpected_errors
app.add_middleware(BaseHTTPMiddleware, dispatch=catch_unexpected_errors)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=CORS_ALLOWED_HEADERS,
    expose_headers=[REQUEST_ID_HEADER],
)
app.add_middleware(RequestIDMiddleware)


# =============================================================================
# ОБРАБОТЧИКИ ОШИБОК
# =============================================================================

@app.exception_handler(DispatchError)
async def dispatch_error_handler(request: Request, exc: DispatchError) -> JSONResponse:
    """Ошибки конвейера подбора -> {"error": ...} с кодом ошибки."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Некорректное тело запроса приравнивается к отсутствию координат."""
    error = InvalidRequest()
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(error=error.message).model_dump(),
    )


# =============================================================================
# HEALTH CHECK
# =============================================================================

@app.get("/health", response_model=HealthStatus, tags=["Health"])
async def health_check() -> HealthStatus:
    """Проверка здоровья сервиса."""
    deps = {}

    try:
        db = await get_db()
        deps["postgres"] = "healthy" if await db.health_check() else "unhealthy"
    except Exception:
        deps["postgres"] = "unhealthy"

    try:
        redis = await get_redis()
        await redis.ping()
        deps["redis"] = "healthy"
    except Exception:
        deps["redis"] = "unhealthy"

    overall = "healthy" if all(v == "healthy" for v in deps.values()) else "degraded"

    return HealthStatus(
        service="nearest_drivers_service",
        status=overall,
        version=settings.system.VERSION,
        dependencies=deps,
    )


# =============================================================================
# NEAREST DRIVERS API
# =============================================================================

@app.post(
    "/api/v1/drivers/nearest",
    response_model=NearestDriversResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    tags=["Drivers"],
)
async def find_nearest_drivers(
    request: Request,
    service: Annotated[NearestDriversService, Depends(get_nearest_drivers_service)],
    authorization: Annotated[Optional[str], Header()] = None,
) -> NearestDriversResponse:
    """
    Ближайшие водители к точке подачи со стоимостью поездки.

    Тело: {"pickup_lat", "pickup_lng", "dropoff_lat", "dropoff_lng"}.
    Пустой список, если рядом нет автомобилей.
    """
    try:
        payload = await request.json()
    except ValueError as e:
        raise InvalidRequest() from e

    ranked = await service.find_nearest_drivers(payload, authorization)
    return NearestDriversResponse(
        drivers=[DriverOfferDTO.from_ranked(candidate) for candidate in ranked],
    )
