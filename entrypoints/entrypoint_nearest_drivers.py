#!/usr/bin/env python3
# entrypoints/entrypoint_nearest_drivers.py
"""
Точка входа для Nearest Drivers Service.
Порт: 8092
"""

import asyncio
import sys
from pathlib import Path

# Добавляем корневую директорию проекта в путь
project_root = Path(__file__).parent.parent.resolve()
sys.path.insert(0, str(project_root))

import uvicorn

from driver_match.config import settings
from driver_match.common.logger import log_info
from driver_match.common.constants import TypeMsg


async def main() -> None:
    """Запуск Nearest Drivers Service."""
    await log_info(
        f"Запуск Nearest Drivers Service на порту {settings.deployment.NEAREST_DRIVERS_PORT}",
        type_msg=TypeMsg.INFO,
    )

    config = uvicorn.Config(
        "driver_match.services.nearest_drivers.app:app",
        host=settings.deployment.NEAREST_DRIVERS_HOST,
        port=settings.deployment.NEAREST_DRIVERS_PORT,
        reload=settings.system.DEBUG,
        log_level="debug" if settings.system.DEBUG else "info",
    )

    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())
