# driver_match/core/candidates/service.py
"""
Поиск автомобилей рядом с точкой подачи.
Использует функцию PostGIS nearby_vehicles: радиус и лимит заданы в ней самой.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import asyncpg

from driver_match.common.constants import TypeMsg
from driver_match.common.logger import log_error, log_info, log_warning
from driver_match.core.errors import UpstreamError
from driver_match.core.models import Candidate, GeoPoint
from driver_match.infra.database import CONNECTION_ERRORS, DatabaseManager


def _row_to_candidate(row: Mapping[str, Any]) -> Optional[Candidate]:
    """Строит кандидата из строки nearby_vehicles (None, если нет координат)."""
    lat = row.get("lat")
    lng = row.get("long")
    if lat is None or lng is None or row.get("id") is None:
        return None

    uts_id = row.get("uts_id")
    return Candidate(
        vehicle_id=str(row["id"]),
        external_reference_id=str(uts_id) if uts_id is not None else None,
        location=GeoPoint(latitude=float(lat), longitude=float(lng)),
    )


class CandidateLocator:
    """Поиск кандидатов через геоиндекс в PostgreSQL."""

    QUERY = "SELECT id, uts_id, lat, long FROM nearby_vehicles($1, $2)"

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def locate(self, pickup: GeoPoint) -> list[Candidate]:
        """
        Ищет автомобили рядом с точкой подачи.

        Args:
            pickup: Точка подачи

        Returns:
            Список кандидатов (порядок не важен, может быть пустым)

        Raises:
            UpstreamError: Ошибка БД
        """
        try:
            rows = await self._db.fetch(self.QUERY, pickup.latitude, pickup.longitude)
        except (asyncpg.PostgresError, *CONNECTION_ERRORS) as e:
            await log_error(f"Ошибка поиска автомобилей рядом: {type(e).__name__}")
            raise UpstreamError("Failed to find nearby vehicles") from e

        candidates = []
        skipped = 0
        for row in rows:
            candidate = _row_to_candidate(dict(row))
            if candidate is None:
                skipped += 1
                continue
            candidates.append(candidate)

        if skipped:
            await log_warning(
                f"Пропущено {skipped} из {len(rows)} автомобилей без id или координат",
                extra={"skipped": skipped},
            )

        await log_info(
            f"Найдено {len(candidates)} автомобилей рядом с точкой подачи",
            type_msg=TypeMsg.DEBUG,
        )
        return candidates
