# driver_match/core/validation.py
"""
Проверка входных данных заявки на подачу.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from driver_match.common.constants import (
    COORDINATE_FIELDS,
    DROPOFF_LAT,
    DROPOFF_LNG,
    PICKUP_LAT,
    PICKUP_LNG,
)
from driver_match.common.logger import log_warning
from driver_match.core.errors import InvalidRequest
from driver_match.core.models import GeoPoint, PickupRequest


def _is_number(value: Any) -> bool:
    # bool является подклассом int
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        # целое, не помещающееся в float
        return False


async def parse_pickup_request(
    payload: Mapping[str, Any] | None,
    *,
    reject_zero: bool = True,
) -> PickupRequest:
    """
    Строит PickupRequest из тела запроса.

    Args:
        payload: Распарсенное JSON-тело запроса
        reject_zero: Считать нулевую координату отсутствующей
            (флаг REJECT_ZERO_COORDINATES в конфиге)

    Returns:
        PickupRequest

    Raises:
        InvalidRequest: Координата отсутствует, не число или равна нулю
            при reject_zero=True
    """
    if not isinstance(payload, Mapping):
        raise InvalidRequest()

    for field in COORDINATE_FIELDS:
        value = payload.get(field)
        if value is None or not _is_number(value):
            raise InvalidRequest()
        if reject_zero and value == 0:
            await log_warning(
                f"Заявка отклонена: нулевая координата в поле {field}",
                extra={"field": field},
            )
            raise InvalidRequest()

    return PickupRequest(
        pickup=GeoPoint(latitude=float(payload[PICKUP_LAT]), longitude=float(payload[PICKUP_LNG])),
        dropoff=GeoPoint(latitude=float(payload[DROPOFF_LAT]), longitude=float(payload[DROPOFF_LNG])),
    )
