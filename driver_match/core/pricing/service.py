# driver_match/core/pricing/service.py
"""
Расчёт стоимости поездки.

Логика:
- Базовая стоимость BASE_FARE покрывает первые INCLUDED_KM км включительно
- Каждый следующий км: FARE_PER_KM
- Льготный тариф: скидка DISCOUNT_FRACTION от итоговой суммы

Вычисления в Decimal без промежуточного округления;
округление до копеек только при выдаче ответа.
"""

from __future__ import annotations

from decimal import Decimal

from driver_match.core.models import Fare, TripDistance


def _to_decimal(value: float | int | str | Decimal) -> Decimal:
    # str() убирает двоичный хвост float (0.2 -> Decimal("0.2"))
    return value if isinstance(value, Decimal) else Decimal(str(value))


class FareCalculator:
    """Чистый расчёт тарифа, без I/O."""

    def __init__(
        self,
        base_fare: float | Decimal = 35.0,
        included_km: float | Decimal = 1.0,
        fare_per_km: float | Decimal = 15.0,
        discount_fraction: float | Decimal = 0.20,
        currency: str = "PHP",
    ) -> None:
        self._base_fare = _to_decimal(base_fare)
        self._included_km = _to_decimal(included_km)
        self._fare_per_km = _to_decimal(fare_per_km)
        self._discount_multiplier = Decimal(1) - _to_decimal(discount_fraction)
        self._currency = currency

    @classmethod
    def from_settings(cls) -> "FareCalculator":
        """Создаёт калькулятор с тарифом из конфига."""
        from driver_match.config import settings

        fares = settings.fares
        return cls(
            base_fare=fares.BASE_FARE,
            included_km=fares.INCLUDED_KM,
            fare_per_km=fares.FARE_PER_KM,
            discount_fraction=fares.DISCOUNT_FRACTION,
            currency=fares.CURRENCY,
        )

    def calculate(self, trip: TripDistance, is_discount_eligible: bool) -> Fare:
        """
        Args:
            trip: Дорожное расстояние поездки
            is_discount_eligible: Право пассажира на скидку

        Returns:
            Fare (неокруглённая сумма)
        """
        billable_extra_km = max(Decimal(0), trip.kilometers - self._included_km)
        amount = self._base_fare + billable_extra_km * self._fare_per_km

        if is_discount_eligible:
            amount *= self._discount_multiplier

        return Fare(amount=amount, currency=self._currency)
