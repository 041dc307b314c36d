import math
import random
from decimal import Decimal, localcontext
from typing import Callable

from config.constants import SWAP_FRACTION_MIN, SWAP_FRACTION_MAX


class Randomizer:
    """Утилиты для генерации случайных значений"""

    @staticmethod
    def get_random_fraction(min_fraction: float, max_fraction: float) -> float:
        """Случайная доля в полуинтервале [min, max)"""
        value = min_fraction + random.random() * (max_fraction - min_fraction)
        # Округление float может дать ровно max
        return min(value, math.nextafter(max_fraction, min_fraction))

    @staticmethod
    def get_swap_fraction() -> float:
        """Доля баланса для свопа: [0.05, 0.10)"""
        return Randomizer.get_random_fraction(SWAP_FRACTION_MIN, SWAP_FRACTION_MAX)

    @staticmethod
    def get_random_amount(balance: int, fraction_source: Callable[[], float] = None) -> int:
        """Получение случайной суммы на основе баланса (округление вниз)"""
        if balance <= 0:
            return 0

        fraction = (fraction_source or Randomizer.get_swap_fraction)()

        # uint256 балансы не влезают в float без потерь
        with localcontext() as ctx:
            ctx.prec = 100
            return int(Decimal(balance) * Decimal(fraction))
