"""Small numeric helpers shared by the statistics service and reports."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from .. import models


def round_half_up(value: float, places: int = 2) -> float:
    """Round `value` to `places` decimals, halves away from zero.

    The float is converted through its shortest repr so that e.g. 2.675
    rounds to 2.68 instead of following its binary expansion.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def mean_classes(teachers: Iterable[models.Teacher]) -> Optional[float]:
    """Raw mean class load of `teachers`, or `None` for an empty input."""
    loads = [t.number_of_classes for t in teachers]
    if not loads:
        return None
    return sum(loads) / len(loads)
