"""
Duration conversion between caller units and the ledger's base unit (seconds).

Conversions truncate toward zero.
"""

from decimal import Decimal
from typing import Union

from .models import DurationUnit


SECONDS_PER_UNIT = {
    DurationUnit.SECONDS: 1,
    DurationUnit.MINUTES: 60,
    DurationUnit.HOURS: 60 * 60,
    DurationUnit.DAYS: 24 * 60 * 60,
    DurationUnit.WEEKS: 7 * 24 * 60 * 60,
}


def to_base_units(value: Union[int, Decimal, str], unit: Union[DurationUnit, str] = DurationUnit.DAYS) -> int:
    """
    Convert a duration expressed in ``unit`` to whole seconds

    Args:
        value: Duration in the caller's unit
        unit: Caller unit (enum member or its value)

    Returns:
        Duration in seconds, truncated toward zero
    """
    factor = SECONDS_PER_UNIT[DurationUnit(unit)]
    return int(Decimal(str(value)) * factor)


def from_base_units(seconds: int, unit: Union[DurationUnit, str] = DurationUnit.DAYS) -> int:
    """Convert whole seconds back to ``unit``, truncated toward zero"""
    factor = SECONDS_PER_UNIT[DurationUnit(unit)]
    return int(Decimal(seconds) / factor)
