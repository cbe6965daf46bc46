"""
Unit Tests for Duration Conversion

Caller units to the ledger's base unit (seconds) and back.
"""

import pytest
from decimal import Decimal

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from microservices.crowdfund_service.durations import to_base_units, from_base_units, SECONDS_PER_UNIT
from microservices.crowdfund_service.models import DurationUnit


class TestToBaseUnits:
    """Tests for to_base_units"""

    @pytest.mark.parametrize("unit,expected", [
        (DurationUnit.SECONDS, 1),
        (DurationUnit.MINUTES, 60),
        (DurationUnit.HOURS, 3_600),
        (DurationUnit.DAYS, 86_400),
        (DurationUnit.WEEKS, 604_800),
    ])
    def test_one_of_each_unit(self, unit, expected):
        assert to_base_units(1, unit) == expected

    def test_default_unit_is_days(self):
        assert to_base_units(30) == 30 * 86_400

    def test_accepts_unit_value_string(self):
        assert to_base_units(2, "hours") == 7_200

    def test_fractional_value_truncates(self):
        assert to_base_units(Decimal("1.5"), DurationUnit.MINUTES) == 90
        assert to_base_units("0.00001", DurationUnit.DAYS) == 0

    def test_zero_and_negative_pass_through(self):
        """Validation belongs to the ledger, conversion only scales"""
        assert to_base_units(0) == 0
        assert to_base_units(-1, DurationUnit.SECONDS) == -1

    def test_unknown_unit_rejected(self):
        with pytest.raises(ValueError):
            to_base_units(1, "fortnights")


class TestFromBaseUnits:
    """Tests for from_base_units"""

    def test_whole_days(self):
        assert from_base_units(3 * 86_400, DurationUnit.DAYS) == 3

    def test_partial_unit_truncates(self):
        assert from_base_units(86_399, DurationUnit.DAYS) == 0
        assert from_base_units(119, DurationUnit.MINUTES) == 1

    def test_every_unit_factor_is_whole_seconds(self):
        for unit, factor in SECONDS_PER_UNIT.items():
            assert from_base_units(to_base_units(7, unit), unit) == 7
            assert isinstance(factor, int)
