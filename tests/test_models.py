"""Tests for tariff units, rate tables and rental windows."""

from datetime import date, time, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

import pydantic
import pytest

from fare_engine.core.exceptions import ValidationError
from fare_engine.models import AddonSelection, DurationUnit, RateTable, RentalWindow

IST = ZoneInfo("Asia/Kolkata")


@pytest.mark.unit
class TestDurationUnit:
    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("Hourly", DurationUnit.HOUR),
            ("Daily", DurationUnit.DAY),
            ("weekly", DurationUnit.WEEK),
            (" Monthly ", DurationUnit.MONTH),
            ("Quarterly", DurationUnit.QUARTER),
            ("Yearly", DurationUnit.YEAR),
            ("hour", DurationUnit.HOUR),
            ("quarter", DurationUnit.QUARTER),
        ],
    )
    def test_from_label(self, label, expected):
        assert DurationUnit.from_label(label) is expected

    def test_unknown_label_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            DurationUnit.from_label("Fortnightly")
        assert exc_info.value.details == {"tariff": "Fortnightly"}

    def test_block_lengths(self):
        assert DurationUnit.YEAR.block == timedelta(days=365)
        assert DurationUnit.QUARTER.block == timedelta(days=90)
        assert DurationUnit.MONTH.block == timedelta(days=30)
        assert DurationUnit.WEEK.block == timedelta(days=7)
        assert DurationUnit.DAY.hours == 24
        assert DurationUnit.HOUR.hours == 1

    def test_every_unit_maps_to_a_rate_field(self):
        assert set(unit.rate_field for unit in DurationUnit) <= set(RateTable.model_fields)


@pytest.mark.unit
class TestRateTable:
    def test_rate_for(self, rate_table):
        assert rate_table.rate_for(DurationUnit.HOUR) == Decimal("35")
        assert rate_table.rate_for(DurationUnit.MONTH) == Decimal("11000")

    def test_optional_tiers_default_to_none(self, rate_table):
        assert rate_table.rate_for(DurationUnit.QUARTER) is None
        assert rate_table.rate_for(DurationUnit.YEAR) is None

    def test_negative_rate_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            RateTable(hour=-1, day=550, week=3500, month=11000)

    def test_accepts_numbers_and_strings(self):
        table = RateTable(hour=35.5, day="550", week=3500, month=11000, yearly="120000.50")
        assert table.hour == Decimal("35.5")
        assert table.day == Decimal("550")
        assert table.yearly == Decimal("120000.50")


@pytest.mark.unit
class TestRentalWindow:
    def test_parses_form_strings(self):
        window = RentalWindow(
            pickup_date="2024-01-01", pickup_time="10:00", drop_date="2024-01-02", drop_time="09:30"
        )
        assert window.pickup_date == date(2024, 1, 1)
        assert window.drop_time == time(9, 30)
        assert window.is_complete()

    def test_blank_fields_are_missing(self):
        window = RentalWindow(pickup_date="2024-01-01", pickup_time="", drop_date=None)
        assert window.pickup_time is None
        assert not window.is_complete()
        assert window.instants(IST) is None
        assert window.elapsed(IST) is None

    def test_instants_are_zone_aware(self, one_day_window):
        start, end = one_day_window.instants(IST)
        assert start.tzinfo is IST
        assert start.utcoffset() == timedelta(hours=5, minutes=30)
        assert end - start == timedelta(days=1)

    def test_elapsed(self, one_day_window):
        assert one_day_window.elapsed(IST) == timedelta(hours=24)

    def test_non_positive_elapsed_is_none(self, one_day_window):
        same = one_day_window.model_copy(update={"drop_date": one_day_window.pickup_date})
        assert same.elapsed(IST) is None

    def test_window_is_immutable(self, one_day_window):
        with pytest.raises(pydantic.ValidationError):
            one_day_window.pickup_time = time(11, 0)


@pytest.mark.unit
class TestAddonSelection:
    def test_from_flags_keeps_enabled_only(self):
        selection = AddonSelection.from_flags({"helmet": True, "insurance": False})
        assert selection.enabled == frozenset({"helmet"})

    def test_default_is_empty(self):
        assert AddonSelection().enabled == frozenset()
