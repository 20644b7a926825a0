"""Tests for resolving -n / -t selections into dates."""
from datetime import date

import pytest

from dump_dates import Selection, expand_digits, parse_compact_date, resolve_date

FEB_17 = date(2024, 2, 17)


class TestExpandDigits:
    @pytest.mark.parametrize(
        "digits, expected",
        [
            ("5", "20240205"),
            ("12", "20240212"),
            ("0311", "20240311"),
            ("230101", "20230101"),
            ("19991231", "19991231"),
        ],
    )
    def test_overlay(self, digits, expected):
        assert expand_digits(FEB_17, digits) == expected

    def test_single_digit_uses_zero_tens(self):
        # day 17 with "5" is the 5th, not the 15th
        assert expand_digits(FEB_17, "5")[-2:] == "05"

    @pytest.mark.parametrize("digits", ["", "123", "12345", "1234567", "123456789"])
    def test_bad_length(self, digits):
        with pytest.raises(ValueError, match="invalid date"):
            expand_digits(FEB_17, digits)

    @pytest.mark.parametrize("digits", ["ab", " 5", "1a", "-1", "١٢"])
    def test_non_digits(self, digits):
        with pytest.raises(ValueError, match="invalid date"):
            expand_digits(FEB_17, digits)

    @pytest.mark.parametrize("digits", ["9", "99", "9999", "999999", "99999999"])
    def test_always_eight_digits(self, digits):
        result = expand_digits(FEB_17, digits)
        assert len(result) == 8
        assert result.isdigit()

    def test_full_date_of_today_is_today(self):
        assert expand_digits(FEB_17, "20240217") == "20240217"
        assert resolve_date(FEB_17, Selection(digits="20240217")) == FEB_17


class TestParseCompactDate:
    def test_valid(self):
        assert parse_compact_date("20240229") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["20240132", "20241301", "20230229", "20240100"])
    def test_invalid_calendar_date(self, value):
        with pytest.raises(ValueError, match=value):
            parse_compact_date(value)


class TestSelection:
    def test_default_is_most_recent(self):
        assert Selection().most_recent

    def test_explicit_modes_are_not_most_recent(self):
        assert not Selection(days_ago=1).most_recent
        assert not Selection(digits="5").most_recent

    def test_both_rejected(self):
        with pytest.raises(ValueError, match="mutually exclusive"):
            Selection(days_ago=1, digits="5")

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            Selection(days_ago=-1)


class TestResolveDate:
    def test_most_recent_returns_now(self):
        assert resolve_date(FEB_17, Selection()) == FEB_17

    def test_days_ago(self):
        assert resolve_date(date(2024, 2, 18), Selection(days_ago=7)) == date(2024, 2, 11)

    def test_days_ago_month_rollover(self):
        assert resolve_date(date(2024, 3, 1), Selection(days_ago=1)) == date(2024, 2, 29)

    def test_days_ago_year_rollover(self):
        assert resolve_date(date(2024, 1, 3), Selection(days_ago=5)) == date(2023, 12, 29)

    def test_explicit_day(self):
        assert resolve_date(FEB_17, Selection(digits="5")) == date(2024, 2, 5)

    def test_explicit_month_day(self):
        assert resolve_date(FEB_17, Selection(digits="1225")) == date(2024, 12, 25)

    def test_days_ago_out_of_range(self):
        with pytest.raises(ValueError, match="invalid days ago: 1000000"):
            resolve_date(FEB_17, Selection(days_ago=1000000))

    def test_days_ago_too_large_for_timedelta(self):
        with pytest.raises(ValueError, match="invalid days ago"):
            resolve_date(FEB_17, Selection(days_ago=10**10))

    def test_explicit_impossible_date(self):
        with pytest.raises(ValueError):
            resolve_date(FEB_17, Selection(digits="31"))
