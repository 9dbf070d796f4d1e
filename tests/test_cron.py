"""Tests for core cron matching."""

from datetime import date, datetime, timedelta, timezone

import pytest

from cadence.core.cron import cron_matches_date, match_field, validate_cron_expression
from cadence.errors import ValidationError


class TestMatchField:
    def test_wildcard_matches_anything(self):
        for value in (0, 1, 15, 31):
            assert match_field("*", value) is True

    def test_bare_integer(self):
        assert match_field("3", 3) is True
        assert match_field("3", 4) is False
        assert match_field("15", 15) is True

    def test_list(self):
        assert match_field("1,3,5", 1) is True
        assert match_field("1,3,5", 3) is True
        assert match_field("1,3,5", 5) is True
        assert match_field("1,3,5", 2) is False

    def test_step(self):
        assert match_field("*/2", 0) is True
        assert match_field("*/2", 4) is True
        assert match_field("*/2", 1) is False
        assert match_field("*/5", 15) is True
        assert match_field("*/5", 16) is False

    def test_step_zero_never_matches(self):
        assert match_field("*/0", 0) is False

    def test_ranges_not_supported(self):
        assert match_field("1-5", 3) is False

    @pytest.mark.parametrize("field_expr", ["abc", "", "--5", "²", "*/--2", "1,--3", "+3", "1_0"])
    def test_garbage_does_not_raise(self, field_expr):
        assert match_field(field_expr, 3) is False


class TestCronMatchesDate:
    def test_daily(self):
        assert cron_matches_date("0 9 * * *", date(2028, 1, 15)) is True

    def test_weekly_wednesday(self):
        # 2028-02-02 is a Wednesday, 2028-02-01 a Tuesday
        assert cron_matches_date("0 9 * * 3", date(2028, 2, 2)) is True
        assert cron_matches_date("0 9 * * 3", date(2028, 2, 1)) is False

    def test_sunday_is_zero(self):
        # 2028-02-06 is a Sunday
        assert cron_matches_date("0 9 * * 0", date(2028, 2, 6)) is True
        assert cron_matches_date("0 9 * * 6", date(2028, 2, 5)) is True

    def test_monthly(self):
        assert cron_matches_date("0 9 15 * *", date(2028, 6, 15)) is True
        assert cron_matches_date("0 9 15 * *", date(2028, 6, 14)) is False

    def test_specific_month_and_day(self):
        assert cron_matches_date("0 9 25 12 *", date(2028, 12, 25)) is True
        assert cron_matches_date("0 9 25 12 *", date(2028, 11, 25)) is False

    def test_all_calendar_fields_must_match(self):
        # 2028-12-25 is a Monday
        assert cron_matches_date("0 9 25 12 1", date(2028, 12, 25)) is True
        assert cron_matches_date("0 9 25 12 2", date(2028, 12, 25)) is False

    def test_minute_and_hour_ignored(self):
        day = date(2028, 1, 15)
        assert cron_matches_date("59 23 * * *", day) is True
        assert cron_matches_date("*/7 */3 * * *", day) is True

    @pytest.mark.parametrize("expression", ["0 9 * *", "0 9 * * * *", "", "   "])
    def test_wrong_field_count_is_false(self, expression):
        assert cron_matches_date(expression, date(2028, 1, 15)) is False

    @pytest.mark.parametrize("expression", ["0 9 --5 * *", "0 9 ² * *", "0 9 */--2 * *", "0 9 1,--3 * *"])
    def test_malformed_numbers_are_false(self, expression):
        assert cron_matches_date(expression, date(2028, 2, 2)) is False

    def test_non_string_is_false(self):
        assert cron_matches_date(None, date(2028, 1, 15)) is False

    def test_extra_whitespace_tolerated(self):
        assert cron_matches_date("  0  9  15 *   * ", date(2028, 6, 15)) is True

    def test_aware_datetime_uses_utc_day(self):
        # 23:30 at UTC-5 on the 14th is already the 15th in UTC
        est = timezone(timedelta(hours=-5))
        moment = datetime(2028, 6, 14, 23, 30, tzinfo=est)
        assert cron_matches_date("0 9 15 * *", moment) is True

    def test_deterministic(self):
        day = date(2028, 3, 1)
        results = {cron_matches_date("0 9 1 */3 *", day) for _ in range(5)}
        assert results == {True}


class TestValidateCronExpression:
    def test_valid(self):
        validate_cron_expression("0 9 * * 1,3,5")
        validate_cron_expression("*/15 */2 1 1 0")

    def test_wrong_field_count(self):
        with pytest.raises(ValidationError, match="exactly 5 fields"):
            validate_cron_expression("0 9 * *")

    def test_range_rejected(self):
        with pytest.raises(ValidationError, match="day-of-week"):
            validate_cron_expression("0 9 * * 1-5")

    def test_zero_step_rejected(self):
        with pytest.raises(ValidationError, match="minute"):
            validate_cron_expression("*/0 9 * * *")

    @pytest.mark.parametrize("expression", ["0 9 --5 * *", "0 9 ² * *", "0 9 */--2 * *", "0 9 1,--3 * *"])
    def test_malformed_numbers_rejected(self, expression):
        with pytest.raises(ValidationError, match="day-of-month"):
            validate_cron_expression(expression)
