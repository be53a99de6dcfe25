from datetime import date

from tada.dates import Calendar, interpret_date, parse_date

CAL = Calendar(date(2024, 5, 15))


def test_parse_date_is_strict():
    assert parse_date("2024-02-29") == date(2024, 2, 29)
    assert parse_date("2023-02-29") is None
    assert parse_date("2024-2-9") is None
    assert parse_date("20240209") is None
    assert parse_date("tomorrow") is None
    assert parse_date("") is None
    assert parse_date(None) is None


def test_calendar_boundaries():
    assert CAL.yesterday == date(2024, 5, 14)
    assert CAL.soon == date(2024, 5, 17)
    assert CAL.end_of_week == date(2024, 5, 19)
    assert CAL.end_of_next_week == date(2024, 5, 26)
    assert CAL.end_of_next_month == date(2024, 6, 30)


def test_end_of_week_on_sunday_is_today():
    sunday = Calendar(date(2024, 5, 19))
    assert sunday.end_of_week == date(2024, 5, 19)
    assert sunday.end_of_next_week == date(2024, 5, 26)


def test_end_of_next_month_wraps_the_year():
    assert Calendar(date(2024, 11, 10)).end_of_next_month == date(2025, 1, 31)
    assert Calendar(date(2023, 12, 31)).end_of_next_month == date(2024, 2, 29)
    assert Calendar(date(2024, 1, 31)).end_of_next_month == date(2024, 2, 29)


def test_current_calendar_is_a_snapshot():
    assert Calendar.current() is Calendar.current()


def test_interpret_keywords():
    assert interpret_date("today", CAL) == date(2024, 5, 15)
    assert interpret_date("Tomorrow", CAL) == date(2024, 5, 16)
    assert interpret_date("overmorrow", CAL) == date(2024, 5, 17)
    assert interpret_date("yesterday", CAL) == date(2024, 5, 14)
    assert interpret_date("next_week", CAL) == date(2024, 5, 26)
    assert interpret_date("next month", CAL) == date(2024, 6, 30)


def test_interpret_weekdays():
    assert interpret_date("friday", CAL) == date(2024, 5, 17)
    assert interpret_date("wednesday", CAL) == date(2024, 5, 15)
    assert interpret_date("next_wednesday", CAL) == date(2024, 5, 22)
    assert interpret_date("next_mon", CAL) == date(2024, 5, 20)


def test_interpret_relative():
    assert interpret_date("in_3_days", CAL) == date(2024, 5, 18)
    assert interpret_date("in 2 weeks", CAL) == date(2024, 5, 29)
    assert interpret_date("in_1_month", CAL) == date(2024, 6, 15)


def test_interpret_falls_back_to_dateutil():
    assert interpret_date("1_June_2024", CAL) == date(2024, 6, 1)
    assert interpret_date("2024/07/04", CAL) == date(2024, 7, 4)


def test_interpret_gives_up():
    assert interpret_date("someday", CAL) is None
    assert interpret_date("", CAL) is None


def test_interpret_out_of_range():
    assert interpret_date("in_99999999999_days", CAL) is None
    assert interpret_date("in_999999_weeks", CAL) is None
    assert interpret_date("in_99999_months", CAL) is None
    assert interpret_date("99999999999999999999", CAL) is None
    assert interpret_date("in_9999_weeks", CAL) is not None
