from datetime import date, datetime

from utils.dates import normalize_date, normalize_timestamp, to_iso


def test_us_and_iso_dates_normalize_to_the_same_value():
    assert normalize_date("04/30/2025") == "2025-04-30"
    assert normalize_date("2025-04-30") == "2025-04-30"
    assert normalize_date("4/3/2025") == "2025-04-03"


def test_empty_values_become_none():
    assert normalize_date(None) is None
    assert normalize_date("") is None
    assert normalize_date("   ") is None
    assert normalize_timestamp("") is None


def test_date_objects_are_rendered_as_iso():
    assert normalize_date(date(2025, 4, 30)) == "2025-04-30"
    assert normalize_date(datetime(2025, 4, 30, 15, 0)) == "2025-04-30"


def test_unrecognized_formats_pass_through_unchanged():
    assert normalize_date("30.04.2025") == "30.04.2025"
    assert normalize_timestamp("next tuesday") == "next tuesday"


def test_timestamps_get_midnight_when_only_a_date_is_given():
    assert normalize_timestamp("2025-04-30") == "2025-04-30 00:00:00"
    assert normalize_timestamp("04/30/2025") == "2025-04-30 00:00:00"


def test_iso_datetimes_are_rendered_without_t_separator():
    assert normalize_timestamp("2025-04-30T13:45:10.123Z") == "2025-04-30 13:45:10"
    assert normalize_timestamp(datetime(2025, 4, 30, 8, 5, 1)) == "2025-04-30 08:05:01"


def test_to_iso():
    assert to_iso(None) is None
    assert to_iso(date(2025, 1, 2)) == "2025-01-02"
    assert to_iso(datetime(2025, 1, 2, 3, 4, 5)) == "2025-01-02T03:04:05"
