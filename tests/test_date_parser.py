"""Tests for date parsing, formatting and hour arithmetic."""

from datetime import datetime, timedelta, timezone
import pytest

from budgetit.utils.date_parser import (
    format_datetime,
    parse_datetime,
    to_naive,
    whole_hours,
)


def test_parse_iso_datetime():
    """Test parsing ISO-8601 date/times."""
    assert parse_datetime("2024-01-15T10:30:00") == datetime(2024, 1, 15, 10, 30)
    assert parse_datetime("2024-01-15 10:30") == datetime(2024, 1, 15, 10, 30)


def test_parse_display_format():
    """Test parsing the day-first display format."""
    assert parse_datetime("15/01/24 10:30") == datetime(2024, 1, 15, 10, 30)


def test_parse_relative():
    """Test parsing 'now' and 'today'."""
    before = datetime.now().replace(microsecond=0)
    parsed = parse_datetime("now")
    assert before <= parsed <= datetime.now()
    assert parse_datetime("today").time() == datetime.min.time()


def test_parse_invalid():
    """Test unparseable dates raise ValueError."""
    with pytest.raises(ValueError):
        parse_datetime("not a date")


def test_to_naive_drops_timezone():
    """Test aware values are converted to naive local time."""
    aware = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
    naive = to_naive(aware)
    assert naive.tzinfo is None
    assert naive == aware.astimezone().replace(tzinfo=None)


def test_format_datetime():
    """Test the dd/mm/yy HH:MM display format."""
    assert format_datetime(datetime(2024, 1, 5, 9, 7)) == "05/01/24 09:07"
    assert format_datetime(None) is None


def test_whole_hours_truncates():
    """Test partial hours are dropped."""
    begin = datetime(2024, 1, 15, 10, 0)
    assert whole_hours(begin, datetime(2024, 1, 15, 10, 59)) == 0
    assert whole_hours(begin, datetime(2024, 1, 15, 11, 0)) == 1
    assert whole_hours(begin, begin + timedelta(hours=7, minutes=45)) == 7


def test_whole_hours_truncates_toward_zero():
    """Test negative spans are truncated toward zero."""
    begin = datetime(2024, 1, 15, 10, 0)
    assert whole_hours(begin, datetime(2024, 1, 15, 8, 30)) == -1
