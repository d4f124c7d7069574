"""Unit tests for date and time helpers."""

from datetime import date, datetime

import pytest

from cinereserve.utils.timefmt import (
    format_datetime,
    format_time,
    is_iso_date,
    parse_date,
    parse_naive_datetime,
)


def test_format_datetime() -> None:
    assert format_datetime(datetime(2023, 6, 1, 18, 0)) == "2023-06-01 18:00:00"


def test_format_time() -> None:
    assert format_time(datetime(2023, 6, 1, 9, 5, 30)) == "09:05:30"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("2023-12-31", True),
        ("2023-02-30", True),  # shape only
        ("2023-1-31", False),
        ("31-12-2023", False),
        ("2023-12-31T00:00", False),
        ("", False),
    ],
)
def test_is_iso_date(text: str, expected: bool) -> None:
    assert is_iso_date(text) is expected


class TestParseDate:
    def test_plain_date(self) -> None:
        assert parse_date("2023-06-01") == date(2023, 6, 1)

    def test_timestamp_uses_date_part(self) -> None:
        assert parse_date("2023-06-01T22:30:00") == date(2023, 6, 1)

    def test_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            parse_date("not-a-date")

    def test_rejects_impossible_date(self) -> None:
        with pytest.raises(ValueError):
            parse_date("2023-02-30")


class TestParseNaiveDatetime:
    def test_naive_input_unchanged(self) -> None:
        assert parse_naive_datetime("2023-06-01T18:00:00") == datetime(2023, 6, 1, 18, 0)

    def test_offset_is_dropped_not_converted(self) -> None:
        parsed = parse_naive_datetime("2023-06-01T18:00:00+02:00")
        assert parsed == datetime(2023, 6, 1, 18, 0)
        assert parsed.tzinfo is None

    def test_space_separator(self) -> None:
        assert parse_naive_datetime("2023-06-01 18:00") == datetime(2023, 6, 1, 18, 0)

    def test_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            parse_naive_datetime("tomorrow evening")
