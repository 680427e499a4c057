"""
Tests for date normalization.
"""
from datetime import date, datetime

import pytest

from leadtracker.ingestion.dates import (
    normalize_date, parse_activity_date, parse_canonical_date, serial_to_date, today_string,
)


def test_canonical_passes_through_and_is_idempotent():
    assert normalize_date("05-03-2024") == "05-03-2024"
    assert normalize_date(normalize_date("05-03-2024")) == "05-03-2024"


def test_iso_date_is_reordered():
    assert normalize_date("2024-03-05") == "05-03-2024"


@pytest.mark.parametrize("raw", ["05/03/2024", "5/3/2024", " 05/03/2024 "])
def test_slash_date_is_reordered_and_padded(raw):
    assert normalize_date(raw) == "05-03-2024"


def test_serial_date_uses_the_1899_anchor():
    assert normalize_date(45306) == "15-01-2024"
    assert normalize_date(45306.75) == "15-01-2024"
    assert serial_to_date(45306) == date(2024, 1, 15)


def test_native_dates_are_formatted():
    assert normalize_date(date(2024, 1, 15)) == "15-01-2024"
    assert normalize_date(datetime(2024, 1, 15, 10, 30)) == "15-01-2024"


@pytest.mark.parametrize("raw", [None, "", "   ", True, 10 ** 12, float("nan"), object()])
def test_unusable_input_gives_empty_string(raw):
    assert normalize_date(raw) == ""


def test_unrecognized_text_is_kept():
    assert normalize_date(" next week ") == "next week"


def test_parse_canonical_date():
    assert parse_canonical_date("15-01-2024") == date(2024, 1, 15)
    assert parse_canonical_date("31-02-2024") is None
    assert parse_canonical_date("2024-01-15") is None
    assert parse_canonical_date("") is None


def test_parse_activity_date_accepts_iso_timestamps():
    assert parse_activity_date("15-01-2024") == date(2024, 1, 15)
    assert parse_activity_date("2024-01-15T09:00:00Z") == date(2024, 1, 15)
    assert parse_activity_date("garbage") is None


def test_today_string():
    assert today_string(date(2024, 1, 5)) == "05-01-2024"
