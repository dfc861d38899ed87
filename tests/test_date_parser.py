from datetime import date

import pytest

from utils.date_parser import find_date, is_iso_date, normalize_application_date, to_iso_date


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Applied on 03/14/2024 via portal", "2024-03-14"),
        ("Submitted 2024-03-14", "2024-03-14"),
        ("Received 03-14-2024", "2024-03-14"),
        ("Sent March 14, 2024 at noon", "2024-03-14"),
        ("Sent Sep 5, 2023", "2023-09-05"),
    ],
)
def test_find_date_patterns(text, expected):
    assert find_date(text) == expected


def test_mail_header_without_year_uses_current_year():
    assert find_date("Tue, Mar 14, 10:30am") == f"{date.today().year}-03-14"


def test_unparseable_match_falls_through_to_next_pattern():
    assert find_date("ref 13/45/2024, applied 2024-03-14") == "2024-03-14"


def test_no_date_defaults_to_today():
    assert find_date("no dates in here") is None
    assert normalize_application_date("no dates in here") == date.today().isoformat()


def test_to_iso_date_rejects_garbage():
    assert to_iso_date("not a date") is None
    assert to_iso_date("") is None


@pytest.mark.parametrize("value,ok", [("2024-03-14", True), ("2024-02-30", False), ("03/14/2024", False), ("2024-3-14", False)])
def test_is_iso_date(value, ok):
    assert is_iso_date(value) is ok
