"""Test field extraction from declaration text."""

import pytest

from regmem.fields import (
    build_record,
    extract_amount,
    extract_duration,
    extract_registered,
    parse_date,
)


class TestAmount:
    def test_amount_and_date(self):
        text = "Received £1,250.00 (Registered 3 March 2021)"
        assert extract_amount(text) == "£1,250.00"
        assert extract_registered(text) == "2021-03-03"

    def test_last_amount_wins(self):
        assert extract_amount("Payments over £100 to be declared. Received £2,500.") == "£2,500"

    def test_no_amount(self):
        assert extract_amount("Trustee of a charity.") is None


class TestDuration:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Hours: 3 hrs 30 mins.", "3 hrs 30 mins"),
            ("Hours: 2 hours.", "2 hours"),
            ("Time taken: 45 minutes", "45 minutes"),
            ("Hours: 1 hr. Later updated: 5 hrs.", "5 hrs"),
            ("Hours: 1,000 hours in total", "1,000 hours"),
            ("Time taken: 1,200 mins", "1,200 mins"),
            ("Hours: 3.5 hrs", "3.5 hrs"),
            ("No time given", None),
        ],
    )
    def test_duration(self, text, expected):
        assert extract_duration(text) == expected


class TestRegistered:
    def test_registered_without_keyword(self):
        assert extract_registered("Visit to Paris (12 January 2016)") == "2016-01-12"

    def test_abbreviated_month(self):
        assert extract_registered("(Registered 9 Sept 2019)") == "2019-09-09"
        assert extract_registered("(Registered 9 Feb 2019)") == "2019-02-09"

    def test_bad_date_is_absent(self):
        assert extract_registered("(Registered 31 February 2019)") is None
        assert extract_registered("(Registered 3 Marchember 2021)") is None

    def test_no_date(self):
        assert extract_registered("Acme Corp") is None

    def test_parse_date(self):
        assert parse_date("3 March 2021") == "2021-03-03"


class TestBuildRecord:
    def test_seeded_from_context(self):
        record = build_record(
            "Abbott, Ms Diane",
            "1. Employment and earnings",
            "Received £300 for a talk. Hours: 1 hr. (Registered 5 April 2021)",
            "210412",
            "abbott_diane.htm",
        )
        assert record.amount == "£300"
        assert record.duration == "1 hr"
        assert record.registered == "2021-04-05"
        assert record.edition_seen_first == record.edition_seen_last == "210412"
        assert record.page_seen_first == record.page_seen_last == "abbott_diane.htm"

    def test_absent_fields_are_none(self):
        record = build_record("A", "8. Miscellaneous", "Trustee of a charity.", "210412")
        assert record.amount is None
        assert record.duration is None
        assert record.registered is None
        assert record.to_row()["amount"] == ""
