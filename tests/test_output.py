"""Test CSV output."""

import csv
import os
import stat

import pytest

from regmem.exceptions import OutputError
from regmem.fields import build_record
from regmem.models import OUTPUT_COLUMNS
from regmem.output import write_csv


@pytest.fixture
def records():
    return [
        build_record(
            "Abbott, Ms Diane",
            "1. Employment and earnings",
            'Acme Corp, "consultancy"\nAmount of payment: £500',
            "150105",
            "abbott_diane.htm",
        ),
        build_record("Zahawi, Nadhim", "8. Miscellaneous", "Trustee of a charity.", "171016"),
    ]


class TestWriteCsv:
    def test_header_and_quoting(self, records, tmp_path):
        path = tmp_path / "out.csv"
        assert write_csv(records, path) == 2

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))

        assert tuple(rows[0]) == OUTPUT_COLUMNS
        assert rows[1][2] == 'Acme Corp, "consultancy"\nAmount of payment: £500'
        assert rows[1][3] == "£500"
        assert rows[2][3] == ""
        assert len(rows) == 3

    def test_file_is_replaced(self, records, tmp_path):
        path = tmp_path / "out.csv"
        path.write_text("stale contents\n", encoding="utf-8")

        write_csv(records[1:], path)

        text = path.read_text(encoding="utf-8")
        assert "stale" not in text
        assert not list(tmp_path.glob("*.tmp"))

    def test_unwritable_target_raises(self, records, tmp_path):
        target = tmp_path / "is_a_directory"
        target.mkdir()

        with pytest.raises(OutputError):
            write_csv(records, target)
        assert not list(tmp_path.glob("*.tmp"))

    def test_file_mode_follows_umask(self, records, tmp_path):
        path = tmp_path / "out.csv"
        previous = os.umask(0o022)
        try:
            write_csv(records, path)
        finally:
            os.umask(previous)

        assert stat.S_IMODE(path.stat().st_mode) == 0o644
