"""Test cross-edition reconciliation and final ordering."""

import pytest

from regmem.models import DeclarationRecord
from regmem.reconciler import Reconciler, reconcile, sort_records


def record(name, item, edition, page=None, section="1. Employment"):
    return DeclarationRecord(
        name=name,
        section=section,
        item=item,
        edition_seen_first=edition,
        edition_seen_last=edition,
        page_seen_first=page,
        page_seen_last=page,
    )


class TestReconciler:
    """Merge-or-append rule."""

    def test_repeat_extends_range(self):
        reconciler = Reconciler()
        reconciler.observe(record("Abbott", "Acme Corp", "150105", "a1.htm"))
        reconciler.observe(record("Abbott", "Acme Corp", "150202", "a2.htm"))
        reconciler.observe(record("Abbott", "Acme Corp", "150302", "a3.htm"))

        records = reconciler.records()
        assert len(records) == 1
        assert records[0].edition_seen_first == "150105"
        assert records[0].edition_seen_last == "150302"
        assert records[0].page_seen_first == "a1.htm"
        assert records[0].page_seen_last == "a3.htm"
        assert reconciler.merged == 2

    def test_changed_text_is_new_declaration(self):
        reconciler = Reconciler()
        reconciler.observe(record("Abbott", "Acme Corp", "150105"))
        reconciler.observe(record("Abbott", "Acme Corp ", "150202"))
        assert len(reconciler) == 2

    def test_same_text_different_member(self):
        reconciler = Reconciler()
        reconciler.observe(record("Abbott", "Acme Corp", "150105"))
        reconciler.observe(record("Abrahams", "Acme Corp", "150202"))
        assert len(reconciler) == 2

    def test_same_edition_duplicates_kept(self):
        reconciler = Reconciler()
        reconciler.observe(record("Abbott", "Acme Corp", "150105"))
        reconciler.observe(record("Abbott", "Acme Corp", "150105"))
        assert len(reconciler) == 2

        reconciler.observe(record("Abbott", "Acme Corp", "150202"))
        records = reconciler.records()
        assert [r.edition_seen_last for r in records] == ["150202", "150105"]

    def test_out_of_order_arrival(self):
        reconciler = Reconciler()
        reconciler.observe(record("Abbott", "Acme Corp", "150302", "a3.htm"))
        reconciler.observe(record("Abbott", "Acme Corp", "150105", "a1.htm"))
        reconciler.observe(record("Abbott", "Acme Corp", "150202", "a2.htm"))

        (merged,) = reconciler.records()
        assert merged.edition_seen_first == "150105"
        assert merged.edition_seen_last == "150302"
        assert merged.page_seen_first == "a1.htm"
        assert merged.page_seen_last == "a3.htm"

    def test_merge_conservation(self):
        editions = ["120101", "120301", "130101", "140601"]
        stream = [record("Abbott", "Acme Corp", e) for e in editions]
        stream += [record("Abbott", "Beta Ltd", e) for e in editions[1:3]]

        result = reconcile(sorted(stream, key=lambda r: r.edition_seen_first))
        by_item = {r.item: r for r in result}

        assert len(result) == 2
        assert (by_item["Acme Corp"].edition_seen_first, by_item["Acme Corp"].edition_seen_last) == ("120101", "140601")
        assert (by_item["Beta Ltd"].edition_seen_first, by_item["Beta Ltd"].edition_seen_last) == ("120301", "130101")
        assert all(r.edition_seen_first <= r.edition_seen_last for r in result)


class TestSort:
    def test_alphachronological(self):
        records = [
            record("zahawi, Nadhim", "B", "170101"),
            record("Abbott, Ms Diane", "Z", "160101"),
            record("abbott, Ms Diane", "A", "150101"),
            record("Abbott, Ms Diane", "M", "160101"),
        ]
        ordered = sort_records(records)
        assert [(r.name, r.item) for r in ordered] == [
            ("abbott, Ms Diane", "A"),
            ("Abbott, Ms Diane", "M"),
            ("Abbott, Ms Diane", "Z"),
            ("zahawi, Nadhim", "B"),
        ]

    def test_ties_keep_input_order(self):
        first = record("Abbott", "Acme", "150101", page="one.htm")
        second = record("Abbott", "Acme", "150101", page="two.htm")
        assert [r.page_seen_first for r in sort_records([first, second])] == ["one.htm", "two.htm"]
        assert [r.page_seen_first for r in sort_records([second, first])] == ["two.htm", "one.htm"]


class TestRecordModel:
    def test_edition_range_enforced(self):
        with pytest.raises(ValueError):
            DeclarationRecord(
                name="A", section="1.", item="x", edition_seen_first="150202", edition_seen_last="150101"
            )

    def test_edition_format_enforced(self):
        with pytest.raises(ValueError):
            record("A", "x", "2015-01-01")
