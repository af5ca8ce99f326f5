"""Fold repeated observations of a declaration across editions into one record."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from regmem.models import DeclarationRecord

logger = logging.getLogger(__name__)


class Reconciler:
    """
    Accumulates declaration records over a run.

    A record extends an existing one when member name and item text are
    equal and the existing record was first seen in a different edition.
    Identical declarations inside the edition that introduced them are
    kept as separate records.

    Edition ranges are widened by comparison, so records may arrive out
    of edition order; the first-seen check still uses the existing
    record's first edition at the time of arrival.
    """

    def __init__(self):
        self._records: List[DeclarationRecord] = []
        self._by_key: Dict[Tuple[str, str], List[DeclarationRecord]] = defaultdict(list)
        self.observed = 0
        self.merged = 0

    def __len__(self) -> int:
        return len(self._records)

    def _find(self, record: DeclarationRecord) -> Optional[DeclarationRecord]:
        for existing in self._by_key.get(record.key, ()):
            if existing.edition_seen_first != record.edition_seen_first:
                return existing
        return None

    def observe(self, record: DeclarationRecord) -> None:
        """Merge record into a matching earlier declaration, or keep it as a new one."""
        self.observed += 1
        existing = self._find(record)
        if existing is None:
            self._records.append(record)
            self._by_key[record.key].append(record)
            return

        self.merged += 1
        if record.edition_seen_first < existing.edition_seen_first:
            existing.edition_seen_first = record.edition_seen_first
            existing.page_seen_first = record.page_seen_first
        if record.edition_seen_last > existing.edition_seen_last:
            existing.edition_seen_last = record.edition_seen_last
            existing.page_seen_last = record.page_seen_last

    def records(self) -> List[DeclarationRecord]:
        """Reconciled records in creation order."""
        return list(self._records)


def sort_key(record: DeclarationRecord) -> Tuple[str, str, str]:
    return record.name.lower(), record.edition_seen_first, record.item


def sort_records(records: Iterable[DeclarationRecord]) -> List[DeclarationRecord]:
    """Alphabetical by member (case-insensitive), then first edition, then text."""
    return sorted(records, key=sort_key)


def reconcile(records: Iterable[DeclarationRecord]) -> List[DeclarationRecord]:
    """Reconcile a full record stream and return it sorted."""
    reconciler = Reconciler()
    for record in records:
        reconciler.observe(record)
    logger.info(
        f"Reconciled {reconciler.observed} observations into {len(reconciler)} declarations"
    )
    return sort_records(reconciler.records())
