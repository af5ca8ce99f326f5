"""End-to-end pipeline: contents pages -> member pages -> declarations -> CSV."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from regmem.assembler import assemble
from regmem.config import config
from regmem.editions import index_url, iter_editions
from regmem.exceptions import FetchError
from regmem.fetcher import Fetcher
from regmem.fields import build_record
from regmem.links import extract_member_refs
from regmem.models import DeclarationRecord, EditionId, MemberDocumentRef, RunStats
from regmem.output import write_csv
from regmem.reconciler import reconcile
from regmem.segmenter import segment

logger = logging.getLogger(__name__)

FetchFn = Callable[[str], Optional[str]]


def parse_member_page(
    content: str | bytes,
    edition: EditionId,
    page_id: Optional[str] = None,
) -> List[DeclarationRecord]:
    """
    Declaration records of one member page in one edition.

    Args:
        content: Member page HTML
        edition: Edition the page was published in
        page_id: Source page identifier recorded on each record

    Returns:
        Records in document order; empty for 'Nil' and not-found pages

    Example:
        >>> records = parse_member_page(html, "210315", "abbott_diane.htm")
        >>> records[0].section
        '1. Employment and earnings'
    """
    name, blocks = segment(content)
    records = []
    for block in blocks:
        for item in assemble(block):
            records.append(build_record(name, block.heading, item, edition, page_id))
    return records


def _skip(url: str, error: FetchError, stats: RunStats) -> None:
    stats.skipped += 1
    logger.warning(f"Skipping {url}: {error}")


def _fetch_or_skip(fetch: FetchFn, url: str, stats: RunStats) -> Optional[str]:
    try:
        return fetch(url)
    except FetchError as e:
        _skip(url, e, stats)
        return None


def member_refs(
    fetch: FetchFn,
    edition: EditionId,
    stats: RunStats,
    base_url: Optional[str] = None,
) -> List[MemberDocumentRef]:
    """Member page refs of one edition; empty when its contents page is absent."""
    url = index_url(edition, base_url)
    content = _fetch_or_skip(fetch, url, stats)
    if content is None:
        return []
    refs = extract_member_refs(content, edition, url)
    if refs:
        stats.editions += 1
    return refs


def collect_records(
    editions: Iterable[EditionId],
    fetch: FetchFn,
    stats: Optional[RunStats] = None,
    workers: int = 1,
    base_url: Optional[str] = None,
) -> Iterator[DeclarationRecord]:
    """
    Yield declaration records edition by edition, in document order.

    Member pages of an edition are fetched on up to ``workers`` threads;
    results are consumed in link order so the stream stays in edition order.
    Documents that fail to fetch are skipped and counted in stats; the
    counting happens on the consuming thread, never in the pool.
    """
    stats = stats if stats is not None else RunStats()

    def load(ref: MemberDocumentRef) -> Tuple[MemberDocumentRef, Optional[str], Optional[FetchError]]:
        try:
            return ref, fetch(ref.url), None
        except FetchError as e:
            return ref, None, e

    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        for edition in editions:
            refs = member_refs(fetch, edition, stats, base_url)
            if not refs:
                continue
            logger.info(f"Processing register {edition}...")
            for ref, content, error in executor.map(load, refs):
                if error is not None:
                    _skip(ref.url, error, stats)
                    continue
                if content is None:
                    continue
                stats.pages += 1
                for record in parse_member_page(content, ref.edition, ref.page_id):
                    stats.observed += 1
                    yield record


def run(
    start: Optional[date] = None,
    end: Optional[date] = None,
    output: Optional[Path] = None,
    fetch: Optional[FetchFn] = None,
    workers: Optional[int] = None,
    base_url: Optional[str] = None,
) -> RunStats:
    """
    Build the reconciled declaration ledger for [start, end] and write it as CSV.

    Nothing is written until every edition has been processed, so an
    interrupted run leaves any previous output untouched.

    Raises:
        OutputError: If the CSV cannot be written
    """
    output = Path(output or config.output)
    fetch = fetch or Fetcher()
    workers = workers if workers is not None else config.workers
    stats = RunStats()

    records = collect_records(
        iter_editions(start, end), fetch, stats=stats, workers=workers, base_url=base_url
    )
    ledger = reconcile(records)
    stats.written = write_csv(ledger, output)

    logger.info(
        f"Done: {stats.editions} editions, {stats.pages} pages, "
        f"{stats.observed} observations, {stats.written} declarations, {stats.skipped} skipped"
    )
    return stats
