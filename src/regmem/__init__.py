"""regmem: a deduplicated ledger of the Register of Members' Financial Interests."""

from regmem.core import parse_member_page, collect_records, run
from regmem.editions import iter_editions, index_url, edition_id
from regmem.links import extract_member_refs
from regmem.segmenter import segment
from regmem.assembler import assemble
from regmem.fields import build_record, extract_amount, extract_duration, extract_registered
from regmem.reconciler import Reconciler, reconcile, sort_records
from regmem.fetcher import Fetcher
from regmem.output import write_csv
from regmem.exceptions import RegmemError, FetchError, OutputError
from regmem.models import (
    EditionId,
    MemberDocumentRef,
    BodyFragment,
    RawBlock,
    DeclarationRecord,
    RunStats,
    OUTPUT_COLUMNS,
)

__version__ = "0.1.0"
__all__ = [
    "parse_member_page",
    "collect_records",
    "run",
    "iter_editions",
    "index_url",
    "edition_id",
    "extract_member_refs",
    "segment",
    "assemble",
    "build_record",
    "extract_amount",
    "extract_duration",
    "extract_registered",
    "Reconciler",
    "reconcile",
    "sort_records",
    "Fetcher",
    "write_csv",
    "RegmemError",
    "FetchError",
    "OutputError",
    "EditionId",
    "MemberDocumentRef",
    "BodyFragment",
    "RawBlock",
    "DeclarationRecord",
    "RunStats",
    "OUTPUT_COLUMNS",
]
