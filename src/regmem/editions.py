"""Edition identifiers and contents-page URLs."""

from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from regmem.config import config
from regmem.models import EditionId

# State opening of the 2010-12 parliament
FIRST_EDITION: EditionId = "100525"
# Contents page renamed from part1contents.htm after this edition
LAST_PART1_EDITION: EditionId = "151214"


def edition_id(day: date) -> EditionId:
    """Edition identifier (yymmdd) for a publication date."""
    return day.strftime("%y%m%d")


def edition_date(edition: EditionId) -> date:
    """Inverse of edition_id."""
    return datetime.strptime(edition, "%y%m%d").date()


def iter_editions(start: Optional[date] = None, end: Optional[date] = None) -> Iterator[EditionId]:
    """
    Yield every candidate edition between start and end, inclusive.

    The range is clamped to [FIRST_EDITION, today]. Editions are candidates
    only: most dates have no register and their contents page is absent.
    """
    first = edition_date(FIRST_EDITION)
    last = date.today()
    start = max(start or first, first)
    end = min(end or last, last)

    day = start
    while day <= end:
        yield edition_id(day)
        day += timedelta(days=1)


def index_filename(edition: EditionId) -> str:
    return "contents.htm" if edition > LAST_PART1_EDITION else "part1contents.htm"


def index_url(edition: EditionId, base_url: Optional[str] = None) -> str:
    """URL of an edition's contents page."""
    base = (base_url or config.base_url).rstrip("/")
    return f"{base}/{edition}/{index_filename(edition)}"
