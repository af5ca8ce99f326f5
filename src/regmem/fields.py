"""Structured fields pulled out of declaration text."""

from __future__ import annotations

import re
import logging
from datetime import datetime
from typing import Optional

from regmem.models import DeclarationRecord, EditionId

logger = logging.getLogger(__name__)

AMOUNT_RE = re.compile(r"£\d+(?:,\d{3})*(?:\.\d{2})?")
HOURS_RE = re.compile(r"(?<![\w,.])\d+(?:,\d{3})*(?:\.\d+)?\s*(?:hours?|hrs?)\b", re.IGNORECASE)
MINUTES_RE = re.compile(r"(?<![\w,.])\d+(?:,\d{3})*\s*(?:minutes?|mins?)\b", re.IGNORECASE)
REGISTERED_RE = re.compile(r"\((?:Registered)?\s*(\d{1,2} [A-Za-z]+\.? \d{4})")

DATE_FORMATS = ("%d %B %Y", "%d %b %Y")


def _last_match(pattern: re.Pattern, text: str) -> Optional[str]:
    matches = [m.group(0) for m in pattern.finditer(text)]
    return matches[-1] if matches else None


def extract_amount(text: str) -> Optional[str]:
    """Last '£' amount in the text; earlier ones are often labels or totals."""
    return _last_match(AMOUNT_RE, text)


def extract_duration(text: str) -> Optional[str]:
    """Last hours quantity and last minutes quantity, joined with a space."""
    parts = [p for p in (_last_match(HOURS_RE, text), _last_match(MINUTES_RE, text)) if p]
    return " ".join(parts) if parts else None


def parse_date(value: str) -> Optional[str]:
    """'3 March 2021' -> '2021-03-03'. None if the text is not a real date."""
    day, month, year = value.replace(".", "").split(" ")
    if month.lower() == "sept":
        month = "Sep"
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(f"{day} {month} {year}", fmt).date().isoformat()
        except ValueError:
            continue
    return None


def extract_registered(text: str) -> Optional[str]:
    """ISO date from the first '(Registered d Month yyyy' in the text."""
    match = REGISTERED_RE.search(text)
    if not match:
        return None
    parsed = parse_date(match.group(1))
    if parsed is None:
        logger.debug(f"Unparseable registered date: {match.group(1)!r}")
    return parsed


def build_record(
    name: str,
    section: str,
    item: str,
    edition: EditionId,
    page_id: Optional[str] = None,
) -> DeclarationRecord:
    """Declaration record for one assembled item seen in one edition."""
    return DeclarationRecord(
        name=name,
        section=section,
        item=item,
        amount=extract_amount(item),
        duration=extract_duration(item),
        registered=extract_registered(item),
        edition_seen_first=edition,
        edition_seen_last=edition,
        page_seen_first=page_id,
        page_seen_last=page_id,
    )
