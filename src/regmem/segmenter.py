"""Split a member page into numbered sections."""

from __future__ import annotations

import re
import logging
from typing import List, Tuple
from bs4.element import Tag

from regmem.document import Document
from regmem.models import BodyFragment, RawBlock

logger = logging.getLogger(__name__)

# Both layouts mark headings with <h3>, a bare <strong> or a <p> wrapping <strong>
HEADING_SELECTOR = (
    "td > h3, td > strong, td > p:has(strong), "
    "#mainTextBlock > h3, #mainTextBlock > strong, #mainTextBlock > p:has(strong)"
)
CONTENT_SELECTOR = "td p, #mainTextBlock p"
NAME_SELECTOR = "h2"

HEADING_RE = re.compile(r"^\d{1,2}\.")
NIL_RE = re.compile(r"^Nil\.?$", re.IGNORECASE)

PRIMARY_INDENT = "indent"
SECONDARY_INDENT = "indent2"
END_TAG = "div"


def member_name(doc: Document) -> str:
    """Display name from the page heading, without the '(Constituency)' suffix."""
    return doc.first_text(NAME_SELECTOR).split(" (")[0].strip()


def is_nil(doc: Document) -> bool:
    """True when the member has nothing registered."""
    return any(NIL_RE.match(doc.text(p)) for p in doc.select(CONTENT_SELECTOR))


def is_heading(doc: Document, el: Tag) -> bool:
    return bool(HEADING_RE.match(doc.text(el)))


def indent_level(doc: Document, el: Tag) -> int:
    classes = doc.classes(el)
    if SECONDARY_INDENT in classes:
        return 2
    if PRIMARY_INDENT in classes:
        return 1
    return 0


def find_headings(doc: Document) -> List[Tag]:
    """Numbered section headings; bold text without a leading number is not a heading."""
    return [el for el in doc.select(HEADING_SELECTOR) if is_heading(doc, el)]


def segment_document(doc: Document) -> List[RawBlock]:
    """
    Blocks for every numbered heading of a parsed member page.

    A block's body is every sibling after the heading up to the next
    heading; the last heading's body stops at the first <div>.
    """
    if doc.is_not_found() or is_nil(doc):
        return []

    headings = find_headings(doc)
    blocks = []
    for i, heading in enumerate(headings):
        next_heading = headings[i + 1] if i + 1 < len(headings) else None

        def stop(el: Tag) -> bool:
            if next_heading is None:
                return el.name == END_TAG
            return el is next_heading

        body = [
            BodyFragment(text=doc.text(el), indent=indent_level(doc, el))
            for el in doc.siblings_until(heading, stop)
        ]
        blocks.append(RawBlock(heading=doc.text(heading), body=body))

    return blocks


def segment(content: str | bytes) -> Tuple[str, List[RawBlock]]:
    """Member name and section blocks of a member page."""
    doc = Document(content)
    name = member_name(doc)
    blocks = segment_document(doc)
    logger.debug(f"{name or '<unnamed>'}: {len(blocks)} sections")
    return name, blocks
