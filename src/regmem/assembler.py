"""Assemble a section's body nodes into declaration texts."""

from __future__ import annotations

import re
import logging
from typing import List, Optional

from regmem.models import BodyFragment, RawBlock

logger = logging.getLogger(__name__)

ITEM_MARKER_RE = re.compile(r"^\((a|b|c)\)")

PAGINATION_RE = re.compile(r"^(Previous[\s\S]+Contents|Contents[\s\S]+Next)")

# Category preambles that introduce a list of donations rather than being one
BOILERPLATE_RE = re.compile(
    r"^(Donations to my constituency"
    r"|Donations to the constituency"
    r"|Donations to support"
    r"|Support in the capacity as"
    r"|Payments recieved in my capacity as"
    r"|Payments received in my capacity as"
    r"|Other donations"
    r"|Other support)",
    re.IGNORECASE,
)

# Lines that add detail to the previous declaration instead of starting one
CONTINUATION_RE = re.compile(
    r"^(Address of "
    r"|Amount of "
    r"|Value of "
    r"|if donation in kind:"
    r"|Date of receipt"
    r"|Date of acceptance"
    r"|Date the loan was entered into"
    r"|Loan entered into"
    r"|Date the loan is due to be repaid"
    r"|Repayment"
    r"|Donor status"
    r"|Rate of interest"
    r"|Whether or not any security has been given"
    r"|Security offered"
    r"|No security given"
    r"|\(Registered"
    r"|Date of visit"
    r"|Destination of visit"
    r"|Destination: "
    r"|Purpose of visit"
    r"|\d{1,2}\)"
    r"|\(\d{1,2}\)"
    r"|\d{1,2}\.)"
    r"|(overdraft limit)",
    re.IGNORECASE,
)


def strip_marker(text: str) -> str:
    """Drop a leading (a)/(b)/(c) list marker."""
    return ITEM_MARKER_RE.sub("", text.strip()).strip()


def is_valid(text: str) -> bool:
    """False for empty lines, page navigation and category preambles."""
    return (
        text != ""
        and text != "."
        and not PAGINATION_RE.match(text)
        and not BOILERPLATE_RE.match(text)
    )


def is_continuation(text: str) -> bool:
    # Only the overdraft alternative may match mid-line; the rest are anchored
    return bool(CONTINUATION_RE.search(text))


def find_parent(body: List[BodyFragment], index: int) -> Optional[str]:
    """Text of the nearest primary-indent node before body[index], if any."""
    for fragment in reversed(body[:index]):
        if fragment.indent == 1:
            return fragment.text
    return None


def assemble(block: RawBlock) -> List[str]:
    """
    Declaration texts of one section, in document order.

    Rules, first match wins:

    1. Invalid lines are dropped.
    2. Continuation lines are appended to the previous declaration with a
       line break. With no previous declaration the line starts one.
    3. Secondary-indent lines are prefixed with their primary-indent parent.
       If the parent was already emitted on its own, that one entry is
       removed. Without a usable parent the line stands alone.
    4. Anything else starts a new declaration.
    """
    items: List[str] = []
    for i, fragment in enumerate(block.body):
        text = strip_marker(fragment.text)

        if not is_valid(text):
            continue

        if is_continuation(text):
            if items:
                items[-1] += "\n" + text
            else:
                logger.debug(f"Continuation with no declaration in '{block.heading}': {text[:60]}")
                items.append(text)
            continue

        if fragment.indent == 2:
            parent = find_parent(block.body, i)
            if not parent or not is_valid(parent):
                items.append(text)
                continue
            if parent in items:
                items.remove(parent)
            items.append(parent + "\n" + text)
            continue

        items.append(text)

    return items
