"""Thin document model over BeautifulSoup used by the link extractor and segmenter."""

from __future__ import annotations

import re
from typing import Callable, Iterator, List, Optional
from bs4 import BeautifulSoup
from bs4.element import Tag

NOT_FOUND_MARKER = "Page cannot be found"

NBSP, NARROW_NBSP, ZWSP = "\u00A0", "\u202F", "\u200B"

_ws = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    text = text.replace(NBSP, " ").replace(NARROW_NBSP, " ").replace(ZWSP, "")
    return _ws.sub(" ", text).strip()


class Document:
    """Parsed HTML page exposing only the queries the register parsers need."""

    def __init__(self, content: str | bytes):
        # Bytes go through unchanged so the page's <meta charset> decides the encoding
        self.soup = BeautifulSoup(content, "lxml")

    def select(self, selector: str) -> List[Tag]:
        """Elements matching a CSS selector, in document order."""
        return self.soup.select(selector)

    def first_text(self, selector: str) -> str:
        found = self.soup.select_one(selector)
        return self.text(found) if found is not None else ""

    @staticmethod
    def text(el: Optional[Tag]) -> str:
        if el is None:
            return ""
        return clean_text(el.get_text())

    @staticmethod
    def classes(el: Tag) -> List[str]:
        return list(el.get("class") or [])

    @staticmethod
    def siblings_until(el: Tag, stop: Callable[[Tag], bool]) -> Iterator[Tag]:
        """Following sibling elements of el up to, not including, the first one stop() accepts."""
        for sibling in el.next_siblings:
            if not isinstance(sibling, Tag):
                continue
            if stop(sibling):
                return
            yield sibling

    def is_not_found(self) -> bool:
        """True for the site's 'Page cannot be found' page, which is served with status 200."""
        return any(self.text(h1) == NOT_FOUND_MARKER for h1 in self.soup.find_all("h1"))
