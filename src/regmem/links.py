"""Member page links from an edition's contents page."""

import logging
import posixpath
from typing import List
from urllib.parse import quote, unquote, urlparse

from regmem.document import Document
from regmem.models import EditionId, MemberDocumentRef

logger = logging.getLogger(__name__)

# Table layout (to 2015) and #mainTextBlock layout (after)
MEMBER_LINK_SELECTOR = "td > p > a[href$=htm], #mainTextBlock > p > a[href$=htm]"
EXCLUDED_HREFS = {"introduction.htm"}
INDEX_FILENAMES = ("part1contents.htm", "contents.htm")


def index_base(index_url: str) -> str:
    """Directory URL of a contents page, with a trailing slash."""
    for filename in INDEX_FILENAMES:
        if index_url.endswith(filename):
            return index_url[: -len(filename)]
    return index_url if index_url.endswith("/") else index_url + "/"


def page_id(url: str) -> str:
    """Final path segment of a member page URL."""
    return unquote(posixpath.basename(urlparse(url).path))


def extract_member_refs(content: str | bytes, edition: EditionId, index_url: str) -> List[MemberDocumentRef]:
    """
    Member page references listed on a contents page.

    Returns an empty list when the page is the site's not-found page.
    Document order is kept and duplicate links are not removed.
    """
    doc = Document(content)
    if doc.is_not_found():
        logger.debug(f"No register for edition {edition}")
        return []

    base = index_base(index_url)
    refs = []
    for anchor in doc.select(MEMBER_LINK_SELECTOR):
        href = (anchor.get("href") or "").strip()
        if not href or href in EXCLUDED_HREFS:
            continue
        url = base + quote(href, safe="!*'()~")
        refs.append(MemberDocumentRef(url=url, edition=edition, page_id=page_id(url)))

    logger.info(f"Edition {edition}: {len(refs)} member pages")
    return refs
