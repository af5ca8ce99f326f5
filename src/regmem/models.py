"""Data models for register parsing and reconciliation."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

# Six-digit yymmdd string; fixed width, so string order is edition order.
EditionId = str

OUTPUT_COLUMNS: Tuple[str, ...] = (
    "name",
    "section",
    "item",
    "amount",
    "duration",
    "registered",
    "editionSeenFirst",
    "editionSeenLast",
    "pageSeenFirst",
    "pageSeenLast",
)


class MemberDocumentRef(BaseModel):
    """Link from an edition's contents page to one member's page."""

    url: str = Field(..., description="Absolute URL of the member page")
    edition: EditionId = Field(..., description="Edition the page belongs to")
    page_id: str = Field(..., description="Final path segment of the URL (e.g. 'abbott_diane.htm')")

    model_config = {"frozen": True}

    def __repr__(self) -> str:
        return f"MemberDocumentRef(edition='{self.edition}', page_id='{self.page_id}')"


class BodyFragment(BaseModel):
    """One body node under a heading, reduced to its text and indentation."""

    text: str = Field(..., description="Trimmed, whitespace-collapsed text of the node")
    indent: int = Field(0, description="0 = none, 1 = primary indent, 2 = secondary indent")

    model_config = {"frozen": True}


class RawBlock(BaseModel):
    """A numbered heading with the body nodes that follow it."""

    heading: str = Field(..., description="Full heading text, e.g. '1. Employment and earnings'")
    body: List[BodyFragment] = Field(default_factory=list, description="Body nodes in document order")

    model_config = {"frozen": False}

    def __repr__(self) -> str:
        return f"RawBlock(heading='{self.heading}', body={len(self.body)})"


class DeclarationRecord(BaseModel):
    """
    One declaration of one member, with the editions it was seen in.

    Two records describe the same declaration when ``name`` and ``item``
    are equal; see ``key``.
    """

    name: str = Field(..., description="Member display name")
    section: str = Field(..., description="Owning heading text")
    item: str = Field(..., description="Assembled declaration text")
    amount: Optional[str] = Field(None, description="Last currency amount in the text")
    duration: Optional[str] = Field(None, description="Hours and/or minutes, space separated")
    registered: Optional[str] = Field(None, description="Registration date, YYYY-MM-DD")
    edition_seen_first: EditionId = Field(..., description="First edition the declaration appeared in")
    edition_seen_last: EditionId = Field(..., description="Last edition the declaration appeared in")
    page_seen_first: Optional[str] = Field(None, description="Member page id in the first edition")
    page_seen_last: Optional[str] = Field(None, description="Member page id in the last edition")

    model_config = {"frozen": False, "validate_assignment": True}

    @field_validator("edition_seen_first", "edition_seen_last")
    @classmethod
    def validate_edition(cls, v: str) -> str:
        if len(v) != 6 or not v.isdigit():
            raise ValueError(f"Edition must be a six-digit yymmdd string, got '{v}'")
        return v

    @model_validator(mode="after")
    def validate_range(self) -> "DeclarationRecord":
        if self.edition_seen_first > self.edition_seen_last:
            raise ValueError(
                f"edition_seen_first {self.edition_seen_first} is after "
                f"edition_seen_last {self.edition_seen_last}"
            )
        return self

    @computed_field
    @property
    def key(self) -> Tuple[str, str]:
        """Identity used for reconciliation."""
        return self.name, self.item

    def to_row(self) -> Dict[str, str]:
        """Flat projection with OUTPUT_COLUMNS keys; absent fields become ''."""
        return {
            "name": self.name,
            "section": self.section,
            "item": self.item,
            "amount": self.amount or "",
            "duration": self.duration or "",
            "registered": self.registered or "",
            "editionSeenFirst": self.edition_seen_first,
            "editionSeenLast": self.edition_seen_last,
            "pageSeenFirst": self.page_seen_first or "",
            "pageSeenLast": self.page_seen_last or "",
        }

    def __repr__(self) -> str:
        preview = self.item[:60].replace("\n", " ")
        return (
            f"DeclarationRecord(name='{self.name}', "
            f"editions={self.edition_seen_first}-{self.edition_seen_last}, preview='{preview}')"
        )


class RunStats(BaseModel):
    """Counters reported at the end of a pipeline run."""

    editions: int = Field(0, description="Editions whose contents page was found")
    pages: int = Field(0, description="Member pages parsed")
    skipped: int = Field(0, description="Documents skipped after fetch failures")
    observed: int = Field(0, description="Declaration records fed to the reconciler")
    written: int = Field(0, description="Rows written after reconciliation")

    model_config = {"frozen": False}
