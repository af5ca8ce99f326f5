"""Shared fixtures: saved register pages."""

import pytest
from pathlib import Path

FIXTURES = Path(__file__).parent / "fixtures"


def load(name: str) -> str:
    with open(FIXTURES / name, "r", encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def member_table_html():
    """Member page in the table layout (to 2015)."""
    return load("member_table.htm")


@pytest.fixture
def member_main_html():
    """Member page in the #mainTextBlock layout."""
    return load("member_main.htm")


@pytest.fixture
def member_nil_html():
    return load("member_nil.htm")


@pytest.fixture
def contents_table_html():
    return load("contents_table.htm")


@pytest.fixture
def contents_main_html():
    return load("contents_main.htm")


@pytest.fixture
def not_found_html():
    return load("not_found.htm")


@pytest.fixture
def member_latin1_bytes():
    """Member page saved as ISO-8859-1, declared in its <meta> tag."""
    with open(FIXTURES / "member_latin1.htm", "rb") as f:
        return f.read()
