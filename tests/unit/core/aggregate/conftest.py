"""Shared fixtures for aggregate builder tests"""

from datetime import datetime
from pathlib import Path

import pytest

from sitepub.core.models import Document


@pytest.fixture(name="make_doc")
def make_doc_fixture(site):
    """Build an in-memory Document dated YYYY-MM-DD under the posts directory."""
    def _make(name, title, date, tags=(), is_draft=False) -> Document:
        return Document(
            path=Path(site.posts_dir) / name,
            title=title,
            date=datetime.strptime(date, "%Y-%m-%d"),
            tags=tuple(tags),
            is_draft=is_draft,
            markdown=f"Body of {title}.",
        )
    return _make


@pytest.fixture(name="bodies")
def bodies_fixture():
    """BodySource stand-in returning a recognizable fragment per document."""
    return lambda doc: f"<p>BODY:{doc.title}</p>\n"


@pytest.fixture(name="three_posts")
def three_posts_fixture(make_doc):
    return [
        make_doc("old.md", "Old Post", "2020-01-01", ["lisp"]),
        make_doc("newest.md", "Newest Post", "2021-01-01", ["emacs", "lisp"]),
        make_doc("middle.md", "Middle Post", "2020-06-01"),
    ]
