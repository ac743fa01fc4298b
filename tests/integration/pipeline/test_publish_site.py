"""End-to-end publish runs over a posts/drafts tree"""

import re
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from pathlib import Path

import pytest

from sitepub.core.pipeline import run_publish
from sitepub.core.render import extract_body


BUILT = datetime(2024, 1, 1, tzinfo=timezone.utc)
HEADLINE_DATE_RE = re.compile(r'<span class="headline-date">(\d{4}-\d{2}-\d{2})</span>')


@pytest.fixture(name="built_site")
def built_site_fixture(write_post, site):
    """Three dated posts, two tagged, plus one draft; published once."""
    write_post("first.md", "First Post", "<2020-01-01 Wed>", ["emacs", "lisp"], "The *first* one.\n")
    write_post("second.md", "Second Post", "<2020-06-01 Mon>", ["lisp"], "The second one.\n")
    write_post("third.md", "Third Post", "<2021-01-01 Fri>", body="The third one.\n")
    write_post("secret.md", "Secret Draft", "<2022-01-01 Sat>", ["lisp"], "Not yet.\n", draft=True)
    run_publish(site, now=BUILT)
    return Path(site.output_dir)


def _read(out: Path, name: str) -> str:
    return (out / name).read_text(encoding="utf-8")


def test_index_shows_two_newest(built_site, ordered):
    index = _read(built_site, "index.html")
    ordered(index, ["Third Post", "Second Post", "Older posts"])
    assert "First Post" not in index


def test_archive_shows_all_newest_first(built_site, ordered):
    archive = _read(built_site, "archive.html")
    ordered(archive, ["Third Post", "Second Post", "First Post"])


def test_aggregate_dates_non_increasing(built_site):
    for name in ("archive.html", "tags.html"):
        text = _read(built_site, name)
        if name == "tags.html":
            sections = text.split('<h2 class="tag"')[1:]
        else:
            sections = [text]
        for section in sections:
            dates = HEADLINE_DATE_RE.findall(section)
            assert dates == sorted(dates, reverse=True)


def test_tag_index_scenario(built_site, ordered):
    tags = _read(built_site, "tags.html")
    emacs, lisp = tags.split('<h2 class="tag" id="tag-emacs">')[1].split('<h2 class="tag" id="tag-lisp">')
    assert "First Post" in emacs
    assert "Second Post" not in emacs
    ordered(lisp, ["Second Post", "First Post"])


def test_draft_rendered_but_never_aggregated(built_site):
    assert "Secret Draft" in _read(built_site, "secret.html")
    for name in ("index.html", "archive.html", "tags.html", "rss.xml"):
        assert "Secret Draft" not in _read(built_site, name)


def test_feed_lists_exactly_the_posts(built_site):
    root = ET.fromstring(_read(built_site, "rss.xml"))
    titles = [i.findtext("title") for i in root.iter("item")]
    assert titles == ["Third Post", "Second Post", "First Post"]


def test_bodies_round_trip_into_index_and_feed(built_site):
    """Index and feed embed exactly the body found on each post's own page."""
    index = _read(built_site, "index.html")
    feed = ET.fromstring(_read(built_site, "rss.xml"))
    feed_bodies = {i.findtext("title"): i.findtext("description") for i in feed.iter("item")}
    for stem, title in [("third", "Third Post"), ("second", "Second Post"), ("first", "First Post")]:
        body = extract_body(_read(built_site, f"{stem}.html"))
        assert feed_bodies[title] == body
        if stem != "first":
            assert body in index


def test_every_page_carries_chrome(built_site):
    for name in ("first.html", "secret.html", "index.html", "archive.html", "tags.html"):
        text = _read(built_site, name)
        assert "HEADER" in text and "PREAMBLE" in text and "POSTAMBLE" in text
