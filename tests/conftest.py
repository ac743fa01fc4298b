"""Root test configuration: site config and source-document fixtures"""

import logging
import os
from pathlib import Path

import pytest

from sitepub.config import SiteConfig


def _source_text(title: str, date: str, tags=None, body: str = "Body text.\n") -> str:
    lines = [f"#+TITLE: {title}", f"#+DATE: {date}"]
    if tags:
        lines.append(f"#+TAGS: {' '.join(tags)}")
    return "\n".join(lines) + "\n\n" + body


@pytest.fixture(name="source_text")
def source_text_fixture():
    """Build the text of a source document from its directive values."""
    return _source_text


@pytest.fixture(name="site")
def site_fixture(tmp_path) -> SiteConfig:
    """SiteConfig rooted in tmp_path with an index length of 2."""
    return SiteConfig(
        publish_url="https://example.org/blog/",
        site_title="Example Site",
        site_description="Notes and essays",
        output_dir=str(tmp_path / "public"),
        posts_dir=str(tmp_path / "posts"),
        drafts_dir=str(tmp_path / "drafts"),
        index_length=2,
        header='<div id="site-header">HEADER</div>',
        preamble='<nav id="preamble">PREAMBLE</nav>',
        postamble='<p class="footer">POSTAMBLE</p>',
    )


@pytest.fixture(name="write_post")
def write_post_fixture(site):
    """Write a source document into the posts (or drafts) directory and return its path."""
    def _write(name, title, date, tags=None, body="Body text.\n", draft=False) -> Path:
        directory = Path(site.drafts_dir if draft else site.posts_dir)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(_source_text(title, date, tags, body), encoding="utf-8")
        return path
    return _write


@pytest.fixture(name="set_mtime")
def set_mtime_fixture():
    """Set a file's access and modification time to an explicit epoch second."""
    def _set(path: Path, seconds: float) -> None:
        os.utime(path, (seconds, seconds))
    return _set


def positions(text: str, needles: list[str]) -> list[int]:
    return [text.index(n) for n in needles]


@pytest.fixture(name="ordered")
def ordered_fixture():
    """Assert that every needle occurs in text, in the given order."""
    def _check(text: str, needles: list[str]) -> None:
        found = positions(text, needles)
        assert found == sorted(found), f"out of order: {needles}"
    return _check


@pytest.fixture(autouse=True)
def reset_sitepub_logger():
    """Drop handlers configured by CLI tests so later tests do not log to closed streams."""
    yield
    logger = logging.getLogger("sitepub")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
