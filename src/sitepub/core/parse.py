"""File discovery and directive-based metadata extraction"""

import re
from datetime import datetime
from pathlib import Path

from sitepub.core.errors import MissingOrInvalidDateError, MissingTitleError
from sitepub.core.models import Document, Metadata
from sitepub.core.utils.fs import read_text


SOURCE_EXTENSIONS = {'.md', '.org', '.txt'}

TITLE_RE = re.compile(r'^[ \t]*#\+title:[ \t]*(.*?)[ \t\r]*$', re.IGNORECASE | re.MULTILINE)
DATE_RE = re.compile(r'^[ \t]*#\+date:[ \t]*(.*?)[ \t\r]*$', re.IGNORECASE | re.MULTILINE)
TAGS_RE = re.compile(r'^[ \t]*#\+tags:[ \t]*(.*?)[ \t\r]*$', re.IGNORECASE | re.MULTILINE)
DIRECTIVE_LINE_RE = re.compile(r'^[ \t]*#\+\w+:.*(?:\r?\n|$)', re.MULTILINE)

# <2020-06-01>, <2020-06-01 Mon>, <2020-06-01 Mon 14:30>, <2020-06-01 14:30>
TIMESTAMP_RE = re.compile(
    r'^<(\d{4})-(\d{2})-(\d{2})'
    r'(?:\s+[^\W\d_]+\.?)?'
    r'(?:\s+(\d{1,2}):(\d{2}))?\s*>$'
)


def parse_timestamp(payload: str) -> datetime:
    """Parse an angle-bracketed timestamp; raise ValueError when malformed."""
    m = TIMESTAMP_RE.match(payload.strip())
    if not m:
        raise ValueError(f"malformed timestamp {payload!r}")
    year, month, day, hour, minute = m.groups()
    return datetime(int(year), int(month), int(day), int(hour or 0), int(minute or 0))


def extract_metadata(text: str) -> Metadata:
    """Return title, date and tags from the first matching directive lines of text."""
    m = TITLE_RE.search(text)
    if not m or not m.group(1):
        raise MissingTitleError("missing #+TITLE directive")
    title = m.group(1)

    m = DATE_RE.search(text)
    if not m:
        raise MissingOrInvalidDateError("missing #+DATE directive")
    try:
        date = parse_timestamp(m.group(1))
    except ValueError as e:
        raise MissingOrInvalidDateError(f"invalid #+DATE directive: {e}") from e

    m = TAGS_RE.search(text)
    tags = tuple(dict.fromkeys(m.group(1).split())) if m else ()
    return Metadata(title=title, date=date, tags=tags)


def strip_directives(text: str) -> str:
    """Remove every #+KEYWORD: line, leaving the markup body."""
    return DIRECTIVE_LINE_RE.sub('', text).strip('\n')


def discover_files(path: Path) -> list[Path]:
    """Return sorted source files directly under path, [] if path is missing."""
    path = Path(path)
    if path.is_file():
        return [path] if path.suffix.lower() in SOURCE_EXTENSIONS else []
    if not path.is_dir():
        return []
    return sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() in SOURCE_EXTENSIONS)


def parse_file(path: Path, is_draft: bool = False) -> Document:
    """Read a source file into a Document; extraction errors carry the path."""
    path = Path(path)
    raw = read_text(path)
    try:
        meta = extract_metadata(raw)
    except (MissingTitleError, MissingOrInvalidDateError) as e:
        raise type(e)(str(e), path) from None
    return Document(
        path=path,
        title=meta.title,
        date=meta.date,
        tags=meta.tags,
        is_draft=is_draft,
        markdown=strip_directives(raw),
    )
