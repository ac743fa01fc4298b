"""Intermediate data models for the publish pipeline"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Metadata:
    """Directive values read from a document's source text."""
    title: str
    date:  datetime
    tags:  tuple[str, ...] = ()


@dataclass(frozen=True)
class Document:
    """One source document, read fresh on every run; not persisted."""
    path:     Path
    title:    str
    date:     datetime
    tags:     tuple[str, ...] = ()
    is_draft: bool = False
    markdown: str = ""          # body with directive lines removed

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def output_name(self) -> str:
        return f"{self.path.stem}.html"


@dataclass(frozen=True)
class RenderedPage:
    """Full HTML page for one document plus the body fragment embedded in it."""
    path: Path
    html: str
    body: str


@dataclass(frozen=True)
class AggregateEntry:
    """Per-document row used while assembling an aggregate page."""
    date:  datetime
    title: str
    url:   str
    name:  str
    body:  Optional[str] = None    # None for headline-only aggregates


@dataclass
class TagGroup:
    """Documents carrying one tag; display name is the first-seen spelling."""
    name:      str
    documents: list[Document] = field(default_factory=list)


# Keyed by the case-folded tag name.
TagIndex = dict[str, TagGroup]
