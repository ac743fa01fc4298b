"""Shared entry collection and ordering for aggregate pages"""

import html
from pathlib import Path
from typing import Callable, Iterable, Optional, TypeVar

from sitepub.config import SiteConfig
from sitepub.core.models import AggregateEntry, Document, RenderedPage
from sitepub.core.render import extract_body, format_date
from sitepub.core.staleness import output_path_for
from sitepub.core.utils.fs import read_text


T = TypeVar("T", Document, AggregateEntry)

BodySource = Callable[[Document], str]


def sort_newest_first(items: Iterable[T]) -> list[T]:
    """Order by date descending; equal dates by file name ascending.

    Two stable sorts: the name pass fixes the order among equal dates and the
    reversed date pass keeps it.
    """
    by_name = sorted(items, key=lambda x: x.name)
    return sorted(by_name, key=lambda x: x.date, reverse=True)


def collect_entries(
    documents: Iterable[Document],
    config: SiteConfig,
    bodies: Optional[BodySource] = None,
    ) -> list[AggregateEntry]:
    """Build newest-first AggregateEntries; bodies are filled only when a BodySource is given."""
    return [
        AggregateEntry(
            date=doc.date,
            title=doc.title,
            url=config.url_for(doc.output_name),
            name=doc.name,
            body=bodies(doc) if bodies else None,
        )
        for doc in sort_newest_first(d for d in documents if not d.is_draft)
    ]


def headline(entry: AggregateEntry) -> str:
    """Date + linked title block used by the archive and tag pages."""
    return (
        f'<div class="headline">'
        f'<span class="headline-date">{format_date(entry.date)}</span> '
        f'<a href="{html.escape(entry.url)}">{html.escape(entry.title)}</a>'
        f'</div>'
    )


class BodyLookup:
    """Body fragments for aggregates: this run's renders first, else the page on disk."""

    def __init__(self, config: SiteConfig, rendered: dict[Path, RenderedPage] = None):
        self.config = config
        self.rendered = dict(rendered or {})

    def __call__(self, document: Document) -> str:
        page = self.rendered.get(document.path)
        if page is not None:
            return page.body
        out = output_path_for(document.path, self.config.output_path)
        return extract_body(read_text(out), out)
