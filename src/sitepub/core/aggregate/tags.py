"""Tag index: case-insensitive tag grouping and the per-tag headline page"""

import html
from typing import Iterable

from sitepub.config import SiteConfig
from sitepub.core.aggregate.entries import collect_entries, headline
from sitepub.core.models import Document, TagGroup, TagIndex
from sitepub.core.render import wrap_page
from sitepub.core.utils.slug import tag_slug


def build_tag_index(documents: Iterable[Document]) -> TagIndex:
    """Group non-draft documents by case-folded tag, keeping the first-seen spelling for display.

    A document listing the same tag twice (in any case) is grouped under it once.
    """
    index: TagIndex = {}
    for doc in documents:
        if doc.is_draft:
            continue
        seen = set()
        for tag in doc.tags:
            key = tag.casefold()
            if key in seen:
                continue
            seen.add(key)
            index.setdefault(key, TagGroup(name=tag)).documents.append(doc)
    return index


def build_tags(documents: Iterable[Document], config: SiteConfig) -> str:
    """Render one heading per tag followed by its posts newest first.

    Tags are emitted alphabetically (case-insensitive) so the page is reproducible.
    Tags that slug to the same anchor (e.g. "C" and "C++") get -2, -3, ... suffixes.
    """
    index = build_tag_index(documents)
    lines = ['<h1 class="tags-title">Tags</h1>']
    anchors = set()
    for key in sorted(index):
        group = index[key]
        anchor = base = tag_slug(group.name)
        n = 1
        while anchor in anchors:
            n += 1
            anchor = f"{base}-{n}"
        anchors.add(anchor)
        lines.append(f'<h2 class="tag" id="{anchor}">{html.escape(group.name)}</h2>')
        lines.extend(headline(e) for e in collect_entries(group.documents, config))
    return wrap_page(f"Tags - {config.site_title}", "\n".join(lines), config)
