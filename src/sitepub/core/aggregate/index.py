"""Index page: the most recent posts in full, then a link to the archive"""

import html
from typing import Iterable

from sitepub.config import SiteConfig
from sitepub.core.aggregate.entries import BodySource, collect_entries, sort_newest_first
from sitepub.core.models import AggregateEntry, Document
from sitepub.core.render import format_date, wrap_page


def _post_block(entry: AggregateEntry) -> str:
    return (
        f'<div class="post">\n'
        f'<div class="post-date">{format_date(entry.date)}</div>\n'
        f'<h2 class="post-title"><a href="{html.escape(entry.url)}">{html.escape(entry.title)}</a></h2>\n'
        f'<div class="post-body">\n{entry.body}\n</div>\n'
        f'</div>'
    )


def build_index(documents: Iterable[Document], config: SiteConfig, bodies: BodySource) -> str:
    """Render the first index_length posts newest first, followed by an "Older posts" link."""
    # Bodies are only looked up for the posts that make the cut.
    recent = sort_newest_first(d for d in documents if not d.is_draft)[:config.index_length]
    blocks = [_post_block(e) for e in collect_entries(recent, config, bodies)]
    archive_url = html.escape(config.url_for(config.archive_file))
    blocks.append(f'<p class="older-posts"><a href="{archive_url}">Older posts</a></p>')
    return wrap_page(config.site_title, "\n".join(blocks), config)
