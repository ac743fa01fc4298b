"""Archive page: every post as a dated headline, newest first"""

from typing import Iterable

from sitepub.config import SiteConfig
from sitepub.core.aggregate.entries import collect_entries, headline
from sitepub.core.models import Document
from sitepub.core.render import wrap_page


def build_archive(documents: Iterable[Document], config: SiteConfig) -> str:
    lines = ['<h1 class="archive-title">Archive</h1>']
    lines.extend(headline(e) for e in collect_entries(documents, config))
    return wrap_page(f"Archive - {config.site_title}", "\n".join(lines), config)
