"""Page rendering: markdown-it body conversion, page chrome, and body re-extraction"""

import html
from datetime import datetime
from pathlib import Path
from typing import Callable

from markdown_it import MarkdownIt

from sitepub.config import SiteConfig
from sitepub.core.errors import BodyMarkerNotFoundError
from sitepub.core.models import Document, RenderedPage
from sitepub.core.staleness import output_path_for


Renderer = Callable[[str], str]

# The body of a document page sits verbatim between these two markers. Aggregates
# re-read it from pages that were not rendered during the current run, so both
# strings must stay stable and must not otherwise occur in a page.
BODY_OPEN = '</h1>\n<div class="post-body">\n'
BODY_CLOSE = '\n</div>\n</div>\n<div id="postamble">'

PAGE_TEMPLATE = """\
<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" lang="en" xml:lang="en">
<head>
<meta charset="utf-8" />
<link rel="alternate" type="application/rss+xml" title="{site_title}" href="{feed_url}" />
<title>{title}</title>
</head>
<body>
{header}
{preamble}
<div id="content">
{content}
</div>
<div id="postamble">
{postamble}
</div>
</body>
</html>
"""


def make_renderer(preset: str = 'commonmark') -> Renderer:
    """Build the markup-to-HTML function for the given MarkdownIt preset name."""
    return MarkdownIt(preset, options_update={"linkify": False}).render


def format_date(value: datetime) -> str:
    return value.strftime('%Y-%m-%d')


def wrap_page(title: str, content: str, config: SiteConfig) -> str:
    """Surround content with the shared page chrome (head, header/preamble/postamble blobs)."""
    return PAGE_TEMPLATE.format(
        site_title=html.escape(config.site_title),
        feed_url=html.escape(config.url_for(config.feed_file)),
        title=html.escape(title),
        header=config.header,
        preamble=config.preamble,
        content=content,
        postamble=config.postamble,
    )


def render_body(document: Document, renderer: Renderer) -> str:
    """Convert the document's markup body to an HTML fragment."""
    return renderer(document.markdown)


def render_page(document: Document, body: str, config: SiteConfig) -> RenderedPage:
    """Assemble the standalone page for document around an already-rendered body."""
    # PAGE_TEMPLATE closes #content and opens #postamble right after this block,
    # which completes BODY_CLOSE.
    content = (
        f'<div class="post-date">{format_date(document.date)}</div>\n'
        f'<h1 class="post-title">{html.escape(document.title)}{BODY_OPEN}'
        f'{body}\n</div>'
    )
    page = wrap_page(document.title, content, config)
    return RenderedPage(
        path=output_path_for(document.path, config.output_path),
        html=page,
        body=body,
    )


def render_document(document: Document, renderer: Renderer, config: SiteConfig) -> RenderedPage:
    return render_page(document, render_body(document, renderer), config)


def extract_body(page_html: str, path: Path = None) -> str:
    """Return the body fragment embedded in a rendered document page.

    Raises BodyMarkerNotFoundError when the page lacks either marker, e.g. because
    it was produced by a different template.
    """
    start = page_html.find(BODY_OPEN)
    end = page_html.rfind(BODY_CLOSE)
    if start < 0 or end < start + len(BODY_OPEN):
        raise BodyMarkerNotFoundError("body markers not found in rendered page", path)
    return page_html[start + len(BODY_OPEN):end]
