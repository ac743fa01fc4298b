"""RSS 2.0 feed with full post bodies"""

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from sitepub.config import SiteConfig
from sitepub.core.aggregate.entries import BodySource, collect_entries
from sitepub.core.models import AggregateEntry, Document


def rfc822(value: datetime) -> str:
    """Format a datetime for RSS; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value)


def cdata(text: str) -> str:
    """Wrap text in CDATA, splitting any embedded ']]>' terminator."""
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _item(entry: AggregateEntry) -> str:
    link = escape(entry.url)
    return f"""  <item>
    <title>{escape(entry.title)}</title>
    <link>{link}</link>
    <guid>{link}</guid>
    <pubDate>{rfc822(entry.date)}</pubDate>
    <description>{cdata(entry.body or "")}</description>
  </item>"""


def build_feed(
    documents: Iterable[Document],
    config: SiteConfig,
    bodies: BodySource,
    now: Optional[datetime] = None,
    ) -> str:
    """Render the feed XML; lastBuildDate is the build time, not a document date."""
    built = now or datetime.now(timezone.utc)
    items = "\n".join(_item(e) for e in collect_entries(documents, config, bodies))
    return f"""<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0">
<channel>
  <title>{escape(config.site_title)}</title>
  <link>{escape(config.url_for(config.index_file))}</link>
  <description>{escape(config.site_description)}</description>
  <lastBuildDate>{rfc822(built)}</lastBuildDate>
{items}
</channel>
</rss>
"""
