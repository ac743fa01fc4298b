"""Anchor slugs for tag headings"""

import re


_NON_SLUG_RE = re.compile(r'[^a-z0-9-]')


def tag_slug(tag: str) -> str:
    """Return a fragment-safe anchor for a tag: 'Common Lisp' -> 'tag-common-lisp'."""
    s = re.sub(r'[\s_]+', '-', tag.strip().casefold())
    s = re.sub(r'-{2,}', '-', _NON_SLUG_RE.sub('', s)).strip('-')
    return f"tag-{s}" if s else "tag"
