"""Publish orchestration: per-document renders, then all aggregates together"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from sitepub.config import SiteConfig
from sitepub.core.aggregate.archive import build_archive
from sitepub.core.aggregate.entries import BodyLookup
from sitepub.core.aggregate.feed import build_feed
from sitepub.core.aggregate.index import build_index
from sitepub.core.aggregate.tags import build_tags
from sitepub.core.errors import OutputCollisionError, PublishError
from sitepub.core.models import Document, RenderedPage
from sitepub.core.parse import discover_files, parse_file
from sitepub.core.render import Renderer, make_renderer, render_document
from sitepub.core.staleness import is_stale, output_path_for
from sitepub.core.utils.fs import write_text
from sitepub.logging import get_logger


logger = get_logger("pipeline")


@dataclass
class PublishResult:
    """Outcome of one publish run."""
    rendered:   list[Path] = field(default_factory=list)    # pages written this run
    fresh:      list[Path] = field(default_factory=list)    # sources whose page was up to date
    failed:     list[tuple[Path, PublishError]] = field(default_factory=list)
    aggregates: list[Path] = field(default_factory=list)

    @property
    def aggregates_rebuilt(self) -> bool:
        return bool(self.aggregates)


def aggregate_paths(config: SiteConfig) -> list[Path]:
    out = config.output_path
    return [out / config.index_file, out / config.archive_file, out / config.tags_file, out / config.feed_file]


def check_output_collisions(sources: list[Path], config: SiteConfig) -> None:
    """Raise OutputCollisionError unless every source and aggregate owns a distinct output file."""
    owners: dict[Path, list[str]] = {}
    for path in aggregate_paths(config):
        owners.setdefault(path, []).append(f"{path.name} (aggregate)")
    for source in sources:
        owners.setdefault(output_path_for(source, config.output_path), []).append(str(source))
    clashes = {out: names for out, names in owners.items() if len(names) > 1}
    if clashes:
        detail = "; ".join(f"{out.name} <- {', '.join(names)}" for out, names in clashes.items())
        raise OutputCollisionError(f"output file written by more than one source: {detail}")


def _handle(error: PublishError, config: SiteConfig, result: PublishResult, source: Path) -> None:
    """Re-raise under the abort policy; otherwise log and record the failure."""
    if config.on_error == "abort":
        raise error
    logger.warning("Skipping %s: %s", source, error)
    result.failed.append((source, error))


def publish_document(
    path: Path,
    config: SiteConfig,
    renderer: Optional[Renderer] = None,
    is_draft: bool = False,
    ) -> RenderedPage:
    """Render and write one document's page unconditionally; aggregates are left untouched."""
    document = parse_file(path, is_draft=is_draft)
    page = render_document(document, renderer or make_renderer(config.parser_config), config)
    write_text(page.path, page.html)
    logger.info("Rendered %s -> %s", path, page.path)
    return page


def build_aggregates(
    documents: list[Document],
    config: SiteConfig,
    rendered: dict[Path, RenderedPage] = None,
    now: Optional[datetime] = None,
    ) -> dict[Path, str]:
    """Build all four aggregate outputs in memory, keyed by output path."""
    bodies = BodyLookup(config, rendered)
    index_path, archive_path, tags_path, feed_path = aggregate_paths(config)
    return {
        index_path:   build_index(documents, config, bodies),
        archive_path: build_archive(documents, config),
        tags_path:    build_tags(documents, config),
        feed_path:    build_feed(documents, config, bodies, now=now),
    }


def _load_posts(
    sources: list[Path],
    config: SiteConfig,
    result: PublishResult,
    rendered: dict[Path, RenderedPage],
    ) -> list[Document]:
    """Parse every post fresh; under the skip policy drop those that fail or lack a page body."""
    posts = []
    failed = {p for p, _ in result.failed}
    bodies = BodyLookup(config, rendered)
    for source in sources:
        if source in failed:
            continue
        try:
            doc = parse_file(source)
            if config.on_error == "skip":
                bodies(doc)
        except PublishError as e:
            _handle(e, config, result, source)
            continue
        posts.append(doc)
    return posts


def run_publish(
    config: SiteConfig,
    force: bool = False,
    renderer: Optional[Renderer] = None,
    now: Optional[datetime] = None,
    ) -> PublishResult:
    """Render stale posts and drafts, then rebuild every aggregate if any post changed.

    Aggregates are all-or-nothing: one re-rendered post regenerates all four. They
    are also rebuilt when any of their files is missing from the output directory.
    """
    renderer = renderer or make_renderer(config.parser_config)
    result = PublishResult()
    rendered: dict[Path, RenderedPage] = {}

    posts = discover_files(Path(config.posts_dir))
    drafts = discover_files(Path(config.drafts_dir))
    logger.debug("Discovered %d post(s) and %d draft(s)", len(posts), len(drafts))
    # Site layout error: fatal under either on_error policy.
    check_output_collisions(posts + drafts, config)

    post_changed = False
    for source, is_draft in [(p, False) for p in posts] + [(d, True) for d in drafts]:
        out = output_path_for(source, config.output_path)
        try:
            if not force and not is_stale(source, out):
                logger.debug("Fresh: %s", out)
                result.fresh.append(source)
                continue
            document = parse_file(source, is_draft=is_draft)
            page = render_document(document, renderer, config)
            write_text(page.path, page.html)
        except PublishError as e:
            _handle(e, config, result, source)
            continue
        logger.info("Rendered %s -> %s", source, page.path)
        rendered[source] = page
        result.rendered.append(page.path)
        post_changed = post_changed or not is_draft

    missing = [p for p in aggregate_paths(config) if not p.exists()]
    if not post_changed and not missing:
        logger.info("No post changed; aggregates left as they are")
        return result

    documents = _load_posts(posts, config, result, rendered)
    outputs = build_aggregates(documents, config, rendered, now=now)
    for path, text in outputs.items():
        write_text(path, text)
        logger.info("Wrote %s", path)
        result.aggregates.append(path)
    return result
