"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from sitepub.config import SiteConfig, load_config
from sitepub.core.errors import PublishError
from sitepub.core.models import Document
from sitepub.core.parse import discover_files, parse_file
from sitepub.core.pipeline import PublishResult, check_output_collisions, publish_document, run_publish
from sitepub.core.render import format_date
from sitepub.logging import configure_logging


ConfigOpt = Annotated[Optional[Path], typer.Option("--config", help="Path to config.yaml")]
OutOpt = Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None, path: Path = None) -> SiteConfig:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides, path=path)
    except ValueError as e:
        _fail(str(e))


def _echo_result(result: PublishResult) -> None:
    """Print per-file status and a summary line."""
    for path in result.rendered:
        typer.echo(f"  rendered: {path}")
    for path in result.aggregates:
        typer.echo(f"  aggregate: {path}")
    for path, error in result.failed:
        typer.echo(f"  failed: {path} ({error})")
    typer.echo(
        f"Build complete - "
        f"{len(result.rendered)} rendered, "
        f"{len(result.fresh)} fresh, "
        f"{len(result.failed)} failed, "
        f"{len(result.aggregates)} aggregates written"
    )


def build_cmd(
    force: Annotated[bool, typer.Option("--force", help="Re-render every document")] = False,
    out: OutOpt = None,
    posts: Annotated[Optional[str], typer.Option("--posts-dir", help="Published posts directory")] = None,
    drafts: Annotated[Optional[str], typer.Option("--drafts-dir", help="Drafts directory")] = None,
    index_length: Annotated[Optional[int], typer.Option("--index-length", help="Posts shown on the index")] = None,
    on_error: Annotated[Optional[str], typer.Option("--on-error", help="abort or skip")] = None,
    config: ConfigOpt = None,
    verbose: VerboseOpt = False,
    ):
    """Render stale documents, then rebuild index, archive, tags and feed if any post changed."""
    configure_logging(verbose=verbose)
    settings = _settings(overrides={
        "output_dir": out, "posts_dir": posts, "drafts_dir": drafts,
        "index_length": index_length, "on_error": on_error,
    }, path=config)
    try:
        result = run_publish(settings, force=force)
    except PublishError as e:
        _fail("Build failed", e)
    _echo_result(result)


def publish_cmd(
    path: Annotated[Path, typer.Argument(help="Source document to render")],
    draft: Annotated[bool, typer.Option("--draft", help="Treat the document as a draft")] = False,
    out: OutOpt = None,
    config: ConfigOpt = None,
    verbose: VerboseOpt = False,
    ):
    """Render a single document's page. Aggregates are not updated; run 'build' for that."""
    configure_logging(verbose=verbose)
    settings = _settings(overrides={"output_dir": out}, path=config)
    try:
        page = publish_document(path, settings, is_draft=draft)
    except PublishError as e:
        _fail("Publish failed", e)
    typer.echo(f"  {path} -> {page.path}")


def _echo_doc(doc: Document) -> None:
    tags = f" [{' '.join(doc.tags)}]" if doc.tags else ""
    marker = " (draft)" if doc.is_draft else ""
    typer.echo(f"{format_date(doc.date)}  {doc.title}{tags}{marker}  {doc.path}")


def list_cmd(
    drafts: Annotated[bool, typer.Option("--drafts", help="Include drafts")] = False,
    config: ConfigOpt = None,
    ):
    """List documents with their date, title and tags."""
    settings = _settings(path=config)
    sources = [(p, False) for p in discover_files(Path(settings.posts_dir))]
    if drafts:
        sources += [(p, True) for p in discover_files(Path(settings.drafts_dir))]
    if not sources:
        typer.echo("No documents found.")
        raise typer.Exit(1)
    try:
        check_output_collisions([p for p, _ in sources], settings)
    except PublishError as e:
        _fail("Output collision", e)
    for path, is_draft in sources:
        try:
            _echo_doc(parse_file(path, is_draft=is_draft))
        except PublishError as e:
            typer.echo(f"  invalid: {e}", err=True)
