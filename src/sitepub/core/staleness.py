"""Timestamp-based staleness detection for rendered pages"""

from pathlib import Path

from sitepub.core.errors import PublishIOError


def output_path_for(source: Path, output_dir: Path) -> Path:
    """Return the page path for a source document: output_dir / <stem>.html."""
    return Path(output_dir) / f"{Path(source).stem}.html"


def is_stale(source: Path, output: Path) -> bool:
    """True unless output exists and its mtime is strictly newer than the source's.

    Only modification times are compared, so touching an unchanged source forces a
    rebuild and clock skew between filesystems can make a page look fresh.
    """
    try:
        source_mtime = Path(source).stat().st_mtime_ns
    except OSError as e:
        raise PublishIOError(f"cannot stat source: {e.strerror or e}", source) from e
    try:
        output_mtime = Path(output).stat().st_mtime_ns
    except FileNotFoundError:
        return True
    except OSError as e:
        raise PublishIOError(f"cannot stat output: {e.strerror or e}", output) from e
    return not output_mtime > source_mtime
