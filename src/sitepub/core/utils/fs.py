"""File read/write primitives with atomic replacement"""

import os
import tempfile
from pathlib import Path

from sitepub.core.errors import PublishIOError


def read_text(path: Path) -> str:
    """Read a UTF-8 text file, wrapping OS and decoding errors in PublishIOError."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise PublishIOError(f"not valid UTF-8: {e.reason} at byte {e.start}", path) from e
    except OSError as e:
        raise PublishIOError(f"cannot read file: {e.strerror or e}", path) from e


def write_text(path: Path, text: str) -> Path:
    """Write text to path via a temp file + os.replace so readers never see a partial file."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise PublishIOError(f"cannot write file: {e.strerror or e}", path) from e
    return path
