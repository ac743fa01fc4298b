"""Site configuration: SiteConfig schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "SITEPUB_"


class SiteConfig(BaseModel):
    """Immutable per-run settings, threaded explicitly through every pipeline step."""
    model_config = ConfigDict(frozen=True)

    publish_url:      str = Field(default="", description="Absolute base URL of the published site")
    site_title:       str = "sitepub"
    site_description: str = Field(default="", description="Feed channel description")
    output_dir:       str = Field(default="public", description="Directory for generated pages")
    posts_dir:        str = Field(default="posts",  description="Directory of published source documents")
    drafts_dir:       str = Field(default="drafts", description="Directory of draft source documents")
    index_file:       str = "index.html"
    archive_file:     str = "archive.html"
    tags_file:        str = "tags.html"
    feed_file:        str = "rss.xml"
    index_length:     int = Field(default=5, ge=0, description="Number of full posts on the index page")
    header:           str = Field(default="", description="Opaque HTML inserted after <body>")
    preamble:         str = Field(default="", description="Opaque HTML inserted before page content")
    postamble:        str = Field(default="", description="Opaque HTML inserted after page content")
    parser_config:    str = Field(default="commonmark", description="MarkdownIt preset name")
    on_error:         str = Field(default="abort", pattern="^(abort|skip)$",
                                  description="abort the run or skip the document on a per-document error")

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    def url_for(self, name: str) -> str:
        """Return the absolute URL of an output file name."""
        return f"{self.publish_url.rstrip('/')}/{name}"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid {path.name}: expected a mapping, got {type(data).__name__}")
    return data


def load_config(overrides: dict[str, Any] = None, path: Path = None) -> SiteConfig:
    """Load SiteConfig from config.yaml, then SITEPUB_<FIELD> env vars, then non-None CLI overrides."""
    config_path = Path(path) if path else Path(CONFIG_FILE)
    data: dict[str, Any] = {}
    if config_path.exists():
        data = _read_yaml(config_path)
    elif path:
        raise ValueError(f"Config file not found: {config_path}")

    for name in SiteConfig.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return SiteConfig(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
