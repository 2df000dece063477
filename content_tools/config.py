"""Configuration objects and constants for the content maintenance tools."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet

DEFAULT_CONTENT_ROOT = "content/posts"
DEFAULT_MARKDOWN_PATTERN = "**/*.md"
IMAGE_EXTENSIONS: FrozenSet[str] = frozenset(
    {".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".avif"}
)

DEFAULT_SITE_DOMAIN = "sujeet.pro"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

DEFAULT_REVIEW_OUTPUT = "content/raw/review.md"


def default_content_root() -> Path:
    """Return the content root, honouring the ``CONTENT_ROOT`` override."""
    override = os.getenv("CONTENT_ROOT")
    return Path(override).expanduser() if override else Path(DEFAULT_CONTENT_ROOT)


@dataclass
class ReconcileConfig:
    """Settings that control markdown discovery and asset scanning."""

    content_root: Path = field(default_factory=default_content_root)
    pattern: str = DEFAULT_MARKDOWN_PATTERN
    image_extensions: FrozenSet[str] = IMAGE_EXTENSIONS


@dataclass
class LinkCheckConfig:
    """Settings for validating same-site links in a markdown file."""

    domain: str = DEFAULT_SITE_DOMAIN
    timeout: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class ReviewTableConfig:
    """Where to read posts from and where to write the review checklist."""

    posts_root: Path = field(default_factory=default_content_root)
    output_path: Path = Path(DEFAULT_REVIEW_OUTPUT)
