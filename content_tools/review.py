"""Generate the blog review checklist table."""

from __future__ import annotations

import datetime as dt
import logging
import re
from pathlib import Path
from typing import Any, List, Optional, Tuple

import yaml
from bs4 import BeautifulSoup

from .config import ReviewTableConfig
from .models import BlogEntry

logger = logging.getLogger("content_tools.review")

FRONTMATTER_PATTERN = re.compile(r"^---\n(.*?)\n---", re.DOTALL)
MARKDOWN_H1_PATTERN = re.compile(r"^#\s+(.+)$", re.MULTILINE)

TABLE_HEADER = (
    "# Blog Review Table\n"
    "\n"
    "| Blog Title | Review Content | Review TLDR | Review Img Caption |\n"
    "|------------|----------------|-------------|-------------------|\n"
)
CHECKBOX = "- [ ]"
EPOCH = dt.date(1970, 1, 1)


def _parse_date(value: Any) -> Optional[dt.date]:
    """Normalise a ``publishedOn`` value loaded from YAML to a date."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return dt.datetime.fromisoformat(text).date()
    except ValueError:
        logger.debug("Ignoring unparsable publishedOn value %r", value)
        return None


def parse_frontmatter(text: str) -> Tuple[Optional[str], Optional[dt.date]]:
    """Return ``(title, published_on)`` from a leading YAML block, if present."""
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return None, None
    try:
        front_matter = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        logger.warning("Invalid front matter: %s", exc)
        return None, None
    if not isinstance(front_matter, dict):
        return None, None

    title = front_matter.get("title")
    title = str(title).strip() if title is not None else None
    return title or None, _parse_date(front_matter.get("publishedOn"))


def extract_heading(text: str) -> Optional[str]:
    """Find the first markdown ``# Heading``, falling back to an HTML ``<h1>``."""
    match = MARKDOWN_H1_PATTERN.search(text)
    if match:
        return match.group(1).strip()
    if "<h1" not in text:
        return None
    heading = BeautifulSoup(text, "html.parser").find("h1")
    if heading is None:
        return None
    return heading.get_text(" ", strip=True) or None


def collect_blog_entries(posts_root: Path) -> List[BlogEntry]:
    """Read every post below ``posts_root`` that has a usable title."""
    entries: List[BlogEntry] = []
    for markdown_path in posts_root.rglob("*.md"):
        if markdown_path.name == "index.md" or not markdown_path.is_file():
            continue
        try:
            text = markdown_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", markdown_path, exc)
            continue

        title, published_on = parse_frontmatter(text)
        title = title or extract_heading(text)
        if not title:
            logger.debug("No title found in %s", markdown_path)
            continue
        relative = markdown_path.relative_to(posts_root).with_suffix("")
        entries.append(
            BlogEntry(title=title, path=relative.as_posix(), published_on=published_on)
        )
    return entries


def sort_entries(entries: List[BlogEntry]) -> List[BlogEntry]:
    """Newest first; ties broken by title. Undated posts sort as the epoch."""
    by_title = sorted(entries, key=lambda entry: entry.title.casefold())
    return sorted(by_title, key=lambda entry: entry.published_on or EPOCH, reverse=True)


def render_review_table(entries: List[BlogEntry]) -> str:
    rows = [
        f"| {entry.title} | {CHECKBOX} | {CHECKBOX} | {CHECKBOX} |\n"
        for entry in entries
    ]
    return TABLE_HEADER + "".join(rows)


def write_review_table(config: ReviewTableConfig) -> Tuple[Path, int]:
    """Render the table for ``config.posts_root`` and write it to disk."""
    entries = sort_entries(collect_blog_entries(config.posts_root))
    output_path = config.output_path
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_review_table(entries), encoding="utf-8")
    logger.debug("Wrote %d review row(s) to %s", len(entries), output_path)
    return output_path, len(entries)
