"""Markdown discovery and per-post image reconciliation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import AbstractSet, List

from .assets import asset_dir_for, scan_asset_directory
from .config import ReconcileConfig
from .models import (
    FileFailure,
    MarkdownDocument,
    ReconcileBatch,
    ReconciliationResult,
    as_frozenset,
)
from .references import extract_image_references

logger = logging.getLogger("content_tools.reconcile")


class ContentRootNotFound(FileNotFoundError):
    """Raised when the content root to scan does not exist."""


def reconcile(
    markdown_path: Path,
    image_dir: Path,
    referenced: AbstractSet[str],
    actual: AbstractSet[str],
) -> ReconciliationResult:
    """Pair the referenced and on-disk image sets for one post."""
    return ReconciliationResult(
        markdown_path=markdown_path,
        image_dir=image_dir,
        referenced_images=as_frozenset(referenced),
        actual_images=as_frozenset(actual),
    )


def discover_markdown_files(config: ReconcileConfig) -> List[Path]:
    """Glob markdown files under the content root in filesystem order."""
    root = config.content_root
    if not root.is_dir():
        raise ContentRootNotFound(f"Content root does not exist: {root}")
    return [path for path in root.glob(config.pattern) if path.is_file()]


def analyze_markdown(markdown_path: Path, config: ReconcileConfig) -> ReconciliationResult:
    """Read a post, scan its asset directory and reconcile the two."""
    document = MarkdownDocument.read(markdown_path)
    referenced = extract_image_references(document.text)
    image_dir = asset_dir_for(markdown_path)
    actual = scan_asset_directory(image_dir, config.image_extensions)
    logger.debug(
        "%s: %d referenced, %d on disk in %s",
        markdown_path,
        len(referenced),
        len(actual),
        image_dir,
    )
    return reconcile(markdown_path, image_dir, referenced, actual)


def reconcile_tree(config: ReconcileConfig) -> ReconcileBatch:
    """Analyse every discovered post, isolating failures per file."""
    batch = ReconcileBatch()
    markdown_files = discover_markdown_files(config)
    logger.debug("Discovered %d markdown file(s) under %s", len(markdown_files), config.content_root)
    for markdown_path in markdown_files:
        try:
            result = analyze_markdown(markdown_path, config)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping %s: %s", markdown_path, exc)
            batch.failures.append(FileFailure(markdown_path, exc))
            continue
        batch.results.append(result)
    return batch
