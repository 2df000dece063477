"""Deletion of unused post images, with a dry-run plan mode."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from .models import ReconcileBatch, ReconciliationResult, RemovalSummary

logger = logging.getLogger("content_tools.remover")


def _plan(result: ReconciliationResult, summary: RemovalSummary, stream: TextIO) -> None:
    unused = sorted(result.unused_images)
    stream.write(f"  Would remove {len(unused)} unused image(s):\n")
    for name in unused:
        image_path = result.image_dir / name
        stream.write(f"    - {image_path}\n")
        summary.planned.append(image_path)


def _remove_directory_if_empty(directory: Path, summary: RemovalSummary, stream: TextIO) -> None:
    try:
        if any(directory.iterdir()):
            return
        directory.rmdir()
    except OSError as exc:
        logger.warning("Failed to remove directory %s: %s", directory, exc)
        stream.write(f"    ❌ Failed to remove directory: {directory} - {exc}\n")
        return
    summary.removed_directories.append(directory)
    stream.write(f"    🗂️  Removed empty directory: {directory}\n")


def _remove(result: ReconciliationResult, summary: RemovalSummary, stream: TextIO) -> None:
    unused = sorted(result.unused_images)
    stream.write(f"  Removing {len(unused)} unused image(s):\n")
    for name in unused:
        image_path = result.image_dir / name
        try:
            image_path.unlink()
        except OSError as exc:
            logger.warning("Failed to remove %s: %s", image_path, exc)
            stream.write(f"    ❌ Failed to remove: {name} - {exc}\n")
            summary.failed.append(image_path)
            continue
        stream.write(f"    ✅ Removed: {name}\n")
        summary.removed.append(image_path)

    # Only checked once every deletion for this directory has been attempted.
    _remove_directory_if_empty(result.image_dir, summary, stream)


def remove_unused_images(
    batch: ReconcileBatch,
    stream: TextIO,
    dry_run: bool = False,
) -> RemovalSummary:
    """Delete (or, in dry-run mode, list) every unused image in ``batch``.

    Only names in each result's ``unused_images`` are touched, so the scope is
    whatever the batch computed from the current tree.
    """
    summary = RemovalSummary(dry_run=dry_run)
    for result in batch.results:
        if not result.unused_images:
            continue
        stream.write(f"📄 {result.markdown_path}\n")
        if dry_run:
            _plan(result, summary, stream)
        else:
            _remove(result, summary, stream)
        stream.write("\n")
    return summary


def render_removal_summary(summary: RemovalSummary, stream: TextIO) -> None:
    stream.write("📊 Summary:\n")
    if summary.dry_run:
        stream.write(f"  Total unused images found: {len(summary.planned)}\n")
        if summary.planned:
            stream.write("\n💡 Run without --dry-run to actually remove these files.\n")
        else:
            stream.write("\n✨ No unused images found.\n")
        return

    stream.write(f"  Total images removed: {len(summary.removed)}\n")
    stream.write(f"  Empty directories removed: {len(summary.removed_directories)}\n")
    if summary.failed:
        stream.write(f"  Failed removals: {len(summary.failed)}\n")

    if summary.removed:
        stream.write(f"\n✅ Successfully cleaned up {len(summary.removed)} unused image(s)!\n")
    elif not summary.failed:
        stream.write("\n✨ No unused images found to remove.\n")
