"""Asset directory naming convention and image listing."""

from __future__ import annotations

from pathlib import Path
from typing import AbstractSet, Set

from .config import IMAGE_EXTENSIONS


def asset_dir_for(markdown_path: Path) -> Path:
    """Return the sibling directory that holds a post's images.

    ``posts/2024-01-02-slug.md`` pairs with ``posts/2024-01-02-slug/``.
    """
    return markdown_path.parent / markdown_path.stem


def is_image_file(name: str, extensions: AbstractSet[str] = IMAGE_EXTENSIONS) -> bool:
    return Path(name).suffix.lower() in extensions


def scan_asset_directory(
    directory: Path,
    extensions: AbstractSet[str] = IMAGE_EXTENSIONS,
) -> Set[str]:
    """List image filenames directly inside ``directory``.

    A missing directory yields an empty set. Any other filesystem error,
    including ``directory`` being a regular file, propagates to the caller.
    """
    if not directory.exists():
        return set()
    return {
        entry.name
        for entry in directory.iterdir()
        if entry.is_file() and is_image_file(entry.name, extensions)
    }
