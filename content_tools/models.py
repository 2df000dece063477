"""Data models shared by the reconciler, link validator and review table."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, FrozenSet, List, Optional


@dataclass(frozen=True)
class MarkdownDocument:
    """A markdown post read once from disk."""

    path: Path
    text: str

    @classmethod
    def read(cls, path: Path) -> "MarkdownDocument":
        return cls(path=path, text=path.read_text(encoding="utf-8"))


@dataclass(frozen=True)
class ReconciliationResult:
    """Referenced versus on-disk images for one markdown post.

    ``unused_images`` and ``missing_images`` are derived from the two input
    sets, so they are always subsets of ``actual_images`` and
    ``referenced_images`` respectively.
    """

    markdown_path: Path
    image_dir: Path
    referenced_images: FrozenSet[str]
    actual_images: FrozenSet[str]

    @property
    def unused_images(self) -> FrozenSet[str]:
        return self.actual_images - self.referenced_images

    @property
    def missing_images(self) -> FrozenSet[str]:
        return self.referenced_images - self.actual_images

    @property
    def has_findings(self) -> bool:
        return bool(self.unused_images or self.missing_images)


@dataclass(frozen=True)
class FileFailure:
    """A markdown post that could not be analysed."""

    markdown_path: Path
    error: Exception


@dataclass
class ReconcileBatch:
    """Results for every discovered markdown file, in discovery order."""

    results: List[ReconciliationResult] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)


@dataclass
class RemovalSummary:
    """Outcome of a remove run; counts reflect completed operations only."""

    dry_run: bool
    planned: List[Path] = field(default_factory=list)
    removed: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)
    removed_directories: List[Path] = field(default_factory=list)


@dataclass
class LinkCheckResult:
    """HTTP status (or error) for a single checked URL."""

    url: str
    status: Optional[int]
    error: Optional[str] = None
    redirected: bool = False


@dataclass
class BlogEntry:
    """A post listed in the review table."""

    title: str
    path: str
    published_on: Optional[dt.date] = None


def as_frozenset(values: AbstractSet[str]) -> FrozenSet[str]:
    return values if isinstance(values, frozenset) else frozenset(values)
