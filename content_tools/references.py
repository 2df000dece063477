"""Image reference extraction from markdown text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, Iterable, Pattern, Sequence, Set

ReferenceMatcher = Callable[[str], Set[str]]


def basename(reference: str) -> str:
    """Return the final path segment of an image reference."""
    reference = reference.strip()
    if not reference:
        return ""
    return PurePosixPath(reference).name


@dataclass(frozen=True)
class RegexMatcher:
    """Collect the basename of capture group 1 for every match of ``pattern``."""

    pattern: Pattern[str]

    def __call__(self, text: str) -> Set[str]:
        found: Set[str] = set()
        for match in self.pattern.finditer(text):
            name = basename(match.group(1) or "")
            if name:
                found.add(name)
        return found


# Applied independently; overlapping matches collapse in the result set.
DEFAULT_MATCHERS: Sequence[ReferenceMatcher] = (
    RegexMatcher(re.compile(r"!\[.*?\]\(\./([^)]+)\)")),
    RegexMatcher(re.compile(r"!\[.*?\]\(([^)]+)\)")),
    RegexMatcher(re.compile(r'src="([^"]+)"')),
    RegexMatcher(re.compile(r"src='([^']+)'")),
)


def extract_image_references(
    text: str,
    matchers: Iterable[ReferenceMatcher] = DEFAULT_MATCHERS,
) -> Set[str]:
    """Return the set of image basenames referenced by markdown ``text``."""
    images: Set[str] = set()
    for matcher in matchers:
        images.update(matcher(text))
    return images
