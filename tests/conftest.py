from pathlib import Path
from typing import Dict, Optional

import pytest

from content_tools.config import ReconcileConfig


@pytest.fixture
def posts_root(tmp_path: Path) -> Path:
    root = tmp_path / "content" / "posts"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def make_post(posts_root: Path):
    """Create ``<name>.md`` with ``text`` and a sibling asset directory of ``files``."""

    def _make(name: str, text: str, files: Optional[Dict[str, bytes]] = None) -> Path:
        markdown_path = posts_root / f"{name}.md"
        markdown_path.parent.mkdir(parents=True, exist_ok=True)
        markdown_path.write_text(text, encoding="utf-8")
        if files is not None:
            asset_dir = markdown_path.parent / markdown_path.stem
            asset_dir.mkdir(exist_ok=True)
            for filename, data in files.items():
                (asset_dir / filename).write_bytes(data)
        return markdown_path

    return _make


@pytest.fixture
def config(posts_root: Path) -> ReconcileConfig:
    return ReconcileConfig(content_root=posts_root)
