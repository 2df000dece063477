from pathlib import Path

import pytest

from content_tools.assets import asset_dir_for, is_image_file, scan_asset_directory


def test_asset_dir_is_sibling_named_after_stem():
    markdown_path = Path("content/posts/web/2024-01-24-rollback.md")
    assert asset_dir_for(markdown_path) == Path("content/posts/web/2024-01-24-rollback")


def test_image_extensions_are_case_insensitive():
    assert is_image_file("photo.PNG")
    assert is_image_file("anim.Gif")
    assert is_image_file("hero.avif")
    assert not is_image_file("notes.txt")
    assert not is_image_file("README")


def test_missing_directory_scans_as_empty(tmp_path: Path):
    assert scan_asset_directory(tmp_path / "absent") == set()


def test_scan_lists_only_direct_image_files(tmp_path: Path):
    directory = tmp_path / "post"
    directory.mkdir()
    for name in ("a.png", "B.JPEG", "c.svg", "notes.txt", "script.ts"):
        (directory / name).write_text("x")
    nested = directory / "nested"
    nested.mkdir()
    (nested / "deep.png").write_text("x")
    (directory / "folder.png").mkdir()

    assert scan_asset_directory(directory) == {"a.png", "B.JPEG", "c.svg"}


def test_scan_of_a_regular_file_raises(tmp_path: Path):
    not_a_dir = tmp_path / "post"
    not_a_dir.write_text("oops")
    with pytest.raises(NotADirectoryError):
        scan_asset_directory(not_a_dir)
