"""Command-line entry points for the content maintenance tools."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Sequence

from .config import (
    DEFAULT_MARKDOWN_PATTERN,
    DEFAULT_REVIEW_OUTPUT,
    DEFAULT_SITE_DOMAIN,
    LinkCheckConfig,
    ReconcileConfig,
    ReviewTableConfig,
    default_content_root,
)
from .links import validate_links_in_file
from .reconcile import ContentRootNotFound, reconcile_tree
from .remover import remove_unused_images, render_removal_summary
from .report import render_report
from .review import write_review_table

logger = logging.getLogger("content_tools.cli")


def _ensure_command_prefix(argv: Sequence[str], command: str) -> Sequence[str]:
    return (command, *argv)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _add_scan_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Content root to scan (default: $CONTENT_ROOT or content/posts)",
    )
    parser.add_argument(
        "--pattern",
        default=DEFAULT_MARKDOWN_PATTERN,
        help="Glob, relative to the root, that selects markdown posts",
    )
    _add_common_arguments(parser)


def _add_remove_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the images that would be removed without deleting anything",
    )
    _add_scan_arguments(parser)


def _add_link_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", type=Path, help="Markdown file whose links should be checked")
    parser.add_argument(
        "--domain",
        default=DEFAULT_SITE_DOMAIN,
        help="Only links on this domain are checked",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=15.0,
        help="Per-request timeout in seconds",
    )
    _add_common_arguments(parser)


def _add_review_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--posts-root",
        type=Path,
        default=None,
        help="Directory of posts to list (default: $CONTENT_ROOT or content/posts)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(DEFAULT_REVIEW_OUTPUT),
        help="Markdown file the review table is written to",
    )
    _add_common_arguments(parser)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="content-tools",
        description="Keep a markdown content tree consistent: images, links and review tracking.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Report unused and missing images for every post"
    )
    _add_scan_arguments(check_parser)

    remove_parser = subparsers.add_parser(
        "remove", help="Delete images that no post references"
    )
    _add_remove_arguments(remove_parser)

    links_parser = subparsers.add_parser(
        "links", help="Validate same-site links in one markdown file"
    )
    _add_link_arguments(links_parser)

    review_parser = subparsers.add_parser(
        "review", help="Generate the blog review checklist table"
    )
    _add_review_arguments(review_parser)
    return parser


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    argv = list(sys.argv[1:] if argv is None else argv)
    return build_parser().parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def _reconcile_config(args: argparse.Namespace) -> ReconcileConfig:
    return ReconcileConfig(
        content_root=args.root if args.root is not None else default_content_root(),
        pattern=args.pattern,
    )


def _run_check(args: argparse.Namespace) -> int:
    config = _reconcile_config(args)
    sys.stdout.write("Checking for unused images in markdown posts...\n\n")
    try:
        batch = reconcile_tree(config)
    except ContentRootNotFound as exc:
        logger.error("%s", exc)
        return 1
    render_report(batch, sys.stdout)
    # Advisory only: findings never fail the check.
    return 0


def _run_remove(args: argparse.Namespace) -> int:
    config = _reconcile_config(args)
    if args.dry_run:
        sys.stdout.write("🔍 DRY RUN: Finding unused images (no files will be deleted)...\n\n")
    else:
        sys.stdout.write("Finding and removing unused images...\n\n")
    try:
        batch = reconcile_tree(config)
    except ContentRootNotFound as exc:
        logger.error("%s", exc)
        return 1
    summary = remove_unused_images(batch, sys.stdout, dry_run=args.dry_run)
    render_removal_summary(summary, sys.stdout)
    if summary.dry_run:
        sys.stdout.write("\nDry run complete: no files will be deleted.\n")
    logger.debug(
        "Remove finished (%d removed, %d failed, %d skipped post(s))",
        len(summary.removed),
        len(summary.failed),
        len(batch.failures),
    )
    return 0


def _run_links(args: argparse.Namespace) -> int:
    config = LinkCheckConfig(domain=args.domain, timeout=args.timeout)
    path = args.path.expanduser().resolve()
    try:
        ok = validate_links_in_file(path, config, sys.stdout)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Could not read %s: %s", path, exc)
        return 1
    return 0 if ok else 1


def _run_review(args: argparse.Namespace) -> int:
    config = ReviewTableConfig(
        posts_root=args.posts_root if args.posts_root is not None else default_content_root(),
        output_path=args.output,
    )
    if not config.posts_root.is_dir():
        logger.error("Posts root does not exist: %s", config.posts_root)
        return 1
    sys.stdout.write("🚀 Generating blog review table...\n")
    try:
        output_path, count = write_review_table(config)
    except OSError as exc:
        logger.error("Error generating review table: %s", exc)
        return 1
    sys.stdout.write(f"✅ Review table generated with {count} blog entries\n")
    sys.stdout.write(f"📄 File saved to: {output_path}\n")
    return 0


_RUNNERS: Dict[str, Callable[[argparse.Namespace], int]] = {
    "check": _run_check,
    "remove": _run_remove,
    "links": _run_links,
    "review": _run_review,
}


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    return _RUNNERS[args.command](args)


def _command_entry(command: str) -> Callable[[Optional[Sequence[str]]], int]:
    def entry(argv: Optional[Sequence[str]] = None) -> int:
        argv = list(sys.argv[1:] if argv is None else argv)
        return main(_ensure_command_prefix(argv, command))

    entry.__name__ = f"{command}_main"
    return entry


check_unused_images = _command_entry("check")
remove_unused_images_main = _command_entry("remove")
validate_links = _command_entry("links")
generate_review_table = _command_entry("review")


if __name__ == "__main__":
    sys.exit(main())
