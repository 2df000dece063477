"""Human-readable rendering of reconciliation results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, TextIO

from .models import ReconcileBatch, ReconciliationResult


@dataclass(frozen=True)
class ReportTotals:
    unused: int
    missing: int


def summarize(results: Iterable[ReconciliationResult]) -> ReportTotals:
    unused = 0
    missing = 0
    for result in results:
        unused += len(result.unused_images)
        missing += len(result.missing_images)
    return ReportTotals(unused=unused, missing=missing)


def _write_names(stream: TextIO, heading: str, names: Iterable[str]) -> None:
    names = sorted(names)
    stream.write(f"  {heading} ({len(names)}):\n")
    for name in names:
        stream.write(f"    - {name}\n")


def render_report(batch: ReconcileBatch, stream: TextIO) -> ReportTotals:
    """Write per-post findings followed by batch totals."""
    for result in batch.results:
        if not result.has_findings:
            continue
        stream.write(f"📄 {result.markdown_path}\n")
        if result.unused_images:
            _write_names(stream, "❌ Unused images", result.unused_images)
        if result.missing_images:
            _write_names(stream, "⚠️  Missing images", result.missing_images)
        stream.write("\n")

    if batch.failures:
        stream.write(f"🚫 Could not process {len(batch.failures)} file(s):\n")
        for failure in batch.failures:
            stream.write(f"    - {failure.markdown_path}: {failure.error}\n")
        stream.write("\n")

    totals = summarize(batch.results)
    stream.write("📊 Summary:\n")
    stream.write(f"  Total unused images: {totals.unused}\n")
    stream.write(f"  Total missing images: {totals.missing}\n")

    if totals.unused:
        stream.write(
            f"\n💡 You can remove {totals.unused} unused image(s) to clean up your repository.\n"
        )
    if totals.missing:
        stream.write(
            f"\n⚠️  You have {totals.missing} missing image(s) that are referenced but don't exist.\n"
        )
    return totals
