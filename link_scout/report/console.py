# File: link_scout/report/console.py
"""link_scout.report.console: terminal output of a running check (tqdm + click)."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

import click
from tqdm import tqdm

from link_scout.crawler.models import CrawlResult, LinkStats, ProbeOutcome
from link_scout.crawler.urls import AbsoluteUrl


def format_outcome(outcome: ProbeOutcome) -> str:
    """One human-readable line per outcome."""
    verdict = "is valid" if outcome.ok else "failed"
    reason = f" {outcome.reason}" if outcome.reason else ""
    return f"{outcome.url} {verdict} ({outcome.status}{reason})"


class ConsoleReporter:
    """Prints failures (and successes with *show_ok*) while a tqdm bar tracks progress.

    Call it with ``(url, outcome)`` once per completed probe.
    """

    def __init__(self, show_ok: bool = False, *, show_progress: bool = True, stream: Optional[TextIO] = None) -> None:
        self.show_ok = show_ok
        self.show_progress = show_progress
        self.stream = stream
        self.progress: tqdm = tqdm(disable=True)

    def start(self, stats: LinkStats) -> None:
        click.echo(f"Checking {stats.unique} links on {stats.domains} domains for dead links...", file=self.stream)
        self.progress = tqdm(
            total=stats.unique,
            unit=" link",
            file=sys.stderr,
            leave=False,
            disable=not self.show_progress,
        )

    def __call__(self, url: AbsoluteUrl, outcome: ProbeOutcome) -> None:
        if outcome.ok and not self.show_ok:
            return
        line = click.style(format_outcome(outcome), fg="green" if outcome.ok else "red", bold=True)
        tqdm.write(line, file=self.stream)

    def close(self) -> None:
        self.progress.close()

    def summary(self, result: CrawlResult) -> None:
        stats = result.stats
        click.echo(
            f"Links: {stats.parsed} parsed, {stats.valid} valid, "
            f"{stats.filtered} after filter, {stats.unique} unique",
            file=self.stream,
        )
        click.echo(f"Got {result.reachable_count}/{result.unique_links} valid links", file=self.stream)


__all__ = ["ConsoleReporter", "format_outcome"]
