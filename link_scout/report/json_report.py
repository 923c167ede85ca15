# link_scout/report/json_report.py

"""
JSON report of a LinkScout check.

Serializes a CrawlResult (stats plus one record per probed link) to a file.
"""
from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List

from link_scout.crawler.models import CrawlResult


def outcome_records(result: CrawlResult) -> List[Dict[str, Any]]:
    """Plain dicts, failures first, then by URL."""
    ordered = sorted(result.outcomes, key=lambda o: (o.ok, str(o.url)))
    return [
        {
            "url": str(o.url),
            "ok": o.ok,
            "status": o.status,
            "kind": o.kind,
            "reason": o.reason,
        }
        for o in ordered
    ]


def report_data(result: CrawlResult, seed: str) -> Dict[str, Any]:
    return {
        "seed": seed,
        "total_links": result.total_links,
        "unique_links": result.unique_links,
        "reachable": result.reachable_count,
        "stats": asdict(result.stats),
        "outcomes": outcome_records(result),
    }


def render_json(result: CrawlResult, seed: str, output_path: Path | str) -> Path:
    """
    Save *result* as JSON at *output_path* and return the path.

    Example:
    ```python
    from link_scout.report.json_report import render_json
    report_path = render_json(result, "example.com", "reports/links.json")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", encoding="utf-8") as f:
        json.dump(report_data(result, seed), f, ensure_ascii=False, indent=2)

    return output
