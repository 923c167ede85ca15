# link_scout/report/links_file.py
"""
Plain-text dump of discovered links, one per line.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

from link_scout.crawler.urls import AbsoluteUrl
from link_scout.logger import logger


def write_links(links: Iterable[AbsoluteUrl], output_path: Union[str, Path]) -> Path:
    """Write *links* sorted, newline-separated; returns the path written."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    lines = sorted(str(url) for url in links)
    output.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
    logger.info("Wrote %d links to %s", len(lines), output)
    return output
