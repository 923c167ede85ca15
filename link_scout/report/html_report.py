# File: link_scout/report/html_report.py
"""link_scout.report.html_report: HTML report of a check, rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from link_scout.crawler.models import CrawlResult
from link_scout.report.json_report import report_data

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def render_html(
    result: CrawlResult,
    seed: str,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Render the HTML report and save it at *output_path*.

    Args:
        result: outcome of a check.
        seed: the seed URL as given by the user.
        output_path: target HTML file.
        template_dir: directory holding ``report.html.j2``; the bundled
            template is used when omitted.

    Returns:
        Path of the written file.
    """
    template_dir = Path(template_dir) if template_dir is not None else TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = report_data(result, seed)
    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
