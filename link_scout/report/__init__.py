# File: link_scout/report/__init__.py
"""link_scout.report: console, JSON, HTML and plain-text output of a check."""

from .console import ConsoleReporter, format_outcome
from .html_report import render_html
from .json_report import render_json
from .links_file import write_links

__all__ = ["ConsoleReporter", "format_outcome", "render_json", "render_html", "write_links"]
