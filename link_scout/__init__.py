# link_scout/__init__.py
"""
LinkScout package initializer.
Defines the package version and the main library entry points.
"""
__version__ = "0.1.0"

from link_scout.checker import LinkChecker
from link_scout.engine import check_links, dump_links

__all__ = ["__version__", "LinkChecker", "check_links", "dump_links"]
