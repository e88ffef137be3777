"""Pattern-based rewrite rules for CSS and HTML."""

from .css import rewrite_css
from .html import rewrite_html

__all__ = ["rewrite_css", "rewrite_html"]
