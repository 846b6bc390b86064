"""Page renderers."""

from .dashboard import render_dashboard_page

__all__ = ["render_dashboard_page"]
