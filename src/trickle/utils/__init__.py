"""Utility modules for trickle."""

from trickle.utils.html import Markup, html_escape

__all__ = ["Markup", "html_escape"]
