"""Trickle Template package: template invocations ready for rendering."""

from trickle.template.core import Template
from trickle.utils.html import Markup

__all__ = [
    "Markup",
    "Template",
]
