"""Inline marked <script> and stylesheet <link> assets at build time."""

from .attributes import format_attributes, parse_attributes
from .components import transform_component_source
from .session import InlineSession
from .transform import atransform_html, transform_html

__version__ = "0.1.0"

__all__ = [
    "InlineSession",
    "atransform_html",
    "format_attributes",
    "parse_attributes",
    "transform_component_source",
    "transform_html",
]
