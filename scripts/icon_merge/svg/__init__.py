"""SVG normalization and annotation for generated icon components."""

from .utils import escape_xml, find_svg_root, parse_attributes, format_attributes, rewrite_opening_tag
from .optimizer import optimize_svg
from .transform import (
    A11yStrategy,
    PROVENANCE_ATTRIBUTE,
    TransformOptions,
    a11y_attributes,
    inject_title,
    transform_svg,
)

__all__ = [
    # Utils
    "escape_xml",
    "find_svg_root",
    "parse_attributes",
    "format_attributes",
    "rewrite_opening_tag",
    # Optimizer
    "optimize_svg",
    # Transform
    "A11yStrategy",
    "PROVENANCE_ATTRIBUTE",
    "TransformOptions",
    "a11y_attributes",
    "inject_title",
    "transform_svg",
]
