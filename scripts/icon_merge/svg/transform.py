"""SVG transform pipeline: optimize, then annotate the root element."""

import logging
import re
from typing import Literal

from pydantic import BaseModel, Field

from ..naming import to_readable_name
from .optimizer import optimize_svg
from .utils import SVG_OPENING_TAG_RE, escape_xml, find_svg_root, rewrite_opening_tag

logger = logging.getLogger(__name__)

A11yStrategy = Literal["hidden", "img", "presentation", "none"]

A11Y_ATTRIBUTES = ("aria-hidden", "aria-label", "role")

# Root attribute carrying the registry identifier an icon came from
PROVENANCE_ATTRIBUTE = "data-icon"

LEADING_TITLE_RE = re.compile(r"\A<title>[^<]*</title>")


class TransformOptions(BaseModel):
    """Per-icon settings for the transform pipeline."""

    component_name: str = Field(..., description="Resolved component name")
    a11y: A11yStrategy = Field("none", description="Accessibility strategy")
    source: str | None = Field(None, description="Registry identifier to embed")
    title: str | None = Field(None, description="Text for an injected <title>")


def a11y_attributes(strategy: A11yStrategy, component_name: str) -> dict[str, str]:
    """Return the root attributes an accessibility strategy calls for."""
    if strategy == "hidden":
        return {"aria-hidden": "true"}
    if strategy == "img":
        return {"role": "img", "aria-label": to_readable_name(component_name)}
    if strategy == "presentation":
        return {"role": "presentation"}
    return {}


def inject_title(svg: str, title: str) -> str:
    """Insert <title> as the root's first child, replacing a leading one."""
    match = SVG_OPENING_TAG_RE.search(svg)
    if not match:
        return svg

    element = f"<title>{escape_xml(title, quote=False)}</title>"
    if match.group(2):
        # Self-closing root needs a body to hold the title
        opening = svg[match.start():match.end() - 2] + ">"
        return svg[:match.start()] + opening + element + "</svg>" + svg[match.end():]

    rest = LEADING_TITLE_RE.sub("", svg[match.end():], count=1)
    return svg[:match.end()] + element + rest


def transform_svg(svg: str, options: TransformOptions) -> str:
    """Run raw registry markup through the transform pipeline.

    Steps, in order:
    1. Extract the root and optimize it
    2. Replace accessibility attributes per strategy
    3. Embed provenance when a source is given
    4. Inject a <title> when one is requested

    Raises:
        MalformedSvgError: If the markup has no single <svg> root.
    """
    result = optimize_svg(find_svg_root(svg))

    result = rewrite_opening_tag(
        result,
        a11y_attributes(options.a11y, options.component_name),
        remove=A11Y_ATTRIBUTES,
    )

    if options.source:
        result = rewrite_opening_tag(result, {PROVENANCE_ATTRIBUTE: options.source})

    if options.title:
        result = inject_title(result, options.title)

    logger.debug("Transformed SVG for %s", options.component_name)
    return result
