"""XML and SVG utility functions."""

import re

from ..errors import MalformedSvgError

# Outermost <svg> element, greedy so nested <svg> children stay inside
SVG_ROOT_RE = re.compile(r"<svg\b[\s\S]*</svg>|<svg\b[^>]*/>")

# Root opening tag: group 1 holds attributes, group 2 a self-closing slash
SVG_OPENING_TAG_RE = re.compile(r"<svg\b([^>]*?)\s*(/?)>")

ATTR_RE = re.compile(r'([^\s=/>"]+)\s*=\s*"([^"]*)"')


def escape_xml(text: str, quote: bool = True) -> str:
    """Escape XML special characters.

    Matches lxml serialization so re-optimizing injected markup is stable:
    double quotes are only escaped inside attribute values.
    """
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if quote:
        text = text.replace('"', "&quot;")
    return text


def find_svg_root(markup: str) -> str:
    """Return the <svg>...</svg> span of markup.

    Raises:
        MalformedSvgError: If no root element is present.
    """
    match = SVG_ROOT_RE.search(markup)
    if not match:
        raise MalformedSvgError("No <svg> root element found")
    return match.group(0)


def parse_attributes(attr_text: str) -> dict[str, str]:
    """Parse ``name="value"`` pairs, keeping values escaped and in order."""
    return {m.group(1): m.group(2) for m in ATTR_RE.finditer(attr_text)}


def format_attributes(attrs: dict[str, str]) -> str:
    """Render attributes with namespace declarations first, the rest sorted."""
    namespaces = [(k, v) for k, v in attrs.items() if k == "xmlns" or k.startswith("xmlns:")]
    others = sorted(
        ((k, v) for k, v in attrs.items() if not (k == "xmlns" or k.startswith("xmlns:"))),
        key=lambda item: item[0],
    )
    return " ".join(f'{k}="{v}"' for k, v in namespaces + others)


def rewrite_opening_tag(
    svg: str,
    update: dict[str, str] | None = None,
    remove: tuple[str, ...] = (),
) -> str:
    """Set and remove attributes on the root <svg> opening tag.

    Existing keys are overwritten rather than duplicated. Values in
    ``update`` are raw text and get escaped here.
    """
    match = SVG_OPENING_TAG_RE.search(svg)
    if not match:
        raise MalformedSvgError("No <svg> opening tag found")

    attrs = parse_attributes(match.group(1))
    for key in remove:
        attrs.pop(key, None)
    for key, value in (update or {}).items():
        attrs[key] = escape_xml(value)

    rendered = format_attributes(attrs)
    tag = "<svg" + (f" {rendered}" if rendered else "") + match.group(2) + ">"
    return svg[: match.start()] + tag + svg[match.end():]
