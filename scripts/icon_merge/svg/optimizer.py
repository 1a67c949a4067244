"""Structural SVG optimization.

Normalizes registry markup so that generated components are compact and
stable across runs:

- Comments, processing instructions and <metadata> are removed
- Elements and attributes from editor namespaces are removed
- Presentation properties in ``style`` become attributes
- Adjacent stroke-only <path> siblings with identical attributes merge
- Attributes are sorted by name

Running the optimizer on its own output returns the same text.
"""

from lxml import etree

from ..errors import MalformedSvgError

# SVG namespace constants
SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_NS = "http://www.w3.org/XML/1998/namespace"

ATTRIBUTE_PREFIXES = {XLINK_NS: "xlink", XML_NS: "xml"}
KEPT_ATTRIBUTE_NAMESPACES = {None, XLINK_NS, XML_NS}

DROPPED_ELEMENTS = {"metadata"}

PRESENTATION_ATTRIBUTES = frozenset({
    "clip-rule",
    "color",
    "display",
    "fill",
    "fill-opacity",
    "fill-rule",
    "opacity",
    "stroke",
    "stroke-dasharray",
    "stroke-dashoffset",
    "stroke-linecap",
    "stroke-linejoin",
    "stroke-miterlimit",
    "stroke-opacity",
    "stroke-width",
    "visibility",
})

# Paths carrying any of these keep their own element
UNMERGEABLE_PATH_ATTRIBUTES = frozenset({
    "id",
    "clip-path",
    "mask",
    "marker-start",
    "marker-mid",
    "marker-end",
    "style",
})

_PARSER = etree.XMLParser(
    remove_comments=True,
    remove_pis=True,
    remove_blank_text=True,
    resolve_entities=False,
    no_network=True,
)


def optimize_svg(svg: str) -> str:
    """Optimize a single-root SVG document and return it as text.

    Raises:
        MalformedSvgError: If the markup is not well-formed XML with a
            single <svg> root.
    """
    try:
        root = etree.fromstring(svg.strip().encode("utf-8"), _PARSER)
    except etree.XMLSyntaxError as e:
        raise MalformedSvgError(f"Invalid SVG markup: {e}") from e

    if etree.QName(root).localname != "svg":
        raise MalformedSvgError(f"Root element is <{etree.QName(root).localname}>, not <svg>")

    _strip_foreign(root)
    for elem in root.iter(etree.Element):
        _style_to_attributes(elem)
        _strip_whitespace(elem)
    _merge_paths(root)
    for elem in root.iter(etree.Element):
        _sort_attributes(elem)

    etree.cleanup_namespaces(root)
    return etree.tostring(root, encoding="unicode")


def _strip_foreign(root: etree._Element) -> None:
    """Remove editor namespaces, metadata and empty attributes."""
    for elem in list(root.iter(etree.Element)):
        qname = etree.QName(elem)
        if elem is not root and (
            qname.namespace not in (None, SVG_NS) or qname.localname in DROPPED_ELEMENTS
        ):
            parent = elem.getparent()
            if parent is not None:
                parent.remove(elem)
            continue

        for name in list(elem.attrib):
            if etree.QName(name).namespace not in KEPT_ATTRIBUTE_NAMESPACES:
                del elem.attrib[name]
            elif not elem.attrib[name].strip():
                del elem.attrib[name]


def _style_to_attributes(elem: etree._Element) -> None:
    style = elem.get("style")
    if style is None:
        return

    kept = []
    for declaration in style.split(";"):
        if ":" not in declaration:
            continue
        prop, value = (part.strip() for part in declaration.split(":", 1))
        if prop in PRESENTATION_ATTRIBUTES:
            # style wins over an attribute of the same name
            elem.set(prop, value)
        elif prop:
            kept.append(f"{prop}:{value}")

    if kept:
        elem.set("style", ";".join(kept))
    else:
        del elem.attrib["style"]


def _strip_whitespace(elem: etree._Element) -> None:
    if len(elem) and elem.text is not None and not elem.text.strip():
        elem.text = None
    if elem.tail is not None and not elem.tail.strip():
        elem.tail = None


def _effective_fill(elem: etree._Element) -> str | None:
    node = elem
    while node is not None:
        fill = node.get("fill")
        if fill is not None:
            return fill
        node = node.getparent()
    return None


def _is_mergeable(first: etree._Element | None, second: etree._Element) -> bool:
    """Check whether second can be appended to first's path data.

    Only stroke-only paths merge: concatenating filled subpaths can
    change the fill result where they overlap.
    """
    if first is None:
        return False
    for elem in (first, second):
        if etree.QName(elem).localname != "path" or len(elem) or not elem.get("d"):
            return False
        if UNMERGEABLE_PATH_ATTRIBUTES.intersection(elem.attrib):
            return False

    first_attrs = {k: v for k, v in first.attrib.items() if k != "d"}
    second_attrs = {k: v for k, v in second.attrib.items() if k != "d"}
    if first_attrs != second_attrs:
        return False

    # A relative moveto would be resolved against the previous subpath
    if not second.get("d").lstrip().startswith("M"):
        return False
    return _effective_fill(first) == "none"


def _merge_paths(root: etree._Element) -> None:
    for parent in list(root.iter(etree.Element)):
        previous = None
        for child in list(parent):
            if not isinstance(child.tag, str):
                previous = None
                continue
            if _is_mergeable(previous, child):
                previous.set("d", previous.get("d").rstrip() + child.get("d").lstrip())
                parent.remove(child)
            else:
                previous = child


def _display_name(key: str) -> str:
    qname = etree.QName(key)
    if qname.namespace:
        prefix = ATTRIBUTE_PREFIXES.get(qname.namespace, qname.namespace)
        return f"{prefix}:{qname.localname}"
    return key


def _sort_attributes(elem: etree._Element) -> None:
    items = sorted(elem.attrib.items(), key=lambda item: _display_name(item[0]))
    elem.attrib.clear()
    for key, value in items:
        elem.set(key, value)
