"""Component synthesis from transformed SVG markup."""

import html
import json
import re
from dataclasses import dataclass

from .dialects import Dialect, get_dialect
from .svg.utils import ATTR_RE, SVG_OPENING_TAG_RE
from .templates import (
    COMPONENT_FILE_JS,
    COMPONENT_FILE_TS,
    REF_COMPONENT_FILE_JS,
    REF_COMPONENT_FILE_TS,
)

# Markup split into tags and the text between them
TOKEN_RE = re.compile(r"(<[^>]+>)|([^<]+)")
NAME_SEPARATOR_RE = re.compile(r"[-:]")

# Attribute families JSX accepts verbatim
KEBAB_PREFIXES = ("aria-", "data-")

# Braces open JSX expressions; quotes and unpaired brackets would confuse
# the module scanner
TEXT_ENTITIES = str.maketrans({
    "(": "&#40;",
    ")": "&#41;",
    "[": "&#91;",
    "]": "&#93;",
    "{": "&#123;",
    "}": "&#125;",
    "'": "&#39;",
    '"': "&quot;",
    "`": "&#96;",
})


@dataclass(frozen=True)
class ComponentDefinition:
    """One export map entry.

    Attributes:
        name: Component name, used as the map key
        body: Map value expression (inline component or bare reference)
        source: Import path when the barrel references a separate module
    """

    name: str
    body: str
    source: str | None = None

    @property
    def entry(self) -> str:
        """Render the entry as written inside the map literal."""
        if self.body == self.name:
            return self.name
        return f"{self.name}: {self.body}"


def jsx_attribute_name(name: str, dialect: Dialect) -> str:
    """Translate an SVG attribute name into the dialect's casing."""
    if name == "class":
        return dialect.class_attribute
    if not dialect.camel_case_attributes or name.startswith(KEBAB_PREFIXES):
        return name
    head, *rest = NAME_SEPARATOR_RE.split(name)
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def style_object(css: str) -> str:
    """Render a CSS declaration list as a JSX style object expression.

    ``mix-blend-mode:multiply`` becomes ``{{ mixBlendMode: "multiply" }}``.
    Custom properties keep their name as a quoted key.
    """
    properties = []
    for declaration in html.unescape(css).split(";"):
        prop, sep, value = declaration.partition(":")
        prop, value = prop.strip(), value.strip()
        if not sep or not prop:
            continue
        if prop.startswith("--"):
            key = json.dumps(prop)
        else:
            head, *rest = prop.split("-")
            key = head + "".join(part[:1].upper() + part[1:] for part in rest)
        properties.append(f"{key}: {json.dumps(value)}")
    if not properties:
        return "{{}}"
    return "{{ " + ", ".join(properties) + " }}"


def to_jsx(svg: str, dialect: Dialect, ref: bool = False) -> str:
    """Convert optimized SVG markup into a JSX expression that spreads props."""

    def attribute(match: re.Match) -> str:
        name, value = match.groups()
        if name == "style" and dialect.style_object:
            return f"style={style_object(value)}"
        return f'{jsx_attribute_name(name, dialect)}="{value}"'

    def convert(match: re.Match) -> str:
        tag, text = match.groups()
        if tag is not None:
            if tag.startswith("</"):
                return tag
            return ATTR_RE.sub(attribute, tag)
        return text.translate(TEXT_ENTITIES)

    markup = TOKEN_RE.sub(convert, svg)

    opening = SVG_OPENING_TAG_RE.search(markup)
    if not opening:
        return markup
    spread = " ref={ref} {...props}" if ref else " {...props}"
    tag = f"<svg{opening.group(1)}{spread}{opening.group(2)}>"
    return markup[:opening.start()] + tag + markup[opening.end():]


def synthesize(
    svg: str,
    name: str,
    dialect: Dialect | str,
    typescript: bool = True,
    forward_ref: bool = False,
) -> ComponentDefinition:
    """Build an inline export map entry from transformed SVG.

    The output depends only on the arguments, so identical inputs always
    produce byte-identical definitions.

    Raises:
        UnsupportedDialectError: If dialect names no known descriptor.
    """
    dialect = get_dialect(dialect)
    use_ref = forward_ref and dialect.supports_forward_ref
    markup = to_jsx(svg, dialect, ref=use_ref)

    if use_ref:
        generic = "<SVGSVGElement, IconProps>" if typescript else ""
        body = f"forwardRef{generic}((props, ref) => ({markup}))"
    else:
        params = "props: IconProps" if typescript else "props"
        body = f"({params}) => ({markup})"
    return ComponentDefinition(name=name, body=body)


def synthesize_file(
    svg: str,
    name: str,
    dialect: Dialect | str,
    typescript: bool = True,
    forward_ref: bool = False,
) -> str:
    """Render a standalone per-icon module for folder mode."""
    dialect = get_dialect(dialect)
    use_ref = forward_ref and dialect.supports_forward_ref
    markup = to_jsx(svg, dialect, ref=use_ref)

    if use_ref:
        template = REF_COMPONENT_FILE_TS if typescript else REF_COMPONENT_FILE_JS
        return template.format(
            name=name, markup=markup, ref_import=dialect.forward_ref_import()
        )
    template = COMPONENT_FILE_TS if typescript else COMPONENT_FILE_JS
    return template.format(name=name, markup=markup)


def reference(name: str, source: str) -> ComponentDefinition:
    """Build a definition that imports the component from source."""
    return ComponentDefinition(name=name, body=name, source=source)
