"""Icon identifier parsing and component name derivation."""

import re
from dataclasses import dataclass

from .errors import InvalidIdentifierError, ReservedNameError

# Iconify prefixes and icon keys: lowercase words joined by single hyphens
ICON_PART_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
SEGMENT_SPLIT_RE = re.compile(r"[^A-Za-z0-9]+")
JS_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")

# File stems generated next to the icons in folder mode
RESERVED_STEMS = frozenset({"index", "types"})


@dataclass(frozen=True)
class IconIdentifier:
    """A registry reference of the form ``collection:name``."""

    collection: str
    name: str

    def __str__(self) -> str:
        return f"{self.collection}:{self.name}"


def parse_identifier(value: str) -> IconIdentifier:
    """Parse ``collection:name``.

    Raises:
        InvalidIdentifierError: If either part is missing or not a
            lowercase hyphenated key.
    """
    parts = value.split(":")
    if len(parts) != 2:
        raise InvalidIdentifierError(
            f'Invalid icon format "{value}". Expected "prefix:name" (e.g., mdi:home)'
        )

    collection, name = parts
    if not ICON_PART_RE.match(collection):
        raise InvalidIdentifierError(
            f'Invalid prefix "{collection}". Must match: lowercase letters, numbers, hyphens'
        )
    if not ICON_PART_RE.match(name):
        raise InvalidIdentifierError(
            f'Invalid name "{name}". Must match: lowercase letters, numbers, hyphens'
        )
    return IconIdentifier(collection, name)


def to_component_name(identifier: IconIdentifier | str) -> str:
    """Derive a PascalCase component name from an identifier.

    ``mdi:arrow-left`` becomes ``ArrowLeft``. Names that would start with
    a digit are not valid identifiers and must be supplied explicitly.
    """
    if isinstance(identifier, str):
        identifier = parse_identifier(identifier)

    segments = [s for s in SEGMENT_SPLIT_RE.split(identifier.name) if s]
    name = "".join(s[0].upper() + s[1:].lower() for s in segments)
    if not JS_IDENTIFIER_RE.match(name):
        raise InvalidIdentifierError(
            f'Cannot derive a component name from "{identifier}"; use --name'
        )
    return name


def validate_component_name(name: str) -> str:
    """Return name unchanged if it is usable as a component identifier."""
    if not JS_IDENTIFIER_RE.match(name):
        raise InvalidIdentifierError(f'Invalid component name "{name}"')
    return name


def check_folder_name(name: str) -> str:
    """Reject names whose file would shadow the barrel or types file."""
    if name.lower() in RESERVED_STEMS:
        raise ReservedNameError(
            f'Component name "{name}" is reserved in folder mode'
        )
    return name


def to_readable_name(component_name: str) -> str:
    """Split a component name at camel boundaries: "HomeIcon" -> "Home Icon"."""
    return CAMEL_BOUNDARY_RE.sub(r"\1 \2", component_name)
