"""Listing view of installed icons with their registry provenance."""

import json
import re
from collections.abc import Callable
from dataclasses import asdict, dataclass

from .document import ModuleDocument
from .svg.transform import PROVENANCE_ATTRIBUTE

UNKNOWN_SOURCE = "unknown"

PROVENANCE_RE = re.compile(rf'\b{re.escape(PROVENANCE_ATTRIBUTE)}="([^"]*)"')


@dataclass(frozen=True)
class IconListing:
    name: str
    source: str | None


def _provenance(markup: str, track_source: bool) -> str | None:
    if not track_source:
        return None
    match = PROVENANCE_RE.search(markup)
    return match.group(1) if match else UNKNOWN_SOURCE


def list_module(
    text: str,
    track_source: bool,
    read_component: Callable[[str], str | None] | None = None,
) -> list[IconListing]:
    """List the icons of a barrel module in document order.

    With tracking disabled every source is None; with tracking enabled an
    entry without a data-icon attribute reports "unknown".

    Args:
        text: Module source
        track_source: Whether provenance is reported
        read_component: Returns the source of an imported component file
            (None when missing), for modules that import their icons
    """
    doc = ModuleDocument(text)
    icons = []
    for entry in doc.entries:
        markup = entry.value
        binding = doc.binding(entry.name)
        if binding is not None and read_component is not None and track_source:
            markup = read_component(binding.source) or ""
        icons.append(IconListing(entry.name, _provenance(markup, track_source)))
    return icons


def list_folder(contents: dict[str, str], track_source: bool) -> list[IconListing]:
    """List folder-mode icons.

    Args:
        contents: Component name -> component file source
        track_source: Whether provenance is read from the files
    """
    return [
        IconListing(name, _provenance(contents[name], track_source))
        for name in sorted(contents)
    ]


def format_listing(icons: list[IconListing], output: str) -> str:
    """Render a human-readable listing."""
    if not icons:
        return f"No icons in {output}"
    lines = [f"{len(icons)} icon(s) in {output}:"]
    for icon in icons:
        lines.append(f"  {icon.name} ({icon.source})" if icon.source else f"  {icon.name}")
    return "\n".join(lines)


def format_listing_json(icons: list[IconListing], output: str) -> str:
    """Render the listing as ``{count, output, icons}`` JSON."""
    payload = {
        "count": len(icons),
        "output": output,
        "icons": [asdict(icon) for icon in icons],
    }
    return json.dumps(payload, indent=2)
