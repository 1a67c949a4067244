"""Barrel module document model.

A generated barrel module is handled as three named regions:

- imports: ``import Name from "./path";`` lines binding icon components
- export map: the ``export const Icons = { ... }`` literal
- type export: ``export type IconName = ...;``, derived from the map keys

Only these regions are read or rewritten. Everything else in the module
(framework imports, type aliases, helpers) passes through untouched.
"""

import re
from dataclasses import dataclass

from .dialects import Dialect, get_dialect
from .errors import DuplicateEntryError, EntryNotFoundError, MalformedModuleError
from .templates import MODULE_TEMPLATE_JS, MODULE_TEMPLATE_TS

EXPORT_MAP_RE = re.compile(r"export\s+const\s+Icons\s*=\s*\{")
TYPE_EXPORT_RE = re.compile(r"^export\s+type\s+IconName\s*=[^;]*;", re.MULTILINE)
IMPORT_LINE_RE = re.compile(r"^import\b[^\n]*$", re.MULTILINE)

# Default import from a relative path; package imports are framework imports
ICON_IMPORT_RE = re.compile(
    r'^import\s+([A-Za-z_$][\w$]*)\s+from\s+"(\.{1,2}/[^"]*)";?[ \t]*$', re.MULTILINE
)

ENTRY_RE = re.compile(r"([A-Za-z_$][\w$]*)\s*(?::\s*([\s\S]*))?\Z")

INDENT = "  "


@dataclass(frozen=True)
class MapEntry:
    """One key of the export map and the text span it occupies."""

    name: str
    value: str
    start: int
    end: int


@dataclass(frozen=True)
class ImportBinding:
    """One icon import line (span excludes the newline)."""

    name: str
    source: str
    start: int
    end: int


def _is_identifier_char(text: str, index: int) -> bool:
    return 0 <= index < len(text) and (text[index].isalnum() or text[index] in "_$")


def _scan_map(text: str, open_index: int) -> tuple[int, list[tuple[int, int]]]:
    """Find the closing brace of the map and its top-level item spans.

    Tracks bracket depth and string literals so commas inside inline
    components do not split entries. Type arguments at the top level
    (``forwardRef<A, B>(...)``) are tracked as well.
    """
    depth = 0
    angle = 0
    quote = None
    items = []
    item_start = open_index + 1
    i = open_index + 1

    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "\"'`":
            quote = ch
        elif ch in "([{":
            depth += 1
        elif ch in ")]}":
            if depth == 0:
                if ch != "}":
                    raise MalformedModuleError(f"Unbalanced '{ch}' in Icons map")
                items.append((item_start, i))
                return i, items
            depth -= 1
        elif depth == 0 and ch == "<" and _is_identifier_char(text, i - 1) and _is_identifier_char(text, i + 1):
            angle += 1
        elif depth == 0 and ch == ">" and angle:
            angle -= 1
        elif ch == "," and depth == 0 and angle == 0:
            items.append((item_start, i))
            item_start = i + 1
        i += 1

    raise MalformedModuleError("Unterminated Icons map")


def _parse_entries(text: str, items: list[tuple[int, int]]) -> list[MapEntry]:
    entries = []
    for start, end in items:
        raw = text[start:end]
        stripped = raw.strip()
        if not stripped:
            continue
        entry_start = start + len(raw) - len(raw.lstrip())
        match = ENTRY_RE.match(stripped)
        if not match:
            raise MalformedModuleError(f"Unrecognized Icons entry: {stripped[:40]!r}")
        name, value = match.group(1), match.group(2)
        entries.append(
            MapEntry(
                name=name,
                value=value.strip() if value is not None else name,
                start=entry_start,
                end=entry_start + len(stripped),
            )
        )
    return entries


class ModuleDocument:
    """Parsed view of a barrel module's regions.

    Attributes:
        text: The module source
        entries: Export map entries in document order
        imports: Icon import bindings in document order
        map_start: Offset of ``export const Icons``
        map_open, map_close: Offsets of the map's braces
        type_span: (start, end) of the type export, or None when untyped
    """

    def __init__(self, text: str):
        self.text = text

        match = EXPORT_MAP_RE.search(text)
        if not match:
            raise MalformedModuleError("No `export const Icons = {...}` declaration found")
        self.map_start = match.start()
        self.map_open = match.end() - 1
        self.map_close, items = _scan_map(text, self.map_open)
        self.entries = _parse_entries(text, items)

        self.imports = [
            ImportBinding(m.group(1), m.group(2), m.start(), m.end())
            for m in ICON_IMPORT_RE.finditer(text, 0, self.map_start)
        ]

        type_match = TYPE_EXPORT_RE.search(text, self.map_close)
        self.type_span = (type_match.start(), type_match.end()) if type_match else None

        self._check()

    def _check(self) -> None:
        keys = [e.name for e in self.entries]
        if len(set(keys)) != len(keys):
            raise MalformedModuleError("Duplicate keys in Icons map")

        bound = [b.name for b in self.imports]
        if len(set(bound)) != len(bound):
            raise MalformedModuleError("Duplicate icon imports")
        if bound and set(bound) != set(keys):
            raise MalformedModuleError("Icon imports do not match Icons map keys")

    @property
    def references_imports(self) -> bool:
        """True when entries reference imported modules instead of inlining."""
        return bool(self.imports)

    def names(self) -> list[str]:
        """Icon names, read from the imports when the module has them."""
        if self.imports:
            return [b.name for b in self.imports]
        return [e.name for e in self.entries]

    def find(self, name: str) -> MapEntry | None:
        return next((e for e in self.entries if e.name == name), None)

    def binding(self, name: str) -> ImportBinding | None:
        return next((b for b in self.imports if b.name == name), None)

    def entry(self, name: str) -> MapEntry:
        """Return the entry for name.

        Raises:
            EntryNotFoundError: If the map has no such key.
        """
        found = self.find(name)
        if found is None:
            raise EntryNotFoundError(f'Icon "{name}" not found in Icons map')
        return found

    def check_style(self, source: str | None) -> None:
        """Reject mixing inline and imported entries in one module."""
        if self.entries and self.references_imports != (source is not None):
            style = "imported" if self.references_imports else "inline"
            raise MalformedModuleError(f"Module uses {style} icon entries")


def _leading_gap(text: str, pos: int) -> str:
    """Return the separator that precedes the entry at pos."""
    start = pos
    while start > 0 and text[start - 1] in " \t":
        start -= 1
    if start > 0 and text[start - 1] == "\n":
        return "\n" + text[start:pos]
    return " "


def _render_entry(name: str, definition: str) -> str:
    if definition == name:
        return name
    return f"{name}: {definition}"


def _splice_entry(doc: ModuleDocument, name: str, rendered: str) -> str:
    text = doc.text
    if not doc.entries:
        return text[:doc.map_open + 1] + f"\n{INDENT}{rendered},\n" + text[doc.map_close:]

    # Code point order, matching Python string comparison
    following = next((e for e in doc.entries if e.name > name), None)
    if following is not None:
        gap = _leading_gap(text, following.start)
        return text[:following.start] + rendered + "," + gap + text[following.start:]

    last = doc.entries[-1]
    gap = _leading_gap(text, last.start)
    return text[:last.end] + "," + gap + rendered + text[last.end:]


def _splice_import(text: str, doc: ModuleDocument, name: str, source: str) -> str:
    """Insert an import line; offsets in doc must still hold for text."""
    line = f'import {name} from "{source}";'

    following = next((b for b in doc.imports if b.name > name), None)
    if following is not None:
        return text[:following.start] + line + "\n" + text[following.start:]
    if doc.imports:
        pos = doc.imports[-1].end
        return text[:pos] + "\n" + line + text[pos:]

    others = list(IMPORT_LINE_RE.finditer(text, 0, doc.map_start))
    if others:
        pos = others[-1].end()
        return text[:pos] + "\n" + line + text[pos:]
    return line + "\n\n" + text


def _cut_import(text: str, binding: ImportBinding) -> str:
    end = binding.end + 1 if text[binding.end:binding.end + 1] == "\n" else binding.end
    return text[:binding.start] + text[end:]


def render_type_export(names: list[str]) -> str:
    """Render the IconName union for a key set (``never`` when empty)."""
    if not names:
        return "export type IconName = never;"
    members = "\n".join(f'{INDENT}| "{name}"' for name in sorted(names))
    return f"export type IconName =\n{members};"


def regenerate_type_export(text: str) -> str:
    """Recompute the type export from the current keys, if the module has one."""
    doc = ModuleDocument(text)
    if doc.type_span is None:
        return text
    start, end = doc.type_span
    return text[:start] + render_type_export([e.name for e in doc.entries]) + text[end:]


def list_entries(text: str) -> list[str]:
    """Return the icon names a module contains, in document order.

    Raises:
        MalformedModuleError: If the module is outside the generated
            vocabulary or its regions disagree.
    """
    return ModuleDocument(text).names()


def insert_sorted(text: str, name: str, definition: str, source: str | None = None) -> str:
    """Insert a new entry at its sorted position.

    Args:
        text: Module source
        name: Component name (map key)
        definition: Map value expression
        source: Import path, for modules that reference separate files

    Returns:
        Updated module source with the type export regenerated

    Raises:
        DuplicateEntryError: If the name is already present.
    """
    doc = ModuleDocument(text)
    if doc.find(name) is not None:
        raise DuplicateEntryError(f'Icon "{name}" already exists')
    doc.check_style(source)

    # Map follows the imports, so splicing it first keeps import offsets valid
    text = _splice_entry(doc, name, _render_entry(name, definition))
    if source is not None:
        text = _splice_import(text, doc, name, source)
    return regenerate_type_export(text)


def replace_entry(text: str, name: str, definition: str, source: str | None = None) -> str:
    """Replace an existing entry in place.

    Surrounding entries and formatting are left byte-identical.

    Raises:
        EntryNotFoundError: If the name is not present.
    """
    doc = ModuleDocument(text)
    entry = doc.entry(name)
    doc.check_style(source)

    text = text[:entry.start] + _render_entry(name, definition) + text[entry.end:]

    binding = doc.binding(name)
    if binding is not None and source is not None and source != binding.source:
        line = f'import {name} from "{source}";'
        text = text[:binding.start] + line + text[binding.end:]
    return regenerate_type_export(text)


def remove_entry(text: str, name: str) -> str:
    """Remove an entry, its separator and its import line.

    Raises:
        EntryNotFoundError: If the name is not present.
    """
    doc = ModuleDocument(text)
    entry = doc.entry(name)
    index = doc.entries.index(entry)
    entries = doc.entries

    if len(entries) == 1:
        text = text[:doc.map_open + 1] + text[doc.map_close:]
    elif index + 1 < len(entries):
        text = text[:entry.start] + text[entries[index + 1].start:]
    else:
        text = text[:entries[index - 1].end] + text[entry.end:]

    binding = doc.binding(name)
    if binding is not None:
        text = _cut_import(text, binding)
    return regenerate_type_export(text)


def ensure_import(text: str, statement: str) -> str:
    """Prepend a framework import unless the module already has it."""
    if any(line.strip() == statement for line in text.splitlines()):
        return text
    if text.startswith("import"):
        return f"{statement}\n{text}"
    return f"{statement}\n\n{text}"


def empty_module(dialect: Dialect | str, typescript: bool = True, forward_ref: bool = False) -> str:
    """Return the initial barrel module for a project."""
    dialect = get_dialect(dialect)
    if not typescript:
        return MODULE_TEMPLATE_JS

    use_ref = forward_ref and dialect.supports_forward_ref
    return MODULE_TEMPLATE_TS.format(
        type_import=dialect.ref_type_import if use_ref else dialect.type_import,
        props_type=dialect.props_type,
        icon_type=dialect.ref_icon_type if use_ref else dialect.icon_type,
    )
