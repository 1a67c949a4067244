"""Folder output mode: one file per icon plus a regenerated barrel."""

import posixpath

from .document import render_type_export
from .naming import RESERVED_STEMS
from .templates import TYPES_FILE_TEMPLATE


TYPES_FILENAME = "types.ts"


def barrel_filename(typescript: bool) -> str:
    return "index.ts" if typescript else "index.js"


def scan_existing(file_names: list[str], ext: str) -> list[str]:
    """Return component names for the icon files in a folder listing.

    Barrel and types files are skipped whatever their extension.

    Args:
        file_names: Directory entries (names only)
        ext: Component file extension, e.g. ".tsx"

    Returns:
        Sorted component names
    """
    names = []
    for file_name in file_names:
        if not file_name.endswith(ext):
            continue
        stem = file_name[: -len(ext)]
        if not stem or stem in RESERVED_STEMS:
            continue
        names.append(stem)
    return sorted(names)


def component_file(source: str, ext: str) -> str:
    """Map a relative import source to the component file it names.

    ``./Home`` gives ``Home.tsx``; a source that already carries the
    extension is kept as is.
    """
    path = posixpath.normpath(source)
    return path if path.endswith(ext) else path + ext


def build_barrel(names: list[str], ext: str, typed: bool) -> str:
    """Generate the folder barrel from the full set of icon names.

    Example output (typed)::

        import Check from "./Check.tsx";
        import Home from "./Home.tsx";

        export const Icons = { Check, Home } as const;

        export type IconName =
          | "Check"
          | "Home";
    """
    ordered = sorted(set(names))
    suffix = " as const" if typed else ""

    if ordered:
        imports = "\n".join(f'import {name} from "./{name}{ext}";' for name in ordered)
        declaration = f"export const Icons = {{ {', '.join(ordered)} }}{suffix};"
        parts = [imports, declaration]
    else:
        parts = [f"export const Icons = {{}}{suffix};"]

    if typed:
        parts.append(render_type_export(ordered))
    return "\n\n".join(parts) + "\n"


def build_types_file(props_type: str, import_statement: str) -> str:
    """Generate the shared types file exporting IconProps."""
    return TYPES_FILE_TEMPLATE.format(
        import_statement=import_statement, props_type=props_type
    )
