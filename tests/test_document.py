"""Tests for the barrel module document model."""

import pytest

from icon_merge.document import (
    ModuleDocument,
    empty_module,
    ensure_import,
    insert_sorted,
    list_entries,
    regenerate_type_export,
    remove_entry,
    render_type_export,
    replace_entry,
)
from icon_merge.errors import DuplicateEntryError, EntryNotFoundError, MalformedModuleError

HOME = '(props: IconProps) => (<svg viewBox="0 0 24 24" {...props}><path d="M1 1"/></svg>)'
CHECK = '(props: IconProps) => (<svg viewBox="0 0 24 24" {...props}><path d="M2 2"/></svg>)'
STAR = '(props: IconProps) => (<svg viewBox="0 0 24 24" {...props}><path d="M3 3"/></svg>)'

# Hand-edited module with content the merger must not touch
CUSTOM_MODULE = """// Generated icons, edited by hand
import type { ComponentProps, JSX } from "react";

export type IconProps = ComponentProps<"svg">;
export type Icon = (props: IconProps) => JSX.Element;

export const Icons = {
  Home: (props: IconProps) => (<svg viewBox="0 0 24 24" {...props}><path d="M1 1"/></svg>),
  Star: (props: IconProps) => (<svg viewBox="0 0 24 24" {...props}><path d="M3 3"/></svg>),
} as const satisfies Record<string, Icon>;

export type IconName =
  | "Home"
  | "Star";

export function iconFor(name: IconName) {
  return Icons[name];
}
"""

IMPORTED_MODULE = """import { createElement } from "react";
import Home from "./Home";
import Star from "./Star";

export const Icons = { Home, Star } as const;

export type IconName =
  | "Home"
  | "Star";
"""


@pytest.fixture
def module():
    return empty_module("react")


class TestEmptyModule:

    def test_typed(self, module):
        assert module.startswith('import type { ComponentProps, JSX } from "react";\n')
        assert 'export type IconProps = ComponentProps<"svg">;' in module
        assert "export const Icons = {} as const satisfies Record<string, Icon>;" in module
        assert module.endswith("export type IconName = never;\n")

    def test_untyped(self):
        assert empty_module("solid", typescript=False) == "export const Icons = {};\n"

    def test_forward_ref_types(self):
        module = empty_module("react", forward_ref=True)
        assert "ForwardRefExoticComponent<IconProps & RefAttributes<SVGSVGElement>>" in module

    def test_lists_nothing(self, module):
        assert list_entries(module) == []


class TestTypeExport:

    def test_empty(self):
        assert render_type_export([]) == "export type IconName = never;"

    def test_sorted_union(self):
        assert render_type_export(["Star", "Home"]) == (
            'export type IconName =\n  | "Home"\n  | "Star";'
        )

    def test_regenerate_without_type_export(self):
        text = "export const Icons = { A: 1 };\n"
        assert regenerate_type_export(text) == text


class TestListEntries:

    def test_document_order(self):
        assert list_entries(CUSTOM_MODULE) == ["Home", "Star"]

    def test_imported_entries(self):
        assert list_entries(IMPORTED_MODULE) == ["Home", "Star"]

    def test_package_imports_ignored(self):
        doc = ModuleDocument(IMPORTED_MODULE)
        assert [b.source for b in doc.imports] == ["./Home", "./Star"]

    def test_missing_map(self):
        with pytest.raises(MalformedModuleError):
            list_entries("export default {};\n")

    def test_unterminated_map(self):
        with pytest.raises(MalformedModuleError):
            list_entries("export const Icons = {\n  Home: () => (<svg/>),\n")

    def test_duplicate_keys(self):
        with pytest.raises(MalformedModuleError):
            list_entries("export const Icons = { A: 1, A: 2 };\n")

    def test_imports_disagree_with_keys(self):
        text = 'import Home from "./Home";\n\nexport const Icons = { Star };\n'
        with pytest.raises(MalformedModuleError):
            list_entries(text)

    def test_commas_inside_entries(self):
        text = "export const Icons = {\n  A: f(1, [2, 3], { b: 4 }),\n  B: g<X, Y>(5),\n};\n"
        assert list_entries(text) == ["A", "B"]

    def test_strings_with_braces(self):
        text = "export const Icons = {\n  A: () => \"}\",\n  B: () => '{',\n};\n"
        assert list_entries(text) == ["A", "B"]


class TestInsertSorted:

    def test_into_empty(self, module):
        text = insert_sorted(module, "Home", HOME)
        assert f"export const Icons = {{\n  Home: {HOME},\n}} as const" in text
        assert 'export type IconName =\n  | "Home";' in text

    def test_keeps_sorted_unique(self, module):
        text = module
        for name, body in [("Star", STAR), ("Home", HOME), ("Check", CHECK)]:
            text = insert_sorted(text, name, body)
        assert list_entries(text) == ["Check", "Home", "Star"]
        assert 'export type IconName =\n  | "Check"\n  | "Home"\n  | "Star";' in text

    def test_preserves_unrelated_content(self):
        text = insert_sorted(CUSTOM_MODULE, "Check", CHECK)
        assert text.startswith("// Generated icons, edited by hand\n")
        assert text.endswith("export function iconFor(name: IconName) {\n  return Icons[name];\n}\n")
        assert f"  Check: {CHECK},\n  Home:" in text

    def test_append_after_last(self):
        text = insert_sorted(CUSTOM_MODULE, "Zap", CHECK)
        assert f"  Star: {STAR},\n  Zap: {CHECK},\n}} as const" in text

    def test_duplicate(self):
        with pytest.raises(DuplicateEntryError):
            insert_sorted(CUSTOM_MODULE, "Home", HOME)

    def test_insert_then_list_round_trip(self, module):
        text = insert_sorted(module, "Home", HOME)
        assert list_entries(text) == ["Home"]
        assert ModuleDocument(text).entry("Home").value == HOME

    def test_imported_style(self):
        text = insert_sorted(IMPORTED_MODULE, "Check", "Check", source="./Check")
        assert list_entries(text) == ["Check", "Home", "Star"]
        assert 'import { createElement } from "react";\nimport Check from "./Check";\nimport Home' in text
        assert "export const Icons = { Check, Home, Star } as const;" in text

    def test_mixed_styles_rejected(self):
        with pytest.raises(MalformedModuleError):
            insert_sorted(IMPORTED_MODULE, "Check", CHECK)
        with pytest.raises(MalformedModuleError):
            insert_sorted(CUSTOM_MODULE, "Check", "Check", source="./Check")


class TestReplaceEntry:

    def test_only_entry_changes(self):
        text = replace_entry(CUSTOM_MODULE, "Home", CHECK)
        assert text == CUSTOM_MODULE.replace(f"Home: {HOME}", f"Home: {CHECK}")

    def test_missing(self):
        with pytest.raises(EntryNotFoundError):
            replace_entry(CUSTOM_MODULE, "Check", CHECK)

    def test_not_found_is_lookup_error(self):
        with pytest.raises(LookupError):
            replace_entry(CUSTOM_MODULE, "Check", CHECK)

    def test_same_definition_is_noop(self):
        assert replace_entry(CUSTOM_MODULE, "Star", STAR) == CUSTOM_MODULE


class TestRemoveEntry:

    def test_first(self):
        text = remove_entry(CUSTOM_MODULE, "Home")
        assert list_entries(text) == ["Star"]
        assert f"export const Icons = {{\n  Star: {STAR},\n}}" in text
        assert 'export type IconName =\n  | "Star";' in text

    def test_last(self):
        text = remove_entry(CUSTOM_MODULE, "Star")
        assert f"export const Icons = {{\n  Home: {HOME},\n}}" in text

    def test_only(self, module):
        text = remove_entry(insert_sorted(module, "Home", HOME), "Home")
        assert list_entries(text) == []
        assert "export type IconName = never;" in text

    def test_imported(self):
        text = remove_entry(IMPORTED_MODULE, "Home")
        assert 'import Home from "./Home";' not in text
        assert "export const Icons = { Star } as const;" in text
        assert list_entries(text) == ["Star"]

    def test_missing(self):
        with pytest.raises(EntryNotFoundError):
            remove_entry(CUSTOM_MODULE, "Check")


class TestEnsureImport:

    def test_adds_once(self, module):
        statement = 'import { forwardRef } from "react";'
        text = ensure_import(module, statement)
        assert text.startswith(statement + "\nimport type")
        assert ensure_import(text, statement) == text

    def test_module_without_imports(self):
        text = ensure_import("export const Icons = {};\n", 'import { x } from "y";')
        assert text == 'import { x } from "y";\n\nexport const Icons = {};\n'
