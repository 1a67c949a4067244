"""Tests for the merge orchestrator."""

import pytest

from icon_merge.document import empty_module, list_entries
from icon_merge.errors import BatchCancelled, FetchError, MalformedModuleError, NameCollisionError
from icon_merge.listing import list_module
from icon_merge.merger import (
    BatchResult,
    IconOutcome,
    Status,
    clear_folder,
    clear_module,
    merge_folder,
    merge_module,
    remove_from_folder,
    remove_from_module,
)
from tests.helpers import BLEND_SVG, HOME_SVG, SMILE_SVG

IMPORTED = """import Home from "./Home";

export const Icons = { Home } as const;
"""


@pytest.fixture
def module():
    return empty_module("react")


def statuses(result: BatchResult) -> list[Status]:
    return [o.status for o in result.outcomes]


class TestMergeModule:

    def test_adds_in_sorted_order(self, module, config, fetcher, always_yes):
        result = merge_module(module, ["mdi:star", "mdi:home", "mdi:check"], config, fetcher, always_yes)
        assert statuses(result) == [Status.ADDED] * 3
        assert result.names == ["Check", "Home", "Star"]
        assert list_entries(result.text) == ["Check", "Home", "Star"]
        assert result.changed

    def test_fetches_in_request_order(self, module, config, fetcher, always_yes):
        merge_module(module, ["mdi:star", "mdi:home"], config, fetcher, always_yes)
        assert fetcher.calls == ["mdi:star", "mdi:home"]

    def test_partial_batch(self, module, config, fetcher, always_yes):
        result = merge_module(module, ["mdi:home", "mdi:broken", "mdi:check"], config, fetcher, always_yes)
        assert statuses(result) == [Status.ADDED, Status.FAILED, Status.ADDED]
        assert result.outcomes[1].name == "Broken"
        assert result.outcomes[1].reason
        assert result.names == ["Check", "Home"]

    def test_fetch_failure(self, module, config, fetcher, always_yes):
        result = merge_module(module, ["mdi:missing"], config, fetcher, always_yes)
        assert statuses(result) == [Status.FAILED]
        assert "not found" in result.outcomes[0].reason
        assert not result.changed
        assert result.text == module

    def test_invalid_identifier(self, module, config, fetcher, always_yes):
        result = merge_module(module, ["home", "mdi:home"], config, fetcher, always_yes)
        assert statuses(result) == [Status.FAILED, Status.ADDED]
        assert result.outcomes[0].name is None
        assert fetcher.calls == ["mdi:home"]

    def test_name_collision_before_fetch(self, module, config, fetcher, always_yes):
        with pytest.raises(NameCollisionError):
            merge_module(module, ["mdi:home", "mdi:check"], config, fetcher, always_yes, name="Icon")
        assert fetcher.calls == []

    def test_custom_name(self, module, config, fetcher, always_yes):
        result = merge_module(module, ["mdi:home"], config, fetcher, always_yes, name="House")
        assert result.names == ["House"]

    def test_replace_confirmed(self, module, config, fetcher, always_yes):
        first = merge_module(module, ["mdi:home"], config, fetcher, always_yes)
        second = merge_module(first.text, ["mdi:check"], config, fetcher, always_yes, name="Home")
        assert statuses(second) == [Status.REPLACED]
        assert second.names == ["Home"]
        assert list_module(second.text, True)[0].source == "mdi:check"

    def test_replace_prompt(self, module, config, fetcher, always_yes):
        first = merge_module(module, ["mdi:home"], config, fetcher, always_yes)
        prompts = []

        def confirm(message):
            prompts.append(message)
            return True

        merge_module(first.text, ["mdi:home"], config, fetcher, confirm)
        assert prompts == ['Icon "Home" already exists. Overwrite?']

    def test_replace_declined(self, module, config, fetcher, always_yes):
        first = merge_module(module, ["mdi:home"], config, fetcher, always_yes)
        fetcher.calls.clear()
        second = merge_module(first.text, ["mdi:home"], config, fetcher, lambda message: False)
        assert statuses(second) == [Status.SKIPPED]
        assert second.text == first.text
        assert not second.changed
        assert fetcher.calls == []

    def test_cancel_aborts_batch(self, module, config, fetcher, always_yes):
        first = merge_module(module, ["mdi:home"], config, fetcher, always_yes)
        with pytest.raises(BatchCancelled):
            merge_module(first.text, ["mdi:check", "mdi:home"], config, fetcher, lambda message: None)

    def test_same_icon_twice(self, module, config, fetcher, always_yes):
        result = merge_module(module, ["mdi:home", "mdi:home"], config, fetcher, always_yes)
        assert statuses(result) == [Status.ADDED, Status.REPLACED]
        assert result.names == ["Home"]

    def test_idempotent_readd(self, module, config, fetcher, always_yes):
        first = merge_module(module, ["mdi:home"], config, fetcher, always_yes)
        second = merge_module(first.text, ["mdi:home"], config, fetcher, always_yes)
        assert second.text == first.text

    def test_uses_prefetched(self, module, config, fetcher, always_yes):
        prefetched = {"mdi:home": HOME_SVG, "mdi:check": FetchError("offline")}
        result = merge_module(module, ["mdi:home", "mdi:check"], config, fetcher, always_yes, prefetched=prefetched)
        assert statuses(result) == [Status.ADDED, Status.FAILED]
        assert result.outcomes[1].reason == "offline"
        assert fetcher.calls == []

    def test_track_source_off(self, module, fetcher, always_yes, config):
        untracked = config.model_copy(update={"track_source": False})
        result = merge_module(module, ["mdi:home"], untracked, fetcher, always_yes)
        assert "data-icon" not in result.text

    def test_a11y_and_title(self, module, config, fetcher, always_yes):
        annotated = config.model_copy(update={"a11y": "img", "title": True})
        result = merge_module(module, ["mdi:home"], annotated, fetcher, always_yes, name="HomeIcon")
        assert 'aria-label="Home Icon"' in result.text
        assert "<title>Home Icon</title>" in result.text

    def test_forward_ref_adds_import(self, module, config, fetcher, always_yes):
        ref_config = config.model_copy(update={"forward_ref": True})
        ref_module = empty_module("react", forward_ref=True)
        result = merge_module(ref_module, ["mdi:home", "mdi:check"], ref_config, fetcher, always_yes)
        assert result.text.startswith('import { forwardRef } from "react";\n')
        assert result.text.count("import { forwardRef }") == 1
        assert "forwardRef<SVGSVGElement, IconProps>((props, ref) =>" in result.text
        assert result.names == ["Check", "Home"]

    def test_malformed_module(self, config, fetcher, always_yes):
        with pytest.raises(MalformedModuleError):
            merge_module("export default {};\n", ["mdi:home"], config, fetcher, always_yes)
        assert fetcher.calls == []

    def test_text_with_unpaired_bracket(self, module, config, fetcher, always_yes):
        fetcher.icons["mdi:emoticon"] = SMILE_SVG
        result = merge_module(module, ["mdi:emoticon", "mdi:home"], config, fetcher, always_yes)
        assert statuses(result) == [Status.ADDED, Status.ADDED]
        assert result.names == ["Emoticon", "Home"]
        assert "<desc>smile :&#41;</desc>" in result.text

    def test_style_becomes_object(self, module, config, fetcher, always_yes):
        fetcher.icons["mdi:blend"] = BLEND_SVG
        result = merge_module(module, ["mdi:blend", "mdi:home"], config, fetcher, always_yes)
        assert result.names == ["Blend", "Home"]
        assert 'style={{ mixBlendMode: "multiply" }}' in result.text
        assert 'fill="red"' in result.text
        assert "style=\"" not in result.text


class TestMergeFolder:

    def test_writes_component_and_barrel(self, folder_config, fetcher, always_yes):
        result = merge_folder(["index.ts", "types.ts"], ["mdi:home"], folder_config, fetcher, always_yes)
        assert statuses(result) == [Status.ADDED]
        assert set(result.files) == {"Home.tsx", "index.ts"}
        assert "export default function Home(props: IconProps)" in result.files["Home.tsx"]
        assert 'import Home from "./Home.tsx";' in result.files["index.ts"]

    def test_barrel_includes_existing(self, folder_config, fetcher, always_yes):
        result = merge_folder(["Check.tsx", "index.ts"], ["mdi:star"], folder_config, fetcher, always_yes)
        assert result.names == ["Check", "Star"]
        assert "export const Icons = { Check, Star } as const;" in result.files["index.ts"]

    def test_replace_existing_file(self, folder_config, fetcher, always_yes):
        result = merge_folder(["Home.tsx", "index.ts"], ["mdi:home"], folder_config, fetcher, always_yes)
        assert statuses(result) == [Status.REPLACED]
        assert result.names == ["Home"]

    def test_reserved_name_fails(self, folder_config, fetcher, always_yes):
        fetcher.icons["mdi:index"] = HOME_SVG
        result = merge_folder([], ["mdi:index", "mdi:home"], folder_config, fetcher, always_yes)
        assert statuses(result) == [Status.FAILED, Status.ADDED]
        assert "Index.tsx" not in result.files

    def test_nothing_written_when_all_fail(self, folder_config, fetcher, always_yes):
        result = merge_folder([], ["mdi:missing"], folder_config, fetcher, always_yes)
        assert result.files == {}
        assert not result.changed

    def test_untyped(self, folder_config, fetcher, always_yes):
        js_config = folder_config.model_copy(update={"typescript": False})
        result = merge_folder([], ["mdi:home"], js_config, fetcher, always_yes)
        assert set(result.files) == {"Home.jsx", "index.js"}


class TestRemove:

    def test_from_module(self, module, config, fetcher, always_yes):
        text = merge_module(module, ["mdi:home", "mdi:check"], config, fetcher, always_yes).text
        result = remove_from_module(text, ["Home", "Missing"])
        assert statuses(result) == [Status.REMOVED, Status.FAILED]
        assert result.names == ["Check"]
        assert result.summary() == "Removed 1, failed 1"

    def test_from_folder(self, folder_config):
        result = remove_from_folder(["Check.tsx", "Home.tsx", "index.ts"], ["Home"], folder_config)
        assert result.removed_files == ["Home.tsx"]
        assert result.names == ["Check"]
        assert "import Home" not in result.files["index.ts"]


class TestMergeImportedModule:

    def test_adds_import_and_component_file(self, config, fetcher, always_yes):
        result = merge_module(IMPORTED, ["mdi:check"], config, fetcher, always_yes)
        assert statuses(result) == [Status.ADDED]
        assert result.text.startswith('import Check from "./Check";\nimport Home from "./Home";\n')
        assert "export const Icons = { Check, Home } as const;" in result.text
        assert list(result.files) == ["Check.tsx"]
        assert "export default function Check(props: IconProps)" in result.files["Check.tsx"]
        assert 'data-icon="mdi:check"' in result.files["Check.tsx"]

    def test_replace_keeps_import(self, config, fetcher, always_yes):
        result = merge_module(IMPORTED, ["mdi:check"], config, fetcher, always_yes, name="Home")
        assert statuses(result) == [Status.REPLACED]
        assert result.text == IMPORTED
        assert 'data-icon="mdi:check"' in result.files["Home.tsx"]

    def test_reserved_name_fails(self, config, fetcher, always_yes):
        fetcher.icons["mdi:types"] = HOME_SVG
        result = merge_module(IMPORTED, ["mdi:types"], config, fetcher, always_yes)
        assert statuses(result) == [Status.FAILED]
        assert result.files == {}

    def test_remove_lists_component_file(self):
        result = remove_from_module(IMPORTED, ["Home"], ".tsx")
        assert result.removed_files == ["Home.tsx"]
        assert "import Home" not in result.text


class TestClear:

    def test_module(self, module, config, fetcher, always_yes):
        text = merge_module(module, ["mdi:home", "mdi:check"], config, fetcher, always_yes).text
        result = clear_module(text)
        assert statuses(result) == [Status.REMOVED, Status.REMOVED]
        assert result.names == []
        assert result.text == module
        assert result.summary() == "Removed 2, failed 0"

    def test_empty_module(self, module):
        result = clear_module(module)
        assert result.outcomes == []
        assert not result.changed

    def test_folder(self, folder_config):
        result = clear_folder(["Check.tsx", "Home.tsx", "index.ts", "types.ts"], folder_config)
        assert result.removed_files == ["Check.tsx", "Home.tsx"]
        assert result.files == {"index.ts": "export const Icons = {} as const;\n\nexport type IconName = never;\n"}



class TestBatchResult:

    def test_summary(self):
        result = BatchResult(outcomes=[
            IconOutcome("mdi:a", Status.ADDED, "A"),
            IconOutcome("mdi:b", Status.REPLACED, "B"),
            IconOutcome("mdi:c", Status.SKIPPED, "C"),
            IconOutcome("mdi:d", Status.FAILED, "D", "boom"),
            IconOutcome("mdi:e", Status.FAILED, "E", "boom"),
        ])
        assert result.summary() == "Added 1, replaced 1, skipped 1, failed 2"
        assert result.changed

    def test_unchanged(self):
        result = BatchResult(outcomes=[IconOutcome("mdi:a", Status.SKIPPED, "A")])
        assert not result.changed
