"""Icon merge orchestration.

Each requested icon moves through the same steps:

    validate name -> confirm overwrite (if present) -> fetch or reuse SVG
    -> transform SVG -> synthesize component -> insert or replace

Icons are applied strictly in the order given, with the document text
carried from one icon to the next. A failure on one icon is recorded in
its outcome and the batch moves on; only a cancelled confirmation stops
the whole batch.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from .config import IconsConfig
from .dialects import get_dialect
from .document import (
    ModuleDocument,
    ensure_import,
    insert_sorted,
    list_entries,
    remove_entry,
    replace_entry,
)
from .errors import (
    BatchCancelled,
    FetchError,
    InvalidIdentifierError,
    MalformedSvgError,
    NameCollisionError,
)
from .folder import barrel_filename, build_barrel, component_file, scan_existing
from .naming import (
    check_folder_name,
    parse_identifier,
    to_component_name,
    to_readable_name,
    validate_component_name,
)
from .svg.transform import TransformOptions, transform_svg
from .synthesizer import reference, synthesize, synthesize_file

logger = logging.getLogger(__name__)

Fetch = Callable[[str], str]
# True to overwrite, False to skip, None when the user cancels
Confirm = Callable[[str], "bool | None"]


class Status(str, Enum):
    ADDED = "added"
    REPLACED = "replaced"
    SKIPPED = "skipped"
    FAILED = "failed"
    REMOVED = "removed"


@dataclass(frozen=True)
class IconOutcome:
    """Terminal state of one requested icon."""

    identifier: str
    status: Status
    name: str | None = None
    reason: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status in (Status.ADDED, Status.REPLACED, Status.REMOVED)


@dataclass
class BatchResult:
    """Accumulated state of one batch.

    Attributes:
        outcomes: One outcome per requested icon, in request order
        text: Updated barrel module (file mode)
        files: Relative path -> content to write (component files and barrel)
        removed_files: Relative paths of component files to delete
        names: Icon names present after the batch
        removal: Whether the batch removed icons, for the summary
    """

    outcomes: list[IconOutcome] = field(default_factory=list)
    text: str | None = None
    files: dict[str, str] = field(default_factory=dict)
    removed_files: list[str] = field(default_factory=list)
    names: list[str] = field(default_factory=list)
    removal: bool = False

    def count(self, status: Status) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def changed(self) -> bool:
        """True if at least one icon succeeded, i.e. there is something to write."""
        return any(o.succeeded for o in self.outcomes)

    def summary(self) -> str:
        if self.removal:
            return f"Removed {self.count(Status.REMOVED)}, failed {self.count(Status.FAILED)}"
        return (
            f"Added {self.count(Status.ADDED)}, replaced {self.count(Status.REPLACED)}, "
            f"skipped {self.count(Status.SKIPPED)}, failed {self.count(Status.FAILED)}"
        )


@dataclass(frozen=True)
class _Ready:
    identifier: str
    name: str
    replacing: bool
    svg: str


def check_request(identifiers: list[str], name: str | None) -> None:
    """Validate batch-level options before anything is fetched.

    Raises:
        NameCollisionError: If a custom name is given for several icons.
    """
    if name is not None and len(identifiers) > 1:
        raise NameCollisionError("--name can only be used with a single icon")


def _component_name(identifier: str, name: str | None, folder: bool) -> str:
    parsed = parse_identifier(identifier)
    component = validate_component_name(name) if name else to_component_name(parsed)
    if folder:
        check_folder_name(component)
    return component


def _obtain_svg(identifier: str, fetch: Fetch, prefetched: Mapping[str, "str | FetchError"] | None) -> str:
    if prefetched is not None and identifier in prefetched:
        value = prefetched[identifier]
        if isinstance(value, FetchError):
            raise value
        return value
    return fetch(identifier)


def _resolve(
    identifier: str,
    name: str | None,
    existing: list[str],
    config: IconsConfig,
    fetch: Fetch,
    confirm: Confirm,
    prefetched: Mapping[str, "str | FetchError"] | None,
    folder: bool,
) -> "IconOutcome | _Ready":
    """Take one icon from its identifier to transformed SVG.

    Returns a terminal outcome when the icon is skipped or fails.
    """
    try:
        component = _component_name(identifier, name, folder)
    except InvalidIdentifierError as e:
        logger.error("%s: %s", identifier, e)
        return IconOutcome(identifier, Status.FAILED, reason=str(e))

    replacing = component in existing
    if replacing:
        answer = confirm(f'Icon "{component}" already exists. Overwrite?')
        if answer is None:
            raise BatchCancelled("Operation cancelled")
        if not answer:
            logger.info("Skipped %s", component)
            return IconOutcome(identifier, Status.SKIPPED, component, "already exists")

    options = TransformOptions(
        component_name=component,
        a11y=config.a11y,
        source=identifier if config.track_source else None,
        title=to_readable_name(component) if config.title else None,
    )
    try:
        svg = transform_svg(_obtain_svg(identifier, fetch, prefetched), options)
    except (FetchError, MalformedSvgError) as e:
        logger.error("Failed %s: %s", identifier, e)
        return IconOutcome(identifier, Status.FAILED, component, str(e))

    return _Ready(identifier, component, replacing, svg)


def _applied(ready: _Ready) -> IconOutcome:
    status = Status.REPLACED if ready.replacing else Status.ADDED
    logger.info("%s %s", status.value.capitalize(), ready.name)
    return IconOutcome(ready.identifier, status, ready.name)


def merge_module(
    text: str,
    identifiers: list[str],
    config: IconsConfig,
    fetch: Fetch,
    confirm: Confirm,
    name: str | None = None,
    prefetched: Mapping[str, "str | FetchError"] | None = None,
) -> BatchResult:
    """Merge icons into a barrel module.

    A module whose entries are inline components gets inline entries. A
    module whose entries reference imported components gets an import
    line per icon, and the component itself is returned in ``files``
    under a path relative to the module's directory.

    Args:
        text: Current module source, read once by the caller
        identifiers: Registry identifiers in the order to apply them
        config: Project configuration
        fetch: Registry lookup, raising FetchError
        confirm: Overwrite prompt
        name: Custom component name (single icon only)
        prefetched: Already fetched SVGs (or errors) by identifier

    Returns:
        BatchResult whose ``text`` is the module to write when ``changed``

    Raises:
        NameCollisionError: If name is given with more than one identifier.
        MalformedModuleError: If text is outside the generated vocabulary.
        BatchCancelled: If the user cancels at a confirmation.
    """
    check_request(identifiers, name)
    dialect = get_dialect(config.framework)
    ext = dialect.extension(config.typescript)
    ref_import = dialect.forward_ref_import() if config.forward_ref else None

    doc = ModuleDocument(text)
    imported = doc.references_imports
    existing = doc.names()
    result = BatchResult(text=text)

    for identifier in identifiers:
        # Imported components live in files named after them
        ready = _resolve(identifier, name, existing, config, fetch, confirm, prefetched, folder=imported)
        if isinstance(ready, IconOutcome):
            result.outcomes.append(ready)
            continue

        if imported:
            binding = ModuleDocument(result.text).binding(ready.name)
            definition = reference(ready.name, binding.source if binding else f"./{ready.name}")
            result.files[component_file(definition.source, ext)] = synthesize_file(
                ready.svg, ready.name, dialect, config.typescript, config.forward_ref
            )
        else:
            definition = synthesize(ready.svg, ready.name, dialect, config.typescript, config.forward_ref)

        if ready.replacing:
            result.text = replace_entry(result.text, ready.name, definition.body, definition.source)
        else:
            result.text = insert_sorted(result.text, ready.name, definition.body, definition.source)
            existing.append(ready.name)
        if ref_import and not imported:
            result.text = ensure_import(result.text, ref_import)
        result.outcomes.append(_applied(ready))

    result.names = list_entries(result.text)
    return result



def merge_folder(
    file_names: list[str],
    identifiers: list[str],
    config: IconsConfig,
    fetch: Fetch,
    confirm: Confirm,
    name: str | None = None,
    prefetched: Mapping[str, "str | FetchError"] | None = None,
) -> BatchResult:
    """Merge icons into a per-icon folder.

    Existing icons come from the directory listing. Component files and a
    regenerated barrel are returned in ``files``; nothing is written here.
    """
    check_request(identifiers, name)
    dialect = get_dialect(config.framework)
    ext = dialect.extension(config.typescript)

    existing = scan_existing(file_names, ext)
    result = BatchResult()

    for identifier in identifiers:
        ready = _resolve(identifier, name, existing, config, fetch, confirm, prefetched, folder=True)
        if isinstance(ready, IconOutcome):
            result.outcomes.append(ready)
            continue

        result.files[f"{ready.name}{ext}"] = synthesize_file(
            ready.svg, ready.name, dialect, config.typescript, config.forward_ref
        )
        if not ready.replacing:
            existing.append(ready.name)
        result.outcomes.append(_applied(ready))

    result.names = sorted(existing)
    if result.changed:
        result.files[barrel_filename(config.typescript)] = build_barrel(
            result.names, ext, config.typescript
        )
    return result


def remove_from_module(text: str, names: list[str], ext: str | None = None) -> BatchResult:
    """Remove named icons from a barrel module.

    With ext given, the component file behind each removed import is
    listed in ``removed_files``, relative to the module's directory.
    """
    existing = list_entries(text)
    result = BatchResult(text=text, removal=True)

    for name in names:
        if name not in existing:
            logger.error('Icon "%s" not found', name)
            result.outcomes.append(IconOutcome(name, Status.FAILED, name, "not found"))
            continue
        binding = ModuleDocument(result.text).binding(name)
        if binding is not None and ext is not None:
            result.removed_files.append(component_file(binding.source, ext))
        result.text = remove_entry(result.text, name)
        existing.remove(name)
        logger.info("Removed %s", name)
        result.outcomes.append(IconOutcome(name, Status.REMOVED, name))

    result.names = list_entries(result.text)
    return result


def remove_from_folder(file_names: list[str], names: list[str], config: IconsConfig) -> BatchResult:
    """Remove named icons from a folder and regenerate its barrel."""
    ext = get_dialect(config.framework).extension(config.typescript)
    existing = scan_existing(file_names, ext)
    result = BatchResult(removal=True)

    for name in names:
        if name not in existing:
            logger.error('Icon "%s" not found', name)
            result.outcomes.append(IconOutcome(name, Status.FAILED, name, "not found"))
            continue
        existing.remove(name)
        result.removed_files.append(f"{name}{ext}")
        logger.info("Removed %s", name)
        result.outcomes.append(IconOutcome(name, Status.REMOVED, name))

    result.names = sorted(existing)
    if result.changed:
        result.files[barrel_filename(config.typescript)] = build_barrel(
            result.names, ext, config.typescript
        )
    return result


def clear_module(text: str, ext: str | None = None) -> BatchResult:
    """Remove every icon from a barrel module, keeping everything else."""
    return remove_from_module(text, list_entries(text), ext)


def clear_folder(file_names: list[str], config: IconsConfig) -> BatchResult:
    """Remove every icon file from a folder and empty its barrel."""
    ext = get_dialect(config.framework).extension(config.typescript)
    return remove_from_folder(file_names, scan_existing(file_names, ext), config)
