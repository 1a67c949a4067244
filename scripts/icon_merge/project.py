"""Project-level commands.

Each command loads the configuration, runs the user's pre hook, reads the
output once, hands the text to the merge layer and writes the result
once. Post hooks run only after a successful write. Clear counts the
installed icons for its confirmation before the pre hook runs.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from .config import (
    IconsConfig,
    OutputConfig,
    config_path,
    load_config,
    output_path,
    save_config,
)
from .dialects import get_dialect
from .document import empty_module, list_entries
from .errors import BatchCancelled, ConfigError, ConfigInvalidError, FetchError, InvalidIdentifierError
from .files import list_files, read_text, remove_file, write_text
from .folder import (
    TYPES_FILENAME,
    barrel_filename,
    build_barrel,
    build_types_file,
    component_file,
    scan_existing,
)
from .hooks import run_hooks
from .listing import IconListing, list_folder, list_module
from .merger import (
    BatchResult,
    Confirm,
    check_request,
    clear_folder,
    clear_module,
    merge_folder,
    merge_module,
    remove_from_folder,
    remove_from_module,
)
from .naming import parse_identifier
from .registry import IconifyClient
from .svg.transform import A11yStrategy

logger = logging.getLogger(__name__)


def _load(cwd: Path) -> IconsConfig:
    if not cwd.is_dir():
        raise ConfigError(f"Directory not found: {cwd}")
    return load_config(cwd)


def _folder_files(path: Path) -> list[str]:
    return list_files(path) if path.is_dir() else []


def _module_text(path: Path, config: IconsConfig) -> str:
    if path.exists():
        return read_text(path)
    return empty_module(config.framework, config.typescript, config.forward_ref)


def _extension(config: IconsConfig) -> str:
    return get_dialect(config.framework).extension(config.typescript)


def _types_file(config: IconsConfig) -> str:
    dialect = get_dialect(config.framework)
    return build_types_file(dialect.props_type, dialect.props_import)


def init_project(
    cwd: Path,
    framework: str,
    output: str,
    folder: bool = False,
    typescript: bool = True,
    force: bool = False,
) -> IconsConfig:
    """Write iconmerge.yaml and an empty output.

    An existing output is left untouched.

    Raises:
        ConfigError: If the project is already configured and force is off.
        ConfigInvalidError: If the options do not form a valid config.
    """
    if not cwd.is_dir():
        raise ConfigError(f"Directory not found: {cwd}")
    if config_path(cwd).exists() and not force:
        raise ConfigError(f"{config_path(cwd).name} already exists (use --force to overwrite)")

    try:
        config = IconsConfig(
            output=OutputConfig(type="folder" if folder else "file", path=output),
            framework=framework,
            typescript=typescript,
        )
    except ValidationError as e:
        raise ConfigInvalidError(f"Invalid options: {e}") from e
    save_config(cwd, config)
    logger.info("Wrote %s", config_path(cwd))

    path = output_path(cwd, config)
    if config.is_folder:
        ext = _extension(config)
        barrel = path / barrel_filename(config.typescript)
        if not barrel.exists():
            write_text(barrel, build_barrel([], ext, config.typescript))
        if config.typescript and not (path / TYPES_FILENAME).exists():
            write_text(path / TYPES_FILENAME, _types_file(config))
    elif not path.exists():
        write_text(path, _module_text(path, config))
    logger.info("Output: %s", path)
    return config


def _fetchable(identifiers: list[str]) -> list[str]:
    valid = []
    for identifier in identifiers:
        try:
            parse_identifier(identifier)
        except InvalidIdentifierError:
            continue
        valid.append(identifier)
    return valid


def add_icons(
    cwd: Path,
    identifiers: list[str],
    confirm: Confirm,
    name: str | None = None,
    a11y: A11yStrategy | None = None,
    client: IconifyClient | None = None,
    workers: int = 4,
) -> BatchResult:
    """Fetch icons and merge them into the configured output.

    Args:
        cwd: Project root holding iconmerge.yaml
        identifiers: Registry identifiers, applied in this order
        confirm: Overwrite prompt
        name: Custom component name (single icon only)
        a11y: Overrides the configured accessibility strategy
        client: Registry client
        workers: Concurrent fetches; 1 fetches lazily one icon at a time

    Raises:
        ConfigError: If the project is not configured.
        NameCollisionError: If name is given with several identifiers.
        HookError: If a hook fails.
        MalformedModuleError: If the module cannot be parsed; nothing is
            fetched in that case.
        BatchCancelled: If the user cancels at a confirmation.
    """
    config = _load(cwd)
    if a11y is not None:
        config = config.model_copy(update={"a11y": a11y})
    check_request(identifiers, name)

    client = client or IconifyClient()
    run_hooks(config.hooks.pre_add, cwd)

    # The output is read and parsed before anything is fetched
    path = output_path(cwd, config)
    if config.is_folder:
        file_names = _folder_files(path)
    else:
        text = _module_text(path, config)
        list_entries(text)

    prefetched: dict[str, str | FetchError] | None = None
    candidates = _fetchable(identifiers)
    if workers > 1 and len(candidates) > 1:
        prefetched = client.fetch_many(candidates, max_workers=workers)

    if config.is_folder:
        result = merge_folder(file_names, identifiers, config, client.fetch, confirm, name, prefetched)
        if result.changed:
            _write_files(path, result, config, file_names)
    else:
        result = merge_module(text, identifiers, config, client.fetch, confirm, name, prefetched)
        if result.changed:
            _write_files(path.parent, result, config, _folder_files(path.parent))
            write_text(path, result.text)

    if result.changed:
        run_hooks(config.hooks.post_add, cwd)
    return result


def _write_files(directory: Path, result: BatchResult, config: IconsConfig, file_names: list[str]) -> None:
    """Write component files, with the shared types file they import."""
    if not result.files:
        return
    if config.typescript and TYPES_FILENAME not in file_names:
        write_text(directory / TYPES_FILENAME, _types_file(config))
    for file_name, content in result.files.items():
        write_text(directory / file_name, content)


def _delete_files(directory: Path, result: BatchResult) -> None:
    for file_name in result.removed_files:
        target = directory / file_name
        if target.exists():
            remove_file(target)
        else:
            logger.warning("Component file %s already gone", target)


def remove_icons(cwd: Path, names: list[str]) -> BatchResult:
    """Remove icons by component name from the configured output."""
    config = _load(cwd)
    run_hooks(config.hooks.pre_remove, cwd)

    path = output_path(cwd, config)
    if config.is_folder:
        result = remove_from_folder(_folder_files(path), names, config)
        if result.changed:
            _delete_files(path, result)
            for file_name, content in result.files.items():
                write_text(path / file_name, content)
    else:
        result = remove_from_module(_module_text(path, config), names, _extension(config))
        if result.changed:
            write_text(path, result.text)
            _delete_files(path.parent, result)

    if result.changed:
        run_hooks(config.hooks.post_remove, cwd)
    return result


def _installed(path: Path, config: IconsConfig) -> list[str]:
    if config.is_folder:
        return scan_existing(_folder_files(path), _extension(config))
    return list_entries(_module_text(path, config))


def clear_icons(cwd: Path, confirm: Confirm) -> BatchResult:
    """Remove every installed icon after one confirmation.

    Returns an empty result, without prompting or running hooks, when
    nothing is installed.

    Raises:
        BatchCancelled: If the user declines or cancels the confirmation.
    """
    config = _load(cwd)
    path = output_path(cwd, config)

    installed = _installed(path, config)
    if not installed:
        logger.info("No icons to remove")
        return BatchResult(removal=True)
    if not confirm(f"Remove all {len(installed)} icon(s)?"):
        raise BatchCancelled("Operation cancelled")

    run_hooks(config.hooks.pre_clear, cwd)
    if config.is_folder:
        result = clear_folder(_folder_files(path), config)
        if result.changed:
            _delete_files(path, result)
            for file_name, content in result.files.items():
                write_text(path / file_name, content)
    else:
        result = clear_module(_module_text(path, config), _extension(config))
        if result.changed:
            write_text(path, result.text)
            _delete_files(path.parent, result)

    if result.changed:
        run_hooks(config.hooks.post_clear, cwd)
    return result


def list_icons(cwd: Path) -> tuple[list[IconListing], str]:
    """Return the installed icons and the configured output path."""
    config = _load(cwd)
    run_hooks(config.hooks.pre_list, cwd)

    path = output_path(cwd, config)
    ext = _extension(config)
    if config.is_folder:
        names = scan_existing(_folder_files(path), ext)
        contents = {
            name: read_text(path / f"{name}{ext}") if config.track_source else ""
            for name in names
        }
        icons = list_folder(contents, config.track_source)
    elif path.exists():

        def read_component(source: str) -> str | None:
            target = path.parent / component_file(source, ext)
            return read_text(target) if target.exists() else None

        icons = list_module(read_text(path), config.track_source, read_component)
    else:
        icons = []

    run_hooks(config.hooks.post_list, cwd)
    return icons, config.output.path
