"""
Icon barrel merging for generated component modules.

Fetches icons from Iconify, optimizes them and merges them into a barrel
module (or a folder of per-icon modules) without disturbing the rest of
the generated source.

Usage:
    python -m icon_merge init --framework react -o src/icons.tsx
    python -m icon_merge add mdi:home mdi:arrow-left --a11y hidden
    python -m icon_merge list
    python -m icon_merge remove ArrowLeft
    python -m icon_merge clear --yes
"""

from .errors import (
    IconMergeError,
    InvalidIdentifierError,
    ReservedNameError,
    NameCollisionError,
    FetchError,
    MalformedSvgError,
    UnsupportedDialectError,
    MalformedModuleError,
    EntryNotFoundError,
    DuplicateEntryError,
    DocumentIoError,
    ConfigError,
    ConfigMissingError,
    ConfigInvalidError,
    HookError,
    BatchCancelled,
)
from .config import IconsConfig, OutputConfig, HooksConfig, load_config, save_config
from .naming import IconIdentifier, parse_identifier, to_component_name, to_readable_name
from .dialects import Dialect, DIALECTS, get_dialect
from .svg import TransformOptions, transform_svg
from .synthesizer import ComponentDefinition, synthesize, synthesize_file
from .document import (
    ModuleDocument,
    list_entries,
    insert_sorted,
    replace_entry,
    remove_entry,
    empty_module,
)
from .folder import scan_existing, build_barrel, build_types_file
from .merger import (
    Status,
    IconOutcome,
    BatchResult,
    merge_module,
    merge_folder,
    remove_from_module,
    remove_from_folder,
    clear_module,
    clear_folder,
)
from .listing import IconListing, list_module, list_folder
from .registry import IconifyClient

__all__ = [
    # Errors
    "IconMergeError",
    "InvalidIdentifierError",
    "ReservedNameError",
    "NameCollisionError",
    "FetchError",
    "MalformedSvgError",
    "UnsupportedDialectError",
    "MalformedModuleError",
    "EntryNotFoundError",
    "DuplicateEntryError",
    "DocumentIoError",
    "ConfigError",
    "ConfigMissingError",
    "ConfigInvalidError",
    "HookError",
    "BatchCancelled",
    # Config
    "IconsConfig",
    "OutputConfig",
    "HooksConfig",
    "load_config",
    "save_config",
    # Naming
    "IconIdentifier",
    "parse_identifier",
    "to_component_name",
    "to_readable_name",
    # Dialects
    "Dialect",
    "DIALECTS",
    "get_dialect",
    # SVG
    "TransformOptions",
    "transform_svg",
    # Synthesizer
    "ComponentDefinition",
    "synthesize",
    "synthesize_file",
    # Document
    "ModuleDocument",
    "list_entries",
    "insert_sorted",
    "replace_entry",
    "remove_entry",
    "empty_module",
    # Folder
    "scan_existing",
    "build_barrel",
    "build_types_file",
    # Merger
    "Status",
    "IconOutcome",
    "BatchResult",
    "merge_module",
    "merge_folder",
    "remove_from_module",
    "remove_from_folder",
    "clear_module",
    "clear_folder",
    # Listing
    "IconListing",
    "list_module",
    "list_folder",
    # Registry
    "IconifyClient",
]
