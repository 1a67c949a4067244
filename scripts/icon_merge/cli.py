"""Command-line interface for icon merging."""

import argparse
import sys
from pathlib import Path

from .dialects import DIALECTS
from .errors import BatchCancelled, IconMergeError
from .listing import format_listing, format_listing_json
from .log import setup_logging
from .merger import BatchResult, Status
from .project import add_icons, clear_icons, init_project, list_icons, remove_icons

A11Y_CHOICES = ("hidden", "img", "presentation", "none")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="icon-merge",
        description="Merge Iconify icons into generated component modules",
    )
    parser.add_argument(
        "-C", "--cwd",
        type=Path,
        default=Path.cwd(),
        help="Project directory containing iconmerge.yaml (default: current directory)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- init subcommand ---
    init_parser = subparsers.add_parser(
        "init",
        help="Create iconmerge.yaml and an empty icons module",
    )
    init_parser.add_argument(
        "-o", "--output",
        default="src/icons.tsx",
        help="Output file, or folder with --folder (default: src/icons.tsx)",
    )
    init_parser.add_argument(
        "--framework",
        choices=sorted(DIALECTS),
        default="react",
        help="Component framework (default: react)",
    )
    init_parser.add_argument(
        "--folder",
        action="store_true",
        help="Write one file per icon plus a barrel",
    )
    init_parser.add_argument(
        "--js",
        action="store_true",
        help="Generate JavaScript instead of TypeScript",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing iconmerge.yaml",
    )

    # --- add subcommand ---
    add_parser = subparsers.add_parser(
        "add",
        help="Fetch icons and merge them into the output",
    )
    add_parser.add_argument(
        "icons",
        nargs="+",
        metavar="ICON",
        help="Icon identifiers (e.g., mdi:home lucide:arrow-left)",
    )
    add_parser.add_argument(
        "--name",
        help="Custom component name (single icon only)",
    )
    add_parser.add_argument(
        "--a11y",
        choices=A11Y_CHOICES,
        help="Accessibility strategy (default: from config)",
    )
    add_parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Overwrite existing icons without asking",
    )
    add_parser.add_argument(
        "--workers",
        type=int,
        default=4,
        help="Concurrent registry requests (default: 4)",
    )

    # --- list subcommand ---
    list_parser = subparsers.add_parser(
        "list",
        help="List installed icons",
    )
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the listing as JSON",
    )

    # --- remove subcommand ---
    remove_parser = subparsers.add_parser(
        "remove",
        help="Remove icons by component name",
    )
    remove_parser.add_argument(
        "names",
        nargs="+",
        metavar="NAME",
        help="Component names (e.g., Home ArrowLeft)",
    )

    # --- clear subcommand ---
    clear_parser = subparsers.add_parser(
        "clear",
        help="Remove all installed icons",
    )
    clear_parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Skip the confirmation prompt",
    )

    return parser


def prompt_confirm(message: str) -> bool | None:
    """Ask a yes/no question on the terminal; None when input is closed."""
    try:
        answer = input(f"{message} [y/N] ")
    except (EOFError, KeyboardInterrupt):
        print(file=sys.stderr)
        return None
    return answer.strip().lower() in ("y", "yes")


def _report(result: BatchResult) -> int:
    print(result.summary())
    return 1 if result.count(Status.FAILED) else 0


def cmd_init(args: argparse.Namespace) -> int:
    """Execute init subcommand."""
    config = init_project(
        args.cwd,
        framework=args.framework,
        output=args.output,
        folder=args.folder,
        typescript=not args.js,
        force=args.force,
    )
    print(f"Initialized {config.framework} icons in {config.output.path}")
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    """Execute add subcommand."""
    if args.workers < 1:
        print("Error: --workers must be at least 1", file=sys.stderr)
        return 1

    confirm = (lambda message: True) if args.yes else prompt_confirm
    try:
        result = add_icons(
            args.cwd,
            args.icons,
            confirm,
            name=args.name,
            a11y=args.a11y,
            workers=args.workers,
        )
    except BatchCancelled:
        print("Cancelled, no changes written", file=sys.stderr)
        return 1
    return _report(result)


def cmd_list(args: argparse.Namespace) -> int:
    """Execute list subcommand."""
    icons, output = list_icons(args.cwd)
    if args.json:
        print(format_listing_json(icons, output))
    else:
        print(format_listing(icons, output))
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    """Execute remove subcommand."""
    return _report(remove_icons(args.cwd, args.names))


def cmd_clear(args: argparse.Namespace) -> int:
    """Execute clear subcommand."""
    confirm = (lambda message: True) if args.yes else prompt_confirm
    try:
        result = clear_icons(args.cwd, confirm)
    except BatchCancelled:
        print("Cancelled, no changes written", file=sys.stderr)
        return 1
    if not result.outcomes:
        print("No icons to remove")
        return 0
    return _report(result)


COMMANDS = {
    "init": cmd_init,
    "add": cmd_add,
    "list": cmd_list,
    "remove": cmd_remove,
    "clear": cmd_clear,
}


def run(argv: list[str] | None = None) -> int:
    """Parse arguments and execute a subcommand, returning the exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        return COMMANDS[args.command](args)
    except IconMergeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main() -> None:
    """Main CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
