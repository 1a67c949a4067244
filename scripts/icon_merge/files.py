"""Filesystem access for generated modules."""

from pathlib import Path

from .errors import DocumentIoError


def read_text(path: Path) -> str:
    """Load a generated file.

    Raises:
        DocumentIoError: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentIoError(f"Failed to read {path}: {e}") from e


def write_text(path: Path, content: str) -> None:
    """Save a generated file, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise DocumentIoError(f"Failed to write {path}: {e}") from e


def list_files(path: Path) -> list[str]:
    """Return the names of regular files in a directory."""
    try:
        return sorted(p.name for p in path.iterdir() if p.is_file())
    except OSError as e:
        raise DocumentIoError(f"Failed to read directory {path}: {e}") from e


def remove_file(path: Path) -> None:
    try:
        path.unlink()
    except OSError as e:
        raise DocumentIoError(f"Failed to remove {path}: {e}") from e
