"""Search path helpers: splitting, temp-dir filtering and re-adding entries."""

from __future__ import annotations

import logging
import os
import tempfile

logger = logging.getLogger(__name__)


def _normalize(entry: str) -> str:
    return os.path.normcase(os.path.normpath(os.path.abspath(os.path.expanduser(entry))))


def _is_relative(entry: str) -> bool:
    return not os.path.isabs(os.path.expanduser(entry))


def split_search_path(value: str) -> list[str]:
    """Split a delimited search path into its non-empty entries."""
    return [entry for entry in value.split(os.pathsep) if entry]


def join_search_path(entries: list[str]) -> str:
    """Join entries back into a single delimited search path."""
    return os.pathsep.join(entries)


def is_temp_entry(entry: str, temp_dir: str | None = None) -> bool:
    """
    Check whether a search path entry is the temp directory or inside it.

    Args:
        entry: Search path entry
        temp_dir: Temp directory to test against (default: tempfile.gettempdir())

    Returns:
        True if the entry points into the temp directory. Relative entries
        (".", "src") follow the working directory and are never temp entries.
    """
    if _is_relative(entry):
        return False
    root = _normalize(temp_dir or tempfile.gettempdir())
    candidate = _normalize(entry)
    try:
        return os.path.commonpath([root, candidate]) == root
    except ValueError:
        # Different drives on Windows
        return False


def strip_temp_entries(value: str, temp_dir: str | None = None) -> tuple[str, list[str]]:
    """
    Remove every entry under the temp directory from a search path.

    Args:
        value: Delimited search path
        temp_dir: Temp directory (default: tempfile.gettempdir())

    Returns:
        Tuple of (filtered search path, removed entries)
    """
    kept: list[str] = []
    removed: list[str] = []
    for entry in split_search_path(value):
        if is_temp_entry(entry, temp_dir):
            logger.info(f"Removing {entry} from the search path")
            removed.append(entry)
        else:
            kept.append(entry)
    return join_search_path(kept), removed


def append_entry(value: str, entry: str) -> str:
    """Return the search path with entry as its last element, exactly once."""
    target = _normalize(entry)
    entries = [
        e for e in split_search_path(value)
        if _is_relative(e) or _normalize(e) != target
    ]
    entries.append(entry)
    return join_search_path(entries)


__all__ = [
    "append_entry",
    "is_temp_entry",
    "join_search_path",
    "split_search_path",
    "strip_temp_entries",
]
