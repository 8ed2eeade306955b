"""
IDE adapter interface and implementations.

The session manager only touches the host environment through IDEAdapter:
open documents, the working directory, the search path and the window title.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Protocol, TextIO


TITLE_SEPARATOR = " - "


class IDEAdapter(Protocol):
    """
    Narrow view of the host environment.

    close_all_documents must never prompt the user.
    """

    def open_documents(self) -> list[str]:
        ...

    def active_document(self) -> str | None:
        ...

    def working_directory(self) -> str:
        ...

    def change_directory(self, path: str) -> None:
        ...

    def search_path(self) -> str:
        ...

    def set_search_path(self, value: str) -> None:
        ...

    def close_all_documents(self) -> None:
        ...

    def open_document(self, path: str) -> None:
        ...

    def focus_document(self, path: str) -> None:
        ...

    def get_window_title(self) -> str:
        ...

    def set_window_title(self, title: str) -> None:
        ...


# =============================================================================
# Window title helpers
# =============================================================================


def format_session_title(base: str, name: str, suffix: str = ".sess") -> str:
    """Window title showing the session: '<base> - <name><suffix>'."""
    return f"{base}{TITLE_SEPARATOR}{name}{suffix}"


def parse_session_title(title: str, suffix: str = ".sess") -> str | None:
    """
    Recover the session name from a window title.

    Args:
        title: Window title, e.g. "Python 3.12 - analysis.sess"
        suffix: Record suffix the title ends with

    Returns:
        Session name, or None if the title carries no session
    """
    if not title or not title.endswith(suffix) or TITLE_SEPARATOR not in title:
        return None
    _, _, tail = title.rpartition(TITLE_SEPARATOR)
    name = tail[: -len(suffix)] if suffix else tail
    return name.strip() or None


def base_title(title: str, suffix: str = ".sess") -> str:
    """Window title with any session part removed."""
    if parse_session_title(title, suffix) is None:
        return title
    return title.rpartition(TITLE_SEPARATOR)[0]


# =============================================================================
# Adapters
# =============================================================================


class InMemoryAdapter:
    """
    Adapter keeping every property in memory.

    change_directory only records the path; nothing touches the process.
    """

    def __init__(
        self,
        documents: list[str] | None = None,
        active: str | None = None,
        cwd: str = "/",
        search_path: str = "",
        title: str = "IDE",
    ):
        self.documents = list(documents or [])
        self.active = active
        self.cwd = cwd
        self.path = search_path
        self.title = title

    def open_documents(self) -> list[str]:
        return list(self.documents)

    def active_document(self) -> str | None:
        return self.active

    def working_directory(self) -> str:
        return self.cwd

    def change_directory(self, path: str) -> None:
        self.cwd = path

    def search_path(self) -> str:
        return self.path

    def set_search_path(self, value: str) -> None:
        self.path = value

    def close_all_documents(self) -> None:
        self.documents.clear()
        self.active = None

    def open_document(self, path: str) -> None:
        if path not in self.documents:
            self.documents.append(path)
        self.active = path

    def focus_document(self, path: str) -> None:
        if path not in self.documents:
            raise ValueError(f"Document is not open: {path}")
        self.active = path

    def get_window_title(self) -> str:
        return self.title

    def set_window_title(self, title: str) -> None:
        self.title = title


class PythonProcessAdapter:
    """
    Adapter over the running Python interpreter.

    - Working directory: the process cwd
    - Search path: sys.path, rendered with os.pathsep
    - Documents: tracked in memory, must exist on disk to be opened
    - Window title: kept in memory and mirrored to the terminal title
    """

    def __init__(self, title: str | None = None, stream: TextIO | None = None):
        self._documents: list[str] = []
        self._active: str | None = None
        self._title = title or f"Python {sys.version_info.major}.{sys.version_info.minor}"
        self._stream = stream if stream is not None else sys.stdout

    def open_documents(self) -> list[str]:
        return list(self._documents)

    def active_document(self) -> str | None:
        return self._active

    def working_directory(self) -> str:
        return os.getcwd()

    def change_directory(self, path: str) -> None:
        os.chdir(path)

    def search_path(self) -> str:
        # "" (the cwd on sys.path) cannot survive a pathsep join; store it as os.curdir
        return os.pathsep.join(entry or os.curdir for entry in sys.path)

    def set_search_path(self, value: str) -> None:
        entries = [entry for entry in value.split(os.pathsep) if entry]
        sys.path[:] = ["" if entry == os.curdir else entry for entry in entries]

    def close_all_documents(self) -> None:
        self._documents.clear()
        self._active = None

    def open_document(self, path: str) -> None:
        resolved = str(Path(path).expanduser().resolve())
        if not Path(resolved).is_file():
            raise FileNotFoundError(f"Document not found: {path}")
        if resolved not in self._documents:
            self._documents.append(resolved)
        self._active = resolved

    def focus_document(self, path: str) -> None:
        resolved = str(Path(path).expanduser().resolve())
        if resolved not in self._documents:
            raise ValueError(f"Document is not open: {path}")
        self._active = resolved

    def get_window_title(self) -> str:
        return self._title

    def set_window_title(self, title: str) -> None:
        self._title = title
        if self._stream.isatty():
            # xterm title escape
            self._stream.write(f"\33]0;{title}\a")
            self._stream.flush()


__all__ = [
    "IDEAdapter",
    "InMemoryAdapter",
    "PythonProcessAdapter",
    "base_title",
    "format_session_title",
    "parse_session_title",
]
