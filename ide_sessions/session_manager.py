"""
Session Manager for ide-sessions.

Ties the live environment (IDEAdapter) to the record files (SessionStore):

    new(name)   save the live session, then start a session called name
    save()      snapshot the live environment into <name>.sess
    load(name)  save the live session, then restore <name>.sess

Only save() moves the last-used pointer.
"""

from __future__ import annotations

import logging
from enum import Enum

from .config import SessionConfig
from .ide_adapter import (
    IDEAdapter,
    PythonProcessAdapter,
    base_title,
    format_session_title,
    parse_session_title,
)
from .prompts import Answer, Prompter, TerminalPrompter
from .search_path import append_entry, strip_temp_entries
from .session_schema import SessionRecord
from .session_store import (
    CorruptRecordError,
    InvalidSessionNameError,
    SessionNotFoundError,
    SessionStore,
)

logger = logging.getLogger(__name__)

LIST_KEYWORD = "list"


class SaveOutcome(str, Enum):
    """Result of SessionManager.save."""

    SAVED = "saved"
    DECLINED = "declined"  # user answered "no"
    NO_SESSION = "no_session"
    CANCELLED = "cancelled"

    @property
    def ok(self) -> bool:
        """False only when the caller's pending operation must be aborted."""
        return self is not SaveOutcome.CANCELLED


class SessionManager:
    """
    Creates, saves and restores named sessions of the live environment.

    The current session name is held here. The adapter's window title only
    mirrors it, and is parsed as a fallback when no name has been set yet.
    """

    def __init__(
        self,
        adapter: IDEAdapter,
        prompter: Prompter | None = None,
        store: SessionStore | None = None,
        config: SessionConfig | None = None,
        tool_dir: str | None = None,
        temp_dir: str | None = None,
    ):
        """
        Initialize session manager.

        Args:
            adapter: Live environment
            prompter: Used for names and confirmations (default: TerminalPrompter)
            store: Record storage (default: built from config)
            config: Settings (default: SessionConfig.load())
            tool_dir: Directory re-added to every restored search path
                (default: the store directory, which holds the startup hook)
            temp_dir: Temp directory filtered out of saved search paths
                (default: tempfile.gettempdir())
        """
        self.config = config or SessionConfig.load()
        self.adapter = adapter
        self.prompter = prompter or TerminalPrompter()
        self.store = store or SessionStore.from_config(self.config)
        self.tool_dir = tool_dir or str(self.store.base_dir)
        self.temp_dir = temp_dir
        self._current_session: str | None = None

    @property
    def current_session(self) -> str | None:
        """Name of the live session, or None if there is none."""
        if self._current_session is not None:
            return self._current_session
        return parse_session_title(self.adapter.get_window_title(), self.store.suffix)

    def _set_current_session(self, name: str) -> None:
        self._current_session = name
        title = self.adapter.get_window_title()
        self.adapter.set_window_title(
            format_session_title(base_title(title, self.store.suffix), name, self.store.suffix)
        )

    def snapshot(self, name: str) -> SessionRecord:
        """
        Build a record of the live environment without writing it.

        Temp-directory entries are removed from the search path.
        """
        open_files = self.adapter.open_documents()
        active_file = self.adapter.active_document() or ""
        if active_file not in open_files:
            active_file = ""

        search_path, _ = strip_temp_entries(self.adapter.search_path(), self.temp_dir)

        return SessionRecord(
            name=self.store.validate_name(name),
            open_files=open_files,
            active_file=active_file,
            working_directory=self.adapter.working_directory(),
            search_path=search_path,
        )

    def save(self, force: bool = True, name: str | None = None) -> SaveOutcome:
        """
        Save the live session.

        Args:
            force: Save without asking. When False the user is asked first;
                "no" skips the save, "cancel" aborts the caller's operation.
            name: Session to save as (default: the current session)

        Returns:
            SaveOutcome
        """
        name = name or self.current_session
        if not name:
            logger.debug("No open session to save")
            return SaveOutcome.NO_SESSION

        if not force:
            answer = self.prompter.ask_question(
                f"Do you want to save the open session ({name})?",
                "Session save",
                default=Answer.YES,
            )
            if answer is Answer.NO:
                return SaveOutcome.DECLINED
            if answer is not Answer.YES:
                return SaveOutcome.CANCELLED

        try:
            record = self.snapshot(name)
        except InvalidSessionNameError as e:
            logger.error(f"Cannot save session: {e}")
            return SaveOutcome.NO_SESSION

        self.store.write_record(record)
        self.store.write_last_session(record.name)
        logger.info(f"Session {record.name} saved")
        return SaveOutcome.SAVED

    def new(self, name: str | None = None) -> bool:
        """
        Start a new session.

        The live session is saved first (with confirmation); cancelling that
        aborts. Asks for the name when none is given, and for confirmation
        before replacing an existing record.

        Returns:
            True if the new session was created and saved
        """
        if not self.save(force=False).ok:
            return False

        if name is None:
            name = self.prompter.ask_text("Enter session name", "Session Name")
            if not name:
                return False

        try:
            name = self.store.validate_name(name)
        except InvalidSessionNameError as e:
            logger.error(str(e))
            return False

        if self.store.record_exists(name):
            answer = self.prompter.ask_question(
                f'A session named "{name}" already exists. Do you want to overwrite it?',
                "Overwrite session",
                default=Answer.NO,
            )
            if answer is not Answer.YES:
                logger.info(f"Kept existing session {name}")
                return False

        self._set_current_session(name)
        return self.save() is SaveOutcome.SAVED

    def load(self, name: str | None = None) -> bool:
        """
        Restore a stored session into the live environment.

        load("list") prints the stored sessions instead. The live session is
        saved first (with confirmation); cancelling that aborts. Problems
        restoring the directory, a document or the search path are logged
        as warnings and the rest of the restore continues.

        Returns:
            True if the session was loaded
        """
        if name is not None and name.strip() == LIST_KEYWORD:
            for session_name in self.list_sessions():
                print(session_name)
            return False

        if not self.save(force=False).ok:
            return False

        if name is None:
            options = self.list_sessions()
            if not options:
                logger.info(f"No stored sessions in {self.store.base_dir}")
                return False
            name = self.prompter.choose(options, "Load session")
            if not name:
                return False

        try:
            record = self.store.read_record(name)
        except (SessionNotFoundError, CorruptRecordError, InvalidSessionNameError) as e:
            logger.error(str(e))
            return False

        self._apply(record)
        logger.info(f"Session {record.name} successfully loaded")
        return True

    def _apply(self, record: SessionRecord) -> None:
        """Push a record's fields into the live environment."""
        try:
            self.adapter.change_directory(record.working_directory)
        except OSError as e:
            logger.warning(f"Could not change to {record.working_directory}: {e}")

        self.adapter.close_all_documents()
        opened = []
        for path in record.open_files:
            try:
                self.adapter.open_document(path)
                opened.append(path)
            except (OSError, ValueError) as e:
                logger.warning(f"Could not reopen {path}: {e}")

        if record.active_file in opened:
            self.adapter.focus_document(record.active_file)

        try:
            self.adapter.set_search_path(append_entry(record.search_path, self.tool_dir))
        except Exception as e:
            logger.warning(f"Something went wrong loading the session search path: {e}")

        self._set_current_session(record.name)

    def list_sessions(self) -> list[str]:
        """List stored session names."""
        return self.store.list_records()

    def last_session(self) -> str | None:
        """Last saved session, if its record still exists."""
        name = self.store.read_last_session()
        if name and self.store.record_exists(name):
            return name
        return None

    def restore_last_session(self, ask: bool = False) -> bool:
        """
        Load the last saved session.

        Args:
            ask: Ask before loading

        Returns:
            True if a session was loaded
        """
        name = self.last_session()
        if name is None:
            return False

        if ask:
            answer = self.prompter.ask_question(
                f"Restore the last session ({name})?",
                "Session restore",
                default=Answer.YES,
            )
            if answer is not Answer.YES:
                return False

        logger.info(f"Loading last session: {name}")
        return self.load(name)


# Global instance for convenience
_session_manager: SessionManager | None = None


def get_session_manager() -> SessionManager:
    """Get global session manager instance."""
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager(adapter=PythonProcessAdapter())
    return _session_manager


def set_session_manager(manager: SessionManager | None) -> None:
    """Replace (or with None, reset) the global session manager."""
    global _session_manager
    _session_manager = manager


def new(name: str | None = None) -> bool:
    """Create a new session. See SessionManager.new."""
    return get_session_manager().new(name)


def save(force: bool = True) -> SaveOutcome:
    """Save the current session. See SessionManager.save."""
    return get_session_manager().save(force)


def load(name: str | None = None) -> bool:
    """Load a session, or load("list") to list them. See SessionManager.load."""
    return get_session_manager().load(name)


def list_sessions() -> list[str]:
    """List stored sessions."""
    return get_session_manager().list_sessions()


def open_document(path: str) -> None:
    """Open a document in the live environment so the next save records it."""
    get_session_manager().adapter.open_document(path)


__all__ = [
    "LIST_KEYWORD",
    "SaveOutcome",
    "SessionManager",
    "get_session_manager",
    "list_sessions",
    "load",
    "new",
    "open_document",
    "save",
    "set_session_manager",
]
