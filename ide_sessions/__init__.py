"""ide-sessions: named sessions for interactive environments.

A session is the set of open documents, the active document, the working
directory and the search path. Sessions are saved under a name in
~/.ide-sessions/ and can be switched between at any time; the last saved
session is restored on the next start.
"""

__version__ = "0.1.0"

# Records & storage
from .session_schema import LastSessionPointer, SessionRecord
from .session_store import (
    CorruptRecordError,
    InvalidSessionNameError,
    SessionError,
    SessionNotFoundError,
    SessionStore,
)

# Collaborators
from .ide_adapter import IDEAdapter, InMemoryAdapter, PythonProcessAdapter
from .prompts import Answer, Prompter, TerminalPrompter

# Lifecycle
from .session_manager import (
    SaveOutcome,
    SessionManager,
    get_session_manager,
    list_sessions,
    load,
    new,
    open_document,
    save,
    set_session_manager,
)
from .hooks import install as init

# Config
from .config import SessionConfig

__all__ = [
    # Records & storage
    "SessionRecord",
    "LastSessionPointer",
    "SessionStore",
    "SessionError",
    "SessionNotFoundError",
    "InvalidSessionNameError",
    "CorruptRecordError",
    # Collaborators
    "IDEAdapter",
    "InMemoryAdapter",
    "PythonProcessAdapter",
    "Prompter",
    "TerminalPrompter",
    "Answer",
    # Lifecycle
    "SessionManager",
    "SaveOutcome",
    "get_session_manager",
    "set_session_manager",
    "init",
    "new",
    "save",
    "load",
    "list_sessions",
    "open_document",
    # Config
    "SessionConfig",
]
