"""
Startup/shutdown hooks for interactive Python sessions.

install() writes startup.py into the store directory. Point PYTHONSTARTUP
at it and every interactive interpreter restores the last session on start
and offers to save the open one on exit.
"""

from __future__ import annotations

import atexit
import logging
from pathlib import Path

from .config import SessionConfig
from .prompts import Answer, Prompter, TerminalPrompter
from .session_manager import SaveOutcome, SessionManager, get_session_manager

logger = logging.getLogger(__name__)

STARTUP_HOOK_NAME = "startup.py"

STARTUP_HOOK = '''\
# Installed by ide-sessions. Enable with PYTHONSTARTUP={path}
try:
    from ide_sessions import hooks as _ide_sessions_hooks
except ImportError:
    pass
else:
    _ide_sessions_hooks.on_startup()
    del _ide_sessions_hooks
'''


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr with plain, user-facing messages."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s: %(message)s",
    )


def install(
    config: SessionConfig | None = None,
    prompter: Prompter | None = None,
    force: bool = False,
) -> bool:
    """
    Create the store directory and write the startup hook.

    Args:
        config: Settings (default: SessionConfig.load())
        prompter: Asked before overwriting an existing hook
        force: Overwrite an existing hook without asking

    Returns:
        True if the hook was written
    """
    config = config or SessionConfig.load()
    store_dir = config.store_path
    store_dir.mkdir(parents=True, exist_ok=True)

    hook_path = startup_hook_path(config)
    if hook_path.exists() and not force:
        prompter = prompter or TerminalPrompter()
        answer = prompter.ask_question(
            f"{STARTUP_HOOK_NAME} already exists in {store_dir}. Do you want to overwrite it?",
            "Overwrite",
            default=Answer.NO,
        )
        if answer is not Answer.YES:
            logger.info("Session manager initialization aborted.")
            return False

    hook_path.write_text(STARTUP_HOOK.format(path=hook_path))
    logger.info("Session manager successfully initialized.")
    logger.info(f"Enable it with: export PYTHONSTARTUP={hook_path}")
    return True


def startup_hook_path(config: SessionConfig | None = None) -> Path:
    """Location of the startup hook."""
    config = config or SessionConfig.load()
    return config.store_path / STARTUP_HOOK_NAME


def on_startup(
    manager: SessionManager | None = None,
    config: SessionConfig | None = None,
) -> bool:
    """
    Restore the last session at interpreter start.

    Registers on_shutdown with atexit when save_on_exit is set.

    Returns:
        True if a session was restored
    """
    config = config or (manager.config if manager else SessionConfig.load())
    configure_logging(config.log_level)
    manager = manager or get_session_manager()

    if config.save_on_exit:
        atexit.register(on_shutdown, manager)

    try:
        return manager.restore_last_session(ask=not config.auto_restore)
    except Exception as e:
        logger.warning(f"Could not restore the last session: {e}")
        return False


def on_shutdown(manager: SessionManager | None = None) -> SaveOutcome:
    """Offer to save the open session; the interpreter is exiting, so never raise."""
    manager = manager or get_session_manager()
    try:
        return manager.save(force=False)
    except Exception as e:
        logger.warning(f"Could not save the session on exit: {e}")
        return SaveOutcome.CANCELLED


__all__ = [
    "STARTUP_HOOK",
    "STARTUP_HOOK_NAME",
    "configure_logging",
    "startup_hook_path",
    "install",
    "on_shutdown",
    "on_startup",
]
