"""
Shared fixtures for ide-sessions unit tests.
"""

from __future__ import annotations

import os

import pytest

from ide_sessions.config import SessionConfig
from ide_sessions.ide_adapter import InMemoryAdapter
from ide_sessions.prompts import Answer
from ide_sessions.session_manager import SessionManager, set_session_manager
from ide_sessions.session_store import SessionStore


class ScriptedPrompter:
    """Prompter answering from pre-set queues and recording what was asked."""

    def __init__(self, answers=None, texts=None, choices=None):
        self.answers = list(answers or [])
        self.texts = list(texts or [])
        self.choices = list(choices or [])
        self.questions: list[str] = []
        self.offered: list[list[str]] = []

    def ask_text(self, prompt, title, default=""):
        return self.texts.pop(0) if self.texts else None

    def ask_question(self, question, title, default=Answer.YES):
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else Answer.CANCEL

    def choose(self, options, title):
        self.offered.append(list(options))
        return self.choices.pop(0) if self.choices else None


@pytest.fixture
def store_dir(tmp_path):
    """Session store directory."""
    return tmp_path / "sessions"


@pytest.fixture
def config(store_dir):
    return SessionConfig(store_dir=str(store_dir))


@pytest.fixture
def store(config):
    return SessionStore.from_config(config)


@pytest.fixture
def adapter():
    """Live environment with two open files and a temp entry on the search path."""
    return InMemoryAdapter(
        documents=["/work/proj/a.py", "/work/proj/b.py"],
        active="/work/proj/b.py",
        cwd="/work/proj",
        search_path=os.pathsep.join(["/opt/lib", "/scratch/tmp123", "/work/proj/src"]),
        title="Python 3.12",
    )


@pytest.fixture
def prompter():
    return ScriptedPrompter()


@pytest.fixture
def manager(adapter, prompter, store, config):
    """SessionManager over the in-memory adapter; /scratch plays the temp dir."""
    return SessionManager(
        adapter=adapter,
        prompter=prompter,
        store=store,
        config=config,
        tool_dir="/tools/ide-sessions",
        temp_dir="/scratch",
    )


@pytest.fixture(autouse=True)
def reset_global_manager():
    set_session_manager(None)
    yield
    set_session_manager(None)
