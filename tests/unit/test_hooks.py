"""Tests for the install step and the startup/shutdown hooks."""

import atexit
from unittest.mock import MagicMock

import pytest

from ide_sessions import hooks
from ide_sessions.prompts import Answer
from ide_sessions.session_manager import SaveOutcome
from ide_sessions.session_schema import SessionRecord


class TestInstall:
    def test_install_writes_hook(self, config, store_dir, prompter):
        assert hooks.install(config, prompter) is True

        hook = store_dir / "startup.py"
        assert hook.exists()
        content = hook.read_text()
        assert "_ide_sessions_hooks.on_startup()" in content
        assert f"PYTHONSTARTUP={hook}" in content
        assert prompter.questions == []

    def test_existing_hook_declined(self, config, store_dir, prompter, caplog):
        store_dir.mkdir(parents=True)
        (store_dir / "startup.py").write_text("# mine\n")
        prompter.answers.append(Answer.NO)

        with caplog.at_level("INFO"):
            assert hooks.install(config, prompter) is False

        assert (store_dir / "startup.py").read_text() == "# mine\n"
        assert "initialization aborted" in caplog.text

    def test_existing_hook_overwritten(self, config, store_dir, prompter):
        store_dir.mkdir(parents=True)
        (store_dir / "startup.py").write_text("# mine\n")
        prompter.answers.append(Answer.YES)

        assert hooks.install(config, prompter) is True
        assert "on_startup" in (store_dir / "startup.py").read_text()

    def test_force_skips_question(self, config, store_dir, prompter):
        store_dir.mkdir(parents=True)
        (store_dir / "startup.py").write_text("# mine\n")

        assert hooks.install(config, prompter, force=True) is True
        assert prompter.questions == []

    def test_hook_is_valid_python(self, config, store_dir, prompter):
        hooks.install(config, prompter)
        compile((store_dir / "startup.py").read_text(), "startup.py", "exec")


class TestStartup:
    @pytest.fixture
    def registered(self, monkeypatch):
        calls = []
        monkeypatch.setattr(atexit, "register", lambda func, *args: calls.append((func, args)))
        return calls

    @pytest.fixture
    def stored_beta(self, store):
        store.write_record(SessionRecord(name="beta", working_directory="/other"))
        store.write_last_session("beta")

    def test_restores_last_session(self, manager, adapter, stored_beta, registered):
        assert hooks.on_startup(manager) is True

        assert manager.current_session == "beta"
        assert adapter.working_directory() == "/other"
        assert registered == [(hooks.on_shutdown, (manager,))]

    def test_asks_when_auto_restore_off(self, manager, prompter, stored_beta, registered):
        manager.config.auto_restore = False
        prompter.answers.append(Answer.NO)

        assert hooks.on_startup(manager) is False
        assert prompter.questions == ["Restore the last session (beta)?"]

    def test_no_exit_hook_when_disabled(self, manager, registered):
        manager.config.save_on_exit = False

        assert hooks.on_startup(manager) is False
        assert registered == []

    def test_restore_error_is_logged(self, registered, caplog):
        manager = MagicMock()
        manager.config.log_level = "INFO"
        manager.config.save_on_exit = False
        manager.restore_last_session.side_effect = OSError("store unavailable")

        with caplog.at_level("WARNING"):
            assert hooks.on_startup(manager) is False

        assert "store unavailable" in caplog.text


class TestShutdown:
    def test_asks_to_save(self, manager, prompter, store):
        manager.new("alpha")
        prompter.answers.append(Answer.YES)

        assert hooks.on_shutdown(manager) is SaveOutcome.SAVED
        assert prompter.questions == ["Do you want to save the open session (alpha)?"]

    def test_errors_never_raise(self, caplog):
        manager = MagicMock()
        manager.save.side_effect = OSError("disk full")

        with caplog.at_level("WARNING"):
            assert hooks.on_shutdown(manager) is SaveOutcome.CANCELLED

        assert "disk full" in caplog.text
