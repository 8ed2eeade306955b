"""
Session Store for ide-sessions.

Persists one record file per session in the store directory:

    <store_dir>/<name>.sess         SessionRecord (JSON)
    <store_dir>/lastSession.sess    LastSessionPointer (JSON)

Every file is written as a whole, through a temp file and a rename.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, ValidationError

from .config import SessionConfig
from .session_schema import LastSessionPointer, SessionRecord

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Session store operation failed."""


class SessionNotFoundError(SessionError, FileNotFoundError):
    """No record file exists for the requested session."""


class InvalidSessionNameError(SessionError, ValueError):
    """Session name cannot be used as a record file stem."""


class CorruptRecordError(SessionError):
    """A record file exists but cannot be parsed."""


class SessionStore:
    """
    Manages session record files in a single directory.

    Does not know about the live environment; see SessionManager for that.
    """

    def __init__(
        self,
        base_dir: Path | str | None = None,
        suffix: str = ".sess",
        pointer_stem: str = "lastSession",
    ):
        """
        Initialize session store.

        Args:
            base_dir: Directory for record files (default: SessionConfig store_dir)
            suffix: Record file suffix
            pointer_stem: File stem of the last-used pointer
        """
        if base_dir is None:
            base_dir = SessionConfig.load().store_path
        self.base_dir = Path(base_dir).expanduser()
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.suffix = suffix
        self.pointer_stem = pointer_stem

    @classmethod
    def from_config(cls, config: SessionConfig) -> "SessionStore":
        return cls(
            base_dir=config.store_path,
            suffix=config.record_suffix,
            pointer_stem=config.pointer_stem,
        )

    @property
    def pointer_file(self) -> Path:
        """Path of the last-used pointer file."""
        return self.base_dir / f"{self.pointer_stem}{self.suffix}"

    def validate_name(self, name: str) -> str:
        """
        Normalize a session name and check it is usable as a file stem.

        Strips surrounding whitespace and a trailing record suffix.

        Raises:
            InvalidSessionNameError: If the name is empty, contains a path
                separator, or collides with the pointer file
        """
        name = (name or "").strip()
        if self.suffix and name.endswith(self.suffix):
            name = name[: -len(self.suffix)]
        if not name:
            raise InvalidSessionNameError("Session name cannot be empty")
        if name in (".", ".."):
            raise InvalidSessionNameError(f"Invalid session name: {name!r}")
        separators = {"/", os.sep}
        if os.altsep:
            separators.add(os.altsep)
        if any(sep in name for sep in separators):
            raise InvalidSessionNameError(
                f"Session name cannot contain a path separator: {name!r}"
            )
        if name == self.pointer_stem:
            raise InvalidSessionNameError(f"Session name is reserved: {name!r}")
        return name

    def get_record_file(self, name: str) -> Path:
        """Get the record file path for a session."""
        return self.base_dir / f"{self.validate_name(name)}{self.suffix}"

    def record_exists(self, name: str) -> bool:
        """Check if a record exists for the session."""
        try:
            return self.get_record_file(name).exists()
        except InvalidSessionNameError:
            return False

    def read_record(self, name: str) -> SessionRecord:
        """
        Read a session record from disk.

        Args:
            name: Session name, with or without the record suffix

        Returns:
            Loaded session record

        Raises:
            SessionNotFoundError: If no record exists
            CorruptRecordError: If the record cannot be parsed
        """
        record_file = self.get_record_file(name)
        if not record_file.exists():
            raise SessionNotFoundError(f"Session not found: {self.validate_name(name)}")

        try:
            record = SessionRecord.model_validate_json(record_file.read_text())
        except ValidationError as e:
            raise CorruptRecordError(f"Cannot read session file {record_file}: {e}") from e

        # The file stem is the session identity, whatever the file says
        if record.name != record_file.stem:
            logger.debug(f"Session file {record_file} names {record.name!r}; using {record_file.stem!r}")
            record = record.model_copy(update={"name": record_file.stem})
        return record

    def write_record(self, record: SessionRecord) -> Path:
        """
        Write a session record, replacing any previous version.

        Returns:
            Path to the record file
        """
        target_path = self.get_record_file(record.name)
        self._write_json(target_path, record)
        logger.debug(f"Wrote session record {target_path}")
        return target_path

    def list_records(self) -> list[str]:
        """
        List stored session names.

        The pointer file and unreadable files are skipped.

        Returns:
            Sorted list of session names
        """
        names = []
        for record_file in self.base_dir.glob(f"*{self.suffix}"):
            if not record_file.is_file() or record_file == self.pointer_file:
                continue
            try:
                data = json.loads(record_file.read_text())
            except (json.JSONDecodeError, OSError):
                logger.debug(f"Skipping unreadable session file {record_file}")
                continue
            if not isinstance(data, dict) or "name" not in data:
                continue
            names.append(record_file.stem)

        return sorted(names)

    def read_last_session(self) -> str | None:
        """Get the last-used session name, or None if there is none."""
        if not self.pointer_file.exists():
            return None
        try:
            pointer = LastSessionPointer.model_validate_json(self.pointer_file.read_text())
        except (ValidationError, OSError):
            logger.warning(f"Ignoring unreadable pointer file {self.pointer_file}")
            return None
        return pointer.last_session

    def write_last_session(self, name: str) -> Path:
        """Point the last-used pointer at a session."""
        pointer = LastSessionPointer(last_session=self.validate_name(name))
        self._write_json(self.pointer_file, pointer)
        return self.pointer_file

    def _write_json(self, target_path: Path, model: BaseModel) -> None:
        """
        Atomically write a model as JSON.

        Uses write-to-temp-then-rename pattern to prevent corruption.
        """
        # Write to temp file in same directory
        fd, temp_path = tempfile.mkstemp(
            suffix=".tmp",
            prefix=f"{target_path.stem}_",
            dir=target_path.parent,
        )
        try:
            with os.fdopen(fd, "w") as f:
                f.write(model.model_dump_json(indent=2))
            os.replace(temp_path, target_path)
        except Exception:
            # Clean up temp file on error
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise


__all__ = [
    "CorruptRecordError",
    "InvalidSessionNameError",
    "SessionError",
    "SessionNotFoundError",
    "SessionStore",
]
