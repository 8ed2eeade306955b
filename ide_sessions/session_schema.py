"""
Session schema models for ide-sessions.

Pydantic models for the session record files (<name>.sess) and the
last-used pointer file (lastSession.sess).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator


class SessionRecord(BaseModel):
    """
    Snapshot of an interactive environment under a given name.

    The name doubles as the display label and the record file stem.
    """

    name: str = Field(min_length=1)
    open_files: list[str] = Field(default_factory=list)
    active_file: str = ""
    working_directory: str
    search_path: str = ""

    model_config = {
        "extra": "forbid",
    }

    @field_validator("active_file", mode="before")
    @classmethod
    def _none_means_no_active_file(cls, value: str | None) -> str:
        return "" if value is None else value

    @model_validator(mode="after")
    def _active_file_is_open(self) -> "SessionRecord":
        if self.active_file and self.active_file not in self.open_files:
            raise ValueError(
                f"active_file {self.active_file!r} is not among the open files"
            )
        return self


class LastSessionPointer(BaseModel):
    """Name of the most recently saved session."""

    last_session: str = Field(min_length=1)

    model_config = {
        "extra": "forbid",
    }


__all__ = [
    "LastSessionPointer",
    "SessionRecord",
]
