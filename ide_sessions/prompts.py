"""
Prompt capability used to ask the user for names and confirmations.

Every call blocks until the user answers or cancels.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from enum import Enum
from typing import Protocol, TextIO


class Answer(str, Enum):
    """Answer to a yes/no/cancel question."""

    YES = "yes"
    NO = "no"
    CANCEL = "cancel"


class Prompter(Protocol):
    """Modal prompt interface."""

    def ask_text(self, prompt: str, title: str, default: str = "") -> str | None:
        """
        Ask for a line of text.

        Returns: the entered text, or None on cancel or empty input
        """
        ...

    def ask_question(self, question: str, title: str, default: Answer = Answer.YES) -> Answer:
        """Ask a yes/no/cancel question."""
        ...

    def choose(self, options: list[str], title: str) -> str | None:
        """
        Let the user pick one of the options.

        Returns: the chosen option, or None if nothing was chosen
        """
        ...


_ANSWERS = {
    "y": Answer.YES,
    "yes": Answer.YES,
    "n": Answer.NO,
    "no": Answer.NO,
    "c": Answer.CANCEL,
    "cancel": Answer.CANCEL,
}


class TerminalPrompter:
    """Prompter reading answers from the terminal."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output: TextIO | None = None,
        max_attempts: int = 3,
    ):
        self._input = input_func
        self._output = output if output is not None else sys.stdout
        self.max_attempts = max_attempts

    def _read(self, prompt: str) -> str | None:
        try:
            return self._input(prompt)
        except (EOFError, KeyboardInterrupt):
            self._output.write("\n")
            return None

    def _header(self, title: str) -> None:
        if title:
            self._output.write(f"[{title}]\n")

    def ask_text(self, prompt: str, title: str, default: str = "") -> str | None:
        self._header(title)
        hint = f" [{default}]" if default else ""
        answer = self._read(f"{prompt}{hint}: ")
        if answer is None:
            return None
        answer = answer.strip() or default
        return answer or None

    def ask_question(self, question: str, title: str, default: Answer = Answer.YES) -> Answer:
        self._header(title)
        choices = "/".join(
            a.value[0].upper() if a is default else a.value[0] for a in Answer
        )
        for _ in range(self.max_attempts):
            answer = self._read(f"{question} ({choices}) ")
            if answer is None:
                return Answer.CANCEL
            answer = answer.strip().lower()
            if not answer:
                return default
            if answer in _ANSWERS:
                return _ANSWERS[answer]
            self._output.write("Please answer yes, no or cancel.\n")
        return Answer.CANCEL

    def choose(self, options: list[str], title: str) -> str | None:
        if not options:
            return None
        self._header(title)
        for i, option in enumerate(options, 1):
            self._output.write(f"  {i}. {option}\n")
        for _ in range(self.max_attempts):
            answer = self._read("Select (number or name, empty to cancel): ")
            if answer is None:
                return None
            answer = answer.strip()
            if not answer:
                return None
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return options[int(answer) - 1]
            if answer in options:
                return answer
            self._output.write(f"Unknown selection: {answer}\n")
        return None


__all__ = [
    "Answer",
    "Prompter",
    "TerminalPrompter",
]
