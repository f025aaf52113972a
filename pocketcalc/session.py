"""Session controller — owns one evaluator state and one memory bank.

Keys arrive one at a time; each is routed to the evaluator (arithmetic and
editing keys) or the memory module (MC/MR/M+/M-/MS/Mv), and the formatted
display string is handed back to the caller.
"""

from __future__ import annotations

from typing import Iterable, Union

import structlog

from pocketcalc.evaluator import apply
from pocketcalc.formatter import format_entry_for_display, format_memory_entries
from pocketcalc.keys import parse_key, parse_keys
from pocketcalc.memory import apply_memory
from pocketcalc.models import Key, MemoryAction, MemoryBank, SessionState, Step

logger = structlog.get_logger()


class Calculator:
    """A single calculator session.

    Not thread-safe: keys are expected to arrive serialized, one press at a
    time, from a single front end.
    """

    def __init__(self) -> None:
        self.state = SessionState()
        self.bank = MemoryBank()

    @property
    def display(self) -> str:
        """What the screen shows for the current entry."""
        return format_entry_for_display(self.state.entry)

    @property
    def memory_expanded(self) -> bool:
        return self.bank.expanded

    def memory_lines(self) -> list[str]:
        return format_memory_entries(self.bank)

    def press(self, key: Union[Key, str]) -> str:
        """Apply one key and return the new display.

        Args:
            key: An action, a MemoryAction, or a key token such as "+" or "MR".
        """
        if isinstance(key, str) and not isinstance(key, MemoryAction):
            key = parse_key(key)
        if isinstance(key, MemoryAction):
            self.bank, self.state = apply_memory(key, self.bank, self.state)
        else:
            self.state = apply(key, self.state)
        return self.display

    def press_all(self, keys: Iterable[Union[Key, str]]) -> str:
        """Apply keys in order and return the final display."""
        for key in keys:
            self.press(key)
        return self.display

    def run(self, text: str) -> list[Step]:
        """Replay a key string, recording the display after every key.

        The whole string is parsed before any key is applied, so an unknown
        token leaves the session untouched.
        """
        steps = []
        for token, key in parse_keys(text):
            display = self.press(key)
            memory = self.memory_lines() if self.bank.expanded else []
            steps.append(Step(token=token, key=key, display=display, memory=memory))
        logger.debug("Replayed keys", count=len(steps), display=self.display)
        return steps

    def reset(self) -> None:
        """Back to a fresh session: entry 0, empty memory, view collapsed."""
        self.state = SessionState()
        self.bank = MemoryBank()

    def snapshot(self) -> dict:
        """JSON-compatible view of the whole session."""
        return {
            "display": self.display,
            "state": self.state.to_dict(),
            "memory": self.bank.to_dict(),
        }
