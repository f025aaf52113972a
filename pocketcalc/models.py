"""Data models for pocketcalc.

Operator enum, the closed set of evaluator actions, SessionState and the
memory bank records: all the typed structures that flow through
evaluator → memory → session → CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union


class Operator(str, Enum):
    """Binary operators, valued by their button glyph."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Digit:
    """A digit key, 0-9."""

    digit: str

    def __post_init__(self) -> None:
        if len(self.digit) != 1 or self.digit not in "0123456789":
            raise ValueError(f"Digit must be a single character 0-9, got {self.digit!r}")


@dataclass(frozen=True)
class Decimal:
    """The decimal point key."""


@dataclass(frozen=True)
class OperatorPress:
    """One of the four binary operator keys."""

    operator: Operator


@dataclass(frozen=True)
class Equals:
    """=: applies the pending operator."""


@dataclass(frozen=True)
class Percent:
    """%: percent of the stored operand, else the value divided by 100."""


@dataclass(frozen=True)
class ClearEntry:
    """CE: clears the current operand only."""


@dataclass(frozen=True)
class ClearAll:
    """C: clears the whole operator chain."""


@dataclass(frozen=True)
class Backspace:
    """Drops the last typed character."""


@dataclass(frozen=True)
class Negate:
    """±: flips the sign."""


@dataclass(frozen=True)
class Reciprocal:
    """1/x."""


@dataclass(frozen=True)
class Square:
    """x²."""


@dataclass(frozen=True)
class SquareRoot:
    """√x: negative input gives the invalid-input sentinel."""


Action = Union[
    Digit, Decimal, OperatorPress, Equals, Percent, ClearEntry, ClearAll,
    Backspace, Negate, Reciprocal, Square, SquareRoot,
]


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SessionState:
    """Everything the evaluator knows about the current calculation.

    entry is the single authoritative text buffer; the numeric value is
    always parsed from it, never stored beside it.
    """

    entry: str = "0"
    awaiting_operand: bool = False
    stored_operand: Optional[float] = None
    pending_operator: Optional[Operator] = None
    # Right-hand operand of the last Equals, reused by a repeated Equals.
    repeat_operand: Optional[float] = None

    def evolve(self, **changes) -> SessionState:
        return replace(self, **changes)

    def cleared_chain(self) -> SessionState:
        """Drop the stored operand and pending operator together."""
        return replace(self, stored_operand=None, pending_operator=None)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "entry": self.entry,
            "awaiting_operand": self.awaiting_operand,
            "stored_operand": self.stored_operand,
            "pending_operator": self.pending_operator.value if self.pending_operator else None,
            "repeat_operand": self.repeat_operand,
        }

    @classmethod
    def from_dict(cls, d: dict) -> SessionState:
        """Deserialize from a dict produced by to_dict()."""
        op = d.get("pending_operator")
        return cls(
            entry=d.get("entry", "0"),
            awaiting_operand=d.get("awaiting_operand", False),
            stored_operand=d.get("stored_operand"),
            pending_operator=Operator(op) if op else None,
            repeat_operand=d.get("repeat_operand"),
        )


# ---------------------------------------------------------------------------
# Memory bank
# ---------------------------------------------------------------------------

class MemoryAction(str, Enum):
    """Memory row keys."""

    CLEAR = "MC"
    RECALL = "MR"
    ADD = "M+"
    SUBTRACT = "M-"
    STORE = "MS"
    TOGGLE_VIEW = "Mv"


@dataclass(frozen=True)
class MemoryEntry:
    """A stored value. identity is unique within its bank."""

    identity: int
    value: float

    def to_dict(self) -> dict:
        return {"identity": self.identity, "value": self.value}


@dataclass(frozen=True)
class MemoryBank:
    """Ordered memory entries; the head (index 0) is the recall target."""

    entries: tuple[MemoryEntry, ...] = ()
    expanded: bool = False
    next_identity: int = 1

    @property
    def head(self) -> Optional[MemoryEntry]:
        return self.entries[0] if self.entries else None

    def __len__(self) -> int:
        return len(self.entries)

    def prepend(self, value: float) -> MemoryBank:
        """Return a bank with a brand-new head entry holding value."""
        entry = MemoryEntry(identity=self.next_identity, value=value)
        return replace(
            self,
            entries=(entry, *self.entries),
            next_identity=self.next_identity + 1,
        )

    def with_head_value(self, value: float) -> MemoryBank:
        """Return a bank whose head keeps its identity but holds value."""
        head = replace(self.entries[0], value=value)
        return replace(self, entries=(head, *self.entries[1:]))

    def to_dict(self) -> dict:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "expanded": self.expanded,
        }


Key = Union[Action, MemoryAction]


@dataclass
class Step:
    """One replayed key and the display it produced (used for traces)."""

    token: str
    key: Key
    display: str
    memory: list[str] = field(default_factory=list)
