"""Key tokens for driving a session from text.

Maps typed tokens ("7", "+", "sqrt", "M+") onto evaluator actions and memory
keys. Matching is case-insensitive and every button accepts a few ASCII
aliases so the whole keypad can be driven from a plain terminal.
"""

from __future__ import annotations

from pocketcalc.models import (
    Backspace,
    ClearAll,
    ClearEntry,
    Decimal,
    Digit,
    Equals,
    Key,
    MemoryAction,
    Negate,
    Operator,
    OperatorPress,
    Percent,
    Reciprocal,
    Square,
    SquareRoot,
)


class UnknownKeyError(ValueError):
    """Raised when a token does not name any calculator key."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Unknown key: {token!r}")


# Button layout of the standard keypad, top row first.
KEY_ROWS: list[list[str]] = [
    ["%", "CE", "C", "⌫"],
    ["1/x", "x²", "√x", "÷"],
    ["7", "8", "9", "×"],
    ["4", "5", "6", "-"],
    ["1", "2", "3", "+"],
    ["±", "0", ".", "="],
]

MEMORY_ROW: list[str] = [a.value for a in MemoryAction]

# Canonical label → accepted aliases (lower-case).
_ALIASES: dict[str, tuple[str, ...]] = {
    "+": ("+", "add", "plus"),
    "-": ("-", "sub", "minus"),
    "×": ("×", "*", "x", "mul"),
    "÷": ("÷", "/", "div"),
    "=": ("=", "eq", "enter"),
    "%": ("%", "pct"),
    ".": (".", "dot"),
    "CE": ("ce",),
    "C": ("c", "ac", "clear"),
    "⌫": ("⌫", "bs", "back", "backspace", "del"),
    "±": ("±", "+/-", "neg", "negate"),
    "1/x": ("1/x", "inv", "recip"),
    "x²": ("x²", "x^2", "sq", "sqr"),
    "√x": ("√x", "√", "sqrt"),
    "MC": ("mc",),
    "MR": ("mr",),
    "M+": ("m+",),
    "M-": ("m-",),
    "MS": ("ms",),
    "Mv": ("mv", "mem"),
}

_LABEL_KEYS: dict[str, Key] = {
    "+": OperatorPress(Operator.ADD),
    "-": OperatorPress(Operator.SUBTRACT),
    "×": OperatorPress(Operator.MULTIPLY),
    "÷": OperatorPress(Operator.DIVIDE),
    "=": Equals(),
    "%": Percent(),
    ".": Decimal(),
    "CE": ClearEntry(),
    "C": ClearAll(),
    "⌫": Backspace(),
    "±": Negate(),
    "1/x": Reciprocal(),
    "x²": Square(),
    "√x": SquareRoot(),
    "MC": MemoryAction.CLEAR,
    "MR": MemoryAction.RECALL,
    "M+": MemoryAction.ADD,
    "M-": MemoryAction.SUBTRACT,
    "MS": MemoryAction.STORE,
    "Mv": MemoryAction.TOGGLE_VIEW,
}

_TOKEN_TO_LABEL: dict[str, str] = {
    alias: label for label, aliases in _ALIASES.items() for alias in aliases
}

_DIGITS = "0123456789"

# Characters a glued token like "12+3=" may be split into.
_SPLITTABLE = set("0123456789.+-*/x×÷=%")


def aliases() -> dict[str, tuple[str, ...]]:
    """Canonical label → accepted aliases, for help output."""
    return dict(_ALIASES)


def parse_key(token: str) -> Key:
    """Resolve a single token to an evaluator action or memory key.

    Raises:
        UnknownKeyError: If the token names no key.
    """
    t = token.strip()
    if len(t) == 1 and t in _DIGITS:
        return Digit(t)
    label = _TOKEN_TO_LABEL.get(t.lower())
    if label is None:
        raise UnknownKeyError(token)
    return _LABEL_KEYS[label]


def tokenize(text: str) -> list[str]:
    """Split key text into single-key tokens.

    Whitespace separates tokens. A chunk that is not itself a known key but
    consists only of digits, '.', and operator characters is split into one
    token per character, so "200+10%=" and "2 + 3 =" are equivalent.
    """
    tokens: list[str] = []
    for chunk in text.split():
        lowered = chunk.lower()
        if lowered in _TOKEN_TO_LABEL or (len(chunk) == 1 and chunk in _DIGITS):
            tokens.append(chunk)
        elif all(c in _SPLITTABLE for c in lowered):
            tokens.extend(chunk)
        else:
            tokens.append(chunk)
    return tokens


def parse_keys(text: str) -> list[tuple[str, Key]]:
    """Tokenize and resolve a whole key string.

    Returns (token, key) pairs in order. Raises UnknownKeyError on the first
    token that names no key, before any key is applied.
    """
    return [(token, parse_key(token)) for token in tokenize(text)]
