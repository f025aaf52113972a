"""Evaluator — the calculator's action → state transition function.

apply(action, state) is the only entry point. It is a total function: every
action against every state yields a new SessionState, and user errors show
up as display sentinels rather than exceptions.

Flow per action:
1. Parse the current entry (NaN for sentinels)
2. Dispatch to the handler for the action type
3. Route computed values through commit_value (rounding + error sentinel)
4. Clear repeat_operand unless the action was Equals
"""

from __future__ import annotations

import math
import sys
from typing import Callable, Optional

import structlog

from pocketcalc.config import INVALID_INPUT, ROUNDING_SCALE
from pocketcalc.formatter import format_number, is_numeric_entry, parse_display_value
from pocketcalc.models import (
    Action,
    Backspace,
    ClearAll,
    ClearEntry,
    Decimal,
    Digit,
    Equals,
    Negate,
    Operator,
    OperatorPress,
    Percent,
    Reciprocal,
    SessionState,
    Square,
    SquareRoot,
)

logger = structlog.get_logger()


def perform_operation(operator: Operator, left: float, right: float) -> float:
    """Apply a binary operator. Division by zero yields +inf, whatever the signs."""
    if operator == Operator.ADD:
        return left + right
    if operator == Operator.SUBTRACT:
        return left - right
    if operator == Operator.MULTIPLY:
        return left * right
    if operator == Operator.DIVIDE:
        return math.inf if right == 0 else left / right
    return right


def round_result(value: float) -> float:
    """Round to 12 decimal places, half away from zero.

    Adds machine epsilon before scaling to absorb binary representation
    error, so 0.1 + 0.2 becomes 0.3. Values too large to scale are
    returned unchanged.
    """
    scaled = (value + sys.float_info.epsilon) * ROUNDING_SCALE
    if not math.isfinite(scaled):
        return value
    # Compare the exact fractional part; adding 0.5 first would itself round
    # once the scaled value passes 2**52.
    magnitude = abs(scaled)
    rounded = math.floor(magnitude)
    if magnitude - rounded >= 0.5:
        rounded += 1
    return math.copysign(rounded, scaled) / ROUNDING_SCALE


def _entry_text(value: float) -> str:
    """Committed entry text: the display form without group separators."""
    return format_number(value).replace(",", "")


def commit_value(state: SessionState, value: float) -> SessionState:
    """Finalize a computed value into the entry buffer.

    A non-finite value becomes the divide-by-zero sentinel and drops the
    whole operator chain; anything else is rounded and formatted.
    """
    if not math.isfinite(value):
        logger.info("Error state", sentinel="divide-by-zero", value=str(value))
        return state.cleared_chain().evolve(
            entry=format_number(value),
            awaiting_operand=False,
        )
    return state.evolve(entry=_entry_text(round_result(value)))


# ---------------------------------------------------------------------------
# Entry editing
# ---------------------------------------------------------------------------

def _digit(state: SessionState, action: Digit) -> SessionState:
    if not is_numeric_entry(state.entry) or state.awaiting_operand:
        return state.evolve(entry=action.digit, awaiting_operand=False)
    if state.entry == "0":
        return state.evolve(entry=action.digit)
    return state.evolve(entry=state.entry + action.digit)


def _decimal(state: SessionState, action: Decimal) -> SessionState:
    if not is_numeric_entry(state.entry) or state.awaiting_operand:
        return state.evolve(entry="0.", awaiting_operand=False)
    if "." in state.entry:
        return state
    return state.evolve(entry=state.entry + ".")


def _backspace(state: SessionState, action: Backspace) -> SessionState:
    entry = state.entry
    if not is_numeric_entry(entry) or len(entry) <= 1:
        return state.evolve(entry="0")
    trimmed = entry[:-1]
    if trimmed in ("", "-"):
        trimmed = "0"
    return state.evolve(entry=trimmed)


def _clear_entry(state: SessionState, action: ClearEntry) -> SessionState:
    return state.evolve(entry="0", awaiting_operand=True)


def _clear_all(state: SessionState, action: ClearAll) -> SessionState:
    return SessionState()


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

def _operator(state: SessionState, action: OperatorPress) -> SessionState:
    current = parse_display_value(state.entry)
    if not math.isfinite(current):
        return state

    if state.stored_operand is None or state.pending_operator is None:
        state = state.evolve(stored_operand=current)
    elif not state.awaiting_operand:
        computed = perform_operation(state.pending_operator, state.stored_operand, current)
        if not math.isfinite(computed):
            # The new operator is dropped along with the chain.
            return commit_value(state, computed)
        state = commit_value(state, computed).evolve(stored_operand=computed)

    return state.evolve(pending_operator=action.operator, awaiting_operand=True)


def _equals(state: SessionState, action: Equals) -> SessionState:
    if state.pending_operator is None or state.stored_operand is None:
        return state

    current = parse_display_value(state.entry)
    if not math.isfinite(current):
        return state

    right = current
    if state.awaiting_operand and state.repeat_operand is not None:
        right = state.repeat_operand

    result = perform_operation(state.pending_operator, state.stored_operand, right)
    state = commit_value(state, result)
    if math.isfinite(result):
        state = state.evolve(stored_operand=result, repeat_operand=right)
    return state.evolve(awaiting_operand=True)


def _percent(state: SessionState, action: Percent) -> SessionState:
    current = parse_display_value(state.entry)
    if not math.isfinite(current):
        return state

    if state.stored_operand is not None and state.pending_operator is not None:
        percentage = state.stored_operand * current / 100
    else:
        percentage = current / 100
    return commit_value(state, percentage).evolve(awaiting_operand=True)


def _unary(state: SessionState, action: Action) -> SessionState:
    current = parse_display_value(state.entry)
    if not math.isfinite(current):
        return state

    if isinstance(action, Negate):
        return commit_value(state, -current)
    if isinstance(action, Reciprocal):
        return commit_value(state, math.inf if current == 0 else 1 / current)
    if isinstance(action, Square):
        return commit_value(state, current * current)
    # SquareRoot
    if current < 0:
        logger.info("Error state", sentinel="invalid-input", value=current)
        return state.cleared_chain().evolve(entry=INVALID_INPUT, awaiting_operand=False)
    return commit_value(state, math.sqrt(current))


_HANDLERS: dict[type, Callable[[SessionState, Action], SessionState]] = {
    Digit: _digit,
    Decimal: _decimal,
    OperatorPress: _operator,
    Equals: _equals,
    Percent: _percent,
    ClearEntry: _clear_entry,
    ClearAll: _clear_all,
    Backspace: _backspace,
    Negate: _unary,
    Reciprocal: _unary,
    Square: _unary,
    SquareRoot: _unary,
}


def apply(action: Action, state: Optional[SessionState] = None) -> SessionState:
    """Apply one action to a session state and return the new state.

    Args:
        action: Any member of the closed action set in pocketcalc.models.
        state: Current state. Defaults to a fresh session.

    Returns:
        The new SessionState. The input state is never modified.
    """
    if state is None:
        state = SessionState()
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unknown action: {action!r}")

    new_state = handler(state, action)
    if not isinstance(action, Equals) and new_state.repeat_operand is not None:
        new_state = new_state.evolve(repeat_operand=None)

    logger.debug(
        "Applied action",
        action=type(action).__name__,
        entry=new_state.entry,
        pending=new_state.pending_operator.value if new_state.pending_operator else None,
        awaiting=new_state.awaiting_operand,
    )
    return new_state
