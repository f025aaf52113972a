"""Memory bank operations (MC, MR, M+, M-, MS, Mv).

All functions are pure and return a new bank or state. The head entry is
the only one recall/add/subtract ever touch; store always prepends.
"""

from __future__ import annotations

import math
from dataclasses import replace

import structlog

from pocketcalc.evaluator import commit_value
from pocketcalc.formatter import parse_display_value
from pocketcalc.models import MemoryAction, MemoryBank, SessionState

logger = structlog.get_logger()


def memory_value(state: SessionState) -> float:
    """Current value for memory math. Unparsable entries count as 0."""
    value = parse_display_value(state.entry)
    return value if math.isfinite(value) else 0.0


def memory_clear(bank: MemoryBank) -> MemoryBank:
    """Drop every entry and collapse the memory view."""
    return MemoryBank(next_identity=bank.next_identity)


def memory_recall(bank: MemoryBank, state: SessionState) -> SessionState:
    """Commit the head value into the display; no-op on an empty bank."""
    if bank.head is None:
        return state
    return commit_value(state, bank.head.value).evolve(
        awaiting_operand=True,
        repeat_operand=None,
    )


def memory_add(bank: MemoryBank, current_value: float) -> MemoryBank:
    """M+: add to the head entry, creating it if the bank is empty."""
    if bank.head is None:
        return bank.prepend(current_value)
    return bank.with_head_value(bank.head.value + current_value)


def memory_subtract(bank: MemoryBank, current_value: float) -> MemoryBank:
    """M-: subtract from the head entry, creating -value if the bank is empty."""
    if bank.head is None:
        return bank.prepend(-current_value)
    return bank.with_head_value(bank.head.value - current_value)


def memory_store(bank: MemoryBank, current_value: float) -> MemoryBank:
    """MS: always prepend a new head entry."""
    return bank.prepend(current_value)


def memory_toggle_view(expanded: bool) -> bool:
    return not expanded


def apply_memory(
    action: MemoryAction,
    bank: MemoryBank,
    state: SessionState,
) -> tuple[MemoryBank, SessionState]:
    """Dispatch a memory key against the bank and the evaluator state.

    Returns (new_bank, new_state); only MR changes the state.
    """
    value = memory_value(state)
    if action == MemoryAction.CLEAR:
        bank = memory_clear(bank)
    elif action == MemoryAction.RECALL:
        state = memory_recall(bank, state)
    elif action == MemoryAction.ADD:
        bank = memory_add(bank, value)
    elif action == MemoryAction.SUBTRACT:
        bank = memory_subtract(bank, value)
    elif action == MemoryAction.STORE:
        bank = memory_store(bank, value)
    elif action == MemoryAction.TOGGLE_VIEW:
        bank = replace(bank, expanded=memory_toggle_view(bank.expanded))
    else:
        raise TypeError(f"Unknown memory action: {action!r}")

    logger.debug("Memory action", action=action.value, entries=len(bank), expanded=bank.expanded)
    return bank, state
