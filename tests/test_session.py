"""Tests for the Calculator session controller, driven by key strings."""

import pytest

from pocketcalc.config import DIVIDE_BY_ZERO, INVALID_INPUT
from pocketcalc.keys import UnknownKeyError
from pocketcalc.models import Digit, MemoryAction, SessionState


@pytest.fixture
def calc():
    from pocketcalc.session import Calculator
    return Calculator()


def press(calc, text):
    calc.run(text)
    return calc.display


# --- Arithmetic through the controller (5 tests) ---

def test_chain_and_repeat_equals(calc):
    assert press(calc, "2 + 3 =") == "5"
    assert press(calc, "=") == "8"


def test_divide_by_zero_and_recovery(calc):
    assert press(calc, "5 / 0 =") == DIVIDE_BY_ZERO
    assert press(calc, "+") == DIVIDE_BY_ZERO
    assert press(calc, "1") == "1"


def test_invalid_input(calc):
    assert press(calc, "4 neg sqrt") == INVALID_INPUT


def test_display_groups_while_typing(calc):
    assert press(calc, "1234.") == "1,234."
    assert press(calc, "5") == "1,234.5"


def test_result_display_is_grouped(calc):
    assert press(calc, "1500 * 1500 =") == "2,250,000"


# --- Memory through the controller (3 tests) ---

def test_memory_store_add_recall(calc):
    press(calc, "5 MS C 7 M+ MR")
    assert calc.display == "12"
    assert len(calc.bank) == 1


def test_store_becomes_recall_target(calc):
    press(calc, "5 MS C 9 MS C MR")
    assert calc.display == "9"
    assert len(calc.bank) == 2


def test_memory_view_lines(calc):
    steps = calc.run("5 MS Mv")
    assert calc.memory_expanded is True
    assert steps[-1].memory == ["5"]
    assert calc.run("MC")[-1].memory == []
    assert calc.memory_expanded is False


# --- Controller API (5 tests) ---

def test_press_accepts_keys_and_tokens(calc):
    calc.press(Digit("4"))
    calc.press("x²")
    assert calc.press(MemoryAction.STORE) == "16"
    assert calc.bank.head.value == 16


def test_press_all(calc):
    assert calc.press_all(["9", "÷", "4", "="]) == "2.25"


def test_unknown_token_leaves_session_untouched(calc):
    press(calc, "12")
    with pytest.raises(UnknownKeyError):
        calc.run("+ 3 nope")
    assert calc.display == "12"
    assert calc.state.pending_operator is None


def test_reset(calc):
    press(calc, "5 MS 2 +")
    calc.reset()
    assert calc.state == SessionState()
    assert len(calc.bank) == 0


def test_snapshot(calc):
    press(calc, "7 MS Mv")
    snap = calc.snapshot()
    assert snap["display"] == "7"
    assert snap["state"]["entry"] == "7"
    assert snap["memory"]["expanded"] is True
    assert snap["memory"]["entries"][0]["value"] == 7
