"""Tests for key token parsing."""

import pytest

from pocketcalc.keys import KEY_ROWS, UnknownKeyError, parse_key, parse_keys, tokenize
from pocketcalc.models import (
    Backspace,
    Decimal,
    Digit,
    MemoryAction,
    Negate,
    Operator,
    OperatorPress,
    SquareRoot,
)


# --- parse_key (5 tests) ---

def test_digit_tokens():
    assert parse_key("7") == Digit("7")


@pytest.mark.parametrize("token", ["*", "x", "X", "×", "mul"])
def test_multiply_aliases(token):
    assert parse_key(token) == OperatorPress(Operator.MULTIPLY)


@pytest.mark.parametrize("token, expected", [
    ("sqrt", SquareRoot()),
    ("√x", SquareRoot()),
    ("+/-", Negate()),
    ("BS", Backspace()),
    (".", Decimal()),
    ("/", OperatorPress(Operator.DIVIDE)),
])
def test_command_aliases(token, expected):
    assert parse_key(token) == expected


def test_memory_tokens():
    assert parse_key("M+") == MemoryAction.ADD
    assert parse_key("mr") == MemoryAction.RECALL
    assert parse_key("Mv") == MemoryAction.TOGGLE_VIEW


def test_unknown_token_raises():
    with pytest.raises(UnknownKeyError) as exc:
        parse_key("banana")
    assert exc.value.token == "banana"
    assert isinstance(exc.value, ValueError)


# --- tokenize (4 tests) ---

def test_glued_keys_are_split():
    assert tokenize("12+3=") == ["1", "2", "+", "3", "="]
    assert tokenize("200+10%=") == ["2", "0", "0", "+", "1", "0", "%", "="]


def test_spaced_keys_kept():
    assert tokenize("2 + 3 =") == ["2", "+", "3", "="]


def test_multi_character_keys_not_split():
    assert tokenize("4 1/x M+ x^2") == ["4", "1/x", "M+", "x^2"]


def test_parse_keys_resolves_in_order():
    pairs = parse_keys("9 sqrt")
    assert [t for t, _ in pairs] == ["9", "sqrt"]
    assert pairs[1][1] == SquareRoot()


# --- Layout (1 test) ---

def test_every_button_label_parses():
    for row in KEY_ROWS:
        for label in row:
            parse_key(label)
