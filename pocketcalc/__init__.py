"""pocketcalc — the input-and-evaluation engine of a pocket calculator.

Interprets one button press at a time (digits, operators, unary commands,
memory keys) against a small session state and produces the display string,
chaining operators, repeating equals and recovering from error states the
way a standard four-function calculator does.

Usage:
    python -m pocketcalc keys                  # Show the button layout
    python -m pocketcalc run 2 + 3 = =         # Replay keys, print display
    python -m pocketcalc run 200+10% = --trace # Show display after each key
    python -m pocketcalc repl                  # Interactive session
"""

from pocketcalc.config import configure_logging

# WARNING and above to stderr until a caller picks a level.
configure_logging()
