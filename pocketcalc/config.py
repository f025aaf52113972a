"""Constants and logging setup for pocketcalc.

Display sentinels, rounding and exponential thresholds live here as module
constants. The only environment override is POCKETCALC_LOG_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import structlog

# Display sentinels. These are shown in place of a number and block further
# arithmetic until a digit, decimal point or clear key is pressed.
DIVIDE_BY_ZERO = "Cannot divide by zero"
INVALID_INPUT = "Invalid input"
ERROR_SENTINELS = (DIVIDE_BY_ZERO, INVALID_INPUT)

EMPTY_MEMORY = "There's nothing saved in memory"

# Committed results are rounded to 12 decimal places.
ROUNDING_SCALE = 1e12

# Magnitudes outside [EXPONENTIAL_LOWER, EXPONENTIAL_UPPER) render as
# d.dddddde<exp>.
EXPONENTIAL_UPPER = 1e12
EXPONENTIAL_LOWER = 1e-9
EXPONENTIAL_DIGITS = 6

LOG_LEVEL_ENV = "POCKETCALC_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging(level: Optional[str] = None) -> None:
    """Route structlog output to stderr, filtered at the given level.

    Args:
        level: Level name (e.g., "DEBUG"). Defaults to POCKETCALC_LOG_LEVEL
            or WARNING.
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
