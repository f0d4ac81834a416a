"""Centralized configuration for safecalc.

Values are read once at import time and can be overridden via environment
variables prefixed with SAFECALC_. The evaluation pipeline only consumes the
resulting constants.
"""

import os

# Decimal places kept when rendering a result
DISPLAY_PRECISION = int(os.getenv("SAFECALC_DISPLAY_PRECISION", "12"))

# Number of committed calculations a session remembers
HISTORY_LIMIT = max(1, int(os.getenv("SAFECALC_HISTORY_LIMIT", "25")))

LOG_LEVEL = os.getenv("SAFECALC_LOG_LEVEL", "WARNING")
