"""
StepCalc Configuration Settings
"""
import os

# Application Settings
APP_NAME = "StepCalc Replay Calculator"
VERSION = "1.0.0"

# ── Engine ─────────────────────────────────────────────────────────────────────

# Numbers written into the description never show more than this many decimals
MAX_FRACTION_DIGITS = 6

# Scale of the "Rand" key: 1 / randint(1, RANDOM_UPPER_BOUND) * RANDOM_SCALE
RANDOM_SCALE = 1_000_000
RANDOM_UPPER_BOUND = 2 ** 32 - 1

# ── Keypad ─────────────────────────────────────────────────────────────────────

MEMORY_VARIABLE = "M"
DISPLAY_PLACEHOLDER = " "
DESCRIPTION_PLACEHOLDER = " "
PENDING_SUFFIX = "..."      # description while an operation waits for its operand
RESOLVED_SUFFIX = "="
DIGIT_KEYS = "0123456789."
ERROR_PREFIX = "Error: "

# ── Logging ────────────────────────────────────────────────────────────────────

LOG_LEVEL = os.environ.get("STEPCALC_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Web API settings
WEB_HOST = os.environ.get("STEPCALC_HOST", "127.0.0.1")
WEB_PORT = int(os.environ.get("STEPCALC_PORT", "8888"))

# Oldest keypad sessions are dropped once this many are open
MAX_SESSIONS = int(os.environ.get("STEPCALC_MAX_SESSIONS", "100"))
