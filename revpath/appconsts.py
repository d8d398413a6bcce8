# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import sys as _sys
import os as _os


def _envBool(key: str) -> bool:
    return _os.environ.get(key, "") not in ["", "0"]


def _envInt(key: str, default: int = 0) -> int:
    try:
        return int(_os.environ.get(key, default))
    except ValueError:
        return default


APP_VERSION = "0.3.0"
APP_SYSTEM_NAME = "revpath"
APP_DISPLAY_NAME = "RevPath"

APP_TESTMODE = _envBool("APP_TESTMODE") or "pytest" in _sys.modules
"""
Unit testing mode (don't touch real user prefs, etc.).
Can be forced with environment variable APP_TESTMODE.
"""

APP_DEBUG = APP_TESTMODE or _envBool("APP_DEBUG")
"""
Enable expensive assertions and debugging features.
Can be forced with environment variable APP_DEBUG.
Implied by APP_TESTMODE.
"""

APP_VERBOSITY = _envInt("REVPATH_VERBOSE")
"""
Default verbosity of diagnostic output (0-3), before any -v flags.
"""

DEFAULT_REVISION = "HEAD"

UNCOMMITTED_SUMMARY = "Uncommitted changes"
