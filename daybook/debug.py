"""
Debug output for Daybook.

Messages go to stderr as "[HH:MM:SS] TAG: message". Output is off until
set_debug(True) is called (the command line does this for --debug).
"""

import sys
from datetime import datetime


_enabled: bool = False


def set_debug(enabled: bool) -> None:
    """Turn debug output on or off."""
    global _enabled
    _enabled = enabled


def is_debug() -> bool:
    return _enabled


def debug_print(tag: str, message: str) -> None:
    if not _enabled:
        return
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {tag}: {message}", file=sys.stderr)
