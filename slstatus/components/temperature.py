"""Temperature component reading a Linux thermal sensor file."""

from __future__ import annotations

import re

from slstatus.util import read_text

_UINT = re.compile(r"\s*(\d+)")


def temp(file: str) -> str | None:
    """Return the temperature in degrees Celsius from a millidegree file."""
    text = read_text(file)
    if text is None:
        return None
    match = _UINT.match(text)
    if match is None:
        return None
    return str(int(match.group(1)) // 1000)