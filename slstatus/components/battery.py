"""Battery components read from the Linux power supply class."""

from __future__ import annotations

import os
import re

from slstatus.util import read_text

POWER_SUPPLY_DIR = "/sys/class/power_supply"

_STATE_SYMBOLS = {
    "Charging": "+",
    "Discharging": "-",
    "Full": "o",
    "Not charging": "o",
}

_INT = re.compile(r"\s*([+-]?\d+)")
_STATE = re.compile(r"[a-zA-Z ]{1,12}")


def _path(bat: str, name: str) -> str:
    return os.path.join(POWER_SUPPLY_DIR, bat, name)


def _read_int(path: str) -> int | None:
    text = read_text(path)
    if text is None:
        return None
    match = _INT.match(text)
    return int(match.group(1)) if match else None


def _read_state(bat: str) -> str | None:
    text = read_text(_path(bat, "status"))
    if text is None:
        return None
    match = _STATE.match(text)
    return match.group(0) if match else None


def _pick(bat: str, first: str, second: str) -> str | None:
    for name in (first, second):
        path = _path(bat, name)
        if os.access(path, os.R_OK):
            return path
    return None


def battery_perc(bat: str) -> str | None:
    """Return the battery capacity in percent."""
    capacity = _read_int(_path(bat, "capacity"))
    return None if capacity is None else str(capacity)


def battery_state(bat: str) -> str | None:
    """Return '+' when charging, '-' when discharging, 'o' when full, else '?'."""
    state = _read_state(bat)
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat: str) -> str | None:
    """Return the remaining time while discharging, else an empty string."""
    state = _read_state(bat)
    if state is None:
        return None
    path = _pick(bat, "charge_now", "energy_now")
    if path is None:
        return None
    charge_now = _read_int(path)
    if charge_now is None:
        return None
    if state != "Discharging":
        return ""
    path = _pick(bat, "current_now", "power_now")
    if path is None:
        return None
    current_now = _read_int(path)
    if not current_now:
        return None
    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"