"""RAM and swap components read from /proc/meminfo."""

from __future__ import annotations

import re

from slstatus.util import fmt_human, read_text

MEMINFO = "/proc/meminfo"

_RAM_FIELDS = ("MemTotal", "MemFree", "MemAvailable", "Buffers", "Cached")
_SWAP_VALUE = re.compile(r"\s*([+-]?\d+)")


def _cdiv(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def _ram_fields(count: int) -> list[int] | None:
    """Return the first ``count`` memory fields, which must appear in order."""
    text = read_text(MEMINFO)
    if text is None:
        return None
    values = []
    for line, name in zip(text.splitlines(), _RAM_FIELDS[:count]):
        match = re.fullmatch(rf"{name}:\s*(\d+)\s*kB\s*", line)
        if match is None:
            break
        values.append(int(match.group(1)))
    return values if len(values) == count else None


def _swap_fields(*wanted: str) -> dict[str, int] | None:
    """Return the named swap fields in kB, or None if any is missing."""
    text = read_text(MEMINFO)
    if text is None:
        return None
    found: dict[str, int] = {}
    for line in text.splitlines():
        if len(found) == len(wanted):
            break
        for name in wanted:
            if name not in found and line.startswith(name):
                match = _SWAP_VALUE.match(line[len(name) + 1:])
                if match:
                    found[name] = int(match.group(1))
                break
    return found if len(found) == len(wanted) else None


def ram_free(unused: str | None = None) -> str | None:
    """Return the available memory."""
    fields = _ram_fields(3)
    if fields is None:
        return None
    return fmt_human(fields[2] * 1024, 1024)


def ram_perc(unused: str | None = None) -> str | None:
    """Return the memory usage in percent, not counting buffers and cache."""
    fields = _ram_fields(5)
    if fields is None:
        return None
    total, free, _available, buffers, cached = fields
    if total == 0:
        return None
    used = (total - free) - (buffers + cached)
    return str(_cdiv(100 * used, total))


def ram_total(unused: str | None = None) -> str | None:
    """Return the total memory."""
    fields = _ram_fields(1)
    if fields is None:
        return None
    return fmt_human(fields[0] * 1024, 1024)


def ram_used(unused: str | None = None) -> str | None:
    """Return the used memory, not counting buffers and cache."""
    fields = _ram_fields(5)
    if fields is None:
        return None
    total, free, _available, buffers, cached = fields
    return fmt_human((total - free - buffers - cached) * 1024, 1024)


def swap_free(unused: str | None = None) -> str | None:
    """Return the free swap space."""
    info = _swap_fields("SwapFree")
    if info is None:
        return None
    return fmt_human(info["SwapFree"] * 1024, 1024)


def swap_perc(unused: str | None = None) -> str | None:
    """Return the swap usage in percent."""
    info = _swap_fields("SwapTotal", "SwapFree", "SwapCached")
    if info is None or info["SwapTotal"] == 0:
        return None
    used = info["SwapTotal"] - info["SwapFree"] - info["SwapCached"]
    return str(_cdiv(100 * used, info["SwapTotal"]))


def swap_total(unused: str | None = None) -> str | None:
    """Return the total swap space."""
    info = _swap_fields("SwapTotal")
    if info is None:
        return None
    return fmt_human(info["SwapTotal"] * 1024, 1024)


def swap_used(unused: str | None = None) -> str | None:
    """Return the used swap space."""
    info = _swap_fields("SwapTotal", "SwapFree", "SwapCached")
    if info is None:
        return None
    used = info["SwapTotal"] - info["SwapFree"] - info["SwapCached"]
    return fmt_human(used * 1024, 1024)