"""Keyboard helpers: lock indicator formatting and XKB layout names."""

from __future__ import annotations

import re

_INVALID_SYMBOLS = ("evdev", "inet", "pc", "base")
_SEPARATORS = re.compile(r"[+:_]")


def format_indicators(fmt: str, led_mask: int) -> str:
    """Render caps ('c') and num ('n') lock state as ``fmt`` describes.

    A letter followed by '?' appears, with its case kept, only while its
    indicator is on; any other letter always appears, upper case when on.
    Only the first four characters of ``fmt`` are used.
    """
    fmt = fmt[:4]
    out = []
    for i, char in enumerate(fmt):
        key = char.lower()
        if key not in ("c", "n"):
            continue
        togglecase = i + 1 >= len(fmt) or fmt[i + 1] != "?"
        isset = bool(led_mask & (1 << (key == "n")))
        if togglecase:
            out.append(key.upper() if isset else key)
        elif isset:
            out.append(char)
    return "".join(out)


def valid_layout_or_variant(sym: str) -> bool:
    """Return False for XKB rule names that are not layouts."""
    return not sym.startswith(_INVALID_SYMBOLS)


def get_layout(symbols: str, group: int) -> str | None:
    """Return the layout of ``group`` from an XKB symbols name."""
    layout = None
    found = 0
    for token in filter(None, _SEPARATORS.split(symbols)):
        if found > group:
            break
        if not valid_layout_or_variant(token):
            continue
        if len(token) == 1 and token.isdigit():
            continue
        layout = token
        found += 1
    return layout