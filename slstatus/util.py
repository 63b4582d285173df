"""Shared helpers: diagnostics, human-readable sizes and file reading."""

from __future__ import annotations

import sys

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}


def _describe(error: BaseException) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error)


def warn(message: str, error: BaseException | None = None) -> None:
    """Print a diagnostic to stderr.

    A message ending in ':' is followed by a description of ``error``.
    """
    text = message
    if message.endswith(":") and error is not None:
        text = f"{message} {_describe(error)}"
    print(text, file=sys.stderr)


def die(message: str, error: BaseException | None = None) -> None:
    """Print a diagnostic and exit with status 1."""
    warn(message, error)
    raise SystemExit(1)


def fmt_human(num: float, base: int) -> str:
    """Format ``num`` with one decimal and an SI (1000) or IEC (1024) prefix."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        raise ValueError(f"fmt_human: invalid base {base}") from None
    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"


def read_text(path: str) -> str | None:
    """Return the contents of ``path``, or None after a warning if unreadable."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return handle.read()
    except OSError as error:
        warn(f"fopen '{path}':", error)
        return None