"""Simple status components: files, time, host and user information."""

from __future__ import annotations

import os
import pwd
import socket
import subprocess
import sys
import time

from slstatus.util import read_text, warn

ENTROPY_AVAIL = "/proc/sys/kernel/random/entropy_avail"

_BUFSIZE = 1024
_LINE_LIMIT = _BUFSIZE - 2


def _first_line(text: str) -> str | None:
    line = text[:_LINE_LIMIT]
    newline = line.find("\n")
    if newline >= 0:
        line = line[:newline]
    return line or None


def cat(path: str) -> str | None:
    """Return the first line of the file at ``path`` without its newline."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline(_LINE_LIMIT)
    except OSError as error:
        warn(f"fopen '{path}':", error)
        return None
    return _first_line(line)


def datetime(fmt: str) -> str | None:
    """Return the local time formatted with strftime ``fmt``."""
    result = time.strftime(fmt, time.localtime())
    if not result or len(result.encode()) >= _BUFSIZE:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def entropy(unused: str | None = None) -> str | None:
    """Return the kernel's available entropy."""
    if sys.platform.startswith(("openbsd", "freebsd")):
        return "\u221e"
    text = read_text(ENTROPY_AVAIL)
    if text is None:
        return None
    fields = text.split()
    if not fields or not fields[0].isdigit():
        return None
    return str(int(fields[0]))


def hostname(unused: str | None = None) -> str | None:
    """Return the host name."""
    try:
        return socket.gethostname()
    except OSError as error:
        warn("gethostname:", error)
        return None


def kernel_release(unused: str | None = None) -> str | None:
    """Return the kernel release, as ``uname -r`` prints it."""
    try:
        return os.uname().release
    except OSError as error:
        warn("uname:", error)
        return None


def load_avg(unused: str | None = None) -> str | None:
    """Return the 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def num_files(path: str) -> str | None:
    """Return the number of entries in the directory ``path``."""
    try:
        with os.scandir(path) as entries:
            count = sum(1 for _ in entries)
    except OSError as error:
        warn(f"opendir '{path}':", error)
        return None
    return str(count)


def run_command(cmd: str) -> str | None:
    """Run ``cmd`` in the shell and return the first line of its output."""
    try:
        completed = subprocess.run(
            cmd, shell=True, stdout=subprocess.PIPE, check=False
        )
    except OSError as error:
        warn(f"popen '{cmd}':", error)
        return None
    return _first_line(completed.stdout.decode("utf-8", errors="replace"))


def _uptime_clock() -> int:
    for name in ("CLOCK_BOOTTIME", "CLOCK_UPTIME", "CLOCK_MONOTONIC"):
        clock = getattr(time, name, None)
        if clock is not None:
            return clock
    raise OSError("no suitable clock available")


def uptime(unused: str | None = None) -> str | None:
    """Return the system uptime as hours and minutes."""
    try:
        clock = _uptime_clock()
        seconds = int(time.clock_gettime(clock))
    except OSError as error:
        warn(f"clock_gettime: {error}")
        return None
    hours, rest = divmod(seconds, 3600)
    return f"{hours}h {rest // 60}m"


def gid(unused: str | None = None) -> str:
    """Return the real group id of the current process."""
    return str(os.getgid())


def uid(unused: str | None = None) -> str:
    """Return the effective user id of the current process."""
    return str(os.geteuid())


def username(unused: str | None = None) -> str | None:
    """Return the name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError:
        warn(f"getpwuid '{euid}': no such user")
        return None