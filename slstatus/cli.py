"""Command line entry point: renders the configured status line."""

from __future__ import annotations

import os
import re
import select
import signal
import socket
import struct
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from slstatus.components.basic import datetime, run_command
from slstatus.components.memory import ram_used
from slstatus.util import die, warn

VERSION = "1.1"
PROGRAM = "slstatus"

# interval between updates in milliseconds
INTERVAL = 1000
# text shown when a component cannot produce a value
UNKNOWN_STR = "n/a"
# size of the status buffer in bytes, including the terminator
MAXLEN = 2048


@dataclass(frozen=True)
class Arg:
    """One status element: a component, its printf-style format and argument."""

    func: Callable[[str | None], str | None]
    fmt: str
    args: str | None = None


@dataclass(frozen=True)
class Options:
    """Command line options."""

    single_line: bool = False
    once: bool = False


ARGS: tuple[Arg, ...] = (
    Arg(ram_used, "| %s", None),
    Arg(run_command, "| %s", "pamixer --get-volume-human"),
    Arg(datetime, "   %s ", "  %a  %b  %d %R "),
)

_CONVERSION = re.compile(r"%([%s])")


def _usage() -> None:
    die(f"usage: {PROGRAM} [-v] [-s] [-1]")


def parse_args(argv: Iterable[str]) -> Options:
    """Parse the arguments that follow the program name."""
    remaining = list(argv)
    single_line = False
    once = False
    while remaining and remaining[0].startswith("-") and len(remaining[0]) > 1:
        arg = remaining.pop(0)
        if arg == "--":
            break
        for flag in arg[1:]:
            if flag == "v":
                die(f"slstatus-{VERSION}")
            elif flag == "1":
                once = True
                single_line = True
            elif flag == "s":
                single_line = True
            else:
                _usage()
    if remaining:
        _usage()
    return Options(single_line=single_line, once=once)


def _cformat(fmt: str, value: str) -> str:
    return _CONVERSION.sub(lambda m: "%" if m.group(1) == "%" else value, fmt)


def render_status(args: Iterable[Arg], unknown: str = UNKNOWN_STR,
                  maxlen: int = MAXLEN) -> str:
    """Concatenate the formatted components, at most ``maxlen - 1`` bytes."""
    out = bytearray()
    for arg in args:
        result = arg.func(arg.args)
        if result is None:
            result = unknown
        piece = _cformat(arg.fmt, result).encode("utf-8")
        room = maxlen - len(out)
        if len(piece) >= room:
            out += piece[:max(room - 1, 0)]
            warn("vsnprintf: Output truncated")
            break
        out += piece
    return out.decode("utf-8", errors="ignore")


def _pad(data: bytes) -> bytes:
    return data + b"\0" * (-len(data) % 4)


def _parse_display(name: str) -> tuple[str, int, int]:
    match = re.fullmatch(r"(.*):(\d+)(?:\.(\d+))?", name)
    if match is None:
        raise ValueError(f"invalid display name {name!r}")
    host = match.group(1)
    if host.startswith("unix/"):
        host = ""
    return host, int(match.group(2)), int(match.group(3) or 0)


def _read_auth(host: str, number: int) -> tuple[bytes, bytes]:
    path = os.environ.get("XAUTHORITY") or os.path.expanduser("~/.Xauthority")
    try:
        data = Path(path).read_bytes()
    except OSError:
        return b"", b""
    local = host in ("", "unix") or host.startswith("/")
    wanted = socket.gethostname().encode() if local else host.encode()
    display = str(number).encode()
    pos = 0
    while pos + 2 <= len(data):
        (family,) = struct.unpack_from(">H", data, pos)
        pos += 2
        fields = []
        for _ in range(4):
            if pos + 2 > len(data):
                return b"", b""
            (size,) = struct.unpack_from(">H", data, pos)
            pos += 2
            fields.append(data[pos:pos + size])
            pos += size
        address, entry_number, auth_name, cookie = fields
        if (family == 0xFFFF or address == wanted) and entry_number in (b"", display):
            return auth_name, cookie
    return b"", b""


class _XDisplay:
    """Minimal X11 connection able to set the root window name."""

    _CHANGE_PROPERTY = 18
    _WM_NAME = 39
    _STRING = 31

    def __init__(self, name: str | None = None) -> None:
        if name is None:
            name = os.environ.get("DISPLAY", "")
        host, number, screen = _parse_display(name)
        self._sock = self._connect(host, number)
        try:
            self.root = self._handshake(*_read_auth(host, number), screen)
        except BaseException:
            self._sock.close()
            raise

    @staticmethod
    def _connect(host: str, number: int) -> socket.socket:
        if host.startswith("/"):
            path = f"{host}:{number}"
        elif host in ("", "unix"):
            path = f"/tmp/.X11-unix/X{number}"
        else:
            return socket.create_connection((host, 6000 + number))
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(path)
        except OSError:
            sock.close()
            raise
        return sock

    def _recv_exact(self, size: int) -> bytes:
        chunks = bytearray()
        while len(chunks) < size:
            chunk = self._sock.recv(size - len(chunks))
            if not chunk:
                raise OSError("X server closed the connection")
            chunks += chunk
        return bytes(chunks)

    def _handshake(self, auth_name: bytes, cookie: bytes, screen: int) -> int:
        request = struct.pack("<BxHHHHxx", 0x6C, 11, 0, len(auth_name), len(cookie))
        self._sock.sendall(request + _pad(auth_name) + _pad(cookie))
        status, reason_len, _major, _minor, extra = struct.unpack(
            "<BBHHH", self._recv_exact(8))
        body = self._recv_exact(extra * 4)
        if status != 1:
            reason = body[:reason_len] if status == 0 else body
            raise OSError(f"X server refused connection: "
                          f"{reason.decode('latin-1', errors='replace').strip()}")
        (vendor_len,) = struct.unpack_from("<H", body, 16)
        screens, formats = body[20], body[21]
        if screen >= screens:
            raise OSError(f"no screen {screen} on display")
        offset = 32 + len(_pad(bytes(vendor_len))) + 8 * formats
        for index in range(screens):
            (root,) = struct.unpack_from("<I", body, offset)
            if index == screen:
                return root
            depths = body[offset + 39]
            offset += 40
            for _ in range(depths):
                (visuals,) = struct.unpack_from("<H", body, offset + 2)
                offset += 8 + 24 * visuals
        raise OSError(f"no screen {screen} on display")

    def store_name(self, name: str | None) -> None:
        """Set WM_NAME of the root window; None clears it."""
        data = name.encode("utf-8") if name else b""
        padded = _pad(data)
        request = struct.pack(
            "<BBHIIIBxxxI", self._CHANGE_PROPERTY, 0, 6 + len(padded) // 4,
            self.root, self._WM_NAME, self._STRING, 8, len(data),
        )
        self._sock.sendall(request + padded)

    def close(self) -> None:
        self._sock.close()


class _Signals:
    """Signal handling: SIGINT/SIGTERM end the loop, SIGUSR1 forces an update."""

    _SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGUSR1)

    def __init__(self, done: bool) -> None:
        self.done = done

    def __enter__(self) -> "_Signals":
        self._reader, self._writer = socket.socketpair()
        self._reader.setblocking(False)
        self._writer.setblocking(False)
        self._old_fd = signal.set_wakeup_fd(self._writer.fileno())
        self._old = {sig: signal.signal(sig, self._handle) for sig in self._SIGNALS}
        return self

    def __exit__(self, *exc_info: object) -> None:
        for sig, handler in self._old.items():
            signal.signal(sig, handler)
        signal.set_wakeup_fd(self._old_fd)
        self._reader.close()
        self._writer.close()

    def _handle(self, signo: int, frame: object) -> None:
        if signo != signal.SIGUSR1:
            self.done = True

    def sleep(self, seconds: float) -> None:
        """Wait ``seconds`` or until a signal arrives."""
        if seconds < 0:
            return
        ready, _, _ = select.select([self._reader], [], [], seconds)
        if ready:
            try:
                while True:
                    self._reader.recv(64)
            except BlockingIOError:
                pass


def main(argv: list[str] | None = None) -> int:
    """Run the status loop and return the exit status."""
    options = parse_args(sys.argv[1:] if argv is None else argv)

    display: _XDisplay | None = None
    if not options.single_line:
        try:
            display = _XDisplay()
        except (OSError, ValueError):
            die("XOpenDisplay: Failed to open display")

    with _Signals(options.once) as signals:
        while True:
            start = time.monotonic()
            status = render_status(ARGS, UNKNOWN_STR, MAXLEN)
            if display is None:
                try:
                    print(status, flush=True)
                except OSError as error:
                    die("puts:", error)
            else:
                try:
                    display.store_name(status)
                except OSError:
                    die("XStoreName: Allocation failed")
            if signals.done:
                break
            signals.sleep(INTERVAL / 1000 - (time.monotonic() - start))
            if signals.done:
                break

    if display is not None:
        try:
            display.store_name(None)
            display.close()
        except OSError:
            die("XCloseDisplay: Failed to close display")
    return 0