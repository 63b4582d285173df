"""Network components: addresses, link state and transfer speeds (Linux)."""

from __future__ import annotations

import fcntl
import ipaddress
import os
import re
import socket
import struct

from slstatus.util import fmt_human, read_text

SYS_CLASS_NET = "/sys/class/net"
IF_INET6 = "/proc/net/if_inet6"

# update interval in milliseconds, used to turn byte deltas into speeds
interval = 1000

_SIOCGIFADDR = 0x8915
_IFF_UP = 0x1
_IPV6_LINK_LOCAL_SCOPE = 0x20
_UINT = re.compile(r"\s*(\d+)")

# byte counters from the previous call
_counters: dict[str, int] = {"rx": 0, "tx": 0}


def _read_quietly(path: str) -> str | None:
    try:
        with open(path, encoding="utf-8") as handle:
            return handle.read()
    except OSError:
        return None


def ipv4(interface: str) -> str | None:
    """Return the IPv4 address of ``interface``."""
    request = struct.pack("256s", interface.encode()[:15])
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            reply = fcntl.ioctl(sock.fileno(), _SIOCGIFADDR, request)
    except (OSError, ValueError):
        return None
    return socket.inet_ntoa(reply[20:24])


def ipv6(interface: str) -> str | None:
    """Return the first IPv6 address of ``interface``."""
    text = _read_quietly(IF_INET6)
    if text is None:
        return None
    for line in text.splitlines():
        fields = line.split()
        if len(fields) < 6 or fields[5] != interface:
            continue
        try:
            address = ipaddress.IPv6Address(int(fields[0], 16))
            scope = int(fields[3], 16)
        except ValueError:
            return None
        if scope == _IPV6_LINK_LOCAL_SCOPE:
            return f"{address.compressed}%{interface}"
        return address.compressed
    return None


def up(interface: str) -> str | None:
    """Return 'up' or 'down' for ``interface``, or None if it does not exist."""
    text = _read_quietly(os.path.join(SYS_CLASS_NET, interface, "flags"))
    if text is None:
        return None
    try:
        flags = int(text.strip(), 16)
    except ValueError:
        return None
    return "up" if flags & _IFF_UP else "down"


def _netspeed(interface: str, direction: str) -> str | None:
    path = os.path.join(
        SYS_CLASS_NET, interface, "statistics", f"{direction}_bytes"
    )
    previous = _counters[direction]
    text = read_text(path)
    if text is None:
        return None
    match = _UINT.match(text)
    if match is None:
        return None
    current = int(match.group(1))
    _counters[direction] = current
    if previous == 0:
        return None
    return fmt_human((current - previous) * 1000 // interval, 1024)


def netspeed_rx(interface: str) -> str | None:
    """Return the receive speed of ``interface`` per second."""
    return _netspeed(interface, "rx")


def netspeed_tx(interface: str) -> str | None:
    """Return the transmit speed of ``interface`` per second."""
    return _netspeed(interface, "tx")