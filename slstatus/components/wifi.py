"""WiFi components querying nl80211 over generic netlink (Linux)."""

from __future__ import annotations

import itertools
import socket
import struct
import sys

from slstatus.util import warn

NLMSG_HDRLEN = 16
GENL_HDRLEN = 4
NLA_HDRLEN = 4

NETLINK_GENERIC = 16
GENL_ID_CTRL = 0x10
NLM_F_REQUEST = 0x1
NLM_F_DUMP = 0x300
NLMSG_DONE = 0x3

CTRL_CMD_GETFAMILY = 3
CTRL_ATTR_FAMILY_ID = 1
CTRL_ATTR_FAMILY_NAME = 2

NL80211_CMD_GET_STATION = 17
NL80211_CMD_GET_INTERFACE = 5
NL80211_ATTR_IFINDEX = 3
NL80211_ATTR_STA_INFO = 21
NL80211_ATTR_SSID = 52
NL80211_STA_INFO_SIGNAL_AVG = 13

_FAMILY_NAME = b"nl80211\0"
_RESPONSE_SIZE = 4096

_NLMSGHDR = struct.Struct("=IHHII")
_GENLMSGHDR = struct.Struct("=BBH")
_NLATTR = struct.Struct("=HH")


def _nla_align(length: int) -> int:
    return (length + 3) & ~3


def rssi_to_perc(rssi: int) -> int:
    """Map a signal strength in dBm onto 0..100 percent."""
    if rssi >= -50:
        return 100
    if rssi <= -100:
        return 0
    return 2 * (rssi + 100)


def find_attr(attr: int, data: bytes) -> bytes | None:
    """Return the payload of the first netlink attribute of type ``attr``."""
    offset = 0
    while len(data) - offset >= NLA_HDRLEN:
        length, kind = _NLATTR.unpack_from(data, offset)
        if kind == attr:
            start = offset + NLA_HDRLEN
            return data[start:start + max(length - NLA_HDRLEN, 0)]
        if length < NLA_HDRLEN:
            break
        offset += _nla_align(length)
    return None


def _message(msg_type: int, flags: int, seq: int, cmd: int,
             attr_type: int, payload: bytes) -> bytes:
    total = NLMSG_HDRLEN + GENL_HDRLEN + NLA_HDRLEN + _nla_align(len(payload))
    body = (
        _GENLMSGHDR.pack(cmd, 1, 0)
        + _NLATTR.pack(NLA_HDRLEN + len(payload), attr_type)
        + payload
    )
    header = _NLMSGHDR.pack(total, msg_type, flags, seq, 0)
    return header + body.ljust(total - NLMSG_HDRLEN, b"\0")


class _Netlink:
    """Lazily opened generic netlink socket and cached nl80211 family id."""

    def __init__(self) -> None:
        self.sock: socket.socket | None = None
        self.family = 0
        self._seq = itertools.count(1)

    def next_seq(self) -> int:
        return next(self._seq)

    def socket(self) -> socket.socket | None:
        if self.sock is None:
            family = getattr(socket, "AF_NETLINK", None)
            if family is None:
                warn("socket 'AF_NETLINK': not supported on this platform")
                return None
            try:
                self.sock = socket.socket(family, socket.SOCK_RAW, NETLINK_GENERIC)
            except OSError as error:
                warn("socket 'AF_NETLINK':", error)
                return None
        return self.sock

    def send(self, request: bytes) -> bool:
        sock = self.socket()
        if sock is None:
            return False
        try:
            sent = sock.send(request)
        except OSError as error:
            warn("send 'AF_NETLINK':", error)
            return False
        if sent != len(request):
            warn("send 'AF_NETLINK': short write")
            return False
        return True

    def recv(self) -> bytes | None:
        sock = self.socket()
        if sock is None:
            return None
        try:
            return sock.recv(_RESPONSE_SIZE)
        except OSError as error:
            warn("recv 'AF_NETLINK':", error)
            return None


_netlink = _Netlink()


def _nl80211_family() -> int:
    if _netlink.family:
        return _netlink.family
    request = _message(GENL_ID_CTRL, NLM_F_REQUEST, _netlink.next_seq(),
                       CTRL_CMD_GETFAMILY, CTRL_ATTR_FAMILY_NAME, _FAMILY_NAME)
    if not _netlink.send(request):
        return 0
    response = _netlink.recv()
    if response is None or len(response) <= len(request):
        return 0
    family_id = find_attr(CTRL_ATTR_FAMILY_ID, response[len(request):])
    if family_id is not None and len(family_id) == 2:
        _netlink.family = struct.unpack("=H", family_id)[0]
    return _netlink.family


def _ifindex(interface: str) -> int:
    try:
        return socket.if_nametoindex(interface)
    except (OSError, ValueError) as error:
        warn("ioctl 'SIOCGIFINDEX':", error)
        return -1


def wifi_essid(interface: str) -> str | None:
    """Return the ESSID of the network ``interface`` is associated with."""
    family = _nl80211_family()
    index = _ifindex(interface)
    if not family:
        print("nl80211 family not found", file=sys.stderr)
        return None
    if index < 0:
        print(f"interface {interface} not found", file=sys.stderr)
        return None
    request = _message(family, NLM_F_REQUEST, _netlink.next_seq(),
                       NL80211_CMD_GET_INTERFACE, NL80211_ATTR_IFINDEX,
                       struct.pack("=I", index))
    if not _netlink.send(request):
        return None
    response = _netlink.recv()
    if response is None or len(response) <= NLMSG_HDRLEN + GENL_HDRLEN:
        return None
    ssid = find_attr(NL80211_ATTR_SSID, response[NLMSG_HDRLEN + GENL_HDRLEN:])
    if ssid is None:
        return None
    return ssid.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def wifi_perc(interface: str) -> str | None:
    """Return the average signal strength of ``interface``'s station in percent."""
    family = _nl80211_family()
    index = _ifindex(interface)
    if index < 0:
        print(f"interface {interface} not found", file=sys.stderr)
        return None
    if not family:
        return None
    request = _message(family, NLM_F_REQUEST | NLM_F_DUMP, _netlink.next_seq(),
                       NL80211_CMD_GET_STATION, NL80211_ATTR_IFINDEX,
                       struct.pack("=I", index))
    if not _netlink.send(request):
        return None

    strength: str | None = None
    while True:
        response = _netlink.recv()
        if response is None or len(response) < NLMSG_HDRLEN:
            return None
        offset = 0
        while len(response) - offset >= NLMSG_HDRLEN:
            length, msg_type = struct.unpack_from("=IH", response, offset)
            end = min(len(response), offset + length)
            if strength is None and length > NLMSG_HDRLEN + GENL_HDRLEN:
                attrs = response[offset + NLMSG_HDRLEN + GENL_HDRLEN:end]
                info = find_attr(NL80211_ATTR_STA_INFO, attrs)
                signal = (find_attr(NL80211_STA_INFO_SIGNAL_AVG, info)
                          if info is not None else None)
                if signal is not None and len(signal) == 1:
                    strength = str(rssi_to_perc(struct.unpack("b", signal)[0]))
            if msg_type == NLMSG_DONE:
                return strength
            if end <= offset:
                return None
            offset = end