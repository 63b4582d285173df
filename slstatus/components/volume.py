"""Volume component reading the master level of an OSS mixer device."""

from __future__ import annotations

import fcntl
import os
import struct

from slstatus.util import warn

_IOC_READ = 2


def _ior(kind: str, number: int, size: int = 4) -> int:
    return (_IOC_READ << 30) | (size << 16) | (ord(kind) << 8) | number


SOUND_MIXER_VOLUME = 0
SOUND_MIXER_READ_DEVMASK = _ior("M", 0xFE)


def _ioctl_int(fd: int, request: int) -> int:
    reply = fcntl.ioctl(fd, request, struct.pack("i", 0))
    return struct.unpack("i", reply)[0]


def vol_perc(card: str) -> str | None:
    """Return the master volume of the mixer device ``card`` in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError as error:
        warn(f"open '{card}':", error)
        return None
    try:
        try:
            devmask = _ioctl_int(fd, SOUND_MIXER_READ_DEVMASK)
        except OSError as error:
            warn("ioctl 'SOUND_MIXER_READ_DEVMASK':", error)
            return None
        if not devmask & (1 << SOUND_MIXER_VOLUME):
            return None
        try:
            level = _ioctl_int(fd, _ior("M", SOUND_MIXER_VOLUME))
        except OSError as error:
            warn(f"ioctl 'MIXER_READ({SOUND_MIXER_VOLUME})':", error)
            return None
    finally:
        os.close(fd)
    return str(level & 0xFF)