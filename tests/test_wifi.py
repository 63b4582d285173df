import struct

import pytest

from slstatus.components.wifi import (
    NL80211_ATTR_SSID,
    find_attr,
    rssi_to_perc,
    wifi_essid,
    wifi_perc,
)


def _attr(kind: int, payload: bytes) -> bytes:
    raw = struct.pack("=HH", 4 + len(payload), kind) + payload
    return raw + b"\0" * ((-len(raw)) % 4)


@pytest.mark.parametrize("rssi", [-50, -40, 0, 10])
def test_rssi_strong_signal_is_full(rssi):
    assert rssi_to_perc(rssi) == 100


@pytest.mark.parametrize("rssi", [-100, -101, -127])
def test_rssi_weak_signal_is_zero(rssi):
    assert rssi_to_perc(rssi) == 0


def test_rssi_midrange_value():
    assert rssi_to_perc(-70) == 60


def test_rssi_is_monotonic_and_bounded():
    values = [rssi_to_perc(r) for r in range(-128, 20)]
    assert all(0 <= v <= 100 for v in values)
    assert values == sorted(values)


def test_find_attr_returns_payload():
    data = _attr(1, b"ab") + _attr(7, b"hello")
    assert find_attr(7, data) == b"hello"
    assert find_attr(1, data) == b"ab"


def test_find_attr_skips_padding():
    data = _attr(2, b"x") + _attr(NL80211_ATTR_SSID, b"net\0")
    assert find_attr(NL80211_ATTR_SSID, data) == b"net\0"


def test_find_attr_missing_returns_none():
    assert find_attr(9, _attr(1, b"ab")) is None


def test_find_attr_truncated_header_returns_none():
    assert find_attr(1, b"\x08\x00") is None


def test_find_attr_zero_length_does_not_loop():
    assert find_attr(5, struct.pack("=HH", 0, 1) + b"\0" * 8) is None


def test_wifi_essid_unknown_interface_is_none():
    assert wifi_essid("nosuchif0") is None


def test_wifi_perc_unknown_interface_is_none():
    assert wifi_perc("nosuchif0") is None