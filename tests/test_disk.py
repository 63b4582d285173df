import os
from types import SimpleNamespace

import pytest

from slstatus.components import disk
from slstatus.util import fmt_human

FAKE = SimpleNamespace(f_frsize=1024, f_blocks=1024, f_bavail=512, f_bfree=256)


@pytest.fixture
def fake_statvfs(monkeypatch):
    monkeypatch.setattr(disk.os, "statvfs", lambda path: FAKE)


def test_disk_free(fake_statvfs):
    assert disk.disk_free("/") == fmt_human(512 * 1024, 1024)


def test_disk_total(fake_statvfs):
    assert disk.disk_total("/") == fmt_human(1024 * 1024, 1024)


def test_disk_used(fake_statvfs):
    assert disk.disk_used("/") == fmt_human(768 * 1024, 1024)


def test_disk_perc(fake_statvfs):
    assert disk.disk_perc("/") == "50"


def test_disk_perc_real_filesystem_in_range(tmp_path):
    value = int(disk.disk_perc(str(tmp_path)))
    assert 0 <= value <= 100


def test_disk_total_real_filesystem_format(tmp_path):
    st = os.statvfs(str(tmp_path))
    assert disk.disk_total(str(tmp_path)) == fmt_human(st.f_frsize * st.f_blocks, 1024)


@pytest.mark.parametrize(
    "func", [disk.disk_free, disk.disk_perc, disk.disk_total, disk.disk_used]
)
def test_missing_path_warns(func, tmp_path, capsys):
    missing = str(tmp_path / "missing")
    assert func(missing) is None
    assert f"statvfs '{missing}':" in capsys.readouterr().err