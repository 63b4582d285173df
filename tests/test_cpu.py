import pytest

from slstatus.components import cpu
from slstatus.util import fmt_human


@pytest.fixture
def stat_file(tmp_path, monkeypatch):
    path = tmp_path / "stat"
    monkeypatch.setattr(cpu, "PROC_STAT", str(path))
    return path


def test_cpu_freq(tmp_path, monkeypatch):
    path = tmp_path / "scaling_cur_freq"
    path.write_text("2400000\n")
    monkeypatch.setattr(cpu, "CPU_FREQ", str(path))
    assert cpu.cpu_freq(None) == fmt_human(2400000 * 1000, 1000)


def test_cpu_freq_missing(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cpu, "CPU_FREQ", str(tmp_path / "missing"))
    assert cpu.cpu_freq(None) is None
    assert "fopen" in capsys.readouterr().err


def test_cpu_perc_between_samples(stat_file):
    stat_file.write_text("cpu 100 0 100 800 0 0 0 0 0 0\n")
    cpu.cpu_perc(None)
    stat_file.write_text("cpu 150 0 100 850 0 0 0 0 0 0\n")
    assert cpu.cpu_perc(None) == "50"


def test_cpu_perc_unchanged_sample_is_none(stat_file):
    stat_file.write_text("cpu 300 0 100 900 0 0 0 0 0 0\n")
    cpu.cpu_perc(None)
    assert cpu.cpu_perc(None) is None


def test_cpu_perc_after_zero_user_sample_is_none(stat_file):
    stat_file.write_text("cpu 0 0 0 0 0 0 0 0 0 0\n")
    cpu.cpu_perc(None)
    stat_file.write_text("cpu 500 0 100 900 0 0 0 0 0 0\n")
    assert cpu.cpu_perc(None) is None


def test_cpu_perc_result_in_range(stat_file):
    stat_file.write_text("cpu 1000 10 200 5000 30 5 5 0 0 0\n")
    cpu.cpu_perc(None)
    stat_file.write_text("cpu 1400 12 260 5600 40 6 9 0 0 0\n")
    assert 0 <= int(cpu.cpu_perc(None)) <= 100


def test_cpu_perc_malformed_stat(stat_file):
    stat_file.write_text("cpu 1 2\n")
    assert cpu.cpu_perc(None) is None