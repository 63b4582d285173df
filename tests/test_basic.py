import os
import pwd
import socket
import time

from slstatus.components import basic


def test_cat_returns_first_line(tmp_path):
    path = tmp_path / "file"
    path.write_text("hello\nworld\n")
    assert basic.cat(str(path)) == "hello"


def test_cat_line_without_newline(tmp_path):
    path = tmp_path / "file"
    path.write_text("single")
    assert basic.cat(str(path)) == "single"


def test_cat_empty_file_is_none(tmp_path):
    path = tmp_path / "empty"
    path.write_text("")
    assert basic.cat(str(path)) is None


def test_cat_missing_file_warns(tmp_path, capsys):
    missing = str(tmp_path / "missing")
    assert basic.cat(missing) is None
    assert f"fopen '{missing}':" in capsys.readouterr().err


def test_datetime_year_format():
    value = basic.datetime("%Y")
    assert value == time.strftime("%Y")
    assert len(value) == 4


def test_datetime_literal_text():
    assert basic.datetime("abc") == "abc"


def test_datetime_empty_result_is_none(capsys):
    assert basic.datetime("") is None
    assert "strftime" in capsys.readouterr().err


def test_entropy_reads_file(tmp_path, monkeypatch):
    path = tmp_path / "entropy_avail"
    path.write_text("256\n")
    monkeypatch.setattr(basic.sys, "platform", "linux")
    monkeypatch.setattr(basic, "ENTROPY_AVAIL", str(path))
    assert basic.entropy(None) == "256"


def test_entropy_on_bsd_is_infinity(monkeypatch):
    monkeypatch.setattr(basic.sys, "platform", "openbsd7")
    assert basic.entropy(None) == "\u221e"


def test_entropy_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(basic.sys, "platform", "linux")
    monkeypatch.setattr(basic, "ENTROPY_AVAIL", str(tmp_path / "missing"))
    assert basic.entropy(None) is None


def test_hostname_matches_socket():
    assert basic.hostname(None) == socket.gethostname()


def test_kernel_release_matches_uname():
    assert basic.kernel_release(None) == os.uname().release


def test_load_avg_has_three_values():
    parts = basic.load_avg(None).split(" ")
    assert len(parts) == 3
    assert [len(part.split(".")[1]) for part in parts] == [2, 2, 2]


def test_num_files_counts_entries(tmp_path):
    for name in ("a", "b", "c"):
        (tmp_path / name).write_text("")
    (tmp_path / "sub").mkdir()
    assert basic.num_files(str(tmp_path)) == "4"


def test_num_files_missing_directory(tmp_path, capsys):
    missing = str(tmp_path / "missing")
    assert basic.num_files(missing) is None
    assert f"opendir '{missing}':" in capsys.readouterr().err


def test_run_command_strips_newline():
    assert basic.run_command("echo foo") == "foo"


def test_run_command_first_line_only():
    assert basic.run_command("printf 'a\\nb\\n'") == "a"


def test_run_command_no_output_is_none():
    assert basic.run_command("true") is None


def test_uptime_format():
    value = basic.uptime(None)
    hours, minutes = value.split(" ")
    assert hours.endswith("h")
    assert minutes.endswith("m")
    assert int(hours[:-1]) >= 0
    assert 0 <= int(minutes[:-1]) < 60


def test_user_ids():
    assert basic.uid(None) == str(os.geteuid())
    assert basic.gid(None) == str(os.getgid())


def test_username_matches_passwd():
    assert basic.username(None) == pwd.getpwuid(os.geteuid()).pw_name