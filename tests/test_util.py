import pytest

from slstatus.util import die, fmt_human, read_text, warn


def test_warn_plain_message(capsys):
    warn("something happened")
    assert capsys.readouterr().err == "something happened\n"


def test_warn_appends_error_description_after_colon(capsys):
    warn("fopen 'x':", FileNotFoundError(2, "No such file or directory"))
    assert capsys.readouterr().err == "fopen 'x': No such file or directory\n"


def test_warn_without_colon_ignores_error(capsys):
    warn("no colon", ValueError("hidden"))
    assert capsys.readouterr().err == "no colon\n"


def test_die_exits_with_status_one(capsys):
    with pytest.raises(SystemExit) as exc:
        die("fatal")
    assert exc.value.code == 1
    assert capsys.readouterr().err == "fatal\n"


def test_fmt_human_small_number_has_empty_prefix():
    assert fmt_human(0, 1024) == "0.0 "


def test_fmt_human_exact_base_step():
    assert fmt_human(1024, 1024) == "1.0 Ki"
    assert fmt_human(1000, 1000) == "1.0 k"


@pytest.mark.parametrize("base", [1000, 1024])
def test_fmt_human_scales_consistently(base):
    small = fmt_human(5 * base, base)
    large = fmt_human(5 * base * base, base)
    assert small.split(" ")[0] == large.split(" ")[0] == "5.0"
    assert small.split(" ")[1] != large.split(" ")[1]


def test_fmt_human_huge_number_stops_at_last_prefix():
    result = fmt_human(1024 ** 10, 1024)
    assert result.endswith(" Yi")


def test_fmt_human_invalid_base():
    with pytest.raises(ValueError):
        fmt_human(10, 10)


def test_read_text_returns_content(tmp_path):
    path = tmp_path / "file"
    path.write_text("42 kB\n")
    assert read_text(str(path)) == "42 kB\n"


def test_read_text_missing_file_warns(tmp_path, capsys):
    missing = str(tmp_path / "missing")
    assert read_text(missing) is None
    assert f"fopen '{missing}':" in capsys.readouterr().err