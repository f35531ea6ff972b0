import os
import stat

import pytest

from minitools.shell.listing import (
    format_long_entry,
    format_mode,
    is_absolute,
    list_files,
)


@pytest.fixture
def folder(tmp_path):
    (tmp_path / "a").write_text("data")
    (tmp_path / "b").write_text("")
    (tmp_path / ".hidden").write_text("")
    return tmp_path


def test_format_mode_directory():
    assert format_mode(stat.S_IFDIR | 0o755) == "drwxr-xr-x"


def test_format_mode_file():
    assert format_mode(stat.S_IFREG | 0o644) == "-rw-r--r--"


def test_is_absolute():
    assert is_absolute("/srv/data/x", "/srv/data")
    assert not is_absolute("x", "/srv/data")
    assert not is_absolute("", "")


def test_format_long_entry(folder):
    st = os.stat(folder / "a")
    line = format_long_entry(st, "a")
    assert line.startswith(format_mode(st.st_mode) + "  ")
    assert line.endswith(" a")
    assert f" {st.st_size} " in line


def test_plain_listing_hides_dotfiles(folder):
    out = list_files(str(folder), str(folder), "")
    assert out == "\na  b  \n"


def test_all_listing_shows_dotfiles(folder):
    out = list_files(str(folder), str(folder), "-a")
    lines = out.splitlines()
    assert lines[0] == str(folder)
    assert lines[1].split() == [".", "..", ".hidden", "a", "b"]


def test_long_listing_has_total(folder):
    out = list_files(str(folder), str(folder), "-l")
    lines = out.splitlines()
    assert lines[0] == str(folder)
    assert lines[1].startswith("total ")
    assert [line.split()[-1] for line in lines[2:]] == ["a", "b"]


def test_first_argument_after_leading_space_is_used(folder):
    out = list_files(str(folder), "/", f" {folder}")
    assert out.splitlines()[0] == str(folder)
    assert "a  b" in out


def test_missing_directory_reports(folder, capsys):
    out = list_files(str(folder), str(folder), " missing")
    assert out == "missing\n"
    assert "missing" in capsys.readouterr().err