import pytest

from minitools.shell.search import search


@pytest.fixture
def tree(tmp_path):
    deep = tmp_path / "one" / "two"
    deep.mkdir(parents=True)
    (deep / "deep.txt").write_text("x")
    (tmp_path / "top.txt").write_text("x")
    return tmp_path


def test_finds_top_level(tree):
    assert search(str(tree), "", "top.txt") is True


def test_finds_nested_file_with_leading_spaces(tree):
    assert search(str(tree), "", "   deep.txt") is True


def test_finds_directory_name(tree):
    assert search(str(tree), "", "two") is True


def test_missing_name(tree):
    assert search(str(tree), "", "absent.txt") is False


def test_does_not_look_above_start(tree):
    assert search(str(tree / "one"), "", "top.txt") is False


def test_unreadable_start(tmp_path, capsys):
    assert search(str(tmp_path / "nope"), "", "x") is False
    assert "Cannot open directory" in capsys.readouterr().err