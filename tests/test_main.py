import io
import os

import pytest

from minitools.shell.main import History, Shell


@pytest.fixture
def shell(tmp_path, monkeypatch):
    root = os.path.realpath(tmp_path)
    monkeypatch.chdir(root)
    return Shell(root=root, out=io.StringIO())


def test_history_load_keeps_complete_lines(tmp_path):
    path = tmp_path / "history.txt"
    path.write_text("ls\ncd sub\npartial")
    history = History()
    history.load(path)
    assert history.entries == ["ls", "cd sub"]


def test_history_load_creates_missing_file(tmp_path):
    path = tmp_path / "history.txt"
    history = History()
    history.load(path)
    assert path.exists()
    assert history.entries == []


def test_history_round_trip(tmp_path):
    path = tmp_path / "history.txt"
    history = History()
    for command in ("echo a", "pwd", "ls -l"):
        history.add(command)
    history.save(path)
    loaded = History()
    loaded.load(path)
    assert loaded.entries == history.entries


def test_history_limit():
    history = History()
    for number in range(30):
        history.add(f"cmd{number}")
    assert len(history.entries) == history.limit
    assert history.entries[-1] == "cmd29"
    assert history.entries[0] == f"cmd{30 - history.limit}"


def test_history_recent():
    history = History()
    for command in ("a", "b", "c", "d"):
        history.add(command)
    assert history.recent(2) == ["c", "d"]
    assert history.recent(100) == ["a", "b", "c", "d"]


def test_echo_builtin(shell):
    assert shell.run_line('echo "a  b"   c') is True
    assert shell.out.getvalue() == "a  b c"


def test_cd_and_pwd(shell, tmp_path):
    (tmp_path / "sub").mkdir()
    shell.run_line("cd sub")
    assert os.getcwd() == os.path.join(shell.root, "sub")
    assert shell.current == "/sub"
    shell.out.seek(0)
    shell.out.truncate()
    shell.run_line("pwd")
    assert shell.out.getvalue() == "/sub"


def test_cd_dash_returns_to_previous(shell, tmp_path):
    (tmp_path / "sub").mkdir()
    shell.run_line("cd sub")
    shell.run_line("cd -")
    assert os.getcwd() == shell.root
    assert shell.current == ""


def test_cd_failure_keeps_directory(shell):
    shell.run_line("cd does_not_exist")
    assert os.getcwd() == shell.root


def test_semicolons_and_history(shell):
    shell.run_line("echo x; history")
    assert shell.out.getvalue() == "xecho x\n history\n"


def test_whitespace_only_command(shell):
    shell.run_line("   ")
    assert "YoU nEeD" in shell.out.getvalue()
    assert shell.history.entries == ["   "]


def test_search_builtin(shell, tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "deep.txt").write_text("")
    shell.run_line("search deep.txt")
    shell.run_line("search missing.txt")
    assert shell.out.getvalue() == "TrueFalse"


def test_ls_builtin(shell, tmp_path):
    (tmp_path / "afile").write_text("")
    shell.run_line("ls")
    assert "afile" in shell.out.getvalue()


def test_redirected_external_command(shell, tmp_path):
    assert shell.run_line("echo hi > out.txt") is True
    assert (tmp_path / "out.txt").read_text() == "hi\n"
    assert shell.history.entries == ["echo hi > out.txt"]


def test_pipeline_through_shell(shell, tmp_path):
    (tmp_path / "in.txt").write_text("abc\n")
    assert shell.run_line("cat in.txt | tr a-z A-Z > out.txt") is True
    assert (tmp_path / "out.txt").read_text() == "ABC\n"
    assert shell.history.entries == ["cat in.txt | tr a-z A-Z > out.txt"]


def test_external_command_prints_pid(shell):
    shell.run_line("true")
    assert shell.out.getvalue().isdigit()
    assert shell.foreground is None


def test_exit_saves_history(shell, tmp_path):
    assert shell.run_line("echo one") is True
    assert shell.run_line("exit") is False
    assert "byeeee" in shell.out.getvalue()
    assert (tmp_path / "history.txt").read_text() == "echo one\nexit\n"