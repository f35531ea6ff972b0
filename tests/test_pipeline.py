from minitools.shell.pipeline import run_pipeline, split_pipeline


def test_split_keeps_spaces():
    assert split_pipeline("cat a | sort") == ["cat a ", " sort"]


def test_split_without_pipe():
    assert split_pipeline("ls -l") == ["ls -l"]


def test_two_stage_pipeline(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    lines = ["b\n", "a\n", "c\n"]
    (tmp_path / "in.txt").write_text("".join(lines))
    assert run_pipeline("cat in.txt | sort > out.txt") == [0, 0]
    assert (tmp_path / "out.txt").read_text() == "".join(sorted(lines))


def test_three_stage_pipeline(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "in.txt").write_text("b\na\nc\n")
    codes = run_pipeline("cat in.txt | sort | head -n 1 > out.txt")
    assert codes == [0, 0, 0]
    assert (tmp_path / "out.txt").read_text() == "a\n"


def test_input_redirection_in_first_stage(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "in.txt").write_text("abc\n")
    assert run_pipeline("cat < in.txt | tr a-z A-Z > out.txt") == [0, 0]
    assert (tmp_path / "out.txt").read_text() == "ABC\n"


def test_missing_command_counts_as_failure(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    codes = run_pipeline("no_such_command_here | cat > out.txt")
    assert codes == [1, 0]
    assert (tmp_path / "out.txt").read_text() == ""


def test_empty_stage(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "in.txt").write_text("x\n")
    codes = run_pipeline("cat in.txt | | cat > out.txt")
    assert codes[1] == 1
    assert len(codes) == 3