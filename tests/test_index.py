import hashlib
import struct

import pytest

from minitools.git.index import IndexEntry, collect_files, read_index, write_index
from minitools.git.objects import ObjectError, hash_object, read_object


@pytest.fixture
def repo(tmp_path):
    (tmp_path / "a.txt").write_text("alpha")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.txt").write_text("beta")
    for path in (tmp_path / "a.txt", tmp_path / "sub" / "b.txt"):
        path.chmod(0o644)
    return tmp_path


def test_round_trip(repo):
    written = write_index(repo, ["a.txt", "sub/b.txt"])
    entries = read_index(repo)
    assert entries == written
    assert [entry.filename for entry in entries] == ["a.txt", "sub/b.txt"]
    assert entries[0].sha == hash_object(repo, repo / "a.txt", False)
    assert all(entry.mode == "100644" for entry in entries)


def test_header_and_checksum(repo):
    write_index(repo, ["a.txt", "sub/b.txt"])
    data = (repo / ".git" / "index").read_bytes()
    assert data[:4] == b"DIRC"
    assert struct.unpack(">II", data[4:12]) == (2, 2)
    assert data[-20:] == hashlib.sha1(data[:-20]).digest()


def test_blobs_are_stored(repo):
    entries = write_index(repo, ["a.txt"])
    assert read_object(repo, entries[0].sha) == b"blob 5\0alpha"


def test_missing_file_is_skipped(repo):
    entries = write_index(repo, ["a.txt", "gone.txt"])
    assert [entry.filename for entry in entries] == ["a.txt"]
    assert read_index(repo) == entries


def test_read_without_index(tmp_path):
    assert read_index(tmp_path) == []


def test_bad_signature(repo):
    write_index(repo, ["a.txt"])
    path = repo / ".git" / "index"
    data = b"XXXX" + path.read_bytes()[4:]
    path.write_bytes(data)
    with pytest.raises(ObjectError):
        read_index(repo)


def test_checksum_mismatch(repo):
    write_index(repo, ["a.txt"])
    path = repo / ".git" / "index"
    data = bytearray(path.read_bytes())
    data[-1] ^= 0xFF
    path.write_bytes(bytes(data))
    with pytest.raises(ObjectError):
        read_index(repo)


def test_rewrite_replaces_entries(repo):
    write_index(repo, ["a.txt", "sub/b.txt"])
    write_index(repo, ["sub/b.txt"])
    assert [entry.filename for entry in read_index(repo)] == ["sub/b.txt"]


def test_collect_everything_excludes_repository_files(repo):
    (repo / ".git").mkdir()
    (repo / ".git" / "HEAD").write_text("ref")
    (repo / "mygit").write_text("binary")
    assert collect_files(repo, ["."]) == ["a.txt", "sub/b.txt"]


def test_collect_directory_and_file(repo):
    assert collect_files(repo, ["sub", "a.txt"]) == ["sub/b.txt", "a.txt"]


def test_collect_skips_invalid_path(repo, capsys):
    assert collect_files(repo, ["nope", "a.txt"]) == ["a.txt"]
    assert "nope" in capsys.readouterr().err


def test_collect_requires_paths(repo):
    with pytest.raises(ValueError):
        collect_files(repo, [])


def test_entry_fields():
    entry = IndexEntry("100644", "ab" * 20, "f")
    assert (entry.mode, entry.sha, entry.filename) == ("100644", "ab" * 20, "f")