"""The staging index: a binary list of files with their blob ids."""

import hashlib
import os
import struct
import sys
from dataclasses import dataclass
from pathlib import Path

from minitools.git.objects import ObjectError, hash_object

SIGNATURE = b"DIRC"
VERSION = 2
_HEADER = struct.Struct(">4sII")
_STAT = struct.Struct(">10I")
_SHA_RAW_SIZE = 20
_EXCLUDED = (".git", "mygit")


@dataclass(frozen=True)
class IndexEntry:
    """A staged file: its mode in octal, its blob id and its path."""

    mode: str
    sha: str
    filename: str


def _index_path(root):
    return Path(root) / ".git" / "index"


def _padding(name_length):
    return (8 - (62 + name_length + 1) % 8) % 8


def _u32(value):
    return int(value) & 0xFFFFFFFF


def _encode_entry(st, sha, name):
    stat_fields = _STAT.pack(
        _u32(st.st_ctime), _u32(st.st_ctime_ns % 1_000_000_000),
        _u32(st.st_mtime), _u32(st.st_mtime_ns % 1_000_000_000),
        _u32(st.st_dev), _u32(st.st_ino), _u32(st.st_mode),
        _u32(st.st_uid), _u32(st.st_gid), _u32(st.st_size),
    )
    return stat_fields + bytes.fromhex(sha) + name + b"\0" + b"\0" * _padding(len(name))


def write_index(root, files):
    """Stage ``files`` (paths relative to ``root``), replacing the index; return the entries written.

    Each file's blob is stored. Files that cannot be read are reported on
    standard error and left out.
    """
    records = []
    entries = []
    for name in files:
        full = Path(root) / name
        try:
            st = full.stat()
            sha = hash_object(root, full, True)
        except OSError:
            print(f"Failed to stat file: {name}", file=sys.stderr)
            continue
        filename = Path(name).as_posix()
        records.append(_encode_entry(st, sha, os.fsencode(filename)))
        entries.append(IndexEntry(format(st.st_mode, "o"), sha, filename))
    content = _HEADER.pack(SIGNATURE, VERSION, len(records)) + b"".join(records)
    path = _index_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content + hashlib.sha1(content).digest())
    return entries


def read_index(root):
    """Return the staged entries, or an empty list when nothing is staged."""
    path = _index_path(root)
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return []
    if len(data) < _HEADER.size + _SHA_RAW_SIZE:
        raise ObjectError("index file is too short")
    body, checksum = data[:-_SHA_RAW_SIZE], data[-_SHA_RAW_SIZE:]
    signature, _version, count = _HEADER.unpack_from(body)
    if signature != SIGNATURE:
        raise ObjectError("index file has a bad signature")
    if hashlib.sha1(body).digest() != checksum:
        raise ObjectError("index file checksum mismatch")
    entries = []
    pos = _HEADER.size
    try:
        for _ in range(count):
            fields = _STAT.unpack_from(body, pos)
            sha_start = pos + _STAT.size
            name_start = sha_start + _SHA_RAW_SIZE
            if name_start > len(body):
                raise ObjectError("index entry is truncated")
            end = body.index(b"\0", name_start)
            name = body[name_start:end]
            entries.append(IndexEntry(
                format(fields[6], "o"),
                body[sha_start:name_start].hex(),
                os.fsdecode(name),
            ))
            pos = end + 1 + _padding(len(name))
    except (struct.error, ValueError) as exc:
        raise ObjectError("index entry is truncated") from exc
    return entries


def _relative(path, root):
    return Path(os.path.relpath(path, root)).as_posix()


def _is_excluded(relative):
    return any(part in relative for part in _EXCLUDED)


def _walk(base, root):
    for path in sorted(base.rglob("*")):
        if path.is_file():
            relative = _relative(path, root)
            if not _is_excluded(relative):
                yield relative


def collect_files(root, paths):
    """Return the files ``add paths`` stages, relative to ``root``.

    ``.`` as the first path stages the whole tree; directories are walked;
    paths that are neither files nor directories are reported and skipped.
    """
    paths = list(paths)
    if not paths:
        raise ValueError("no paths given")
    root = Path(root)
    if paths[0] == ".":
        return list(_walk(root, root))
    files = []
    for name in paths:
        path = root / name
        if path.is_dir():
            files.extend(_walk(path, root))
        elif path.is_file():
            files.append(_relative(path, root))
        else:
            print(f"Warning: {name} is not a valid file or directory.", file=sys.stderr)
    return files