"""Content-addressed object storage: blobs and trees under ``.git/objects``."""

import hashlib
import os
import string
import zlib
from dataclasses import dataclass
from pathlib import Path

IGNORED_NAMES = frozenset({".git", "mygit", "mygit.cpp"})
TREE_MODE = "40000"
FILE_MODE = "100644"
_SHA_RAW_SIZE = 20


class ObjectError(Exception):
    """Raised when an object is missing, malformed or cannot be decoded."""


@dataclass(frozen=True)
class TreeEntry:
    """One entry of a tree object: its mode, name and hexadecimal object id."""

    mode: str
    name: str
    sha: str

    @property
    def kind(self):
        return "tree" if self.mode == TREE_MODE else "blob"

    def __bytes__(self):
        return (
            f"{self.mode} ".encode()
            + os.fsencode(self.name)
            + b"\0"
            + hex_to_bytes(self.sha)
        )


def sha1_hex(data):
    """Return the hexadecimal SHA-1 digest of ``data``."""
    return hashlib.sha1(data).hexdigest()


def hex_to_bytes(text):
    """Return the bytes spelled by the hexadecimal string ``text``."""
    return bytes.fromhex(text)


def bytes_to_hex(data):
    """Return ``data`` as a lower-case hexadecimal string."""
    return data.hex()


def object_path(root, sha):
    """Return where the object ``sha`` is stored in the repository at ``root``."""
    if len(sha) < 3 or any(ch not in string.hexdigits for ch in sha):
        raise ObjectError(f"not an object id: {sha!r}")
    return Path(root) / ".git" / "objects" / sha[:2] / sha[2:]


def write_object(root, data):
    """Store the full object ``data`` compressed and return its id."""
    sha = sha1_hex(data)
    path = object_path(root, sha)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(zlib.compress(data, 9))
    return sha


def read_object(root, sha):
    """Return the decompressed object ``sha``, header included."""
    path = object_path(root, sha)
    try:
        compressed = path.read_bytes()
    except OSError as exc:
        raise ObjectError(f"can't open object file: {path}") from exc
    try:
        return zlib.decompress(compressed)
    except zlib.error as exc:
        raise ObjectError(f"decompression failed for {sha}") from exc


def _split_object(data):
    header, sep, body = data.partition(b"\0")
    if not sep:
        raise ObjectError("failed to parse object content")
    kind = header.split(b" ", 1)[0].decode(errors="replace")
    return kind, body


def _blob(content):
    return b"blob %d\0" % len(content) + content


def hash_object(root, path, write):
    """Return the blob id of the file at ``path``, storing the blob when ``write`` is true."""
    data = _blob(Path(path).read_bytes())
    if write:
        return write_object(root, data)
    return sha1_hex(data)


def cat_file(root, flag, sha):
    """Return what ``cat-file flag sha`` prints.

    ``-p`` gives the content, ``-s`` the size of the whole stored object
    and ``-t`` its type.
    """
    if flag not in ("-p", "-s", "-t"):
        raise ObjectError(f"Unknown flag: {flag}")
    data = read_object(root, sha)
    kind, body = _split_object(data)
    if flag == "-p":
        return body
    if flag == "-s":
        return f"{len(data)} bytes\n".encode()
    return f"{kind}\n".encode()


def write_tree(root, directory=None):
    """Store ``directory`` (the repository root by default) as tree and blob objects; return the tree id."""
    directory = Path(root if directory is None else directory)
    entries = []
    for child in sorted(directory.iterdir()):
        if child.name in IGNORED_NAMES:
            continue
        if child.is_dir():
            entries.append(TreeEntry(TREE_MODE, child.name, write_tree(root, child)))
        elif child.is_file():
            sha = write_object(root, _blob(child.read_bytes()))
            entries.append(TreeEntry(FILE_MODE, child.name, sha))
    entries.sort(key=lambda entry: os.fsencode(entry.name))
    content = b"".join(bytes(entry) for entry in entries)
    return write_object(root, b"tree %d\0" % len(content) + content)


def _parse_tree(body):
    entries = []
    pos = 0
    while pos < len(body):
        space = body.find(b" ", pos)
        if space < 0:
            break
        mode = body[pos:space].decode(errors="replace")
        end = body.find(b"\0", space + 1)
        if end < 0:
            break
        name = os.fsdecode(body[space + 1:end])
        raw = body[end + 1:end + 1 + _SHA_RAW_SIZE]
        if len(raw) < _SHA_RAW_SIZE:
            break
        entries.append(TreeEntry(mode, name, bytes_to_hex(raw)))
        pos = end + 1 + _SHA_RAW_SIZE
    return entries


def ls_tree(root, sha, name_only=False):
    """Return the lines ``ls-tree`` prints for the tree ``sha``."""
    _, body = _split_object(read_object(root, sha))
    if name_only:
        return [entry.name for entry in _parse_tree(body)]
    return [f"{entry.mode} {entry.kind} {entry.name}" for entry in _parse_tree(body)]