"""Commits, the commit log and checking out a commit."""

import re
import time
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from minitools.git.index import read_index
from minitools.git.objects import (
    TREE_MODE,
    ObjectError,
    TreeEntry,
    bytes_to_hex,
    read_object,
    write_object,
)

NULL_SHA = "0" * 40
HEAD_REF = "ref: refs/heads/main"
AUTHOR_NAME = "someone"
AUTHOR_EMAIL = "someone@example.com"
COMMIT_AUTHOR = "Someone <some@example.com>"
TIMEZONE = "+0530"
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_SHA_RAW_SIZE = 20
_LOG_LINE = re.compile(
    r"\s*(\S+)\s+(\S+)\s+(\S+)\s+(\S+)\s+(\S+)\s+(\S+)\s+\S+(?: (.*))?$"
)


class CommitError(Exception):
    """Raised when a commit cannot be made."""


@dataclass(frozen=True)
class CommitLogEntry:
    """One line of the branch log."""

    parent_sha: str
    current_sha: str
    author_name: str
    author_email: str
    timestamp: str
    message: str


def _git(root):
    return Path(root) / ".git"


def log_path(root):
    """Return the path of the branch log in the repository at ``root``."""
    return _git(root) / "logs" / "refs" / "heads" / "master"


def write_tree_from_index(root, entries):
    """Store a tree object listing the index ``entries`` by file name; return its id."""
    tree_entries = sorted(
        (TreeEntry(entry.mode, entry.filename, entry.sha) for entry in entries),
        key=lambda entry: entry.name,
    )
    content = b"".join(bytes(entry) for entry in tree_entries)
    return write_object(root, b"tree %d\0" % len(content) + content)


def write_commit_object(root, tree_sha, parent_sha, message):
    """Store a commit of ``tree_sha`` with the optional ``parent_sha``; return its id."""
    stamp = time.strftime(_TIME_FORMAT, time.gmtime())
    lines = [f"tree {tree_sha}"]
    if parent_sha:
        lines.append(f"parent {parent_sha}")
    lines.append(f"author {COMMIT_AUTHOR} {stamp} {TIMEZONE}")
    lines.append(f"committer {COMMIT_AUTHOR} {stamp} {TIMEZONE}")
    data = ("\n".join(lines) + f"\n\n{message}\n").encode()
    return write_object(root, b"commit %d\0" % len(data) + data)


def _read_head(root):
    try:
        text = (_git(root) / "HEAD").read_text()
    except FileNotFoundError:
        return ""
    return text.split("\n", 1)[0]


def _update_head(root, sha):
    git = _git(root)
    (git / "HEAD").write_text(sha)
    branch = git / "refs" / "heads" / "main"
    branch.parent.mkdir(parents=True, exist_ok=True)
    branch.write_text(sha)


def _append_log(root, parent_sha, sha, message):
    path = log_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    stamp = time.strftime(_TIME_FORMAT, time.localtime())
    with path.open("a") as log:
        log.write(
            f"{parent_sha or NULL_SHA} {sha} {AUTHOR_NAME} <{AUTHOR_EMAIL}> "
            f"{stamp} commit: {message}\n"
        )


def commit(root, message):
    """Commit the staged files with ``message`` and return the new commit's id.

    HEAD and the main branch move to the new commit, the log gains a line
    and the index is removed.
    """
    entries = read_index(root)
    if not entries:
        raise CommitError("No staged changes to commit.")
    tree_sha = write_tree_from_index(root, entries)
    parent_sha = _read_head(root)
    if parent_sha == HEAD_REF:
        parent_sha = NULL_SHA
    sha = write_commit_object(root, tree_sha, parent_sha, message)
    _update_head(root, sha)
    _append_log(root, parent_sha, sha, message)
    (_git(root) / "index").unlink(missing_ok=True)
    return sha


def parse_log(path):
    """Return the entries of the log file at ``path``, oldest first; none when it is missing."""
    try:
        text = Path(path).read_text()
    except FileNotFoundError:
        return []
    entries = []
    for line in text.splitlines():
        match = _LOG_LINE.match(line)
        if match is None:
            continue
        parent, current, name, email, date, clock, message = match.groups()
        entries.append(CommitLogEntry(
            parent, current, name, email, f"{date} {clock} {TIMEZONE}", message or "",
        ))
    return entries


def format_log(entries):
    """Return the ``log`` report for ``entries``, newest first."""
    if not entries:
        return "No commits found in the log.\n"
    blocks = []
    for entry in reversed(entries):
        parent = NULL_SHA if entry.parent_sha.startswith("ref:") else entry.parent_sha
        blocks.append(
            f"Commit: {entry.current_sha}\n"
            f"Parent: {parent}\n"
            f"Author: {entry.author_name}\n"
            f"Email: {entry.author_email}\n"
            f"Date: {entry.timestamp}\n"
            f"Message: {entry.message}\n\n"
        )
    return "".join(blocks)


def _object_body(root, sha, kind):
    header, sep, body = read_object(root, sha).partition(b"\0")
    if not sep or header.split(b" ", 1)[0] != kind.encode():
        raise ObjectError(f"{sha} is not a {kind} object")
    return body


def _commit_trees(body):
    header = body.split(b"\n\n", 1)[0].decode(errors="replace")
    return [line[len("tree "):] for line in header.split("\n") if line.startswith("tree ")]


def _tree_entries(body):
    pos = 0
    while pos < len(body):
        space = body.find(b" ", pos)
        end = body.find(b"\0", space + 1) if space >= 0 else -1
        if end < 0:
            raise ObjectError("malformed tree object")
        raw = body[end + 1:end + 1 + _SHA_RAW_SIZE]
        if len(raw) < _SHA_RAW_SIZE:
            raise ObjectError("malformed tree object")
        yield TreeEntry(
            body[pos:space].decode(errors="replace"),
            body[space + 1:end].decode(errors="surrogateescape"),
            bytes_to_hex(raw),
        )
        pos = end + 1 + _SHA_RAW_SIZE


def _restore(root, tree_sha, prefix):
    for entry in list(_tree_entries(_object_body(root, tree_sha, "tree"))):
        name = prefix / entry.name
        if entry.mode == TREE_MODE:
            yield from _restore(root, entry.sha, name)
            continue
        target = Path(root) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(_object_body(root, entry.sha, "blob"))
        yield name.as_posix()


def checkout(root, sha):
    """Write every file of commit ``sha`` into the working tree; return their names."""
    trees = _commit_trees(_object_body(root, sha, "commit"))
    if not trees:
        raise ObjectError(f"commit {sha} names no tree")
    return [name for tree in trees for name in _restore(root, tree, PurePosixPath())]