"""The ``mygit`` command: a small content-addressed version control tool."""

import sys
from pathlib import Path

from minitools.git.commits import (
    HEAD_REF,
    CommitError,
    checkout,
    commit,
    format_log,
    log_path,
    parse_log,
)
from minitools.git.index import collect_files, write_index
from minitools.git.objects import ObjectError, cat_file, hash_object, ls_tree, write_tree

_DIRECTORIES = (
    "objects", "refs", "logs", "refs/heads", "refs/tags",
    "logs/refs", "logs/refs/heads", "logs/refs/tags",
)


def init_repository(root):
    """Create the repository layout under ``root``; return True when it already existed."""
    git = Path(root) / ".git"
    existed = git.exists()
    for name in _DIRECTORIES:
        (git / name).mkdir(parents=True, exist_ok=True)
    head = git / "HEAD"
    if not head.exists():
        head.write_text(HEAD_REF + "\n")
    return existed


def _error(message):
    print(message, file=sys.stderr)
    return 1


def _write_bytes(data):
    sys.stdout.flush()
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(data.decode(errors="replace"))
    else:
        buffer.write(data)
        buffer.flush()


def _init(root, args):
    if init_repository(root):
        print("Reinitialized git directory")
    else:
        print("Initialized git directory")
    return 0


def _cat_file(root, args):
    if len(args) < 2:
        print("Incomplete command. Expected: mygit cat-file <flag> <hash>")
        return 1
    flag, sha = args[0], args[1]
    try:
        _write_bytes(cat_file(root, flag, sha))
    except ObjectError as exc:
        return _error(str(exc))
    return 0


def _hash_object(root, args):
    write = "-w" in args
    names = [arg for arg in args if arg != "-w"]
    if not names:
        return _error("Cannot open file: ")
    filename = names[-1]
    try:
        sha = hash_object(root, filename, write)
    except OSError:
        return _error(f"Cannot open file: {filename}")
    print(sha)
    return 0


def _write_tree(root, args):
    print(write_tree(root))
    return 0


def _ls_tree(root, args):
    name_only = bool(args) and args[0] == "--name-only"
    rest = args[1:] if name_only else args
    if not rest:
        return _error("Usage: mygit ls-tree [--name-only] <tree_sha>")
    try:
        lines = ls_tree(root, rest[0], name_only)
    except ObjectError as exc:
        return _error(str(exc))
    for line in lines:
        print(line)
    return 0


def _add(root, args):
    if not args:
        return _error("Usage: mygit add <file1> <file2> ... or mygit add .")
    write_index(root, collect_files(root, args))
    return 0


def _commit(root, args):
    message = args[1] if len(args) >= 2 and args[0] == "-m" else "commit with no mssg"
    try:
        sha = commit(root, message)
    except (CommitError, ObjectError) as exc:
        return _error(str(exc))
    print(f"Commit created: {sha}")
    return 0


def _log(root, args):
    sys.stdout.write(format_log(parse_log(log_path(root))))
    return 0


def _checkout(root, args):
    if len(args) != 1:
        return _error("Usage: mygit checkout <commit_sha>")
    sha = args[0]
    try:
        restored = checkout(root, sha)
    except ObjectError:
        return _error("Error: Invalid index SHA or index file not found.")
    for name in restored:
        print(f"Restored file: {name}")
    print(f"Checked out index: {sha}")
    return 0


_COMMANDS = {
    "init": _init,
    "cat-file": _cat_file,
    "hash-object": _hash_object,
    "write-tree": _write_tree,
    "ls-tree": _ls_tree,
    "add": _add,
    "commit": _commit,
    "log": _log,
    "checkout": _checkout,
}


def main(argv=None):
    """Run one ``mygit`` command in the current directory and return its exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        return _error("No command provided.")
    command, rest = args[0], args[1:]
    handler = _COMMANDS.get(command)
    if handler is None:
        return _error(f"Unknown command {command}")
    return handler(Path.cwd(), rest)


if __name__ == "__main__":
    sys.exit(main())