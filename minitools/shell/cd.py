"""The shell's ``cd`` builtin."""

import os


class ChangeDirError(OSError):
    """Raised when ``cd`` cannot change the working directory."""


def _chdir(path, message):
    try:
        os.chdir(path)
    except OSError as exc:
        raise ChangeDirError(f"{message}: {path}") from exc


def change_dir(root, previous, rest):
    """Change directory as ``cd rest`` would and return the new working directory.

    An empty argument or ``~`` goes to ``root``, ``-`` goes to ``previous``
    and ``.`` stays put.
    """
    path = rest.strip(" ")
    if not path or path == "~":
        _chdir(root, "chdir() to root failed")
        return os.getcwd()
    if " " in path:
        raise ChangeDirError("too many arguments")
    if path == ".":
        return os.getcwd()
    if path == "-":
        _chdir(previous, "given path failed")
        return os.getcwd()
    _chdir(path, "no such file or directory")
    return os.getcwd()