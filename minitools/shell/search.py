"""The shell's ``search`` builtin: find a name anywhere below a directory."""

import os
import sys


def _search_tree(directory, target):
    try:
        entries = list(os.scandir(directory))
    except OSError as exc:
        print(f"Cannot open directory: {directory}: {exc.strerror}", file=sys.stderr)
        return False
    for entry in entries:
        if entry.name == target:
            return True
        try:
            is_dir = entry.is_dir()
        except OSError:
            is_dir = False
        if is_dir and _search_tree(entry.path, target):
            return True
    return False


def search(current_path, root, rest):
    """Tell whether a file or directory named ``rest`` exists below ``current_path``.

    ``root`` is the shell's home directory; the search does not depend on it.
    """
    return _search_tree(current_path, rest.lstrip(" "))