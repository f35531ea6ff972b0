"""The shell's ``ls`` builtin with ``-l`` and ``-a``."""

import grp
import os
import pwd
import stat
import sys
import time

_PERMISSION_BITS = (
    (stat.S_IRUSR, "r"), (stat.S_IWUSR, "w"), (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"), (stat.S_IWGRP, "w"), (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"), (stat.S_IWOTH, "w"), (stat.S_IXOTH, "x"),
)


def format_mode(mode):
    """Return the ten-character permission string for ``mode``."""
    kind = "d" if mode & stat.S_IFDIR else "-"
    return kind + "".join(ch if mode & bit else "-" for bit, ch in _PERMISSION_BITS)


def is_absolute(path, root):
    """Tell whether ``path`` is non-empty and lies under ``root``."""
    return bool(path) and path.startswith(root)


def _user_name(uid):
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return "???"


def _group_name(gid):
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return "???"


def format_long_entry(st, name):
    """Return one ``ls -l`` line for the stat result ``st`` of ``name``."""
    modified = time.strftime("%b %d %H:%M", time.localtime(st.st_mtime))
    return (
        f"{format_mode(st.st_mode)}  {st.st_nlink} {_user_name(st.st_uid)} "
        f"{_group_name(st.st_gid)} {st.st_size} {modified} {name}"
    )


def _parse_arguments(rest, current_path):
    long_format = show_all = False
    directories = []
    for arg in rest.split(" "):
        if arg == "-l":
            long_format = True
        elif arg == "-a":
            show_all = True
        elif arg in ("-la", "-al"):
            long_format = show_all = True
        elif arg == "~":
            directories.append(".")
        else:
            directories.append(arg)
    if not directories:
        directories.append(current_path)
    if len(directories) > 1:
        directories = directories[1:]
    return long_format, show_all, directories


def _listing(path, show_all):
    names = [".", "..", *sorted(os.listdir(path))]
    for name in names:
        if not show_all and name.startswith("."):
            continue
        full_path = f"{path}/{name}"
        try:
            yield name, os.stat(full_path)
        except OSError as exc:
            print(f"stat failed on {full_path}: {exc.strerror}", file=sys.stderr)


def list_files(root, current_path, rest):
    """Return the text ``ls rest`` prints when run in ``current_path``."""
    long_format, show_all, directories = _parse_arguments(rest, current_path)
    out = []
    for name in directories:
        path = name if is_absolute(name, root) else f"{current_path}/{name}"
        out.append(f"{name}\n")
        try:
            entries = list(_listing(path, show_all))
        except OSError as exc:
            print(f"I was looking for {name} but @_@: {exc.strerror}", file=sys.stderr)
            continue
        if long_format:
            total = sum(st.st_blocks for _, st in entries) // 2
            out.append(f"total {total}\n")
            out.extend(f"{format_long_entry(st, entry)}\n" for entry, st in entries)
        else:
            out.append("".join(f"{entry}  " for entry, _ in entries) + "\n")
    return "".join(out)