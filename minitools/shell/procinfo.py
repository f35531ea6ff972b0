"""The shell's ``pinfo`` builtin, reading process details from /proc."""

import os
from pathlib import Path


class ProcessInfoError(OSError):
    """Raised when the process cannot be found under /proc."""


def _is_foreground(pid):
    try:
        pgid = os.getpgid(pid)
    except OSError:
        return False
    try:
        fd = os.open("/dev/tty", os.O_RDONLY)
    except OSError:
        return False
    try:
        return pgid == os.tcgetpgrp(fd)
    except OSError:
        return False
    finally:
        os.close(fd)


def process_info(pid, root):
    """Return the ``pinfo`` report for ``pid``; paths under ``root`` are shown with ``~``."""
    proc = Path("/proc") / str(pid)
    stat_file = proc / "stat"
    try:
        fields = stat_file.read_text(errors="replace").split()
    except OSError as exc:
        raise ProcessInfoError(f"Could not open {stat_file}") from exc

    lines = [f"pid -- {pid}"]
    if len(fields) >= 3:
        status = fields[2]
        if status in ("R", "S") and _is_foreground(pid):
            status += "+"
        lines.append(f"Process Status -- {status}")

    statm_file = proc / "statm"
    try:
        statm = statm_file.read_text(errors="replace").split()
    except OSError as exc:
        raise ProcessInfoError(f"Could not open {statm_file}: process not found") from exc
    memory = statm[0] if statm else ""
    lines.append(f"memory -- {memory} {{Virtual Memory}}")

    try:
        exe = os.readlink(proc / "exe")
    except OSError:
        lines.append(f"Error: Could not read executable path for PID ;_;{pid}")
    else:
        shown = "~" + exe[len(root):] if len(root) < len(exe) else exe
        lines.append(f"Executable Path -- {shown}")
    return "\n".join(lines) + "\n"