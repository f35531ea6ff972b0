"""An interactive shell with builtins, history, pipes and redirection."""

import argparse
import contextlib
import getpass
import os
import signal
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path

from minitools.shell.cd import ChangeDirError, change_dir
from minitools.shell.completion import complete
from minitools.shell.echo import EchoError, echo_text
from minitools.shell.listing import list_files
from minitools.shell.pipeline import run_pipeline
from minitools.shell.procinfo import ProcessInfoError, process_info
from minitools.shell.redirection import run_redirection
from minitools.shell.search import search

HISTORY_LIMIT = 20
HISTORY_FILE = "history.txt"


@dataclass
class History:
    """The commands entered, oldest first, keeping at most ``limit``."""

    entries: list = field(default_factory=list)
    limit: int = HISTORY_LIMIT

    def load(self, path):
        """Read the complete lines of ``path``; create the file when it is missing."""
        path = Path(path)
        if not path.exists():
            path.touch()
            return
        text = path.read_text(errors="replace")
        *complete_lines, _ = text.split("\n")
        self.entries.extend(complete_lines)

    def save(self, path):
        """Write every entry to ``path``, one per line."""
        Path(path).write_text("".join(f"{entry}\n" for entry in self.entries))

    def add(self, command):
        """Record ``command``, dropping the oldest entries beyond the limit."""
        self.entries.append(command)
        del self.entries[:-self.limit]

    def recent(self, count):
        """Return the last ``count`` entries."""
        return self.entries[-count:] if count > 0 else []


def _login_name():
    try:
        return os.getlogin()
    except OSError:
        return getpass.getuser()


class Shell:
    """The shell's state and its command interpreter."""

    def __init__(self, root=None, out=None, history_path=None):
        self.root = root or os.getcwd()
        self.out = out or sys.stdout
        self.history_path = history_path or os.path.join(self.root, HISTORY_FILE)
        self.history = History()
        self.previous = ""
        self.current = self._display(os.getcwd())
        self.foreground = None
        self.jobs = []

    def _display(self, cwd):
        if cwd == self.root:
            return ""
        if len(self.root) <= len(cwd):
            return cwd[len(self.root):]
        return cwd

    def _write(self, text):
        self.out.write(text)
        self.out.flush()

    def prompt(self):
        """Return the prompt shown before each command."""
        return f"\n<{_login_name()}@{os.uname().sysname}:~{self.current}>"

    def run_line(self, line):
        """Run every ``;``-separated command of ``line``; return False after ``exit``."""
        for segment in (part for part in line.split(";") if part):
            self.history.add(segment)
            stripped = segment.lstrip(" ")
            if not stripped:
                self._write("YoU nEeD tO EnTeR sOmEtHiNg '-'")
                break
            if not self._run_segment(segment, stripped):
                return False
        return True

    def _run_segment(self, segment, stripped):
        word = stripped.partition(" ")[0]
        rest = stripped[len(word):]
        if "|" in segment:
            self._guarded(run_pipeline, segment)
            self._write("\n")
        elif "<" in segment or ">" in segment:
            self._guarded(run_redirection, segment)
            self._write("\n")
        elif word == "cd":
            self._cd(rest)
        elif word == "pwd":
            self._write(self.current or f"/{_login_name()}")
        elif word == "echo":
            try:
                self._write(echo_text(rest))
            except EchoError as exc:
                self._write(f" {exc}")
        elif word == "ls":
            self._write(list_files(self.root, os.getcwd(), rest))
        elif word == "search":
            self._write("True" if search(os.getcwd(), self.root, rest) else "False")
        elif word == "history":
            self._history(rest)
        elif word == "pinfo":
            self._pinfo(rest)
        elif word == "exit":
            self._logout()
            self._write("byeeee byeeeeeeeeeee :);\n")
            return False
        else:
            self._external(segment)
        return True

    def _guarded(self, action, argument):
        try:
            action(argument)
        except (OSError, ValueError) as exc:
            print(exc, file=sys.stderr)

    def _cd(self, rest):
        before = os.getcwd()
        try:
            cwd = change_dir(self.root, self.previous, rest)
        except ChangeDirError as exc:
            print(exc, file=sys.stderr)
            return
        self.previous = before
        self.current = self._display(cwd)
        self._write(f"\n{self.current}" if self.current else f"\n/{_login_name()}")

    def _history(self, rest):
        text = rest.strip()
        try:
            count = int(text) if text else 10
        except ValueError:
            print(f"history: invalid count: {text}", file=sys.stderr)
            return
        self._write("".join(f"{entry}\n" for entry in self.history.recent(count)))

    def _pinfo(self, rest):
        text = rest.strip()
        try:
            pid = int(text) if text else os.getpid()
            self._write(process_info(pid, self.root))
        except ValueError:
            print(f"pinfo: invalid pid: {text}", file=sys.stderr)
        except ProcessInfoError as exc:
            self._write(f"Error: {exc}")

    def _external(self, segment):
        command = segment.rstrip(" ")
        background = command.endswith("&")
        if background:
            command = command[:-1]
        args = command.split()
        if not args:
            return
        quiet = subprocess.DEVNULL if background else None
        try:
            process = subprocess.Popen(args, stdout=quiet, stderr=quiet)
        except OSError as exc:
            print(f"Execution failed because: {exc}", file=sys.stderr)
            return
        self._write(str(process.pid))
        if background:
            self._write(f"\nPID: {process.pid} running in background.\n")
            self.jobs.append(process.pid)
            return
        self.foreground = process.pid
        try:
            while True:
                _, status = os.waitpid(process.pid, os.WUNTRACED)
                if os.WIFSTOPPED(status):
                    self._write(str(process.pid))
                    self.jobs.append(process.pid)
                    break
                if os.WIFEXITED(status) or os.WIFSIGNALED(status):
                    break
        except ChildProcessError:
            pass
        finally:
            self.foreground = None

    def _logout(self):
        os.chdir(self.root)
        try:
            self.history.save(self.history_path)
        except OSError:
            self._write("cant create history file")

    def _redraw(self, line):
        self._write("\033[2K\r" + self.prompt().lstrip("\n") + line)

    def _show_completion(self, line):
        completed, options = complete(line)
        if len(options) == 1:
            self._write(f"\n{completed}")
        elif options:
            self._write("\n" + "".join(f"{option}  " for option in options) + "\n")

    def _read_line(self):
        """Read one line key by key; return None on end of input or Ctrl-D."""
        line = ""
        entries = self.history.entries
        index = len(entries) - 1
        while True:
            char = _read_char()
            if char in ("", "\x04"):
                return None
            if char == "\n":
                return line
            if char in ("\b", "\x7f"):
                if line:
                    line = line[:-1]
                    self._write("\b \b")
            elif char == "\t":
                if line:
                    self._show_completion(line)
                    return ""
                self._write("    ")
            elif char == "\x1b":
                sequence = _read_char() + _read_char()
                if sequence == "[A":
                    if index < 0:
                        index = 0
                    elif index < len(entries):
                        line = entries[index]
                        self._redraw(line)
                        index -= 1
                elif sequence == "[B":
                    if index >= len(entries):
                        index = len(entries) - 1
                    elif index >= 0:
                        line = entries[index]
                        self._redraw(line)
                        index += 1
            else:
                self._write(char)
                line += char


def _read_char():
    return os.read(0, 1).decode(errors="replace")


@contextlib.contextmanager
def _raw_mode():
    import termios

    original = termios.tcgetattr(0)
    raw = termios.tcgetattr(0)
    raw[3] &= ~(termios.ICANON | termios.ECHO)
    termios.tcsetattr(0, termios.TCSAFLUSH, raw)
    try:
        yield
    finally:
        termios.tcsetattr(0, termios.TCSAFLUSH, original)


def _install_signals(shell):
    def forward(signum, _frame):
        if shell.foreground is not None:
            os.kill(shell.foreground, signum)
            if signum == signal.SIGTSTP:
                shell.out.write(f"\n[Process {shell.foreground} stopped]\n")
                shell.jobs.append(shell.foreground)
            shell.foreground = None

    def quit_message(_signum, _frame):
        shell.out.write("\nLogging you out...\n")

    signal.signal(signal.SIGINT, forward)
    signal.signal(signal.SIGTSTP, forward)
    signal.signal(signal.SIGQUIT, quit_message)


def main(argv=None):
    """Start the interactive shell."""
    argparse.ArgumentParser(prog="minishell", description="A small interactive shell.").parse_args(argv)
    shell = Shell(out=sys.stdout)
    shell.history.load(shell.history_path)
    interactive = sys.stdin.isatty()
    _install_signals(shell)
    shell.out.write("\n")
    while True:
        shell.out.write(shell.prompt())
        shell.out.flush()
        if interactive:
            with _raw_mode():
                line = shell._read_line()
        else:
            text = sys.stdin.readline()
            line = text.rstrip("\n") if text else None
        if line is None:
            shell.out.write("\nLogging out... :);\n")
            shell._logout()
            return 0
        shell.out.write("\n")
        if not shell.run_line(line):
            return 0


if __name__ == "__main__":
    sys.exit(main())