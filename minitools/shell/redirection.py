"""Running a command with its standard input or output sent to files."""

import contextlib
import re
import subprocess
from dataclasses import dataclass, field

_LEXEME = re.compile(
    r"<\s*(?P<input>[^\s|>]*)"
    r"|(?P<arrow>>>?)\s*(?P<output>[^\s|<]*)"
    r"|(?P<word>[^\s|<>]+)"
    r"|\s+"
    r"|\|"
)


@dataclass
class Redirection:
    """A command line split into its arguments and its redirections."""

    args: list = field(default_factory=list)
    input_file: str | None = None
    output_file: str | None = None
    append: bool = False


def parse_redirection(line):
    """Split ``line`` into arguments, an input file, an output file and the append flag."""
    result = Redirection()
    for match in _LEXEME.finditer(line):
        if match.group("word") is not None:
            result.args.append(match.group("word"))
        elif match.group("arrow") is not None:
            result.append = match.group("arrow") == ">>"
            result.output_file = match.group("output") or None
        elif match.group("input") is not None:
            result.input_file = match.group("input") or None
    return result


def run_redirection(line):
    """Run ``line`` with its redirections and return the command's exit status.

    Raises ``ValueError`` when there is no command and ``OSError`` when a
    file cannot be opened or the command cannot be started.
    """
    parsed = parse_redirection(line)
    if not parsed.args:
        raise ValueError("no command to run")
    with contextlib.ExitStack() as files:
        stdin = stdout = None
        if parsed.input_file:
            stdin = files.enter_context(open(parsed.input_file, "rb"))
        if parsed.output_file:
            mode = "ab" if parsed.append else "wb"
            stdout = files.enter_context(open(parsed.output_file, mode))
        return subprocess.run(parsed.args, stdin=stdin, stdout=stdout, check=False).returncode