"""Tab completion of command names and file names."""

import os

COMMANDS = (
    "ls", "cat", "cd", "search", "pwd", "echo",
    "exit", "pinto", "vim", "gedit", "history",
)


def command_completions(prefix):
    """Return the known commands that start with ``prefix``."""
    return [command for command in COMMANDS if command.startswith(prefix)]


def file_completions(text):
    """Return the names in the directory part of ``text`` that start with its last part."""
    directory, slash, prefix = text.rpartition("/")
    directory = directory + slash if slash else "./"
    try:
        names = sorted(os.listdir(directory))
    except OSError:
        return []
    return [name for name in [".", "..", *names] if name.startswith(prefix)]


def complete(line):
    """Complete the last word of ``line``.

    Returns the line, with the last word replaced when exactly one
    candidate exists, and the list of candidates.
    """
    head, space, word = line.rpartition(" ")
    options = file_completions(word) if space else command_completions(line)
    if len(options) == 1:
        return head + space + options[0], options
    return line, options