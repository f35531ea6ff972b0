"""The shell's ``echo`` builtin: quote removal and space collapsing."""

import re

_PIECE = re.compile(
    r'"(?P<double>[^"]*)"'
    r"|'(?P<single>[^']*)'"
    r"|(?P<space> +)"
    r"|(?P<word>[^ \"']+)"
    r"|(?P<unclosed>[\"'])"
)


class EchoError(ValueError):
    """Raised when a quoted section of an echo argument is never closed."""


def echo_text(text):
    """Return what ``echo`` prints for the argument text ``text``.

    Leading spaces are dropped, runs of unquoted spaces collapse to one,
    and text inside single or double quotes is kept as written.
    """
    pieces = []
    for match in _PIECE.finditer(text.lstrip(" ")):
        kind = match.lastgroup
        if kind == "unclosed":
            quote = match.group("unclosed")
            raise EchoError(f"you have missed {quote}")
        if kind == "space":
            pieces.append(" ")
        else:
            pieces.append(match.group(kind))
    return "".join(pieces)