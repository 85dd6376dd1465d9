"""
Engine Diagnostic Highlighting

Terminal color decoration for rendered diagnostics. Message templates
only ask for a role; the backend decides what that looks like.
"""

from enum import Enum, auto
from typing import Dict, Optional


class Role(Enum):
    """Semantic roles a piece of diagnostic text can play."""

    HEADER = auto()      # the "Engine Error" prefix
    FAULTY = auto()      # the failing side: operand types, bad names, actual values
    EXPECTED = auto()    # the required side: expected counts and types


# ANSI escape sequences
RESET = "\033[0m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"

DEFAULT_PALETTE: Dict[Role, str] = {
    Role.HEADER: RED,
    Role.FAULTY: YELLOW,
    Role.EXPECTED: GREEN,
}


class Highlighter:
    """Base class for highlight backends."""

    def highlight(self, role: Role, text: str) -> str:
        raise NotImplementedError

    def header(self, text: str) -> str:
        return self.highlight(Role.HEADER, text)

    def faulty(self, text: str) -> str:
        return self.highlight(Role.FAULTY, text)

    def expected(self, text: str) -> str:
        return self.highlight(Role.EXPECTED, text)


class AnsiHighlighter(Highlighter):
    """Wraps text in ANSI color codes taken from a palette."""

    def __init__(self, palette: Optional[Dict[Role, str]] = None):
        palette = dict(DEFAULT_PALETTE if palette is None else palette)
        missing = [role.name for role in Role if role not in palette]
        if missing:
            raise ValueError(f"Palette is missing roles: {', '.join(missing)}")
        self.palette = palette

    def highlight(self, role: Role, text: str) -> str:
        return f"{self.palette[role]}{text}{RESET}"

    def __repr__(self) -> str:
        return f"AnsiHighlighter({self.palette!r})"


class PlainHighlighter(Highlighter):
    """Leaves text undecorated, for logs and non-terminal output."""

    def highlight(self, role: Role, text: str) -> str:
        return text

    def __repr__(self) -> str:
        return "PlainHighlighter()"


ANSI = AnsiHighlighter()
PLAIN = PlainHighlighter()


def get_highlighter(color: bool = True) -> Highlighter:
    """
    Get the shared highlight backend.

    Args:
        color: Use ANSI colors. Colors are emitted whether or not the
            destination is a terminal.

    Returns:
        Highlighter instance
    """
    # TODO: pick PLAIN automatically when the target stream is not a TTY
    # or NO_COLOR is set, once hosts pass their output stream in.
    return ANSI if color else PLAIN
