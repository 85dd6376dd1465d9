"""
Engine Diagnostic Renderer

Turns an EngineError into a single display string. Rendering is pure:
the same error always produces the same bytes, color codes included.
"""

import sys
from typing import Callable, Dict, Optional, TextIO

from .errors import (
    ErrorKind, EngineError, InvalidBinaryOperation, InvalidUnaryOperation,
    ScopeResolutionError, MismatchedParameterCount, MismatchedTypes,
)
from .highlight import Highlighter, get_highlighter


HEADER_TEXT = "Engine Error"


def _render_binary(error: InvalidBinaryOperation, h: Highlighter) -> str:
    return (f"Could not find {error.opcode} handler for the provided types "
            f"{h.faulty(error.x.type_name())} and {h.faulty(error.y.type_name())}")


def _render_unary(error: InvalidUnaryOperation, h: Highlighter) -> str:
    return (f"Could not find {error.opcode} handler for the provided type "
            f"{h.faulty(error.x.type_name())}")


def _render_already_exists(error: ScopeResolutionError, h: Highlighter) -> str:
    return f"The {error.subject} {h.faulty(error.name)} already exists in the scope"


def _render_undefined(error: ScopeResolutionError, h: Highlighter) -> str:
    return f"The {error.subject} {h.faulty(error.name)} is undefined in the scope"


def _render_parameter_count(error: MismatchedParameterCount, h: Highlighter) -> str:
    return (f"The function expected {h.expected(str(error.expected))} parameters, "
            f"but received {h.faulty(str(error.actual))}")


def _render_types(error: MismatchedTypes, h: Highlighter) -> str:
    return (f"Expected type {h.expected(error.expected.type_name())}, "
            f"but got {h.faulty(error.actual.type_name())} instead")


def _render_not_yet_implemented(error: EngineError, h: Highlighter) -> str:
    return "This feature is not yet implemented"


def _render_unknown(error: EngineError, h: Highlighter) -> str:
    return "An unknown error occurred"


_RENDERERS: Dict[ErrorKind, Callable[[EngineError, Highlighter], str]] = {
    ErrorKind.ADD: _render_binary,
    ErrorKind.SUB: _render_binary,
    ErrorKind.MUL: _render_binary,
    ErrorKind.DIV: _render_binary,
    ErrorKind.NEG: _render_unary,
    ErrorKind.GREATER_THAN: _render_binary,
    ErrorKind.GREATER_THAN_OR_EQ: _render_binary,
    ErrorKind.LESS_THAN: _render_binary,
    ErrorKind.LESS_THAN_OR_EQ: _render_binary,
    ErrorKind.NOT: _render_unary,
    ErrorKind.AND: _render_binary,
    ErrorKind.OR: _render_binary,
    ErrorKind.VARIABLE_ALREADY_EXISTS: _render_already_exists,
    ErrorKind.VARIABLE_UNDEFINED: _render_undefined,
    ErrorKind.FUNCTION_ALREADY_EXISTS: _render_already_exists,
    ErrorKind.FUNCTION_UNDEFINED: _render_undefined,
    ErrorKind.MISMATCHED_PARAMETER_COUNT: _render_parameter_count,
    ErrorKind.MISMATCHED_TYPES: _render_types,
    ErrorKind.NOT_YET_IMPLEMENTED: _render_not_yet_implemented,
    ErrorKind.UNKNOWN: _render_unknown,
}

# Every kind needs its own entry; there is no fallback branch.
_unhandled = [kind.name for kind in ErrorKind if kind not in _RENDERERS]
if _unhandled:
    raise ImportError(f"No renderer for error kinds: {', '.join(_unhandled)}")


def render(error: EngineError, highlighter: Optional[Highlighter] = None) -> str:
    """
    Render an engine error as a diagnostic string.

    Args:
        error: The error to render
        highlighter: Highlight backend; ANSI colors when omitted

    Returns:
        "Engine Error: <message>" with the header and payload highlighted

    Raises:
        TypeError: If error is not an EngineError variant
    """
    if not isinstance(error, EngineError) or error.kind is None:
        raise TypeError(f"Cannot render {type(error).__name__} as an engine error")

    h = highlighter if highlighter is not None else get_highlighter()
    msg = _RENDERERS[error.kind](error, h)
    return f"{h.header(HEADER_TEXT)}: {msg}"


def report(error: EngineError, file: Optional[TextIO] = None,
           highlighter: Optional[Highlighter] = None) -> None:
    """
    Print a rendered error for the user.

    Args:
        error: The error to print
        file: Output stream (default: sys.stderr)
        highlighter: Highlight backend; ANSI colors when omitted
    """
    print(render(error, highlighter), file=file if file is not None else sys.stderr)
