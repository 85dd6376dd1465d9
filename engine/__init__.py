"""
Engine Error Core

Structured errors for the expression engine and their diagnostic
rendering.

Example:
    from engine import Val, InvalidAddOperation, render

    err = InvalidAddOperation(Val.integer(1), Val.string("a"))
    print(render(err))
    # Engine Error: Could not find ADD handler for the provided types Int and Str
"""

from .values import Val
from .errors import (
    ErrorKind,
    ErrorFamily,
    EngineError,
    InvalidBinaryOperation,
    InvalidUnaryOperation,
    InvalidAddOperation,
    InvalidSubOperation,
    InvalidMulOperation,
    InvalidDivOperation,
    InvalidNegOperation,
    InvalidGreaterThanOperation,
    InvalidGreaterThanOrEqOperation,
    InvalidLessThanOperation,
    InvalidLessThanOrEqOperation,
    InvalidNotOperation,
    InvalidAndOperation,
    InvalidOrOperation,
    ScopeResolutionError,
    VariableAlreadyExists,
    VariableUndefined,
    FunctionAlreadyExists,
    FunctionUndefined,
    MismatchedParameterCount,
    MismatchedTypes,
    NotYetImplemented,
    Unknown,
    VARIANTS,
    error_class,
)
from .highlight import Role, Highlighter, AnsiHighlighter, PlainHighlighter, get_highlighter
from .render import HEADER_TEXT, render, report

__version__ = "0.1.0"

__all__ = [
    # Values
    'Val',

    # Errors
    'ErrorKind',
    'ErrorFamily',
    'EngineError',
    'InvalidBinaryOperation',
    'InvalidUnaryOperation',
    'InvalidAddOperation',
    'InvalidSubOperation',
    'InvalidMulOperation',
    'InvalidDivOperation',
    'InvalidNegOperation',
    'InvalidGreaterThanOperation',
    'InvalidGreaterThanOrEqOperation',
    'InvalidLessThanOperation',
    'InvalidLessThanOrEqOperation',
    'InvalidNotOperation',
    'InvalidAndOperation',
    'InvalidOrOperation',
    'ScopeResolutionError',
    'VariableAlreadyExists',
    'VariableUndefined',
    'FunctionAlreadyExists',
    'FunctionUndefined',
    'MismatchedParameterCount',
    'MismatchedTypes',
    'NotYetImplemented',
    'Unknown',
    'VARIANTS',
    'error_class',

    # Rendering
    'Role',
    'Highlighter',
    'AnsiHighlighter',
    'PlainHighlighter',
    'get_highlighter',
    'HEADER_TEXT',
    'render',
    'report',
]


def version() -> str:
    """Get engine version string."""
    return __version__
