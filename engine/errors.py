"""
Engine Errors

Defines the closed set of exceptions the evaluator raises when an
operation cannot be performed for the operand types or identifiers
involved. Each error keeps its structured payload; turning it into a
message is the job of engine.render.
"""

import numbers
from enum import Enum, auto
from typing import Any, Dict, Optional, Type

from .values import Val


class ErrorKind(Enum):
    """Tag for every error variant."""

    # Operator kinds are named after their opcode token
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    NEG = auto()
    GREATER_THAN = auto()
    GREATER_THAN_OR_EQ = auto()
    LESS_THAN = auto()
    LESS_THAN_OR_EQ = auto()
    NOT = auto()
    AND = auto()
    OR = auto()

    # Scope resolution
    VARIABLE_ALREADY_EXISTS = auto()
    VARIABLE_UNDEFINED = auto()
    FUNCTION_ALREADY_EXISTS = auto()
    FUNCTION_UNDEFINED = auto()

    # Call-site contract
    MISMATCHED_PARAMETER_COUNT = auto()
    MISMATCHED_TYPES = auto()

    # Escape hatches
    NOT_YET_IMPLEMENTED = auto()
    UNKNOWN = auto()


class ErrorFamily(Enum):
    """Broad grouping of error kinds."""

    OPERATOR = auto()
    SCOPE = auto()
    CALL = auto()
    ESCAPE = auto()


def _require_val(field: str, value: Any) -> Val:
    if not isinstance(value, Val):
        raise TypeError(f"{field} must be a Val, got {type(value).__name__}")
    return value


def _require_name(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field} must be a str, got {type(value).__name__}")
    return value


def _require_count(field: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{field} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{field} must be non-negative, got {value!r}")
    return int(value)


class EngineError(Exception):
    """
    Base exception for all engine errors.

    The payload lives in ``args`` and is exposed through read-only
    properties on each variant. Attribute assignment is rejected, so an
    error cannot change after it is raised and pickles back to an equal
    payload.
    """

    kind: Optional[ErrorKind] = None
    family: Optional[ErrorFamily] = None

    # Written by the interpreter while raising, chaining or annotating
    _RUNTIME_ATTRS = frozenset({
        "__traceback__", "__cause__", "__context__",
        "__suppress_context__", "__notes__",
    })

    def __init__(self, *payload: Any):
        if self.kind is None:
            raise TypeError(
                f"{type(self).__name__} is abstract; raise one of its variants")
        super().__init__(*payload)

    def payload(self) -> Dict[str, Any]:
        """Get the structured payload as a dict."""
        return {}

    def message(self, highlighter=None) -> str:
        """
        Render this error as a diagnostic string.

        Args:
            highlighter: Highlight backend; ANSI colors when omitted

        Returns:
            The rendered diagnostic
        """
        from .render import render
        return render(self, highlighter)

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in self._RUNTIME_ATTRS:
            raise AttributeError(f"{type(self).__name__} is immutable; cannot set {name!r}")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name not in self._RUNTIME_ATTRS:
            raise AttributeError(f"{type(self).__name__} is immutable; cannot delete {name!r}")
        super().__delattr__(name)

    def __str__(self) -> str:
        return self.message()


# =============================================================================
# Operator dispatch misses
# =============================================================================

class InvalidBinaryOperation(EngineError):
    """No handler exists for a binary operator and this pair of operands."""

    family = ErrorFamily.OPERATOR

    def __init__(self, x: Val, y: Val):
        super().__init__(_require_val('x', x), _require_val('y', y))

    @property
    def opcode(self) -> str:
        return self.kind.name

    @property
    def x(self) -> Val:
        return self.args[0]

    @property
    def y(self) -> Val:
        return self.args[1]

    def payload(self) -> Dict[str, Any]:
        return {'x': self.x, 'y': self.y}


class InvalidUnaryOperation(EngineError):
    """No handler exists for a unary operator and this operand."""

    family = ErrorFamily.OPERATOR

    def __init__(self, x: Val):
        super().__init__(_require_val('x', x))

    @property
    def opcode(self) -> str:
        return self.kind.name

    @property
    def x(self) -> Val:
        return self.args[0]

    def payload(self) -> Dict[str, Any]:
        return {'x': self.x}


class InvalidAddOperation(InvalidBinaryOperation):
    """Raised when ADD has no handler for the operand types."""

    kind = ErrorKind.ADD


class InvalidSubOperation(InvalidBinaryOperation):
    """Raised when SUB has no handler for the operand types."""

    kind = ErrorKind.SUB


class InvalidMulOperation(InvalidBinaryOperation):
    """Raised when MUL has no handler for the operand types."""

    kind = ErrorKind.MUL


class InvalidDivOperation(InvalidBinaryOperation):
    """Raised when DIV has no handler for the operand types."""

    kind = ErrorKind.DIV


class InvalidNegOperation(InvalidUnaryOperation):
    """Raised when NEG has no handler for the operand type."""

    kind = ErrorKind.NEG


class InvalidGreaterThanOperation(InvalidBinaryOperation):
    """Raised when GREATER_THAN has no handler for the operand types."""

    kind = ErrorKind.GREATER_THAN


class InvalidGreaterThanOrEqOperation(InvalidBinaryOperation):
    """Raised when GREATER_THAN_OR_EQ has no handler for the operand types."""

    kind = ErrorKind.GREATER_THAN_OR_EQ


class InvalidLessThanOperation(InvalidBinaryOperation):
    """Raised when LESS_THAN has no handler for the operand types."""

    kind = ErrorKind.LESS_THAN


class InvalidLessThanOrEqOperation(InvalidBinaryOperation):
    """Raised when LESS_THAN_OR_EQ has no handler for the operand types."""

    kind = ErrorKind.LESS_THAN_OR_EQ


class InvalidNotOperation(InvalidUnaryOperation):
    """Raised when NOT has no handler for the operand type."""

    kind = ErrorKind.NOT


class InvalidAndOperation(InvalidBinaryOperation):
    """Raised when AND has no handler for the operand types."""

    kind = ErrorKind.AND


class InvalidOrOperation(InvalidBinaryOperation):
    """Raised when OR has no handler for the operand types."""

    kind = ErrorKind.OR


# =============================================================================
# Scope resolution
# =============================================================================

class ScopeResolutionError(EngineError):
    """An identifier clashed with, or was missing from, the scope."""

    family = ErrorFamily.SCOPE
    subject: str = ""

    @property
    def name(self) -> str:
        """The identifier exactly as it was looked up or declared."""
        return self.args[0]


class VariableAlreadyExists(ScopeResolutionError):
    """Raised when binding a variable name that is already bound in the scope."""

    kind = ErrorKind.VARIABLE_ALREADY_EXISTS
    subject = "variable"

    def __init__(self, variable_name: str):
        super().__init__(_require_name('variable_name', variable_name))

    @property
    def variable_name(self) -> str:
        return self.args[0]

    def payload(self) -> Dict[str, Any]:
        return {'variable_name': self.variable_name}


class VariableUndefined(ScopeResolutionError):
    """Raised when resolving a variable name that is not bound in the scope."""

    kind = ErrorKind.VARIABLE_UNDEFINED
    subject = "variable"

    def __init__(self, variable_name: str):
        super().__init__(_require_name('variable_name', variable_name))

    @property
    def variable_name(self) -> str:
        return self.args[0]

    def payload(self) -> Dict[str, Any]:
        return {'variable_name': self.variable_name}


class FunctionAlreadyExists(ScopeResolutionError):
    """Raised when defining a function name that is already defined in the scope."""

    kind = ErrorKind.FUNCTION_ALREADY_EXISTS
    subject = "function"

    def __init__(self, function_name: str):
        super().__init__(_require_name('function_name', function_name))

    @property
    def function_name(self) -> str:
        return self.args[0]

    def payload(self) -> Dict[str, Any]:
        return {'function_name': self.function_name}


class FunctionUndefined(ScopeResolutionError):
    """Raised when calling a name that has no function binding."""

    kind = ErrorKind.FUNCTION_UNDEFINED
    subject = "function"

    def __init__(self, function_name: str):
        super().__init__(_require_name('function_name', function_name))

    @property
    def function_name(self) -> str:
        return self.args[0]

    def payload(self) -> Dict[str, Any]:
        return {'function_name': self.function_name}


# =============================================================================
# Call-site contract
# =============================================================================

class MismatchedParameterCount(EngineError):
    """A call passed a different number of arguments than the function declares."""

    kind = ErrorKind.MISMATCHED_PARAMETER_COUNT
    family = ErrorFamily.CALL

    def __init__(self, actual: int, expected: int):
        super().__init__(_require_count('actual', actual),
                         _require_count('expected', expected))

    @property
    def actual(self) -> int:
        return self.args[0]

    @property
    def expected(self) -> int:
        return self.args[1]

    def payload(self) -> Dict[str, Any]:
        return {'actual': self.actual, 'expected': self.expected}


class MismatchedTypes(EngineError):
    """
    A value of the wrong type was used where a specific type is required.

    ``expected`` is a representative value of the required type, not just
    its name.
    """

    kind = ErrorKind.MISMATCHED_TYPES
    family = ErrorFamily.CALL

    def __init__(self, actual: Val, expected: Val):
        super().__init__(_require_val('actual', actual),
                         _require_val('expected', expected))

    @property
    def actual(self) -> Val:
        return self.args[0]

    @property
    def expected(self) -> Val:
        return self.args[1]

    def payload(self) -> Dict[str, Any]:
        return {'actual': self.actual, 'expected': self.expected}


# =============================================================================
# Escape hatches
# =============================================================================

class NotYetImplemented(EngineError):
    """Raised when a recognized but unimplemented feature is reached."""

    kind = ErrorKind.NOT_YET_IMPLEMENTED
    family = ErrorFamily.ESCAPE

    def __init__(self):
        super().__init__()


class Unknown(EngineError):
    """Raised for failures that fit no other kind."""

    kind = ErrorKind.UNKNOWN
    family = ErrorFamily.ESCAPE

    def __init__(self):
        super().__init__()


def _collect_variants(base: type) -> Dict[ErrorKind, Type[EngineError]]:
    variants = {}
    for cls in base.__subclasses__():
        if 'kind' in vars(cls) and cls.kind is not None:
            variants[cls.kind] = cls
        variants.update(_collect_variants(cls))
    return variants


# Maps each kind to its exception class
VARIANTS: Dict[ErrorKind, Type[EngineError]] = _collect_variants(EngineError)


def error_class(kind: ErrorKind) -> Type[EngineError]:
    """Get the exception class raised for an error kind."""
    return VARIANTS[kind]
