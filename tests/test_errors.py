"""
Engine Error Tests

Tests for the error taxonomy: payloads, immutability, families and
propagation.
"""

import pickle
import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from engine import errors as E
from engine.errors import ErrorKind, ErrorFamily, EngineError, VARIANTS, error_class
from engine.highlight import PlainHighlighter
from engine.values import Val


BINARY = [
    (E.InvalidAddOperation, "ADD"),
    (E.InvalidSubOperation, "SUB"),
    (E.InvalidMulOperation, "MUL"),
    (E.InvalidDivOperation, "DIV"),
    (E.InvalidGreaterThanOperation, "GREATER_THAN"),
    (E.InvalidGreaterThanOrEqOperation, "GREATER_THAN_OR_EQ"),
    (E.InvalidLessThanOperation, "LESS_THAN"),
    (E.InvalidLessThanOrEqOperation, "LESS_THAN_OR_EQ"),
    (E.InvalidAndOperation, "AND"),
    (E.InvalidOrOperation, "OR"),
]

UNARY = [
    (E.InvalidNegOperation, "NEG"),
    (E.InvalidNotOperation, "NOT"),
]


# =============================================================================
# Variant coverage
# =============================================================================

class TestVariants:
    """Every kind maps to exactly one exception class."""

    def test_every_kind_has_a_class(self):
        assert set(VARIANTS) == set(ErrorKind)

    def test_error_class_lookup(self):
        assert error_class(ErrorKind.ADD) is E.InvalidAddOperation
        assert error_class(ErrorKind.UNKNOWN) is E.Unknown

    def test_every_variant_is_an_engine_error(self):
        for cls in VARIANTS.values():
            assert issubclass(cls, EngineError)
            assert issubclass(cls, Exception)

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            EngineError()
        with pytest.raises(TypeError):
            E.InvalidBinaryOperation(Val.integer(1), Val.integer(2))


# =============================================================================
# Payloads
# =============================================================================

class TestOperatorErrors:
    """Operator dispatch misses."""

    @pytest.mark.parametrize("cls,opcode", BINARY)
    def test_binary_keeps_operands_in_order(self, cls, opcode):
        x, y = Val.integer(1), Val.string("a")
        err = cls(x, y)
        assert err.x is x
        assert err.y is y
        assert err.opcode == opcode
        assert err.family == ErrorFamily.OPERATOR
        assert err.payload() == {'x': x, 'y': y}

    @pytest.mark.parametrize("cls,opcode", UNARY)
    def test_unary_keeps_operand(self, cls, opcode):
        x = Val.string("a")
        err = cls(x)
        assert err.x is x
        assert err.opcode == opcode
        assert err.payload() == {'x': x}

    def test_binary_requires_two_operands(self):
        with pytest.raises(TypeError):
            E.InvalidAddOperation(Val.integer(1))

    def test_operands_must_be_values(self):
        with pytest.raises(TypeError):
            E.InvalidAddOperation(1, "a")
        with pytest.raises(TypeError):
            E.InvalidNegOperation(None)


class TestScopeErrors:
    """Scope resolution errors."""

    @pytest.mark.parametrize("cls,subject", [
        (E.VariableAlreadyExists, "variable"),
        (E.VariableUndefined, "variable"),
    ])
    def test_variable_errors(self, cls, subject):
        err = cls("my_var")
        assert err.variable_name == "my_var"
        assert err.name == "my_var"
        assert err.subject == subject
        assert err.family == ErrorFamily.SCOPE
        assert err.payload() == {'variable_name': "my_var"}

    @pytest.mark.parametrize("cls", [E.FunctionAlreadyExists, E.FunctionUndefined])
    def test_function_errors(self, cls):
        err = cls("fib")
        assert err.function_name == "fib"
        assert err.subject == "function"
        assert err.payload() == {'function_name': "fib"}

    def test_identifier_is_kept_verbatim(self):
        name = 'weird "name"\n\t'
        assert E.VariableUndefined(name).variable_name == name

    def test_identifier_must_be_string(self):
        with pytest.raises(TypeError):
            E.VariableUndefined(42)


class TestCallErrors:
    """Call-site contract violations."""

    def test_parameter_count(self):
        err = E.MismatchedParameterCount(actual=1, expected=3)
        assert err.actual == 1
        assert err.expected == 3
        assert err.family == ErrorFamily.CALL
        assert err.payload() == {'actual': 1, 'expected': 3}

    def test_parameter_count_requires_both_sides(self):
        with pytest.raises(TypeError):
            E.MismatchedParameterCount(1)

    @pytest.mark.parametrize("actual,expected", [(1.5, 2), (True, 2), (1, "3")])
    def test_parameter_count_rejects_non_integers(self, actual, expected):
        with pytest.raises(TypeError):
            E.MismatchedParameterCount(actual, expected)

    @pytest.mark.parametrize("actual,expected", [(-1, 2), (1, -3)])
    def test_parameter_count_rejects_negative_counts(self, actual, expected):
        with pytest.raises(ValueError):
            E.MismatchedParameterCount(actual, expected)

    def test_parameter_count_accepts_numpy_integers(self):
        err = E.MismatchedParameterCount(np.int64(1), np.uint8(3))
        assert err.payload() == {'actual': 1, 'expected': 3}
        assert type(err.expected) is int

    def test_mismatched_types(self):
        actual, expected = Val.string("x"), Val.integer(0)
        err = E.MismatchedTypes(actual=actual, expected=expected)
        assert err.actual is actual
        assert err.expected is expected

    def test_mismatched_types_requires_values(self):
        with pytest.raises(TypeError):
            E.MismatchedTypes(Val.string("x"), "Int")


class TestEscapeErrors:
    """Payload-free errors."""

    @pytest.mark.parametrize("cls", [E.NotYetImplemented, E.Unknown])
    def test_no_payload(self, cls):
        err = cls()
        assert err.args == ()
        assert err.payload() == {}
        assert err.family == ErrorFamily.ESCAPE


# =============================================================================
# Immutability and propagation
# =============================================================================

class TestImmutability:
    """Errors cannot change once constructed."""

    def test_payload_is_read_only(self):
        err = E.InvalidAddOperation(Val.integer(1), Val.integer(2))
        with pytest.raises(AttributeError):
            err.x = Val.string("b")

    def test_count_is_read_only(self):
        err = E.MismatchedParameterCount(1, 3)
        with pytest.raises(AttributeError):
            err.expected = 4

    def test_args_cannot_be_replaced(self):
        err = E.InvalidAddOperation(Val.integer(1), Val.string("a"))
        with pytest.raises(AttributeError):
            err.args = (Val.nil(), Val.nil())
        assert err.x.type_name() == "Int"
        assert err.y.type_name() == "Str"

    def test_kind_cannot_be_reassigned(self):
        err = E.VariableUndefined("x")
        with pytest.raises(AttributeError):
            err.kind = ErrorKind.VARIABLE_ALREADY_EXISTS
        assert err.kind == ErrorKind.VARIABLE_UNDEFINED
        assert "undefined" in err.message(PlainHighlighter())

    @pytest.mark.parametrize("name,value", [
        ("family", ErrorFamily.ESCAPE),
        ("subject", "function"),
        ("extra", 1),
    ])
    def test_tags_cannot_be_reassigned(self, name, value):
        err = E.VariableAlreadyExists("x")
        with pytest.raises(AttributeError):
            setattr(err, name, value)
        assert err.family == ErrorFamily.SCOPE
        assert err.subject == "variable"

    @pytest.mark.parametrize("name", ["args", "kind"])
    def test_attributes_cannot_be_deleted(self, name):
        err = E.Unknown()
        with pytest.raises(AttributeError):
            delattr(err, name)

    def test_interpreter_attributes_still_writable(self):
        err = E.NotYetImplemented()
        err.__cause__ = ValueError("root")
        err.__suppress_context__ = True
        err.__notes__ = ["while evaluating main"]
        assert err.with_traceback(None) is err
        assert isinstance(err.__cause__, ValueError)
        assert err.__notes__ == ["while evaluating main"]

    def test_pickle_keeps_payload(self):
        err = E.MismatchedTypes(Val.string("x"), Val.integer(0))
        restored = pickle.loads(pickle.dumps(err))
        assert type(restored) is E.MismatchedTypes
        assert restored.payload() == err.payload()


class TestPropagation:
    """Errors behave like ordinary exceptions."""

    def test_caught_as_engine_error(self):
        with pytest.raises(EngineError) as info:
            raise E.VariableUndefined("x")
        assert info.value.kind == ErrorKind.VARIABLE_UNDEFINED

    def test_caught_as_family_base(self):
        with pytest.raises(E.InvalidBinaryOperation):
            raise E.InvalidDivOperation(Val.string("a"), Val.nil())

    def test_wrapping_keeps_cause(self):
        class HostError(Exception):
            pass

        def evaluate():
            raise E.FunctionUndefined("main")

        with pytest.raises(HostError) as info:
            try:
                evaluate()
            except EngineError as err:
                raise HostError("evaluation failed") from err

        cause = info.value.__cause__
        assert isinstance(cause, E.FunctionUndefined)
        assert cause.function_name == "main"
