"""
Engine Runtime Values

Python representation of the values the evaluator produces.
Errors borrow these to report the type names of failing operands.
"""

from typing import Any
from dataclasses import dataclass
import numpy as np


# Type tags
TYPE_NIL = 0
TYPE_BOOL = 1
TYPE_INT = 2
TYPE_FLOAT = 3
TYPE_STRING = 4

_INT64 = np.iinfo(np.int64)

TYPE_NAMES = {
    TYPE_NIL: 'Nil',
    TYPE_BOOL: 'Bool',
    TYPE_INT: 'Int',
    TYPE_FLOAT: 'Float',
    TYPE_STRING: 'Str',
}


@dataclass(frozen=True)
class Val:
    """
    A tagged runtime value.

    Numbers are kept as numpy scalars (64-bit int and float) so that
    arithmetic handlers see fixed-width semantics.
    """

    type: int
    data: Any

    @classmethod
    def nil(cls) -> 'Val':
        """Create a nil value."""
        return cls(TYPE_NIL, None)

    @classmethod
    def boolean(cls, value: bool) -> 'Val':
        """Create a boolean value."""
        return cls(TYPE_BOOL, bool(value))

    @classmethod
    def integer(cls, value: int) -> 'Val':
        """Create an integer value (64-bit)."""
        if not _INT64.min <= value <= _INT64.max:
            raise ValueError(f"Integer {value} is out of the 64-bit range")
        return cls(TYPE_INT, np.int64(value))

    @classmethod
    def number(cls, value: float) -> 'Val':
        """Create a float value (64-bit)."""
        return cls(TYPE_FLOAT, np.float64(value))

    @classmethod
    def string(cls, value: str) -> 'Val':
        """Create a string value."""
        return cls(TYPE_STRING, value)

    @classmethod
    def from_python(cls, value: Any) -> 'Val':
        """Convert a Python value to Val."""
        if isinstance(value, Val):
            return value
        elif value is None:
            return cls.nil()
        elif isinstance(value, bool):
            return cls.boolean(value)
        elif isinstance(value, (int, np.integer)):
            return cls.integer(value)
        elif isinstance(value, (float, np.floating)):
            return cls.number(value)
        elif isinstance(value, str):
            return cls.string(value)
        else:
            raise TypeError(f"Cannot convert {type(value)} to Val")

    def to_python(self) -> Any:
        """Convert Val to a plain Python value."""
        if self.type == TYPE_NIL:
            return None
        elif self.type == TYPE_BOOL:
            return bool(self.data)
        elif self.type == TYPE_INT:
            return int(self.data)
        elif self.type == TYPE_FLOAT:
            return float(self.data)
        else:
            return str(self.data)

    def type_name(self) -> str:
        """Name of this value's type, as shown in diagnostics."""
        return TYPE_NAMES.get(self.type, f'type{self.type}')

    def is_nil(self) -> bool:
        """Check if value is nil."""
        return self.type == TYPE_NIL

    def is_truthy(self) -> bool:
        """Check if value is truthy (not nil and not false)."""
        if self.type == TYPE_NIL:
            return False
        if self.type == TYPE_BOOL:
            return bool(self.data)
        return True

    def __repr__(self) -> str:
        return f"Val({self.type_name()}, {self.to_python()!r})"
