"""
Domain types and column definitions for relations.
"""

import math
from enum import Enum
from typing import Any, Dict
from dataclasses import dataclass

from .errors import UnknownDomainType, ValueConversionError


INT32_MIN, INT32_MAX = -2 ** 31, 2 ** 31 - 1
INT64_MIN, INT64_MAX = -2 ** 63, 2 ** 63 - 1


class Domain(Enum):
    """Scalar value kinds a column may hold."""
    INT32 = "Int32"
    INT64 = "Int64"
    FLOAT32 = "Float32"
    FLOAT64 = "Float64"
    CHAR = "Char"
    STRING = "String"

    @classmethod
    def from_name(cls, name: str) -> 'Domain':
        """Resolve a domain token such as 'Integer' or 'Double'."""
        try:
            return DOMAIN_NAMES[name]
        except KeyError:
            raise UnknownDomainType(f"Unknown domain type '{name}'") from None

    @property
    def family(self) -> str:
        """Values of domains in the same family compare naturally."""
        if self in (Domain.INT32, Domain.INT64):
            return "integral"
        if self in (Domain.FLOAT32, Domain.FLOAT64):
            return "floating"
        return "textual"

    def comparable_with(self, other: 'Domain') -> bool:
        return self.family == other.family

    def validate(self, value: Any) -> bool:
        """Validate a value against this domain."""
        if self is Domain.INT32:
            return _is_int(value) and INT32_MIN <= value <= INT32_MAX
        elif self is Domain.INT64:
            return _is_int(value) and INT64_MIN <= value <= INT64_MAX
        elif self in (Domain.FLOAT32, Domain.FLOAT64):
            return isinstance(value, float)
        elif self is Domain.CHAR:
            return isinstance(value, str) and len(value) == 1
        elif self is Domain.STRING:
            return isinstance(value, str)
        return False

    def parse(self, literal: str) -> Any:
        """
        Convert a text literal into a value of this domain.

        Raises:
            ValueConversionError: If the literal does not convert.
        """
        try:
            if self.family == "integral":
                value = int(literal)
            elif self.family == "floating":
                value = float(literal)
            else:
                value = literal
        except (TypeError, ValueError):
            raise ValueConversionError(
                f"Cannot convert '{literal}' to {self.value}") from None

        if not self.validate(value):
            raise ValueConversionError(f"Value '{literal}' is out of range for {self.value}")
        return value

    @staticmethod
    def compare(a: Any, b: Any) -> int:
        """Natural ordering: -1, 0 or 1. NaN sorts above every other float."""
        a_nan, b_nan = _is_nan(a), _is_nan(b)
        if a_nan or b_nan:
            return int(a_nan) - int(b_nan)
        if a == b:
            return 0
        return -1 if a < b else 1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


# Accepted spellings for each domain in schema specification strings
DOMAIN_NAMES: Dict[str, Domain] = {
    "Int32": Domain.INT32,
    "Integer": Domain.INT32,
    "Int64": Domain.INT64,
    "Long": Domain.INT64,
    "Float32": Domain.FLOAT32,
    "Float": Domain.FLOAT32,
    "Float64": Domain.FLOAT64,
    "Double": Domain.FLOAT64,
    "Char": Domain.CHAR,
    "Character": Domain.CHAR,
    "String": Domain.STRING,
}


@dataclass
class Column:
    """Represents a single attribute of a schema."""
    name: str
    domain: Domain
    is_key: bool = False

    def validate_value(self, value: Any) -> bool:
        """Validate a value against the column's domain."""
        return self.domain.validate(value)
