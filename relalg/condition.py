"""
Simple comparison conditions used by selection and theta join.

A condition is three tokens, ``attribute op value``, for example
``bname == 'Alps'`` or ``balance >= 1500``.
"""

import operator
import shlex
from dataclasses import dataclass
from typing import Any, Callable, Dict, Sequence

from .errors import MalformedCondition, UnsupportedOperator
from .schema import Schema
from .types import Domain

# Maps an operator to a test on the result of Domain.compare
OPERATORS: Dict[str, Callable[[int, int], bool]] = {
    '==': operator.eq,
    '!=': operator.ne,
    '<': operator.lt,
    '<=': operator.le,
    '>': operator.gt,
    '>=': operator.ge,
}


def satisfies(op: str, left: Any, right: Any) -> bool:
    """Does ``left op right`` hold under the natural ordering?"""
    try:
        test = OPERATORS[op]
    except KeyError:
        raise UnsupportedOperator(f"Unknown operator '{op}'") from None
    return test(Domain.compare(left, right), 0)


def split_condition(condition: str) -> Sequence[str]:
    """
    Split a condition into its three tokens.

    Quoted literals may contain spaces and keep their quotes.
    """
    try:
        tokens = shlex.split(condition, posix=False)
    except ValueError:
        raise MalformedCondition(f"Unbalanced quotes in '{condition}'") from None
    if len(tokens) != 3:
        raise MalformedCondition(
            f"Expected 'attribute op value', got '{condition}'")
    if tokens[1] not in OPERATORS:
        raise UnsupportedOperator(f"Unknown operator '{tokens[1]}'")
    return tokens


def strip_quotes(literal: str) -> str:
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in ("'", '"'):
        return literal[1:-1]
    return literal


@dataclass(frozen=True)
class Condition:
    """A parsed ``attribute op literal`` selection condition."""
    column: int
    op: str
    value: Any

    @classmethod
    def parse(cls, condition: str, schema: Schema) -> 'Condition':
        """
        Resolve the attribute and convert the literal to its domain.

        Raises:
            MalformedCondition: Wrong number of tokens.
            UnknownAttribute: The attribute is not in the schema.
            UnsupportedOperator: The operator is not recognised.
            ValueConversionError: The literal does not fit the domain.
        """
        attr, op, literal = split_condition(condition)
        column = schema.position(attr)
        value = schema.domains[column].parse(strip_quotes(literal))
        return cls(column, op, value)

    def __call__(self, row: Sequence[Any]) -> bool:
        return satisfies(self.op, row[self.column], self.value)
