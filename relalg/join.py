"""
Join variants and the nested loop join that evaluates them.

Every variant turns the two operand schemas into a :class:`JoinPlan`: the
output schema, a match predicate over a (left, right) row pair and the
function that builds the output row. The loop itself is shared.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple, Union

from .condition import satisfies, split_condition
from .errors import DomainMismatch, SchemaError
from .schema import Schema

logger = logging.getLogger(__name__)

Row = Tuple[Any, ...]

# Appended to right-hand attribute names that clash with the left schema
SUFFIX = "2"


@dataclass(frozen=True)
class JoinPlan:
    schema: Schema
    matches: Callable[[Row, Row], bool]
    assemble: Callable[[Row, Row], Row]


def _split(attrs: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    return tuple(attrs.split()) if isinstance(attrs, str) else tuple(attrs)


def _check_domains(left: Schema, i: int, right: Schema, j: int) -> None:
    if not left.domains[i].comparable_with(right.domains[j]):
        raise DomainMismatch(
            f"Cannot compare {left.attributes[i]} ({left.domains[i].value}) "
            f"with {right.attributes[j]} ({right.domains[j].value})")


def disambiguate(left: Sequence[str], right: Sequence[str]) -> List[str]:
    """Rename right-hand attributes already used on the left."""
    taken = set(left)
    names = []
    for name in right:
        while name in taken:
            name += SUFFIX
        taken.add(name)
        names.append(name)
    return names


def concatenated_schema(left: Schema, right: Schema) -> Schema:
    """Left attributes followed by (renamed) right attributes, left key."""
    return Schema(
        left.attributes + tuple(disambiguate(left.attributes, right.attributes)),
        left.domains + right.domains,
        left.key,
    )


def _concat(t: Row, u: Row) -> Row:
    return t + u


@dataclass(frozen=True)
class Equi:
    """Equality of each attribute in ``attrs1`` with its partner in ``attrs2``."""
    attrs1: Tuple[str, ...]
    attrs2: Tuple[str, ...]

    def __init__(self, attrs1: Union[str, Sequence[str]], attrs2: Union[str, Sequence[str]]):
        object.__setattr__(self, 'attrs1', _split(attrs1))
        object.__setattr__(self, 'attrs2', _split(attrs2))

    def plan(self, left: Schema, right: Schema) -> JoinPlan:
        if not self.attrs1 or len(self.attrs1) != len(self.attrs2):
            raise SchemaError(
                f"Join attribute lists {list(self.attrs1)} and {list(self.attrs2)} "
                "must be non-empty and of equal length")
        cols1 = left.positions(self.attrs1)
        cols2 = right.positions(self.attrs2)
        for i, j in zip(cols1, cols2):
            _check_domains(left, i, right, j)

        pairs = list(zip(cols1, cols2))

        def matches(t: Row, u: Row) -> bool:
            return all(t[i] == u[j] for i, j in pairs)

        return JoinPlan(concatenated_schema(left, right), matches, _concat)


@dataclass(frozen=True)
class Theta:
    """Comparison ``attr1 op attr2`` between one left and one right attribute."""
    attr1: str
    op: str
    attr2: str

    @classmethod
    def parse(cls, condition: str) -> 'Theta':
        return cls(*split_condition(condition))

    def plan(self, left: Schema, right: Schema) -> JoinPlan:
        i = left.position(self.attr1)
        j = right.position(self.attr2)
        _check_domains(left, i, right, j)
        op = self.op

        def matches(t: Row, u: Row) -> bool:
            return satisfies(op, t[i], u[j])

        return JoinPlan(concatenated_schema(left, right), matches, _concat)


@dataclass(frozen=True)
class Natural:
    """Equality on all shared attributes; shared columns appear once."""

    def plan(self, left: Schema, right: Schema) -> JoinPlan:
        shared = [a for a in left.attributes if a in right.index]
        left_only = [a for a in left.attributes if a not in right.index]
        right_only = [a for a in right.attributes if a not in left.index]

        pairs = [(left.index[a], right.index[a]) for a in shared]
        for i, j in pairs:
            _check_domains(left, i, right, j)

        left_cols = [i for i, _ in pairs] + [left.index[a] for a in left_only]
        right_cols = [right.index[a] for a in right_only]

        schema = Schema(
            tuple(shared + left_only + right_only),
            tuple(left.domains[i] for i in left_cols) + tuple(right.domains[j] for j in right_cols),
            left.key,
        )

        def matches(t: Row, u: Row) -> bool:
            return all(t[i] == u[j] for i, j in pairs)

        def assemble(t: Row, u: Row) -> Row:
            return tuple(t[i] for i in left_cols) + tuple(u[j] for j in right_cols)

        return JoinPlan(schema, matches, assemble)


JoinKind = Union[Equi, Theta, Natural]


def nested_loop_join(left_rows: Sequence[Row], right_rows: Sequence[Row],
                     plan: JoinPlan) -> List[Row]:
    """Compare every left row with every right row, keeping matched pairs."""
    rows = []
    for t in left_rows:
        for u in right_rows:
            if plan.matches(t, u):
                rows.append(plan.assemble(t, u))
    logger.debug("nested loop join: %d x %d -> %d rows",
                 len(left_rows), len(right_rows), len(rows))
    return rows
