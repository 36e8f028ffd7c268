"""
In-memory relational tables and the relational algebra operators over them.

A table is built in two phases. While it is being populated, ``insert`` adds
rows in place and returns the table for chaining::

    deposit = Table("deposit", "bname accno cname balance",
                    "String Integer String Double", "accno")
    deposit.insert(("Downtown", 901, "Peter", 1000.0)) \\
           .insert(("Main", 902, "Paul", 2000.0))

Once queried it is treated as immutable: ``project``, ``select``, ``union``,
``minus`` and the joins never modify their operands and always return a
freshly named table with its own row list. Invalid input is reported through
:mod:`relalg.diagnostics` and the operator returns ``None``.
"""

import logging
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple, Union

from .condition import Condition
from .diagnostics import flaw
from .errors import (
    RelAlgError,
    SchemaError,
    SchemaIncompatibility,
    TupleTypeMismatch,
)
from .join import Equi, JoinKind, Natural, Theta, nested_loop_join
from .naming import NameCounter, default_counter
from .render import CELL_WIDTH, render_table
from .schema import Schema
from .types import Domain

logger = logging.getLogger(__name__)

Row = Tuple[Any, ...]
Names = Union[str, Sequence[str]]


def _names(value: Names) -> Tuple[str, ...]:
    return tuple(value.split()) if isinstance(value, str) else tuple(value)


def _domains(value: Union[str, Sequence[Union[str, Domain]]]) -> Tuple[Domain, ...]:
    if isinstance(value, str):
        value = value.split()
    return tuple(d if isinstance(d, Domain) else Domain.from_name(d) for d in value)


def _failed(method: str, error: RelAlgError) -> None:
    flaw(method, error)
    return None


class Table:
    """A named relation: a schema plus an ordered list of tuples."""

    def __init__(self, name: str, attributes: Names,
                 domains: Union[str, Sequence[Union[str, Domain]]],
                 key: Names = "", namer: Optional[NameCounter] = None):
        """
        Create an empty table.

        Args:
            name: Display name of the relation.
            attributes: Attribute names, as a sequence or space-separated string.
            domains: Domains (or domain names) parallel to ``attributes``.
            key: Primary key attributes.
            namer: Counter for naming derived tables (shared one by default).

        Raises:
            UnknownDomainType: If a domain name is not recognised.
            SchemaError: If the specification is inconsistent.
        """
        self.name = name
        if all(isinstance(spec, str) for spec in (attributes, domains, key)):
            self.schema = Schema.parse(attributes, domains, key)
        else:
            self.schema = Schema(_names(attributes), _domains(domains), _names(key))
        self.namer = namer or default_counter
        self._rows: List[Row] = []

    @classmethod
    def from_spec(cls, name: str, attributes: str, domains: str, key: str = "",
                  namer: Optional[NameCounter] = None) -> Optional['Table']:
        """Create a table from specification strings, reporting failures."""
        try:
            return cls(name, attributes, domains, key, namer)
        except RelAlgError as e:
            return _failed("from_spec", e)

    @classmethod
    def from_schema(cls, name: str, schema: Schema, rows: Sequence[Row] = (),
                    namer: Optional[NameCounter] = None) -> 'Table':
        table = cls.__new__(cls)
        table.name = name
        table.schema = schema
        table.namer = namer or default_counter
        table._rows = list(rows)
        return table

    # ------------------------------------------------------------------
    # Accessors

    @property
    def attributes(self) -> Tuple[str, ...]:
        return self.schema.attributes

    @property
    def domains(self) -> Tuple[Domain, ...]:
        return self.schema.domains

    @property
    def key(self) -> Tuple[str, ...]:
        return self.schema.key

    @property
    def col(self):
        """Mapping from attribute name to column number."""
        return self.schema.index

    @property
    def rows(self) -> Tuple[Row, ...]:
        return tuple(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(tuple(self._rows))

    def __repr__(self) -> str:
        return f"Table({self.name!r}, {list(self.attributes)}, rows={len(self._rows)})"

    def __str__(self) -> str:
        return render_table(self)

    def show(self, width: int = CELL_WIDTH) -> None:
        """Print this table."""
        print(render_table(self, width))

    # ------------------------------------------------------------------
    # Data manipulation

    def insert(self, tup: Sequence[Any]) -> 'Table':
        """
        Append a tuple after checking it against the schema.

        A mismatching tuple is reported and not added.

        Returns:
            The table, to allow chaining.
        """
        try:
            self._rows.append(self._check_tuple(tuple(tup)))
        except RelAlgError as e:
            flaw("insert", e)
        return self

    def _check_tuple(self, tup: Row) -> Row:
        if len(tup) != self.schema.arity:
            raise TupleTypeMismatch(
                f"Tuple {tup} has {len(tup)} values, {self.name} has {self.schema.arity} attributes")
        for attr, domain, value in zip(self.attributes, self.domains, tup):
            if not domain.validate(value):
                raise TupleTypeMismatch(
                    f"Value {value!r} for '{attr}' is not a valid {domain.value}")
        return tup

    # ------------------------------------------------------------------
    # Relational algebra

    def _derive(self, schema: Schema, rows: List[Row]) -> 'Table':
        name = self.namer.derive(self.name)
        logger.debug("%s -> %s (%d rows)", self.name, name, len(rows))
        return Table.from_schema(name, schema, rows, self.namer)

    def project(self, attributes: Names) -> Optional['Table']:
        """
        Keep only the given attributes, removing duplicate rows.

        The operand's key is kept when it is contained in the projection,
        otherwise all projected attributes form the new key.

        Usage: deposit.project("bname cname")
        """
        try:
            attrs = _names(attributes)
            if not attrs:
                raise SchemaError("Projection needs at least one attribute")
            cols = self.schema.positions(attrs)
            key = self.key if set(self.key) <= set(attrs) else attrs
            schema = Schema(attrs, tuple(self.domains[c] for c in cols), key)
        except RelAlgError as e:
            return _failed("project", e)

        rows = dict.fromkeys(tuple(t[c] for c in cols) for t in self._rows)
        return self._derive(schema, list(rows))

    def select(self, condition: Union[str, Callable[[Row], bool]]) -> Optional['Table']:
        """
        Keep the tuples satisfying a predicate or a simple condition.

        Usage:
            deposit.select(lambda t: t[deposit.col["bname"]] == "Alps")
            deposit.select("bname == 'Alps'")
        """
        if callable(condition):
            predicate = condition
        else:
            try:
                predicate = Condition.parse(condition, self.schema)
            except RelAlgError as e:
                return _failed("select", e)

        return self._derive(self.schema, [t for t in self._rows if predicate(t)])

    def compatible(self, table2: 'Table') -> bool:
        """Do both tables have the same arity and domains, position by position?"""
        try:
            self._check_compatible(table2)
        except SchemaIncompatibility as e:
            return flaw("compatible", e)
        return True

    def _check_compatible(self, table2: 'Table') -> None:
        if self.schema.arity != table2.schema.arity:
            raise SchemaIncompatibility(
                f"tables have different arity ({self.schema.arity} vs {table2.schema.arity})")
        for j, (d1, d2) in enumerate(zip(self.domains, table2.domains)):
            if d1 is not d2:
                raise SchemaIncompatibility(
                    f"tables disagree on domain {j} ({d1.value} vs {d2.value})")

    def union(self, table2: 'Table') -> Optional['Table']:
        """
        Set union: this table's tuples, then the other's not already present.

        Usage: deposit.union(loan)
        """
        try:
            self._check_compatible(table2)
        except SchemaIncompatibility as e:
            return _failed("union", e)

        rows = dict.fromkeys(self._rows)
        rows.update(dict.fromkeys(table2._rows))
        return self._derive(self.schema, list(rows))

    def minus(self, table2: 'Table') -> Optional['Table']:
        """
        Set difference: this table's tuples that do not occur in the other.

        Usage: deposit.minus(loan)
        """
        try:
            self._check_compatible(table2)
        except SchemaIncompatibility as e:
            return _failed("minus", e)

        exclude = set(table2._rows)
        rows = [t for t in dict.fromkeys(self._rows) if t not in exclude]
        return self._derive(self.schema, rows)

    def join(self, table2: 'Table', kind: Optional[JoinKind] = None) -> Optional['Table']:
        """
        Join this table with table2 using a nested loop join.

        Args:
            table2: The right-hand operand.
            kind: ``Equi``, ``Theta`` or ``Natural`` (the default).
        """
        kind = kind or Natural()
        try:
            plan = kind.plan(self.schema, table2.schema)
        except RelAlgError as e:
            return _failed("join", e)

        return self._derive(plan.schema, nested_loop_join(self._rows, table2._rows, plan))

    def equi_join(self, attributes1: Names, attributes2: Names,
                  table2: 'Table') -> Optional['Table']:
        """
        Join requiring attributes1 to equal attributes2. Right-hand
        attributes whose names clash are suffixed with "2".

        Usage: deposit.equi_join("cname", "cname", customer)
        """
        return self.join(table2, Equi(attributes1, attributes2))

    def theta_join(self, condition: str, table2: 'Table') -> Optional['Table']:
        """
        Join on ``attribute1 op attribute2``.

        Usage: deposit.theta_join("cname == cname", customer)
        """
        try:
            kind = Theta.parse(condition)
        except RelAlgError as e:
            return _failed("join", e)
        return self.join(table2, kind)

    def natural_join(self, table2: 'Table') -> Optional['Table']:
        """
        Join on all shared attributes, keeping one copy of each.

        Usage: deposit.natural_join(customer)
        """
        return self.join(table2, Natural())
