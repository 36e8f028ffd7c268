"""
Query executor that processes parsed statements against an in-memory catalog.
"""

import logging
from typing import Dict, List, Any, Optional

from .condition import strip_quotes
from .diagnostics import diagnostics
from .errors import RelAlgError, TupleTypeMismatch, UnknownTable
from .join import Equi, Natural, Theta
from .naming import NameCounter
from .parser import QueryType
from .table import Table

logger = logging.getLogger(__name__)


class QueryExecutor:
    """Executes parsed statements against the catalog of named tables."""

    def __init__(self, namer: Optional[NameCounter] = None):
        self.namer = namer
        self.tables: Dict[str, Table] = {}

    def get_table(self, table_name: str) -> Table:
        if table_name not in self.tables:
            raise UnknownTable(f"Table '{table_name}' does not exist")
        return self.tables[table_name]

    def register(self, table: Table, table_name: Optional[str] = None) -> Table:
        """Add a table to the catalog, under its own name unless one is given."""
        if table_name is not None:
            table.name = table_name
        self.tables[table.name] = table
        return table

    def execute(self, parsed_query: Dict[str, Any]) -> Dict[str, Any]:
        """
        Execute a parsed statement.

        Flaws reported by the algebra are raised here so callers receive
        the specific error.

        Raises:
            RelAlgError: If the statement is invalid for the catalog.
            ValueError: If the statement type is not supported.
        """
        query_type = parsed_query['type']
        handler = getattr(self, f"_execute_{query_type.name.lower()}", None)
        if handler is None:
            raise ValueError(f"Unsupported query type: {query_type}")

        with diagnostics.raising():
            return handler(parsed_query)

    def _execute_create_table(self, query: Dict[str, Any]) -> Dict[str, Any]:
        """Execute CREATE TABLE."""
        table_name = query['table_name']

        if table_name in self.tables:
            raise ValueError(f"Table '{table_name}' already exists")

        table = Table(table_name, query['attributes'], query['domains'], query['key'], self.namer)
        self.tables[table_name] = table
        logger.info("created table %s %s", table_name, list(table.attributes))

        return {'status': 'OK', 'message': f"Table '{table_name}' created successfully"}

    def _execute_drop_table(self, query: Dict[str, Any]) -> Dict[str, Any]:
        table_name = query['table_name']
        self.get_table(table_name)
        del self.tables[table_name]
        return {'status': 'OK', 'message': f"Table '{table_name}' dropped"}

    def _execute_insert(self, query: Dict[str, Any]) -> Dict[str, Any]:
        """Execute INSERT, converting each literal to its column's domain."""
        table = self.get_table(query['table_name'])
        literals: List[str] = query['values']

        if len(literals) != len(table.attributes):
            raise TupleTypeMismatch(
                f"Value count ({len(literals)}) doesn't match attribute count ({len(table.attributes)})")

        row = tuple(domain.parse(strip_quotes(literal))
                    for domain, literal in zip(table.domains, literals))
        table.insert(row)

        return {'status': 'OK', 'row_count': len(table)}

    def _execute_show(self, query: Dict[str, Any]) -> Dict[str, Any]:
        return self._result(self.get_table(query['table_name']), None)

    def _execute_project(self, query: Dict[str, Any]) -> Dict[str, Any]:
        table = self.get_table(query['table_name'])
        return self._result(table.project(query['attributes']), query.get('target'))

    def _execute_select(self, query: Dict[str, Any]) -> Dict[str, Any]:
        table = self.get_table(query['table_name'])
        return self._result(table.select(query['condition']), query.get('target'))

    def _execute_union(self, query: Dict[str, Any]) -> Dict[str, Any]:
        table, table2 = self._operands(query)
        return self._result(table.union(table2), query.get('target'))

    def _execute_minus(self, query: Dict[str, Any]) -> Dict[str, Any]:
        table, table2 = self._operands(query)
        return self._result(table.minus(table2), query.get('target'))

    def _execute_equi_join(self, query: Dict[str, Any]) -> Dict[str, Any]:
        table, table2 = self._operands(query)
        kind = Equi(query['attributes1'], query['attributes2'])
        return self._result(table.join(table2, kind), query.get('target'))

    def _execute_theta_join(self, query: Dict[str, Any]) -> Dict[str, Any]:
        table, table2 = self._operands(query)
        kind = Theta.parse(query['condition'])
        return self._result(table.join(table2, kind), query.get('target'))

    def _execute_natural_join(self, query: Dict[str, Any]) -> Dict[str, Any]:
        table, table2 = self._operands(query)
        return self._result(table.join(table2, Natural()), query.get('target'))

    def _operands(self, query: Dict[str, Any]):
        return self.get_table(query['table_name']), self.get_table(query['table2'])

    def _result(self, table: Optional[Table], target: Optional[str]) -> Dict[str, Any]:
        if table is None:
            # Only reachable if diagnostics were not raising
            raise RelAlgError("operation produced no table")
        if target:
            if target in self.tables:
                raise ValueError(f"Table '{target}' already exists")
            self.register(table, target)

        return {
            'status': 'OK',
            'table': table,
            'columns': list(table.attributes),
            'rows': [list(t) for t in table.rows]
        }
