"""
Main database engine class.
"""

from typing import Any, Dict, List, Optional

from .naming import NameCounter
from .parser import QueryParser
from .executor import QueryExecutor
from .table import Table


class DatabaseEngine:
    """Main database engine interface."""

    def __init__(self, namer: Optional[NameCounter] = None):
        self.parser = QueryParser()
        self.executor = QueryExecutor(namer)

    def execute(self, query: str) -> Dict[str, Any]:
        """
        Execute a statement.

        Args:
            query: Statement string, e.g. "SELECT deposit WHERE bname == 'Alps'"

        Returns:
            Query result as dictionary

        Raises:
            SyntaxError: If statement syntax is invalid
            RelAlgError: If the statement is invalid for the tables involved
        """
        parsed_query = self.parser.parse(query)
        return self.executor.execute(parsed_query)

    def register(self, table: Table) -> Table:
        """Add an already built table to the catalog."""
        return self.executor.register(table)

    def get_table(self, table_name: str) -> Table:
        return self.executor.get_table(table_name)

    def list_tables(self) -> List[str]:
        """List all tables in the catalog."""
        return list(self.executor.tables)

    def get_table_info(self, table_name: str) -> Dict[str, Any]:
        """Get information about a table."""
        table = self.executor.get_table(table_name)
        return {
            'schema': [
                {
                    'name': col.name,
                    'type': col.domain.value,
                    'is_key': col.is_key
                }
                for col in table.schema.columns
            ],
            'row_count': len(table)
        }
