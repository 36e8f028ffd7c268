"""
Parser for the one-operator-per-statement command language.
"""

import re
from typing import Dict, List, Any, Optional
from enum import Enum


class QueryType(Enum):
    """Types of statements we support."""
    CREATE_TABLE = "CREATE_TABLE"
    DROP_TABLE = "DROP_TABLE"
    INSERT = "INSERT"
    SHOW = "SHOW"
    PROJECT = "PROJECT"
    SELECT = "SELECT"
    UNION = "UNION"
    MINUS = "MINUS"
    EQUI_JOIN = "EQUI_JOIN"
    THETA_JOIN = "THETA_JOIN"
    NATURAL_JOIN = "NATURAL_JOIN"


class QueryParser:
    """Parses statements into structured dictionaries."""

    # Optional trailing "AS name" storing the result in the catalog
    _AS = r'(?:\s+AS\s+(?P<target>\w+))?$'

    CREATE_TABLE_PATTERN = re.compile(
        r'CREATE TABLE (\w+)\s*\((.*)\)$',
        re.IGNORECASE | re.DOTALL
    )

    DROP_TABLE_PATTERN = re.compile(r'DROP TABLE (\w+)$', re.IGNORECASE)

    INSERT_PATTERN = re.compile(
        r'INSERT INTO (\w+)\s+VALUES\s*\((.*)\)$',
        re.IGNORECASE | re.DOTALL
    )

    SHOW_PATTERN = re.compile(r'SHOW (\w+)$', re.IGNORECASE)

    PROJECT_PATTERN = re.compile(
        r'PROJECT (?P<table>\w+)\s+ON\s+(?P<attrs>.+?)' + _AS,
        re.IGNORECASE
    )

    SELECT_PATTERN = re.compile(
        r'SELECT (?P<table>\w+)\s+WHERE\s+(?P<condition>.+?)' + _AS,
        re.IGNORECASE
    )

    SET_PATTERN = re.compile(
        r'(?P<table>\w+)\s+(?P<op>UNION|MINUS)\s+(?P<table2>\w+)' + _AS,
        re.IGNORECASE
    )

    NATURAL_JOIN_PATTERN = re.compile(
        r'(?P<table>\w+)\s+NATURAL\s+JOIN\s+(?P<table2>\w+)' + _AS,
        re.IGNORECASE
    )

    EQUI_JOIN_PATTERN = re.compile(
        r'(?P<table>\w+)\s+JOIN\s+(?P<table2>\w+)\s+ON\s+(?P<attrs1>[\w\s]+?)\s*=\s*(?P<attrs2>[\w\s]+?)' + _AS,
        re.IGNORECASE
    )

    THETA_JOIN_PATTERN = re.compile(
        r'(?P<table>\w+)\s+JOIN\s+(?P<table2>\w+)\s+WHERE\s+(?P<condition>.+?)' + _AS,
        re.IGNORECASE
    )

    def parse(self, query: str) -> Dict[str, Any]:
        """Parse a statement into a structured dictionary."""
        query = query.strip().rstrip(';').strip()
        keyword = re.match(r'(CREATE TABLE|DROP TABLE|INSERT INTO|SHOW|PROJECT|SELECT)\s',
                           query, re.IGNORECASE)
        upper = keyword.group(1).upper() if keyword else ""

        if upper == "CREATE TABLE":
            return self._parse_create_table(query)
        elif upper == "DROP TABLE":
            return self._parse_table_command(self.DROP_TABLE_PATTERN, QueryType.DROP_TABLE, query)
        elif upper == "INSERT INTO":
            return self._parse_insert(query)
        elif upper == "SHOW":
            return self._parse_table_command(self.SHOW_PATTERN, QueryType.SHOW, query)
        elif upper == "PROJECT":
            return self._parse_project(query)
        elif upper == "SELECT":
            return self._parse_select(query)
        else:
            return self._parse_binary(query)

    def _parse_create_table(self, query: str) -> Dict[str, Any]:
        """Parse CREATE TABLE t (a Domain [KEY], ...)."""
        match = self.CREATE_TABLE_PATTERN.match(query)
        if not match:
            raise SyntaxError("Invalid CREATE TABLE syntax")

        attributes, domains, key = [], [], []
        for col_def in self._split_by_commas(match.group(2)):
            parts = col_def.split()
            if not parts:
                continue
            if len(parts) < 2 or len(parts) > 3 or (len(parts) == 3 and parts[2].upper() != 'KEY'):
                raise SyntaxError(f"Invalid column definition: {col_def}")

            attributes.append(parts[0])
            domains.append(parts[1])
            if len(parts) == 3:
                key.append(parts[0])

        return {
            'type': QueryType.CREATE_TABLE,
            'table_name': match.group(1),
            'attributes': attributes,
            'domains': domains,
            'key': key
        }

    def _parse_table_command(self, pattern: re.Pattern, query_type: QueryType,
                             query: str) -> Dict[str, Any]:
        match = pattern.match(query)
        if not match:
            raise SyntaxError(f"Invalid {query_type.value.replace('_', ' ')} syntax")
        return {'type': query_type, 'table_name': match.group(1)}

    def _parse_insert(self, query: str) -> Dict[str, Any]:
        """Parse INSERT INTO t VALUES (...)."""
        match = self.INSERT_PATTERN.match(query)
        if not match:
            raise SyntaxError("Invalid INSERT syntax")

        return {
            'type': QueryType.INSERT,
            'table_name': match.group(1),
            'values': self._split_by_commas(match.group(2))
        }

    def _parse_project(self, query: str) -> Dict[str, Any]:
        match = self.PROJECT_PATTERN.match(query)
        if not match:
            raise SyntaxError("Invalid PROJECT syntax")

        return {
            'type': QueryType.PROJECT,
            'table_name': match.group('table'),
            'attributes': match.group('attrs').split(),
            'target': match.group('target')
        }

    def _parse_select(self, query: str) -> Dict[str, Any]:
        match = self.SELECT_PATTERN.match(query)
        if not match:
            raise SyntaxError("Invalid SELECT syntax")

        return {
            'type': QueryType.SELECT,
            'table_name': match.group('table'),
            'condition': match.group('condition').strip(),
            'target': match.group('target')
        }

    def _parse_binary(self, query: str) -> Dict[str, Any]:
        """Parse statements of the form 't OP u ...'."""
        match = self.SET_PATTERN.match(query)
        if match:
            return self._binary(QueryType[match.group('op').upper()], match)

        match = self.NATURAL_JOIN_PATTERN.match(query)
        if match:
            return self._binary(QueryType.NATURAL_JOIN, match)

        match = self.EQUI_JOIN_PATTERN.match(query)
        if match:
            result = self._binary(QueryType.EQUI_JOIN, match)
            result['attributes1'] = match.group('attrs1').split()
            result['attributes2'] = match.group('attrs2').split()
            return result

        match = self.THETA_JOIN_PATTERN.match(query)
        if match:
            result = self._binary(QueryType.THETA_JOIN, match)
            result['condition'] = match.group('condition').strip()
            return result

        raise SyntaxError(f"Unsupported statement: {query}")

    def _binary(self, query_type: QueryType, match: re.Match) -> Dict[str, Any]:
        return {
            'type': query_type,
            'table_name': match.group('table'),
            'table2': match.group('table2'),
            'target': match.group('target')
        }

    def _split_by_commas(self, s: str) -> List[str]:
        """Split string by commas, ignoring commas inside quotes or parentheses."""
        result = []
        current = ""
        paren_depth = 0
        quote: Optional[str] = None

        for char in s:
            if quote:
                if char == quote:
                    quote = None
            elif char in ("'", '"'):
                quote = char
            elif char == '(':
                paren_depth += 1
            elif char == ')':
                paren_depth -= 1
            elif char == ',' and paren_depth == 0:
                result.append(current.strip())
                current = ""
                continue
            current += char

        if current.strip():
            result.append(current.strip())
        return result
