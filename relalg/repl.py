"""
Interactive REPL for the relational algebra engine.
"""

import logging

from .bank import build_bank
from .engine import DatabaseEngine
from .errors import RelAlgError
from .render import CELL_WIDTH, render_table


class DatabaseREPL:
    """Command-line REPL for interacting with the engine."""

    def __init__(self, engine: DatabaseEngine = None, width: int = CELL_WIDTH):
        self.engine = engine or DatabaseEngine()
        self.width = width
        self.running = False

    def run(self):
        """Run the REPL."""
        self.running = True
        print("Relational Algebra REPL")
        print("Type 'exit' or 'quit' to exit")
        print("Type 'help' for help\n")

        while self.running:
            try:
                line = input("ra> ").strip()

                if line.lower() in ('exit', 'quit'):
                    break
                elif line.lower() == 'help':
                    self._print_help()
                    continue
                elif line.lower() in ('tables', '.tables'):
                    self._list_tables()
                    continue
                elif not line:
                    continue

                self.execute(line)

            except KeyboardInterrupt:
                print("\nInterrupted")
                break
            except EOFError:
                print()
                break

    def execute(self, line: str):
        """Execute one statement and display its result or error."""
        try:
            result = self.engine.execute(line)
        except (SyntaxError, ValueError, RelAlgError) as e:
            print(f"Error: {e}")
            return
        self._display_result(result)

    def _print_help(self):
        """Print help information."""
        help_text = """
Available commands:
  exit, quit           - Exit the REPL
  help                 - Show this help
  tables, .tables      - List all tables

Statements (one operator each, optional AS <name> stores the result):
  CREATE TABLE t (a Domain [KEY], ...)   Domains: Integer Long Float Double Character String
  INSERT INTO t VALUES (v1, v2, ...)
  DROP TABLE t
  SHOW t
  PROJECT t ON a b
  SELECT t WHERE a op value              op: == != < <= > >=
  t UNION u
  t MINUS u
  t JOIN u ON a b = c d                  equi-join
  t JOIN u WHERE a op b                  theta-join
  t NATURAL JOIN u

Examples:
  CREATE TABLE deposit (bname String, accno Integer KEY, cname String, balance Double)
  INSERT INTO deposit VALUES ('Alps', 903, 'Paul', 3000.0)
  SELECT deposit WHERE bname == 'Alps' AS alps
  deposit JOIN customer ON cname = cname
        """
        print(help_text)

    def _list_tables(self):
        """List all tables."""
        tables = self.engine.list_tables()
        if not tables:
            print("No tables in catalog.")
            return

        print("Tables:")
        for table in tables:
            info = self.engine.get_table_info(table)
            print(f"  {table} ({info['row_count']} rows)")
            for col in info['schema']:
                key_str = " (KEY)" if col['is_key'] else ""
                print(f"    {col['name']} {col['type']}{key_str}")

    def _display_result(self, result: dict):
        """Display statement result in a readable format."""
        if 'message' in result:
            print(result['message'])

        if 'row_count' in result and 'table' not in result:
            print(f"Table now has {result['row_count']} row(s)")

        if 'table' in result:
            table = result['table']
            print(render_table(table, self.width))
            print(f"\n{len(table)} row(s) returned")


def main():
    """Main entry point for the REPL."""
    import argparse

    parser = argparse.ArgumentParser(description="Relational Algebra REPL")
    parser.add_argument("--width", type=int, default=CELL_WIDTH, help="Cell width for table output")
    parser.add_argument("--bank", action="store_true", help="Preload the bank tables")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for diagnostics")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    engine = DatabaseEngine()
    if args.bank:
        for table in build_bank(engine.executor.namer).values():
            engine.register(table)

    repl = DatabaseREPL(engine, args.width)
    repl.run()


if __name__ == "__main__":
    main()
