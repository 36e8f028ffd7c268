"""Tests for the engine, executor and REPL."""

import pytest

from relalg.diagnostics import diagnostics
from relalg.engine import DatabaseEngine
from relalg.errors import (
    SchemaIncompatibility,
    TupleTypeMismatch,
    UnknownAttribute,
    UnknownDomainType,
    UnknownTable,
    ValueConversionError,
)
from relalg.naming import NameCounter
from relalg.repl import DatabaseREPL


@pytest.fixture
def engine():
    engine = DatabaseEngine(NameCounter())
    engine.execute("CREATE TABLE deposit (bname String, accno Integer KEY, cname String, balance Double)")
    engine.execute("CREATE TABLE customer (cname String KEY, street String, ccity String)")
    engine.execute("INSERT INTO deposit VALUES ('Downtown', 901, 'Peter', 1000.0)")
    engine.execute("INSERT INTO deposit VALUES ('Main', 902, 'Paul', 2000)")
    engine.execute("INSERT INTO deposit VALUES ('Alps', 903, 'Paul', 3000.0)")
    engine.execute("INSERT INTO customer VALUES ('Peter', 'Maple St', 'Athens')")
    engine.execute("INSERT INTO customer VALUES ('Paul', 'Oak St', 'Athens')")
    return engine


class TestDatabaseEngine:

    def test_tables(self, engine):
        assert engine.list_tables() == ['deposit', 'customer']

    def test_table_info(self, engine):
        info = engine.get_table_info('deposit')
        assert info['row_count'] == 3
        assert info['schema'][1] == {'name': 'accno', 'type': 'Int32', 'is_key': True}
        assert info['schema'][3]['type'] == 'Float64'

    def test_insert_converts_literals(self, engine):
        assert engine.get_table('deposit').rows[1] == ('Main', 902, 'Paul', 2000.0)

    def test_insert_result(self, engine):
        result = engine.execute("INSERT INTO customer VALUES ('Mary', 'Elm St', 'Winder')")
        assert result == {'status': 'OK', 'row_count': 3}

    def test_select(self, engine):
        result = engine.execute("SELECT deposit WHERE bname == 'Alps'")
        assert result['status'] == 'OK'
        assert result['rows'] == [['Alps', 903, 'Paul', 3000.0]]
        assert result['table'].name == 'deposit0'
        assert result['columns'] == ['bname', 'accno', 'cname', 'balance']

    def test_target_registers_result(self, engine):
        engine.execute("PROJECT deposit ON bname cname AS names")
        assert engine.get_table('names').rows == (
            ('Downtown', 'Peter'), ('Main', 'Paul'), ('Alps', 'Paul'))
        result = engine.execute("names MINUS names")
        assert result['rows'] == []

    def test_target_exists(self, engine):
        with pytest.raises(ValueError):
            engine.execute("SELECT deposit WHERE accno > 901 AS customer")

    def test_joins(self, engine):
        equi = engine.execute("deposit JOIN customer ON cname = cname")
        assert equi['rows'][0] == ['Downtown', 901, 'Peter', 1000.0, 'Peter', 'Maple St', 'Athens']
        assert 'cname2' in equi['columns']

        theta = engine.execute("deposit JOIN customer WHERE cname == cname")
        assert theta['rows'] == equi['rows']

        natural = engine.execute("deposit NATURAL JOIN customer")
        assert natural['columns'] == ['cname', 'bname', 'accno', 'balance', 'street', 'ccity']
        assert len(natural['rows']) == 3

    def test_union(self, engine):
        engine.execute("SELECT deposit WHERE cname == 'Paul' AS pauls")
        result = engine.execute("deposit UNION pauls")
        assert len(result['rows']) == 3

    def test_show_and_drop(self, engine):
        assert len(engine.execute("SHOW customer")['rows']) == 2
        engine.execute("DROP TABLE customer")
        assert engine.list_tables() == ['deposit']

    @pytest.mark.parametrize("statement,error", [
        ("SHOW nothing", UnknownTable),
        ("PROJECT deposit ON branch", UnknownAttribute),
        ("SELECT deposit WHERE accno == abc", ValueConversionError),
        ("deposit UNION customer", SchemaIncompatibility),
        ("INSERT INTO deposit VALUES ('Lake', 'x', 'Joe', 1.0)", ValueConversionError),
        ("CREATE TABLE t (a Decimal)", UnknownDomainType),
    ])
    def test_errors_raised(self, engine, statement, error):
        with pytest.raises(error):
            engine.execute(statement)
        assert diagnostics.strict is False

    def test_insert_wrong_count(self, engine):
        with pytest.raises(TupleTypeMismatch):
            engine.execute("INSERT INTO deposit VALUES ('Lake', 904)")
        assert len(engine.get_table('deposit')) == 3

    def test_create_existing(self, engine):
        with pytest.raises(ValueError):
            engine.execute("CREATE TABLE deposit (a Integer)")

    def test_result_named_like_keyword(self, engine):
        engine.execute("SELECT deposit WHERE cname == 'Paul' AS selected")
        result = engine.execute("selected UNION deposit")
        assert len(result['rows']) == 3

    def test_syntax_error(self, engine):
        with pytest.raises(SyntaxError):
            engine.execute("DELETE FROM deposit")


class TestDatabaseREPL:

    def test_execute_prints_table(self, engine, capsys):
        DatabaseREPL(engine).execute("SELECT deposit WHERE accno == 901")
        out = capsys.readouterr().out
        assert " Table deposit0" in out
        assert "1 row(s) returned" in out

    def test_execute_prints_error(self, engine, capsys):
        DatabaseREPL(engine).execute("PROJECT deposit ON branch")
        assert "Error: Attribute 'branch' not in" in capsys.readouterr().out

    def test_run(self, engine, capsys, monkeypatch):
        lines = iter(["tables", "SHOW customer", "", "help", "quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
        DatabaseREPL(engine, width=10).run()
        out = capsys.readouterr().out
        assert "deposit (3 rows)" in out
        assert "accno Int32 (KEY)" in out
        assert "     Peter" in out
        assert "NATURAL JOIN" in out

    def test_run_stops_on_eof(self, engine, monkeypatch):
        def eof(prompt=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", eof)
        repl = DatabaseREPL(engine)
        repl.run()
