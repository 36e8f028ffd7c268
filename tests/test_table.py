"""Tests for table construction, insertion and the unary and set operators."""

import logging

import pytest

from relalg.errors import SchemaError, UnknownDomainType
from relalg.naming import NameCounter
from relalg.render import render_table
from relalg.schema import Schema
from relalg.table import Table
from relalg.types import Domain


class TestConstruction:

    def test_from_strings(self):
        table = Table("deposit", "bname accno", "String Integer", "accno")
        assert table.name == "deposit"
        assert table.attributes == ("bname", "accno")
        assert table.domains == (Domain.STRING, Domain.INT32)
        assert table.key == ("accno",)
        assert table.col == {"bname": 0, "accno": 1}
        assert len(table) == 0

    def test_string_spec_matches_schema_parse(self):
        table = Table("t", "a b", "Integer Double", "a")
        assert table.schema == Schema.parse("a b", "Integer Double", "a")

    def test_from_sequences(self):
        table = Table("t", ["a", "b"], [Domain.INT64, "Char"], ["a"])
        assert table.domains == (Domain.INT64, Domain.CHAR)

    def test_invalid_schema_raises(self):
        with pytest.raises(SchemaError):
            Table("t", "a b", "String", "")
        with pytest.raises(UnknownDomainType):
            Table("t", "a", "Text", "")

    def test_from_spec_reports(self, caplog):
        """The text form reports failures and returns no table."""
        with caplog.at_level(logging.WARNING, logger="relalg.diagnostics"):
            assert Table.from_spec("t", "a", "Text") is None
        assert "FLAW in from_spec" in caplog.text
        assert "Text" in caplog.text

    def test_from_spec(self):
        table = Table.from_spec("t", "a b", "Integer String", "a")
        assert table.attributes == ("a", "b")


class TestInsert:

    def test_insert_chains(self):
        table = Table("t", "a b", "Integer String")
        result = table.insert((1, "x")).insert([2, "y"])
        assert result is table
        assert table.rows == ((1, "x"), (2, "y"))

    def test_wrong_arity_not_appended(self, caplog):
        table = Table("t", "a b", "Integer String")
        with caplog.at_level(logging.WARNING):
            assert table.insert((1,)) is table
        assert len(table) == 0
        assert "FLAW in insert" in caplog.text

    @pytest.mark.parametrize("row", [
        ("1", "x"),
        (1.0, "x"),
        (True, "x"),
        (2 ** 31, "x"),
        (1, 2),
    ])
    def test_wrong_type_not_appended(self, row):
        table = Table("t", "a b", "Integer String")
        table.insert(row)
        assert len(table) == 0

    def test_rows_are_read_only_snapshot(self):
        table = Table("t", "a", "Integer").insert((1,))
        rows = table.rows
        table.insert((2,))
        assert rows == ((1,),)
        assert list(table) == [(1,), (2,)]


class TestNaming:

    def test_derived_names_increase(self, deposit):
        assert deposit.project("bname").name == "deposit0"
        assert deposit.select("accno == 901").name == "deposit1"

    def test_counter_shared_across_tables(self, deposit, loan):
        deposit.union(loan)
        assert loan.minus(deposit).name == "loan1"

    def test_derived_tables_inherit_counter(self, deposit):
        derived = deposit.project("bname cname")
        assert derived.namer is deposit.namer
        assert derived.project("bname").name == "deposit01"

    def test_failed_operator_consumes_no_name(self, deposit):
        assert deposit.project("nope") is None
        assert deposit.project("bname").name == "deposit0"

    def test_default_counter(self):
        table = Table("t", "a", "Integer")
        assert table.namer is not None
        assert table.select(lambda t: True).name.startswith("t")


class TestProject:

    def test_scenario(self):
        """Projection keeps first occurrences in order."""
        table = Table("deposit", "bname accno cname balance",
                      "String Integer String Double", "accno", NameCounter())
        table.insert(("Downtown", 901, "Peter", 1000.0)) \
             .insert(("Main", 902, "Paul", 2000.0)) \
             .insert(("Alps", 903, "Paul", 3000.0))
        result = table.project("bname cname")
        assert result.rows == (("Downtown", "Peter"), ("Main", "Paul"), ("Alps", "Paul"))
        assert result.domains == (Domain.STRING, Domain.STRING)

    def test_removes_duplicates(self, deposit):
        result = deposit.project("cname")
        assert result.rows == (("Peter",), ("Paul",), ("Mary",), ("Joe",))

    def test_order_follows_request(self, deposit):
        result = deposit.project("cname bname")
        assert result.attributes == ("cname", "bname")
        assert result.rows[0] == ("Peter", "Downtown")

    def test_key_kept_when_included(self, deposit):
        assert deposit.project("accno cname").key == ("accno",)

    def test_key_falls_back_to_projection(self, deposit):
        assert deposit.project("bname cname").key == ("bname", "cname")

    def test_all_attributes(self, deposit):
        result = deposit.project(deposit.attributes)
        assert set(result.rows) == set(deposit.rows)

    def test_unknown_attribute(self, deposit, caplog):
        with caplog.at_level(logging.WARNING):
            assert deposit.project("bname branch") is None
        assert "branch" in caplog.text

    def test_empty_and_repeated(self, deposit):
        assert deposit.project("") is None
        assert deposit.project("bname bname") is None


class TestSelect:

    def test_condition_scenario(self, deposit):
        result = deposit.select("bname == 'Alps'")
        assert result.rows == (("Alps", 903, "Paul", 3000.0), ("Alps", 906, "Mary", 2000.0))
        assert result.schema == deposit.schema

    def test_predicate(self, deposit):
        result = deposit.select(lambda t: t[deposit.col["bname"]] == "Alps")
        assert [t[1] for t in result.rows] == [903, 906]

    @pytest.mark.parametrize("condition,accnos", [
        ("balance > 1500", [902, 903, 906]),
        ("balance >= 1500", [902, 903, 906, 907]),
        ("accno < 903", [901, 902]),
        ("accno != 901", [902, 903, 904, 905, 906, 907]),
        ("cname <= 'Mary'", [905, 906, 907]),
    ])
    def test_operators(self, deposit, condition, accnos):
        assert [t[1] for t in deposit.select(condition).rows] == accnos

    def test_idempotent(self, deposit):
        once = deposit.select("balance > 1000")
        assert once.select("balance > 1000").rows == once.rows

    def test_does_not_alias_operand(self, deposit):
        result = deposit.select(lambda t: True)
        assert result.rows == deposit.rows
        result.insert(("Lake", 999, "Joe", 1.0))
        assert len(deposit) == 7

    @pytest.mark.parametrize("condition", [
        "branch == 'Alps'",
        "bname = 'Alps'",
        "accno == 'nine'",
        "bname ==",
    ])
    def test_invalid_conditions(self, deposit, condition):
        assert deposit.select(condition) is None

    def test_nan_literal_orders_last(self, deposit):
        assert len(deposit.select("balance < nan")) == 7
        assert len(deposit.select("balance > nan")) == 0

    def test_char_domain(self):
        table = Table("grades", "student grade", "String Character")
        table.insert(("Ann", "A")).insert(("Bob", "B"))
        assert table.select("grade == 'A'").rows == (("Ann", "A"),)


class TestSetOperators:

    def test_union(self, deposit, loan):
        result = deposit.union(loan)
        assert len(result) == 13
        assert result.rows[:7] == deposit.rows
        assert result.schema == deposit.schema

    def test_union_is_a_set(self, deposit):
        alps = deposit.select("bname == 'Alps'")
        result = deposit.union(alps)
        assert result.rows == deposit.rows
        assert len(set(result.rows)) == len(result.rows)

    def test_union_removes_operand_duplicates(self):
        t = Table("t", "a", "Integer").insert((1,)).insert((1,)).insert((2,))
        u = Table("u", "b", "Integer").insert((2,)).insert((3,))
        assert t.union(u).rows == ((1,), (2,), (3,))

    def test_minus(self, deposit):
        alps = deposit.select("bname == 'Alps'")
        result = deposit.minus(alps)
        assert [t[1] for t in result.rows] == [901, 902, 904, 905, 907]

    def test_minus_self_is_empty(self, deposit):
        assert len(deposit.minus(deposit)) == 0

    def test_minus_disjoint(self, deposit, loan):
        assert deposit.minus(loan).rows == deposit.rows

    def test_names_not_compared(self):
        t = Table("t", "a", "Integer").insert((1,)).insert((2,))
        u = Table("u", "b", "Integer").insert((2,))
        assert t.minus(u).rows == ((1,),)
        assert t.minus(u).attributes == ("a",)

    def test_incompatible_arity(self, customer, deposit, caplog):
        with caplog.at_level(logging.WARNING):
            assert customer.union(deposit) is None
        assert "different arity" in caplog.text

    def test_incompatible_domain(self, bank, caplog):
        with caplog.at_level(logging.WARNING):
            assert bank["branch"].minus(bank["customer"]) is None
        assert "disagree on domain 1" in caplog.text

    def test_compatible(self, deposit, loan, customer):
        assert deposit.compatible(loan) is True
        assert deposit.compatible(customer) is False

    def test_operands_unchanged(self, deposit, loan):
        before = (deposit.rows, loan.rows)
        deposit.union(loan)
        deposit.minus(loan)
        assert (deposit.rows, loan.rows) == before


class TestRender:

    def test_render(self):
        table = Table("t", "a b", "Integer String").insert((1, "x"))
        assert render_table(table, 5) == (
            "\n Table t\n"
            "|------------|\n"
            "|     a    b |\n"
            "|------------|\n"
            "|     1    x |\n"
            "|------------|"
        )

    def test_show(self, deposit, capsys):
        deposit.show()
        out = capsys.readouterr().out
        assert " Table deposit" in out
        assert "|-" + "-" * 60 + "-|" in out
        assert "       Downtown" in out
