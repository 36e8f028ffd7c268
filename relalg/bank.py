"""
Bank database: builds, populates and queries four small relations.
"""

import argparse
import logging
from typing import Dict, Optional

from .join import Equi
from .naming import NameCounter
from .render import CELL_WIDTH
from .table import Table


def build_bank(namer: Optional[NameCounter] = None) -> Dict[str, Table]:
    """Create the branch, customer, deposit and loan tables."""
    branch = Table("branch", "bname assets bcity",
                   "String Double String", "bname", namer)
    customer = Table("customer", "cname street ccity",
                     "String String String", "cname", namer)
    deposit = Table("deposit", "bname accno cname balance",
                    "String Integer String Double", "accno", namer)
    loan = Table("loan", "bname loanno cname amount",
                 "String Integer String Double", "loanno", namer)

    branch.insert(("Main", 15000000.0, "Athens")) \
          .insert(("Lake", 20000000.0, "Gainesville")) \
          .insert(("Downtown", 10000000.0, "Winder")) \
          .insert(("Alps", 11000000.0, "Athens"))

    customer.insert(("Peter", "Maple St", "Athens")) \
            .insert(("Paul", "Oak St", "Athens")) \
            .insert(("Mary", "Elm St", "Winder")) \
            .insert(("Joe", "Pine St", "Athens"))

    deposit.insert(("Downtown", 901, "Peter", 1000.0)) \
           .insert(("Main", 902, "Paul", 2000.0)) \
           .insert(("Alps", 903, "Paul", 3000.0)) \
           .insert(("Lake", 904, "Paul", 1000.0)) \
           .insert(("Main", 905, "Mary", 1000.0)) \
           .insert(("Alps", 906, "Mary", 2000.0)) \
           .insert(("Lake", 907, "Joe", 1500.0))

    loan.insert(("Lake", 1001, "Peter", 1000.0)) \
        .insert(("Alps", 1002, "Peter", 2000.0)) \
        .insert(("Main", 1003, "Paul", 1000.0)) \
        .insert(("Alps", 1004, "Paul", 2000.0)) \
        .insert(("Main", 1005, "Mary", 1500.0)) \
        .insert(("Downtown", 1006, "Mary", 2000.0))

    return {t.name: t for t in (branch, customer, deposit, loan)}


def run_queries(tables: Dict[str, Table], width: int = CELL_WIDTH) -> None:
    """Show the result of one query per operator."""
    deposit = tables["deposit"]
    customer = tables["customer"]
    loan = tables["loan"]

    results = [
        deposit.project("bname cname"),
        deposit.select(lambda t: t[deposit.col["bname"]] == "Alps"),
        deposit.select("bname == 'Alps'"),
        deposit.union(loan),
        deposit.minus(loan),
        deposit.join(customer, Equi("cname", "cname")),
        deposit.theta_join("cname == cname", customer),
        deposit.natural_join(customer),
    ]
    for result in results:
        if result is not None:
            result.show(width)


def main():
    """Main entry point for the bank demonstration."""
    parser = argparse.ArgumentParser(description="Bank database queries")
    parser.add_argument("--width", type=int, default=CELL_WIDTH, help="Cell width for output")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for diagnostics")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    run_queries(build_bank(), args.width)


if __name__ == "__main__":
    main()
