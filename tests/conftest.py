"""Shared fixtures for the relational algebra tests."""

import pytest

from relalg.bank import build_bank
from relalg.naming import NameCounter


@pytest.fixture
def namer():
    """A fresh counter so derived names are predictable."""
    return NameCounter()


@pytest.fixture
def bank(namer):
    """The branch, customer, deposit and loan tables."""
    return build_bank(namer)


@pytest.fixture
def deposit(bank):
    return bank["deposit"]


@pytest.fixture
def customer(bank):
    return bank["customer"]


@pytest.fixture
def loan(bank):
    return bank["loan"]
