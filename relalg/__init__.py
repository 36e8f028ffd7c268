"""
In-memory relational algebra engine.
"""

from .engine import DatabaseEngine
from .errors import RelAlgError
from .join import Equi, Natural, Theta
from .naming import NameCounter
from .repl import DatabaseREPL
from .schema import Schema
from .table import Table
from .types import Domain

__all__ = [
    'DatabaseEngine',
    'DatabaseREPL',
    'Domain',
    'Equi',
    'NameCounter',
    'Natural',
    'RelAlgError',
    'Schema',
    'Table',
    'Theta',
]
