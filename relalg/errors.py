"""
Exception types raised while building and querying relations.

Algebraic operators do not let these escape; they report them through
:func:`relalg.diagnostics.flaw` and hand back ``None`` instead.
"""


class RelAlgError(Exception):
    """Base class for all relational algebra errors."""


class SchemaError(RelAlgError):
    """Malformed attribute, domain or key specification."""


class UnknownDomainType(SchemaError):
    """A domain token does not name a known domain."""


class UnknownAttribute(RelAlgError):
    """An attribute name is not part of the schema."""


class UnknownTable(RelAlgError):
    """A table name is not in the catalog."""


class ValueConversionError(RelAlgError):
    """A literal cannot be parsed into a column's domain."""


class UnsupportedOperator(RelAlgError):
    """A comparison operator is not one of ==, !=, <, <=, >, >=."""


class MalformedCondition(RelAlgError):
    """A condition string is not of the form 'attr op value'."""


class DomainMismatch(RelAlgError):
    """Two values are compared whose domains have no natural coercion."""


class TupleTypeMismatch(RelAlgError):
    """A tuple's shape or value types disagree with the schema."""


class SchemaIncompatibility(RelAlgError):
    """Union/minus operands differ in arity or domains."""
