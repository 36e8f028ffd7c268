"""
Relation schema: attribute names, their domains and the primary key.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .errors import SchemaError, UnknownAttribute
from .types import Column, Domain


@dataclass(frozen=True)
class Schema:
    """Ordered attributes with parallel domains and a (possibly empty) key."""
    attributes: Tuple[str, ...]
    domains: Tuple[Domain, ...]
    key: Tuple[str, ...] = ()
    index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'attributes', tuple(self.attributes))
        object.__setattr__(self, 'domains', tuple(self.domains))
        object.__setattr__(self, 'key', tuple(self.key))

        if len(self.attributes) != len(self.domains):
            raise SchemaError(
                f"{len(self.attributes)} attributes but {len(self.domains)} domains")
        if len(set(self.attributes)) != len(self.attributes):
            raise SchemaError(f"Duplicate attribute names in {list(self.attributes)}")
        for name in self.key:
            if name not in self.attributes:
                raise SchemaError(f"Key attribute '{name}' is not an attribute")

        object.__setattr__(self, 'index', {a: i for i, a in enumerate(self.attributes)})

    @classmethod
    def parse(cls, attributes: str, domains: str, key: str = "") -> 'Schema':
        """
        Build a schema from space-separated specification strings.

        Example:
            Schema.parse("bname accno", "String Integer", "accno")

        Raises:
            UnknownDomainType: If a domain token is not recognised.
            SchemaError: If the specification is inconsistent.
        """
        return cls(
            tuple(attributes.split()),
            tuple(Domain.from_name(d) for d in domains.split()),
            tuple(key.split()),
        )

    @property
    def arity(self) -> int:
        return len(self.attributes)

    @property
    def columns(self) -> List[Column]:
        return [Column(a, d, a in self.key) for a, d in zip(self.attributes, self.domains)]

    def position(self, name: str) -> int:
        """Column number of an attribute."""
        try:
            return self.index[name]
        except KeyError:
            raise UnknownAttribute(
                f"Attribute '{name}' not in {list(self.attributes)}") from None

    def positions(self, names: Sequence[str]) -> List[int]:
        return [self.position(n) for n in names]
