"""Infrastructure: turning Python types into fakes.

- introspection: faked type -> interceptable members
- interception: generated subclasses routing calls to a FakeManager
- dummies: default dummy factory
"""

from fakecheck.infrastructure.dummies import DefaultDummyFactory
from fakecheck.infrastructure.interception import (
    BoundFakeMethod,
    FakeTypes,
    is_fake,
    manager_of,
)
from fakecheck.infrastructure.introspection import (
    INDEXER,
    TypeBlueprint,
    describe_type,
    direction_of,
    is_fakeable,
)

__all__ = [
    "INDEXER",
    "BoundFakeMethod",
    "DefaultDummyFactory",
    "FakeTypes",
    "TypeBlueprint",
    "describe_type",
    "direction_of",
    "is_fake",
    "is_fakeable",
    "manager_of",
]
