"""Domain ports (Protocols implemented by infrastructure or users)."""

from fakecheck.domain.ports.dummy_factory import DummyFactoryPort

__all__ = ["DummyFactoryPort"]
