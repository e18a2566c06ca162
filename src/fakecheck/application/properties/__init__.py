"""Property value storage."""

from fakecheck.application.properties.property_store import PropertyStore

__all__ = ["PropertyStore"]
