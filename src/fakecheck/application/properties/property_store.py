"""Property store: per-instance cells for property and indexer values.

Each (property, index tuple) pair is an independent cell:

    Uninitialized --get--> Materialized --set--> Overwritten
          |                                         ^
          +------------------set--------------------+

A get on an uninitialized cell materializes a value once and keeps it, so
repeated gets return the identical object.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from fakecheck.domain.model.member import MemberDescriptor

type CellKey = tuple[MemberDescriptor, tuple[object, ...]]


def _is_hashable(index: tuple[object, ...]) -> bool:
    try:
        hash(index)
    except TypeError:
        return False
    return True


class PropertyStore:
    """Lazily created property cells of one fake instance.

    Hashable index tuples live in a dict; unhashable ones (e.g. a list
    used as a key) fall back to a linear scan compared with ==.

    Not locked itself; the owning FakeManager serializes access.
    """

    __slots__ = ("_cells", "_unhashable")

    def __init__(self) -> None:
        self._cells: dict[CellKey, object] = {}
        self._unhashable: list[tuple[MemberDescriptor, tuple[object, ...], object]] = []

    def get(
        self,
        descriptor: MemberDescriptor,
        index: tuple[object, ...],
        materialize: Callable[[], object],
    ) -> object:
        """Read a cell, materializing it on first access.

        Args:
            descriptor: Property (or indexer) descriptor
            index: Index tuple, () for plain properties
            materialize: Produces the initial value, called at most once

        Returns:
            Stored value, identical across gets until the next set
        """
        found, value = self._lookup(descriptor, index)
        if found:
            return value
        value = materialize()
        self.set(descriptor, index, value)
        return value

    def set(self, descriptor: MemberDescriptor, index: tuple[object, ...], value: object) -> None:
        """Overwrite one cell, leaving other index tuples untouched."""
        if _is_hashable(index):
            self._cells[(descriptor, index)] = value
            return
        for position, (stored_descriptor, stored_index, _) in enumerate(self._unhashable):
            if stored_descriptor == descriptor and stored_index == index:
                self._unhashable[position] = (descriptor, index, value)
                return
        self._unhashable.append((descriptor, index, value))

    def _lookup(self, descriptor: MemberDescriptor, index: tuple[object, ...]) -> tuple[bool, object]:
        if _is_hashable(index):
            key = (descriptor, index)
            if key in self._cells:
                return True, self._cells[key]
            return False, None
        for stored_descriptor, stored_index, value in self._unhashable:
            if stored_descriptor == descriptor and stored_index == index:
                return True, value
        return False, None

    def __len__(self) -> int:
        return len(self._cells) + len(self._unhashable)
