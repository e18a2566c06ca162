"""Default values for unconfigured calls and unset properties."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fakecheck.domain.ports.dummy_factory import DummyFactoryPort

logger = logging.getLogger(__name__)

# Value types answer with their zero value without asking the dummy factory.
_ZERO_VALUES: dict[type, object] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
}


def zero_value(tp: object) -> tuple[bool, object]:
    """Zero value of a value type.

    Returns:
        (True, value) for bool/int/float/complex/str/bytes and enums
        (first member), (False, None) otherwise
    """
    if isinstance(tp, type):
        if tp in _ZERO_VALUES:
            return True, _ZERO_VALUES[tp]
        if issubclass(tp, enum.Enum):
            members = list(tp)
            if members:
                return True, members[0]
    return False, None


class DefaultValueProvider:
    """Zero values first, then the dummy factory, then None.

    Failures of the dummy factory never reach the caller.
    """

    __slots__ = ("_dummies",)

    def __init__(self, dummies: DummyFactoryPort | None = None) -> None:
        """Initialize provider.

        Args:
            dummies: Dummy factory consulted for non-value types
        """
        self._dummies = dummies

    def value_for(self, tp: object) -> object:
        """Default value for a type or annotation.

        Args:
            tp: Declared type; None (untyped or ``-> None``) gives None

        Returns:
            Zero value, a dummy, or None
        """
        if tp is None or tp is type(None):
            return None
        is_value_type, value = zero_value(tp)
        if is_value_type:
            return value
        if self._dummies is None:
            return None
        try:
            return self._dummies.produce(tp)
        except Exception:
            logger.debug("Dummy factory failed for %r, using None", tp, exc_info=True)
            return None
