"""Reference and output argument boxes.

Python passes every argument by value. A parameter annotated ``Ref[T]`` or
``Out[T]`` expects the caller to pass a box; the fake writes the configured
value back into the box after a matching call.

Example:
    found = Out[str]()
    present = cache.try_get_value("key", found)
    print(found.value)
"""


class Ref[T]:
    """Mutable holder for a by-reference argument.

    Attributes:
        value: Current value. Read at call time, replaced on write-back.
    """

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"


class Out[T]:
    """Mutable holder for an output argument.

    Attributes:
        value: None until the fake writes a value back.
    """

    __slots__ = ("value",)

    def __init__(self, value: T | None = None) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Out({self.value!r})"
