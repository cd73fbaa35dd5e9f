from typing import Any, Final


class Absent:
    """Type of the singleton absence marker :py:data:`ABSENT`.

    Lenient lookups return ``ABSENT`` rather than ``None`` so that a stored
    ``None`` can be told apart from a missing key. ``ABSENT`` is falsy and
    survives pickling and copying as the same object."""

    __slots__ = ()

    _instance: "Absent | None" = None

    def __new__(cls) -> "Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "ABSENT"

    def __reduce__(self):
        return (Absent, ())

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


ABSENT: Final = Absent()


def is_absent(o: Any) -> bool:
    """Return True if `o` is the absence marker."""
    return o is ABSENT
