from abc import ABC, abstractmethod
from collections.abc import Hashable, Sized
from typing import Any, Generic, TypeVar

from ordhash.lang.obj import HashObject as _HashObject

K = TypeVar("K")
V = TypeVar("V")


class ICounted(Sized, ABC):
    """``ICounted`` is a marker interface for types can produce their length in
    constant time."""

    __slots__ = ()

    def is_empty(self) -> bool:
        return len(self) == 0

    def size(self) -> int:
        return len(self)


class ILookup(Generic[K, V], ABC):
    """``ILookup`` types allow accessing contained values by a key or index.

    ``val_at`` is the lenient accessor: it may consult a default policy but never
    raises for a missing key, returning :py:data:`ordhash.lang.absent.ABSENT`
    instead."""

    __slots__ = ()

    @abstractmethod
    def val_at(self, k: K) -> Any:
        raise NotImplementedError()


class IDiggable(ABC):
    """``IDiggable`` types can be traversed one level at a time by
    :py:meth:`ordhash.lang.hash.Hash.dig`.

    ``dig_step`` must return the value stored under `k` or
    :py:data:`ordhash.lang.absent.ABSENT`, and must never consult a default
    policy."""

    __slots__ = ()

    @abstractmethod
    def dig_step(self, k: Hashable) -> Any:
        raise NotImplementedError()


IHashObject = _HashObject
