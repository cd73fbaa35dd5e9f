from collections.abc import Hashable, Mapping, Sequence
from functools import singledispatch
from typing import Any

from ordhash.lang.absent import ABSENT
from ordhash.lang.exception import MalformedInput, NotDiggable
from ordhash.lang.interfaces import IDiggable


class _CannotDig(Exception):
    """Internal signal from a ``dig_step`` implementation that `o` cannot be
    traversed with the given key."""


@singledispatch
def dig_step(o: Any, k: Hashable) -> Any:
    """Descend one level into `o` using the key or index `k`.

    Returns the value found or :py:data:`ordhash.lang.absent.ABSENT`. Raises
    ``_CannotDig`` if `o` is not a traversable value."""
    raise _CannotDig()


@dig_step.register(IDiggable)
def _dig_step_diggable(o: IDiggable, k: Hashable) -> Any:
    return o.dig_step(k)


@dig_step.register(Mapping)
def _dig_step_mapping(o: Mapping, k: Hashable) -> Any:
    return o.get(k, ABSENT)


@dig_step.register(Sequence)
def _dig_step_sequence(o: Sequence, k: Hashable) -> Any:
    if isinstance(o, (str, bytes, bytearray)):
        raise _CannotDig()
    if not isinstance(k, int) or isinstance(k, bool):
        raise _CannotDig()
    try:
        return o[k]
    except IndexError:
        return ABSENT


def dig(o: Any, *path: Hashable) -> Any:
    """Walk nested collections starting from `o`, one level per element of
    `path`.

    Lookups which miss and intermediate ``None`` values end the walk with
    ``ABSENT``. Descending into any other value which cannot be traversed raises
    :py:class:`ordhash.lang.exception.NotDiggable`."""
    if not path:
        raise MalformedInput("dig requires at least one key")

    current = o
    for k in path:
        if current is ABSENT or current is None:
            return ABSENT
        try:
            current = dig_step(current, k)
        except _CannotDig:
            raise NotDiggable(current, k, path) from None
    return current
