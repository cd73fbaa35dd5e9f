from abc import ABC, abstractmethod
from collections.abc import Iterable
from functools import singledispatch
from itertools import islice
from typing import Any, Callable, Union, cast

from typing_extensions import TypedDict, Unpack

PrintCountSetting = Union[bool, int, None]

SURPASSED_PRINT_LENGTH = "..."
SURPASSED_PRINT_LEVEL = "#"

PRINT_LENGTH: PrintCountSetting = None
PRINT_LEVEL: PrintCountSetting = None
PRINT_SEPARATOR = ", "
ENTRY_SEPARATOR = " => "


class PrintSettings(TypedDict, total=False):
    print_length: PrintCountSetting
    print_level: PrintCountSetting


def _dec_print_level(lvl: PrintCountSetting) -> PrintCountSetting:
    """Decrement the print level if it is numeric."""
    if isinstance(lvl, int) and not isinstance(lvl, bool):
        return lvl - 1
    return lvl


def _surpassed_level(lvl: PrintCountSetting) -> bool:
    return isinstance(lvl, int) and not isinstance(lvl, bool) and lvl < 1


def _limit_length(items: Iterable[str], print_length: PrintCountSetting) -> list[str]:
    if isinstance(print_length, int) and not isinstance(print_length, bool):
        limited = list(islice(items, print_length + 1))
        if len(limited) > print_length:
            limited.pop()
            limited.append(SURPASSED_PRINT_LENGTH)
        return limited
    return list(items)


def process_hrepr_kwargs(**kwargs: Unpack[PrintSettings]) -> PrintSettings:
    """Process keyword arguments, decreasing the print-level. Should be called
    after examining the print level for the current level."""
    return cast(
        PrintSettings,
        dict(
            kwargs, print_level=_dec_print_level(kwargs.get("print_level", PRINT_LEVEL))
        ),
    )


class HashObject(ABC):
    """Abstract base class for objects which print themselves with
    :py:func:`hrepr` for both ``__repr__`` and ``__str__``.

    .. note::

       Callers should use :py:class:`ordhash.lang.interfaces.IHashObject` as their
       main interface. This interface is defined here so it may be used in
       ``isinstance`` checks below without a circular dependency."""

    __slots__ = ()

    def __repr__(self):
        return self.hrepr()

    def __str__(self):
        return self.hrepr()

    @abstractmethod
    def _hrepr(self, **kwargs: Unpack[PrintSettings]) -> str:
        """Private representation method. Callers (including object internal
        callers) should not call this method directly, but instead should use
        the module function :py:func:`hrepr` ."""
        raise NotImplementedError()

    def hrepr(self, **kwargs: Unpack[PrintSettings]) -> str:
        return hrepr(self, **kwargs)


def seq_hrepr(
    iterable: Iterable[Any], start: str, end: str, **kwargs: Unpack[PrintSettings]
) -> str:
    """Produce a representation of a sequential collection, bookended with the
    start and end string supplied. The keyword arguments will be passed along to
    hrepr for the sequence elements."""
    if _surpassed_level(kwargs.get("print_level", PRINT_LEVEL)):
        return SURPASSED_PRINT_LEVEL

    kwargs = process_hrepr_kwargs(**kwargs)
    items = _limit_length(
        (hrepr(o, **kwargs) for o in iterable),
        kwargs.get("print_length", PRINT_LENGTH),
    )
    return f"{start}{PRINT_SEPARATOR.join(items)}{end}"


def map_hrepr(
    entries: Callable[[], Iterable[tuple[Any, Any]]],
    start: str = "{",
    end: str = "}",
    **kwargs: Unpack[PrintSettings],
) -> str:
    """Produce a representation of an associative collection, bookended with the
    start and end string supplied. The entries argument must be a callable which
    will produce tuples of key-value pairs."""
    if _surpassed_level(kwargs.get("print_level", PRINT_LEVEL)):
        return SURPASSED_PRINT_LEVEL

    kwargs = process_hrepr_kwargs(**kwargs)

    def entry_reprs():
        for k, v in entries():
            yield f"{hrepr(k, **kwargs)}{ENTRY_SEPARATOR}{hrepr(v, **kwargs)}"

    items = _limit_length(entry_reprs(), kwargs.get("print_length", PRINT_LENGTH))
    return f"{start}{PRINT_SEPARATOR.join(items)}{end}"


# pylint: disable=unused-argument
@singledispatch
def hrepr(
    o: Any,
    print_length: PrintCountSetting = PRINT_LENGTH,
    print_level: PrintCountSetting = PRINT_LEVEL,
) -> str:
    """Return a string representation of an object as it appears inside a Hash.

    Permissible keyword arguments are:
    - print_length: the number of items in a collection which will be printed,
                    or no limit if bound to a logical falsey value (default: nil)
    - print_level: the depth of the object graph to print, starting with 0, or
                   no limit if bound to a logical falsey value (default: nil)

    Scalars use their Python ``repr``."""
    return repr(o)


@hrepr.register(HashObject)
def _hrepr_hash_obj(
    o: Any,
    print_length: PrintCountSetting = PRINT_LENGTH,
    print_level: PrintCountSetting = PRINT_LEVEL,
) -> str:
    return o._hrepr(print_length=print_length, print_level=print_level)


@hrepr.register(dict)
def _hrepr_py_dict(o: dict, **kwargs: Unpack[PrintSettings]) -> str:
    return map_hrepr(o.items, "{", "}", **kwargs)


@hrepr.register(list)
def _hrepr_py_list(o: list, **kwargs: Unpack[PrintSettings]) -> str:
    return seq_hrepr(o, "[", "]", **kwargs)


@hrepr.register(tuple)
def _hrepr_py_tuple(o: tuple, **kwargs: Unpack[PrintSettings]) -> str:
    if len(o) == 1:
        return seq_hrepr(o, "(", ",)", **kwargs)
    return seq_hrepr(o, "(", ")", **kwargs)
