import functools
import sys
import traceback
from collections.abc import Hashable
from types import TracebackType
from typing import Any, Optional

import attr

from ordhash.lang.obj import hrepr


class HashError(Exception):
    """Base class for every error raised by ordhash containers."""


@attr.define(repr=False, str=False)
class KeyNotFound(HashError, KeyError):
    """Raised by strict accessors when a required key is absent and no default
    or substitute was supplied."""

    key: Any
    receiver: Optional[Any] = attr.field(default=None, eq=False)

    def __repr__(self):
        return f"ordhash.lang.exception.KeyNotFound({hrepr(self.key)})"

    def __str__(self):
        return f"key not found: {hrepr(self.key)}"


@attr.define(repr=False, str=False)
class NotDiggable(HashError, TypeError):
    """Raised by ``dig`` when a non-final path element resolves to a value which
    cannot be traversed any further."""

    value: Any
    key: Hashable
    path: tuple = ()

    def __repr__(self):
        return (
            f"ordhash.lang.exception.NotDiggable({hrepr(self.value)}, "
            f"{hrepr(self.key)})"
        )

    def __str__(self):
        return (
            f"cannot dig into {type(self.value).__name__} value "
            f"(looking up {hrepr(self.key)} in path {hrepr(self.path)})"
        )


@attr.define(repr=False, str=False)
class MalformedInput(HashError, ValueError):
    """Raised when a container cannot be built from its input, such as an odd
    number of alternating keys and values."""

    message: str
    data: dict = attr.Factory(dict)

    def __repr__(self):
        return f"ordhash.lang.exception.MalformedInput({self.message}, {hrepr(self.data)})"

    def __str__(self):
        if self.data:
            return f"{self.message} {hrepr(self.data)}"
        return self.message


@functools.singledispatch
def format_exception(
    e: Optional[BaseException],
    tp: Optional[type[BaseException]] = None,
    tb: Optional[TracebackType] = None,
) -> list[str]:
    """Format an exception into something readable, returning a list of newline
    terminated strings.

    For most exceptions, this will just be the result from calling
    `traceback.format_exception`. ordhash errors are rendered as a single line
    naming the error type and its message."""
    if isinstance(e, BaseException):
        if tp is None:
            tp = type(e)
        if tb is None:
            tb = e.__traceback__
    return traceback.format_exception(tp, e, tb)


@format_exception.register(HashError)
def format_hash_error(
    e: HashError,
    tp: Optional[type[BaseException]] = None,
    tb: Optional[TracebackType] = None,
) -> list[str]:
    return [f"{type(e).__name__}: {e}\n"]


def print_exception(
    e: Optional[BaseException],
    tp: Optional[type[BaseException]] = None,
    tb: Optional[TracebackType] = None,
) -> None:
    """Print the given exception `e` using ordhash's own exception formatting."""
    print("".join(format_exception(e, tp, tb)), file=sys.stderr)
