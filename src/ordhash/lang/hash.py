import logging
from collections.abc import Hashable, Iterable, Iterator, Mapping, MutableMapping
from typing import Any, Callable, Optional, TypeVar, Union

from typing_extensions import Self, Unpack

from ordhash.lang.absent import ABSENT
from ordhash.lang.dig import dig as _dig
from ordhash.lang.exception import KeyNotFound, MalformedInput
from ordhash.lang.interfaces import ICounted, IDiggable, IHashObject, ILookup
from ordhash.lang.obj import PrintSettings, map_hrepr
from ordhash.lang.policy import DefaultFn, DefaultPolicy, policy_from

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

Members = Union[Mapping[K, V], Iterable[tuple[K, V]]]
MergeFunction = Callable[[K, V, V], V]


def _entries(members: Members) -> Iterator[tuple[K, V]]:
    """Yield the (key, value) pairs of a mapping or of an iterable of pairs,
    checking that each pair really is a pair."""
    if isinstance(members, Mapping):
        yield from members.items()
        return

    if not isinstance(members, Iterable):
        raise MalformedInput(
            "Hash members must be a mapping or an iterable of pairs",
            {"members": members},
        )

    for i, elem in enumerate(members):
        try:
            k, v = elem
        except (TypeError, ValueError) as e:
            raise MalformedInput(
                "Hash members must be (key, value) pairs",
                {"index": i, "element": elem},
            ) from e
        yield k, v


class Hash(IDiggable, ILookup[K, V], ICounted, IHashObject, MutableMapping[K, V]):
    """An insertion-ordered mutable mapping with an optional default policy.

    Keys are unique. Overwriting a key keeps its position; deleting a key and
    adding it again moves it to the end.

    There are several flavors of lookup, which differ in how they treat a
    missing key:

    - ``get`` and ``fetch`` never consult the default policy;
    - ``h[k]`` and ``val_at`` consult it, and if there is none ``h[k]`` raises
      :py:class:`ordhash.lang.exception.KeyNotFound` while ``val_at`` returns
      :py:data:`ordhash.lang.absent.ABSENT`.

    The container never stores a value produced by its policy; see
    :py:class:`ordhash.lang.policy.GeneratorDefault` for policies which do.

    Copies (``Hash(other)``, ``copy``, ``merge`` and friends) are shallow."""

    __slots__ = ("_inner", "_policy")

    def __init__(
        self,
        members: Optional[Members] = None,
        policy: Optional[DefaultPolicy] = None,
    ) -> None:
        self._inner: dict[K, V] = {}
        self._policy = policy
        if members is not None:
            for k, v in _entries(members):
                self._inner[k] = v

    def __contains__(self, item):
        return item in self._inner

    def __delitem__(self, key):
        try:
            del self._inner[key]
        except KeyError:
            raise KeyNotFound(key, receiver=self) from None

    def __getitem__(self, key):
        try:
            return self._inner[key]
        except KeyError:
            pass
        if self._policy is None:
            raise KeyNotFound(key, receiver=self)
        return self._resolve_default(key)

    def __iter__(self):
        return iter(self._inner)

    def __len__(self):
        return len(self._inner)

    def __setitem__(self, key, value):
        self._inner[key] = value

    def __reduce__(self):
        return (Hash, (list(self._inner.items()), self._policy))

    def _hrepr(self, **kwargs: Unpack[PrintSettings]) -> str:
        return map_hrepr(self._inner.items, start="{", end="}", **kwargs)

    def _resolve_default(self, key: K) -> V:
        assert self._policy is not None
        logger.debug("Resolving default value for missing key %r", key)
        return self._policy.resolve(self, key)

    def _new(self, members: Optional[Members] = None) -> "Hash[K, V]":
        return Hash(members, policy=self._policy)

    @property
    def policy(self) -> Optional[DefaultPolicy]:
        return self._policy

    @policy.setter
    def policy(self, policy: Optional[DefaultPolicy]) -> None:
        self._policy = policy

    # Lookup

    def get(self, key, default=ABSENT):  # type: ignore[override]
        return self._inner.get(key, default)

    def val_at(self, k):
        try:
            return self._inner[k]
        except KeyError:
            pass
        if self._policy is None:
            return ABSENT
        return self._resolve_default(k)

    def fetch(self, key, default=ABSENT, fn: Optional[Callable[[K], V]] = None):
        """Return the value stored under `key`.

        A missing key returns `default` if it was given, else the result of
        ``fn(key)`` if `fn` was given, else raises ``KeyNotFound``. The default
        policy is never consulted."""
        try:
            return self._inner[key]
        except KeyError:
            pass
        if default is not ABSENT:
            return default
        if fn is not None:
            return fn(key)
        raise KeyNotFound(key, receiver=self)

    def fetch_values(self, *keys: K, fn: Optional[Callable[[K], V]] = None) -> list:
        """Return the values for `keys` in order.

        Without `fn` this is all-or-nothing: the first missing key raises
        ``KeyNotFound``. With `fn`, each missing key is replaced by
        ``fn(key)``."""
        vals = []
        for k in keys:
            try:
                vals.append(self._inner[k])
            except KeyError:
                if fn is None:
                    raise KeyNotFound(k, receiver=self) from None
                vals.append(fn(k))
        return vals

    def values_at(self, *keys: K) -> list:
        return [self.val_at(k) for k in keys]

    def entry(self, k: K) -> Union[tuple[K, V], Any]:
        v = self._inner.get(k, ABSENT)
        if v is ABSENT:
            return ABSENT
        return (k, v)

    def dig_step(self, k: Hashable) -> Any:
        return self._inner.get(k, ABSENT)

    def dig(self, *path: Hashable) -> Any:
        return _dig(self, *path)

    # Mutation

    def set(self, key: K, value: V) -> Self:
        self._inner[key] = value
        return self

    store = set

    def delete(self, key: K) -> Any:
        return self._inner.pop(key, ABSENT)

    def pop(self, key, *args):  # type: ignore[override]
        if key not in self._inner and not args:
            raise KeyNotFound(key, receiver=self)
        return self._inner.pop(key, *args)

    def setdefault(self, key, default=None):
        return self._inner.setdefault(key, default)

    def clear(self) -> None:
        self._inner.clear()

    def update(self, *others: Members) -> Self:  # type: ignore[override]
        """Merge `others` into this hash in place. Every member of `others` is
        checked before the hash is changed, so a malformed member leaves it
        untouched."""
        entries = [e for other in others for e in _entries(other)]
        self._inner.update(entries)
        return self

    def update_with(self, fn: MergeFunction, *others: Members) -> Self:
        """Merge `others` into this hash in place, calling ``fn(key, old, new)``
        to produce the value for any key already present.

        Merged values are staged and committed together; if a member of
        `others` is malformed or `fn` raises, the hash is left untouched."""
        staged: dict = {}
        for k, v in [e for other in others for e in _entries(other)]:
            if k in staged:
                staged[k] = fn(k, staged[k], v)
            elif k in self._inner:
                staged[k] = fn(k, self._inner[k], v)
            else:
                staged[k] = v
        self._inner.update(staged)
        return self

    def merge(self, *others: Members) -> "Hash[K, V]":
        return self.copy().update(*others)

    def merge_with(self, fn: MergeFunction, *others: Members) -> "Hash[K, V]":
        return self.copy().update_with(fn, *others)

    def invert(self) -> "Hash[V, K]":
        """Return a new hash mapping each value to its key.

        Values are not required to be unique; when several keys share a value,
        the key which comes last in iteration order wins."""
        inverted: Hash[V, K] = Hash()
        for k, v in self._inner.items():
            if logger.isEnabledFor(logging.DEBUG) and v in inverted._inner:
                logger.debug(
                    "Inverted key %r replaces key %r for value %r",
                    k,
                    inverted._inner[v],
                    v,
                )
            inverted._inner[v] = k
        return inverted

    def replace(self, other: Members) -> Self:
        entries = list(_entries(other))
        self._inner.clear()
        self._inner.update(entries)
        return self

    def copy(self) -> "Hash[K, V]":
        return self._new(self._inner.items())

    # Filtering

    def select(self, pred: Callable[[K, V], Any]) -> "Hash[K, V]":
        return self._new((k, v) for k, v in self._inner.items() if pred(k, v))

    def reject(self, pred: Callable[[K, V], Any]) -> "Hash[K, V]":
        return self._new((k, v) for k, v in self._inner.items() if not pred(k, v))

    # Query

    def contains(self, k: K) -> bool:
        return k in self._inner

    has_key = include = key = member = contains

    def has_value(self, v: V) -> bool:
        return any(stored == v for stored in self._inner.values())

    value = has_value


def hash_map(*kvs, policy: Optional[DefaultPolicy] = None) -> Hash:
    """Create a new hash from alternating keys and values."""
    if len(kvs) % 2 != 0:
        raise MalformedInput(
            "hash_map requires an even number of arguments", {"count": len(kvs)}
        )
    return Hash(zip(kvs[::2], kvs[1::2]), policy=policy)


def from_pairs(
    pairs: Iterable[tuple[K, V]], policy: Optional[DefaultPolicy] = None
) -> Hash[K, V]:
    """Create a new hash from an iterable of (key, value) pairs."""
    return Hash(pairs, policy=policy)


def h(**kvs) -> Hash[str, Any]:
    """Create a new hash from keyword arguments."""
    return Hash(kvs)


def defaulting(value: V, members: Optional[Members] = None) -> Hash[Any, V]:
    """Create a new hash which returns `value` for missing keys."""
    return Hash(members, policy=policy_from(default=value))


def generating(
    fn: DefaultFn, members: Optional[Members] = None, persist: bool = False
) -> Hash:
    """Create a new hash which calls ``fn(hash, key)`` for missing keys,
    storing the result if `persist` is True."""
    return Hash(members, policy=policy_from(fn=fn, persist=persist))
