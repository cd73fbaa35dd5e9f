import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, TypeVar

import attr

from ordhash.lang.absent import ABSENT
from ordhash.lang.exception import MalformedInput

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

DefaultFn = Callable[[Any, Any], Any]


class DefaultPolicy(Generic[K, V], ABC):
    """A default policy produces a value for a key missing from a container.

    Policies are consulted only by the policy-aware accessors of
    :py:class:`ordhash.lang.hash.Hash` (``h[k]``, ``val_at`` and ``values_at``).
    The container itself never stores the value it receives from a policy; a
    policy may choose to do so."""

    __slots__ = ()

    @abstractmethod
    def resolve(self, container: Any, key: K) -> V:
        raise NotImplementedError()


@attr.frozen
class ConstantDefault(DefaultPolicy[K, V]):
    """Return the same `value` for every missing key.

    The value is not copied, so a mutable default is shared by every lookup
    which falls back to it."""

    value: V

    def resolve(self, container: Any, key: K) -> V:
        return self.value


@attr.frozen
class GeneratorDefault(DefaultPolicy[K, V]):
    """Compute the value for a missing key by calling ``fn(container, key)``.

    If `persist` is True, the computed value is stored in the container under
    `key` before it is returned, so later lookups find it without calling `fn`
    again. `fn` may also store values itself."""

    fn: DefaultFn = attr.field(validator=attr.validators.is_callable())
    persist: bool = False

    def resolve(self, container: Any, key: K) -> V:
        v = self.fn(container, key)
        if self.persist:
            logger.debug("Persisting generated default for key %r", key)
            container.store(key, v)
        return v


def policy_from(
    default: Any = ABSENT,
    fn: Optional[DefaultFn] = None,
    persist: bool = False,
) -> Optional[DefaultPolicy]:
    """Coerce the default arguments accepted by container constructors into a
    policy, or None if neither a default value nor a function was given."""
    if default is not ABSENT and fn is not None:
        raise MalformedInput(
            "Cannot specify both a default value and a default function",
            {"default": default},
        )
    if fn is not None:
        return GeneratorDefault(fn, persist=persist)
    if persist:
        raise MalformedInput("Only a default function can persist its values")
    if default is not ABSENT:
        return ConstantDefault(default)
    return None
