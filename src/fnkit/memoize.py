"""Memoization helpers."""

import functools
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol

from .utils import NOT_PROVIDED, NotProvided


class Cache[K, V](Protocol):
    """Minimum mapping interface memoize() needs from a cache.

    Any ``dict`` satisfies it; a custom implementation can add eviction.
    """

    def __contains__(self, key: object, /) -> bool: ...

    def __getitem__(self, key: K, /) -> V: ...

    def __setitem__(self, key: K, value: V, /) -> None: ...


def memoize[K, V](
    fn: Callable[[K], V], cache: Cache[K, V] | None = None
) -> Callable[[K], V]:
    """Cache the results of a single-argument function by argument.

    Parameters
    ----------
    fn : Callable[[K], V]
        Function to memoize. Its argument must be usable as a cache key.
    cache : Cache or None, optional
        Storage for results. A new dict is used when omitted.

    Returns
    -------
    Callable[[K], V]
        Function returning the cached result for previously seen arguments.
    """
    store: Cache[K, V] = {} if cache is None else cache

    @functools.wraps(fn)
    def memoized(arg: K) -> V:
        if arg in store:
            return store[arg]

        result = fn(arg)
        store[arg] = result
        return result

    return memoized


def memoize0[V](fn: Callable[[], V]) -> Callable[[], V]:
    """Call ``fn`` on first use only and return that result from then on."""
    result: V | NotProvided = NOT_PROVIDED

    @functools.wraps(fn)
    def memoized() -> V:
        nonlocal result
        if result is NOT_PROVIDED:
            result = fn()
        return result  # pyright: ignore[reportReturnType]

    return memoized


def args_equal(prev: Sequence[Any], next: Sequence[Any]) -> bool:
    """Compare two argument sequences element-wise by identity."""
    if len(prev) != len(next):
        return False

    return all(a is b for a, b in zip(prev, next))


def _kwargs_equal(prev: Mapping[str, Any], next: Mapping[str, Any]) -> bool:
    if prev.keys() != next.keys():
        return False

    return all(prev[key] is next[key] for key in prev)


def memoize_one[R](fn: Callable[..., R]) -> Callable[..., R]:
    """Cache only the result of the most recent call.

    The function is called again whenever any argument differs from the
    previous call's (compared by identity).
    """
    last_args: tuple[Any, ...] | None = None
    last_kwargs: dict[str, Any] = {}
    result: R | NotProvided = NOT_PROVIDED

    @functools.wraps(fn)
    def memoized(*args: Any, **kwargs: Any) -> R:
        nonlocal last_args, last_kwargs, result
        if (
            last_args is None
            or not args_equal(last_args, args)
            or not _kwargs_equal(last_kwargs, kwargs)
        ):
            result = fn(*args, **kwargs)
            last_args, last_kwargs = args, kwargs
        return result  # pyright: ignore[reportReturnType]

    return memoized
