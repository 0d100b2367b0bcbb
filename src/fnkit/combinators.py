"""Function combinators: argument reshaping, composition and arity."""

import functools
from collections.abc import Callable, Iterable
from typing import Any

from .operators import identity


def spread[R](fn: Callable[..., R]) -> Callable[[Iterable[Any]], R]:
    """Return a wrapper taking ``fn``'s positional arguments as one iterable."""

    def spreader(args: Iterable[Any]) -> R:
        return fn(*args)

    return spreader


def flip[A, B, R](fn: Callable[[A, B], R]) -> Callable[[B, A], R]:
    """Swap the two arguments of a binary function."""

    def flipped(b: B, a: A) -> R:
        return fn(a, b)

    return flipped


def partial[R](fn: Callable[..., R], *args: Any, **kwargs: Any) -> Callable[..., R]:
    """Bind leading positional (and keyword) arguments of ``fn``."""
    return functools.partial(fn, *args, **kwargs)


def _composed(fns: tuple[Callable[[Any], Any], ...], name: str) -> Callable[[Any], Any]:
    if not fns:
        return identity
    if len(fns) == 1:
        return fns[0]

    def composed(value: Any) -> Any:
        return functools.reduce(lambda acc, fn: fn(acc), fns, value)

    composed.__name__ = composed.__qualname__ = f"{name}{len(fns)}"
    return composed


def sequence(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Left-to-right composition: ``sequence(f, g)(x) == g(f(x))``.

    With no functions, returns identity.
    """
    return _composed(fns, "sequence")


def compose(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Right-to-left composition: ``compose(f, g)(x) == f(g(x))``.

    With no functions, returns identity.
    """
    return _composed(tuple(reversed(fns)), "compose")


def nary[R](n: int, fn: Callable[..., R]) -> Callable[..., R]:
    """Forward only the first ``n`` positional arguments to ``fn``.

    Parameters
    ----------
    n : int
        Number of positional arguments to keep. Must be greater than or equal to 0.
    fn : Callable
        Function to wrap.

    Returns
    -------
    Callable
        Wrapper that drops extra positional arguments. Keyword arguments are
        not forwarded.

    Raises
    ------
    ValueError
        If n is negative.

    Examples
    --------
    >>> list(map(nary(1, int), ["1", "2", "3"], [16, 16, 16]))
    [1, 2, 3]
    """
    if n < 0:
        raise ValueError("Arity must be greater than or equal to 0")

    def restricted(*args: Any, **_kwargs: Any) -> R:
        return fn(*args[:n])

    restricted.__name__ = restricted.__qualname__ = f"nary{n}"
    return restricted
