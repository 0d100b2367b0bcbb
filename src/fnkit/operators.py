"""Arithmetic operators and constant functions as plain callables."""

from collections.abc import Callable


def add(a: float, b: float) -> float:
    return a + b


def subtract(a: float, b: float) -> float:
    return a - b


def multiply(a: float, b: float) -> float:
    return a * b


def divide(a: float, b: float) -> float:
    return a / b


def identity[T](value: T) -> T:
    """Return ``value`` unchanged."""
    return value


def always[T](value: T) -> Callable[..., T]:
    """Return a function that ignores its arguments and returns ``value``.

    Examples
    --------
    >>> answer = always(42)
    >>> answer(), answer("ignored")
    (42, 42)
    """

    def constant(*_args, **_kwargs) -> T:
        return value

    return constant
