"""Build functions that read a property or call a method on their operand."""

import operator
from collections.abc import Callable, Hashable, Mapping
from typing import Any


def _lookup(obj: Any, key: Hashable, default: Any) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key, default)
    if isinstance(key, str):
        return getattr(obj, key, default)
    try:
        return operator.getitem(obj, key)
    except (IndexError, KeyError, TypeError):
        return default


def prop(key: Hashable) -> Callable[[Any], Any]:
    """Return a function that fetches ``key`` from its operand.

    Mappings are read with ``.get``, string keys on other objects with
    ``getattr`` and any other key by indexing, so ``prop(0)`` reads the first
    item of a list. A missing key or out-of-range index gives ``None``.

    Examples
    --------
    >>> get_foo = prop("foo")
    >>> get_foo({"foo": 123}), get_foo({})
    (123, None)
    """

    def getter(obj: Any) -> Any:
        return _lookup(obj, key, None)

    return getter


def invoke(key: Hashable, *args: Any, **kwargs: Any) -> Callable[[Any], Any]:
    """Return a function that calls method ``key`` on its operand.

    Extra arguments are forwarded to the method. Raises ``AttributeError`` when
    the operand has no such method.

    Examples
    --------
    >>> invoke("upper")("abc")
    'ABC'
    >>> invoke("add", 3, 7)({"add": lambda a, b: a + b})
    10
    """
    missing = object()

    def caller(obj: Any) -> Any:
        method = _lookup(obj, key, missing)
        if method is missing:
            raise AttributeError(f"{type(obj).__name__!r} has no method {key!r}")
        return method(*args, **kwargs)

    return caller
