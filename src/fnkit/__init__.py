"""Small functional helpers and a call throttle.

The throttle (``fnkit.throttle``) rate-limits an arbitrary function with
leading, trailing and debounce modes. The rest are stateless building blocks:
arithmetic operators, identity and constants, memoization, accessors,
partial application, composition and arity restriction.
"""

from .accessors import invoke, prop
from .combinators import compose, flip, nary, partial, sequence, spread
from .memoize import Cache, args_equal, memoize, memoize0, memoize_one
from .operators import add, always, divide, identity, multiply, subtract
from .throttle import (
    AsyncioTimerSource,
    BaseTimerSource,
    ManualTimerSource,
    ThreadTimerSource,
    Throttled,
    ThrottleOptions,
    throttle,
)
from .utils import NOT_PROVIDED, NotProvided

__all__ = [
    # Throttling
    "throttle",
    "Throttled",
    "ThrottleOptions",
    "BaseTimerSource",
    "AsyncioTimerSource",
    "ThreadTimerSource",
    "ManualTimerSource",
    # Operators
    "add",
    "subtract",
    "multiply",
    "divide",
    "identity",
    "always",
    # Memoization
    "Cache",
    "memoize",
    "memoize0",
    "memoize_one",
    "args_equal",
    # Accessors
    "prop",
    "invoke",
    # Combinators
    "spread",
    "flip",
    "partial",
    "sequence",
    "compose",
    "nary",
    # Utilities
    "NotProvided",
    "NOT_PROVIDED",
]
