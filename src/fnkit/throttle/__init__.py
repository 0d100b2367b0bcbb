"""Call throttling: run a function at most once per window.

Provides Throttled (the rate-limited callable), ThrottleOptions, the
throttle() factory, and the timer sources windows are scheduled on.
"""

from .base import BaseTimerSource
from .throttle import Throttled, ThrottleOptions, throttle
from .timers import (
    AsyncioTimerSource,
    ManualTimerSource,
    ThreadTimerSource,
    default_timer_source,
)

__all__ = [
    "throttle",
    "Throttled",
    "ThrottleOptions",
    # Timer sources
    "BaseTimerSource",
    "AsyncioTimerSource",
    "ThreadTimerSource",
    "ManualTimerSource",
    "default_timer_source",
]
