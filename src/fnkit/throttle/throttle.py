"""Leading / trailing / debounce call throttle."""

import functools
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseTimerSource
from .timers import default_timer_source

logger = logging.getLogger(__name__)


class ThrottleOptions(BaseModel):
    """Configuration of a Throttled function, fixed at construction.

    Attributes
    ----------
    delay : float
        Minimum spacing between executions, in seconds of the timer source.
    leading : bool
        Execute the first call of a new window immediately.
    trailing : bool
        Execute the latest call of a window when the window closes.
    debounce : bool
        Every call made while a window is open pushes its deadline back.
    timer : BaseTimerSource
        Where the window timers are scheduled.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    delay: float = Field(..., ge=0)
    leading: bool = True
    trailing: bool = True
    debounce: bool = False
    timer: BaseTimerSource = Field(default_factory=default_timer_source)


@dataclass(frozen=True, slots=True)
class _PendingCall:
    args: tuple[Any, ...]
    kwargs: dict[str, Any]


class _ThrottleState:
    """Mutable state of one Throttled: open window, pending call, armed timer."""

    window_open: bool
    pending: _PendingCall | None
    handle: Any
    generation: int

    def __init__(self):
        self.window_open = False
        self.pending = None
        self.handle = None
        self.generation = 0


class Throttled[**P]:
    """A function wrapped to execute at most once per ``delay``.

    Calling the instance records the call. Depending on the options, the
    wrapped function runs right away (leading), when the window closes with
    the latest recorded arguments (trailing), or only after ``delay`` of
    silence (debounce). Only the most recent call of a window is kept.

    flush() runs the pending call now; clear() drops it and closes the window.
    The wrapped function's return value is not exposed and its exceptions
    propagate to whoever triggered the execution.
    """

    def __init__(self, fn: Callable[P, Any], options: ThrottleOptions):
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._options = options
        self._lock = threading.RLock()
        self._state = _ThrottleState()

    @property
    def options(self) -> ThrottleOptions:
        return self._options

    @property
    def window_open(self) -> bool:
        return self._state.window_open

    @property
    def has_pending(self) -> bool:
        return self._state.pending is not None

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> None:
        with self._lock:
            state = self._state
            call = _PendingCall(args, kwargs)

            if not state.window_open:
                # Arm first: a failing timer source must leave the limiter idle.
                self._arm()
                logger.debug(
                    "Opened window of %ss for %r", self._options.delay, self._fn
                )
                if self._options.leading:
                    self._execute(call)
                else:
                    state.pending = call
                return

            state.pending = call

            if self._options.debounce:
                self._disarm()
                self._arm()
                logger.debug("Debounce pushed deadline of %r", self._fn)

    def flush(self) -> None:
        """Execute the pending call now, if any, and restart the window.

        Does nothing when no window is open. With ``trailing=False`` the
        pending call is discarded instead of executed.
        """
        with self._lock:
            if not self._state.window_open:
                return
            logger.debug("Flushing %r", self._fn)
            self._disarm()
            self._close_window()

    def clear(self) -> None:
        """Cancel the open window and drop the pending call without running it."""
        with self._lock:
            if self._state.window_open:
                logger.debug("Clearing %r", self._fn)
            self._disarm()
            self._state.window_open = False
            self._state.pending = None

    def __repr__(self) -> str:
        return f"Throttled({self._fn!r}, delay={self._options.delay})"

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            # A timer cancelled by clear(), flush() or a debounce re-arm may
            # still fire on thread-based sources.
            if generation != self._state.generation:
                return
            self._state.handle = None
            self._close_window()

    def _close_window(self) -> None:
        state = self._state
        if state.pending is None:
            state.window_open = False
            logger.debug("Window of %r closed idle", self._fn)
            return

        # Keep the cadence: the window reopens whether or not we execute.
        # If arming fails the window stays open with the call pending, so a
        # later flush() can still deliver it.
        self._arm()
        call = self._take_pending()
        if self._options.trailing:
            self._execute(call)

    def _take_pending(self) -> _PendingCall | None:
        call, self._state.pending = self._state.pending, None
        return call

    def _execute(self, call: _PendingCall | None) -> None:
        if call is not None:
            self._fn(*call.args, **call.kwargs)

    def _arm(self) -> None:
        state = self._state
        state.generation += 1
        state.handle = self._options.timer.schedule(
            functools.partial(self._on_timer, state.generation), self._options.delay
        )
        state.window_open = True

    def _disarm(self) -> None:
        state = self._state
        state.generation += 1
        if state.handle is not None:
            self._options.timer.cancel(state.handle)
            state.handle = None


def throttle[**P](
    fn: Callable[P, Any],
    delay: float,
    *,
    leading: bool = True,
    trailing: bool = True,
    debounce: bool = False,
    timer: BaseTimerSource | None = None,
) -> Throttled[P]:
    """Wrap ``fn`` so it executes at most once every ``delay`` seconds.

    Parameters
    ----------
    fn : Callable
        The function to rate-limit. Its return value is discarded.
    delay : float
        Window length in seconds. Must be greater than or equal to 0.
    leading : bool, optional
        Execute the first call of a window immediately. Defaults to True.
    trailing : bool, optional
        Execute the latest call of a window when it closes. Defaults to True.
    debounce : bool, optional
        Push the window deadline back on every call. Defaults to False.
    timer : BaseTimerSource or None, optional
        Timer source to schedule windows on. Defaults to default_timer_source().

    Returns
    -------
    Throttled
        Callable with the same arguments as ``fn``, plus flush() and clear().

    Raises
    ------
    ValueError
        If delay is negative.

    Examples
    --------
    >>> from fnkit.throttle import ManualTimerSource
    >>> clock = ManualTimerSource()
    >>> calls = []
    >>> save = throttle(calls.append, 1.0, timer=clock)
    >>> save("a"); save("b"); save("c")
    >>> calls
    ['a']
    >>> clock.advance(1.0)
    >>> calls
    ['a', 'c']
    """
    options = ThrottleOptions(
        delay=delay,
        leading=leading,
        trailing=trailing,
        debounce=debounce,
        timer=timer if timer is not None else default_timer_source(),
    )
    return Throttled(fn, options)
