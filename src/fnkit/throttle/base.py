"""Timer source base class consumed by throttles.

A timer source runs a callback once, no earlier than a given delay, and can
cancel a callback it scheduled. Concrete sources are registered by ``kind`` so
throttle options that embed one can be serialized.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar

from pydantic import ConfigDict

from ..discriminated import Discriminated, discriminated_base

TimerCallback = Callable[[], Any]


@discriminated_base
class BaseTimerSource(Discriminated, ABC):
    """Abstract "call this later" capability.

    Subclasses must implement schedule() and cancel(). Handles are opaque to
    callers: they are only ever passed back to cancel() on the same source.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @abstractmethod
    def schedule(self, callback: TimerCallback, delay: float) -> Any:
        """Run ``callback()`` once, no earlier than ``delay`` seconds from now.

        Parameters
        ----------
        callback : Callable[[], Any]
            Zero-argument callable to run when the delay elapses.
        delay : float
            Minimum number of seconds to wait.

        Returns
        -------
        Any
            A handle that can be passed to cancel().
        """
        raise NotImplementedError

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Prevent a scheduled callback from running.

        Cancelling a handle whose callback already ran is a no-op.

        Parameters
        ----------
        handle : Any
            A handle previously returned by schedule() on this source.
        """
        raise NotImplementedError
