from typing import Any

import pytest
from fnkit.throttle import ManualTimerSource


class CallRecorder:
    """Records every call made to it along with the manual clock time."""

    def __init__(self, clock: ManualTimerSource | None = None):
        self.clock = clock
        self.calls: list[tuple[tuple[Any, ...], dict[str, Any]]] = []
        self.times: list[float] = []

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.calls.append((args, kwargs))
        if self.clock is not None:
            self.times.append(self.clock.now)

    @property
    def count(self) -> int:
        return len(self.calls)

    @property
    def first_args(self) -> list[Any]:
        return [args[0] for args, _ in self.calls]


@pytest.fixture
def clock() -> ManualTimerSource:
    """Manual clock; throttle tests use it in milliseconds."""
    return ManualTimerSource()


@pytest.fixture
def recorder(clock: ManualTimerSource) -> CallRecorder:
    return CallRecorder(clock)

