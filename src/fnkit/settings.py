import os
from typing import Literal

from pydantic import BaseModel, ConfigDict

TimerSourceName = Literal["auto", "asyncio", "thread"]


class FnkitSettings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    # Timer source used by throttles when none is passed explicitly.
    # "auto" picks asyncio inside a running event loop, a thread timer otherwise.
    timer_source: TimerSourceName = os.environ.get(  # pyright: ignore[reportAssignmentType]
        "FNKIT_TIMER_SOURCE", "auto"
    ).lower()


FNKIT_SETTINGS = FnkitSettings()
