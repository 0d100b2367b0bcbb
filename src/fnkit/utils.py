"""Sentinel values shared across fnkit helpers."""

from typing import Final, Literal

from pydantic import BaseModel


class NotProvided(BaseModel):
    """Sentinel class to indicate that a value was not computed or supplied yet.

    Unlike ``None``, this lets helpers cache a ``None`` result.
    """

    __type__: Literal["not_provided"] = "not_provided"

    def __repr__(self) -> str:
        return "NOT_PROVIDED"


NOT_PROVIDED: Final = NotProvided()
