import sys
from typing import Any, Callable

from pydantic import BaseModel, GetCoreSchemaHandler, computed_field
from pydantic_core import core_schema

CURRENT_MODULE_NAME = sys.modules[__name__].__name__


class _KindRegistry:
    def __init__(self):
        self._kinds_by_base: dict[type, dict[str, type]] = {}
        self._kind_of: dict[type, str] = {}

    def register_base(self, base_cls: type) -> None:
        if not issubclass(base_cls, Discriminated):
            raise ValueError(f"Class {base_cls} is not a subclass of Discriminated")

        if base_cls in self._kinds_by_base:
            raise ValueError(f"Class {base_cls} is already registered")

        self._kinds_by_base[base_cls] = {}

    def find_base(self, cls: type) -> type | None:
        for candidate in cls.__mro__:
            if candidate in self._kinds_by_base:
                return candidate
        return None

    def register_kind(self, base_cls: type, subclass: type, kind: str) -> None:
        if not issubclass(subclass, base_cls):
            raise ValueError(f"Class {subclass} is not a subclass of {base_cls}")

        root = self.find_base(base_cls)
        if root is None:
            raise ValueError(
                f"Class {base_cls} is not registered with @discriminated_base"
            )

        kinds = self._kinds_by_base[root]
        if kind in kinds:
            raise ValueError(f"Kind {kind} is already registered for {root}")

        kinds[kind] = subclass
        self._kind_of[subclass] = kind

    def kind_of(self, cls: type) -> str | None:
        return self._kind_of.get(cls)

    def resolve(self, base_cls: type, kind: str) -> type:
        kinds = self._kinds_by_base.get(base_cls, {})
        if kind not in kinds:
            raise ValueError(f"Kind {kind} is not registered for class {base_cls}")
        return kinds[kind]

    def kinds(self, base_cls: type) -> list[str]:
        return sorted(self._kinds_by_base.get(base_cls, {}))


_REGISTRY = _KindRegistry()


class Discriminated(BaseModel):
    """Pydantic model serialized with a ``kind`` tag naming its concrete class."""

    @computed_field
    def kind(self) -> str | None:
        """The registered kind of this instance's class, or None if unregistered."""
        return _REGISTRY.kind_of(type(self))

    @classmethod
    def register[T](cls, kind: str) -> Callable[[type[T]], type[T]]:
        def decorator(subclass: type[T]) -> type[T]:
            _REGISTRY.register_kind(cls, subclass, kind)
            return subclass

        return decorator

    @classmethod
    def registered_kinds(cls) -> list[str]:
        root = _REGISTRY.find_base(cls)
        return _REGISTRY.kinds(root) if root is not None else []

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # Only direct subclasses of Discriminated dispatch on ``kind``; concrete
        # kinds validate as plain models.
        if not any(
            base.__name__ == "Discriminated" and base.__module__ == CURRENT_MODULE_NAME
            for base in cls.__bases__
        ):
            return handler(source)

        def validate_by_kind(value: Any) -> Any:
            if isinstance(value, cls):
                return value
            if isinstance(value, str):
                value = {"kind": value}
            elif not isinstance(value, dict):
                raise ValueError(f"Value {value} is not a dictionary")

            if "kind" not in value:
                raise ValueError(f"Kind is not provided for class {cls}")

            kind = value["kind"]
            if not isinstance(kind, str):
                raise ValueError(f"Kind is expected to be a string, got {type(kind)}")

            return _REGISTRY.resolve(cls, kind).model_validate(value)

        return core_schema.no_info_plain_validator_function(validate_by_kind)


def discriminated_base[T](cls: type[T]) -> type[T]:
    """Mark a class as the base of a family of kinds.

    Parameters
    ----------
    cls : type
        The base class to register.

    Returns
    -------
    type
        The same class, now accepting ``{"kind": ...}`` payloads on validation.

    Examples
    --------
    >>> @discriminated_base
    ... class BaseTimerSource(Discriminated):
    ...     ...
    """
    _REGISTRY.register_base(cls)
    return cls
