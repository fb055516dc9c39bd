"""Base class for the frozen record models.

Pydantic reports bad input as ``pydantic.ValidationError``. Models built on
SnapshotModel report it as InvalidArgumentError instead, naming the first
failing field, so callers only ever handle CompanionError subclasses.
"""

from __future__ import annotations

from typing import Any, Self

import pydantic
from pydantic import BaseModel, ConfigDict

from rpg_companion.core.exceptions import InvalidArgumentError


def invalid_argument_from(exc: pydantic.ValidationError) -> InvalidArgumentError:
    """Translate the first error of a pydantic failure.

    Model-level errors (such as HP above CON) have no field and carry no
    ``argument``.
    """
    error = exc.errors()[0]
    argument = ".".join(str(part) for part in error["loc"]) or None
    invalid_value = error.get("input") if argument and error["type"] != "missing" else None
    return InvalidArgumentError(
        error["msg"].removeprefix("Value error, "),
        argument=argument,
        invalid_value=invalid_value,
    )


class SnapshotModel(BaseModel):
    """Frozen pydantic model that fails with InvalidArgumentError."""

    model_config = ConfigDict(frozen=True)

    def __init__(self, /, **data: Any) -> None:
        try:
            super().__init__(**data)
        except pydantic.ValidationError as exc:
            raise invalid_argument_from(exc) from exc

    @classmethod
    def model_validate(cls, obj: Any, **kwargs: Any) -> Self:
        try:
            return super().model_validate(obj, **kwargs)
        except pydantic.ValidationError as exc:
            raise invalid_argument_from(exc) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except pydantic.ValidationError as exc:
            raise invalid_argument_from(exc) from exc


__all__ = ["SnapshotModel", "invalid_argument_from"]
