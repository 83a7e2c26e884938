"""Shared field types for response contracts."""

from typing import Annotated, Any, TypeVar

from pydantic import BeforeValidator

T = TypeVar("T")


def _none_as_empty(value: Any) -> Any:
    # The backend serializes empty slices as null
    return [] if value is None else value


NullableList = Annotated[list[T], BeforeValidator(_none_as_empty)]
