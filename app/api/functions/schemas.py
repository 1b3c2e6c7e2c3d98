from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class CallableIn(BaseModel):
    """Callable request envelope: ``{"data": <payload>}``. ``data`` may be null."""

    data: Any


class CallableOut(BaseModel, Generic[T]):
    """Callable success envelope: ``{"result": <value>}``."""

    result: T


def field_of(data: Any, name: str) -> Any:
    """Read a payload field without validating it; missing or non-object data gives None."""
    if isinstance(data, dict):
        return data.get(name)
    return None
