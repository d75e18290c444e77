"""Result types for fallible pipeline steps."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar('T')


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A step that produced a value."""
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A step that failed. `reason` is safe to show to the user."""
    reason: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Failure]
