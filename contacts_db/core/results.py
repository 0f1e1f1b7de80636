from dataclasses import dataclass
from typing import Generic, TypeVar, Union, Optional

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """ Storage-layer failure returned instead of raising. `reason` is meant for the user. """
    reason: str
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure]
