"""Tagged parse results.

Parsing an operation fails often and for ordinary reasons (an unsupported
URL shape, a parameter without enum values), so failures are returned as
values instead of raised.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    reason: str

    @property
    def ok(self) -> bool:
        return False


ParseResult = Union[Success[T], Failure]
