"""
Ok / Err values returned by the MIME collaborators instead of raising.

Callers decide where an `Err` becomes an exception; `unwrap()` raises the
carried error as-is.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from mailforge.errors import MailforgeError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: MailforgeError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error


Result = Union[Ok[T], Err]
