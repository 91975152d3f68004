from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import ParseError

# Key used for records without a gender token in the nested grouping.
UNSET_GENDER: Optional[str] = None


@dataclass(frozen=True)
class Person:
    name: str                      # first token, not unique
    age: int                       # second token, >= 0
    gender: Optional[str] = None   # third token, None when the line has only two

    def __str__(self) -> str:
        if self.gender is None:
            return f"{self.name} ({self.age})"
        return f"{self.name} ({self.age}, {self.gender})"


@dataclass(frozen=True)
class LoadResult:
    """
    Records read before the loader stopped, plus the error that stopped it.
    `error` is None when every line was consumed.
    """
    persons: Tuple[Person, ...]
    error: Optional["ParseError"] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> Tuple[Person, ...]:
        if self.error is not None:
            raise self.error
        return self.persons
