from __future__ import annotations

from typing import Optional


class PersonDataError(Exception):
    """Base class for dataset loading failures."""


class ParseError(PersonDataError, ValueError):
    """A line could not be turned into a Person (missing tokens or bad age)."""

    def __init__(self, reason: str, line: str = "", lineno: int = 0) -> None:
        self.reason = reason
        self.line = line
        self.lineno = lineno
        where = f"line {lineno}: " if lineno else ""
        super().__init__(f"{where}{reason} ({line!r})")


class SourceUnavailable(PersonDataError, OSError):
    """The input file is missing or unreadable."""

    def __init__(self, source: object, cause: Optional[BaseException] = None) -> None:
        self.source = source
        msg = f"Cannot read persons source: {source}"
        if cause is not None:
            msg = f"{msg} ({cause})"
        super().__init__(msg)
