import re
from typing import Iterable, List, Optional

from .config import DEFAULT_LOADER_CONFIG, LoaderConfig
from .errors import ParseError
from .logging import get_logger
from .models import LoadResult, Person

logger = get_logger(__name__)

# ======================
# Single line
# ======================

# Example:
#   "Mario 42 M"    -> Person("Mario", 42, "M")
#   "Lucia 37"      -> Person("Lucia", 37, None)
AGE_REGEX = re.compile(r"^[+-]?[0-9]+$")


def parse_age(token: str, allow_negative: bool = False) -> Optional[int]:
    """Base-10 integer age, or None if the token is not one."""
    s = (token or "").strip()
    if not AGE_REGEX.match(s):
        return None
    age = int(s)
    if age < 0 and not allow_negative:
        return None
    return age


def parse_person_line(
    line: str,
    lineno: int = 0,
    config: LoaderConfig = DEFAULT_LOADER_CONFIG,
) -> Person:
    """
    Parses "name age [gender]" separated by whitespace.
    Tokens after the third are ignored.
    Raises ParseError when the age is missing or not a valid integer.
    """
    tokens = str(line or "").split()
    if len(tokens) < 2:
        raise ParseError("expected at least 'name age'", line=line, lineno=lineno)

    name = tokens[0].strip()
    age = parse_age(tokens[1], allow_negative=config.allow_negative_age)
    if age is None:
        raise ParseError(f"invalid age {tokens[1]!r}", line=line, lineno=lineno)

    gender = tokens[2].strip() if len(tokens) > 2 else None
    return Person(name=name, age=age, gender=gender or None)


# ======================
# Line stream
# ======================

def parse_person_lines(
    lines: Iterable[str],
    config: LoaderConfig = DEFAULT_LOADER_CONFIG,
) -> LoadResult:
    """
    Consumes lines in order. On the first malformed line it stops reading
    and returns the records collected so far together with the error.
    """
    persons: List[Person] = []
    for lineno, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")
        if not line.strip():
            if config.skip_blank_lines:
                continue
            err = ParseError("blank line", line=line, lineno=lineno)
            logger.warning("Stopped reading persons: %s", err)
            return LoadResult(persons=tuple(persons), error=err)
        try:
            person = parse_person_line(line, lineno=lineno, config=config)
        except ParseError as err:
            logger.warning("Stopped reading persons after %d records: %s", len(persons), err)
            return LoadResult(persons=tuple(persons), error=err)
        logger.debug("Parsed %s", person)
        persons.append(person)
    return LoadResult(persons=tuple(persons))
