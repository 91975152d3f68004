from __future__ import annotations

import os
from importlib import resources
from typing import Iterable, Optional, Tuple, Union

from .config import DEFAULT_LOADER_CONFIG, LoaderConfig
from .errors import SourceUnavailable
from .logging import get_logger
from .models import LoadResult, Person
from .parsing import parse_person_lines

logger = get_logger(__name__)

PersonSource = Union[str, "os.PathLike[str]", Iterable[str]]

SAMPLE_RESOURCE = "persons.txt"


def _read(lines: Iterable[str], label: str, cfg: LoaderConfig) -> LoadResult:
    # decode and I/O failures surface while iterating, not only on open
    try:
        result = parse_person_lines(lines, config=cfg)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(label, e) from e
    logger.info("Loaded %d persons from %s", len(result.persons), label)
    return result


def load_persons(source: PersonSource, config: Optional[LoaderConfig] = None) -> LoadResult:
    """
    Reads "name age [gender]" lines from a path or from any iterable of lines.

    A path is opened and closed here; an iterable (open stream, list) belongs
    to the caller and is left open. A malformed line ends the read and is
    reported in LoadResult.error; a source that cannot be opened or decoded
    raises SourceUnavailable.
    """
    cfg = config or DEFAULT_LOADER_CONFIG
    if isinstance(source, (str, os.PathLike)):
        path = os.fspath(source)
        try:
            with open(path, "r", encoding=cfg.encoding) as f:
                return _read(f, path, cfg)
        except SourceUnavailable:
            raise
        except OSError as e:
            raise SourceUnavailable(path, e) from e
    return _read(source, f"<{type(source).__name__}>", cfg)


def load_persons_strict(source: PersonSource, config: Optional[LoaderConfig] = None) -> Tuple[Person, ...]:
    """Like load_persons, but raises the ParseError instead of returning it."""
    return load_persons(source, config=config).raise_for_error()


def load_sample_persons(config: Optional[LoaderConfig] = None) -> LoadResult:
    """Bundled sample dataset (core/data/persons.txt)."""
    cfg = config or DEFAULT_LOADER_CONFIG
    resource = resources.files("core.data").joinpath(SAMPLE_RESOURCE)
    try:
        with resource.open("r", encoding=cfg.encoding) as f:
            return _read(f, SAMPLE_RESOURCE, cfg)
    except SourceUnavailable:
        raise
    except OSError as e:
        raise SourceUnavailable(SAMPLE_RESOURCE, e) from e
